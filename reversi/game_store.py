from __future__ import annotations

import contextlib
import logging
import os
import time
from pathlib import Path

from reversi.core.game_state_text import parse_game_text, snapshot_to_text
from reversi.errors import GameFileReadError, GameFileWriteError
from reversi.models import GameSnapshot


logger = logging.getLogger(__name__)


class GameStore:
    """Single-slot, file-backed store for the current game."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def save(self, snapshot: GameSnapshot) -> None:
        """Write the snapshot atomically (temp file + rename in the same directory)."""

        text = snapshot_to_text(snapshot)
        tmp = self.path.with_suffix(self.path.suffix + f".tmp_{int(time.time() * 1e6)}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise GameFileWriteError(path=self.path, message="Could not save game", cause=e) from e
        logger.debug("Saved game to %s", self.path)

    def load(self) -> GameSnapshot:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise GameFileReadError(path=self.path, message="Could not read saved game", cause=e) from e
        return parse_game_text(text, path=self.path)
