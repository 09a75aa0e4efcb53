from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_AUTOMATED_MOVE_DELAY = 2.0


@dataclass(frozen=True, slots=True)
class Settings:
    save_path: Path
    # Seconds before an automated side plays, only so a watcher can follow along.
    automated_move_delay: float
    log_level: str


def default_save_path() -> Path:
    return Path.home() / ".reversi" / "Game"


def settings_from_env() -> Settings:
    raw_path = os.environ.get("REVERSI_SAVE_PATH")
    raw_delay = os.environ.get("REVERSI_AUTOMATED_MOVE_DELAY")

    delay = DEFAULT_AUTOMATED_MOVE_DELAY
    if raw_delay:
        delay = float(raw_delay)
        if delay < 0:
            raise ValueError("REVERSI_AUTOMATED_MOVE_DELAY must not be negative")

    return Settings(
        save_path=Path(raw_path).expanduser() if raw_path else default_save_path(),
        automated_move_delay=delay,
        log_level=os.environ.get("REVERSI_LOG_LEVEL", "INFO").upper(),
    )
