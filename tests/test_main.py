from __future__ import annotations

from pathlib import Path

import pytest

from reversi.core.game_state_text import parse_game_text
from reversi.main import run_self_play
from reversi.settings import Settings


@pytest.mark.asyncio
async def test_run_self_play_finishes_and_saves(tmp_path: Path) -> None:
    settings = Settings(save_path=tmp_path / "Game", automated_move_delay=0, log_level="INFO")

    status = await run_self_play(settings)

    assert status.turn is None
    saved = parse_game_text((tmp_path / "Game").read_text(encoding="utf-8"))
    assert saved.turn is None
    assert status.message in {"dark won", "light won", "Tied"}
