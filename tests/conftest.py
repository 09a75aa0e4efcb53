from __future__ import annotations

import asyncio
import random
from collections.abc import Callable
from pathlib import Path

import pytest

from reversi.board import Board
from reversi.executor import TurnExecutor
from reversi.fsm import TurnController
from reversi.game_store import GameStore
from reversi.models import Disk, cell_from_symbol
from reversi.notifications import EventLogNotifier
from reversi.players import PlayerModeRegistry
from reversi.session import GameSession


def board_from_rows(rows: list[str]) -> Board:
    """Build a board from up to 8 rows of `x`/`o`/`-`; missing rows are empty."""

    board = Board()
    for y, row in enumerate(rows):
        for x, symbol in enumerate(row):
            board.set_disk(x, y, cell_from_symbol(symbol))
    return board


class FakeAnimator:
    """Animation driver that finishes every step on the next loop iteration.

    - `fail_at`: index of the step that reports "not finished".
    - `on_step`: called with the step index before the step completes.
    """

    def __init__(self, *, fail_at: int | None = None, on_step: Callable[[int], None] | None = None) -> None:
        self.fail_at = fail_at
        self.on_step = on_step
        self.steps: list[tuple[int, int, Disk]] = []

    async def animate_disk(self, x: int, y: int, disk: Disk) -> bool:
        index = len(self.steps)
        self.steps.append((x, y, disk))
        await asyncio.sleep(0)
        if self.on_step is not None:
            self.on_step(index)
        return index != self.fail_at


@pytest.fixture()
def make_board() -> Callable[[list[str]], Board]:
    return board_from_rows


@pytest.fixture()
def notifier() -> EventLogNotifier:
    return EventLogNotifier()


@pytest.fixture()
def store(tmp_path: Path) -> GameStore:
    return GameStore(tmp_path / "Game")


@pytest.fixture()
def make_executor(notifier: EventLogNotifier) -> Callable[..., TurnExecutor]:
    def _make(
        board: Board | None = None,
        *,
        turn: Disk | None = Disk.dark,
        animator: FakeAnimator | None = None,
        persist: Callable[[], None] | None = None,
    ) -> TurnExecutor:
        if board is None:
            board = Board()
            board.reset()
        return TurnExecutor(
            board=board,
            turns=TurnController(board, turn),
            players=PlayerModeRegistry(),
            notifier=notifier,
            persist=persist or (lambda: None),
            animator=animator,
            automated_move_delay=0,
            rng=random.Random(7),
        )

    return _make


@pytest.fixture()
def make_session(store: GameStore, notifier: EventLogNotifier) -> Callable[..., GameSession]:
    def _make(
        *,
        animator: FakeAnimator | None = None,
        seed: int = 7,
        notifier_override: EventLogNotifier | None = None,
    ) -> GameSession:
        return GameSession(
            store=store,
            notifier=notifier_override or notifier,
            animator=animator,
            automated_move_delay=0,
            rng=random.Random(seed),
        )

    return _make


@pytest.fixture()
def make_animator() -> Callable[..., FakeAnimator]:
    return FakeAnimator
