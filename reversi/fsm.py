from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine

from reversi.board import Board
from reversi.models import Disk
from reversi.rules import side_with_more_disks, valid_moves


class AdvanceOutcome(StrEnum):
    turn = "turn"
    passed = "pass"
    game_over = "game_over"


class TurnFSM(StateMachine):
    """Whose turn it is.

    - dark <-> light via `hand_over` (a forced pass is also a hand-over; the
      notice and the hand-back are the caller's job)
    - either side -> game_over via `finish`
    """

    dark = State("Dark", value=Disk.dark.value, initial=True)
    light = State("Light", value=Disk.light.value)
    game_over = State("Game over", value="game_over", final=True)

    hand_over = dark.to(light) | light.to(dark)
    finish = dark.to(game_over) | light.to(game_over)


_TURN_BY_STATE_VALUE: dict[str, Disk | None] = {
    Disk.dark.value: Disk.dark,
    Disk.light.value: Disk.light,
    "game_over": None,
}


def _start_value(turn: Disk | None) -> str:
    return turn.value if turn is not None else "game_over"


class TurnController:
    def __init__(self, board: Board, turn: Disk | None = Disk.dark) -> None:
        self.board = board
        self._fsm = TurnFSM(start_value=_start_value(turn))

    @property
    def turn(self) -> Disk | None:
        return _TURN_BY_STATE_VALUE[self._fsm.current_state_value]

    @property
    def is_game_over(self) -> bool:
        return self.turn is None

    def restore(self, turn: Disk | None) -> None:
        """Rebuild the machine at `turn` (new game or load)."""

        self._fsm = TurnFSM(start_value=_start_value(turn))

    def reset(self) -> None:
        self.restore(Disk.dark)

    def advance(self) -> AdvanceOutcome:
        """Hand the turn over after a placement (or after a pass is acknowledged).

        The side receiving the turn may have no move: if the side that just moved
        has none either, the game is over; otherwise the outcome is `passed` and
        the caller is expected to call `advance()` again once the pass is shown.
        """

        current = self.turn
        if current is None:
            return AdvanceOutcome.game_over

        nxt = current.flipped
        if not valid_moves(self.board, nxt):
            if not valid_moves(self.board, current):
                self._fsm.finish()
                return AdvanceOutcome.game_over
            self._fsm.hand_over()
            return AdvanceOutcome.passed

        self._fsm.hand_over()
        return AdvanceOutcome.turn

    def winner(self) -> Disk | None:
        return side_with_more_disks(self.board)
