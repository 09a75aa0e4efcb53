from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from reversi.board import Board
from reversi.cancellation import Canceller
from reversi.errors import DiskPlacementError, GameFileReadError, GameFileWriteError
from reversi.executor import Placement, TurnExecutor
from reversi.fsm import AdvanceOutcome, TurnController
from reversi.game_store import GameStore
from reversi.models import Disk, GameSnapshot, PlayerMode
from reversi.notifications import AnimationDriver, GameNotifier
from reversi.players import PlayerModeRegistry
from reversi.rules import valid_moves
from reversi.settings import Settings
from reversi.turn_processing.validators import (
    DEFAULT_SELECTION_PIPELINE,
    SelectionContext,
    SelectionPipeline,
    SelectionRejected,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameStatus:
    turn: Disk | None
    winner: Disk | None
    message: str


class GameSession:
    """Entry point for whatever drives the game (a UI shell, the headless runner, tests).

    Owns the live board, turn and player modes, and routes every input through
    the same flow:
    - validating the selection / placement
    - applying it via the executor (optionally animated)
    - persisting state (best effort)
    - advancing the turn, showing pass notices, announcing game over
    """

    def __init__(
        self,
        *,
        store: GameStore,
        notifier: GameNotifier,
        animator: AnimationDriver | None = None,
        automated_move_delay: float = 2.0,
        rng: random.Random | None = None,
        pipeline: SelectionPipeline = DEFAULT_SELECTION_PIPELINE,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.pipeline = pipeline

        self.board = Board()
        self.board.reset()
        self.turns = TurnController(self.board)
        self.players = PlayerModeRegistry(on_change=self._player_mode_changed)
        self.executor = TurnExecutor(
            board=self.board,
            turns=self.turns,
            players=self.players,
            notifier=notifier,
            persist=self._save_best_effort,
            animator=animator,
            automated_move_delay=automated_move_delay,
            rng=rng,
        )
        self.executor.on_placed = self._placement_finished

        # Set while a pass notice waits for acknowledgement.
        self._pass_canceller: Canceller | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        notifier: GameNotifier,
        animator: AnimationDriver | None = None,
        rng: random.Random | None = None,
    ) -> "GameSession":
        return cls(
            store=GameStore(settings.save_path),
            notifier=notifier,
            animator=animator,
            automated_move_delay=settings.automated_move_delay,
            rng=rng,
        )

    @property
    def is_pass_pending(self) -> bool:
        return self._pass_canceller is not None

    # ---- lifecycle ----

    def start(self) -> None:
        """Restore the saved game (or start a new one) and wait for the side to move."""

        try:
            self.load_game()
        except GameFileReadError as e:
            logger.info("Starting a new game: %s", e)
            self.new_game()
        self._resume()

    def new_game(self) -> None:
        self._drop_pass_notice()
        self.board.reset()
        self.turns.reset()
        self.players.reset()
        self._publish_status()
        self._publish_counts()
        self._save_best_effort()

    def reset(self) -> None:
        self.executor.cancel_all()
        self.new_game()
        self.executor.wait_for_player()

    def _resume(self) -> None:
        side = self.turns.turn
        if side is not None and not valid_moves(self.board, side):
            # Saved while a pass notice was up.
            self._show_pass(side)
            return
        self.executor.wait_for_player()

    # ---- persistence ----

    def snapshot(self) -> GameSnapshot:
        dark_mode, light_mode = self.players.as_tuple()
        return GameSnapshot(
            turn=self.turns.turn,
            dark_mode=dark_mode,
            light_mode=light_mode,
            rows=tuple(self.board.rows()),
        )

    def save_game(self) -> None:
        self.store.save(self.snapshot())

    def _save_best_effort(self) -> None:
        try:
            self.save_game()
        except GameFileWriteError as e:
            logger.warning("Continuing without saving: %s", e)

    def load_game(self) -> None:
        """Replace the live game with the saved one.

        The whole file is parsed and validated before anything live changes.
        """

        snapshot = self.store.load()
        self.apply_snapshot(snapshot)

    def apply_snapshot(self, snapshot: GameSnapshot) -> None:
        # Moves chosen for the old position must not land on the new one.
        self.executor.cancel_all()
        self._drop_pass_notice()
        for x, y, cell in snapshot.cells():
            self.board.set_disk(x, y, cell)
        self.turns.restore(snapshot.turn)
        self.players.replace(dark=snapshot.dark_mode, light=snapshot.light_mode)
        self._publish_status()
        self._publish_counts()

    # ---- inputs ----

    def select_cell(self, x: int, y: int) -> bool:
        """Handle a click on (x, y). Returns False if the click was ignored."""

        ctx = SelectionContext(x=x, y=y)
        try:
            self.pipeline.validate(ctx=ctx, executor=self.executor)
            side = self.turns.turn
            if side is None:
                raise SelectionRejected("Game is over")
            self.executor.place_disk(
                side,
                x,
                y,
                animated=self.executor.animator is not None,
                on_complete=self._placement_finished,
            )
        except (SelectionRejected, DiskPlacementError) as e:
            logger.debug("Ignoring selection at (%d, %d): %s", x, y, e)
            return False
        return True

    def set_player_mode(self, side: Disk, mode: PlayerMode) -> None:
        self.players.set(side, mode)

    def _player_mode_changed(self, side: Disk, mode: PlayerMode) -> None:
        self._save_best_effort()
        self.executor.cancel_player(side)

        if (
            mode is PlayerMode.automated
            and side == self.turns.turn
            and not self.executor.is_animating
            and not self.is_pass_pending
        ):
            self.executor.schedule_automated_move()

    # ---- turn flow ----

    def _placement_finished(self, placement: Placement) -> None:
        self.next_turn()

    def next_turn(self) -> None:
        outcome = self.turns.advance()
        self._save_best_effort()

        if outcome is AdvanceOutcome.game_over:
            self._publish_status()
            logger.info("Game over: %s", self.status().message)
            return

        turn = self.turns.turn
        self.notifier.turn_changed(turn)
        if outcome is AdvanceOutcome.passed:
            assert turn is not None
            self._show_pass(turn)
            return

        self.executor.wait_for_player()

    def _show_pass(self, side: Disk) -> None:
        def clean_up() -> None:
            if self._pass_canceller is canceller:
                self._pass_canceller = None

        canceller = Canceller(clean_up)
        self._pass_canceller = canceller

        def resume() -> None:
            # One-shot; a notice from a game that has since been reset does nothing.
            if canceller.is_cancelled:
                return
            canceller.cancel()
            self.next_turn()

        logger.info("%s has no valid move and passes", side.value)
        self.notifier.show_pass(side, resume)

    def _drop_pass_notice(self) -> None:
        if self._pass_canceller is not None:
            self._pass_canceller.cancel()
        self._pass_canceller = None

    # ---- status ----

    def status(self) -> GameStatus:
        turn = self.turns.turn
        if turn is not None:
            return GameStatus(turn=turn, winner=None, message=f"{turn.value}'s turn")

        winner = self.turns.winner()
        if winner is None:
            return GameStatus(turn=None, winner=None, message="Tied")
        return GameStatus(turn=None, winner=winner, message=f"{winner.value} won")

    def counts(self) -> tuple[int, int]:
        return self.board.count_disks(Disk.dark), self.board.count_disks(Disk.light)

    def _publish_status(self) -> None:
        turn = self.turns.turn
        self.notifier.turn_changed(turn)
        if turn is None:
            self.notifier.game_over(self.turns.winner())

    def _publish_counts(self) -> None:
        self.notifier.counts_changed(*self.counts())
