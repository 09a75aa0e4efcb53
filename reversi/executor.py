from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable, Coroutine, Sequence
from dataclasses import dataclass
from typing import Any

from reversi.board import Board
from reversi.cancellation import Canceller
from reversi.errors import DiskPlacementError
from reversi.fsm import TurnController
from reversi.models import Coord, Disk, PlayerMode
from reversi.notifications import AnimationDriver, GameNotifier
from reversi.players import PlayerModeRegistry
from reversi.rules import flipped_coordinates, valid_moves


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Placement:
    """Result of a completed placement.

    - `flipped`: the opponent disks that changed color, in scan order.
    - `fully_animated`: False if the animation driver gave up part way and the
      remaining disks were applied immediately.
    """

    disk: Disk
    x: int
    y: int
    flipped: tuple[Coord, ...]
    fully_animated: bool = True


PlacedHook = Callable[[Placement], None]


class TurnExecutor:
    """Runs placements for the current side and owns every pending cancellation token.

    Slots:
    - `animation_canceller`: at most one animated placement at a time.
    - `player_cancellers`: at most one pending automated move per side.

    The executor never advances the turn; whoever supplies `on_complete` /
    `on_placed` does that.
    """

    def __init__(
        self,
        *,
        board: Board,
        turns: TurnController,
        players: PlayerModeRegistry,
        notifier: GameNotifier,
        persist: Callable[[], None],
        animator: AnimationDriver | None = None,
        automated_move_delay: float = 2.0,
        rng: random.Random | None = None,
    ) -> None:
        if board is None:
            raise RuntimeError("board missing")

        self.board = board
        self.turns = turns
        self.players = players
        self.notifier = notifier
        self.persist = persist
        self.animator = animator
        self.automated_move_delay = automated_move_delay
        self.rng = rng or random.Random()

        # Called with the result of every automated move once it has been applied.
        self.on_placed: PlacedHook | None = None

        self.animation_canceller: Canceller | None = None
        self.player_cancellers: dict[Disk, Canceller | None] = {side: None for side in Disk.sides()}

        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def is_animating(self) -> bool:
        return self.animation_canceller is not None

    # ---- task bookkeeping ----

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Schedule `coro` on the running loop and keep a reference until it finishes."""

        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Game task failed", exc_info=task.exception())

    async def wait_idle(self) -> None:
        """Wait until no task is pending, including tasks spawned while waiting."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # ---- waiting for the current side ----

    def wait_for_player(self) -> None:
        side = self.turns.turn
        if side is None:
            return
        if self.players.get(side) is PlayerMode.automated:
            self.schedule_automated_move()

    def schedule_automated_move(self) -> Canceller:
        side = self.turns.turn
        if side is None:
            raise RuntimeError("Cannot schedule an automated move once the game is over")

        moves = valid_moves(self.board, side)
        if not moves:
            raise RuntimeError(f"No valid moves for {side.value}")
        x, y = self.rng.choice(moves)

        self.notifier.player_busy(side, True)

        def clean_up() -> None:
            self.notifier.player_busy(side, False)
            if self.player_cancellers[side] is canceller:
                self.player_cancellers[side] = None

        canceller = Canceller(clean_up)
        self.player_cancellers[side] = canceller
        self.spawn(self._play_after_delay(side=side, x=x, y=y, canceller=canceller, clean_up=clean_up))
        logger.debug("Scheduled %s at (%d, %d) in %.2fs", side.value, x, y, self.automated_move_delay)
        return canceller

    async def _play_after_delay(
        self,
        *,
        side: Disk,
        x: int,
        y: int,
        canceller: Canceller,
        clean_up: Callable[[], None],
    ) -> None:
        await asyncio.sleep(self.automated_move_delay)
        if canceller.is_cancelled:
            return

        clean_up()
        self.place_disk(side, x, y, animated=self.animator is not None, on_complete=self.on_placed)

    def cancel_player(self, side: Disk) -> None:
        canceller = self.player_cancellers[side]
        if canceller is not None:
            canceller.cancel()
        self.player_cancellers[side] = None

    def cancel_all(self) -> None:
        if self.animation_canceller is not None:
            self.animation_canceller.cancel()
            self.animation_canceller = None

        for side in Disk.sides():
            self.cancel_player(side)

    # ---- placing disks ----

    def validate_placement(self, disk: Disk, x: int, y: int) -> list[Coord]:
        flipped = flipped_coordinates(self.board, disk, x, y)
        if not flipped:
            raise DiskPlacementError(disk=disk, x=x, y=y)
        return flipped

    def place_disk(
        self,
        disk: Disk,
        x: int,
        y: int,
        *,
        animated: bool = False,
        on_complete: PlacedHook | None = None,
    ) -> Placement | None:
        """Place `disk` at (x, y) and flip everything it captures.

        Raises `DiskPlacementError` before touching the board if nothing would flip.

        Without animation every disk is set right away, the game is persisted and
        the placement is returned (after `on_complete` has seen it). With
        animation the disks are set one by one on a task and None is returned;
        `on_complete` runs once the sequence finishes and never runs if the
        sequence is cancelled.
        """

        flipped = self.validate_placement(disk, x, y)
        coordinates = [(x, y), *flipped]

        if not animated:
            for cx, cy in coordinates:
                self.board.set_disk(cx, cy, disk)
            placement = Placement(disk=disk, x=x, y=y, flipped=tuple(flipped))
            self._finish_placement(placement, on_complete)
            return placement

        if self.animator is None:
            raise RuntimeError("Animated placement requested without an animation driver")
        if self.animation_canceller is not None:
            raise RuntimeError("Another animated placement is still running")

        def clean_up() -> None:
            if self.animation_canceller is canceller:
                self.animation_canceller = None

        canceller = Canceller(clean_up)
        self.animation_canceller = canceller
        self.spawn(
            self._animate_placement(
                disk=disk,
                x=x,
                y=y,
                coordinates=coordinates,
                canceller=canceller,
                clean_up=clean_up,
                on_complete=on_complete,
            )
        )
        return None

    async def _animate_placement(
        self,
        *,
        disk: Disk,
        x: int,
        y: int,
        coordinates: Sequence[Coord],
        canceller: Canceller,
        clean_up: Callable[[], None],
        on_complete: PlacedHook | None,
    ) -> None:
        fully_animated = await self._animate_setting_disks(coordinates, disk, canceller)
        if canceller.is_cancelled:
            logger.debug("Animated placement at (%d, %d) cancelled", x, y)
            return

        clean_up()
        placement = Placement(disk=disk, x=x, y=y, flipped=tuple(coordinates[1:]), fully_animated=fully_animated)
        self._finish_placement(placement, on_complete)

    async def _animate_setting_disks(self, coordinates: Sequence[Coord], disk: Disk, canceller: Canceller) -> bool:
        """Set each disk and wait for its animation; False if the driver gave up.

        Steps already applied stay applied when the sequence is cancelled.
        """

        assert self.animator is not None
        for index, (x, y) in enumerate(coordinates):
            if canceller.is_cancelled:
                return False
            self.board.set_disk(x, y, disk)
            finished = await self.animator.animate_disk(x, y, disk)
            if canceller.is_cancelled:
                return False
            if not finished:
                for rx, ry in coordinates[index + 1 :]:
                    self.board.set_disk(rx, ry, disk)
                return False
        return True

    def _finish_placement(self, placement: Placement, on_complete: PlacedHook | None) -> None:
        logger.info(
            "%s placed at (%d, %d), flipped %d",
            placement.disk.value,
            placement.x,
            placement.y,
            len(placement.flipped),
        )
        self.persist()
        self.notifier.counts_changed(self.board.count_disks(Disk.dark), self.board.count_disks(Disk.light))
        if on_complete is not None:
            on_complete(placement)
