from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from reversi.core.events import GameEvent
from reversi.models import Disk


class AnimationDriver(Protocol):
    async def animate_disk(self, x: int, y: int, disk: Disk) -> bool:  # pragma: no cover
        """Visually set one disk. Returns False if the animation did not finish."""
        ...


class GameNotifier(Protocol):
    """One-way notifications consumed by whatever is showing the game."""

    def turn_changed(self, turn: Disk | None) -> None:  # pragma: no cover
        ...

    def counts_changed(self, dark: int, light: int) -> None:  # pragma: no cover
        ...

    def game_over(self, winner: Disk | None) -> None:  # pragma: no cover
        ...

    def show_pass(self, side: Disk, resume: Callable[[], None]) -> None:  # pragma: no cover
        """Tell `side` it has to pass; call `resume` once acknowledged."""
        ...

    def player_busy(self, side: Disk, busy: bool) -> None:  # pragma: no cover
        ...


class EventLogNotifier:
    """In-process notifier that records every notification as a `GameEvent`.

    Contract:
      - `events` holds everything published, oldest first.
      - pass notices are acknowledged immediately when `auto_acknowledge` is set;
        otherwise the resume continuation waits in `pending_pass` until
        `acknowledge_pass()` is called.
    """

    def __init__(self, *, auto_acknowledge: bool = False) -> None:
        self.auto_acknowledge = auto_acknowledge
        self.events: list[GameEvent] = []
        self.pending_pass: Callable[[], None] | None = None

    def turn_changed(self, turn: Disk | None) -> None:
        self.events.append(GameEvent.now(type="TURN_CHANGED", payload={"turn": turn}))

    def counts_changed(self, dark: int, light: int) -> None:
        self.events.append(GameEvent.now(type="COUNTS_CHANGED", payload={"dark": dark, "light": light}))

    def game_over(self, winner: Disk | None) -> None:
        self.events.append(GameEvent.now(type="GAME_OVER", payload={"winner": winner}))

    def show_pass(self, side: Disk, resume: Callable[[], None]) -> None:
        self.events.append(GameEvent.now(type="PASS", payload={"side": side}))
        if self.auto_acknowledge:
            resume()
        else:
            self.pending_pass = resume

    def player_busy(self, side: Disk, busy: bool) -> None:
        self.events.append(GameEvent.now(type="PLAYER_BUSY" if busy else "PLAYER_IDLE", payload={"side": side}))

    def acknowledge_pass(self) -> None:
        resume = self.pending_pass
        if resume is None:
            raise ValueError("No pass notice is waiting")
        self.pending_pass = None
        resume()

    def of_type(self, type: str) -> list[GameEvent]:
        return [e for e in self.events if e.type == type]
