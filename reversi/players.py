from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from reversi.models import Disk, PlayerMode


ModeChangeHook = Callable[[Disk, PlayerMode], None]


def _default_modes() -> dict[Disk, PlayerMode]:
    return {side: PlayerMode.manual for side in Disk.sides()}


@dataclass(slots=True)
class PlayerModeRegistry:
    """Who controls each side.

    `set()` is the user-facing change and fires `on_change`; the session uses
    that hook to schedule an automated move when a side is switched over on its
    own turn. `replace()` and `reset()` are bulk updates (load / new game) and
    never fire the hook.
    """

    on_change: ModeChangeHook | None = None
    _modes: dict[Disk, PlayerMode] = field(default_factory=_default_modes)

    def get(self, side: Disk) -> PlayerMode:
        return self._modes[side]

    def set(self, side: Disk, mode: PlayerMode) -> None:
        self._modes[side] = mode
        if self.on_change is not None:
            self.on_change(side, mode)

    def replace(self, *, dark: PlayerMode, light: PlayerMode) -> None:
        self._modes = {Disk.dark: dark, Disk.light: light}

    def reset(self) -> None:
        self._modes = _default_modes()

    def as_tuple(self) -> tuple[PlayerMode, PlayerMode]:
        return self._modes[Disk.dark], self._modes[Disk.light]
