from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from reversi.executor import TurnExecutor
from reversi.models import PlayerMode


class SelectionRejected(ValueError):
    """A cell selection that the game ignores (not an error for the player)."""


@dataclass(frozen=True, slots=True)
class SelectionContext:
    """Inputs available to validators.

    Keep this tight so it can be logged as-is.
    """

    x: int
    y: int


class SelectionValidator(ABC):
    """A small, composable validation unit for an incoming cell selection."""

    @abstractmethod
    def validate(self, *, ctx: SelectionContext, executor: TurnExecutor) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class GameInProgressValidator(SelectionValidator):
    def validate(self, *, ctx: SelectionContext, executor: TurnExecutor) -> None:
        if executor.turns.is_game_over:
            raise SelectionRejected("Game is over")


@dataclass(frozen=True, slots=True)
class NotAnimatingValidator(SelectionValidator):
    def validate(self, *, ctx: SelectionContext, executor: TurnExecutor) -> None:
        if executor.is_animating:
            raise SelectionRejected("A placement is still animating")


@dataclass(frozen=True, slots=True)
class ManualSideValidator(SelectionValidator):
    """Only a manually controlled side takes moves from the board."""

    def validate(self, *, ctx: SelectionContext, executor: TurnExecutor) -> None:
        side = executor.turns.turn
        if side is None or executor.players.get(side) is not PlayerMode.manual:
            raise SelectionRejected("Current side is not under manual control")


@dataclass(frozen=True, slots=True)
class SelectionPipeline:
    validators: tuple[SelectionValidator, ...]

    def validate(self, *, ctx: SelectionContext, executor: TurnExecutor) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, executor=executor)


# Placement legality itself is checked by the executor (DiskPlacementError).
DEFAULT_SELECTION_PIPELINE = SelectionPipeline(
    validators=(
        GameInProgressValidator(),
        NotAnimatingValidator(),
        ManualSideValidator(),
    )
)
