from __future__ import annotations

from collections.abc import Iterator
from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, field_validator


BOARD_WIDTH = 8
BOARD_HEIGHT = 8

Coord = tuple[int, int]  # (x, y)


class Disk(StrEnum):
    dark = "dark"
    light = "light"

    @staticmethod
    def sides() -> tuple["Disk", "Disk"]:
        """Both sides in play order (dark moves first)."""

        return (Disk.dark, Disk.light)

    @property
    def flipped(self) -> "Disk":
        return Disk.light if self is Disk.dark else Disk.dark


# A cell is either a disk or empty (None).
CellState = Disk | None


class PlayerMode(IntEnum):
    manual = 0
    automated = 1


# ---- single-character codec for the persisted alphabet ----

EMPTY_SYMBOL = "-"
GAME_OVER_SYMBOL = "*"

_SYMBOL_BY_CELL: dict[CellState, str] = {
    Disk.dark: "x",
    Disk.light: "o",
    None: EMPTY_SYMBOL,
}
_CELL_BY_SYMBOL: dict[str, CellState] = {s: c for c, s in _SYMBOL_BY_CELL.items()}

# The turn field shares the disk alphabet, but "no turn" has its own symbol so
# it can never be mistaken for an empty cell.
_SYMBOL_BY_TURN: dict[Disk | None, str] = {
    Disk.dark: "x",
    Disk.light: "o",
    None: GAME_OVER_SYMBOL,
}
_TURN_BY_SYMBOL: dict[str, Disk | None] = {s: t for t, s in _SYMBOL_BY_TURN.items()}


def cell_symbol(cell: CellState) -> str:
    return _SYMBOL_BY_CELL[cell]


def cell_from_symbol(symbol: str) -> CellState:
    try:
        return _CELL_BY_SYMBOL[symbol]
    except KeyError:
        raise ValueError(f"Unknown cell symbol: {symbol!r}") from None


def turn_symbol(turn: Disk | None) -> str:
    return _SYMBOL_BY_TURN[turn]


def turn_from_symbol(symbol: str) -> Disk | None:
    try:
        return _TURN_BY_SYMBOL[symbol]
    except KeyError:
        raise ValueError(f"Unknown turn symbol: {symbol!r}") from None


class GameSnapshot(BaseModel):
    """Validated, in-memory form of one saved game.

    Everything read from disk is parsed into this model first; live state is
    only touched once the whole record has been accepted.
    """

    model_config = ConfigDict(frozen=True)

    turn: Disk | None = Disk.dark
    dark_mode: PlayerMode = PlayerMode.manual
    light_mode: PlayerMode = PlayerMode.manual

    # Top row first, one symbol per cell.
    rows: tuple[str, ...]

    @field_validator("rows")
    @classmethod
    def _check_rows(cls, rows: tuple[str, ...]) -> tuple[str, ...]:
        if len(rows) != BOARD_HEIGHT:
            raise ValueError(f"expected {BOARD_HEIGHT} board rows, got {len(rows)}")
        for y, row in enumerate(rows):
            if len(row) != BOARD_WIDTH:
                raise ValueError(f"row {y} has {len(row)} cells, expected {BOARD_WIDTH}")
            for symbol in row:
                cell_from_symbol(symbol)
        return rows

    def mode_for(self, side: Disk) -> PlayerMode:
        return self.dark_mode if side is Disk.dark else self.light_mode

    def cells(self) -> Iterator[tuple[int, int, CellState]]:
        for y, row in enumerate(self.rows):
            for x, symbol in enumerate(row):
                yield x, y, cell_from_symbol(symbol)
