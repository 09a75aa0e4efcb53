from __future__ import annotations

from dataclasses import dataclass, field

from reversi.models import BOARD_HEIGHT, BOARD_WIDTH, CellState, Disk, cell_symbol


def _empty_grid() -> list[list[CellState]]:
    return [[None for _ in range(BOARD_WIDTH)] for _ in range(BOARD_HEIGHT)]


@dataclass(slots=True)
class Board:
    """Logical 8x8 grid. (0, 0) is the top-left cell; x is the column, y the row."""

    grid: list[list[CellState]] = field(default_factory=_empty_grid)

    @property
    def width(self) -> int:
        return BOARD_WIDTH

    @property
    def height(self) -> int:
        return BOARD_HEIGHT

    @property
    def x_range(self) -> range:
        return range(BOARD_WIDTH)

    @property
    def y_range(self) -> range:
        return range(BOARD_HEIGHT)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT

    def disk_at(self, x: int, y: int) -> CellState:
        # Off-board reads are empty so direction scans can walk past the edge.
        if not self.contains(x, y):
            return None
        return self.grid[y][x]

    def set_disk(self, x: int, y: int, disk: CellState) -> None:
        if not self.contains(x, y):
            raise IndexError(f"({x}, {y}) is outside the board")
        self.grid[y][x] = disk

    def count_disks(self, side: Disk) -> int:
        return sum(1 for row in self.grid for cell in row if cell == side)

    def reset(self) -> None:
        self.grid = _empty_grid()
        self.grid[3][3] = Disk.light
        self.grid[3][4] = Disk.dark
        self.grid[4][3] = Disk.dark
        self.grid[4][4] = Disk.light

    def rows(self) -> list[str]:
        return ["".join(cell_symbol(cell) for cell in row) for row in self.grid]
