from __future__ import annotations

from reversi.board import Board
from reversi.models import Coord, Disk


# Scan order for flips; animations replay flips in exactly this order.
DIRECTIONS: tuple[Coord, ...] = (
    (-1, -1),  # NW
    (0, -1),  # N
    (1, -1),  # NE
    (1, 0),  # E
    (1, 1),  # SE
    (0, 1),  # S
    (-1, 1),  # SW
    (-1, 0),  # W
)


def flipped_coordinates(board: Board, disk: Disk, x: int, y: int) -> list[Coord]:
    """Return the disks that placing `disk` at (x, y) would flip.

    Empty when the cell is occupied, off the board, or nothing would flip.
    """

    if not board.contains(x, y) or board.disk_at(x, y) is not None:
        return []

    coords: list[Coord] = []
    for dx, dy in DIRECTIONS:
        line: list[Coord] = []
        cx, cy = x + dx, y + dy
        while True:
            cell = board.disk_at(cx, cy)
            if cell is None:
                break
            if cell == disk:
                coords.extend(line)
                break
            line.append((cx, cy))
            cx += dx
            cy += dy
    return coords


def can_place(board: Board, disk: Disk, x: int, y: int) -> bool:
    return bool(flipped_coordinates(board, disk, x, y))


def valid_moves(board: Board, side: Disk) -> list[Coord]:
    """All legal placements for `side`, row-major (y outer, x inner)."""

    return [(x, y) for y in board.y_range for x in board.x_range if can_place(board, side, x, y)]


def side_with_more_disks(board: Board) -> Disk | None:
    dark = board.count_disks(Disk.dark)
    light = board.count_disks(Disk.light)
    if dark == light:
        return None
    return Disk.dark if dark > light else Disk.light
