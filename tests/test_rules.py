from __future__ import annotations

import random

from reversi.board import Board
from reversi.models import Disk
from reversi.rules import can_place, flipped_coordinates, side_with_more_disks, valid_moves


def _start() -> Board:
    board = Board()
    board.reset()
    return board


def test_opening_moves_for_dark() -> None:
    board = _start()
    assert set(valid_moves(board, Disk.dark)) == {(3, 2), (2, 3), (5, 4), (4, 5)}
    assert set(valid_moves(board, Disk.light)) == {(4, 2), (5, 3), (2, 4), (3, 5)}


def test_valid_moves_are_row_major() -> None:
    moves = valid_moves(_start(), Disk.dark)
    assert moves == sorted(moves, key=lambda c: (c[1], c[0]))


def test_opening_placement_flips_one_disk() -> None:
    assert flipped_coordinates(_start(), Disk.dark, 3, 2) == [(3, 3)]


def test_occupied_cell_flips_nothing() -> None:
    board = _start()
    assert flipped_coordinates(board, Disk.dark, 3, 3) == []
    assert not can_place(board, Disk.dark, 4, 3)


def test_off_board_placement_flips_nothing() -> None:
    board = Board()
    board.set_disk(0, 0, Disk.light)
    board.set_disk(1, 0, Disk.dark)

    assert flipped_coordinates(board, Disk.dark, -1, 0) == []


def test_run_reaching_the_edge_is_discarded(make_board) -> None:
    board = make_board(["-ooo----"])
    # No dark disk closes the run before the edge / empty cell.
    assert flipped_coordinates(board, Disk.dark, 0, 0) == []


def test_flips_follow_direction_order(make_board) -> None:
    board = make_board(
        [
            "--------",
            "-x-x----",
            "--oo----",
            "-xo-ox--",
            "---oo---",
            "---x----",
        ]
    )

    # NW, N, E, S and W close with a dark disk; SE runs into an empty cell.
    assert flipped_coordinates(board, Disk.dark, 3, 3) == [(2, 2), (3, 2), (4, 3), (3, 4), (2, 3)]


def test_long_run_flips_every_disk_in_line(make_board) -> None:
    board = make_board(["xoooooo-"])
    assert flipped_coordinates(board, Disk.dark, 7, 0) == [(6, 0), (5, 0), (4, 0), (3, 0), (2, 0), (1, 0)]


def test_flipped_coordinates_empty_iff_cannot_place() -> None:
    rng = random.Random(3)
    board = _start()
    side = Disk.dark

    for _ in range(20):
        for disk in Disk.sides():
            for y in board.y_range:
                for x in board.x_range:
                    assert (flipped_coordinates(board, disk, x, y) == []) is (not can_place(board, disk, x, y))

        moves = valid_moves(board, side) or valid_moves(board, side.flipped)
        if not moves:
            break
        if not valid_moves(board, side):
            side = side.flipped
        x, y = rng.choice(moves)
        for cx, cy in [(x, y), *flipped_coordinates(board, side, x, y)]:
            board.set_disk(cx, cy, side)
        side = side.flipped


def test_placement_conserves_disk_counts() -> None:
    rng = random.Random(11)
    board = _start()
    side = Disk.dark

    while True:
        moves = valid_moves(board, side)
        if not moves:
            side = side.flipped
            moves = valid_moves(board, side)
            if not moves:
                break

        x, y = rng.choice(moves)
        flipped = flipped_coordinates(board, side, x, y)
        mine, theirs = board.count_disks(side), board.count_disks(side.flipped)

        for cx, cy in [(x, y), *flipped]:
            board.set_disk(cx, cy, side)

        assert board.count_disks(side) == mine + 1 + len(flipped)
        assert board.count_disks(side.flipped) == theirs - len(flipped)
        side = side.flipped

    assert board.count_disks(Disk.dark) + board.count_disks(Disk.light) <= 64


def test_side_with_more_disks(make_board) -> None:
    assert side_with_more_disks(_start()) is None
    assert side_with_more_disks(make_board(["xxo"])) == Disk.dark
    assert side_with_more_disks(make_board(["oox"])) == Disk.light
