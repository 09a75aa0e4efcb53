"""Line-oriented text codec for saved games.

Format (order-dependent, newline separated)::

    <turn><dark mode><light mode>
    <8 cell symbols>     x8, top row first

Cells are `x` (dark), `o` (light) or `-` (empty). The turn is `x`, `o`, or `*`
once the game is over. Modes are `0` (manual) or `1` (automated).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from reversi.errors import GameFileFormatError
from reversi.models import GameSnapshot, PlayerMode, turn_from_symbol, turn_symbol


def snapshot_to_text(snapshot: GameSnapshot) -> str:
    header = f"{turn_symbol(snapshot.turn)}{int(snapshot.dark_mode)}{int(snapshot.light_mode)}"
    return "\n".join([header, *snapshot.rows]) + "\n"


def _mode_from_digit(digit: str) -> PlayerMode:
    if digit not in {"0", "1"}:
        raise ValueError(f"Unknown player mode: {digit!r}")
    return PlayerMode(int(digit))


def parse_game_text(text: str, *, path: Path | None = None) -> GameSnapshot:
    """Parse a whole saved game, or raise `GameFileFormatError`.

    Only a single trailing newline is tolerated; blank or extra lines are errors.
    """

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if not lines:
        raise GameFileFormatError(path=path, message="Saved game is empty")

    header, *rows = lines
    if len(header) != 3:
        raise GameFileFormatError(path=path, message=f"Malformed header line {header!r}")

    try:
        turn = turn_from_symbol(header[0])
        dark_mode = _mode_from_digit(header[1])
        light_mode = _mode_from_digit(header[2])
    except ValueError as e:
        raise GameFileFormatError(path=path, message=str(e), cause=e) from e

    try:
        return GameSnapshot(turn=turn, dark_mode=dark_mode, light_mode=light_mode, rows=tuple(rows))
    except ValidationError as e:
        raise GameFileFormatError(path=path, message="Malformed board", cause=e) from e
