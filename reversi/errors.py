from __future__ import annotations

from pathlib import Path

from reversi.models import Disk


class DiskPlacementError(ValueError):
    """Raised when a disk cannot be placed: the cell is taken or nothing would flip."""

    def __init__(self, *, disk: Disk, x: int, y: int) -> None:
        super().__init__(f"Cannot place {disk.value} disk at ({x}, {y})")
        self.disk = disk
        self.x = x
        self.y = y


class GameFileError(Exception):
    def __init__(self, *, path: Path | None, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"{message}: {path}" if path is not None else message)
        self.path = path
        self.cause = cause


class GameFileReadError(GameFileError):
    """The saved game could not be read; callers fall back to a new game."""


class GameFileWriteError(GameFileError):
    """The game could not be written; play continues with unsaved state."""


class GameFileFormatError(GameFileReadError):
    """The saved game was read but its contents are malformed."""
