from __future__ import annotations

from collections.abc import Callable


class Canceller:
    """One-shot cancellation flag with an optional cleanup action.

    Cancelling runs the cleanup once; later calls are no-ops. Work that already
    happened before the flag was observed is never rolled back.
    """

    __slots__ = ("_body", "_cancelled")

    def __init__(self, body: Callable[[], None] | None = None) -> None:
        self._body = body
        self._cancelled = False

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._body is not None:
            self._body()
