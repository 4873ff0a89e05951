"""Cancellation types and a single-slot cancellation signal."""

from __future__ import annotations

import enum
from collections.abc import Callable


class CancellationType(enum.IntFlag):
    """How strongly an operation is asked to stop."""

    NONE = 0
    TERMINAL = 1
    PARTIAL = 2
    TOTAL = 4
    ALL = TERMINAL | PARTIAL | TOTAL


CancellationHandler = Callable[[CancellationType], object]


class CancellationSignal:
    """Delivers cancellation requests to at most one connected handler.

    Connecting a new handler replaces the previous one. Passing another
    signal's ``emit`` as the handler forwards cancellation to it.
    """

    __slots__ = ("_handler",)

    def __init__(self) -> None:
        self._handler: CancellationHandler | None = None

    def connect(self, handler: CancellationHandler) -> None:
        if not callable(handler):
            raise TypeError("cancellation handler must be callable")
        self._handler = handler

    def disconnect(self) -> None:
        self._handler = None

    def is_connected(self) -> bool:
        return self._handler is not None

    def emit(self, ct: CancellationType = CancellationType.ALL) -> None:
        """Invoke the connected handler with ``ct``, if there is one."""
        handler = self._handler
        if handler is not None:
            handler(CancellationType(ct))