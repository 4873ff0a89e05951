"""Error codes and exceptions raised by the coroutine primitives."""

from __future__ import annotations

import enum

CATEGORY = "coflow"


class ErrorCode(enum.IntEnum):
    """Conditions reported by tasks, promises and awaitable groups."""

    MOVED_FROM = 0
    DETACHED = 1
    COMPLETED_UNEXPECTED = 2
    WAIT_NOT_READY = 3
    ALREADY_AWAITED = 4
    ALLOCATION_FAILED = 5


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MOVED_FROM: "moved from",
    ErrorCode.DETACHED: "detached",
    ErrorCode.COMPLETED_UNEXPECTED: "completed unexpected",
    ErrorCode.WAIT_NOT_READY: "wait not ready",
    ErrorCode.ALREADY_AWAITED: "already awaited",
    ErrorCode.ALLOCATION_FAILED: "allocation failed",
}

_UNKNOWN_MESSAGE = "unknown cobalt error"


def _normalize(code: ErrorCode | int) -> ErrorCode | int:
    try:
        return ErrorCode(code)
    except ValueError:
        return int(code)


def error_message(code: ErrorCode | int) -> str:
    """Return the human-readable message for an error code."""
    normalized = _normalize(code)
    if isinstance(normalized, ErrorCode):
        return _MESSAGES[normalized]
    return _UNKNOWN_MESSAGE


class CobaltError(Exception):
    """An error carrying one of the library's error codes."""

    category = CATEGORY

    def __init__(self, code: ErrorCode | int) -> None:
        self.code = _normalize(code)
        super().__init__(error_message(self.code))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r})"


class BadExecutor(RuntimeError):
    """Raised when an executor is requested from an object that has none."""


def make_error(code: ErrorCode | int) -> CobaltError:
    """Build the exception that corresponds to ``code``."""
    return CobaltError(code)