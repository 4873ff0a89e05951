"""A value-or-exception container and helpers that capture outcomes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Either a value or the exception that prevented producing it."""

    value: T | None = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if self.error is not None and not isinstance(self.error, BaseException):
            raise TypeError("error must be an exception instance")
        if self.error is not None and self.value is not None:
            raise ValueError("a result holds either a value or an error, not both")

    def has_value(self) -> bool:
        return self.error is None

    def has_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T | None:
        """Return the value, or raise the stored exception."""
        if self.error is not None:
            raise self.error
        return self.value


def capture(func: Callable[..., T], *args: Any) -> Result[T]:
    """Call ``func(*args)`` and wrap its return value or exception."""
    try:
        return Result(value=func(*args))
    except Exception as exc:
        return Result(error=exc)


async def capture_async(awaitable: Awaitable[T]) -> Result[T]:
    """Await ``awaitable`` and wrap its result or exception."""
    try:
        return Result(value=await awaitable)
    except Exception as exc:
        return Result(error=exc)