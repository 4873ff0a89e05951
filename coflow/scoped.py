"""Run an operation on a resource and always run its asynchronous teardown."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def with_(
    arg: Any,
    func: Callable[[Any], Any],
    teardown: Callable[[Any, BaseException | None], Any] | None = None,
) -> Any:
    """Call ``func(arg)``, then ``teardown(arg, exc)``, and return func's result.

    ``func`` may return a value or an awaitable. ``teardown`` receives the
    exception ``func`` raised, or ``None``. Without ``teardown``,
    ``arg.await_exit(exc)`` is used. The exception from ``func`` takes
    precedence; an exception from ``teardown`` is raised only if ``func``
    succeeded.
    """
    if teardown is None:
        await_exit = getattr(arg, "await_exit", None)
        if not callable(await_exit):
            raise TypeError(
                f"{type(arg).__name__} has no await_exit; pass a teardown explicitly"
            )

        def teardown(resource: Any, exc: BaseException | None) -> Any:
            return resource.await_exit(exc)

    error: BaseException | None = None
    result: Any = None
    try:
        result = await _maybe_await(func(arg))
    except BaseException as exc:
        error = exc

    try:
        await _maybe_await(teardown(arg, error))
    except BaseException as exc:
        if error is None:
            error = exc

    if error is not None:
        raise error
    return result