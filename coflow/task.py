"""Lazy tasks: coroutines that run only once awaited or spawned."""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from collections.abc import Callable, Coroutine
from typing import Any, Generic, TypeVar

from coflow.cancellation import CancellationSignal, CancellationType
from coflow.errors import CobaltError, ErrorCode

T = TypeVar("T")

CompletionCallback = Callable[[BaseException | None, Any], object]


class Task(Generic[T]):
    """A coroutine wrapper that does not start until it is awaited or spawned.

    Awaiting runs the coroutine on the awaiting event loop and hands back its
    result; awaiting a finished task again returns the same outcome.
    Cancelling the awaiting coroutine cancels the task as well.
    """

    def __init__(self, coro: Coroutine[Any, Any, T]) -> None:
        if not inspect.iscoroutine(coro):
            raise TypeError(f"Task needs a coroutine, got {type(coro).__name__}")
        self._coro = coro
        self._runner: asyncio.Task[T] | None = None
        self._signal = CancellationSignal()
        self._pending_cancel = CancellationType.NONE
        self._started = False
        self._awaiting = False

    def __repr__(self) -> str:
        if self._runner is None:
            state = "pending"
        elif self._runner.done():
            state = "done"
        else:
            state = "running"
        return f"<Task {state} {self._coro!r}>"

    async def _drive(self) -> T:
        self._started = True
        return await self._coro

    def _close_if_unstarted(self, _runner: object = None) -> None:
        if not self._started:
            self._coro.close()

    def _forward_cancel(self, ct: CancellationType) -> None:
        runner = self._runner
        if runner is not None and not runner.done():
            runner.cancel(msg=f"cancellation requested: {ct!r}")

    def _start(self, loop: asyncio.AbstractEventLoop) -> asyncio.Task[T]:
        if self._runner is None:
            self._runner = loop.create_task(self._drive())
            self._runner.add_done_callback(self._close_if_unstarted)
            self._signal.connect(self._forward_cancel)
            if self._pending_cancel:
                self._signal.emit(self._pending_cancel)
        return self._runner

    def __await__(self):
        runner = self._runner
        if runner is None:
            runner = self._start(asyncio.get_running_loop())
        elif self._awaiting and not runner.done():
            raise CobaltError(ErrorCode.ALREADY_AWAITED)
        self._awaiting = True
        try:
            return (yield from runner.__await__())
        finally:
            self._awaiting = False

    def cancel(self, ct: CancellationType = CancellationType.ALL) -> None:
        """Request cancellation; a no-op once the task has finished."""
        ct = CancellationType(ct)
        if ct == CancellationType.NONE or self.done():
            return
        if self._runner is None:
            self._pending_cancel |= ct
        else:
            self._signal.emit(ct)

    def done(self) -> bool:
        return self._runner is not None and self._runner.done()

    def started(self) -> bool:
        return self._started

    def __del__(self) -> None:
        coro = getattr(self, "_coro", None)
        if coro is not None and getattr(self, "_runner", None) is None:
            coro.close()


def _require_fresh(task: object) -> Task[Any]:
    if not isinstance(task, Task):
        raise TypeError(f"expected a Task, got {type(task).__name__}")
    if task._runner is not None:
        raise CobaltError(ErrorCode.ALREADY_AWAITED)
    return task


def run(task: Task[T]) -> T:
    """Run ``task`` to completion on a fresh event loop and return its result."""
    task = _require_fresh(task)

    async def _main() -> T:
        return await task

    return asyncio.run(_main())


def _resolve_loop(target: Any) -> asyncio.AbstractEventLoop:
    if hasattr(target, "get_executor"):
        target = target.get_executor()
    if not isinstance(target, asyncio.AbstractEventLoop):
        raise TypeError(f"expected an event loop, got {type(target).__name__}")
    return target


def spawn(
    loop: Any,
    task: Task[T],
    callback: CompletionCallback | None = None,
) -> concurrent.futures.Future[T]:
    """Start ``task`` on ``loop`` from any thread.

    ``loop`` is an event loop or an object whose ``get_executor()`` returns
    one. When the task finishes, ``callback(exception, value)`` is called on
    the loop's thread. The returned future carries the same outcome.
    """
    task = _require_fresh(task)
    target = _resolve_loop(loop)
    future: concurrent.futures.Future[T] = concurrent.futures.Future()

    def _finish(runner: asyncio.Task[T]) -> None:
        value: Any = None
        error: BaseException | None
        if runner.cancelled():
            error = asyncio.CancelledError()
        else:
            error = runner.exception()
            if error is None:
                value = runner.result()
        if error is None:
            future.set_result(value)
        else:
            future.set_exception(error)
        if callback is not None:
            callback(error, value)

    def _begin() -> None:
        if not future.set_running_or_notify_cancel():
            task._close_if_unstarted()
            task._coro.close()
            return
        task._start(target).add_done_callback(_finish)

    target.call_soon_threadsafe(_begin)
    return future