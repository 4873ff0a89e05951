"""A coroutine that runs on its own event loop in a dedicated OS thread."""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
import threading
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

from coflow.cancellation import CancellationSignal, CancellationType
from coflow.errors import BadExecutor, CobaltError, ErrorCode


@dataclass(eq=False)
class _ThreadState:
    loop: asyncio.AbstractEventLoop
    signal: CancellationSignal = field(default_factory=CancellationSignal)
    outcome: concurrent.futures.Future = field(default_factory=concurrent.futures.Future)
    done: bool = False


def _shutdown(loop: asyncio.AbstractEventLoop) -> None:
    pending = [task for task in asyncio.all_tasks(loop) if not task.done()]
    for task in pending:
        task.cancel()
    if pending:
        loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
    loop.run_until_complete(loop.shutdown_asyncgens())


def _run(state: _ThreadState, coro: Coroutine[Any, Any, Any]) -> None:
    loop = state.loop
    asyncio.set_event_loop(loop)
    main: asyncio.Task[Any] | None = None
    stopped = False
    try:
        main = loop.create_task(coro)

        def _stop(_task: object) -> None:
            loop.stop()

        def _cancel(_ct: CancellationType) -> None:
            if not main.done():
                main.cancel()

        main.add_done_callback(_stop)
        state.signal.connect(_cancel)
        loop.run_forever()
        main.remove_done_callback(_stop)
        # The loop was stopped from outside before the coroutine finished.
        stopped = not main.done()
    finally:
        state.done = True
        state.signal.disconnect()
        try:
            _shutdown(loop)
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        _publish(state, main, stopped)


def _publish(state: _ThreadState, main: asyncio.Task[Any] | None, stopped: bool) -> None:
    outcome = state.outcome
    if main is None or stopped:
        outcome.set_result(None)
    elif main.cancelled():
        outcome.cancel()
    elif main.exception() is not None:
        outcome.set_exception(main.exception())
    else:
        outcome.set_result(main.result())


class Thread:
    """Runs ``func(*args)`` on a fresh event loop in a new OS thread.

    The coroutine starts immediately. Awaiting the thread from another event
    loop yields the coroutine's result; a thread whose loop was stopped before
    the coroutine finished yields ``None``. A thread can be awaited only once.
    """

    def __init__(self, func: Callable[..., Coroutine[Any, Any, Any]], *args: Any) -> None:
        coro = func(*args)
        if not inspect.iscoroutine(coro):
            raise TypeError(f"Thread needs a coroutine function, got {type(coro).__name__}")
        self._state: _ThreadState | None = _ThreadState(loop=asyncio.new_event_loop())
        self._joined = False
        self._thread: threading.Thread | None = threading.Thread(
            target=_run, args=(self._state, coro), daemon=True
        )
        self._thread.start()

    def cancel(self, ct: CancellationType = CancellationType.ALL) -> None:
        """Send a cancellation request to the coroutine running on the thread."""
        ct = CancellationType(ct)
        state = self._state
        if state is None or state.done or ct == CancellationType.NONE:
            return
        try:
            state.loop.call_soon_threadsafe(state.signal.emit, ct)
        except RuntimeError:
            pass

    def join(self) -> None:
        """Block until the OS thread has finished."""
        if not self.joinable():
            raise RuntimeError("thread is not joinable")
        if self._thread is threading.current_thread():
            raise RuntimeError("a thread cannot join itself")
        self._thread.join()
        self._joined = True

    def joinable(self) -> bool:
        return self._thread is not None and not self._joined

    def detach(self) -> None:
        """Let the thread run on without being joined."""
        if not self.joinable():
            raise RuntimeError("thread is not joinable")
        self._thread = None

    def get_executor(self) -> asyncio.AbstractEventLoop:
        """Return the thread's event loop; raise ``BadExecutor`` once it is gone."""
        state = self._state
        if state is None or state.done:
            raise BadExecutor("thread has no running executor")
        return state.loop

    def get_id(self) -> int | None:
        """Return the OS thread identifier, or ``None`` after detach or join."""
        if not self.joinable():
            return None
        return self._thread.ident

    def __await__(self):
        state = self._state
        if state is None:
            raise CobaltError(ErrorCode.MOVED_FROM)
        self._state = None
        return (yield from asyncio.wrap_future(state.outcome).__await__())

    def __del__(self) -> None:
        state = getattr(self, "_state", None)
        if state is not None and not state.done:
            try:
                state.loop.call_soon_threadsafe(state.loop.stop)
            except RuntimeError:
                pass
        thread = getattr(self, "_thread", None)
        if (
            thread is not None
            and not getattr(self, "_joined", True)
            and thread is not threading.current_thread()
        ):
            thread.join()