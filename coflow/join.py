"""Await several awaitables concurrently and fail fast on the first error.

A join collects the value of every awaitable. As soon as one of them raises,
the others are cancelled. The join waits for all of them to finish and then
raises that first exception.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Iterable
from typing import Any


def _check(awaitables: Iterable[Any]) -> list[Awaitable[Any]]:
    items = list(awaitables)
    for aw in items:
        if not inspect.isawaitable(aw):
            raise TypeError(f"object of type {type(aw).__name__} is not awaitable")
    return items


async def _await(aw: Awaitable[Any]) -> Any:
    return await aw


async def _drain(children: list[asyncio.Task[Any]]) -> None:
    pending = [child for child in children if not child.done()]
    while pending:
        try:
            await asyncio.wait(pending)
        except asyncio.CancelledError:
            for child in pending:
                child.cancel()
        pending = [child for child in pending if not child.done()]


def _failure(child: asyncio.Task[Any]) -> BaseException | None:
    if child.cancelled():
        return asyncio.CancelledError()
    return child.exception()


class _Join:
    """Runs a fixed set of awaitables and remembers the first failure."""

    def __init__(self, items: list[Awaitable[Any]]) -> None:
        self._items = items
        self._children: list[asyncio.Task[Any]] = []
        self._error: BaseException | None = None

    def _cancel_all(self) -> None:
        for child in self._children:
            if not child.done():
                child.cancel()

    def _on_done(self, child: asyncio.Task[Any]) -> None:
        if self._error is not None:
            return
        exc = _failure(child)
        if exc is None:
            return
        self._error = exc
        self._cancel_all()

    def _close_unstarted(self) -> None:
        for child, aw in zip(self._children, self._items):
            if (
                child.cancelled()
                and inspect.iscoroutine(aw)
                and inspect.getcoroutinestate(aw) == inspect.CORO_CREATED
            ):
                aw.close()

    def _retrieve_all(self) -> None:
        for child in self._children:
            if not child.cancelled():
                child.exception()

    async def run(self) -> list[Any]:
        if not self._items:
            return []
        loop = asyncio.get_running_loop()
        self._children = [loop.create_task(_await(aw)) for aw in self._items]
        for child in self._children:
            child.add_done_callback(self._on_done)
        try:
            await asyncio.wait(self._children)
        except asyncio.CancelledError:
            self._cancel_all()
            await _drain(self._children)
            self._close_unstarted()
            self._retrieve_all()
            raise
        self._close_unstarted()
        if self._error is None:
            for child in self._children:
                exc = _failure(child)
                if exc is not None:
                    self._error = exc
                    break
        if self._error is not None:
            self._retrieve_all()
            raise self._error
        return [child.result() for child in self._children]


def join(*args: Awaitable[Any]) -> Awaitable[tuple[Any, ...]]:
    """Await all ``args`` concurrently; yield a tuple of their values in order.

    On the first exception the remaining awaitables are cancelled and,
    once all have finished, that exception is raised. Cancelling the join
    cancels every awaitable still running.
    """
    items = _check(args)

    async def _run() -> tuple[Any, ...]:
        return tuple(await _Join(items).run())

    return _run()


def join_all(awaitables: Iterable[Awaitable[Any]]) -> Awaitable[list[Any]]:
    """Await every element of ``awaitables`` concurrently; yield a list of values."""
    items = _check(awaitables)
    return _Join(items).run()