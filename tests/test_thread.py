import asyncio
import threading

import pytest

from coflow.errors import BadExecutor, CobaltError, ErrorCode
from coflow.task import Task, spawn
from coflow.thread import Thread


async def thr():
    await asyncio.sleep(0.1)


async def thr_stop():
    asyncio.get_running_loop().stop()
    await asyncio.sleep(0.1)


async def on_thread():
    return threading.get_ident()


async def returns(value):
    await asyncio.sleep(0.01)
    return value


async def raises():
    await asyncio.sleep(0.01)
    raise ValueError("boom")


async def forever():
    await asyncio.sleep(30)


@pytest.mark.parametrize("body", [thr, thr_stop], ids=["run", "stop"])
def test_join_finishes(body):
    t = Thread(body)
    t.join()
    assert t.joinable() is False
    with pytest.raises(BadExecutor):
        t.get_executor()


@pytest.mark.asyncio
async def test_await_thread():
    assert await Thread(thr) is None

    th = Thread(thr_stop)
    await asyncio.sleep(0.2)
    assert await th is None
    with pytest.raises(CobaltError) as info:
        await th
    assert info.value.code == ErrorCode.MOVED_FROM


@pytest.mark.asyncio
async def test_spawn_onto_thread():
    t = Thread(thr)
    ident = await asyncio.wrap_future(spawn(t.get_executor(), Task(on_thread())))
    assert ident == t.get_id()
    assert ident != threading.get_ident()
    if t.joinable():
        t.join()
    assert t.joinable() is False


@pytest.mark.asyncio
async def test_await_returns_value():
    assert await Thread(returns, 42) == 42


@pytest.mark.asyncio
async def test_await_propagates_exception():
    with pytest.raises(ValueError, match="boom"):
        await Thread(raises)


@pytest.mark.asyncio
async def test_cancel_stops_coroutine():
    t = Thread(forever)
    t.cancel()
    with pytest.raises(asyncio.CancelledError):
        await t
    t.join()
    assert t.joinable() is False


def test_get_executor_is_distinct_loop():
    t = Thread(thr)
    loop = t.get_executor()
    assert isinstance(loop, asyncio.AbstractEventLoop)
    t.join()
    assert loop.is_closed()


def test_get_id_differs_from_caller():
    t = Thread(thr)
    ident = t.get_id()
    assert isinstance(ident, int)
    assert ident != threading.get_ident()
    t.join()
    assert t.get_id() is None


@pytest.mark.parametrize(
    "finish", [Thread.detach, Thread.join], ids=["detached", "joined"]
)
def test_join_after_finish_raises(finish):
    t = Thread(thr)
    finish(t)
    assert t.joinable() is False
    with pytest.raises(RuntimeError):
        t.join()


def test_non_coroutine_function_rejected():
    with pytest.raises(TypeError):
        Thread(lambda: 1)