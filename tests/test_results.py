import asyncio

import pytest

from coflow.results import Result, capture, capture_async


async def _settle(outcome):
    await asyncio.sleep(0)
    if isinstance(outcome, BaseException):
        raise outcome
    return outcome


@pytest.mark.parametrize(
    "func, args, expected",
    [
        (lambda: "done", (), "done"),
        (divmod, (17, 5), (3, 2)),
        (lambda: None, (), None),
    ],
    ids=["value", "arguments", "void"],
)
def test_capture_success(func, args, expected):
    res = capture(func, *args)
    assert res.has_value()
    assert not res.has_error()
    assert res.unwrap() == expected


def test_capture_failure_holds_exception():
    boom = RuntimeError("boom")

    def fail():
        raise boom

    res = capture(fail)
    assert res.has_error()
    assert not res.has_value()
    assert res.error is boom
    with pytest.raises(RuntimeError) as info:
        res.unwrap()
    assert info.value is boom


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({"error": "not an exception"}, TypeError),
        ({"value": 1, "error": RuntimeError("x")}, ValueError),
    ],
)
def test_result_rejects_bad_arguments(kwargs, expected):
    with pytest.raises(expected):
        Result(**kwargs)


@pytest.mark.asyncio
async def test_capture_async_success():
    res = await capture_async(_settle([1, 2, 3]))
    assert res.has_value()
    assert res.unwrap() == [1, 2, 3]


@pytest.mark.asyncio
async def test_capture_async_failure():
    res = await capture_async(_settle(KeyError("missing")))
    assert res.has_error()
    assert isinstance(res.error, KeyError)
    with pytest.raises(KeyError):
        res.unwrap()