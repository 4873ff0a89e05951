import pytest

from coflow.cancellation import CancellationSignal
from coflow.cancellation import CancellationType as CT


@pytest.fixture
def wired():
    received = []
    sig = CancellationSignal()
    sig.connect(received.append)
    return sig, received


def test_all_contains_every_type(wired):
    sig, received = wired
    sig.emit(CT.ALL)
    (got,) = received
    assert all(ct in got for ct in (CT.TERMINAL, CT.PARTIAL, CT.TOTAL))
    assert not (got & CT.NONE)


def test_new_signal_is_not_connected_and_emit_is_noop():
    sig = CancellationSignal()
    assert not sig.is_connected()
    sig.emit(CT.ALL)
    assert not sig.is_connected()


@pytest.mark.parametrize(
    "emits, expected",
    [
        ([(CT.TERMINAL,), (CT.PARTIAL,)], [CT.TERMINAL, CT.PARTIAL]),
        ([()], [CT.ALL]),
        ([(int(CT.TERMINAL),)], [CT.TERMINAL]),
    ],
    ids=["explicit", "default_all", "int_converted"],
)
def test_emit_reaches_handler(wired, emits, expected):
    sig, received = wired
    assert sig.is_connected()
    for args in emits:
        sig.emit(*args)
    assert received == expected
    assert all(isinstance(ct, CT) for ct in received)


def test_disconnect_stops_delivery(wired):
    sig, received = wired
    sig.disconnect()
    sig.emit(CT.TOTAL)
    assert received == []
    assert not sig.is_connected()


def test_connect_replaces_previous_handler(wired):
    sig, first = wired
    second = []
    sig.connect(second.append)
    sig.emit(CT.TOTAL)
    assert first == []
    assert second == [CT.TOTAL]


def test_forwarding_between_signals(wired):
    inner, received = wired
    outer = CancellationSignal()
    outer.connect(inner.emit)
    outer.emit(CT.PARTIAL)
    assert received == [CT.PARTIAL]