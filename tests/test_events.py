import pytest

from serialhelper.events import Signal


def test_emit_passes_arguments_to_slot():
    signal = Signal()
    received = []
    signal.connect(lambda *args: received.append(args))
    signal.emit(1, "two", b"three")
    assert received == [(1, "two", b"three")]


def test_slots_called_in_connection_order():
    signal = Signal()
    order = []
    signal.connect(lambda: order.append("first"))
    signal.connect(lambda: order.append("second"))
    signal.emit()
    assert order == ["first", "second"]


def test_connect_returns_slot_for_decorator_use():
    signal = Signal()
    calls = []

    def handler(value):
        calls.append(value)

    returned = signal.connect(handler)
    assert returned is handler

    signal.emit(7)
    assert calls == [7]


def test_disconnect_stops_delivery():
    signal = Signal()
    calls = []
    slot = calls.append
    signal.connect(slot)
    signal.disconnect(slot)
    signal.emit("x")
    assert calls == []
    assert len(signal) == 0


def test_disconnect_unknown_slot_raises():
    signal = Signal()
    with pytest.raises(ValueError):
        signal.disconnect(print)


def test_connect_rejects_non_callable():
    signal = Signal()
    with pytest.raises(TypeError):
        signal.connect(42)


def test_duplicate_connection_called_twice():
    signal = Signal()
    calls = []
    signal.connect(calls.append)
    signal.connect(calls.append)
    signal.emit("v")
    assert calls == ["v", "v"]
    assert len(signal) == 2


def test_slot_disconnecting_during_emit_does_not_break_iteration():
    signal = Signal()
    calls = []

    def once():
        calls.append("once")
        signal.disconnect(once)

    signal.connect(once)
    signal.connect(lambda: calls.append("other"))
    signal.emit()
    signal.emit()
    assert calls == ["once", "other", "other"]