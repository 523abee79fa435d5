import pytest

from route_planner.services.events import DELIVERY_START, SELECTION_CHANGED, EventBus


def test_emit_reaches_every_listener_in_order():
    bus = EventBus()
    calls: list[str] = []
    bus.subscribe(DELIVERY_START, lambda oid: calls.append(f"first:{oid}"))
    bus.subscribe(DELIVERY_START, lambda oid: calls.append(f"second:{oid}"))

    bus.emit(DELIVERY_START, "42")

    assert calls == ["first:42", "second:42"]


def test_failing_listener_is_isolated(caplog):
    bus = EventBus()
    calls: list[list[str]] = []

    def broken(ids):
        raise RuntimeError("boom")

    bus.subscribe(SELECTION_CHANGED, broken)
    bus.subscribe(SELECTION_CHANGED, calls.append)

    bus.emit(SELECTION_CHANGED, ["A"])

    assert calls == [["A"]]
    assert "failed while handling selection_changed" in caplog.text


def test_unsubscribe_and_unknown_signal():
    bus = EventBus()
    calls: list[str] = []
    bus.subscribe(DELIVERY_START, calls.append)
    bus.unsubscribe(DELIVERY_START, calls.append)

    bus.emit(DELIVERY_START, "1")

    assert calls == []
    with pytest.raises(ValueError):
        bus.subscribe("order_teleported", calls.append)
