"""
Tests for the event system.

This module contains tests for the EventEmitter and EventBus classes
to ensure they provide the expected behavior for event handling.
"""

import threading
from unittest.mock import MagicMock

from acegame.events import EventEmitter, EventBus, EngineEventType, EventPriority


def test_on_with_string_event_type():
    """Test subscribing to an event with a string event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("test_event", callback)

    test_data = {"value": "test"}
    emitter.emit("test_event", test_data)
    callback.assert_called_once_with(test_data)

    # Unsubscribe and emit again
    unsubscribe()
    emitter.emit("test_event", {"value": "test2"})
    assert callback.call_count == 1


def test_on_with_enum_event_type():
    """Test subscribing to an event with an enum event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.on(EngineEventType.CARD_PLAYED, callback)

    test_data = {"card": "A of Spade"}
    emitter.emit(EngineEventType.CARD_PLAYED, test_data)
    callback.assert_called_once_with(test_data)

    # Enum and name address the same listeners
    emitter.emit("CARD_PLAYED", test_data)
    assert callback.call_count == 2


def test_once_subscription():
    """Test subscribing to an event for a single occurrence."""
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.once("test_event", callback)

    emitter.emit("test_event", {"id": 1})
    emitter.emit("test_event", {"id": 2})

    callback.assert_called_once()
    assert callback.call_args[0][0]["id"] == 1


def test_on_any_subscription():
    """Test subscribing to all events."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on_any(callback)

    emitter.emit("event1", {"id": 1})
    emitter.emit("event2", {"id": 2})

    assert callback.call_count == 2
    event_type, event_data = callback.call_args_list[0][0][0]
    assert event_type == "event1"
    assert event_data["id"] == 1

    unsubscribe()
    emitter.emit("event3", {"id": 3})
    assert callback.call_count == 2


def test_emitter_priority():
    """Test that handlers are called in priority order."""
    emitter = EventEmitter()
    call_order = []

    emitter.on("test_event", lambda d: call_order.append("normal"), EventPriority.NORMAL)
    emitter.on("test_event", lambda d: call_order.append("low"), EventPriority.LOW)
    emitter.on(
        "test_event", lambda d: call_order.append("critical"), EventPriority.CRITICAL
    )
    emitter.on("test_event", lambda d: call_order.append("high"), EventPriority.HIGH)

    emitter.emit("test_event", {})

    assert call_order == ["critical", "high", "normal", "low"]


def test_failing_handler_does_not_stop_others(caplog):
    """A handler that raises is logged and the remaining handlers still run."""
    emitter = EventEmitter()
    second = MagicMock()

    def broken(data):
        raise RuntimeError("boom")

    emitter.on("test_event", broken, EventPriority.HIGH)
    emitter.on("test_event", second)

    with caplog.at_level("ERROR", logger="acegame.events"):
        emitter.emit("test_event", {"id": 1})

    second.assert_called_once_with({"id": 1})
    assert "boom" in caplog.text


def test_handler_can_emit_and_subscribe():
    emitter = EventEmitter()
    received = []
    late = MagicMock()

    def relay(data):
        emitter.on("late", late)
        emitter.emit("relayed", {"from": data["id"]})

    emitter.on("first", relay)
    emitter.on("relayed", received.append)

    emitter.emit("first", {"id": 7})
    emitter.emit("late", {})

    assert received == [{"from": 7}]
    late.assert_called_once_with({})


def test_remove_all_listeners():
    emitter = EventEmitter()
    specific = MagicMock()
    other = MagicMock()
    catch_all = MagicMock()
    emitter.on("a", specific)
    emitter.on("b", other)
    emitter.on_any(catch_all)

    emitter.remove_all_listeners("a")
    emitter.emit("a", {})
    emitter.emit("b", {})
    specific.assert_not_called()
    other.assert_called_once()
    assert catch_all.call_count == 2

    emitter.remove_all_listeners()
    emitter.emit("b", {})
    assert other.call_count == 1
    assert catch_all.call_count == 2


def test_event_bus_singleton():
    """Test that the EventBus singleton works correctly."""
    instance1 = EventBus.get_instance()
    instance2 = EventBus.get_instance()
    assert instance1 is instance2


def test_event_bus_singleton_across_threads():
    instances = []

    def grab():
        instances.append(EventBus.get_instance())

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len({id(i) for i in instances}) == 1
