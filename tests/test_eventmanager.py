import io
from dataclasses import dataclass
from typing import Any, Optional

import pytest

from deployadactyl.eventmanager import (
    EventManager,
    InvalidArgumentError,
    InvalidEventTypeError,
)
from deployadactyl.interfaces import Event, default_logger
from deployadactyl.randomizer import string_runes


class RecordingHandler:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.received: Optional[Event] = None

    def on_event(self, event: Event) -> None:
        self.received = event
        if self.error is not None:
            raise self.error


class RecordingBinding:
    def __init__(self, accepts: bool = False, error: Optional[Exception] = None) -> None:
        self.accepts_result = accepts
        self.error = error
        self.accepted: Any = None
        self.emitted: Any = None
        self.emit_called = False

    def accepts(self, event: Any) -> bool:
        self.accepted = event
        return self.accepts_result

    def emit(self, event: Any) -> None:
        self.emit_called = True
        self.emitted = event
        if self.error is not None:
            raise self.error


@dataclass
class StopStarted:
    application: str = ""

    def name(self) -> str:
        return "StopStartedEvent"


@pytest.fixture
def log_buffer():
    return io.StringIO()


@pytest.fixture
def manager(log_buffer):
    return EventManager(default_logger(log_buffer, "DEBUG", "eventmanager_test"))


@pytest.fixture
def event_type():
    return "eventType-" + string_runes(10)


@pytest.fixture
def event(event_type):
    return Event(type=event_type, data="eventData-" + string_runes(10))


def test_add_handler_registers_a_binding(manager, event_type, log_buffer):
    manager.add_handler(RecordingHandler(), event_type)
    assert len(manager.bindings) == 1
    assert f"handler for [{event_type}] event added successfully" in log_buffer.getvalue()


def test_add_handler_rejects_none(manager, event_type):
    with pytest.raises(InvalidArgumentError, match="error handler does not exist"):
        manager.add_handler(None, event_type)
    assert manager.bindings == []


def test_emit_calls_all_handlers(manager, event, event_type):
    one, two = RecordingHandler(), RecordingHandler()
    manager.add_handler(one, event_type)
    manager.add_handler(two, event_type)

    manager.emit(event)

    assert one.received == event
    assert two.received == event


def test_emit_raises_handler_error(manager, event, event_type):
    handler = RecordingHandler(error=RuntimeError("on event error"))
    manager.add_handler(handler, event_type)

    with pytest.raises(RuntimeError, match="on event error"):
        manager.emit(event)
    assert handler.received == event


def test_emit_only_reaches_matching_type(manager, event, event_type):
    one, two = RecordingHandler(), RecordingHandler()
    manager.add_handler(one, event_type)
    manager.add_handler(two, "anotherEventType-" + string_runes(10))

    manager.emit(event)

    assert one.received == event
    assert two.received is None


def test_add_binding_appends(manager):
    binding = RecordingBinding()
    manager.add_binding(binding)
    assert manager.bindings[0] is binding


def test_emit_event_delivers_to_accepting_binding(manager):
    binding = RecordingBinding(accepts=True)
    manager.add_binding(binding)
    stop_started = StopStarted()

    manager.emit_event(stop_started)

    assert binding.accepted == stop_started
    assert binding.emitted == stop_started


def test_emit_event_skips_binding_that_declines(manager):
    binding = RecordingBinding(accepts=False)
    manager.add_binding(binding)
    stop_started = StopStarted()

    manager.emit_event(stop_started)

    assert binding.accepted == stop_started
    assert binding.emit_called is False


def test_emit_event_raises_binding_error(manager):
    binding = RecordingBinding(accepts=True, error=RuntimeError("emit error"))
    manager.add_binding(binding)

    with pytest.raises(RuntimeError) as info:
        manager.emit_event(StopStarted())
    assert str(info.value) == "emit error"


def test_emit_event_stops_at_first_error(manager):
    failing = RecordingBinding(accepts=True, error=RuntimeError("boom"))
    later = RecordingBinding(accepts=True)
    manager.add_binding(failing)
    manager.add_binding(later)

    with pytest.raises(RuntimeError):
        manager.emit_event(StopStarted())
    assert later.emit_called is False


def test_legacy_handlers_ignore_other_event_kinds(manager, event_type):
    handler = RecordingHandler()
    manager.add_handler(handler, event_type)

    manager.emit_event(StopStarted())

    assert handler.received is None


def test_legacy_binding_rejects_non_event(manager, event_type):
    manager.add_handler(RecordingHandler(), event_type)
    binding = manager.bindings[0]
    with pytest.raises(InvalidEventTypeError, match="invalid event type"):
        binding.emit(StopStarted())