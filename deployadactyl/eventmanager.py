"""Delivery of events to registered handlers and bindings."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from deployadactyl.interfaces import Binding, Event, Handler, IEvent


class InvalidArgumentError(ValueError):
    """Raised when a handler to register is missing."""

    def __init__(self) -> None:
        super().__init__("invalid argument: error handler does not exist")


class InvalidEventTypeError(TypeError):
    """Raised when a binding is asked to deliver an event it cannot handle."""

    def __init__(self, message: str = "invalid event type") -> None:
        super().__init__(message)


class _LegacyEventBinding:
    """Delivers plain Event objects of one type to a Handler."""

    def __init__(self, event_type: str, handler: Handler) -> None:
        self.event_type = event_type
        self.handler = handler

    def accepts(self, event: Any) -> bool:
        return isinstance(event, Event) and event.type == self.event_type

    def emit(self, event: Any) -> None:
        if not isinstance(event, Event):
            raise InvalidEventTypeError()
        self.handler.on_event(event)


class EventManager:
    """Holds bindings and emits events to every binding that accepts them."""

    def __init__(self, log: Optional[logging.Logger] = None,
                 bindings: Optional[List[Binding]] = None) -> None:
        self.log = log if log is not None else logging.getLogger(__name__)
        self.bindings: List[Binding] = list(bindings) if bindings else []

    def add_handler(self, handler: Optional[Handler], event_type: str) -> None:
        """Register ``handler`` for events whose type is ``event_type``."""
        if handler is None:
            raise InvalidArgumentError()
        self.bindings.append(_LegacyEventBinding(event_type, handler))
        self.log.debug("handler for [%s] event added successfully", event_type)

    def emit(self, event: Event) -> None:
        """Emit a plain Event."""
        self.emit_event(event)

    def add_binding(self, binding: Binding) -> None:
        self.bindings.append(binding)

    def emit_event(self, event: IEvent) -> None:
        """Deliver ``event`` to each accepting binding in order.

        The first error raised by a binding stops delivery and propagates.
        """
        for binding in self.bindings:
            if binding.accepts(event):
                binding.emit(event)