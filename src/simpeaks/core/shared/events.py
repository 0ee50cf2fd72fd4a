"""Lightweight event dispatcher for parameter changes and acquisition progress."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

_logger = logging.getLogger("simpeaks.events")


class EventType(Enum):
    """Supported event types emitted by SimPeaks components."""

    PARAMETER_CHANGED = auto()
    ACQUISITION_STARTED = auto()
    FRAME_COMPLETED = auto()
    ACQUISITION_STOPPED = auto()
    ERROR = auto()


@dataclass(slots=True)
class Event:
    """Base event carrying a type and arbitrary metadata."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ParameterChangedEvent(Event):
    """Event emitted when a value in the parameter library changes."""

    key: str = ""
    index: int = 0
    value: Any = None


@dataclass(slots=True)
class FrameEvent(Event):
    """Event emitted by the acquisition thread after each completed frame."""

    unique_id: int = 0
    frames_completed: int = 0
    timestamp: float = 0.0
    elapsed: float = 0.0


class EventHandler(Protocol):
    """Protocol implemented by event handlers."""

    def handle(self, event: Event) -> None:  # pragma: no cover - thin interface
        """Process an incoming event."""


class EventDispatcher:
    """Simple pub-sub dispatcher for internal events.

    Subscriptions may be added from any thread; handlers run synchronously on
    the thread that dispatches.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[EventHandler]] = {}
        self._lock = threading.Lock()

    def subscribe(
        self,
        event_type: EventType,
        handler: EventHandler | Callable[[Event], None],
    ) -> None:
        """Register a handler for a particular event type."""
        if callable(handler) and not hasattr(handler, "handle"):
            handler = _CallableHandler(handler)

        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: EventType, handler: object) -> None:
        """Remove a previously registered handler (no-op if absent)."""
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            self._handlers[event_type] = [
                h for h in handlers if h is not handler and getattr(h, "func", None) != handler
            ]

    def dispatch(self, event: Event) -> None:
        """Send an event to all subscribed handlers.

        A handler that raises is logged and the remaining handlers still run.
        """
        with self._lock:
            handlers = list(self._handlers.get(event.event_type, []))
        for handler in handlers:
            try:
                handler.handle(event)
            except Exception:
                _logger.exception("Handler %r failed for %s", handler, event.event_type.name)


class _CallableHandler:
    """Adapter that allows bare callables to act as event handlers."""

    def __init__(self, func: Callable[[Event], None]) -> None:
        self.func = func

    def handle(self, event: Event) -> None:  # pragma: no cover - trivial adapter
        self.func(event)

    def __repr__(self) -> str:
        return f"<handler {self.func!r}>"


__all__ = [
    "Event",
    "EventDispatcher",
    "EventHandler",
    "EventType",
    "FrameEvent",
    "ParameterChangedEvent",
]
