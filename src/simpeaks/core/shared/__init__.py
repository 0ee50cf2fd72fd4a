"""Shared foundational utilities for SimPeaks."""

from simpeaks.core.shared import events, typing
from simpeaks.core.shared.events import (
    Event,
    EventDispatcher,
    EventType,
    FrameEvent,
    ParameterChangedEvent,
)
from simpeaks.core.shared.exceptions import (
    BufferAllocationError,
    ConfigError,
    ParameterError,
    SimPeaksError,
)

__all__ = [
    "BufferAllocationError",
    "ConfigError",
    "Event",
    "EventDispatcher",
    "EventType",
    "FrameEvent",
    "ParameterChangedEvent",
    "ParameterError",
    "SimPeaksError",
    "events",
    "typing",
]
