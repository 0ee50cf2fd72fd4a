"""Protocols for the collaborators the acquisition core is built on.

The core only reads and writes through these interfaces; the package ships
default implementations (:class:`~simpeaks.core.params.ParameterLibrary`,
:class:`~simpeaks.core.frames.NDArrayPool`, the sinks in
:mod:`simpeaks.core.frames` and :class:`~simpeaks.core.acquisition.clock.SystemClock`)
but any object with the same methods will do.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from simpeaks.core.domain.frame import ElementType, FrameBuffer
    from simpeaks.core.shared.events import Event


@runtime_checkable
class ParameterStore(Protocol):
    """Typed key/value settings with change notification.

    ``index`` selects the slot of an addressable (per-peak) parameter.
    """

    def get_int(self, key: str, index: int = 0) -> int: ...
    def get_float(self, key: str, index: int = 0) -> float: ...
    def get_string(self, key: str, index: int = 0) -> str: ...
    def set_int(self, key: str, value: int, index: int = 0) -> None: ...
    def set_float(self, key: str, value: float, index: int = 0) -> None: ...
    def set_string(self, key: str, value: str, index: int = 0) -> None: ...
    def subscribe(self, callback: Callable[[Event], None]) -> None: ...


@runtime_checkable
class BufferPool(Protocol):
    """Allocator for frame buffers."""

    def allocate(self, dims: tuple[int, ...], element_type: ElementType) -> FrameBuffer:
        """Allocate a buffer with ``dims`` in (x, y) order.

        Raises
        ------
            BufferAllocationError: If the buffer cannot be provided
        """
        ...

    def release(self, buffer: FrameBuffer) -> None: ...
    def copy(self, buffer: FrameBuffer) -> FrameBuffer: ...


@runtime_checkable
class OutputSink(Protocol):
    """Consumer of completed frames.

    The sink owns every buffer it is handed and must give it back to the pool
    once done with it.
    """

    def publish(self, buffer: FrameBuffer, unique_id: int, timestamp: float) -> None: ...


@runtime_checkable
class Clock(Protocol):
    """Time source: ``monotonic`` for intervals, ``now`` for wall-clock stamps."""

    def monotonic(self) -> float: ...
    def now(self) -> float: ...


__all__ = ["BufferPool", "Clock", "OutputSink", "ParameterStore"]
