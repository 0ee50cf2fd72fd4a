"""Acquisition state machine and the producer thread that drives it.

The controller owns a single daemon thread, started at construction, that
sleeps until a start request arrives and then renders one frame per
``ACQUIRE_PERIOD`` until it is stopped or the image mode is satisfied.

Requests from other threads are single-bit :class:`threading.Event` signals:
a start while acquiring or a stop while idle has no effect, and a stop wakes
the inter-frame wait immediately. All acquisition state is touched only by
the producer thread; settings are read from the parameter store afresh for
every frame.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

import numpy as np

from simpeaks.core.acquisition.clock import SystemClock
from simpeaks.core.algorithms.compositor import FrameCompositor
from simpeaks.core.constants import (
    DEFAULT_ACQUIRE_PERIOD,
    STATUS_MESSAGE_IDLE,
    STATUS_MESSAGE_RUNNING,
)
from simpeaks.core.domain.frame import ElementType
from simpeaks.core.domain.state import AcquisitionState, DetectorStatus, ImageMode
from simpeaks.core.params.keys import ParamKey
from simpeaks.core.params.snapshot import read_background, read_noise, read_peaks
from simpeaks.core.shared.events import Event, EventDispatcher, EventType, FrameEvent
from simpeaks.core.shared.exceptions import SimPeaksError

if TYPE_CHECKING:
    from collections.abc import Callable

    from simpeaks.core.domain.frame import FrameBuffer
    from simpeaks.core.interfaces import BufferPool, Clock, OutputSink, ParameterStore

_logger = logging.getLogger("simpeaks.acquisition")

# Seconds to wait for the producer thread on shutdown
JOIN_TIMEOUT = 5.0


class AcquisitionController:
    """Runs the frame production loop on a dedicated thread.

    Args:
        store: Parameter store the settings are read from and counters written to
        pool: Buffer pool frames are allocated from
        sink: Consumer of completed frames; frames are not published while None
        ndim: 1 for line frames, 2 for images
        max_peaks: Number of peak slots read per frame
        clock: Time source (defaults to :class:`SystemClock`)
        compositor: Frame renderer (defaults to one with a wall-clock seeded RNG)
        name: Thread name, used in log messages
    """

    def __init__(
        self,
        store: ParameterStore,
        pool: BufferPool,
        sink: OutputSink | None = None,
        *,
        ndim: int = 2,
        max_peaks: int = 1,
        clock: Clock | None = None,
        compositor: FrameCompositor | None = None,
        name: str = "SimPeaksTask",
    ) -> None:
        if ndim not in (1, 2):
            msg = f"ndim must be 1 or 2, got {ndim}"
            raise ValueError(msg)
        self.store = store
        self.pool = pool
        self.sink = sink
        self.ndim = ndim
        self.max_peaks = max_peaks
        self.clock = clock if clock is not None else SystemClock()
        self.compositor = compositor if compositor is not None else FrameCompositor()
        self.events = EventDispatcher()
        self.state = AcquisitionState()

        self._buffer: FrameBuffer | None = None
        self._array_counter = 0
        self._start_event = threading.Event()
        self._stop_event = threading.Event()
        self._shutdown_event = threading.Event()
        self._reset_event = threading.Event()

        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    # ------------------------------------------------------------------
    # Requests (any thread)
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Ask the producer thread to begin acquiring; cancels a pending stop."""
        self._stop_event.clear()
        self._start_event.set()

    def stop(self) -> None:
        """Ask the producer thread to stop at the next cycle boundary; cancels a pending start."""
        self._start_event.clear()
        self._stop_event.set()

    def request_reset(self) -> None:
        """Zero the buffer before the next integrated frame."""
        self._reset_event.set()

    def shutdown(self, timeout: float = JOIN_TIMEOUT) -> None:
        """Stop acquiring, end the producer thread and release the buffer."""
        self._shutdown_event.set()
        self._stop_event.set()
        self._start_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout)
        if self._thread.is_alive():
            _logger.warning("%s did not exit within %.1f s", self._thread.name, timeout)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def acquiring(self) -> bool:
        return self.state.acquiring

    @property
    def array_counter(self) -> int:
        """Frames produced over the controller's lifetime."""
        return self._array_counter

    @property
    def buffer(self) -> FrameBuffer | None:
        """Buffer currently owned by the controller, if any."""
        return self._buffer

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    # ------------------------------------------------------------------
    # Producer thread
    # ------------------------------------------------------------------

    def _run(self) -> None:
        _logger.debug("%s started", self._thread.name)
        try:
            while True:
                if not self.state.acquiring:
                    self._start_event.wait()
                    if self._shutdown_event.is_set():
                        break
                    self._start_event.clear()
                    self._guarded(self._begin)
                    if not self.state.acquiring:
                        continue

                if self._stop_event.is_set():
                    self._stop_event.clear()
                    self._guarded(self._end, False)
                    continue

                self._guarded(self._cycle)
                if self._guarded(self._finish_if_complete):
                    continue

                period = self._guarded(self._period)
                self._stop_event.wait(DEFAULT_ACQUIRE_PERIOD if period is None else period)
        finally:
            if self.state.acquiring:
                self._guarded(self._end, False)
            self._release_buffer()
            _logger.debug("%s exited", self._thread.name)

    def _guarded(self, step: Callable[..., Any], *args: Any) -> Any:
        """Run one step of the loop; failures are logged and reported, never raised."""
        try:
            return step(*args)
        except SimPeaksError as exc:
            _logger.error("%s failed: %s", step.__name__.lstrip("_"), exc)
            self.events.dispatch(Event(EventType.ERROR, {"error": exc}))
        except Exception as exc:
            _logger.exception("Unexpected error in %s", step.__name__.lstrip("_"))
            self.events.dispatch(Event(EventType.ERROR, {"error": exc}))
        return None

    def _finish_if_complete(self) -> bool:
        if self.state.is_complete(self.store.get_int(ParamKey.NUM_IMAGES)):
            self._end(completed=True)
            return True
        return False

    def _period(self) -> float:
        return max(0.0, self.store.get_float(ParamKey.ACQUIRE_PERIOD))

    def _begin(self) -> None:
        image_mode = _image_mode(self.store.get_int(ParamKey.IMAGE_MODE))
        self.state.begin(image_mode, self.clock.monotonic())
        self._reset_event.set()
        self.store.set_int(ParamKey.NUM_IMAGES_COUNTER, 0)
        self.store.set_string(ParamKey.STATUS_MESSAGE, STATUS_MESSAGE_RUNNING)
        _logger.info("Acquisition started (%s mode)", image_mode.name.lower())
        self.events.dispatch(Event(EventType.ACQUISITION_STARTED, {"image_mode": image_mode}))

    def _end(self, completed: bool) -> None:
        self.state.reset()
        if completed:
            self.store.set_int(ParamKey.ACQUIRE, 0)
            self.store.set_int(ParamKey.STATUS, DetectorStatus.IDLE)
        self.store.set_string(ParamKey.STATUS_MESSAGE, STATUS_MESSAGE_IDLE)
        _logger.info(
            "Acquisition %s after %d frame(s)",
            "complete" if completed else "stopped",
            self.state.frames_completed,
        )
        self.events.dispatch(
            Event(
                EventType.ACQUISITION_STOPPED,
                {"completed": completed, "frames_completed": self.state.frames_completed},
            )
        )

    def _cycle(self) -> None:
        store = self.store
        buffer = self._ensure_buffer()

        integrate = bool(store.get_int(ParamKey.INTEGRATE))
        peaks = read_peaks(store, self.max_peaks, self.ndim)
        background_x = read_background(store, "x")
        background_y = read_background(store, "y") if self.ndim == 2 else None
        noise = read_noise(store)

        sink = self.sink if store.get_int(ParamKey.ARRAY_CALLBACKS) else None
        # Reserved before composing: a refused copy leaves the integrated data untouched
        frame = None
        if sink is not None and integrate:
            frame = self.pool.allocate(buffer.dims, buffer.element_type)
        try:
            if self.compositor.compose(
                buffer,
                peaks,
                background_x,
                background_y,
                noise,
                integrate=integrate,
                needs_reset=self._reset_event.is_set(),
            ):
                self._reset_event.clear()
        except Exception:
            if frame is not None:
                self.pool.release(frame)
            raise

        self._array_counter += 1
        self.state.frames_completed += 1
        self.state.elapsed = self.clock.monotonic() - self.state.start_time
        timestamp = self.clock.now()
        buffer.unique_id = self._array_counter
        buffer.timestamp = timestamp

        store.set_float(ParamKey.ELAPSED_TIME, self.state.elapsed)
        store.set_float(ParamKey.TIME_STAMP, timestamp)
        store.set_int(ParamKey.ARRAY_COUNTER, self._array_counter)
        store.set_int(ParamKey.NUM_IMAGES_COUNTER, self.state.frames_completed)
        store.set_int(ParamKey.ARRAY_SIZE_X, buffer.size_x)
        store.set_int(ParamKey.ARRAY_SIZE_Y, buffer.size_y if self.ndim == 2 else 0)

        if sink is not None:
            self._publish(sink, buffer, frame)
        _logger.debug("Frame %d produced", self._array_counter)
        self.events.dispatch(
            FrameEvent(
                EventType.FRAME_COMPLETED,
                unique_id=self._array_counter,
                frames_completed=self.state.frames_completed,
                timestamp=timestamp,
                elapsed=self.state.elapsed,
            )
        )

    def _ensure_buffer(self) -> FrameBuffer:
        """Current buffer, reallocated if the geometry or element type changed."""
        element_type = ElementType.from_value(self.store.get_int(ParamKey.DATA_TYPE))
        size_x = self.store.get_int(ParamKey.SIZE_X)
        if self.ndim == 2:
            dims: tuple[int, ...] = (size_x, self.store.get_int(ParamKey.SIZE_Y))
        else:
            dims = (size_x,)

        if self._buffer is not None and self._buffer.matches(dims, element_type):
            return self._buffer

        self._release_buffer()
        self._buffer = self.pool.allocate(dims, element_type)
        self._reset_event.set()
        _logger.debug("Allocated %s buffer with dims %s", element_type.name, dims)
        return self._buffer

    def _publish(self, sink: OutputSink, buffer: FrameBuffer, frame: FrameBuffer | None) -> None:
        """Hand ``buffer`` to the sink, or its contents in ``frame`` when integrating."""
        if frame is not None:
            np.copyto(frame.data, buffer.data)
            frame.unique_id = buffer.unique_id
            frame.timestamp = buffer.timestamp
            frame.attributes = dict(buffer.attributes)
            sink.publish(frame, frame.unique_id, frame.timestamp)
        else:
            # The sink now owns the buffer; the next cycle allocates a new one
            self._buffer = None
            sink.publish(buffer, buffer.unique_id, buffer.timestamp)

    def _release_buffer(self) -> None:
        if self._buffer is not None:
            buffer, self._buffer = self._buffer, None
            self.pool.release(buffer)


def _image_mode(value: int) -> ImageMode:
    try:
        return ImageMode(value)
    except ValueError:
        _logger.warning("Unknown image mode %d, acquiring a single frame", value)
        return ImageMode.SINGLE


__all__ = ["AcquisitionController"]
