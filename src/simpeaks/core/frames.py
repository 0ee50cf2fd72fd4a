"""Default frame buffer pool and output sinks.

:class:`NDArrayPool` hands out :class:`FrameBuffer` objects and recycles
released ones whose byte size matches a later request. The sinks consume
published frames and give each buffer back to its pool when done.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.constants import DEFAULT_MAX_BUFFERS, DEFAULT_MAX_MEMORY
from simpeaks.core.domain.frame import ElementType, FrameBuffer
from simpeaks.core.shared.exceptions import BufferAllocationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from simpeaks.core.interfaces import BufferPool

_logger = logging.getLogger("simpeaks.frames")


class NDArrayPool:
    """Buffer pool with a free list and optional count/memory limits.

    Args:
        max_buffers: Maximum number of buffers alive at once (0 for no limit)
        max_memory: Maximum bytes held by live and free buffers (0 for no limit)
    """

    def __init__(self, max_buffers: int = DEFAULT_MAX_BUFFERS, max_memory: int = DEFAULT_MAX_MEMORY) -> None:
        self.max_buffers = max_buffers
        self.max_memory = max_memory
        self._lock = threading.Lock()
        self._free: list[np.ndarray] = []
        self._in_use: set[int] = set()
        self._num_buffers = 0
        self._memory_used = 0

    @property
    def num_buffers(self) -> int:
        """Buffers created and not yet discarded (in use plus free)."""
        with self._lock:
            return self._num_buffers

    @property
    def num_free(self) -> int:
        with self._lock:
            return len(self._free)

    @property
    def memory_used(self) -> int:
        """Bytes held by all buffers the pool has created."""
        with self._lock:
            return self._memory_used

    def allocate(self, dims: tuple[int, ...], element_type: ElementType) -> FrameBuffer:
        """Get a zeroed buffer with ``dims`` in (x, y) order.

        A free buffer of the same byte size is reused when available;
        otherwise a new one is created within the pool limits.

        Raises
        ------
            ConfigError: If ``element_type`` is not a valid element type
            BufferAllocationError: If a dimension is not positive or a limit is reached
        """
        element_type = ElementType.from_value(element_type)
        dims = tuple(int(d) for d in dims)
        if not dims or len(dims) > 2 or any(d < 1 for d in dims):
            msg = f"Invalid frame dimensions: {dims}"
            raise BufferAllocationError(msg)

        shape = tuple(reversed(dims))
        nbytes = int(np.prod(shape)) * element_type.dtype.itemsize

        with self._lock:
            raw = self._take_free(nbytes)
            if raw is None:
                if self.max_buffers and self._num_buffers >= self.max_buffers:
                    msg = f"Buffer pool exhausted ({self._num_buffers} of {self.max_buffers} buffers)"
                    raise BufferAllocationError(msg)
                if self.max_memory and self._memory_used + nbytes > self.max_memory:
                    self._discard_free()
                if self.max_memory and self._memory_used + nbytes > self.max_memory:
                    msg = (
                        f"Buffer pool memory limit reached: {self._memory_used} + {nbytes}"
                        f" > {self.max_memory} bytes"
                    )
                    raise BufferAllocationError(msg)
                raw = np.empty(nbytes, dtype=np.uint8)
                self._num_buffers += 1
                self._memory_used += nbytes
            self._in_use.add(id(raw))

        data = raw.view(element_type.dtype).reshape(shape)
        data.fill(0)
        return FrameBuffer(data=data, element_type=element_type)

    def release(self, buffer: FrameBuffer) -> None:
        """Return ``buffer`` to the free list; releasing twice is an error."""
        raw = self._raw(buffer.data)
        with self._lock:
            if id(raw) not in self._in_use:
                msg = "Buffer was not allocated by this pool or was already released"
                raise BufferAllocationError(msg)
            self._in_use.discard(id(raw))
            self._free.append(raw)

    def copy(self, buffer: FrameBuffer) -> FrameBuffer:
        """Allocate a new buffer holding the same data and metadata as ``buffer``."""
        duplicate = self.allocate(buffer.dims, buffer.element_type)
        np.copyto(duplicate.data, buffer.data)
        duplicate.unique_id = buffer.unique_id
        duplicate.timestamp = buffer.timestamp
        duplicate.attributes = dict(buffer.attributes)
        return duplicate

    def report(self) -> str:
        return (
            f"NDArrayPool: {self.num_buffers} buffers ({self.num_free} free),"
            f" {self.memory_used} bytes, max_buffers={self.max_buffers}, max_memory={self.max_memory}"
        )

    def _take_free(self, nbytes: int) -> np.ndarray | None:
        for i, raw in enumerate(self._free):
            if raw.nbytes == nbytes:
                return self._free.pop(i)
        return None

    def _discard_free(self) -> None:
        for raw in self._free:
            self._memory_used -= raw.nbytes
            self._num_buffers -= 1
        self._free.clear()

    @staticmethod
    def _raw(data: np.ndarray) -> np.ndarray:
        base = data
        while base.base is not None:
            base = base.base
        return base


class CallbackSink:
    """Sink that hands every frame to registered callables, then releases it.

    Callbacks run on the producer thread and must not keep a reference to the
    buffer; a callback that raises is logged and the remaining ones still run.
    """

    def __init__(self, pool: BufferPool) -> None:
        self.pool = pool
        self._callbacks: list[Callable[[FrameBuffer], None]] = []

    def register(self, callback: Callable[[FrameBuffer], None]) -> None:
        self._callbacks.append(callback)

    def unregister(self, callback: Callable[[FrameBuffer], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def publish(self, buffer: FrameBuffer, unique_id: int, timestamp: float) -> None:
        buffer.unique_id = unique_id
        buffer.timestamp = timestamp
        try:
            for callback in list(self._callbacks):
                try:
                    callback(buffer)
                except Exception:
                    _logger.exception("Frame callback %r failed for frame %d", callback, unique_id)
        finally:
            self.pool.release(buffer)


class QueueSink:
    """Sink that queues frames for a consumer thread.

    When the queue is full the new frame is dropped, released to the pool and
    counted in :attr:`dropped`. Consumers take frames with :meth:`get` and
    must call :meth:`done` on each one.

    Args:
        pool: Pool the buffers are returned to
        maxsize: Queue capacity (0 for unbounded)
    """

    def __init__(self, pool: BufferPool, maxsize: int = 16) -> None:
        self.pool = pool
        self.dropped = 0
        self._queue: queue.Queue[FrameBuffer] = queue.Queue(maxsize=maxsize)

    def publish(self, buffer: FrameBuffer, unique_id: int, timestamp: float) -> None:
        buffer.unique_id = unique_id
        buffer.timestamp = timestamp
        try:
            self._queue.put_nowait(buffer)
        except queue.Full:
            self.dropped += 1
            _logger.debug("Queue full, dropped frame %d", unique_id)
            self.pool.release(buffer)

    def get(self, timeout: float | None = None) -> FrameBuffer:
        """Next queued frame.

        Raises
        ------
            queue.Empty: If no frame arrives within ``timeout`` seconds
        """
        return self._queue.get(timeout=timeout)

    def done(self, buffer: FrameBuffer) -> None:
        """Give a consumed frame back to the pool."""
        self.pool.release(buffer)

    def qsize(self) -> int:
        return self._queue.qsize()

    def drain(self) -> list[FrameBuffer]:
        """Remove and return all queued frames without releasing them."""
        frames = []
        while True:
            try:
                frames.append(self._queue.get_nowait())
            except queue.Empty:
                return frames


__all__ = ["CallbackSink", "NDArrayPool", "QueueSink"]
