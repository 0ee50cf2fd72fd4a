"""Test the buffer pool and output sinks."""

import logging
import queue

import numpy as np
import pytest

from simpeaks.core.domain.frame import ElementType, FrameBuffer
from simpeaks.core.frames import CallbackSink, NDArrayPool, QueueSink
from simpeaks.core.shared.exceptions import BufferAllocationError, ConfigError


class TestElementType:
    """Tests for ElementType resolution."""

    def test_from_ordinal(self):
        assert ElementType.from_value(3) is ElementType.UINT16
        assert ElementType.UINT16.dtype == np.uint16

    def test_from_name(self):
        assert ElementType.from_value(" Float32 ") is ElementType.FLOAT32

    @pytest.mark.parametrize("value", [10, -1, "complex128"])
    def test_invalid_raises(self, value):
        with pytest.raises(ConfigError):
            ElementType.from_value(value)

    def test_is_integer(self):
        assert ElementType.UINT64.is_integer
        assert not ElementType.FLOAT32.is_integer


class TestNDArrayPool:
    """Tests for NDArrayPool."""

    def test_allocate_2d_shape(self, pool):
        """Dims are given in (x, y) order; data is row-major (y, x)."""
        buffer = pool.allocate((16, 8), ElementType.INT16)
        assert buffer.data.shape == (8, 16)
        assert buffer.data.dtype == np.int16
        assert buffer.dims == (16, 8)
        assert buffer.size_x == 16
        assert buffer.size_y == 8

    def test_allocate_1d_shape(self, pool):
        buffer = pool.allocate((32,), ElementType.FLOAT64)
        assert buffer.data.shape == (32,)
        assert buffer.size_y == 1

    def test_allocated_buffer_is_zeroed(self, pool):
        buffer = pool.allocate((4, 4), ElementType.FLOAT64)
        buffer.data[:] = 7.0
        pool.release(buffer)
        reused = pool.allocate((4, 4), ElementType.FLOAT64)
        assert not reused.data.any()

    def test_reuses_buffer_of_same_byte_size(self, pool):
        """A released 8x4 float32 buffer serves a 4x4 float64 request."""
        first = pool.allocate((8, 4), ElementType.FLOAT32)
        pool.release(first)
        assert pool.num_free == 1

        second = pool.allocate((4, 4), ElementType.FLOAT64)

        assert pool.num_buffers == 1
        assert pool.num_free == 0
        assert np.shares_memory(first.data, second.data)

    def test_memory_accounting(self, pool):
        pool.allocate((10,), ElementType.UINT8)
        pool.allocate((10,), ElementType.FLOAT64)
        assert pool.memory_used == 90
        assert pool.num_buffers == 2

    @pytest.mark.parametrize("dims", [(0,), (4, 0), (), (2, 2, 2), (-3,)])
    def test_invalid_dims_raise(self, pool, dims):
        with pytest.raises(BufferAllocationError, match="Invalid frame dimensions"):
            pool.allocate(dims, ElementType.UINT8)

    def test_invalid_element_type_raises(self, pool):
        with pytest.raises(ConfigError):
            pool.allocate((4,), 12)

    def test_buffer_limit(self):
        pool = NDArrayPool(max_buffers=2)
        first = pool.allocate((4,), ElementType.UINT8)
        pool.allocate((4,), ElementType.UINT8)
        with pytest.raises(BufferAllocationError, match="exhausted"):
            pool.allocate((4,), ElementType.UINT8)

        pool.release(first)
        assert pool.allocate((4,), ElementType.UINT8) is not None

    def test_memory_limit(self):
        pool = NDArrayPool(max_memory=100)
        pool.allocate((60,), ElementType.UINT8)
        with pytest.raises(BufferAllocationError, match="memory limit"):
            pool.allocate((60,), ElementType.UINT8)

    def test_memory_limit_discards_free_buffers(self):
        """Free buffers of the wrong size are dropped to make room."""
        pool = NDArrayPool(max_memory=100)
        pool.release(pool.allocate((60,), ElementType.UINT8))

        buffer = pool.allocate((80,), ElementType.UINT8)

        assert buffer.data.nbytes == 80
        assert pool.memory_used == 80
        assert pool.num_free == 0

    def test_double_release_raises(self, pool):
        buffer = pool.allocate((4,), ElementType.UINT8)
        pool.release(buffer)
        with pytest.raises(BufferAllocationError, match="already released"):
            pool.release(buffer)

    def test_foreign_buffer_release_raises(self, pool):
        foreign = FrameBuffer(np.zeros(4, dtype=np.uint8), ElementType.UINT8)
        with pytest.raises(BufferAllocationError):
            pool.release(foreign)

    def test_copy(self, pool):
        buffer = pool.allocate((3, 2), ElementType.INT32)
        buffer.data[:] = np.arange(6).reshape(2, 3)
        buffer.unique_id = 9
        buffer.timestamp = 1.5

        duplicate = pool.copy(buffer)

        np.testing.assert_array_equal(duplicate.data, buffer.data)
        assert not np.shares_memory(duplicate.data, buffer.data)
        assert duplicate.unique_id == 9
        assert duplicate.timestamp == 1.5
        assert duplicate.element_type is ElementType.INT32

    def test_report(self, pool):
        pool.allocate((4,), ElementType.UINT8)
        assert "1 buffers" in pool.report()


class TestCallbackSink:
    """Tests for CallbackSink."""

    def test_callbacks_receive_stamped_frame(self, pool):
        sink = CallbackSink(pool)
        seen = []
        sink.register(lambda buffer: seen.append((buffer.unique_id, buffer.timestamp)))

        sink.publish(pool.allocate((4,), ElementType.UINT8), 3, 12.5)

        assert seen == [(3, 12.5)]
        assert pool.num_free == 1

    def test_failing_callback_is_logged(self, pool, caplog):
        """The remaining callbacks still run and the buffer is released."""
        sink = CallbackSink(pool)
        seen = []

        def broken(buffer):
            raise RuntimeError("boom")

        sink.register(broken)
        sink.register(lambda buffer: seen.append(buffer.unique_id))

        with caplog.at_level(logging.ERROR, logger="simpeaks.frames"):
            sink.publish(pool.allocate((4,), ElementType.UINT8), 1, 0.0)

        assert seen == [1]
        assert "failed for frame 1" in caplog.text
        assert pool.num_free == 1

    def test_unregister(self, pool):
        sink = CallbackSink(pool)
        seen = []
        callback = seen.append
        sink.register(callback)
        sink.unregister(callback)
        sink.publish(pool.allocate((4,), ElementType.UINT8), 1, 0.0)
        assert seen == []


class TestQueueSink:
    """Tests for QueueSink."""

    def test_publish_and_get(self, pool):
        sink = QueueSink(pool)
        sink.publish(pool.allocate((4,), ElementType.UINT8), 5, 2.0)

        frame = sink.get(timeout=1.0)

        assert frame.unique_id == 5
        assert frame.timestamp == 2.0
        sink.done(frame)
        assert pool.num_free == 1

    def test_full_queue_drops_frame(self, pool):
        sink = QueueSink(pool, maxsize=1)
        sink.publish(pool.allocate((4,), ElementType.UINT8), 1, 0.0)
        sink.publish(pool.allocate((4,), ElementType.UINT8), 2, 0.0)

        assert sink.dropped == 1
        assert sink.qsize() == 1
        assert pool.num_free == 1
        assert sink.get(timeout=1.0).unique_id == 1

    def test_get_times_out(self, pool):
        with pytest.raises(queue.Empty):
            QueueSink(pool).get(timeout=0.01)

    def test_drain(self, pool):
        sink = QueueSink(pool, maxsize=0)
        for uid in (1, 2, 3):
            sink.publish(pool.allocate((2,), ElementType.UINT8), uid, 0.0)
        assert [frame.unique_id for frame in sink.drain()] == [1, 2, 3]
        assert sink.qsize() == 0
