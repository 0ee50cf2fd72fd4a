"""Pytest fixtures for SimPeaks tests."""

import time

import numpy as np
import pytest

from simpeaks.core.domain.frame import ElementType
from simpeaks.core.domain.peaks import PeakSpec, PeakType1D, PeakType2D
from simpeaks.core.frames import NDArrayPool
from simpeaks.core.params.keys import ParamKey
from simpeaks.core.params.library import ParameterLibrary


class RecordingSink:
    """Output sink that keeps a copy of every frame and releases the buffer."""

    def __init__(self, pool):
        self.pool = pool
        self.frames = []

    def publish(self, buffer, unique_id, timestamp):
        self.frames.append(
            {
                "unique_id": unique_id,
                "timestamp": timestamp,
                "dims": buffer.dims,
                "dtype": buffer.data.dtype,
                "data": buffer.data.copy(),
            }
        )
        self.pool.release(buffer)


def _wait_for(predicate, timeout=5.0, interval=0.005):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def wait_for():
    """Poll a predicate until it holds or the timeout expires."""
    return _wait_for


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def pool():
    """Unlimited buffer pool."""
    return NDArrayPool()


@pytest.fixture
def sink(pool):
    """Sink recording published frames."""
    return RecordingSink(pool)


@pytest.fixture
def store():
    """Parameter library for a small 2D float64 detector with two peak slots."""
    params = ParameterLibrary(max_peaks=2)
    params.set_int(ParamKey.SIZE_X, 16)
    params.set_int(ParamKey.SIZE_Y, 8)
    params.set_int(ParamKey.DATA_TYPE, ElementType.FLOAT64)
    params.set_float(ParamKey.ACQUIRE_PERIOD, 0.01)
    return params


@pytest.fixture
def gaussian_1d():
    """Unit-amplitude 1D Gaussian centered on bin 50."""
    return PeakSpec(PeakType1D.GAUSSIAN, position_x=50.0, fwhm_x=10.0, amplitude=1.0)


@pytest.fixture
def gaussian_2d():
    """Unit-amplitude 2D Gaussian centered on bin (20, 15)."""
    return PeakSpec(
        PeakType2D.GAUSSIAN, position_x=20.0, position_y=15.0, fwhm_x=8.0, fwhm_y=6.0, amplitude=1.0
    )


@pytest.fixture
def sample_config_file(tmp_path):
    """Create a sample TOML configuration file."""
    config_path = tmp_path / "simpeaks.toml"
    content = """
[detector]
name = "TEST"
max_size_x = 64
max_size_y = 32
max_peaks = 2
data_type = "float64"

[acquisition]
image_mode = "multiple"
num_images = 3
acquire_period = 0.0

[background.x]
type = "polynomial"
c0 = 5.0

[[peaks]]
shape = "gaussian"
position_x = 20.0
position_y = 10.0
fwhm_x = 6.0
fwhm_y = 4.0
amplitude = 100.0
"""
    config_path.write_text(content)
    return config_path
