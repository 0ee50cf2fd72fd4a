"""Core of SimPeaks: lineshapes, frame synthesis and the acquisition loop."""

from simpeaks.core.shared.exceptions import (
    BufferAllocationError,
    ConfigError,
    ParameterError,
    SimPeaksError,
)

__all__ = ["BufferAllocationError", "ConfigError", "ParameterError", "SimPeaksError"]
