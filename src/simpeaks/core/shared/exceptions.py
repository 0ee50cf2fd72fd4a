"""Exception taxonomy for SimPeaks.

A small hierarchy so callers, and the acquisition thread in particular, can
tell configuration problems apart from resource exhaustion and handle each
precisely.
"""

from __future__ import annotations


class SimPeaksError(Exception):
    """Base class for all SimPeaks-specific exceptions."""


class ConfigError(SimPeaksError):
    """Configuration errors (invalid element type, geometry, config file)."""


class ParameterError(SimPeaksError):
    """Parameter store errors (unknown key, bad index, wrong value type)."""


class BufferAllocationError(SimPeaksError):
    """Frame buffer could not be allocated (pool exhausted, memory limit)."""


__all__ = [
    "BufferAllocationError",
    "ConfigError",
    "ParameterError",
    "SimPeaksError",
]
