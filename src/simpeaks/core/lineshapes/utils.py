"""Utilities shared by the lineshape modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.constants import MIN_FWHM, ZERO_CHECK

if TYPE_CHECKING:
    from simpeaks.core.shared.typing import ArrayLike, FloatArray


def clamp_fwhm(fwhm: float) -> float:
    """Clamp a FWHM to at least one bin."""
    return max(MIN_FWHM, fwhm)


def zero_check(value: float) -> float:
    """Return ``value``, or 1.0 if it lies within ``ZERO_CHECK`` of zero."""
    if -ZERO_CHECK < value < ZERO_CHECK:
        return 1.0
    return value


def decorrelation(rho: float) -> float:
    """``1 - rho**2`` for a correlation coefficient, kept away from zero."""
    rho = min(1.0, max(-1.0, rho))
    return max(1.0 - rho * rho, ZERO_CHECK)


def as_bins(values: ArrayLike) -> FloatArray:
    """Bin coordinates as a float array (scalars become 0-d arrays)."""
    return np.asarray(values, dtype=np.float64)


def smoothstep(t: FloatArray) -> FloatArray:
    """Quintic smoothstep ``6t^5 - 15t^4 + 10t^3`` (``t`` expected in [0, 1])."""
    return t * t * t * (t * (6.0 * t - 15.0) + 10.0)


def edge_side(bins: FloatArray, position: float) -> FloatArray:
    """+1 for bins on or left of the truncated position, -1 to the right."""
    return np.where(bins <= np.trunc(position), 1.0, -1.0)
