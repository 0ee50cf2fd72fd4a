"""Amplitude normalization.

The shapes return densities whose native peak height depends on the width
(a wide Gaussian is lower than a narrow one). The scale computed here makes
the rendered value at the peak center equal to the requested amplitude.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from simpeaks.core.constants import ZERO_CHECK
from simpeaks.core.lineshapes.registry import get_shape

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec


def peak_height(peak: PeakSpec) -> float:
    """Unnormalized value of the peak's shape at its own center."""
    return get_shape(peak.shape)().center_value(peak)


def normalization_scale(peak: PeakSpec) -> float:
    """Factor mapping the shape's center height onto ``peak.amplitude``.

    A flat or vanishing profile (height within ``ZERO_CHECK`` of zero) is
    left unscaled.
    """
    h_max = peak_height(peak)
    if abs(h_max) < ZERO_CHECK:
        return 1.0
    return peak.amplitude / h_max
