"""Smooth-step profiles.

Not a peak, but useful for edges: the shape rises from 0 to 1 across
``fwhm`` bins centered on the position, following the quintic smoothstep.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.registry import register_shape
from simpeaks.core.lineshapes.utils import as_bins, clamp_fwhm, smoothstep

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray


def ramp(bins: FloatArray, position: float, fwhm: float) -> FloatArray:
    """Linear ramp from 0 at ``position - fwhm/2`` to 1 at ``position + fwhm/2``."""
    fwhm = clamp_fwhm(fwhm)
    low_edge = position - fwhm / 2.0
    return np.clip((bins - low_edge) / fwhm, 0.0, 1.0)


@register_shape(PeakType1D.SMOOTHSTEP)
class SmoothStep(ShapeEvaluator):
    """Smooth step along X."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        return smoothstep(ramp(as_bins(x), peak.position_x, peak.fwhm_x))


@register_shape(PeakType2D.SMOOTHSTEP)
class SmoothStep2D(ShapeEvaluator):
    """Diagonal smooth step driven by the mean of the X and Y ramps."""

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        t_x = ramp(as_bins(x), peak.position_x, peak.fwhm_x)
        t_y = ramp(as_bins(y), peak.position_y, peak.fwhm_y)
        return smoothstep((t_x + t_y) / 2.0)
