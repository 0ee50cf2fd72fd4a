"""Piecewise geometric shapes: square, triangle, pyramid and elliptical cone.

These are not probability densities; they have unit height (the cone is
``fwhm_x + fwhm_y`` high) and are scaled to the requested amplitude like any
other shape. Edges are decided against truncated positions so a peak at a
fractional position still lines up with whole bins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.registry import register_shape
from simpeaks.core.lineshapes.utils import as_bins, clamp_fwhm, edge_side

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray


def _inside(bins: FloatArray, position: float, fwhm: float) -> FloatArray:
    low = np.trunc(position - fwhm / 2.0)
    high = np.trunc(position + fwhm / 2.0)
    return (bins > low) & (bins <= high)


@register_shape(PeakType1D.SQUARE)
class Square(ShapeEvaluator):
    """Unit-height box ``fwhm_x`` bins wide."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        inside = _inside(as_bins(x), peak.position_x, clamp_fwhm(peak.fwhm_x))
        return inside.astype(np.float64)


@register_shape(PeakType1D.TRIANGLE)
class Triangle(ShapeEvaluator):
    """Isosceles triangle of unit height whose sides reach zero ``fwhm_x`` from the center."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        bins = as_bins(x)
        slope = edge_side(bins, peak.position_x) / clamp_fwhm(peak.fwhm_x)
        return np.maximum(0.0, 1.0 + slope * (bins - peak.position_x))


@register_shape(PeakType2D.SQUARE)
class Square2D(ShapeEvaluator):
    """Unit-height cuboid, a ``fwhm_x`` x ``fwhm_y`` rectangle seen from the top."""

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        inside_x = _inside(as_bins(x), peak.position_x, clamp_fwhm(peak.fwhm_x))
        inside_y = _inside(as_bins(y), peak.position_y, clamp_fwhm(peak.fwhm_y))
        return (inside_x & inside_y).astype(np.float64)


@register_shape(PeakType2D.PYRAMID)
class Pyramid2D(ShapeEvaluator):
    """Four-sided pyramid of unit height."""

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        bins_x = as_bins(x)
        bins_y = as_bins(y)
        b = edge_side(bins_x, peak.position_x) / clamp_fwhm(peak.fwhm_x)
        c = edge_side(bins_y, peak.position_y) / clamp_fwhm(peak.fwhm_y)
        height = 1.0 + b * (bins_x - peak.position_x) + c * (bins_y - peak.position_y)
        return np.maximum(0.0, height)


@register_shape(PeakType2D.CONE)
class Cone2D(ShapeEvaluator):
    """Elliptical cone with semi-axes ``fwhm_x``/``fwhm_y`` and height ``fwhm_x + fwhm_y``."""

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        fwhm_x = clamp_fwhm(peak.fwhm_x)
        fwhm_y = clamp_fwhm(peak.fwhm_y)
        apex = fwhm_x + fwhm_y

        dx = as_bins(x) - peak.position_x
        dy = as_bins(y) - peak.position_y
        d = np.sqrt(dx * dx + dy * dy)

        with np.errstate(divide="ignore", invalid="ignore"):
            theta = np.arcsin(dy / d)
            # Radius of the base ellipse in the direction of this bin
            r = (fwhm_x * fwhm_y) / np.sqrt(
                (fwhm_y * np.cos(theta)) ** 2 + (fwhm_x * np.sin(theta)) ** 2
            )
            height = np.where(d == 0.0, apex, (r - d) * (apex / r))
        return np.maximum(0.0, height)
