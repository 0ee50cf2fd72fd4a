"""Gaussian lineshapes (normal and bivariate normal densities)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.constants import SQRT_2PI, TWO_SQRT_2LN2
from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.registry import register_shape
from simpeaks.core.lineshapes.utils import as_bins, clamp_fwhm, decorrelation

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray


def gaussian(dx: FloatArray, fwhm: float) -> FloatArray:
    """Normal density with the given FWHM: 1/(σ√(2π)) exp(-dx²/(2σ²))."""
    sigma = clamp_fwhm(fwhm) / TWO_SQRT_2LN2
    return (1.0 / (sigma * SQRT_2PI)) * np.exp(-(dx * dx) / (2.0 * sigma * sigma))


def gaussian_2d(
    dx: FloatArray, dy: FloatArray, fwhm_x: float, fwhm_y: float, rho: float
) -> FloatArray:
    """Bivariate normal density with per-axis FWHM and correlation ``rho``."""
    sig_x = clamp_fwhm(fwhm_x) / TWO_SQRT_2LN2
    sig_y = clamp_fwhm(fwhm_y) / TWO_SQRT_2LN2
    one_m_rho2 = decorrelation(rho)

    amp = 1.0 / (2.0 * np.pi * sig_x * sig_y * np.sqrt(one_m_rho2))
    factor = -1.0 / (2.0 * one_m_rho2)
    u = dx / sig_x
    v = dy / sig_y
    return amp * np.exp(factor * (u * u - 2.0 * rho * u * v + v * v))


@register_shape(PeakType1D.GAUSSIAN)
class Gaussian(ShapeEvaluator):
    """Gaussian peak."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        return gaussian(as_bins(x) - peak.position_x, peak.fwhm_x)


@register_shape(PeakType2D.GAUSSIAN)
class Gaussian2D(ShapeEvaluator):
    """Bivariate Gaussian peak, optionally skewed by the correlation."""

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        return gaussian_2d(
            as_bins(x) - peak.position_x,
            as_bins(y) - peak.position_y,
            peak.fwhm_x,
            peak.fwhm_y,
            peak.correlation,
        )
