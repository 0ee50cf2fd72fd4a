"""Cauchy-Lorentz lineshapes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.registry import register_shape
from simpeaks.core.lineshapes.utils import as_bins, clamp_fwhm

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray


def lorentzian(dx: FloatArray, fwhm: float) -> FloatArray:
    """Cauchy density: (1/πγ) γ²/(dx²+γ²) with γ = fwhm/2."""
    gamma = clamp_fwhm(fwhm) / 2.0
    gamma2 = gamma * gamma
    return (1.0 / (np.pi * gamma)) * (gamma2 / (dx * dx + gamma2))


def lorentzian_2d(dx: FloatArray, dy: FloatArray, fwhm: float) -> FloatArray:
    """Symmetric bivariate Cauchy density: (1/2π) γ/(dx²+dy²+γ²)^(3/2)."""
    gamma = clamp_fwhm(fwhm) / 2.0
    return (1.0 / (2.0 * np.pi)) * (gamma / np.power(dx * dx + dy * dy + gamma * gamma, 1.5))


@register_shape(PeakType1D.LORENTZ)
class Lorentzian(ShapeEvaluator):
    """Lorentzian peak."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        return lorentzian(as_bins(x) - peak.position_x, peak.fwhm_x)


@register_shape(PeakType2D.LORENTZ)
class Lorentzian2D(ShapeEvaluator):
    """Bivariate Lorentzian peak.

    Only the symmetric closed form exists, so the X FWHM is used for both axes.
    """

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        return lorentzian_2d(
            as_bins(x) - peak.position_x, as_bins(y) - peak.position_y, peak.fwhm_x
        )
