"""Laplace (double exponential) lineshapes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.constants import TWO_LN2
from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.registry import register_shape
from simpeaks.core.lineshapes.utils import as_bins, clamp_fwhm, decorrelation

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray

_SQRT2 = np.sqrt(2.0)


def laplace(dx: FloatArray, fwhm: float) -> FloatArray:
    """Laplace density 1/(2b) exp(-|dx|/b), with b = fwhm / (2 ln 2).

    Half the height is reached at |dx| = b ln 2, hence the scale factor.
    """
    b = clamp_fwhm(fwhm) / TWO_LN2
    return (1.0 / (2.0 * b)) * np.exp(-np.abs(dx) / b)


def laplace_2d(
    dx: FloatArray, dy: FloatArray, fwhm_x: float, fwhm_y: float, rho: float
) -> FloatArray:
    """Bivariate Laplace approximated by a decaying exponential.

    The exact density involves a modified Bessel function of the second kind;
    the exponential in the Mahalanobis distance is close enough for a
    simulated peak. Each axis uses σ = √2·b.
    """
    sig_x = _SQRT2 * (clamp_fwhm(fwhm_x) / TWO_LN2)
    sig_y = _SQRT2 * (clamp_fwhm(fwhm_y) / TWO_LN2)
    one_m_rho2 = decorrelation(rho)

    amp = 1.0 / (np.pi * sig_x * sig_y * np.sqrt(one_m_rho2))
    u = dx / sig_x
    v = dy / sig_y
    quad = u * u - 2.0 * rho * u * v + v * v
    return amp * np.exp(-np.sqrt(2.0 * np.maximum(quad, 0.0) / one_m_rho2))


@register_shape(PeakType1D.LAPLACE)
class Laplace(ShapeEvaluator):
    """Laplace peak."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        return laplace(as_bins(x) - peak.position_x, peak.fwhm_x)


@register_shape(PeakType2D.LAPLACE)
class Laplace2D(ShapeEvaluator):
    """Bivariate Laplace peak."""

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        return laplace_2d(
            as_bins(x) - peak.position_x,
            as_bins(y) - peak.position_y,
            peak.fwhm_x,
            peak.fwhm_y,
            peak.correlation,
        )
