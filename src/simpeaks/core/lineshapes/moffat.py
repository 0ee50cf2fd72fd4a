"""Moffat lineshapes.

The Moffat profile is set by the α and β "seeing" parameters. β comes from
``param1`` and α is derived so the profile has the requested FWHM. Large β
(>> 1) approaches a Gaussian; β near 1 gives heavy exponential-like wings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.registry import register_shape
from simpeaks.core.lineshapes.utils import as_bins, clamp_fwhm, zero_check

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray


def moffat_alpha(fwhm: float, beta: float) -> float:
    """α such that a Moffat profile with shape ``beta`` has the given FWHM."""
    return clamp_fwhm(fwhm) / (2.0 * np.sqrt(np.power(2.0, 1.0 / beta) - 1.0))


def moffat(r2: FloatArray, fwhm: float, beta: float) -> FloatArray:
    """Moffat density ((β-1)/(πα²)) (1 + r²/α²)^-β for squared offsets ``r2``."""
    beta = zero_check(beta)
    alpha2 = moffat_alpha(fwhm, beta) ** 2
    return ((beta - 1.0) / (np.pi * alpha2)) * np.power(1.0 + r2 / alpha2, -beta)


@register_shape(PeakType1D.MOFFAT)
class Moffat(ShapeEvaluator):
    """Moffat peak; ``param1`` is β."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        dx = as_bins(x) - peak.position_x
        return moffat(dx * dx, peak.fwhm_x, peak.param1)


@register_shape(PeakType2D.MOFFAT)
class Moffat2D(ShapeEvaluator):
    """Symmetric bivariate Moffat peak using the X FWHM; ``param1`` is β."""

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        dx = as_bins(x) - peak.position_x
        dy = as_bins(y) - peak.position_y
        return moffat(dx * dx + dy * dy, peak.fwhm_x, peak.param1)
