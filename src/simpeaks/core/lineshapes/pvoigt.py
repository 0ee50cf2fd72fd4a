"""Pseudo-Voigt lineshapes.

The Voigt profile (a Gaussian convolved with a Lorentzian) has no closed
form, so it is approximated by a linear mix of the two::

    V = (1 - η) G + η L

with the mixing fraction η taken from the Thompson-Cox-Hastings
approximation of the total FWHM::

    f = (fG⁵ + p1 fG⁴fL + p2 fG³fL² + p3 fG²fL³ + p4 fG fL⁴ + fL⁵)^(1/5)
    η = e1 (fL/f) - e2 (fL/f)² + e3 (fL/f)³

Both components currently share one FWHM; the two-width form is kept so a
separate Lorentzian width can be introduced without touching ``voigt_eta``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from simpeaks.core.constants import PV_E1, PV_E2, PV_E3, PV_P1, PV_P2, PV_P3, PV_P4
from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.gaussian import gaussian, gaussian_2d
from simpeaks.core.lineshapes.lorentzian import lorentzian, lorentzian_2d
from simpeaks.core.lineshapes.registry import register_shape
from simpeaks.core.lineshapes.utils import as_bins, clamp_fwhm

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray


def voigt_eta(fwhm_g: float, fwhm_l: float) -> float:
    """Lorentzian mixing fraction for Gaussian/Lorentzian widths ``fwhm_g``/``fwhm_l``."""
    fwhm_g = clamp_fwhm(fwhm_g)
    fwhm_l = clamp_fwhm(fwhm_l)
    fwhm_sum = (
        fwhm_g**5
        + PV_P1 * fwhm_g**4 * fwhm_l
        + PV_P2 * fwhm_g**3 * fwhm_l**2
        + PV_P3 * fwhm_g**2 * fwhm_l**3
        + PV_P4 * fwhm_g * fwhm_l**4
        + fwhm_l**5
    )
    ratio = fwhm_l / fwhm_sum**0.2
    return PV_E1 * ratio - PV_E2 * ratio**2 + PV_E3 * ratio**3


@register_shape(PeakType1D.PSEUDOVOIGT)
class PseudoVoigt(ShapeEvaluator):
    """Pseudo-Voigt peak."""

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        dx = as_bins(x) - peak.position_x
        eta = voigt_eta(peak.fwhm_x, peak.fwhm_x)
        return (1.0 - eta) * gaussian(dx, peak.fwhm_x) + eta * lorentzian(dx, peak.fwhm_x)


@register_shape(PeakType2D.PSEUDOVOIGT)
class PseudoVoigt2D(ShapeEvaluator):
    """Bivariate pseudo-Voigt peak.

    The Gaussian part keeps its X/Y widths and correlation; η is computed from
    the mean of the two widths.
    """

    ndim = 2

    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        dx = as_bins(x) - peak.position_x
        dy = as_bins(y) - peak.position_y
        fwhm_av = (clamp_fwhm(peak.fwhm_x) + clamp_fwhm(peak.fwhm_y)) / 2.0
        eta = voigt_eta(fwhm_av, fwhm_av)
        gauss = gaussian_2d(dx, dy, peak.fwhm_x, peak.fwhm_y, peak.correlation)
        lorentz = lorentzian_2d(dx, dy, peak.fwhm_x)
        return (1.0 - eta) * gauss + eta * lorentz
