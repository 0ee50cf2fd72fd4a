"""Peak shape library.

One module per shape family; each registers its 1D and 2D evaluators with
the registry on import. Use :func:`evaluate` to render a shape and
:func:`normalization_scale` to scale it to the requested amplitude.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.lineshapes.base import ShapeEvaluator
from simpeaks.core.lineshapes.gaussian import Gaussian, Gaussian2D, gaussian, gaussian_2d
from simpeaks.core.lineshapes.geometric import Cone2D, Pyramid2D, Square, Square2D, Triangle
from simpeaks.core.lineshapes.laplace import Laplace, Laplace2D, laplace, laplace_2d
from simpeaks.core.lineshapes.lorentzian import Lorentzian, Lorentzian2D, lorentzian, lorentzian_2d
from simpeaks.core.lineshapes.moffat import Moffat, Moffat2D, moffat, moffat_alpha
from simpeaks.core.lineshapes.normalization import normalization_scale, peak_height
from simpeaks.core.lineshapes.pvoigt import PseudoVoigt, PseudoVoigt2D, voigt_eta
from simpeaks.core.lineshapes.registry import SHAPES, get_shape, list_shapes, register_shape
from simpeaks.core.lineshapes.smoothstep import SmoothStep, SmoothStep2D, ramp

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec, PeakType
    from simpeaks.core.shared.typing import ArrayLike, FloatArray


def evaluate(
    shape: PeakType, peak: PeakSpec, x: ArrayLike, y: ArrayLike | None = None
) -> FloatArray:
    """Evaluate ``shape`` with the settings of ``peak`` at bins ``x`` (and ``y`` for 2D).

    ``NONE`` evaluates to zero everywhere.
    """
    if shape == 0:
        bins = np.asarray(x, dtype=np.float64)
        if y is not None:
            bins = np.broadcast_arrays(bins, np.asarray(y, dtype=np.float64))[0]
        return np.zeros_like(bins)
    return get_shape(shape)().evaluate(peak, x, y)


__all__ = [
    "SHAPES",
    "Cone2D",
    "Gaussian",
    "Gaussian2D",
    "Laplace",
    "Laplace2D",
    "Lorentzian",
    "Lorentzian2D",
    "Moffat",
    "Moffat2D",
    "PseudoVoigt",
    "PseudoVoigt2D",
    "Pyramid2D",
    "ShapeEvaluator",
    "SmoothStep",
    "SmoothStep2D",
    "Square",
    "Square2D",
    "Triangle",
    "evaluate",
    "gaussian",
    "gaussian_2d",
    "get_shape",
    "laplace",
    "laplace_2d",
    "list_shapes",
    "lorentzian",
    "lorentzian_2d",
    "moffat",
    "moffat_alpha",
    "normalization_scale",
    "peak_height",
    "ramp",
    "register_shape",
    "voigt_eta",
]
