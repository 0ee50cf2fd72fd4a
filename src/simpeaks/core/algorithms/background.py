"""Per-axis background profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.domain.signal import BackgroundKind

if TYPE_CHECKING:
    from simpeaks.core.domain.signal import BackgroundSpec
    from simpeaks.core.shared.typing import ArrayLike, FloatArray


def background_value(spec: BackgroundSpec, bins: ArrayLike) -> FloatArray:
    """Background along one axis at the given bin coordinates.

    Args:
        spec: Background settings for the axis
        bins: Bin indices (any shape)

    Returns
    -------
        Background values, same shape as ``bins``
    """
    u = np.asarray(bins, dtype=np.float64) - spec.shift
    if spec.kind == BackgroundKind.POLYNOMIAL:
        return spec.c0 + u * spec.c1 + u * u * spec.c2 + u * u * u * spec.c3
    if spec.kind == BackgroundKind.EXPONENTIAL:
        return spec.c0 + spec.c1 * np.exp(u * spec.c2)
    return np.zeros_like(u)


def background_frame(
    spec_x: BackgroundSpec, spec_y: BackgroundSpec | None, size_x: int, size_y: int = 1
) -> FloatArray:
    """Background for a whole frame.

    In 2D the X and Y profiles are summed, not multiplied: a row-wise plus a
    column-wise offset rather than a joint surface.

    Returns
    -------
        Array of shape ``(size_x,)`` when ``spec_y`` is None, else ``(size_y, size_x)``
    """
    values = background_value(spec_x, np.arange(size_x))
    if spec_y is None:
        return values
    column = background_value(spec_y, np.arange(size_y))
    return values[np.newaxis, :] + column[:, np.newaxis]
