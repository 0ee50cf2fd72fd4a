"""Peak descriptors and the shape enumerations they select from.

The integer values of :class:`PeakType1D` and :class:`PeakType2D` follow the
order in which the shape menus are presented to users, so they double as the
values written to the ``PEAK_TYPE_1D``/``PEAK_TYPE_2D`` parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from simpeaks.core.constants import MIN_FWHM


class PeakType1D(IntEnum):
    """1D peak shapes, in menu order."""

    NONE = 0
    SQUARE = 1
    TRIANGLE = 2
    GAUSSIAN = 3
    LORENTZ = 4
    PSEUDOVOIGT = 5
    LAPLACE = 6
    MOFFAT = 7
    SMOOTHSTEP = 8

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self.name]


class PeakType2D(IntEnum):
    """2D peak shapes, in menu order."""

    NONE = 0
    SQUARE = 1
    PYRAMID = 2
    CONE = 3
    GAUSSIAN = 4
    LORENTZ = 5
    PSEUDOVOIGT = 6
    LAPLACE = 7
    MOFFAT = 8
    SMOOTHSTEP = 9

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self.name]


PeakType = PeakType1D | PeakType2D

_DISPLAY_NAMES = {
    "NONE": "None",
    "SQUARE": "Square",
    "TRIANGLE": "Triangle",
    "PYRAMID": "Pyramid",
    "CONE": "Cone",
    "GAUSSIAN": "Gaussian",
    "LORENTZ": "Lorentz",
    "PSEUDOVOIGT": "Pseudo-Voigt",
    "LAPLACE": "Laplace",
    "MOFFAT": "Moffat",
    "SMOOTHSTEP": "SmoothStep",
}


def peak_type_for(ndim: int, value: int) -> PeakType:
    """Convert a menu ordinal to the peak type enum of the given dimensionality.

    Unknown ordinals map to ``NONE`` so a stale menu value never renders.
    """
    enum_cls = PeakType1D if ndim == 1 else PeakType2D
    try:
        return enum_cls(value)
    except ValueError:
        return enum_cls.NONE


def peak_type_names(ndim: int) -> list[str]:
    """Display names of the peak types for ``ndim`` (1 or 2), in ordinal order."""
    enum_cls = PeakType1D if ndim == 1 else PeakType2D
    return [member.display_name for member in enum_cls]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Inclusive bin range a peak is restricted to."""

    min_x: int
    max_x: int
    min_y: int = 0
    max_y: int = 0

    def clip(self, size_x: int, size_y: int | None = None) -> tuple[slice, ...] | None:
        """Intersect with a frame of ``size_x`` (by ``size_y`` for 2D) bins.

        Returns
        -------
            Index tuple selecting the intersection (``(x_slice,)`` in 1D,
            ``(y_slice, x_slice)`` in 2D), or None if it is empty.
        """
        x0, x1 = max(self.min_x, 0), min(self.max_x, size_x - 1)
        if x0 > x1:
            return None
        if size_y is None:
            return (slice(x0, x1 + 1),)
        y0, y1 = max(self.min_y, 0), min(self.max_y, size_y - 1)
        if y0 > y1:
            return None
        return slice(y0, y1 + 1), slice(x0, x1 + 1)


@dataclass(frozen=True, slots=True)
class PeakSpec:
    """Immutable snapshot of one peak's settings for a single frame.

    ``fwhm_x``/``fwhm_y`` are clamped to at least one bin and ``correlation``
    to ``[-1, 1]`` on construction.
    """

    shape: PeakType
    position_x: float = 0.0
    position_y: float = 0.0
    fwhm_x: float = MIN_FWHM
    fwhm_y: float = MIN_FWHM
    amplitude: float = 1.0
    correlation: float = 0.0
    param1: float = 0.0
    param2: float = 0.0
    bounds: BoundingBox | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fwhm_x", max(MIN_FWHM, float(self.fwhm_x)))
        object.__setattr__(self, "fwhm_y", max(MIN_FWHM, float(self.fwhm_y)))
        object.__setattr__(self, "correlation", min(1.0, max(-1.0, float(self.correlation))))

    @property
    def enabled(self) -> bool:
        """Whether the peak contributes to the frame at all."""
        return self.shape != 0

    @property
    def ndim(self) -> int:
        return 2 if isinstance(self.shape, PeakType2D) else 1


__all__ = [
    "BoundingBox",
    "PeakSpec",
    "PeakType",
    "PeakType1D",
    "PeakType2D",
    "peak_type_for",
    "peak_type_names",
]
