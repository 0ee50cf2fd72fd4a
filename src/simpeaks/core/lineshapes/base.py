"""Base class for shape evaluators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.shared.typing import FloatArray


class ShapeEvaluator(ABC):
    """Unnormalized density of one peak shape.

    Evaluators are stateless; ``evaluate`` may be called concurrently. For 1D
    shapes ``y`` is ignored. For 2D shapes ``x`` and ``y`` broadcast against
    each other (a row of x bins and a column of y bins give a full frame).
    """

    ndim: int = 1

    @abstractmethod
    def evaluate(self, peak: PeakSpec, x: FloatArray, y: FloatArray | None = None) -> FloatArray:
        """Evaluate the shape of ``peak`` at bin coordinates ``x`` (and ``y``)."""
        ...

    def center_value(self, peak: PeakSpec) -> float:
        """Height of the shape at the peak's own center."""
        y = peak.position_y if self.ndim == 2 else None
        return float(self.evaluate(peak, peak.position_x, y))
