"""Shape registry mapping peak type enums to their evaluators."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from simpeaks.core.domain.peaks import PeakType
    from simpeaks.core.lineshapes.base import ShapeEvaluator

# 1D and 2D enums share integer values, so the enum class is part of the key.
SHAPES: dict[tuple[type, int], type[ShapeEvaluator]] = {}


def _key(shape: PeakType) -> tuple[type, int]:
    return type(shape), int(shape)


def register_shape(
    *shapes: PeakType,
) -> Callable[[type[ShapeEvaluator]], type[ShapeEvaluator]]:
    """Register an evaluator class for one or more peak types.

    Example:
        @register_shape(PeakType1D.GAUSSIAN)
        class Gaussian1D(ShapeEvaluator):
            ...
    """

    def decorator(shape_class: type[ShapeEvaluator]) -> type[ShapeEvaluator]:
        for shape in shapes:
            SHAPES[_key(shape)] = shape_class
        return shape_class

    return decorator


def get_shape(shape: PeakType) -> type[ShapeEvaluator]:
    """Get the evaluator class registered for a peak type.

    Raises
    ------
        KeyError: If no evaluator is registered for ``shape``
    """
    return SHAPES[_key(shape)]


def list_shapes() -> list[PeakType]:
    """List all peak types with a registered evaluator."""
    return [enum_cls(value) for enum_cls, value in SHAPES]
