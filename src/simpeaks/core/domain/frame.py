"""Typed frame buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any

import numpy as np

from simpeaks.core.shared.exceptions import ConfigError

if TYPE_CHECKING:
    from simpeaks.core.shared.typing import FrameArray


class ElementType(IntEnum):
    """Frame element types, numbered as the areaDetector ``NDDataType`` list."""

    INT8 = 0
    UINT8 = 1
    INT16 = 2
    UINT16 = 3
    INT32 = 4
    UINT32 = 5
    INT64 = 6
    UINT64 = 7
    FLOAT32 = 8
    FLOAT64 = 9

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(_DTYPES[self])

    @property
    def is_integer(self) -> bool:
        return self < ElementType.FLOAT32

    @classmethod
    def from_value(cls, value: int | str) -> ElementType:
        """Resolve an ordinal or a case-insensitive name (``"UInt16"``, ``"float64"``).

        Raises
        ------
            ConfigError: If the value names no element type.
        """
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                msg = f"Unknown element type name: {value!r}"
                raise ConfigError(msg) from None
        try:
            return cls(int(value))
        except ValueError:
            msg = f"Invalid element type tag: {value}"
            raise ConfigError(msg) from None


_DTYPES = {
    ElementType.INT8: np.int8,
    ElementType.UINT8: np.uint8,
    ElementType.INT16: np.int16,
    ElementType.UINT16: np.uint16,
    ElementType.INT32: np.int32,
    ElementType.UINT32: np.uint32,
    ElementType.INT64: np.int64,
    ElementType.UINT64: np.uint64,
    ElementType.FLOAT32: np.float32,
    ElementType.FLOAT64: np.float64,
}


@dataclass(eq=False)
class FrameBuffer:
    """A contiguous typed frame plus the metadata stamped on publication.

    ``data`` has shape ``(size_x,)`` for 1D frames and ``(size_y, size_x)``
    for 2D frames.
    """

    data: FrameArray
    element_type: ElementType
    unique_id: int = 0
    timestamp: float = 0.0
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def ndim(self) -> int:
        return self.data.ndim

    @property
    def dims(self) -> tuple[int, ...]:
        """Dimensions in (x, y) order, as reported by the parameter library."""
        return tuple(reversed(self.data.shape))

    @property
    def size_x(self) -> int:
        return self.data.shape[-1]

    @property
    def size_y(self) -> int:
        return self.data.shape[0] if self.data.ndim == 2 else 1

    @property
    def nbytes(self) -> int:
        return self.data.nbytes

    def matches(self, dims: tuple[int, ...], element_type: ElementType) -> bool:
        """Whether this buffer already has the requested geometry and element type."""
        return self.dims == tuple(dims) and self.element_type == element_type


__all__ = ["ElementType", "FrameBuffer"]
