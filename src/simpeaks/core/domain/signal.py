"""Background and noise descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class BackgroundKind(IntEnum):
    """Background profile along one axis, in menu order."""

    NONE = 0
    POLYNOMIAL = 1
    EXPONENTIAL = 2


class NoiseKind(IntEnum):
    """Noise distribution, in menu order."""

    NONE = 0
    UNIFORM = 1
    GAUSSIAN = 2


@dataclass(frozen=True, slots=True)
class BackgroundSpec:
    """Background profile for one axis.

    Polynomial: ``c0 + c1*u + c2*u**2 + c3*u**3`` with ``u = bin - shift``.
    Exponential: ``c0 + c1*exp(c2*u)``; ``c3`` is unused.
    """

    kind: BackgroundKind = BackgroundKind.NONE
    c0: float = 0.0
    c1: float = 0.0
    c2: float = 0.0
    c3: float = 0.0
    shift: float = 0.0

    @property
    def enabled(self) -> bool:
        return self.kind != BackgroundKind.NONE


@dataclass(frozen=True, slots=True)
class NoiseSpec:
    """Additive per-bin noise settings."""

    kind: NoiseKind = NoiseKind.NONE
    level: float = 0.0
    clamp: bool = False
    lower: float = 0.0
    upper: float = 0.0

    @property
    def enabled(self) -> bool:
        return self.kind != NoiseKind.NONE


def kind_for(enum_cls: type[IntEnum], value: int) -> IntEnum:
    """Convert a menu ordinal to ``enum_cls``, falling back to its ``NONE`` member."""
    try:
        return enum_cls(value)
    except ValueError:
        return enum_cls(0)


__all__ = ["BackgroundKind", "BackgroundSpec", "NoiseKind", "NoiseSpec", "kind_for"]
