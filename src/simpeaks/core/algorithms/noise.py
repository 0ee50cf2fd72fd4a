"""Additive detector noise."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.domain.signal import NoiseKind

if TYPE_CHECKING:
    from simpeaks.core.domain.signal import NoiseSpec
    from simpeaks.core.shared.typing import FloatArray


def default_rng() -> np.random.Generator:
    """Generator seeded from the wall clock, for production use."""
    return np.random.default_rng(time.time_ns())


class NoiseGenerator:
    """Draws per-bin noise from one shared random stream.

    The generator is injected so tests can pass a seeded one; every frame
    continues the same stream rather than reseeding.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else default_rng()

    def draw(self, kind: NoiseKind, shape: tuple[int, ...]) -> FloatArray:
        """Unit noise: Uniform(-1, 1) or Normal(0, 1)."""
        if kind == NoiseKind.UNIFORM:
            return self.rng.uniform(-1.0, 1.0, size=shape)
        if kind == NoiseKind.GAUSSIAN:
            return self.rng.standard_normal(size=shape)
        return np.zeros(shape)

    def sample(self, spec: NoiseSpec, shape: tuple[int, ...]) -> FloatArray:
        """Noise scaled by ``spec.level`` and, if enabled, clamped to ``[lower, upper]``."""
        noise = self.draw(spec.kind, shape) * spec.level
        if spec.clamp:
            noise = np.clip(noise, spec.lower, spec.upper)
        return noise


__all__ = ["NoiseGenerator", "default_rng"]
