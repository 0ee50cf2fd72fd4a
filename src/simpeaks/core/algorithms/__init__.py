"""Background, noise and frame compositing."""

from simpeaks.core.algorithms.background import background_frame, background_value
from simpeaks.core.algorithms.compositor import FrameCompositor, accumulate
from simpeaks.core.algorithms.noise import NoiseGenerator, default_rng

__all__ = [
    "FrameCompositor",
    "NoiseGenerator",
    "accumulate",
    "background_frame",
    "background_value",
    "default_rng",
]
