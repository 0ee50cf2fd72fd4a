"""Tests for the noise generator."""

import numpy as np
import pytest

from simpeaks.core.algorithms.noise import NoiseGenerator
from simpeaks.core.domain.signal import NoiseKind, NoiseSpec


class TestNoiseGenerator:
    """Tests for additive noise sampling."""

    def test_seeded_generator_is_reproducible(self):
        spec = NoiseSpec(NoiseKind.GAUSSIAN, level=3.0)
        a = NoiseGenerator(np.random.default_rng(7)).sample(spec, (50,))
        b = NoiseGenerator(np.random.default_rng(7)).sample(spec, (50,))
        np.testing.assert_array_equal(a, b)

    def test_stream_continues_between_frames(self, rng):
        """Consecutive frames draw different noise from the same stream."""
        generator = NoiseGenerator(rng)
        spec = NoiseSpec(NoiseKind.UNIFORM, level=1.0)
        assert not np.array_equal(generator.sample(spec, (20,)), generator.sample(spec, (20,)))

    def test_uniform_range(self, rng):
        values = NoiseGenerator(rng).sample(NoiseSpec(NoiseKind.UNIFORM, level=4.0), (10000,))
        assert values.min() >= -4.0
        assert values.max() <= 4.0
        assert values.min() < -3.5
        assert values.max() > 3.5

    def test_gaussian_level_is_standard_deviation(self, rng):
        values = NoiseGenerator(rng).sample(NoiseSpec(NoiseKind.GAUSSIAN, level=5.0), (20000,))
        assert values.std() == pytest.approx(5.0, rel=0.05)
        assert abs(values.mean()) < 0.2

    @pytest.mark.parametrize("kind", [NoiseKind.UNIFORM, NoiseKind.GAUSSIAN])
    @pytest.mark.parametrize("level", [0.5, 10.0, 1000.0])
    def test_clamped_noise_within_bounds(self, rng, kind, level):
        """Clamped noise lies in [lower, upper] regardless of level."""
        spec = NoiseSpec(kind, level=level, clamp=True, lower=-1.0, upper=2.0)
        values = NoiseGenerator(rng).sample(spec, (32, 16))
        assert values.shape == (32, 16)
        assert values.min() >= -1.0
        assert values.max() <= 2.0

    def test_none_is_zero(self, rng):
        values = NoiseGenerator(rng).sample(NoiseSpec(NoiseKind.NONE, level=3.0), (8,))
        assert not values.any()

    def test_default_generator_is_seeded_from_clock(self):
        assert isinstance(NoiseGenerator().rng, np.random.Generator)
