"""Tests for background profiles."""

import numpy as np
import pytest

from simpeaks.core.algorithms.background import background_frame, background_value
from simpeaks.core.domain.signal import BackgroundKind, BackgroundSpec


class TestBackgroundValue:
    @pytest.mark.parametrize("shift", [0.0, 3.0, -7.5, 100.0])
    def test_constant_polynomial(self, shift):
        """c0 = 5 with the other coefficients zero gives a flat 5 whatever the shift."""
        spec = BackgroundSpec(BackgroundKind.POLYNOMIAL, c0=5.0, shift=shift)
        np.testing.assert_array_equal(background_value(spec, np.arange(10)), np.full(10, 5.0))

    def test_cubic_polynomial_with_shift(self):
        spec = BackgroundSpec(BackgroundKind.POLYNOMIAL, c0=1.0, c1=2.0, c2=3.0, c3=4.0, shift=2.0)
        bins = np.array([2.0, 3.0, 0.0])
        expected = [1.0, 1.0 + 2.0 + 3.0 + 4.0, 1.0 - 4.0 + 12.0 - 32.0]
        np.testing.assert_allclose(background_value(spec, bins), expected)

    def test_exponential(self):
        spec = BackgroundSpec(BackgroundKind.EXPONENTIAL, c0=1.0, c1=2.0, c2=-0.5, shift=4.0)
        bins = np.array([4.0, 6.0])
        np.testing.assert_allclose(background_value(spec, bins), [3.0, 1.0 + 2.0 * np.exp(-1.0)])

    def test_exponential_ignores_c3(self):
        a = BackgroundSpec(BackgroundKind.EXPONENTIAL, c0=1.0, c1=1.0, c2=0.1)
        b = BackgroundSpec(BackgroundKind.EXPONENTIAL, c0=1.0, c1=1.0, c2=0.1, c3=99.0)
        np.testing.assert_array_equal(background_value(a, np.arange(5)), background_value(b, np.arange(5)))

    def test_none_is_zero(self):
        spec = BackgroundSpec(BackgroundKind.NONE, c0=5.0)
        assert not background_value(spec, np.arange(4)).any()
        assert not spec.enabled


class TestBackgroundFrame:
    def test_1d_frame(self):
        spec = BackgroundSpec(BackgroundKind.POLYNOMIAL, c1=1.0)
        np.testing.assert_array_equal(background_frame(spec, None, 4), [0.0, 1.0, 2.0, 3.0])

    def test_2d_frame_is_additive(self):
        """The X and Y profiles are summed, not multiplied."""
        spec_x = BackgroundSpec(BackgroundKind.POLYNOMIAL, c0=1.0, c1=1.0)
        spec_y = BackgroundSpec(BackgroundKind.POLYNOMIAL, c0=10.0, c1=100.0)
        frame = background_frame(spec_x, spec_y, size_x=3, size_y=2)
        assert frame.shape == (2, 3)
        np.testing.assert_array_equal(frame, [[11.0, 12.0, 13.0], [111.0, 112.0, 113.0]])

    @pytest.mark.parametrize("size_y", [1, 5])
    def test_2d_frame_without_y_profile(self, size_y):
        spec_x = BackgroundSpec(BackgroundKind.POLYNOMIAL, c0=2.0)
        frame = background_frame(spec_x, BackgroundSpec(), size_x=4, size_y=size_y)
        np.testing.assert_array_equal(frame, np.full((size_y, 4), 2.0))
