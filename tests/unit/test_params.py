"""Test the parameter library and per-frame snapshots."""

import pytest

from simpeaks.core.domain.peaks import BoundingBox, PeakType1D, PeakType2D
from simpeaks.core.domain.signal import BackgroundKind, NoiseKind
from simpeaks.core.params import ParameterLibrary, ParamKey, read_background, read_noise, read_peaks
from simpeaks.core.shared.exceptions import ParameterError


class TestParameterLibrary:
    """Tests for ParameterLibrary."""

    def test_defaults(self):
        """Should start from the documented defaults."""
        params = ParameterLibrary()
        assert params.get_int(ParamKey.ACQUIRE) == 0
        assert params.get_int(ParamKey.NUM_IMAGES) == 1
        assert params.get_int(ParamKey.ARRAY_CALLBACKS) == 1
        assert params.get_float(ParamKey.ACQUIRE_PERIOD) == 1.0
        assert params.get_float(ParamKey.PEAK_AMPLITUDE) == 1.0
        assert params.get_string(ParamKey.STATUS_MESSAGE) == ""

    def test_set_and_get(self):
        params = ParameterLibrary(max_peaks=3)
        params.set_int(ParamKey.SIZE_X, 128)
        params.set_float(ParamKey.PEAK_POS_X, 12.5, index=2)
        assert params.get_int(ParamKey.SIZE_X) == 128
        assert params.get_float(ParamKey.PEAK_POS_X, 2) == 12.5
        assert params.get_float(ParamKey.PEAK_POS_X, 0) == 0.0

    def test_string_keys_accepted(self):
        """Should accept the raw parameter names."""
        params = ParameterLibrary()
        params.set_int("ADSP_NOISE_TYPE", 2)
        assert params.get_int(ParamKey.NOISE_TYPE) == 2
        assert "ADSP_NOISE_TYPE" in params
        assert "NOT_A_PARAM" not in params

    def test_unknown_key_raises(self):
        params = ParameterLibrary()
        with pytest.raises(ParameterError, match="Unknown parameter"):
            params.get_int("NOT_A_PARAM")

    def test_wrong_type_raises(self):
        """Should refuse a typed access that does not match the definition."""
        params = ParameterLibrary()
        with pytest.raises(ParameterError, match="is float"):
            params.get_int(ParamKey.ACQUIRE_PERIOD)

    def test_index_out_of_range_raises(self):
        params = ParameterLibrary(max_peaks=2)
        with pytest.raises(ParameterError, match="out of range"):
            params.set_float(ParamKey.PEAK_FWHM_X, 3.0, index=2)
        with pytest.raises(ParameterError, match="out of range"):
            params.get_int(ParamKey.SIZE_X, 1)

    def test_unconvertible_value_raises(self):
        params = ParameterLibrary()
        with pytest.raises(ParameterError, match="Cannot store"):
            params.set_float(ParamKey.ACQUIRE_PERIOD, "fast")

    def test_max_peaks_must_be_positive(self):
        with pytest.raises(ParameterError, match="max_peaks"):
            ParameterLibrary(max_peaks=0)

    def test_set_value_uses_parameter_type(self):
        """Should coerce through the setter of the parameter's own type."""
        params = ParameterLibrary()
        params.set_value(ParamKey.ACQUIRE_PERIOD, "0.25")
        params.set_value(ParamKey.SIZE_X, 7.9)
        assert params.get_float(ParamKey.ACQUIRE_PERIOD) == 0.25
        assert params.get_int(ParamKey.SIZE_X) == 7
        assert params.kind(ParamKey.STATUS_MESSAGE) == "string"

    def test_change_notification(self):
        """Should notify only when a value actually changes."""
        params = ParameterLibrary(max_peaks=2)
        received = []
        params.subscribe(received.append)

        params.set_float(ParamKey.PEAK_AMPLITUDE, 5.0, index=1)
        params.set_float(ParamKey.PEAK_AMPLITUDE, 5.0, index=1)
        params.set_int(ParamKey.ACQUIRE, 0)

        assert len(received) == 1
        event = received[0]
        assert event.key == "ADSP_PEAK_AMP"
        assert event.index == 1
        assert event.value == 5.0

    def test_unsubscribe(self):
        params = ParameterLibrary()
        received = []
        params.subscribe(received.append)
        params.unsubscribe(received.append)
        params.set_int(ParamKey.SIZE_X, 3)
        assert received == []

    def test_as_dict(self):
        params = ParameterLibrary(max_peaks=2)
        params.set_int(ParamKey.PEAK_TYPE_1D, 3, index=1)
        values = params.as_dict()
        assert values["ADSP_PEAK_TYPE_1D"] == [0, 3]
        assert values["ACQ_PERIOD"] == 1.0

        values["ADSP_PEAK_TYPE_1D"][0] = 9
        assert params.get_int(ParamKey.PEAK_TYPE_1D, 0) == 0


class TestSnapshots:
    """Tests for reading per-frame settings out of the store."""

    def test_read_peaks_1d(self, store):
        store.set_int(ParamKey.PEAK_TYPE_1D, PeakType1D.MOFFAT, index=1)
        store.set_float(ParamKey.PEAK_POS_X, 8.0, index=1)
        store.set_float(ParamKey.PEAK_P1, 2.5, index=1)

        peaks = read_peaks(store, 2, ndim=1)

        assert [p.shape for p in peaks] == [PeakType1D.NONE, PeakType1D.MOFFAT]
        assert peaks[1].position_x == 8.0
        assert peaks[1].param1 == 2.5
        assert peaks[1].bounds is None
        assert not peaks[0].enabled

    def test_read_peaks_uses_2d_type_key(self, store):
        store.set_int(ParamKey.PEAK_TYPE_1D, PeakType1D.GAUSSIAN)
        store.set_int(ParamKey.PEAK_TYPE_2D, PeakType2D.CONE)
        (peak, _) = read_peaks(store, 2, ndim=2)
        assert peak.shape is PeakType2D.CONE
        assert peak.ndim == 2

    def test_unknown_shape_ordinal_disables_peak(self, store):
        store.set_int(ParamKey.PEAK_TYPE_1D, 42)
        (peak, _) = read_peaks(store, 2, ndim=1)
        assert peak.shape is PeakType1D.NONE

    def test_fwhm_and_correlation_clamped(self, store):
        store.set_float(ParamKey.PEAK_FWHM_X, 0.1)
        store.set_float(ParamKey.PEAK_CORRELATION, 3.0)
        (peak, _) = read_peaks(store, 2, ndim=2)
        assert peak.fwhm_x == 1.0
        assert peak.correlation == 1.0

    def test_bounds_only_when_enabled(self, store):
        store.set_int(ParamKey.PEAK_MIN_X, 2)
        store.set_int(ParamKey.PEAK_MAX_X, 5)
        assert read_peaks(store, 1, ndim=1)[0].bounds is None

        store.set_int(ParamKey.PEAK_USE_BOUNDS, 1)
        store.set_int(ParamKey.PEAK_MIN_Y, 1)
        store.set_int(ParamKey.PEAK_MAX_Y, 3)
        assert read_peaks(store, 1, ndim=2)[0].bounds == BoundingBox(2, 5, 1, 3)

    def test_read_background(self, store):
        store.set_int(ParamKey.BG_TYPE_Y, BackgroundKind.EXPONENTIAL)
        store.set_float(ParamKey.BG_C1_Y, 2.0)
        store.set_float(ParamKey.BG_SHIFT_Y, 4.0)

        background = read_background(store, "y")

        assert background.kind is BackgroundKind.EXPONENTIAL
        assert background.c1 == 2.0
        assert background.shift == 4.0
        assert not read_background(store, "x").enabled

    def test_unknown_background_ordinal_is_none(self, store):
        store.set_int(ParamKey.BG_TYPE_X, 7)
        assert read_background(store, "x").kind is BackgroundKind.NONE

    def test_read_noise(self, store):
        store.set_int(ParamKey.NOISE_TYPE, NoiseKind.UNIFORM)
        store.set_float(ParamKey.NOISE_LEVEL, 3.0)
        store.set_int(ParamKey.NOISE_CLAMP, 1)
        store.set_float(ParamKey.NOISE_UPPER, 1.5)

        noise = read_noise(store)

        assert noise.kind is NoiseKind.UNIFORM
        assert noise.level == 3.0
        assert noise.clamp is True
        assert noise.upper == 1.5
