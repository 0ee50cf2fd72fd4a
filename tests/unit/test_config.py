"""Test configuration models, loading and saving."""

import tomllib

import pytest
from pydantic import ValidationError

from simpeaks.core.domain.config import (
    DetectorConfig,
    NoiseConfig,
    PeakConfig,
    SimPeaksConfig,
    apply_config,
    normalize_shape_name,
)
from simpeaks.core.domain.frame import ElementType
from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.domain.state import ImageMode
from simpeaks.core.params import ParameterLibrary, ParamKey
from simpeaks.core.shared.exceptions import ConfigError
from simpeaks.io.config import generate_default_config, load_config, save_config


class TestConfigModels:
    """Tests for the pydantic configuration models."""

    def test_defaults(self):
        config = SimPeaksConfig()
        assert config.detector.max_size_x == 1024
        assert config.detector.ndim == 1
        assert config.detector.element_type is ElementType.FLOAT64
        assert config.acquisition.image_mode == "continuous"
        assert config.acquisition.acquire_period == 1.0
        assert config.peaks == []

    def test_ndim_from_max_size_y(self):
        assert DetectorConfig(max_size_y=0).ndim == 1
        assert DetectorConfig(max_size_y=4).ndim == 2

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("gaussian", "GAUSSIAN"),
            ("Pseudo-Voigt", "PSEUDOVOIGT"),
            ("pseudo_voigt", "PSEUDOVOIGT"),
            ("pvoigt", "PSEUDOVOIGT"),
            ("Lorentzian", "LORENTZ"),
            (" SmoothStep ", "SMOOTHSTEP"),
        ],
    )
    def test_normalize_shape_name(self, name, expected):
        assert normalize_shape_name(name) == expected

    def test_peak_ordinals(self):
        peak = PeakConfig(shape="moffat")
        assert peak.ordinal(1) == PeakType1D.MOFFAT
        assert peak.ordinal(2) == PeakType2D.MOFFAT

    def test_unknown_shape_rejected(self):
        with pytest.raises(ValidationError, match="Unknown peak shape"):
            PeakConfig(shape="sawtooth")

    def test_2d_only_shape_rejected_on_1d_detector(self):
        with pytest.raises(ValidationError, match="not available for 1D"):
            SimPeaksConfig(detector={"max_size_y": 0}, peaks=[{"shape": "cone"}])

    def test_1d_only_shape_rejected_on_2d_detector(self):
        with pytest.raises(ValidationError, match="not available for 2D"):
            SimPeaksConfig(detector={"max_size_y": 8}, peaks=[{"shape": "triangle"}])

    def test_too_many_peaks_rejected(self):
        with pytest.raises(ValidationError, match="max_peaks is 1"):
            SimPeaksConfig(peaks=[{}, {}])

    def test_size_larger_than_detector_rejected(self):
        with pytest.raises(ValidationError, match="exceeds max_size_x"):
            DetectorConfig(max_size_x=10, size_x=11)

    def test_extra_keys_rejected(self):
        with pytest.raises(ValidationError):
            SimPeaksConfig.model_validate({"detector": {"colour": "blue"}})

    def test_noise_bounds_checked_when_clamping(self):
        with pytest.raises(ValidationError, match="lower bound"):
            NoiseConfig(clamp=True, lower=1.0, upper=-1.0)
        assert NoiseConfig(clamp=False, lower=1.0, upper=-1.0).lower == 1.0

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            PeakConfig(fwhm_x=0.0)
        with pytest.raises(ValidationError):
            PeakConfig(correlation=1.5)
        with pytest.raises(ValidationError):
            DetectorConfig(data_type="complex64")


class TestApplyConfig:
    """Tests for seeding a parameter store from a configuration."""

    def test_writes_settings(self):
        config = SimPeaksConfig.model_validate(
            {
                "detector": {"max_size_x": 64, "max_size_y": 32, "max_peaks": 2, "data_type": "uint16"},
                "acquisition": {"image_mode": "multiple", "num_images": 4, "integrate": True},
                "background": {"y": {"type": "exponential", "c1": 2.0}},
                "noise": {"type": "uniform", "level": 0.5},
                "peaks": [
                    {"shape": "cone", "position_x": 10.0},
                    {"shape": "gaussian", "bounds": [1, 2, 3, 4]},
                ],
            }
        )
        store = ParameterLibrary(max_peaks=2)

        apply_config(config, store)

        assert store.get_int(ParamKey.SIZE_X) == 64
        assert store.get_int(ParamKey.SIZE_Y) == 32
        assert store.get_int(ParamKey.DATA_TYPE) == ElementType.UINT16
        assert store.get_int(ParamKey.IMAGE_MODE) == ImageMode.MULTIPLE
        assert store.get_int(ParamKey.NUM_IMAGES) == 4
        assert store.get_int(ParamKey.INTEGRATE) == 1
        assert store.get_int(ParamKey.BG_TYPE_Y) == 2
        assert store.get_float(ParamKey.BG_C1_Y) == 2.0
        assert store.get_int(ParamKey.NOISE_TYPE) == 1
        assert store.get_int(ParamKey.PEAK_TYPE_2D, 0) == PeakType2D.CONE
        assert store.get_float(ParamKey.PEAK_POS_X, 0) == 10.0
        assert store.get_int(ParamKey.PEAK_USE_BOUNDS, 0) == 0
        assert store.get_int(ParamKey.PEAK_USE_BOUNDS, 1) == 1
        assert store.get_int(ParamKey.PEAK_MAX_Y, 1) == 4

    def test_1d_detector_uses_1d_type_key(self):
        config = SimPeaksConfig(peaks=[{"shape": "triangle"}])
        store = ParameterLibrary()
        apply_config(config, store)
        assert store.get_int(ParamKey.PEAK_TYPE_1D) == PeakType1D.TRIANGLE
        assert store.get_int(ParamKey.PEAK_TYPE_2D) == 0
        assert store.get_int(ParamKey.SIZE_Y) == 1


class TestConfigFiles:
    """Tests for configuration file loading and saving."""

    def test_load_valid_config(self, sample_config_file):
        config = load_config(sample_config_file)
        assert config.detector.name == "TEST"
        assert config.detector.ndim == 2
        assert config.acquisition.num_images == 3
        assert config.background.x.c0 == 5.0
        assert config.peaks[0].amplitude == 100.0

    def test_load_nonexistent_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "does_not_exist.toml")

    def test_load_invalid_toml(self, tmp_path):
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("not valid toml {{{")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(invalid_file)

    def test_load_invalid_settings(self, tmp_path):
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text('[acquisition]\nimage_mode = "forever"\n')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(invalid_file)

    def test_load_minimal_config(self, tmp_path):
        minimal_file = tmp_path / "minimal.toml"
        minimal_file.write_text("")
        assert load_config(minimal_file) == SimPeaksConfig()

    def test_default_template_is_valid(self, tmp_path):
        path = tmp_path / "default.toml"
        path.write_text(generate_default_config())

        config = load_config(path)

        assert config.detector.data_type == "uint16"
        assert config.detector.ndim == 2
        assert [peak.shape for peak in config.peaks] == ["gaussian", "moffat"]

    def test_save_and_load_roundtrip(self, tmp_path):
        config = SimPeaksConfig(
            detector={"max_size_x": 32, "max_size_y": 16, "max_peaks": 2},
            peaks=[{"shape": "pyramid", "bounds": (0, 5, 0, 5)}, {"shape": "laplace"}],
        )
        save_path = tmp_path / "roundtrip.toml"

        save_config(config, save_path)

        with save_path.open("rb") as f:
            assert "size_x" not in tomllib.load(f)["detector"]
        assert load_config(save_path) == config
