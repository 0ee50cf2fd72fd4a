"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from simpeaks.core.domain.config import SimPeaksConfig
from simpeaks.core.shared.exceptions import ConfigError


def load_config(path: Path) -> SimPeaksConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        SimPeaksConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file is not valid TOML or the configuration is invalid.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SimPeaksConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid configuration in {path}:\n{e}"
        raise ConfigError(msg) from e


def save_config(config: SimPeaksConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)

    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# SimPeaks Configuration File
# Generated automatically - edit as needed

[detector]
name = "SIMPEAKS"
max_size_x = 512
max_size_y = 256     # 0 for a 1D detector
max_peaks = 2
data_type = "uint16" # int8 ... uint64, float32, float64
# max_buffers = 0    # 0 = no limit
# max_memory = 0     # bytes, 0 = no limit

[acquisition]
image_mode = "continuous"  # single, multiple, continuous
num_images = 10
acquire_period = 1.0
integrate = false
array_callbacks = true

[background.x]
type = "polynomial"  # none, polynomial, exponential
c0 = 10.0

[background.y]
type = "none"

[noise]
type = "gaussian"  # none, uniform, gaussian
level = 2.0
clamp = true
lower = -5.0
upper = 5.0

[[peaks]]
shape = "gaussian"  # square, pyramid, cone, gaussian, lorentz, pseudo-voigt, laplace, moffat, smoothstep
position_x = 200.0
position_y = 100.0
fwhm_x = 20.0
fwhm_y = 10.0
amplitude = 1000.0
correlation = 0.3

[[peaks]]
shape = "moffat"
position_x = 350.0
position_y = 180.0
fwhm_x = 15.0
fwhm_y = 15.0
amplitude = 500.0
param1 = 2.5  # beta
# bounds = [300, 400, 150, 210]  # min_x, max_x, min_y, max_y
"""


__all__ = ["generate_default_config", "load_config", "save_config"]
