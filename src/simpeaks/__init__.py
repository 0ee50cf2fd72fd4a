"""SimPeaks - Simulated detector frames of peaks on background and noise.

Public API:
    - SimPeaksDriver: Simulated detector (parameters, acquisition thread, buffer pool)

Configuration:
    - SimPeaksConfig: Main configuration object
    - load_config, save_config: TOML configuration files

Building blocks:
    - FrameCompositor: Renders one frame into a buffer
    - AcquisitionController: Producer thread and acquisition state machine
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from simpeaks.core.acquisition import AcquisitionController
from simpeaks.core.algorithms import FrameCompositor
from simpeaks.core.domain.config import SimPeaksConfig
from simpeaks.io.config import load_config, save_config
from simpeaks.services import SimPeaksDriver

__all__ = [
    "__version__",
    "SimPeaksDriver",
    "SimPeaksConfig",
    "load_config",
    "save_config",
    "FrameCompositor",
    "AcquisitionController",
]
