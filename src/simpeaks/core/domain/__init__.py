"""Domain models: peaks, background, noise, frames, state and configuration."""

from simpeaks.core.domain.frame import ElementType, FrameBuffer
from simpeaks.core.domain.peaks import (
    BoundingBox,
    PeakSpec,
    PeakType,
    PeakType1D,
    PeakType2D,
    peak_type_for,
    peak_type_names,
)
from simpeaks.core.domain.signal import BackgroundKind, BackgroundSpec, NoiseKind, NoiseSpec
from simpeaks.core.domain.state import AcquisitionState, DetectorStatus, ImageMode
from simpeaks.core.domain.config import (
    AcquisitionConfig,
    AxisBackgroundConfig,
    BackgroundConfig,
    DetectorConfig,
    NoiseConfig,
    PeakConfig,
    SimPeaksConfig,
    apply_config,
)

__all__ = [
    "AcquisitionConfig",
    "AcquisitionState",
    "AxisBackgroundConfig",
    "BackgroundConfig",
    "BackgroundKind",
    "BackgroundSpec",
    "BoundingBox",
    "DetectorConfig",
    "DetectorStatus",
    "ElementType",
    "FrameBuffer",
    "ImageMode",
    "NoiseConfig",
    "NoiseKind",
    "NoiseSpec",
    "PeakConfig",
    "PeakSpec",
    "PeakType",
    "PeakType1D",
    "PeakType2D",
    "SimPeaksConfig",
    "apply_config",
    "peak_type_for",
    "peak_type_names",
]
