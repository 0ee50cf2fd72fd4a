"""Configuration models for a simulated detector.

A :class:`SimPeaksConfig` describes the detector geometry, the acquisition
settings and the initial background, noise and peak settings. It is read from
TOML (see :mod:`simpeaks.io.config`) and seeds a parameter store through
:func:`apply_config`; after that the store is the single source of truth.

Example TOML configuration:
    [detector]
    max_size_x = 512
    max_size_y = 256
    max_peaks = 2
    data_type = "uint16"

    [acquisition]
    image_mode = "continuous"
    acquire_period = 0.5

    [background.x]
    type = "polynomial"
    c0 = 10.0

    [noise]
    type = "gaussian"
    level = 2.0

    [[peaks]]
    shape = "gaussian"
    position_x = 200.0
    position_y = 100.0
    fwhm_x = 20.0
    fwhm_y = 10.0
    amplitude = 1000.0
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from simpeaks.core.domain.frame import ElementType
from simpeaks.core.domain.peaks import PeakType1D, PeakType2D
from simpeaks.core.domain.signal import BackgroundKind, NoiseKind
from simpeaks.core.domain.state import ImageMode
from simpeaks.core.params.keys import BACKGROUND_KEYS, ParamKey

if TYPE_CHECKING:
    from simpeaks.core.interfaces import ParameterStore

DataTypeName = Literal[
    "int8", "uint8", "int16", "uint16", "int32", "uint32", "int64", "uint64", "float32", "float64"
]
ImageModeName = Literal["single", "multiple", "continuous"]
BackgroundName = Literal["none", "polynomial", "exponential"]
NoiseName = Literal["none", "uniform", "gaussian"]

_SHAPE_ALIASES = {"LORENTZIAN": "LORENTZ", "PVOIGT": "PSEUDOVOIGT", "BOX": "SQUARE"}


def normalize_shape_name(name: str) -> str:
    """Canonical enum member name for a user-facing shape name.

    ``"Pseudo-Voigt"``, ``"pseudo_voigt"`` and ``"pvoigt"`` all map to
    ``"PSEUDOVOIGT"``.
    """
    key = name.strip().upper().replace("-", "").replace("_", "").replace(" ", "")
    return _SHAPE_ALIASES.get(key, key)


class DetectorConfig(BaseModel):
    """Detector geometry and buffer pool limits.

    ``max_size_y = 0`` selects a one-dimensional detector.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="SIMPEAKS", description="Detector (port) name.")
    max_size_x: Annotated[int, Field(ge=1)] = Field(default=1024, description="Maximum frame width.")
    max_size_y: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="Maximum frame height; 0 for a 1D detector.",
    )
    size_x: Annotated[int, Field(ge=1)] | None = Field(
        default=None,
        description="Initial frame width (defaults to max_size_x).",
    )
    size_y: Annotated[int, Field(ge=1)] | None = Field(
        default=None,
        description="Initial frame height (defaults to max_size_y).",
    )
    max_peaks: Annotated[int, Field(ge=1)] = Field(default=1, description="Number of peak slots.")
    data_type: DataTypeName = Field(default="float64", description="Frame element type.")
    max_buffers: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="Buffer pool limit on live buffers; 0 for no limit.",
    )
    max_memory: Annotated[int, Field(ge=0)] = Field(
        default=0,
        description="Buffer pool limit in bytes; 0 for no limit.",
    )

    @property
    def ndim(self) -> int:
        return 1 if self.max_size_y == 0 else 2

    @property
    def element_type(self) -> ElementType:
        return ElementType.from_value(self.data_type)

    @model_validator(mode="after")
    def check_sizes(self) -> DetectorConfig:
        """Reject initial sizes larger than the detector."""
        if self.size_x is not None and self.size_x > self.max_size_x:
            msg = f"size_x ({self.size_x}) exceeds max_size_x ({self.max_size_x})"
            raise ValueError(msg)
        if self.size_y is not None and self.size_y > max(self.max_size_y, 1):
            msg = f"size_y ({self.size_y}) exceeds max_size_y ({self.max_size_y})"
            raise ValueError(msg)
        return self


class AcquisitionConfig(BaseModel):
    """Image mode and frame cadence."""

    model_config = ConfigDict(extra="forbid")

    image_mode: ImageModeName = Field(default="continuous", description="single, multiple or continuous.")
    num_images: Annotated[int, Field(ge=1)] = Field(
        default=1,
        description="Frames per acquisition in multiple mode.",
    )
    acquire_period: Annotated[float, Field(ge=0)] = Field(
        default=1.0,
        description="Seconds between frames.",
    )
    integrate: bool = Field(default=False, description="Accumulate frames instead of regenerating.")
    array_callbacks: bool = Field(default=True, description="Publish frames to the output sink.")


class AxisBackgroundConfig(BaseModel):
    """Background profile along one axis."""

    model_config = ConfigDict(extra="forbid")

    type: BackgroundName = "none"
    c0: float = 0.0
    c1: float = 0.0
    c2: float = 0.0
    c3: float = 0.0
    shift: float = 0.0


class BackgroundConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    x: AxisBackgroundConfig = Field(default_factory=AxisBackgroundConfig)
    y: AxisBackgroundConfig = Field(
        default_factory=AxisBackgroundConfig,
        description="Y-axis profile; ignored by 1D detectors.",
    )


class NoiseConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: NoiseName = "none"
    level: float = Field(default=0.0, description="Scale applied to unit noise.")
    clamp: bool = Field(default=False, description="Clip noise to [lower, upper].")
    lower: float = 0.0
    upper: float = 0.0

    @model_validator(mode="after")
    def check_bounds(self) -> NoiseConfig:
        if self.clamp and self.lower > self.upper:
            msg = f"noise lower bound ({self.lower}) is above upper bound ({self.upper})"
            raise ValueError(msg)
        return self


class PeakConfig(BaseModel):
    """Initial settings of one peak slot."""

    model_config = ConfigDict(extra="forbid")

    shape: str = Field(default="gaussian", description="Shape name, e.g. 'gaussian' or 'pseudo-voigt'.")
    position_x: float = 0.0
    position_y: float = 0.0
    fwhm_x: Annotated[float, Field(gt=0)] = 1.0
    fwhm_y: Annotated[float, Field(gt=0)] = 1.0
    amplitude: float = 1.0
    correlation: Annotated[float, Field(ge=-1, le=1)] = 0.0
    param1: float = Field(default=0.0, description="Shape parameter (Moffat beta).")
    param2: float = 0.0
    bounds: tuple[int, int, int, int] | None = Field(
        default=None,
        description="Inclusive (min_x, max_x, min_y, max_y) bins the peak is restricted to.",
    )

    @field_validator("shape")
    @classmethod
    def validate_shape(cls, v: str) -> str:
        """Accept any name known in either dimensionality."""
        key = normalize_shape_name(v)
        if key not in PeakType1D.__members__ and key not in PeakType2D.__members__:
            msg = f"Unknown peak shape: {v!r}"
            raise ValueError(msg)
        return v

    def ordinal(self, ndim: int) -> int:
        """Menu ordinal of this shape for a detector of ``ndim`` dimensions.

        Raises
        ------
            ValueError: If the shape does not exist in that dimensionality
        """
        enum_cls = PeakType1D if ndim == 1 else PeakType2D
        key = normalize_shape_name(self.shape)
        try:
            return int(enum_cls[key])
        except KeyError:
            msg = f"Peak shape {self.shape!r} is not available for {ndim}D frames"
            raise ValueError(msg) from None


class SimPeaksConfig(BaseModel):
    """Top-level configuration of a simulated detector."""

    model_config = ConfigDict(extra="forbid")

    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    acquisition: AcquisitionConfig = Field(default_factory=AcquisitionConfig)
    background: BackgroundConfig = Field(default_factory=BackgroundConfig)
    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    peaks: list[PeakConfig] = Field(default_factory=list, description="Initial peak settings, by slot.")

    @model_validator(mode="after")
    def check_peaks(self) -> SimPeaksConfig:
        """Peaks must fit in the slots and exist in the detector's dimensionality."""
        if len(self.peaks) > self.detector.max_peaks:
            msg = f"{len(self.peaks)} peaks configured but max_peaks is {self.detector.max_peaks}"
            raise ValueError(msg)
        for peak in self.peaks:
            peak.ordinal(self.detector.ndim)
        return self


def apply_config(config: SimPeaksConfig, store: ParameterStore) -> None:
    """Write every setting of ``config`` into ``store``.

    Peak slots beyond ``config.peaks`` are left untouched.
    """
    detector = config.detector
    ndim = detector.ndim
    store.set_int(ParamKey.DATA_TYPE, int(detector.element_type))
    store.set_int(ParamKey.SIZE_X, detector.size_x or detector.max_size_x)
    store.set_int(ParamKey.SIZE_Y, detector.size_y or max(detector.max_size_y, 1))

    acquisition = config.acquisition
    store.set_int(ParamKey.IMAGE_MODE, int(ImageMode[acquisition.image_mode.upper()]))
    store.set_int(ParamKey.NUM_IMAGES, acquisition.num_images)
    store.set_float(ParamKey.ACQUIRE_PERIOD, acquisition.acquire_period)
    store.set_int(ParamKey.INTEGRATE, int(acquisition.integrate))
    store.set_int(ParamKey.ARRAY_CALLBACKS, int(acquisition.array_callbacks))

    for axis in ("x", "y"):
        background: AxisBackgroundConfig = getattr(config.background, axis)
        type_key, c0, c1, c2, c3, shift = BACKGROUND_KEYS[axis]
        store.set_int(type_key, int(BackgroundKind[background.type.upper()]))
        store.set_float(c0, background.c0)
        store.set_float(c1, background.c1)
        store.set_float(c2, background.c2)
        store.set_float(c3, background.c3)
        store.set_float(shift, background.shift)

    noise = config.noise
    store.set_int(ParamKey.NOISE_TYPE, int(NoiseKind[noise.type.upper()]))
    store.set_float(ParamKey.NOISE_LEVEL, noise.level)
    store.set_int(ParamKey.NOISE_CLAMP, int(noise.clamp))
    store.set_float(ParamKey.NOISE_LOWER, noise.lower)
    store.set_float(ParamKey.NOISE_UPPER, noise.upper)

    type_key = ParamKey.PEAK_TYPE_1D if ndim == 1 else ParamKey.PEAK_TYPE_2D
    for index, peak in enumerate(config.peaks):
        store.set_int(type_key, peak.ordinal(ndim), index)
        store.set_float(ParamKey.PEAK_POS_X, peak.position_x, index)
        store.set_float(ParamKey.PEAK_POS_Y, peak.position_y, index)
        store.set_float(ParamKey.PEAK_FWHM_X, peak.fwhm_x, index)
        store.set_float(ParamKey.PEAK_FWHM_Y, peak.fwhm_y, index)
        store.set_float(ParamKey.PEAK_AMPLITUDE, peak.amplitude, index)
        store.set_float(ParamKey.PEAK_CORRELATION, peak.correlation, index)
        store.set_float(ParamKey.PEAK_P1, peak.param1, index)
        store.set_float(ParamKey.PEAK_P2, peak.param2, index)
        store.set_int(ParamKey.PEAK_USE_BOUNDS, int(peak.bounds is not None), index)
        if peak.bounds is not None:
            min_x, max_x, min_y, max_y = peak.bounds
            store.set_int(ParamKey.PEAK_MIN_X, min_x, index)
            store.set_int(ParamKey.PEAK_MAX_X, max_x, index)
            store.set_int(ParamKey.PEAK_MIN_Y, min_y, index)
            store.set_int(ParamKey.PEAK_MAX_Y, max_y, index)


__all__ = [
    "AcquisitionConfig",
    "AxisBackgroundConfig",
    "BackgroundConfig",
    "DataTypeName",
    "DetectorConfig",
    "NoiseConfig",
    "PeakConfig",
    "SimPeaksConfig",
    "apply_config",
    "normalize_shape_name",
]
