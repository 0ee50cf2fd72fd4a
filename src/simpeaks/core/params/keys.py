"""Parameter keys and their definitions.

Detector-level keys reuse the areaDetector names; keys specific to the peak
simulation carry the ``ADSP_`` prefix. Per-peak keys are addressable arrays
with one slot per configured peak.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

ParamKind = Literal["int", "float", "string"]


class ParamKey(str, Enum):
    """Names of the parameters held by the parameter library."""

    # Detector and acquisition
    ACQUIRE = "ACQUIRE"
    ACQUIRE_PERIOD = "ACQ_PERIOD"
    IMAGE_MODE = "IMAGE_MODE"
    NUM_IMAGES = "NIMAGES"
    NUM_IMAGES_COUNTER = "NIMAGES_COUNTER"
    ARRAY_COUNTER = "ARRAY_COUNTER"
    ARRAY_CALLBACKS = "ARRAY_CALLBACKS"
    DATA_TYPE = "DATA_TYPE"
    MAX_SIZE_X = "MAX_SIZE_X"
    MAX_SIZE_Y = "MAX_SIZE_Y"
    SIZE_X = "SIZE_X"
    SIZE_Y = "SIZE_Y"
    ARRAY_SIZE_X = "ARRAY_SIZE_X"
    ARRAY_SIZE_Y = "ARRAY_SIZE_Y"
    STATUS = "STATUS"
    STATUS_MESSAGE = "STATUS_MESSAGE"
    TIME_STAMP = "TIME_STAMP"

    # Simulation control
    INTEGRATE = "ADSP_INTEGRATE"
    RESET = "ADSP_RESET"
    ELAPSED_TIME = "ADSP_ELAPSED_TIME"

    # Background, per axis
    BG_TYPE_X = "ADSP_BG_TYPE_X"
    BG_C0_X = "ADSP_BG_C0_X"
    BG_C1_X = "ADSP_BG_C1_X"
    BG_C2_X = "ADSP_BG_C2_X"
    BG_C3_X = "ADSP_BG_C3_X"
    BG_SHIFT_X = "ADSP_BG_SHIFT_X"
    BG_TYPE_Y = "ADSP_BG_TYPE_Y"
    BG_C0_Y = "ADSP_BG_C0_Y"
    BG_C1_Y = "ADSP_BG_C1_Y"
    BG_C2_Y = "ADSP_BG_C2_Y"
    BG_C3_Y = "ADSP_BG_C3_Y"
    BG_SHIFT_Y = "ADSP_BG_SHIFT_Y"

    # Noise
    NOISE_TYPE = "ADSP_NOISE_TYPE"
    NOISE_LEVEL = "ADSP_NOISE_LEVEL"
    NOISE_CLAMP = "ADSP_NOISE_CLAMP"
    NOISE_LOWER = "ADSP_NOISE_LOWER"
    NOISE_UPPER = "ADSP_NOISE_UPPER"

    # Peaks (addressable)
    PEAK_TYPE_1D = "ADSP_PEAK_TYPE_1D"
    PEAK_TYPE_2D = "ADSP_PEAK_TYPE_2D"
    PEAK_POS_X = "ADSP_PEAK_POS_X"
    PEAK_POS_Y = "ADSP_PEAK_POS_Y"
    PEAK_FWHM_X = "ADSP_PEAK_FWHM_X"
    PEAK_FWHM_Y = "ADSP_PEAK_FWHM_Y"
    PEAK_AMPLITUDE = "ADSP_PEAK_AMP"
    PEAK_CORRELATION = "ADSP_PEAK_COR"
    PEAK_P1 = "ADSP_PEAK_P1"
    PEAK_P2 = "ADSP_PEAK_P2"
    PEAK_USE_BOUNDS = "ADSP_PEAK_USE_BOUNDS"
    PEAK_MIN_X = "ADSP_PEAK_MIN_X"
    PEAK_MAX_X = "ADSP_PEAK_MAX_X"
    PEAK_MIN_Y = "ADSP_PEAK_MIN_Y"
    PEAK_MAX_Y = "ADSP_PEAK_MAX_Y"


@dataclass(frozen=True, slots=True)
class ParamDef:
    """Type, default value and arity of one parameter."""

    key: ParamKey
    kind: ParamKind
    default: int | float | str
    per_peak: bool = False


def _ints(*keys: ParamKey, default: int = 0, per_peak: bool = False) -> list[ParamDef]:
    return [ParamDef(key, "int", default, per_peak) for key in keys]


def _floats(*keys: ParamKey, default: float = 0.0, per_peak: bool = False) -> list[ParamDef]:
    return [ParamDef(key, "float", default, per_peak) for key in keys]


K = ParamKey

PARAMETERS: tuple[ParamDef, ...] = (
    *_ints(
        K.ACQUIRE,
        K.NUM_IMAGES_COUNTER,
        K.ARRAY_COUNTER,
        K.DATA_TYPE,
        K.MAX_SIZE_X,
        K.MAX_SIZE_Y,
        K.SIZE_X,
        K.SIZE_Y,
        K.ARRAY_SIZE_X,
        K.ARRAY_SIZE_Y,
        K.STATUS,
        K.INTEGRATE,
        K.RESET,
        K.BG_TYPE_X,
        K.BG_TYPE_Y,
        K.NOISE_TYPE,
        K.NOISE_CLAMP,
    ),
    ParamDef(K.IMAGE_MODE, "int", 2),
    ParamDef(K.NUM_IMAGES, "int", 1),
    ParamDef(K.ARRAY_CALLBACKS, "int", 1),
    ParamDef(K.ACQUIRE_PERIOD, "float", 1.0),
    ParamDef(K.STATUS_MESSAGE, "string", ""),
    *_floats(
        K.TIME_STAMP,
        K.ELAPSED_TIME,
        K.BG_C0_X,
        K.BG_C1_X,
        K.BG_C2_X,
        K.BG_C3_X,
        K.BG_SHIFT_X,
        K.BG_C0_Y,
        K.BG_C1_Y,
        K.BG_C2_Y,
        K.BG_C3_Y,
        K.BG_SHIFT_Y,
        K.NOISE_LEVEL,
        K.NOISE_LOWER,
        K.NOISE_UPPER,
    ),
    *_ints(
        K.PEAK_TYPE_1D,
        K.PEAK_TYPE_2D,
        K.PEAK_USE_BOUNDS,
        K.PEAK_MIN_X,
        K.PEAK_MAX_X,
        K.PEAK_MIN_Y,
        K.PEAK_MAX_Y,
        per_peak=True,
    ),
    *_floats(
        K.PEAK_POS_X,
        K.PEAK_POS_Y,
        K.PEAK_CORRELATION,
        K.PEAK_P1,
        K.PEAK_P2,
        per_peak=True,
    ),
    *_floats(K.PEAK_FWHM_X, K.PEAK_FWHM_Y, K.PEAK_AMPLITUDE, default=1.0, per_peak=True),
)

DEFINITIONS: dict[ParamKey, ParamDef] = {d.key: d for d in PARAMETERS}

# Background keys per axis, in (type, c0, c1, c2, c3, shift) order
BACKGROUND_KEYS: dict[str, tuple[ParamKey, ...]] = {
    "x": (K.BG_TYPE_X, K.BG_C0_X, K.BG_C1_X, K.BG_C2_X, K.BG_C3_X, K.BG_SHIFT_X),
    "y": (K.BG_TYPE_Y, K.BG_C0_Y, K.BG_C1_Y, K.BG_C2_Y, K.BG_C3_Y, K.BG_SHIFT_Y),
}

__all__ = ["BACKGROUND_KEYS", "DEFINITIONS", "PARAMETERS", "ParamDef", "ParamKey", "ParamKind"]
