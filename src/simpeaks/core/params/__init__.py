"""Parameter keys, the default parameter library and per-frame snapshots."""

from simpeaks.core.params.keys import BACKGROUND_KEYS, DEFINITIONS, PARAMETERS, ParamDef, ParamKey
from simpeaks.core.params.library import ParameterLibrary
from simpeaks.core.params.snapshot import read_background, read_noise, read_peak, read_peaks

__all__ = [
    "BACKGROUND_KEYS",
    "DEFINITIONS",
    "PARAMETERS",
    "ParamDef",
    "ParamKey",
    "ParameterLibrary",
    "read_background",
    "read_noise",
    "read_peak",
    "read_peaks",
]
