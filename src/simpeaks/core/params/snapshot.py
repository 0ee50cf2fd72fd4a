"""Per-frame snapshots of the simulation settings.

Each call reads the current values afresh; nothing is cached between frames.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from simpeaks.core.domain.peaks import BoundingBox, PeakSpec, peak_type_for
from simpeaks.core.domain.signal import BackgroundKind, BackgroundSpec, NoiseKind, NoiseSpec, kind_for
from simpeaks.core.params.keys import BACKGROUND_KEYS, ParamKey

if TYPE_CHECKING:
    from simpeaks.core.interfaces import ParameterStore


def read_peak(store: ParameterStore, index: int, ndim: int) -> PeakSpec:
    """Snapshot of peak ``index``; the shape comes from the 1D or 2D type key."""
    type_key = ParamKey.PEAK_TYPE_1D if ndim == 1 else ParamKey.PEAK_TYPE_2D
    shape = peak_type_for(ndim, store.get_int(type_key, index))

    bounds = None
    if store.get_int(ParamKey.PEAK_USE_BOUNDS, index):
        bounds = BoundingBox(
            min_x=store.get_int(ParamKey.PEAK_MIN_X, index),
            max_x=store.get_int(ParamKey.PEAK_MAX_X, index),
            min_y=store.get_int(ParamKey.PEAK_MIN_Y, index),
            max_y=store.get_int(ParamKey.PEAK_MAX_Y, index),
        )

    return PeakSpec(
        shape=shape,
        position_x=store.get_float(ParamKey.PEAK_POS_X, index),
        position_y=store.get_float(ParamKey.PEAK_POS_Y, index),
        fwhm_x=store.get_float(ParamKey.PEAK_FWHM_X, index),
        fwhm_y=store.get_float(ParamKey.PEAK_FWHM_Y, index),
        amplitude=store.get_float(ParamKey.PEAK_AMPLITUDE, index),
        correlation=store.get_float(ParamKey.PEAK_CORRELATION, index),
        param1=store.get_float(ParamKey.PEAK_P1, index),
        param2=store.get_float(ParamKey.PEAK_P2, index),
        bounds=bounds,
    )


def read_peaks(store: ParameterStore, max_peaks: int, ndim: int) -> list[PeakSpec]:
    """Snapshots of all ``max_peaks`` peak slots, disabled ones included."""
    return [read_peak(store, index, ndim) for index in range(max_peaks)]


def read_background(store: ParameterStore, axis: str) -> BackgroundSpec:
    """Background snapshot for ``axis`` (``"x"`` or ``"y"``)."""
    type_key, c0, c1, c2, c3, shift = BACKGROUND_KEYS[axis]
    return BackgroundSpec(
        kind=kind_for(BackgroundKind, store.get_int(type_key)),
        c0=store.get_float(c0),
        c1=store.get_float(c1),
        c2=store.get_float(c2),
        c3=store.get_float(c3),
        shift=store.get_float(shift),
    )


def read_noise(store: ParameterStore) -> NoiseSpec:
    """Noise snapshot."""
    return NoiseSpec(
        kind=kind_for(NoiseKind, store.get_int(ParamKey.NOISE_TYPE)),
        level=store.get_float(ParamKey.NOISE_LEVEL),
        clamp=bool(store.get_int(ParamKey.NOISE_CLAMP)),
        lower=store.get_float(ParamKey.NOISE_LOWER),
        upper=store.get_float(ParamKey.NOISE_UPPER),
    )


__all__ = ["read_background", "read_noise", "read_peak", "read_peaks"]
