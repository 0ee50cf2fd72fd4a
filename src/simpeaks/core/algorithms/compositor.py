"""Frame compositing: background, peaks and noise into a typed buffer.

Every contribution is computed in float64 and then cast to the buffer's
element type before it is added. For integer buffers the cast truncates
toward zero, and sums that leave the type's range wrap around; nothing
saturates. This matches what a native truncating cast does and is kept on
purpose for compatibility.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from simpeaks.core.algorithms.background import background_frame
from simpeaks.core.algorithms.noise import NoiseGenerator
from simpeaks.core.lineshapes import evaluate, normalization_scale

if TYPE_CHECKING:
    from collections.abc import Sequence

    from simpeaks.core.domain.frame import FrameBuffer
    from simpeaks.core.domain.peaks import PeakSpec
    from simpeaks.core.domain.signal import BackgroundSpec, NoiseSpec
    from simpeaks.core.shared.typing import FloatArray, FrameArray


def accumulate(target: FrameArray, values: FloatArray) -> None:
    """Add ``values`` to ``target`` in place after casting to its element type."""
    target += np.asarray(values).astype(target.dtype, copy=False)


class FrameCompositor:
    """Renders one frame into a buffer.

    Args:
        noise: Noise generator; a wall-clock seeded one is created if omitted
    """

    def __init__(self, noise: NoiseGenerator | None = None) -> None:
        self.noise = noise if noise is not None else NoiseGenerator()

    def compose(
        self,
        buffer: FrameBuffer | None,
        peaks: Sequence[PeakSpec],
        background_x: BackgroundSpec,
        background_y: BackgroundSpec | None = None,
        noise: NoiseSpec | None = None,
        integrate: bool = False,
        needs_reset: bool = False,
    ) -> bool:
        """Render background, peaks and noise into ``buffer``.

        Without integration the buffer is zeroed first; with integration the
        frame accumulates on top of the previous content unless a reset is
        pending.

        Returns
        -------
            True if the buffer was zeroed, i.e. a pending reset was consumed

        Raises
        ------
            ValueError: If ``buffer`` is None
        """
        if buffer is None:
            msg = "compose() requires an allocated buffer"
            raise ValueError(msg)

        data = buffer.data
        reset = not integrate or needs_reset
        if reset:
            data.fill(0)

        two_d = data.ndim == 2
        size_x = buffer.size_x
        size_y = buffer.size_y

        with np.errstate(invalid="ignore", over="ignore", divide="ignore"):
            accumulate(
                data,
                background_frame(background_x, background_y if two_d else None, size_x, size_y),
            )

            for peak in peaks:
                if peak.enabled:
                    self._render_peak(data, peak)

            if noise is not None and noise.enabled:
                accumulate(data, self.noise.sample(noise, data.shape))

        return reset

    def _render_peak(self, data: FrameArray, peak: PeakSpec) -> None:
        two_d = data.ndim == 2
        size_x = data.shape[-1]
        size_y = data.shape[0] if two_d else None

        if peak.bounds is None:
            region = (slice(0, size_y), slice(0, size_x)) if two_d else (slice(0, size_x),)
        else:
            region = peak.bounds.clip(size_x, size_y)
            if region is None:
                return

        x = np.arange(size_x, dtype=np.float64)[region[-1]]
        if two_d:
            y = np.arange(size_y, dtype=np.float64)[region[0]]
            values = evaluate(peak.shape, peak, x[np.newaxis, :], y[:, np.newaxis])
        else:
            values = evaluate(peak.shape, peak, x)

        accumulate(data[region], normalization_scale(peak) * values)


__all__ = ["FrameCompositor", "accumulate"]
