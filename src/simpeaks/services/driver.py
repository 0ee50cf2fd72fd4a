"""Simulated detector driver.

:class:`SimPeaksDriver` assembles the default collaborators (parameter
library, buffer pool, clock) around an :class:`AcquisitionController` and
gives parameter writes their detector semantics: writing ``ACQUIRE`` starts
or stops the acquisition, sizes are clamped to the detector and ``RESET``
restarts integration from an empty frame.

Example:
    config = load_config(Path("simpeaks.toml"))
    with SimPeaksDriver(config) as driver:
        sink = QueueSink(driver.pool)
        driver.set_sink(sink)
        driver.start()
        frame = sink.get(timeout=5.0)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from simpeaks.core.acquisition.controller import AcquisitionController
from simpeaks.core.algorithms.compositor import FrameCompositor
from simpeaks.core.algorithms.noise import NoiseGenerator
from simpeaks.core.domain.config import SimPeaksConfig, apply_config
from simpeaks.core.domain.peaks import peak_type_names
from simpeaks.core.domain.state import DetectorStatus, ImageMode
from simpeaks.core.frames import NDArrayPool
from simpeaks.core.params.keys import ParamKey
from simpeaks.core.params.library import ParameterLibrary
from simpeaks.core.shared.exceptions import ParameterError

if TYPE_CHECKING:
    import numpy as np

    from simpeaks.core.interfaces import Clock, OutputSink
    from simpeaks.core.shared.events import EventDispatcher

_logger = logging.getLogger("simpeaks.driver")


class SimPeaksDriver:
    """A simulated detector producing frames of peaks on background and noise.

    Args:
        config: Detector and initial simulation settings (defaults apply if omitted)
        sink: Consumer of published frames; see also :meth:`set_sink`
        rng: Random generator for noise (wall-clock seeded if omitted)
        clock: Time source for the acquisition loop
    """

    def __init__(
        self,
        config: SimPeaksConfig | None = None,
        sink: OutputSink | None = None,
        rng: np.random.Generator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config if config is not None else SimPeaksConfig()
        detector = self.config.detector
        self.name = detector.name
        self.ndim = detector.ndim
        self.max_peaks = detector.max_peaks
        self.max_size_x = detector.max_size_x
        self.max_size_y = max(detector.max_size_y, 1) if self.ndim == 2 else 1

        self.params = ParameterLibrary(max_peaks=self.max_peaks)
        self.pool = NDArrayPool(max_buffers=detector.max_buffers, max_memory=detector.max_memory)

        self.params.set_int(ParamKey.ACQUIRE, 0)
        self.params.set_int(ParamKey.STATUS, DetectorStatus.IDLE)
        self.params.set_int(ParamKey.MAX_SIZE_X, self.max_size_x)
        self.params.set_int(ParamKey.MAX_SIZE_Y, detector.max_size_y)
        apply_config(self.config, self.params)

        self.controller = AcquisitionController(
            self.params,
            self.pool,
            sink,
            ndim=self.ndim,
            max_peaks=self.max_peaks,
            clock=clock,
            compositor=FrameCompositor(NoiseGenerator(rng)),
            name=f"{self.name}Task",
        )
        _logger.info(
            "%s: %dD detector, max size %d x %d, %d peak(s), %s",
            self.name,
            self.ndim,
            self.max_size_x,
            self.max_size_y,
            self.max_peaks,
            detector.element_type.name,
        )

    # ------------------------------------------------------------------
    # Parameter writes
    # ------------------------------------------------------------------

    def write_int(self, key: ParamKey | str, value: int, index: int = 0) -> None:
        """Write an integer parameter with detector semantics.

        Raises
        ------
            ParameterError: If the key, index or value type is invalid
        """
        try:
            key = ParamKey(key)
        except ValueError:
            msg = f"Unknown parameter: {key!r}"
            raise ParameterError(msg) from None
        value = int(value)

        if key == ParamKey.ACQUIRE:
            self._write_acquire(value)
            return
        if key == ParamKey.SIZE_X:
            value = min(max(value, 1), self.max_size_x)
        elif key == ParamKey.SIZE_Y:
            value = min(max(value, 1), self.max_size_y)
        elif key == ParamKey.RESET:
            if value:
                self.controller.request_reset()
            value = 0

        self.params.set_int(key, value, index)

    def write_float(self, key: ParamKey | str, value: float, index: int = 0) -> None:
        """Write a float parameter.

        Raises
        ------
            ParameterError: If the key, index or value type is invalid
        """
        self.params.set_float(key, value, index)

    def _write_acquire(self, value: int) -> None:
        # Written before signalling: the controller clears ACQUIRE and STATUS on completion
        busy = self.controller.acquiring or bool(self.params.get_int(ParamKey.ACQUIRE))
        self.params.set_int(ParamKey.ACQUIRE, value)
        if value and not busy:
            self.params.set_int(ParamKey.STATUS, DetectorStatus.ACQUIRE)
            self.controller.start()
        elif not value and busy:
            continuous = self.params.get_int(ParamKey.IMAGE_MODE) == ImageMode.CONTINUOUS
            self.params.set_int(ParamKey.STATUS, DetectorStatus.IDLE if continuous else DetectorStatus.ABORTED)
            self.controller.stop()

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.write_int(ParamKey.ACQUIRE, 1)

    def stop(self) -> None:
        self.write_int(ParamKey.ACQUIRE, 0)

    def set_sink(self, sink: OutputSink | None) -> None:
        """Replace the output sink; takes effect from the next frame."""
        self.controller.sink = sink

    def shutdown(self) -> None:
        """Stop the producer thread and release its buffer."""
        self.controller.shutdown()
        _logger.info("%s shut down after %d frame(s)", self.name, self.controller.array_counter)

    def __enter__(self) -> SimPeaksDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def acquiring(self) -> bool:
        return self.controller.acquiring

    @property
    def events(self) -> EventDispatcher:
        """Acquisition events (started, frame completed, stopped, error)."""
        return self.controller.events

    @property
    def sink(self) -> OutputSink | None:
        return self.controller.sink

    def peak_type_names(self, ndim: int | None = None) -> list[str]:
        """Shape menu for ``ndim`` (defaults to the detector's dimensionality)."""
        return peak_type_names(self.ndim if ndim is None else ndim)

    def status(self) -> dict[str, Any]:
        """Current acquisition status values."""
        params = self.params
        return {
            "acquiring": self.controller.acquiring,
            "status": DetectorStatus(params.get_int(ParamKey.STATUS)).name,
            "status_message": params.get_string(ParamKey.STATUS_MESSAGE),
            "array_counter": params.get_int(ParamKey.ARRAY_COUNTER),
            "images_counter": params.get_int(ParamKey.NUM_IMAGES_COUNTER),
            "elapsed_time": params.get_float(ParamKey.ELAPSED_TIME),
        }

    def report(self, details: int = 0) -> str:
        """Human-readable description of the driver; more lines for ``details > 0``."""
        lines = [f"SimPeaksDriver {self.name}"]
        if details > 0:
            params = self.params
            lines += [
                f"  max size:    {self.max_size_x} x {self.max_size_y} ({self.ndim}D)",
                f"  max peaks:   {self.max_peaks}",
                f"  size:        {params.get_int(ParamKey.SIZE_X)} x {params.get_int(ParamKey.SIZE_Y)}",
                f"  data type:   {params.get_int(ParamKey.DATA_TYPE)}",
                f"  acquiring:   {self.controller.acquiring}",
                f"  frames:      {self.controller.array_counter}",
            ]
            lines.append(f"  {self.pool.report()}")
        return "\n".join(lines)


__all__ = ["SimPeaksDriver"]
