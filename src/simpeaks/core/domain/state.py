"""Acquisition state owned by the producer thread."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ImageMode(IntEnum):
    """How many frames one start request produces."""

    SINGLE = 0
    MULTIPLE = 1
    CONTINUOUS = 2


class DetectorStatus(IntEnum):
    """Detector status values, numbered as the areaDetector ``ADStatus`` list."""

    IDLE = 0
    ACQUIRE = 1
    READOUT = 2
    CORRECT = 3
    SAVING = 4
    ABORTING = 5
    ERROR = 6
    WAITING = 7
    INITIALIZING = 8
    DISCONNECTED = 9
    ABORTED = 10


@dataclass(slots=True)
class AcquisitionState:
    """Mutable state of one acquisition, touched only by the producer thread."""

    acquiring: bool = False
    image_mode: ImageMode = ImageMode.CONTINUOUS
    frames_completed: int = 0
    start_time: float = 0.0
    elapsed: float = 0.0

    def begin(self, image_mode: ImageMode, start_time: float) -> None:
        self.acquiring = True
        self.image_mode = image_mode
        self.frames_completed = 0
        self.start_time = start_time
        self.elapsed = 0.0

    def reset(self) -> None:
        """Return to idle."""
        self.acquiring = False

    def is_complete(self, num_images: int) -> bool:
        """Whether the configured image mode has produced all of its frames."""
        if self.image_mode == ImageMode.SINGLE:
            return self.frames_completed >= 1
        if self.image_mode == ImageMode.MULTIPLE:
            return self.frames_completed >= num_images
        return False


__all__ = ["AcquisitionState", "DetectorStatus", "ImageMode"]
