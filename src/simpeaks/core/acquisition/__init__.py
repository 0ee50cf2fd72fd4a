"""Acquisition state machine and its producer thread."""

from simpeaks.core.acquisition.clock import SystemClock
from simpeaks.core.acquisition.controller import AcquisitionController

__all__ = ["AcquisitionController", "SystemClock"]
