"""Shared typing aliases used across SimPeaks."""

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]
IntArray = npt.NDArray[np.int_]
FrameArray = npt.NDArray[np.generic]
ArrayLike = npt.ArrayLike
