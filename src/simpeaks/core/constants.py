"""Core constants for SimPeaks frame synthesis.

Pre-computed factors used by the lineshape library and the defaults applied
to a freshly constructed driver.
"""

# =============================================================================
# Numeric Guards
# =============================================================================

ZERO_CHECK = 1e-12
"""Magnitude below which a shape parameter or peak height counts as zero.

Shape parameters inside this band are replaced by 1.0; a peak height inside
it disables amplitude normalization (scale 1.0).
"""

MIN_FWHM = 1.0
"""Smallest FWHM (in bins) any shape will render with."""

# =============================================================================
# Lineshape Factors
# =============================================================================

TWO_SQRT_2LN2 = 2.3548200450309493  # 2*sqrt(2*ln(2))
"""Ratio between Gaussian FWHM and standard deviation."""

SQRT_2PI = 2.5066282746310002  # sqrt(2*pi)

TWO_LN2 = 1.3862943611198906  # 2*ln(2)
"""Ratio between Laplace FWHM and scale factor b."""

# Thompson-Cox-Hastings approximation of the pseudo-Voigt mixing fraction
PV_P1 = 2.69269
PV_P2 = 2.42843
PV_P3 = 4.47163
PV_P4 = 0.07842
PV_E1 = 1.36603
PV_E2 = 0.47719
PV_E3 = 0.11116

# =============================================================================
# Driver Defaults
# =============================================================================

DEFAULT_ACQUIRE_PERIOD = 1.0  # seconds
"""Frame period applied at construction, matching the original driver."""

DEFAULT_NUM_IMAGES = 1

DEFAULT_MAX_BUFFERS = 0  # 0 = unlimited
DEFAULT_MAX_MEMORY = 0  # bytes, 0 = unlimited

STATUS_MESSAGE_RUNNING = "Simulation Running"
STATUS_MESSAGE_IDLE = "Simulation Idle"
