"""
Propagator Configuration and Constants

Defaults and thresholds shared across the propagator package.

Defaults:
    Gravity model and operations mode used when callers do not choose one.
    WGS-72 with the improved operations mode matches the behaviour of the
    reference sgp4 library's ``Satrec.twoline2rv``.

Fallback TLE Data:
    Hardcoded ISS element set for demonstrations and testing when live data
    is unavailable. Accuracy degrades quickly away from its epoch
    (2023-02-23), which is irrelevant for regression tests.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import math
from typing import Dict, Any

DEFAULT_GRAVITY_MODEL: str = "wgs72"
DEFAULT_OPS_MODE: str = "i"

# Unit conversions
DEG2RAD: float = math.pi / 180.0
TWOPI: float = 2.0 * math.pi
XPDOTP: float = 1440.0 / TWOPI  # rev/day to rad/min
MINUTES_PER_DAY: float = 1440.0

# Epoch of the internal day count (0 Jan 1950, 0h) as a Julian date
SGP4_EPOCH_JD: float = 2433281.5

# Orbits with period at or above this value (minutes) use SDP4
DEEP_SPACE_PERIOD_MIN: float = 225.0

# Kepler solver
KEPLER_TOLERANCE: float = 1.0e-12
KEPLER_MAX_ITER: int = 10
KEPLER_MAX_STEP: float = 0.95

# Fallback ISS TLE for demonstrations and testing
FALLBACK_ISS_TLE: Dict[str, Any] = {
    'name': 'ISS (ZARYA)',
    'norad_id': 25544,
    'line1': '1 25544U 98067A   23054.45075046  .00016717  00000-0  30164-3 0  9994',
    'line2': '2 25544  51.6417 203.5231 0005102 218.5493 303.0730 15.49367633384550',
    'epoch': '2023-02-23T10:49:04Z',
    'mean_motion': 15.49367633,
    'inclination': 51.6417,
    'eccentricity': 0.0005102
}
