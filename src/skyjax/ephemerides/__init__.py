"""Solar-system ephemerides.

- **Sun**: low-precision analytical position, sunrise and sunset
- **Moon**: low-precision analytical topocentric position
- **Earth**: heliocentric and barycentric state from a harmonic series
"""

from .earth import (
    EarthState,
    earth_state,
    earth_state_from_jd,
    harmonic_series,
)
from .moon import moon_days, moon_position
from .sun import sun_position, sunrise

__all__ = [
    "EarthState",
    "earth_state",
    "earth_state_from_jd",
    "harmonic_series",
    "moon_days",
    "moon_position",
    "sun_position",
    "sunrise",
]
