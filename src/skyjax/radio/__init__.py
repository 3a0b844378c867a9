"""Radio-astronomy helpers.

- **Doppler**: frequency ↔ radial velocity, radio definition
- **LSRK**: observer velocity corrections (Earth rotation, Earth orbit,
  solar motion)
- **Radiometry**: thermal noise power ↔ noise temperature
"""

from .doppler import doppler_to_velocity, velocity_to_doppler
from .lsrk import (
    earth_orbit_velocity_bcrs,
    earth_rotation_velocity,
    observer_velocity_lsrk,
    sun_velocity_lsrk,
)
from .radiometry import noise_power_dbm, noise_temperature

__all__ = [
    "doppler_to_velocity",
    "velocity_to_doppler",
    "earth_rotation_velocity",
    "earth_orbit_velocity_bcrs",
    "sun_velocity_lsrk",
    "observer_velocity_lsrk",
    "noise_power_dbm",
    "noise_temperature",
]
