"""Reference frame rotations.

- **Rx**: elementary frame rotation about the x-axis
- **Ecliptic**: ecliptic to equatorial by a given obliquity, and the
  fixed J2000 ecliptic to BCRS rotation
"""

from .ecliptic import (
    rotation_ecliptic_to_bcrs,
    rotation_ecliptic_to_equatorial,
)
from .rotations import Rx

__all__ = [
    "Rx",
    "rotation_ecliptic_to_bcrs",
    "rotation_ecliptic_to_equatorial",
]
