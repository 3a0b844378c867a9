"""Celestial coordinate transformations.

This sub-module provides functions for converting between the coordinate
representations used for pointing and radio-astronomy work:

- **Precession**: equatorial coordinates between two equinoxes
- **Horizontal**: equatorial ↔ azimuth/altitude for an observer and time
- **Projections**: azimuth/altitude ↔ XY85 and XY30 mount angles
- **Galactic**: J2000 equatorial ↔ galactic longitude/latitude
"""

from ._types import AzAlt, GeodeticPosition, RADec
from .galactic import (
    equatorial_to_galactic,
    galactic_to_equatorial,
    north_galactic_pole_j2000,
)
from .horizontal import (
    az_alt_to_ra_dec,
    lst_and_ra_to_longitude,
    ra_dec_to_az_alt,
)
from .precession import precess, precession_matrix
from .projections import (
    az_alt_to_xy30,
    az_alt_to_xy85,
    xy30_to_az_alt,
    xy85_to_az_alt,
)

__all__ = [
    "AzAlt",
    "GeodeticPosition",
    "RADec",
    "precess",
    "precession_matrix",
    "ra_dec_to_az_alt",
    "az_alt_to_ra_dec",
    "lst_and_ra_to_longitude",
    "az_alt_to_xy85",
    "az_alt_to_xy30",
    "xy85_to_az_alt",
    "xy30_to_az_alt",
    "north_galactic_pole_j2000",
    "equatorial_to_galactic",
    "galactic_to_equatorial",
]
