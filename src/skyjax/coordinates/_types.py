"""Value types for celestial and horizontal coordinates.

All types are :class:`~typing.NamedTuple` instances, which JAX treats as
pytrees, so they can be passed through ``jax.jit`` and ``jax.vmap``
directly and their fields may be scalars or arrays.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class RADec(NamedTuple):
    """Equatorial coordinates.

    Attributes:
        ra: Right ascension in ``[0, 24)``. Units: *hours*
        dec: Declination in ``[-90, 90]``. Units: *deg*
    """

    ra: Array
    dec: Array


class AzAlt(NamedTuple):
    """Horizontal coordinates.

    Attributes:
        az: Azimuth, clockwise from north, in ``[0, 360)``. Units: *deg*
        alt: Altitude above the horizon in ``[-90, 90]``. Units: *deg*
    """

    az: Array
    alt: Array


class GeodeticPosition(NamedTuple):
    """Observer location on the Earth.

    No datum transformation is applied anywhere in skyjax; latitude is used
    as given.

    Attributes:
        latitude: Latitude, north positive. Units: *deg*
        longitude: Longitude, east positive. Units: *deg*
        height: Height above sea level. Units: *m*
    """

    latitude: float
    longitude: float
    height: float = 0.0
