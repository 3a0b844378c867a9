"""Low-precision analytical position of the Sun, and sunrise / sunset times.

The position model uses the mean longitude and mean anomaly of the Sun,
a three-term equation of the centre and a linearly drifting obliquity.
It is accurate to about 0.01 deg between 1950 and 2050, ample for
pointing an antenna or deciding whether the Sun is in a beam.

Sunrise and sunset are found from the sunrise equation in a single pass
(no iteration on the Sun's position at the event), which is good to a
couple of minutes away from the polar circles.

.. note::

    Time system: UTC is used directly where the models expect TT or UT1.

References:
    1. *The Astronomical Almanac*, section C, "Low precision formulas
       for the Sun".
"""

from __future__ import annotations

import datetime

import jax.numpy as jnp
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DEG2RAD, RAD2DEG, SECONDS_PER_DAY
from skyjax.coordinates import AzAlt, RADec, ra_dec_to_az_alt
from skyjax.epoch import Epoch
from skyjax.frames import rotation_ecliptic_to_equatorial
from skyjax.time import JD_J2000, caldate_to_jd
from skyjax.utils import modulo

# TT - UTC at the time the sunrise equation was tabulated [s]
_TT_UTC = 69.184

# Apparent altitude of the Sun's centre at rise and set, allowing for
# refraction and the solar semi-diameter [deg]
_SUNRISE_ALTITUDE = -0.833

# Axial tilt used by the sunrise equation [deg]
_SUNRISE_TILT = 23.4397


def _equation_of_centre(mean_anomaly):
    """Equation of the centre in degrees for a mean anomaly in radians."""
    return (1.9148 * jnp.sin(mean_anomaly)
            + 0.0200 * jnp.sin(2.0 * mean_anomaly)
            + 0.0003 * jnp.sin(3.0 * mean_anomaly))


def sun_position(epc: Epoch, latitude: ArrayLike, longitude: ArrayLike) -> tuple[AzAlt, RADec]:
    """Apparent position of the Sun for an observer.

    Args:
        epc: Time of observation.
        latitude: Observer latitude. Units: *deg*
        longitude: Observer longitude, east positive. Units: *deg*

    Returns:
        tuple[AzAlt, RADec]: Horizontal coordinates, and equatorial
        coordinates of date (RA in hours).

    Examples:
        ```python
        from skyjax import Epoch
        from skyjax.ephemerides import sun_position
        aa, rd = sun_position(Epoch(2024, 6, 20, 12, 0, 0), 51.5, 0.0)
        ```
    """
    n = epc.jd() - JD_J2000

    l = modulo(280.461 + 0.9856474 * n, 360.0)
    g = modulo(357.5291 + 0.98560028 * n, 360.0) * DEG2RAD

    ecliptic_longitude = (l + _equation_of_centre(g)) * DEG2RAD
    obliquity = 23.4393 - 3.563e-7 * n

    # Ecliptic latitude of the Sun is taken as zero
    r_ecl = jnp.stack([jnp.cos(ecliptic_longitude),
                       jnp.sin(ecliptic_longitude),
                       jnp.zeros_like(ecliptic_longitude)])
    r_eq = rotation_ecliptic_to_equatorial(obliquity, use_degrees=True) @ r_ecl

    ra = jnp.arctan2(r_eq[1], r_eq[0])
    dec = jnp.arcsin(jnp.clip(r_eq[2], -1.0, 1.0))

    rd = RADec(modulo(ra * RAD2DEG, 360.0) / 15.0, dec * RAD2DEG)
    aa = ra_dec_to_az_alt(rd, latitude, longitude, epc, j2000=False)
    return aa, rd


def sunrise(
    date: Epoch | datetime.date,
    latitude: ArrayLike,
    longitude: ArrayLike,
) -> tuple[Epoch, Epoch]:
    """Times of sunrise and sunset.

    When the Sun never rises the hour-angle cosine is clipped and both
    events collapse onto local solar noon.  When it never sets they are
    returned 24 hours apart, centred on solar noon.

    Args:
        date: UTC calendar day. An ``Epoch`` selects the day it falls in.
        latitude: Observer latitude. Units: *deg*
        longitude: Observer longitude, east positive. Units: *deg*

    Returns:
        tuple[Epoch, Epoch]: ``(rise, set)``.

    References:
        1. "Sunrise equation", https://en.wikipedia.org/wiki/Sunrise_equation
    """
    _float = get_dtype()
    if isinstance(date, Epoch):
        jd_midnight = jnp.floor(date.jd() - 0.5) + 0.5
    else:
        jd_midnight = caldate_to_jd(date.year, date.month, date.day)

    n = jnp.ceil(jd_midnight - JD_J2000 + _TT_UTC / SECONDS_PER_DAY)
    j_star = n - jnp.asarray(longitude, dtype=_float) / 360.0

    m = modulo(357.5291 + 0.98560028 * j_star, 360.0) * DEG2RAD
    lam = modulo(m * RAD2DEG + _equation_of_centre(m) + 180.0 + 102.9372, 360.0) * DEG2RAD

    j_transit = JD_J2000 + j_star + 0.0053 * jnp.sin(m) - 0.0069 * jnp.sin(2.0 * lam)

    sun_dec = jnp.arcsin(jnp.sin(lam) * jnp.sin(_SUNRISE_TILT * DEG2RAD))

    lat = jnp.asarray(latitude, dtype=_float) * DEG2RAD
    cos_omega0 = ((jnp.sin(_SUNRISE_ALTITUDE * DEG2RAD) - jnp.sin(lat) * jnp.sin(sun_dec))
                  / (jnp.cos(lat) * jnp.cos(sun_dec)))
    omega0 = jnp.arccos(jnp.clip(cos_omega0, -1.0, 1.0)) * RAD2DEG

    rise = Epoch.from_jd(j_transit - omega0 / 360.0)
    set_ = Epoch.from_jd(j_transit + omega0 / 360.0)
    return rise, set_
