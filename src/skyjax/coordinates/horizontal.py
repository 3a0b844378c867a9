"""Equatorial to horizontal (azimuth / altitude) coordinate transformations.

Azimuth is measured clockwise from north (0 deg = North, 90 deg = East),
altitude from the horizon.  Local sidereal time comes from
:func:`skyjax.time.jd_to_lst`; no refraction, aberration or nutation
corrections are applied.

All angles are in degrees except right ascension, which is in hours.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DEG2RAD, RAD2DEG
from skyjax.coordinates._types import AzAlt, RADec
from skyjax.coordinates.precession import precess
from skyjax.epoch import Epoch
from skyjax.time import JD_J2000, jd_to_lst
from skyjax.utils import modulo


def ra_dec_to_az_alt(
    rd: RADec,
    latitude: ArrayLike,
    longitude: ArrayLike,
    epc: Epoch,
    j2000: bool = True,
) -> AzAlt:
    """Convert equatorial coordinates to azimuth and altitude.

    When ``cos(alt) * cos(lat)`` is zero (object at the zenith, or an
    observer at a pole) the azimuth is undefined and 0 is returned.

    Args:
        rd: Right ascension (hours) and declination (deg).
        latitude: Observer latitude. Units: *deg*
        longitude: Observer longitude, east positive. Units: *deg*
        epc: Time of observation.
        j2000: If ``True`` (default), *rd* is referred to J2000 and is first
            precessed to the equinox of date.  Must be a Python bool.

    Returns:
        AzAlt: Azimuth in ``[0, 360)`` and altitude in ``[-90, 90]``.

    Examples:
        ```python
        from skyjax import Epoch
        from skyjax.coordinates import RADec, ra_dec_to_az_alt
        epc = Epoch(2024, 1, 1, 22, 0, 0)
        ra_dec_to_az_alt(RADec(5.5, -5.4), 51.5, 0.0, epc)
        ```
    """
    _float = get_dtype()
    jd = epc.jd()

    if j2000:
        rd = precess(rd, JD_J2000, jd)

    lst_deg = jd_to_lst(jd, longitude)
    ha = jnp.fmod(lst_deg - jnp.asarray(rd.ra, dtype=_float) * 15.0, 360.0)

    dec = jnp.asarray(rd.dec, dtype=_float) * DEG2RAD
    lat = jnp.asarray(latitude, dtype=_float) * DEG2RAD
    ha = ha * DEG2RAD

    alt = jnp.arcsin(jnp.clip(
        jnp.sin(dec) * jnp.sin(lat) + jnp.cos(dec) * jnp.cos(lat) * jnp.cos(ha),
        -1.0, 1.0,
    ))

    denom = jnp.cos(alt) * jnp.cos(lat)
    singular = denom == 0.0
    cos_a = (jnp.sin(dec) - jnp.sin(alt) * jnp.sin(lat)) / jnp.where(singular, 1.0, denom)
    a = jnp.where(singular, 0.0, jnp.arccos(jnp.clip(cos_a, -1.0, 1.0)) * RAD2DEG)

    az = jnp.where(jnp.sin(ha) < 0.0, a, 360.0 - a)
    az = jnp.where(singular, 0.0, az)

    return AzAlt(modulo(az, 360.0), alt * RAD2DEG)


def az_alt_to_ra_dec(
    aa: AzAlt,
    latitude: ArrayLike,
    longitude: ArrayLike,
    epc: Epoch,
) -> RADec:
    """Convert azimuth and altitude to equatorial coordinates of date.

    The hour angle is recovered with a two-argument arctangent, so it is
    well defined everywhere except exactly at the celestial poles.

    Args:
        aa: Azimuth and altitude. Units: *deg*
        latitude: Observer latitude. Units: *deg*
        longitude: Observer longitude, east positive. Units: *deg*
        epc: Time of observation.

    Returns:
        RADec: Right ascension in ``[0, 24)`` hours and declination in
        degrees, referred to the equinox of date.
    """
    _float = get_dtype()
    lst_deg = jd_to_lst(epc.jd(), longitude)

    alt = jnp.asarray(aa.alt, dtype=_float) * DEG2RAD
    az = jnp.asarray(aa.az, dtype=_float) * DEG2RAD
    lat = jnp.asarray(latitude, dtype=_float) * DEG2RAD

    sin_dec = jnp.sin(lat) * jnp.sin(alt) + jnp.cos(lat) * jnp.cos(alt) * jnp.cos(az)
    dec = jnp.arcsin(jnp.clip(sin_dec, -1.0, 1.0))

    y = -jnp.cos(alt) * jnp.cos(lat) * jnp.sin(az)
    x = jnp.sin(alt) - jnp.sin(lat) * sin_dec
    ha_deg = jnp.arctan2(y, x) * RAD2DEG

    return RADec(modulo((lst_deg - ha_deg) / 15.0, 24.0), dec * RAD2DEG)


def lst_and_ra_to_longitude(lst: ArrayLike, ra: ArrayLike) -> Array:
    """Longitude at which a right ascension is on the meridian.

    Args:
        lst: Sidereal time at longitude 0. Units: *deg*
        ra: Right ascension. Units: *hours*

    Returns:
        East-positive longitude in ``[-180, 180]``. Units: *deg*
    """
    longitude = jnp.asarray(lst, dtype=get_dtype()) - ra * 15.0
    longitude = jnp.where(longitude < -180.0, longitude + 360.0, longitude)
    longitude = jnp.where(longitude > 180.0, longitude - 360.0, longitude)
    return -longitude
