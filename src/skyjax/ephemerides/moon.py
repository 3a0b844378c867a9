"""Low-precision analytical position of the Moon.

Implements Paul Schlyter's method: mean orbital elements of the Moon and
Sun that drift linearly with the day number, a one-step solution of
Kepler's equation, the twelve largest perturbations in longitude, five
in latitude and two in distance, and finally a topocentric parallax
correction for the observer.  Accuracy is a few arcminutes.

Distances are in Earth radii; angles in degrees unless noted.

References:
    1. P. Schlyter, *How to compute planetary positions*,
       https://stjarnhimlen.se/comp/ppcomp.html
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DEG2RAD, JD_2000_JAN_0, RAD2DEG
from skyjax.coordinates import AzAlt, RADec, ra_dec_to_az_alt
from skyjax.epoch import Epoch
from skyjax.frames import rotation_ecliptic_to_equatorial
from skyjax.utils import modulo

# fmt: off
# Longitude perturbations: (amplitude [deg], multiples of (Mm, Ms, D, F))
_DLON_TERMS = (
    (-1.274, (1, 0, -2, 0)),   # evection
    (+0.658, (0, 0, 2, 0)),    # variation
    (-0.186, (0, 1, 0, 0)),    # yearly equation
    (-0.059, (2, 0, -2, 0)),
    (-0.057, (1, 1, -2, 0)),
    (+0.053, (1, 0, 2, 0)),
    (+0.046, (0, -1, 2, 0)),
    (+0.041, (1, -1, 0, 0)),
    (-0.035, (0, 0, 1, 0)),    # parallactic equation
    (-0.031, (1, 1, 0, 0)),
    (-0.015, (0, 0, -2, 2)),
    (+0.011, (1, 0, -4, 0)),
)

# Latitude perturbations: (amplitude [deg], multiples of (Mm, Ms, D, F))
_DLAT_TERMS = (
    (-0.173, (0, 0, -2, 1)),
    (-0.055, (1, 0, -2, -1)),
    (-0.046, (1, 0, -2, 1)),
    (+0.033, (0, 0, 2, 1)),
    (+0.017, (2, 0, 0, 1)),
)
# fmt: on


def _perturbation(terms, args):
    """Sum ``a * sin(k . args)`` over a term table."""
    _float = get_dtype()
    amplitudes = jnp.array([a for a, _ in terms], dtype=_float)
    multiples = jnp.array([k for _, k in terms], dtype=_float)
    return jnp.sum(amplitudes * jnp.sin(multiples @ args))


def moon_days(epc: Epoch) -> jax.Array:
    """Day number used by the Sun and Moon mean elements.

    Counts days (with fraction) from 2000 January 0.0 UT, i.e.
    1999-12-31 00:00 UTC.

    Args:
        epc: Instant.

    Returns:
        Days since 2000 January 0.0 UT.

    Examples:
        ```python
        from skyjax import Epoch
        from skyjax.ephemerides import moon_days
        moon_days(Epoch(1990, 4, 19))  # -3543.0
        ```
    """
    return epc.jd() - JD_2000_JAN_0


def moon_position(epc: Epoch, latitude: ArrayLike, longitude: ArrayLike) -> tuple[AzAlt, RADec]:
    """Topocentric position of the Moon for an observer.

    Args:
        epc: Time of observation.
        latitude: Observer latitude. Units: *deg*
        longitude: Observer longitude, east positive. Units: *deg*

    Returns:
        tuple[AzAlt, RADec]: Horizontal coordinates, and topocentric
        equatorial coordinates of date (RA in hours).
    """
    _float = get_dtype()
    d = moon_days(epc)

    obliquity = 23.4393 - 3.563e-7 * d

    # Sun
    ws = (282.9404 + 4.70935e-5 * d) * DEG2RAD
    ms = (356.0470 + 0.9856002585 * d) * DEG2RAD

    # Moon
    nm = (125.1228 - 0.0529538083 * d) * DEG2RAD
    im = 5.1454 * DEG2RAD
    wm = (318.0634 + 0.1643573223 * d) * DEG2RAD
    am = 60.2666
    em = 0.054900
    mm = (115.3654 + 13.0649929509 * d) * DEG2RAD

    ea = mm + em * jnp.sin(mm) * (1.0 + em * jnp.cos(mm))
    xv = am * (jnp.cos(ea) - em)
    yv = am * jnp.sqrt(1.0 - em * em) * jnp.sin(ea)
    v = jnp.arctan2(yv, xv)
    r = jnp.hypot(xv, yv)

    # Geocentric ecliptic position
    u = v + wm
    xh = r * (jnp.cos(nm) * jnp.cos(u) - jnp.sin(nm) * jnp.sin(u) * jnp.cos(im))
    yh = r * (jnp.sin(nm) * jnp.cos(u) + jnp.cos(nm) * jnp.sin(u) * jnp.cos(im))
    zh = r * jnp.sin(u) * jnp.sin(im)

    lon_ecl = jnp.arctan2(yh, xh)
    lat_ecl = jnp.arctan2(zh, jnp.hypot(xh, yh))

    ls = ms + ws
    lm = mm + wm + nm
    elong = lm - ls
    arg_lat = lm - nm
    args = jnp.stack([mm, ms, elong, arg_lat])

    lon_ecl = lon_ecl + _perturbation(_DLON_TERMS, args) * DEG2RAD
    lat_ecl = lat_ecl + _perturbation(_DLAT_TERMS, args) * DEG2RAD
    r = r - 0.58 * jnp.cos(mm - 2.0 * elong) - 0.46 * jnp.cos(2.0 * elong)

    r_ecl = r * jnp.stack([jnp.cos(lon_ecl) * jnp.cos(lat_ecl),
                           jnp.sin(lon_ecl) * jnp.cos(lat_ecl),
                           jnp.sin(lat_ecl)])
    r_eq = rotation_ecliptic_to_equatorial(obliquity, use_degrees=True) @ r_ecl

    ra = jnp.arctan2(r_eq[1], r_eq[0])
    dec = jnp.arctan2(r_eq[2], jnp.hypot(r_eq[0], r_eq[1]))

    # Topocentric correction
    parallax = jnp.arcsin(1.0 / r)
    lat = jnp.asarray(latitude, dtype=_float) * DEG2RAD
    gclat = (latitude - 0.1924 * jnp.sin(2.0 * lat)) * DEG2RAD
    rho = 0.99833 + 0.00167 * jnp.cos(2.0 * lat)

    ut = modulo(epc.jd() - 0.5, 1.0) * 24.0
    gmst0 = ls * RAD2DEG / 15.0 + 12.0
    lst = gmst0 + ut + longitude / 15.0

    ha = (lst * 15.0) * DEG2RAD - ra
    g = jnp.arctan(jnp.tan(gclat) / jnp.cos(ha))

    top_ra = ra - parallax * rho * jnp.cos(gclat) * jnp.sin(ha) / jnp.cos(dec)
    g_zero = g == 0.0
    top_dec = jnp.where(
        g_zero,
        dec - parallax * rho * jnp.sin(-dec) * jnp.cos(ha),
        dec - parallax * rho * jnp.sin(gclat) * jnp.sin(g - dec) / jnp.where(g_zero, 1.0, jnp.sin(g)),
    )

    rd = RADec(modulo(top_ra * RAD2DEG, 360.0) / 15.0, top_dec * RAD2DEG)
    aa = ra_dec_to_az_alt(rd, latitude, longitude, epc, j2000=False)
    return aa, rd
