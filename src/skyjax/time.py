"""Julian Date, Unix time and sidereal time conversions.

All functions operate on plain numbers or JAX arrays and are traceable
under ``jax.jit``.  Times are UTC throughout; no leap-second or TT/UT1
corrections are applied.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import JD_MJD_OFFSET, JD_UNIX_EPOCH, SECONDS_PER_DAY
from .utils import modulo

"""
Julian Date of the J2000.0 epoch, 2000-01-01 12:00:00. Units: *days*
"""
JD_J2000 = 2451545.0

"""
Julian Date of the B1950.0 epoch, 1949-12-31 22:09:00. Units: *days*
"""
JD_B1950 = 2433282.0 + (22.0 / 24.0 - 0.5) + 9.0 / 1440.0


def _tdiv(a, b):
    """Integer division truncating toward zero, for a positive divisor."""
    return jnp.sign(a) * (jnp.abs(a) // b)


def jd_j2000() -> float:
    """Return the Julian Date of the J2000.0 epoch.

    Returns:
        float: ``2451545.0``
    """
    return JD_J2000


def jd_b1950() -> float:
    """Return the Julian Date of the B1950.0 epoch.

    Returns:
        float: Julian Date of 1949-12-31 22:09:00.
    """
    return JD_B1950


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date and time to Julian Date.

    The Julian Day number is computed with the Fliegel & Van Flandern
    integer formula, whose divisions truncate toward zero.  Inputs are not
    range-checked.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date, 1-12.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the day. Default: ``0``
        minute (ArrayLike): Minute of the hour. Default: ``0``
        second (ArrayLike): Second of the minute, may be fractional. Default: ``0.0``

    Returns:
        Julian Date.

    Examples:
        ```python
        from skyjax.time import caldate_to_jd
        caldate_to_jd(2000, 1, 1, 12, 0, 0)  # 2451545.0
        ```

    References:

        1. H. F. Fliegel and T. C. Van Flandern, "A Machine Algorithm for
           Processing Calendar Dates", *Communications of the ACM* 11, 657, 1968.
    """
    _float = get_dtype()
    y = jnp.asarray(year, dtype=jnp.int32)
    m = jnp.asarray(month, dtype=jnp.int32)
    d = jnp.asarray(day, dtype=jnp.int32)

    a = _tdiv(m - 14, 12)
    jdn = (_tdiv(1461 * (y + 4800 + a), 4)
           + _tdiv(367 * (m - 2 - 12 * a), 12)
           - _tdiv(3 * _tdiv(y + 4900 + a, 100), 4)
           + d - 32075)

    return (_float(jdn)
            + (jnp.asarray(hour, dtype=_float) / 24.0 - 0.5)
            + jnp.asarray(minute, dtype=_float) / 1440.0
            + jnp.asarray(second, dtype=_float) / SECONDS_PER_DAY)


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date and time to Modified Julian Date.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the day. Default: ``0``
        minute (ArrayLike): Minute of the hour. Default: ``0``
        second (ArrayLike): Second of the minute. Default: ``0.0``

    Returns:
        Modified Julian Date.
    """
    return jd_to_mjd(caldate_to_jd(year, month, day, hour, minute, second))


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Modified Julian Date.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        Modified Julian Date.
    """
    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Convert Modified Julian Date to Julian Date.

    Args:
        mjd (ArrayLike): Modified Julian Date.

    Returns:
        Julian Date.
    """
    return mjd + JD_MJD_OFFSET


def jd_to_unix(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to seconds since the Unix epoch.

    Args:
        jd (ArrayLike): Julian Date (UTC).

    Returns:
        Seconds since 1970-01-01 00:00:00 UTC.
    """
    return (jd - JD_UNIX_EPOCH) * SECONDS_PER_DAY


def unix_to_jd(seconds: ArrayLike) -> jax.Array:
    """Convert seconds since the Unix epoch to Julian Date.

    Args:
        seconds (ArrayLike): Seconds since 1970-01-01 00:00:00 UTC.

    Returns:
        Julian Date (UTC).
    """
    return seconds / SECONDS_PER_DAY + JD_UNIX_EPOCH


def jd_to_caldate(
    jd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert Julian Date to calendar date.

    Dates before JD 2299161 (1582-10-15) are returned in the Julian
    calendar.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second) where
            year/month/day/hour/minute are int32 and second is configurable float dtype.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 7.
    """
    jd_shifted = jnp.asarray(jd, dtype=get_dtype()) + 0.5
    z = jnp.floor(jd_shifted).astype(jnp.int32)
    f = jd_shifted - z

    # (z - 1867216.25) / 36524.25 in scaled integers
    alpha = (100 * z - 186721625) // 3652425
    a = jnp.where(z < 2299161, z, z + 1 + alpha - alpha // 4)

    b = a + 1524
    c = (100 * b - 12210) // 36525
    d = (36525 * c) // 100
    e = ((b - d) * 10000) // 306001

    day_with_frac = b - d - (306001 * e) // 10000 + f
    day = jnp.floor(day_with_frac).astype(jnp.int32)
    frac_of_day = day_with_frac - day

    month = jnp.where(e < 14, e - 1, e - 13)
    year = jnp.where(month > 2, c - 4716, c - 4715)

    total_ms = jnp.round(frac_of_day * 86400000.0).astype(jnp.int32)
    hour = total_ms // 3600000
    total_ms = total_ms - hour * 3600000
    minute = total_ms // 60000
    total_ms = total_ms - minute * 60000
    second = get_dtype()(total_ms) / 1000.0

    return year, month, day, hour, minute, second


def jd_to_lst(jd: ArrayLike, longitude: ArrayLike) -> jax.Array:
    """Local mean sidereal time.

    Uses the linear approximation

        LST = 100.46 + 0.985647 * d + longitude + 15 * UT

    where *d* is the number of days from J2000.0 and *UT* the decimal
    hours of the day.

    Args:
        jd (ArrayLike): Julian Date (UTC).
        longitude (ArrayLike): Observer longitude, east positive. Units: *deg*

    Returns:
        Local sidereal time in ``[0, 360)``. Units: *deg*
    """
    jd = jnp.asarray(jd, dtype=get_dtype())
    d = jd - JD_J2000
    ut = (jnp.fmod(jd, 1.0) + 0.5) * 24.0
    return modulo(100.46 + 0.985647 * d + longitude + 15.0 * ut, 360.0)
