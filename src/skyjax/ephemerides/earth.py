"""Heliocentric and barycentric position and velocity of the Earth.

Evaluates a truncated VSOP87-class harmonic series fitted to the JPL
DE405 ephemeris.  Each Cartesian component is a sum of terms

    a * cos(b + c * t) * t**n,    n = 0, 1, 2

where *t* is Julian years from J2000.  The Sun-to-Earth series gives
the heliocentric vector; adding the barycentre-to-Sun series gives the
barycentric one.  Velocities are the analytic time derivatives.  The
results are rotated from the J2000 ecliptic to the BCRS.

Over 1900-2100 the maximum errors are about 4.6 km in position and
1.4 mm/s in velocity against DE405.  Outside +/-100 years from J2000 the
series degrades; results are still returned with ``EarthState.warning``
set and a warning logged.

References:
    1. P. Bretagnon and G. Francou, *Astron. Astrophys.* 202, 309-315, 1988.
    2. IAU SOFA library, ``iauEpv00``.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DAYS_PER_JULIAN_YEAR, JD_MJD_OFFSET
from skyjax.epoch import Epoch
from skyjax.ephemerides import _earth_coefficients as _coef
from skyjax.frames import rotation_ecliptic_to_bcrs
from skyjax.time import JD_J2000

logger = logging.getLogger(__name__)

# Span either side of J2000 over which the series is valid [years]
_VALID_YEARS = 100.0

# (power of t, Sun-to-Earth tables, SSB-to-Sun tables), tables ordered X, Y, Z
_SERIES = (
    (0, (_coef.SUN_EARTH_T0_X, _coef.SUN_EARTH_T0_Y, _coef.SUN_EARTH_T0_Z),
        (_coef.SSB_SUN_T0_X, _coef.SSB_SUN_T0_Y, _coef.SSB_SUN_T0_Z)),
    (1, (_coef.SUN_EARTH_T1_X, _coef.SUN_EARTH_T1_Y, _coef.SUN_EARTH_T1_Z),
        (_coef.SSB_SUN_T1_X, _coef.SSB_SUN_T1_Y, _coef.SSB_SUN_T1_Z)),
    (2, (_coef.SUN_EARTH_T2_X, _coef.SUN_EARTH_T2_Y, _coef.SUN_EARTH_T2_Z),
        (_coef.SSB_SUN_T2_X, _coef.SSB_SUN_T2_Y, _coef.SSB_SUN_T2_Z)),
)


class EarthState(NamedTuple):
    """Position and velocity of the Earth, BCRS axes.

    Attributes:
        position_heliocentric: Sun-to-Earth vector. Units: *AU*
        velocity_heliocentric: Heliocentric velocity. Units: *AU/day*
        position_barycentric: Barycentre-to-Earth vector. Units: *AU*
        velocity_barycentric: Barycentric velocity. Units: *AU/day*
        warning: ``True`` when the date is more than 100 years from J2000.
    """

    position_heliocentric: Array
    velocity_heliocentric: Array
    position_barycentric: Array
    velocity_barycentric: Array
    warning: Array


def harmonic_series(coeffs, t: ArrayLike, power: int) -> tuple[Array, Array]:
    """Evaluate one component of a ``t**power`` harmonic series.

    Args:
        coeffs: Sequence of ``(amplitude, phase, frequency)`` triples, or an
            ``(N, 3)`` array.
        t: Time argument. Units: *years*
        power: Power of *t* multiplying every term. Must be a Python int.

    Returns:
        tuple[Array, Array]: Series value and its derivative with respect
        to *t* (per year).
    """
    coeffs = jnp.asarray(coeffs, dtype=get_dtype())
    a = coeffs[:, 0]
    b = coeffs[:, 1]
    c = coeffs[:, 2]

    p = b + c * t
    cp = jnp.cos(p)
    sp = jnp.sin(p)

    t_n = t ** power
    value = jnp.sum(a * cp) * t_n

    rate = -jnp.sum(a * c * sp) * t_n
    if power > 0:
        rate = rate + jnp.sum(a * cp) * power * t ** (power - 1)
    return value, rate


def _warn_out_of_range(flag, t):
    if flag.any():
        logger.warning(
            "Earth ephemeris evaluated %.1f years from J2000, outside its "
            "+/-%.0f year range", abs(t).max(), _VALID_YEARS,
        )


def earth_state_from_jd(date1: ArrayLike, date2: ArrayLike = 0.0) -> EarthState:
    """Earth position and velocity for a two-part Julian Date.

    The date is ``date1 + date2``; splitting it (for example as
    ``2400000.5`` plus an MJD) preserves precision.

    Args:
        date1: First part of the Julian Date (TDB).
        date2: Second part of the Julian Date. Default: ``0.0``

    Returns:
        EarthState: Heliocentric and barycentric state in BCRS axes.

    Examples:
        ```python
        from skyjax.ephemerides import earth_state_from_jd
        state = earth_state_from_jd(2400000.5, 53411.52501161)
        ```
    """
    _float = get_dtype()
    t = ((jnp.asarray(date1, dtype=_float) - JD_J2000)
         + jnp.asarray(date2, dtype=_float)) / DAYS_PER_JULIAN_YEAR

    warning = jnp.abs(t) > _VALID_YEARS
    jax.debug.callback(_warn_out_of_range, warning, t)

    ph = [jnp.zeros((), dtype=_float)] * 3
    vh = [jnp.zeros((), dtype=_float)] * 3
    pb = [jnp.zeros((), dtype=_float)] * 3
    vb = [jnp.zeros((), dtype=_float)] * 3
    for power, sun_earth, ssb_sun in _SERIES:
        for i in range(3):
            p, v = harmonic_series(sun_earth[i], t, power)
            ph[i] = ph[i] + p
            vh[i] = vh[i] + v
            p, v = harmonic_series(ssb_sun[i], t, power)
            pb[i] = pb[i] + p
            vb[i] = vb[i] + v

    ph = jnp.stack(ph)
    vh = jnp.stack(vh) / DAYS_PER_JULIAN_YEAR
    pb = ph + jnp.stack(pb)
    vb = vh + jnp.stack(vb) / DAYS_PER_JULIAN_YEAR

    rot = rotation_ecliptic_to_bcrs()
    return EarthState(rot @ ph, rot @ vh, rot @ pb, rot @ vb, warning)


def earth_state(epc: Epoch) -> EarthState:
    """Earth position and velocity at an Epoch.

    UTC is used in place of TDB; the resulting error (about a minute of
    time) is negligible for velocity corrections.

    Args:
        epc: Instant.

    Returns:
        EarthState: Heliocentric and barycentric state in BCRS axes.
    """
    return earth_state_from_jd(JD_MJD_OFFSET, epc.mjd())
