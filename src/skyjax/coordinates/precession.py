"""Precession of equatorial coordinates between two epochs.

Uses a third-order polynomial approximation to the precession matrix,
with time measured in tropical centuries.  ``t0`` is the interval from
B1950.0 to the starting epoch and ``t`` the interval being precessed
over.  Accuracy is of order an arcsecond over a few centuries, which is
adequate for pointing and Doppler work.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DAYS_PER_TROPICAL_CENTURY, DEG2RAD, RAD2DEG
from skyjax.coordinates._types import RADec
from skyjax.time import JD_B1950
from skyjax.utils import modulo


def precession_matrix(jd_from: ArrayLike, jd_to: ArrayLike) -> jnp.ndarray:
    """Precession rotation matrix from one epoch to another.

    Args:
        jd_from: Julian Date of the starting equinox.
        jd_to: Julian Date of the target equinox.

    Returns:
        3x3 rotation matrix applied to equatorial unit vectors.
    """
    _float = get_dtype()
    t0 = (jnp.asarray(jd_from, dtype=_float) - JD_B1950) / DAYS_PER_TROPICAL_CENTURY
    t = (jnp.asarray(jd_to, dtype=_float) - jnp.asarray(jd_from, dtype=_float)) / DAYS_PER_TROPICAL_CENTURY
    t2 = t * t
    t3 = t2 * t

    xx = 1.0 - ((29696.0 + 26.0 * t0) * t2 - 13.0 * t3) * 1e-8
    yx = ((2234941.0 + 1355.0 * t0) * t - 676.0 * t2 + 221.0 * t3) * 1e-8
    zx = ((971690.0 - 414.0 * t0) * t + 207.0 * t2 + 96.0 * t3) * 1e-8
    yy = 1.0 - ((24975.0 + 30.0 * t0) * t2 - 15.0 * t3) * 1e-8
    zy = -((10858.0 + 2.0 * t0) * t2) * 1e-8
    zz = 1.0 - ((4721.0 - 4.0 * t0) * t2) * 1e-8

    # Rows give the rotated x, y, z components
    return jnp.array([
        [xx, -yx, -zx],
        [yx, yy, zy],
        [zx, zy, zz],
    ])


def precess(rd: RADec, jd_from: ArrayLike, jd_to: ArrayLike) -> RADec:
    """Precess equatorial coordinates from one equinox to another.

    The right ascension quadrant is recovered from ``atan(y / x)``: 180 deg
    is added when ``x < 0`` and 360 deg when ``y < 0`` with ``x > 0``.
    When ``x == 0`` the arctangent is taken as +90 or -90 deg from the sign
    of ``y`` (0 when ``y`` is also zero).

    Args:
        rd: Coordinates at ``jd_from``.
        jd_from: Julian Date of the starting equinox.
        jd_to: Julian Date of the target equinox.

    Returns:
        RADec: Coordinates referred to ``jd_to``, RA in ``[0, 24)``.

    Examples:
        ```python
        from skyjax.coordinates import RADec, precess
        from skyjax.time import JD_J2000
        precess(RADec(12.0, 45.0), JD_J2000, JD_J2000 + 365.25 * 20)
        ```
    """
    _float = get_dtype()
    ra = jnp.asarray(rd.ra, dtype=_float) * 15.0 * DEG2RAD
    dec = jnp.asarray(rd.dec, dtype=_float) * DEG2RAD

    v = jnp.stack([jnp.cos(ra) * jnp.cos(dec),
                   jnp.sin(ra) * jnp.cos(dec),
                   jnp.sin(dec)])
    rot = precession_matrix(jd_from, jd_to)
    xp = rot[0, 0] * v[0] + rot[0, 1] * v[1] + rot[0, 2] * v[2]
    yp = rot[1, 0] * v[0] + rot[1, 1] * v[1] + rot[1, 2] * v[2]
    zp = rot[2, 0] * v[0] + rot[2, 1] * v[1] + rot[2, 2] * v[2]

    safe_xp = jnp.where(xp == 0.0, 1.0, xp)
    ra_deg = jnp.where(xp == 0.0, 90.0 * jnp.sign(yp), jnp.arctan(yp / safe_xp) * RAD2DEG)
    ra_deg = jnp.where(xp < 0.0, ra_deg + 180.0, ra_deg)
    ra_deg = jnp.where((yp < 0.0) & (xp > 0.0), ra_deg + 360.0, ra_deg)

    dec_deg = jnp.arcsin(jnp.clip(zp, -1.0, 1.0)) * RAD2DEG

    return RADec(modulo(ra_deg / 15.0, 24.0), dec_deg)
