"""X/Y tangent-plane projections of the horizontal sky.

Two conventions are used for pointing two-axis (X/Y) antenna mounts:

- **XY85**: X positive towards the south, Y positive towards the east.
  The X axis is horizontal and east-west.
- **XY30**: X positive towards the east, Y positive towards the north.
  The X axis is horizontal and north-south.

Both map the zenith to ``(0, 0)``.  Every expression that divides by a
vanishing ``sin`` or ``tan`` has an explicit decision table (evaluated
with ``jnp.select``, first matching row wins) that substitutes the signed
limiting value, so no infinities or NaNs are produced and the functions
stay traceable under ``jax.jit``.

Azimuths at or above 360 deg are reduced by one turn, and altitudes above
90 deg (pointing "over the top") are reflected with the azimuth turned
through 180 deg.

All angles are in degrees.

References:
    1. NASA Technical Reports Server, document 19670030005, 1967.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DEG2RAD, RAD2DEG
from skyjax.coordinates._types import AzAlt
from skyjax.utils import modulo


def _normalize(aa: AzAlt) -> tuple[Array, Array]:
    az = jnp.asarray(aa.az, dtype=get_dtype())
    el = jnp.asarray(aa.alt, dtype=get_dtype())
    az = jnp.where(az >= 360.0, az - 360.0, az)
    over = el > 90.0
    el = jnp.where(over, 180.0 - el, el)
    az = jnp.where(over, jnp.where(az >= 180.0, az - 180.0, az + 180.0), az)
    return az, el


def az_alt_to_xy85(aa: AzAlt) -> tuple[Array, Array]:
    """Convert azimuth and altitude to XY85 angles.

    ``y = asin(cos(el) sin(az))`` and ``x = atan(-cot(el) cos(az))``.

    Decision table for ``x`` at the horizon, where ``cot(el)`` is infinite:

    ============================  ========
    condition                     x
    ============================  ========
    ``alt == 90``                 0 (and y = 0)
    ``el == 0``, az 90 or 270     0
    ``el == 0``, 90 < az < 270    +90
    ``el == 0``, otherwise        -90
    ============================  ========

    Args:
        aa: Azimuth and altitude. Units: *deg*

    Returns:
        tuple[Array, Array]: ``(x, y)``. Units: *deg*
    """
    zenith = jnp.asarray(aa.alt) == 90.0
    az, el = _normalize(aa)
    azr = az * DEG2RAD
    elr = el * DEG2RAD

    y = jnp.arcsin(jnp.clip(jnp.cos(elr) * jnp.sin(azr), -1.0, 1.0)) * RAD2DEG

    horizon = el == 0.0
    sin_el = jnp.where(horizon, 1.0, jnp.sin(elr))
    x_general = jnp.arctan(-(jnp.cos(elr) / sin_el) * jnp.cos(azr)) * RAD2DEG

    x = jnp.select(
        [zenith,
         horizon & ((az == 90.0) | (az == 270.0)),
         horizon & (az > 90.0) & (az < 270.0),
         horizon],
        [0.0, 0.0, 90.0, -90.0],
        default=x_general,
    )
    y = jnp.where(zenith, 0.0, y)
    return x, y


def az_alt_to_xy30(aa: AzAlt) -> tuple[Array, Array]:
    """Convert azimuth and altitude to XY30 angles.

    ``y = asin(cos(el) cos(az))`` and ``x = atan(cot(el) sin(az))``.

    Decision table for ``x`` at the horizon, where ``cot(el)`` is infinite:

    ============================  ========
    condition                     x
    ============================  ========
    ``alt == 90``                 0 (and y = 0)
    ``el == 0``, az 0 or 180      0
    ``el == 0``, 0 <= az <= 180   +90
    ``el == 0``, otherwise        -90
    ============================  ========

    Args:
        aa: Azimuth and altitude. Units: *deg*

    Returns:
        tuple[Array, Array]: ``(x, y)``. Units: *deg*
    """
    zenith = jnp.asarray(aa.alt) == 90.0
    az, el = _normalize(aa)
    azr = az * DEG2RAD
    elr = el * DEG2RAD

    y = jnp.arcsin(jnp.clip(jnp.cos(elr) * jnp.cos(azr), -1.0, 1.0)) * RAD2DEG

    horizon = el == 0.0
    sin_el = jnp.where(horizon, 1.0, jnp.sin(elr))
    x_general = jnp.arctan((jnp.cos(elr) / sin_el) * jnp.sin(azr)) * RAD2DEG

    x = jnp.select(
        [zenith,
         horizon & ((az == 0.0) | (az == 180.0)),
         horizon & (az >= 0.0) & (az <= 180.0),
         horizon],
        [0.0, 0.0, 90.0, -90.0],
        default=x_general,
    )
    y = jnp.where(zenith, 0.0, y)
    return x, y


def xy85_to_az_alt(x: ArrayLike, y: ArrayLike) -> AzAlt:
    """Convert XY85 angles to azimuth and altitude.

    ``alt = asin(cos(y) cos(x))`` and ``az = atan2(-tan(y), sin(x)) + 180``.

    ======================  ===============
    condition               az, alt
    ======================  ===============
    ``x == 0 and y == 0``   0, 90
    ``x == 0``, y >= 0      90
    ``x == 0``, y < 0       270
    ``y == 90``             90
    ``y == -90``            270
    ======================  ===============

    Args:
        x: XY85 X angle, positive south. Units: *deg*
        y: XY85 Y angle, positive east. Units: *deg*

    Returns:
        AzAlt: Azimuth in ``[0, 360)`` and altitude.
    """
    x = jnp.asarray(x, dtype=get_dtype())
    y = jnp.asarray(y, dtype=get_dtype())
    xr = x * DEG2RAD
    yr = y * DEG2RAD

    alt = jnp.arcsin(jnp.clip(jnp.cos(yr) * jnp.cos(xr), -1.0, 1.0)) * RAD2DEG

    pole = jnp.abs(y) == 90.0
    tan_y = jnp.tan(jnp.where(pole, 0.0, yr))
    az_general = (jnp.arctan2(-tan_y, jnp.sin(xr)) + jnp.pi) * RAD2DEG

    zenith = (x == 0.0) & (y == 0.0)
    az = jnp.select(
        [zenith,
         (x == 0.0) & (y >= 0.0),
         x == 0.0,
         y == 90.0,
         y == -90.0],
        [0.0, 90.0, 270.0, 90.0, 270.0],
        default=az_general,
    )
    alt = jnp.where(zenith, 90.0, alt)
    return AzAlt(modulo(az, 360.0), alt)


def xy30_to_az_alt(x: ArrayLike, y: ArrayLike) -> AzAlt:
    """Convert XY30 angles to azimuth and altitude.

    ``alt = asin(cos(y) cos(x))`` and ``az = atan2(sin(x), tan(y))``.

    ======================  ===============
    condition               az, alt
    ======================  ===============
    ``x == 0 and y == 0``   0, 90
    ``y == 0``, x >= 0      90
    ``y == 0``, x < 0       270
    ``y == 90``             0
    ``y == -90``            180
    ======================  ===============

    Args:
        x: XY30 X angle, positive east. Units: *deg*
        y: XY30 Y angle, positive north. Units: *deg*

    Returns:
        AzAlt: Azimuth in ``[0, 360)`` and altitude.
    """
    x = jnp.asarray(x, dtype=get_dtype())
    y = jnp.asarray(y, dtype=get_dtype())
    xr = x * DEG2RAD
    yr = y * DEG2RAD

    alt = jnp.arcsin(jnp.clip(jnp.cos(yr) * jnp.cos(xr), -1.0, 1.0)) * RAD2DEG

    pole = jnp.abs(y) == 90.0
    tan_y = jnp.tan(jnp.where(pole, 1.0, yr))
    az_general = jnp.arctan2(jnp.sin(xr), tan_y) * RAD2DEG

    zenith = (x == 0.0) & (y == 0.0)
    az = jnp.select(
        [zenith,
         (y == 0.0) & (x >= 0.0),
         y == 0.0,
         y == 90.0,
         y == -90.0],
        [0.0, 90.0, 270.0, 0.0, 180.0],
        default=az_general,
    )
    alt = jnp.where(zenith, 90.0, alt)
    return AzAlt(modulo(az, 360.0), alt)
