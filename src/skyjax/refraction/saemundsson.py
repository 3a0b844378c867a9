"""Closed-form refraction from Saemundsson's formula."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DEG2RAD


def refraction_saemundsson(
    alt: ArrayLike,
    pressure: ArrayLike = 1010.0,
    temperature: ArrayLike = 10.0,
) -> Array:
    """Refraction correction from true to apparent altitude.

    Saemundsson's formula, scaled from its reference conditions of
    1010 mb and 10 °C.  Adequate at optical wavelengths; for radio use
    :func:`~skyjax.refraction.refraction_pal`.

    The formula is fitted for altitudes from about -1 degree up to the
    zenith.  Below that its values are not physical, and it is singular
    at -5.11 degrees, where zero is returned.

    Args:
        alt: True (unrefracted) altitude. Units: *deg*
        pressure: Surface pressure. Units: *mb*
        temperature: Surface air temperature. Units: *°C*

    Returns:
        Amount to add to the true altitude. Exactly zero at the zenith.
            Units: *deg*

    References:
        1. J. Meeus, *Astronomical Algorithms*, 2nd ed., Willmann-Bell,
           1998, ch. 16.
    """
    _float = get_dtype()
    alt = jnp.asarray(alt, dtype=_float)
    pt = (pressure / 1010.0) * (283.0 / (273.0 + temperature))
    shift = alt + 5.11
    singular = (alt == 90.0) | (shift == 0.0)
    shift = jnp.where(shift == 0.0, 1.0, shift)
    arcmin = 1.02 / jnp.tan(DEG2RAD * (alt + 10.3 / shift)) + 0.0019279
    return jnp.where(singular, jnp.zeros_like(alt), pt * arcmin / 60.0)
