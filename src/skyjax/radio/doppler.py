"""Doppler shift conversions, radio definition.

The classical (non-relativistic) radio convention is used:

    v = c * (f / f0 - 1)

Positive velocities are *approaching*, so a received frequency above the
rest frequency gives a positive velocity.  Velocities are in km/s.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import C_LIGHT

_C_KM_S = C_LIGHT / 1000.0


def doppler_to_velocity(f: ArrayLike, f0: ArrayLike) -> Array:
    """Line-of-sight velocity for an observed frequency.

    Args:
        f: Observed frequency. Units: *Hz*
        f0: Rest frequency. Units: *Hz*

    Returns:
        Velocity, positive approaching. Units: *km/s*

    Examples:
        ```python
        from skyjax.radio import doppler_to_velocity
        doppler_to_velocity(1.001e9, 1e9)  # ~299.79 km/s
        ```
    """
    f = jnp.asarray(f, dtype=get_dtype())
    return _C_KM_S * f / f0 - _C_KM_S


def velocity_to_doppler(v: ArrayLike, f0: ArrayLike) -> Array:
    """Observed frequency for a line-of-sight velocity.

    Args:
        v: Velocity, positive approaching. Units: *km/s*
        f0: Rest frequency. Units: *Hz*

    Returns:
        Observed frequency. Units: *Hz*
    """
    v = jnp.asarray(v, dtype=get_dtype())
    return f0 * (v + _C_KM_S) / _C_KM_S
