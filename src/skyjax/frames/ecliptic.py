"""Ecliptic to equatorial frame rotations.

Two rotations are provided:

- :func:`rotation_ecliptic_to_equatorial`, a plain rotation about the
  x-axis by a caller-supplied obliquity.  The low-precision Sun and Moon
  models use it with their own linearly drifting mean obliquity.
- :func:`rotation_ecliptic_to_bcrs`, the fixed matrix taking the mean
  ecliptic and equinox of J2000 to the BCRS as oriented by the JPL DE405
  ephemeris.  It includes the small frame bias between the dynamical
  equinox and the BCRS origin, so it is not a pure x-axis rotation.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.frames.rotations import Rx

# fmt: off
# Ecliptic (J2000) to BCRS, DE405 orientation
_ECL_TO_BCRS = (
    (1.0,                 0.000000211284, -0.000000091603),
    (-0.000000230286,     0.917482137087, -0.397776982902),
    (0.0,                 0.397776982902,  0.917482137087),
)
# fmt: on


def rotation_ecliptic_to_equatorial(obliquity: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix from ecliptic to equatorial coordinates.

    Returns ``Rx(-obliquity)``.

    Args:
        obliquity: Obliquity of the ecliptic. Units: *rad* (or *deg*)
        use_degrees: If ``True``, *obliquity* is in degrees.

    Returns:
        3x3 rotation matrix (ecliptic -> equatorial).
    """
    return Rx(-jnp.asarray(obliquity, dtype=get_dtype()), use_degrees)


def rotation_ecliptic_to_bcrs() -> Array:
    """Rotation matrix from the J2000 mean ecliptic to the BCRS (DE405 orientation).

    Returns:
        3x3 rotation matrix (ecliptic -> BCRS).
    """
    return jnp.array(_ECL_TO_BCRS, dtype=get_dtype())
