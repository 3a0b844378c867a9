"""Observer velocity corrections to the kinematic Local Standard of Rest.

The radial velocity of an Earth-bound observer towards a source is the
sum of three components projected onto the line of sight:

- the observer's motion from the Earth's rotation,
- the Earth's orbital motion about the solar-system barycentre,
- the Sun's motion relative to the LSRK.

Adding the result to a measured (topocentric) radial velocity refers it
to the LSRK.  Each component is available separately.  All velocities
are in km/s, positive when the observer moves towards the source.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import AU_PER_DAY_TO_KM_PER_S, DEG2RAD, EARTH_ROTATION_SPEED, SUN_VELOCITY_LSRK
from skyjax.coordinates import RADec
from skyjax.ephemerides import earth_state
from skyjax.epoch import Epoch


def _line_of_sight(rd: RADec) -> Array:
    """Unit vector towards equatorial coordinates."""
    _float = get_dtype()
    ra = jnp.asarray(rd.ra, dtype=_float) * 15.0 * DEG2RAD
    dec = jnp.asarray(rd.dec, dtype=_float) * DEG2RAD
    return jnp.stack([jnp.cos(ra) * jnp.cos(dec),
                      jnp.sin(ra) * jnp.cos(dec),
                      jnp.sin(dec)])


def earth_rotation_velocity(
    rd: RADec,
    latitude: ArrayLike,
    longitude: ArrayLike,
    epc: Epoch,
) -> Array:
    """Velocity towards a source due to the Earth's rotation.

    Args:
        rd: Source right ascension (hours) and declination (deg).
        latitude: Observer latitude. Units: *deg*
        longitude: Observer longitude, east positive. Units: *deg*
        epc: Time of observation.

    Returns:
        Line-of-sight velocity. Units: *km/s*
    """
    _float = get_dtype()
    lat = jnp.asarray(latitude, dtype=_float) * DEG2RAD
    ra = jnp.asarray(rd.ra, dtype=_float) * 15.0 * DEG2RAD
    dec = jnp.asarray(rd.dec, dtype=_float) * DEG2RAD
    ha = epc.local_sidereal_time(longitude) * DEG2RAD - ra
    return -EARTH_ROTATION_SPEED * jnp.cos(lat) * jnp.sin(ha) * jnp.cos(dec)


def earth_orbit_velocity_bcrs(rd: RADec, epc: Epoch) -> Array:
    """Velocity towards a source due to the Earth's barycentric motion.

    Args:
        rd: Source right ascension (hours) and declination (deg), J2000.
        epc: Time of observation.

    Returns:
        Line-of-sight velocity. Units: *km/s*
    """
    velocity = earth_state(epc).velocity_barycentric * AU_PER_DAY_TO_KM_PER_S
    return jnp.dot(velocity, _line_of_sight(rd))


def sun_velocity_lsrk(rd: RADec) -> Array:
    """Velocity towards a source due to the Sun's motion relative to the LSRK.

    Args:
        rd: Source right ascension (hours) and declination (deg), J2000.

    Returns:
        Line-of-sight velocity. Units: *km/s*
    """
    return jnp.dot(jnp.asarray(SUN_VELOCITY_LSRK, dtype=get_dtype()), _line_of_sight(rd))


def observer_velocity_lsrk(
    rd: RADec,
    latitude: ArrayLike,
    longitude: ArrayLike,
    epc: Epoch,
) -> Array:
    """Total velocity of an Earth-bound observer towards a source, relative to the LSRK.

    Args:
        rd: Source right ascension (hours) and declination (deg), J2000.
        latitude: Observer latitude. Units: *deg*
        longitude: Observer longitude, east positive. Units: *deg*
        epc: Time of observation.

    Returns:
        Line-of-sight velocity. Units: *km/s*

    Examples:
        ```python
        from skyjax import Epoch
        from skyjax.coordinates import RADec
        from skyjax.radio import observer_velocity_lsrk
        observer_velocity_lsrk(RADec(20.0, 40.0), 52.0, -1.0, Epoch(2024, 3, 1))
        ```
    """
    return (earth_rotation_velocity(rd, latitude, longitude, epc)
            + earth_orbit_velocity_bcrs(rd, epc)
            + sun_velocity_lsrk(rd))
