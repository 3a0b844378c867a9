"""Equatorial (J2000) to galactic coordinate transformations.

The galactic frame is fixed by the J2000 position of the north galactic
pole and the galactic longitude of the north celestial pole.  The
longitude of the ascending node of the galactic plane on the equator is
derived from the latter (``l_ncp - 90``), which makes the forward and
inverse transforms exact inverses of each other.

Right ascension is in hours, everything else in degrees.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import DEG2RAD, NCP_GALACTIC_LONGITUDE, NGP_DEC_J2000, NGP_RA_J2000, RAD2DEG
from skyjax.coordinates._types import RADec
from skyjax.utils import modulo

# Galactic longitude of the ascending node of the galactic plane [deg]
_L_ASCENDING_NODE = NCP_GALACTIC_LONGITUDE - 90.0


def north_galactic_pole_j2000() -> RADec:
    """Equatorial coordinates of the north galactic pole, J2000.

    Returns:
        RADec: ``(192.8594813 / 15 h, 27.1282511 deg)``
    """
    return RADec(NGP_RA_J2000 / 15.0, NGP_DEC_J2000)


def equatorial_to_galactic(ra: ArrayLike, dec: ArrayLike) -> tuple[Array, Array]:
    """Convert J2000 equatorial coordinates to galactic coordinates.

    Args:
        ra: Right ascension. Units: *hours*
        dec: Declination. Units: *deg*

    Returns:
        tuple[Array, Array]: Galactic longitude ``l`` in ``[0, 360)`` and
        latitude ``b`` in ``[-90, 90]``. Units: *deg*

    Examples:
        ```python
        from skyjax.coordinates import equatorial_to_galactic
        l, b = equatorial_to_galactic(17.7611, -29.0078)  # Sgr A*, near the galactic centre
        ```
    """
    _float = get_dtype()
    ra = jnp.asarray(ra, dtype=_float) * 15.0 * DEG2RAD
    dec = jnp.asarray(dec, dtype=_float) * DEG2RAD
    ngp_ra = NGP_RA_J2000 * DEG2RAD
    ngp_dec = NGP_DEC_J2000 * DEG2RAD

    sin_b = (jnp.sin(ngp_dec) * jnp.sin(dec)
             + jnp.cos(ngp_dec) * jnp.cos(dec) * jnp.cos(ra - ngp_ra))
    b = jnp.arcsin(jnp.clip(sin_b, -1.0, 1.0))

    l = jnp.arctan2(jnp.sin(dec) - jnp.sin(b) * jnp.sin(ngp_dec),
                    jnp.cos(dec) * jnp.cos(ngp_dec) * jnp.sin(ra - ngp_ra))

    return modulo(l * RAD2DEG + _L_ASCENDING_NODE, 360.0), b * RAD2DEG


def galactic_to_equatorial(l: ArrayLike, b: ArrayLike) -> tuple[Array, Array]:
    """Convert galactic coordinates to J2000 equatorial coordinates.

    Args:
        l: Galactic longitude. Units: *deg*
        b: Galactic latitude. Units: *deg*

    Returns:
        tuple[Array, Array]: Right ascension in ``[0, 24)`` hours and
        declination in degrees.
    """
    _float = get_dtype()
    l = jnp.asarray(l, dtype=_float) * DEG2RAD
    b = jnp.asarray(b, dtype=_float) * DEG2RAD
    ngp_ra = NGP_RA_J2000 * DEG2RAD
    ngp_dec = NGP_DEC_J2000 * DEG2RAD
    l_ncp = NCP_GALACTIC_LONGITUDE * DEG2RAD

    sin_dec = (jnp.sin(b) * jnp.sin(ngp_dec)
               + jnp.cos(b) * jnp.cos(ngp_dec) * jnp.cos(l - l_ncp))
    dec = jnp.arcsin(jnp.clip(sin_dec, -1.0, 1.0))

    y = jnp.sin(l - l_ncp)
    x = jnp.cos(l - l_ncp) * jnp.sin(ngp_dec) - jnp.tan(b) * jnp.cos(ngp_dec)
    ra = jnp.arctan2(y, x) + (ngp_ra - jnp.pi)

    return modulo(ra * RAD2DEG / 15.0, 24.0), dec * RAD2DEG
