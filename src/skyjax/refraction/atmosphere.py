"""Two-layer model atmosphere for refraction integrals.

The troposphere has a constant temperature lapse rate with refractivity
following a power law in the temperature ratio.  The stratosphere is
isothermal with refractivity decaying exponentially with height above
the tropopause.  Each model returns the refractive index ``n`` and
``r dn/dr`` at a geocentric radius ``r``.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


class TroposphereModel(NamedTuple):
    """Parameters of the tropospheric refractivity model.

    Attributes:
        r0: Geocentric radius of the observer. Units: *m*
        t0: Temperature at the observer. Units: *K*
        alpha: Temperature lapse rate. Units: *K/m*
        gamm2: Exponent of the dry-air term, ``gamma - 2``.
        delm2: Exponent of the water-vapour term, ``delta - 2``.
        c1: Dry-air refractivity coefficient.
        c2: Water-vapour refractivity coefficient.
        c3: Dry-air gradient coefficient.
        c4: Water-vapour gradient coefficient.
        c5: Radio water-vapour coefficient (zero in the optical).
        c6: Radio water-vapour gradient coefficient (zero in the optical).
    """

    r0: Array
    t0: Array
    alpha: Array
    gamm2: Array
    delm2: Array
    c1: Array
    c2: Array
    c3: Array
    c4: Array
    c5: Array
    c6: Array


class StratosphereModel(NamedTuple):
    """Parameters of the stratospheric refractivity model.

    Attributes:
        rt: Geocentric radius of the tropopause. Units: *m*
        tt: Temperature at the tropopause. Units: *K*
        dnt: Refractive index at the tropopause.
        gamal: Constant of the exponential decay, ``g M / R``. Units: *K/m*
    """

    rt: Array
    tt: Array
    dnt: Array
    gamal: Array


def troposphere(model: TroposphereModel, r: ArrayLike) -> tuple[Array, Array, Array]:
    """Temperature, refractive index and ``r dn/dr`` in the troposphere.

    The temperature is held within 100-320 K.

    Args:
        model: Tropospheric parameters.
        r: Geocentric radius. Units: *m*

    Returns:
        tuple: ``(t, n, r dn/dr)`` with ``t`` in *K*.
    """
    t = jnp.clip(model.t0 - model.alpha * (r - model.r0), 100.0, 320.0)
    tt0 = t / model.t0
    tt0gm2 = tt0 ** model.gamm2
    tt0dm2 = tt0 ** model.delm2
    dn = 1.0 + (model.c1 * tt0gm2 - (model.c2 - model.c5 / t) * tt0dm2) * tt0
    rdndr = r * (-model.c3 * tt0gm2 + (model.c4 - model.c6 / tt0) * tt0dm2)
    return t, dn, rdndr


def stratosphere(model: StratosphereModel, r: ArrayLike) -> tuple[Array, Array]:
    """Refractive index and ``r dn/dr`` in the stratosphere.

    Args:
        model: Stratospheric parameters.
        r: Geocentric radius. Units: *m*

    Returns:
        tuple: ``(n, r dn/dr)``.
    """
    b = model.gamal / model.tt
    w = (model.dnt - 1.0) * jnp.exp(-b * (r - model.rt))
    return 1.0 + w, -r * b * w
