"""Thermal noise power and noise temperature, ``P = k T B``."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import BOLTZMANN


def noise_power_dbm(temperature: ArrayLike, bandwidth: ArrayLike) -> Array:
    """Thermal noise power of a matched load.

    Args:
        temperature: Noise temperature. Units: *K*
        bandwidth: Bandwidth. Units: *Hz*

    Returns:
        Noise power. Units: *dBm*
    """
    temperature = jnp.asarray(temperature, dtype=get_dtype())
    return 10.0 * jnp.log10(BOLTZMANN * temperature * bandwidth) + 30.0


def noise_temperature(dbm: ArrayLike, bandwidth: ArrayLike) -> Array:
    """Noise temperature equivalent to a power in a bandwidth.

    Args:
        dbm: Noise power. Units: *dBm*
        bandwidth: Bandwidth. Units: *Hz*

    Returns:
        Noise temperature. Units: *K*
    """
    dbm = jnp.asarray(dbm, dtype=get_dtype())
    return 10.0 ** ((dbm - 30.0) / 10.0) / (BOLTZMANN * bandwidth)
