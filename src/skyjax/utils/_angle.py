"""Angle conversion and range-reduction helpers.

``to_radians`` / ``from_radians`` wrap the ``use_degrees`` convention via
``jnp.where``.  ``modulo`` and ``range_pi`` normalise angles without
branching so they stay traceable under ``jax.jit``.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle from radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)


def modulo(a: ArrayLike, b: ArrayLike) -> Array:
    """Floor-based modulus, ``a - b * floor(a / b)``.

    Unlike C's ``fmod`` the result takes the sign of ``b``, so
    ``modulo(-10, 360) == 350``.

    Args:
        a (ArrayLike): Dividend.
        b (ArrayLike): Divisor.

    Returns:
        Value in ``[0, b)`` for positive ``b``.
    """
    return a - b * jnp.floor(a / b)


def range_pi(angle: ArrayLike) -> Array:
    """Normalise an angle into the range -pi to +pi.

    Args:
        angle (ArrayLike): Angle in radians.

    Returns:
        Equivalent angle in ``[-pi, pi]``. Units: *rad*
    """
    w = jnp.fmod(angle, 2.0 * jnp.pi)
    w = jnp.where(w > jnp.pi, w - 2.0 * jnp.pi, w)
    return jnp.where(w < -jnp.pi, w + 2.0 * jnp.pi, w)
