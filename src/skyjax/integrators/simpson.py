"""Adaptive composite Simpson quadrature with strip doubling.

The integral is first estimated with ``initial_strips`` strips.  While
successive estimates differ by more than the tolerance, the strip count
is doubled.  Function values from earlier passes are kept: after each
pass the running sum of odd-point values is folded into the even-point
sum, so a refinement pass evaluates only the new odd points.

The integrand may thread a *carry* from one sample point to the next
within a pass, which allows it to warm-start an inner solve from the
previous point's solution.  The carry is reset to its initial value at
the start of every pass.

Both loops are built on ``jax.lax`` control flow, so the integrator is
compatible with ``jax.jit`` and ``jax.vmap``.  Like the adaptive
integrators it is not reverse-mode differentiable because of the
internal ``lax.while_loop``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.integrators._types import QuadratureResult, SimpsonConfig


def simpson_adaptive(
    integrand: Callable[[Array, Any], tuple[Array, Any]],
    x0: ArrayLike,
    x1: ArrayLike,
    f0: ArrayLike,
    f1: ArrayLike,
    carry: Any = None,
    config: SimpsonConfig | None = None,
) -> QuadratureResult:
    """Integrate a scalar function over ``[x0, x1]`` by adaptive Simpson's rule.

    The endpoint values are supplied by the caller rather than evaluated,
    since they are often available from the set-up of the problem.

    Args:
        integrand: Function ``(x, carry) -> (f(x), carry)``.  Interior
            points are visited in increasing order within each pass.
        x0: Lower limit of integration.
        x1: Upper limit of integration.
        f0: Integrand value at ``x0``.
        f1: Integrand value at ``x1``.
        carry: Initial carry passed to the first interior point of each
            pass. Any pytree; ``None`` if the integrand keeps no state.
        config: Strip limits and tolerance. Defaults to ``SimpsonConfig()``.

    Returns:
        QuadratureResult: The estimate, the final strip count, and whether
            successive estimates met the tolerance.

    Examples:
        ```python
        import jax.numpy as jnp
        from skyjax.integrators import simpson_adaptive
        res = simpson_adaptive(lambda x, c: (jnp.sin(x), c), 0.0, jnp.pi, 0.0, 0.0)
        res.value  # ~2.0
        ```
    """
    if config is None:
        config = SimpsonConfig()

    _float = get_dtype()
    x0 = jnp.asarray(x0, dtype=_float)
    x1 = jnp.asarray(x1, dtype=_float)
    f0 = jnp.asarray(f0, dtype=_float)
    f1 = jnp.asarray(f1, dtype=_float)
    tol = jnp.asarray(config.tol, dtype=_float)
    xrange = x1 - x0

    def _pass(strips, n, fo, fe):
        """Accumulate interior values at i = 1, 1 + n, ... < strips."""
        h = xrange / strips.astype(_float)
        count = (strips - 1 + n - 1) // n

        def body(k, state):
            fo, fe, c = state
            i = 1 + n * k
            f, c = integrand(x0 + h * i.astype(_float), c)
            # Even points are only visited on the first pass
            to_even = (n == 1) & (i % 2 == 0)
            fe = jnp.where(to_even, fe + f, fe)
            fo = jnp.where(to_even, fo, fo + f)
            return fo, fe, c

        fo, fe, _ = jax.lax.fori_loop(0, count, body, (fo, fe, carry))
        return h, fo, fe

    def cond_fn(state):
        return ~state[-1]

    def body_fn(state):
        strips, n, fo, fe, refold, _refp, _converged, _done = state
        h, fo, fe = _pass(strips, n, fo, fe)
        refp = h * (f0 + 4.0 * fo + 2.0 * fe + f1) / 3.0

        converged = jnp.abs(refp - refold) <= tol
        done = converged | (strips >= config.max_strips)

        # Prepare the next pass; ignored once done
        next_strips = jnp.where(done, strips, strips + strips)
        next_fe = jnp.where(done, fe, fe + fo)
        next_fo = jnp.where(done, fo, jnp.zeros_like(fo))
        next_n = jnp.where(done, n, 2)
        return next_strips, next_n, next_fo, next_fe, refp, refp, converged, done

    init = (
        jnp.asarray(config.initial_strips, dtype=jnp.int32),
        jnp.asarray(1, dtype=jnp.int32),
        jnp.zeros((), dtype=_float),
        jnp.zeros((), dtype=_float),
        jnp.asarray(jnp.inf, dtype=_float),
        jnp.zeros((), dtype=_float),
        jnp.asarray(False),
        jnp.asarray(False),
    )
    strips, _n, _fo, _fe, _refold, refp, converged, _done = jax.lax.while_loop(
        cond_fn, body_fn, init
    )
    return QuadratureResult(value=refp, strips=strips, converged=converged)
