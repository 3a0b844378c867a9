"""Type definitions for numerical quadrature.

- :class:`SimpsonConfig`: strip-count limits and convergence tolerance for
  the adaptive Simpson integrator.
- :class:`QuadratureResult`: the integral estimate with the number of
  strips used and whether the tolerance was met.

Both types are :class:`~typing.NamedTuple` instances, which JAX treats as
pytrees automatically, so they pass through ``jax.jit``, ``jax.vmap`` and
``jax.lax`` control flow primitives unchanged.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class SimpsonConfig(NamedTuple):
    """Configuration for adaptive Simpson quadrature.

    The strip count starts at ``initial_strips`` and doubles after every
    pass whose estimate differs from the previous pass by more than
    ``tol``.  Integration stops once the tolerance is met or the strip
    count reaches ``max_strips``, so the amount of work is bounded.

    Attributes:
        initial_strips: Number of strips in the first pass. Must be even.
        max_strips: Strip count at which refinement stops regardless of
            convergence.
        tol: Absolute tolerance on the change between successive passes.
    """

    initial_strips: int = 8
    max_strips: int = 16384
    tol: float = 5e-11


class QuadratureResult(NamedTuple):
    """Result of an adaptive quadrature.

    Attributes:
        value: Estimate of the integral.
        strips: Number of strips used for the final estimate.
        converged: ``True`` if successive estimates agreed to within the
            tolerance, ``False`` if the strip limit stopped refinement.
    """

    value: Array
    strips: Array
    converged: Array
