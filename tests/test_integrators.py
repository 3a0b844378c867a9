"""Tests for the skyjax.integrators module.

Tests cover:
- Exactness for low-order polynomials
- Convergence on smooth integrands
- Strip limit when the tolerance cannot be met
- Carry threading between sample points
- JIT and vmap compatibility
"""

import jax
import jax.numpy as jnp
import pytest

from skyjax.integrators import QuadratureResult, SimpsonConfig, simpson_adaptive


def _sin(x, c):
    return jnp.sin(x), c


def _cubic(x, c):
    return x**3, c


# ──────────────────────────────────────────────
# Configuration
# ──────────────────────────────────────────────


class TestSimpsonConfig:
    def test_defaults(self):
        config = SimpsonConfig()
        assert config.initial_strips == 8
        assert config.max_strips == 16384
        assert config.tol == 5e-11

    def test_replace(self):
        config = SimpsonConfig()._replace(tol=1e-6)
        assert config.tol == 1e-6
        assert config.max_strips == 16384


# ──────────────────────────────────────────────
# Accuracy
# ──────────────────────────────────────────────


class TestSimpsonAccuracy:
    def test_returns_result(self):
        res = simpson_adaptive(_sin, 0.0, jnp.pi, 0.0, 0.0)
        assert isinstance(res, QuadratureResult)

    def test_sine_half_period(self):
        res = simpson_adaptive(_sin, 0.0, jnp.pi, 0.0, 0.0)
        assert float(res.value) == pytest.approx(2.0, abs=1e-9)
        assert bool(res.converged)

    def test_cubic_is_exact(self):
        # Simpson's rule integrates cubics exactly, so the second pass agrees
        res = simpson_adaptive(_cubic, 0.0, 2.0, 0.0, 8.0)
        assert float(res.value) == pytest.approx(4.0, abs=1e-12)
        assert bool(res.converged)
        assert int(res.strips) == 16

    def test_reversed_limits(self):
        res = simpson_adaptive(_sin, jnp.pi, 0.0, 0.0, 0.0)
        assert float(res.value) == pytest.approx(-2.0, abs=1e-9)

    def test_exponential(self):
        res = simpson_adaptive(lambda x, c: (jnp.exp(x), c), 0.0, 1.0, 1.0, jnp.e)
        assert float(res.value) == pytest.approx(jnp.e - 1.0, abs=1e-9)

    def test_strip_count_doubles(self):
        res = simpson_adaptive(_sin, 0.0, jnp.pi, 0.0, 0.0, config=SimpsonConfig(tol=1e-4))
        strips = int(res.strips)
        assert strips >= 16
        assert strips & (strips - 1) == 0

    def test_strip_limit(self):
        config = SimpsonConfig(max_strips=64, tol=0.0)
        res = simpson_adaptive(_sin, 0.0, jnp.pi, 0.0, 0.0, config=config)
        assert int(res.strips) == 64
        assert not bool(res.converged)
        assert float(res.value) == pytest.approx(2.0, abs=1e-6)

    def test_tighter_tolerance_uses_more_strips(self):
        loose = simpson_adaptive(_sin, 0.0, jnp.pi, 0.0, 0.0, config=SimpsonConfig(tol=1e-4))
        tight = simpson_adaptive(_sin, 0.0, jnp.pi, 0.0, 0.0, config=SimpsonConfig(tol=1e-10))
        assert int(tight.strips) > int(loose.strips)


# ──────────────────────────────────────────────
# Carry
# ──────────────────────────────────────────────


class TestSimpsonCarry:
    def test_points_visited_in_order_and_carry_reset(self):
        # NaN if a point is visited at or before the previous one, which also
        # happens if the carry leaks from the end of one pass into the next
        def integrand(x, prev):
            return jnp.where(x > prev, x**2, jnp.nan), x

        res = simpson_adaptive(integrand, 0.0, 1.0, 0.0, 1.0, carry=jnp.asarray(-1.0))
        assert float(res.value) == pytest.approx(1.0 / 3.0, abs=1e-12)

    def test_tuple_carry(self):
        def integrand(x, c):
            count, last = c
            return jnp.cos(x), (count + 1, x)

        res = simpson_adaptive(integrand, 0.0, 1.0, 1.0, jnp.cos(1.0), carry=(0, jnp.asarray(0.0)))
        assert float(res.value) == pytest.approx(jnp.sin(1.0), abs=1e-9)


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestSimpsonJAXCompatibility:
    def test_jit(self):
        @jax.jit
        def integrate(b):
            return simpson_adaptive(_sin, 0.0, b, 0.0, jnp.sin(b)).value

        assert float(integrate(jnp.pi)) == pytest.approx(2.0, abs=1e-9)
        assert float(integrate(jnp.pi / 2.0)) == pytest.approx(1.0, abs=1e-9)

    def test_vmap_over_upper_limit(self):
        bs = jnp.linspace(0.5, 3.0, 6)

        def integrate(b):
            return simpson_adaptive(lambda x, c: (jnp.cos(x), c), 0.0, b, 1.0, jnp.cos(b)).value

        values = jax.vmap(integrate)(bs)
        assert jnp.allclose(values, jnp.sin(bs), atol=1e-9)

    def test_vmap_strips_per_lane(self):
        bs = jnp.array([0.1, 3.0])
        res = jax.vmap(lambda b: simpson_adaptive(_sin, 0.0, b, 0.0, jnp.sin(b)))(bs)
        assert res.strips.shape == (2,)
        assert jnp.all(res.converged)
