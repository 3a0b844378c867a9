import logging

import jax
import jax.numpy as jnp
import pytest

from skyjax.constants import JD_MJD_OFFSET
from skyjax.ephemerides import EarthState, earth_state, earth_state_from_jd, harmonic_series
from skyjax.epoch import Epoch
from skyjax.time import JD_J2000

# Mean motion of the Earth [AU/day]
_GAUSS_K = 0.01720209895


# ──────────────────────────────────────────────
# Harmonic series
# ──────────────────────────────────────────────


class TestHarmonicSeries:
    _COEFFS = [(1.5, 0.3, 2.0), (0.2, -1.1, 7.5), (0.05, 2.0, 0.4)]

    @pytest.mark.parametrize("power", [0, 1, 2])
    def test_rate_matches_finite_difference(self, power):
        t, h = 0.37, 1e-6
        _, rate = harmonic_series(self._COEFFS, t, power)
        plus, _ = harmonic_series(self._COEFFS, t + h, power)
        minus, _ = harmonic_series(self._COEFFS, t - h, power)
        assert float(rate) == pytest.approx(float((plus - minus) / (2.0 * h)), rel=1e-6)

    def test_power_zero_value(self):
        value, _ = harmonic_series([(2.0, 0.0, 1.0)], 0.0, 0)
        assert float(value) == pytest.approx(2.0)

    def test_power_two_vanishes_at_origin(self):
        value, rate = harmonic_series(self._COEFFS, 0.0, 2)
        assert float(value) == 0.0
        assert float(rate) == 0.0

    def test_accepts_array(self):
        value, _ = harmonic_series(jnp.array(self._COEFFS), 1.0, 1)
        ref, _ = harmonic_series(self._COEFFS, 1.0, 1)
        assert float(value) == pytest.approx(float(ref))


# ──────────────────────────────────────────────
# Earth state
# ──────────────────────────────────────────────


class TestEarthState:
    def test_returns_named_tuple(self):
        state = earth_state_from_jd(JD_J2000)
        assert isinstance(state, EarthState)
        assert state.position_heliocentric.shape == (3,)
        assert state.velocity_barycentric.shape == (3,)

    @pytest.mark.parametrize("month", [1, 4, 7, 10])
    def test_heliocentric_distance(self, month):
        state = earth_state(Epoch(2024, month, 3))
        r = float(jnp.linalg.norm(state.position_heliocentric))
        assert 0.983 < r < 1.017

    def test_perihelion_and_aphelion(self):
        r_jan = float(jnp.linalg.norm(earth_state(Epoch(2024, 1, 3)).position_heliocentric))
        r_jul = float(jnp.linalg.norm(earth_state(Epoch(2024, 7, 5)).position_heliocentric))
        assert r_jan == pytest.approx(0.9833, abs=2e-4)
        assert r_jul == pytest.approx(1.0167, abs=2e-4)

    def test_orbital_speed(self):
        state = earth_state(Epoch(2024, 4, 1))
        v = float(jnp.linalg.norm(state.velocity_heliocentric))
        assert v == pytest.approx(_GAUSS_K, rel=0.02)

    def test_barycentric_offset_is_small(self):
        state = earth_state(Epoch(2024, 4, 1))
        offset = state.position_barycentric - state.position_heliocentric
        # The Sun is within about 0.01 AU of the barycentre
        assert float(jnp.linalg.norm(offset)) < 0.011

    def test_velocity_matches_position_derivative(self):
        jd, h = JD_J2000 + 1234.5, 0.01
        v = earth_state_from_jd(jd).velocity_barycentric
        p_plus = earth_state_from_jd(jd + h).position_barycentric
        p_minus = earth_state_from_jd(jd - h).position_barycentric
        assert jnp.allclose(v, (p_plus - p_minus) / (2.0 * h), atol=1e-9)

    def test_velocity_perpendicular_to_position(self):
        state = earth_state_from_jd(JD_J2000 + 100.0)
        p = state.position_heliocentric
        v = state.velocity_heliocentric
        cos_angle = jnp.dot(p, v) / (jnp.linalg.norm(p) * jnp.linalg.norm(v))
        # Eccentricity 0.0167 bounds the flight-path angle
        assert abs(float(cos_angle)) < 0.02

    def test_epoch_matches_two_part_date(self):
        epc = Epoch(2024, 3, 1, 6, 0, 0)
        a = earth_state(epc)
        b = earth_state_from_jd(JD_MJD_OFFSET, epc.mjd())
        assert jnp.allclose(a.position_barycentric, b.position_barycentric, atol=1e-15)

    def test_sofa_reference_values(self):
        # SOFA iauEpv00 test case
        state = earth_state_from_jd(2400000.5, 53411.52501161)
        assert jnp.allclose(
            state.position_heliocentric,
            jnp.array([-0.7757238809297706813, 0.5598052241363340596, 0.2426998466481686993]),
            rtol=0.0, atol=1e-12,
        )
        assert jnp.allclose(
            state.velocity_heliocentric,
            jnp.array([-0.1091891824147313846e-1, -0.1247187268440845008e-1, -0.5407569418065039061e-2]),
            rtol=0.0, atol=1e-13,
        )
        assert jnp.allclose(
            state.position_barycentric,
            jnp.array([-0.7714104440491111971, 0.5598412061824171323, 0.2425996277722452400]),
            rtol=0.0, atol=1e-12,
        )
        assert jnp.allclose(
            state.velocity_barycentric,
            jnp.array([-0.1091874268116823295e-1, -0.1246525461732861538e-1, -0.5404773180966231279e-2]),
            rtol=0.0, atol=1e-13,
        )
        assert not bool(state.warning)

    def test_split_date_equivalence(self):
        a = earth_state_from_jd(2400000.5, 53411.52501161)
        b = earth_state_from_jd(2453412.02501161)
        assert jnp.allclose(a.position_heliocentric, b.position_heliocentric, atol=1e-9)

    def test_ecliptic_plane(self):
        # The orbit lies in the ecliptic, inclined 23.44 deg to the equator
        state = earth_state(Epoch(2024, 6, 21))
        p = state.position_heliocentric
        v = state.velocity_heliocentric
        normal = jnp.cross(p, v)
        normal = normal / jnp.linalg.norm(normal)
        assert float(jnp.degrees(jnp.arccos(normal[2]))) == pytest.approx(23.44, abs=0.05)


# ──────────────────────────────────────────────
# Validity range
# ──────────────────────────────────────────────


class TestEarthStateWarning:
    def test_no_warning_near_j2000(self, caplog):
        with caplog.at_level(logging.WARNING, logger="skyjax.ephemerides.earth"):
            state = earth_state_from_jd(JD_J2000 + 3650.0)
            jax.effects_barrier()
        assert not bool(state.warning)
        assert "outside" not in caplog.text

    @pytest.mark.parametrize("years", [-150.0, 150.0])
    def test_warning_far_from_j2000(self, years, caplog):
        with caplog.at_level(logging.WARNING, logger="skyjax.ephemerides.earth"):
            state = earth_state_from_jd(JD_J2000 + years * 365.25)
            jax.effects_barrier()
        assert bool(state.warning)
        assert "outside" in caplog.text

    def test_state_still_returned_out_of_range(self):
        state = earth_state_from_jd(JD_J2000 + 150.0 * 365.25)
        assert jnp.all(jnp.isfinite(state.position_barycentric))


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestEarthJAXCompatibility:
    def test_jit(self):
        ref = earth_state_from_jd(JD_J2000 + 500.0)
        state = jax.jit(earth_state_from_jd)(JD_J2000 + 500.0)
        assert jnp.allclose(state.position_heliocentric, ref.position_heliocentric, atol=1e-12)

    def test_vmap(self):
        jds = JD_J2000 + jnp.linspace(0.0, 365.25, 12)
        states = jax.vmap(earth_state_from_jd)(jds)
        assert states.position_heliocentric.shape == (12, 3)
        r = jnp.linalg.norm(states.position_heliocentric, axis=1)
        assert jnp.all((r > 0.983) & (r < 1.017))
