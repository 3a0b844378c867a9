import jax
import jax.numpy as jnp
import pytest

from skyjax.constants import HYDROGEN_LINE_FREQUENCY
from skyjax.coordinates import RADec
from skyjax.epoch import Epoch
from skyjax.radio import (
    doppler_to_velocity,
    earth_orbit_velocity_bcrs,
    earth_rotation_velocity,
    noise_power_dbm,
    noise_temperature,
    observer_velocity_lsrk,
    sun_velocity_lsrk,
    velocity_to_doppler,
)

_F0 = HYDROGEN_LINE_FREQUENCY


# ──────────────────────────────────────────────
# Doppler
# ──────────────────────────────────────────────


class TestDoppler:
    def test_rest_frequency_is_zero_velocity(self):
        assert float(doppler_to_velocity(_F0, _F0)) == pytest.approx(0.0, abs=1e-9)

    def test_radio_definition(self):
        # v = c (f - f0) / f0, in km/s
        assert float(doppler_to_velocity(_F0 * 1.001, _F0)) == pytest.approx(299.792458, rel=1e-9)
        assert float(doppler_to_velocity(_F0 * 0.999, _F0)) == pytest.approx(-299.792458, rel=1e-9)

    @pytest.mark.parametrize("v", [-250.0, -12.5, 0.0, 3.3, 180.0])
    def test_inverse(self, v):
        f = velocity_to_doppler(v, _F0)
        assert float(doppler_to_velocity(f, _F0)) == pytest.approx(v, abs=1e-6)

    def test_velocity_to_doppler_shift(self):
        f = velocity_to_doppler(10.0, _F0)
        assert float(f - _F0) == pytest.approx(_F0 * 10.0 / 299792.458, rel=1e-9)

    def test_vectorized(self):
        f = _F0 + jnp.linspace(-1e6, 1e6, 5)
        v = doppler_to_velocity(f, _F0)
        assert v.shape == (5,)
        assert jnp.all(jnp.diff(v) > 0)


# ──────────────────────────────────────────────
# Radiometry
# ──────────────────────────────────────────────


class TestRadiometry:
    def test_room_temperature_floor(self):
        assert float(noise_power_dbm(290.0, 1.0)) == pytest.approx(-173.98, abs=0.01)

    def test_bandwidth_scaling(self):
        p1 = noise_power_dbm(50.0, 1e6)
        p2 = noise_power_dbm(50.0, 1e7)
        assert float(p2 - p1) == pytest.approx(10.0, abs=1e-9)

    @pytest.mark.parametrize("temperature", [3.0, 50.0, 290.0, 10000.0])
    def test_round_trip(self, temperature):
        dbm = noise_power_dbm(temperature, 2.5e6)
        assert float(noise_temperature(dbm, 2.5e6)) == pytest.approx(temperature, rel=1e-9)


# ──────────────────────────────────────────────
# LSRK corrections
# ──────────────────────────────────────────────


class TestLSRK:
    _EPC = Epoch(2024, 3, 1, 21, 30, 0)
    _LAT = 53.2365
    _LON = -2.3085

    def test_sun_motion_toward_apex(self):
        # Standard solar motion: 20 km/s towards RA 18h, Dec +30
        v = sun_velocity_lsrk(RADec(18.0640, 30.0))
        assert float(v) == pytest.approx(20.0, abs=0.01)

    def test_sun_motion_away_from_antapex(self):
        v = sun_velocity_lsrk(RADec(6.0640, -30.0))
        assert float(v) == pytest.approx(-20.0, abs=0.01)

    @pytest.mark.parametrize("ra,dec", [(0.0, 0.0), (5.5, -5.4), (12.0, 60.0), (20.5, 40.0)])
    def test_component_bounds(self, ra, dec):
        rd = RADec(ra, dec)
        assert abs(float(earth_rotation_velocity(rd, self._LAT, self._LON, self._EPC))) <= 0.4655
        assert abs(float(earth_orbit_velocity_bcrs(rd, self._EPC))) < 30.5
        assert abs(float(sun_velocity_lsrk(rd))) <= 20.0 + 1e-6

    def test_rotation_zero_at_pole(self):
        v = earth_rotation_velocity(RADec(3.0, 10.0), 90.0, 0.0, self._EPC)
        assert float(v) == pytest.approx(0.0, abs=1e-12)

    def test_rotation_zero_on_meridian(self):
        lst = float(self._EPC.local_sidereal_time(self._LON))
        rd = RADec(lst / 15.0, 20.0)
        v = earth_rotation_velocity(rd, self._LAT, self._LON, self._EPC)
        assert float(v) == pytest.approx(0.0, abs=1e-9)

    def test_rotation_sign(self):
        # A source rising in the east is approached by the observer
        lst = float(self._EPC.local_sidereal_time(0.0))
        rd = RADec(((lst + 90.0) % 360.0) / 15.0, 0.0)
        v = earth_rotation_velocity(rd, 0.0, 0.0, self._EPC)
        assert float(v) == pytest.approx(0.4655, abs=1e-9)

    def test_orbit_velocity_toward_apex_of_motion(self):
        # Around the March equinox the Earth moves towards RA ~18h on the ecliptic
        v_apex = earth_orbit_velocity_bcrs(RADec(18.0, -23.44), Epoch(2024, 3, 20))
        v_pole = earth_orbit_velocity_bcrs(RADec(18.0, 66.56), Epoch(2024, 3, 20))
        assert float(v_apex) > 29.0
        assert abs(float(v_pole)) < 1.0

    def test_total_is_sum(self):
        rd = RADec(20.5, 40.0)
        total = observer_velocity_lsrk(rd, self._LAT, self._LON, self._EPC)
        parts = (earth_rotation_velocity(rd, self._LAT, self._LON, self._EPC)
                 + earth_orbit_velocity_bcrs(rd, self._EPC)
                 + sun_velocity_lsrk(rd))
        assert float(total) == pytest.approx(float(parts), abs=1e-12)

    def test_jit(self):
        rd = RADec(20.5, 40.0)
        ref = observer_velocity_lsrk(rd, self._LAT, self._LON, self._EPC)
        v = jax.jit(lambda e: observer_velocity_lsrk(rd, self._LAT, self._LON, e))(self._EPC)
        assert float(v) == pytest.approx(float(ref), abs=1e-9)

    def test_vmap_over_sources(self):
        ras = jnp.linspace(0.0, 23.0, 24)
        v = jax.vmap(lambda ra: observer_velocity_lsrk(RADec(ra, 10.0), self._LAT, self._LON, self._EPC))(ras)
        assert v.shape == (24,)
        assert jnp.all(jnp.abs(v) < 51.0)
