import jax
import jax.numpy as jnp
import pytest

from skyjax.constants import DEG2RAD, RAD2DEG
from skyjax.ephemerides import moon_days, moon_position, sun_position
from skyjax.epoch import Epoch


def _separation(rd1, rd2):
    """Great-circle angle between two RA (hours) / Dec (deg) positions, in degrees."""
    ra1, dec1 = rd1.ra * 15.0 * DEG2RAD, rd1.dec * DEG2RAD
    ra2, dec2 = rd2.ra * 15.0 * DEG2RAD, rd2.dec * DEG2RAD
    c = jnp.sin(dec1) * jnp.sin(dec2) + jnp.cos(dec1) * jnp.cos(dec2) * jnp.cos(ra1 - ra2)
    return float(jnp.arccos(jnp.clip(c, -1.0, 1.0)) * RAD2DEG)


def test_moon_days_reference_date():
    # Worked example: 1990 April 19, 0h UT is day -3543
    assert float(moon_days(Epoch(1990, 4, 19))) == pytest.approx(-3543.0, abs=1e-9)


def test_moon_days_origin():
    assert float(moon_days(Epoch(1999, 12, 31))) == pytest.approx(0.0, abs=1e-9)
    assert float(moon_days(Epoch(2000, 1, 1, 12, 0, 0))) == pytest.approx(1.5, abs=1e-9)


# ──────────────────────────────────────────────
# Moon position
# ──────────────────────────────────────────────


class TestMoonPosition:
    def test_total_solar_eclipse_alignment(self):
        # Point of greatest eclipse, 2024 April 8
        epc = Epoch(2024, 4, 8, 18, 17, 0)
        lat, lon = 25.29, -104.14
        moon_aa, moon_rd = moon_position(epc, lat, lon)
        sun_aa, sun_rd = sun_position(epc, lat, lon)

        assert _separation(moon_rd, sun_rd) < 0.3
        assert float(moon_aa.alt) == pytest.approx(float(sun_aa.alt), abs=0.3)
        assert float(moon_aa.alt) > 60.0

    def test_ranges_over_a_month(self):
        epc = Epoch(2024, 1, 1)
        for day in range(0, 30, 3):
            aa, rd = moon_position(epc + day * 86400.0, 45.0, 10.0)
            assert 0.0 <= float(rd.ra) < 24.0
            assert abs(float(rd.dec)) < 30.0
            assert 0.0 <= float(aa.az) < 360.0
            assert -90.0 <= float(aa.alt) <= 90.0

    def test_topocentric_parallax(self):
        # Opposite hemispheres see the Moon displaced by about twice its parallax
        epc = Epoch(2024, 2, 10, 6, 0, 0)
        _, rd_north = moon_position(epc, 60.0, 0.0)
        _, rd_south = moon_position(epc, -60.0, 0.0)
        sep = _separation(rd_north, rd_south)
        assert 0.3 < sep < 2.2

    def test_daily_motion(self):
        # The Moon moves roughly 13 degrees a day against the stars
        epc = Epoch(2024, 5, 1)
        _, rd0 = moon_position(epc, 0.0, 0.0)
        _, rd1 = moon_position(epc + 86400.0, 0.0, 0.0)
        assert 10.0 < _separation(rd0, rd1) < 16.0


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestMoonJAXCompatibility:
    def test_jit(self):
        epc = Epoch(2024, 4, 8, 18, 17, 0)
        aa_ref, rd_ref = moon_position(epc, 25.29, -104.14)
        aa, rd = jax.jit(lambda e: moon_position(e, 25.29, -104.14))(epc)
        assert float(rd.ra) == pytest.approx(float(rd_ref.ra), abs=1e-10)
        assert float(rd.dec) == pytest.approx(float(rd_ref.dec), abs=1e-10)
        assert float(aa.az) == pytest.approx(float(aa_ref.az), abs=1e-8)

    def test_vmap_over_time(self):
        epc = Epoch(2024, 4, 8)
        offsets = jnp.arange(0.0, 86400.0, 1800.0)

        def dec(dt):
            _, rd = moon_position(epc + dt, 25.29, -104.14)
            return rd.dec

        decs = jax.vmap(dec)(offsets)
        assert decs.shape == (48,)
        assert jnp.all(jnp.isfinite(decs))
