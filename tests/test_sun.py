import datetime

import jax
import jax.numpy as jnp
import pytest

from skyjax.ephemerides import sun_position, sunrise
from skyjax.epoch import Epoch

# Royal Observatory, Greenwich
_LAT = 51.4779
_LON = -0.0015


def _minutes_of_day(epc: Epoch) -> float:
    _, _, _, hour, minute, second = epc.caldate()
    return hour * 60.0 + minute + second / 60.0


# ──────────────────────────────────────────────
# Sun position
# ──────────────────────────────────────────────


class TestSunPosition:
    def test_march_equinox_declination(self):
        _, rd = sun_position(Epoch(2024, 3, 20, 3, 6, 0), _LAT, _LON)
        assert float(rd.dec) == pytest.approx(0.0, abs=0.1)

    def test_march_equinox_right_ascension(self):
        _, rd = sun_position(Epoch(2024, 3, 20, 3, 6, 0), _LAT, _LON)
        ra = float(rd.ra)
        assert min(ra, 24.0 - ra) < 0.01

    def test_june_solstice_from_north_pole(self):
        # At the pole the altitude equals the declination
        aa, rd = sun_position(Epoch(2024, 6, 20, 20, 51, 0), 90.0, 0.0)
        assert float(rd.dec) == pytest.approx(23.44, abs=0.05)
        assert float(aa.alt) == pytest.approx(float(rd.dec), abs=1e-6)

    def test_december_solstice_declination(self):
        _, rd = sun_position(Epoch(2024, 12, 21, 9, 20, 0), _LAT, _LON)
        assert float(rd.dec) == pytest.approx(-23.44, abs=0.05)
        assert float(rd.ra) == pytest.approx(18.0, abs=0.01)

    def test_noon_altitude_at_greenwich(self):
        aa, rd = sun_position(Epoch(2024, 6, 21, 12, 1, 30), _LAT, _LON)
        assert float(aa.alt) == pytest.approx(90.0 - _LAT + float(rd.dec), abs=0.1)
        assert float(aa.az) == pytest.approx(180.0, abs=1.0)

    def test_below_horizon_at_midnight(self):
        aa, _ = sun_position(Epoch(2024, 6, 21, 0, 0, 0), _LAT, _LON)
        assert float(aa.alt) < 0.0

    def test_ra_in_range(self):
        for month in range(1, 13):
            _, rd = sun_position(Epoch(2023, month, 15), _LAT, _LON)
            assert 0.0 <= float(rd.ra) < 24.0
            assert abs(float(rd.dec)) < 23.5


# ──────────────────────────────────────────────
# Sunrise and sunset
# ──────────────────────────────────────────────


class TestSunrise:
    def test_greenwich_midsummer(self):
        rise, set_ = sunrise(Epoch(2024, 6, 21, 12, 0, 0), _LAT, _LON)
        assert rise.caldate()[:3] == (2024, 6, 21)
        assert set_.caldate()[:3] == (2024, 6, 21)
        assert _minutes_of_day(rise) == pytest.approx(3 * 60 + 43, abs=5)
        assert _minutes_of_day(set_) == pytest.approx(20 * 60 + 21, abs=5)

    def test_date_input_matches_epoch_input(self):
        rise_d, set_d = sunrise(datetime.date(2024, 6, 21), _LAT, _LON)
        rise_e, set_e = sunrise(Epoch(2024, 6, 21, 18, 0, 0), _LAT, _LON)
        assert float(rise_d - rise_e) == pytest.approx(0.0, abs=1e-3)
        assert float(set_d - set_e) == pytest.approx(0.0, abs=1e-3)

    def test_rise_before_set(self):
        rise, set_ = sunrise(datetime.date(2024, 1, 15), _LAT, _LON)
        day_length = float(set_ - rise)
        assert 7.0 * 3600.0 < day_length < 9.0 * 3600.0

    def test_equinox_day_length(self):
        rise, set_ = sunrise(datetime.date(2024, 3, 20), 0.0, 0.0)
        # Refraction and the solar semi-diameter lengthen the day slightly
        assert float(set_ - rise) == pytest.approx(12.0 * 3600.0 + 7.0 * 60.0, abs=120.0)

    def test_polar_night(self):
        rise, set_ = sunrise(datetime.date(2024, 12, 21), 80.0, 0.0)
        assert float(set_ - rise) == pytest.approx(0.0, abs=1e-3)

    def test_midnight_sun(self):
        rise, set_ = sunrise(datetime.date(2024, 6, 21), 80.0, 0.0)
        assert float(set_ - rise) == pytest.approx(86400.0, abs=1e-3)

    def test_longitude_shifts_transit(self):
        rise0, set0 = sunrise(datetime.date(2024, 6, 21), 0.0, 0.0)
        rise1, set1 = sunrise(datetime.date(2024, 6, 21), 0.0, -15.0)
        noon0 = rise0 + float(set0 - rise0) / 2.0
        noon1 = rise1 + float(set1 - rise1) / 2.0
        assert float(noon1 - noon0) == pytest.approx(3600.0, abs=30.0)


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestSunJAXCompatibility:
    def test_jit(self):
        epc = Epoch(2024, 6, 21, 12, 0, 0)
        aa_ref, rd_ref = sun_position(epc, _LAT, _LON)

        aa, rd = jax.jit(lambda e: sun_position(e, _LAT, _LON))(epc)
        assert float(aa.alt) == pytest.approx(float(aa_ref.alt), abs=1e-10)
        assert float(rd.ra) == pytest.approx(float(rd_ref.ra), abs=1e-10)

    def test_vmap_over_time(self):
        epc = Epoch(2024, 6, 21)
        offsets = jnp.arange(0.0, 86400.0, 3600.0)

        def alt(dt):
            aa, _ = sun_position(epc + dt, _LAT, _LON)
            return aa.alt

        alts = jax.vmap(alt)(offsets)
        assert alts.shape == (24,)
        assert int(jnp.argmax(alts)) == 12
        assert float(jnp.max(alts)) < 62.0

    def test_vmap_over_latitude(self):
        epc = Epoch(2024, 3, 20, 12, 0, 0)
        lats = jnp.array([-60.0, -30.0, 0.0, 30.0, 60.0])
        aa, rd = jax.vmap(lambda lat: sun_position(epc, lat, 0.0))(lats)
        assert aa.alt.shape == (5,)
        # Declination does not depend on the observer
        assert jnp.allclose(rd.dec, rd.dec[0])
