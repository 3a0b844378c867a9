import jax
import jax.numpy as jnp
import pytest

from skyjax.coordinates import (
    AzAlt,
    RADec,
    az_alt_to_ra_dec,
    equatorial_to_galactic,
    galactic_to_equatorial,
    lst_and_ra_to_longitude,
    north_galactic_pole_j2000,
    precess,
    precession_matrix,
    ra_dec_to_az_alt,
)
from skyjax.epoch import Epoch
from skyjax.time import JD_B1950, JD_J2000

_JD_J2100 = JD_J2000 + 36525.0


# ──────────────────────────────────────────────
# Precession
# ──────────────────────────────────────────────


class TestPrecession:
    def test_identity_matrix_at_same_epoch(self):
        assert jnp.allclose(precession_matrix(JD_J2000, JD_J2000), jnp.eye(3))

    def test_identity_at_same_epoch(self):
        rd = precess(RADec(5.5, -5.4), JD_J2000, JD_J2000)
        assert float(rd.ra) == pytest.approx(5.5, abs=1e-12)
        assert float(rd.dec) == pytest.approx(-5.4, abs=1e-12)

    def test_equinox_point_century(self):
        # Annual precession at RA 0, Dec 0 is about 3.075 s in RA and 20.04" in Dec
        rd = precess(RADec(0.0, 0.0), JD_J2000, _JD_J2100)
        assert float(rd.ra) == pytest.approx(0.0854, abs=5e-4)
        assert float(rd.dec) == pytest.approx(0.5568, abs=1e-3)

    def test_ra_wraps_into_range(self):
        rd = precess(RADec(23.99, 0.0), JD_J2000, _JD_J2100)
        assert 0.0 <= float(rd.ra) < 24.0
        assert float(rd.ra) == pytest.approx(0.0754, abs=1e-3)

    @pytest.mark.parametrize("ra,dec", [(1.0, 10.0), (7.5, -40.0), (13.2, 60.0), (19.9, -5.0)])
    def test_forward_backward(self, ra, dec):
        jd_to = JD_J2000 + 0.2 * 36524.219878
        rd = precess(precess(RADec(ra, dec), JD_J2000, jd_to), jd_to, JD_J2000)
        assert float(rd.ra) == pytest.approx(ra, abs=1e-4)
        assert float(rd.dec) == pytest.approx(dec, abs=1e-3)

    def test_b1950_to_j2000_moves_coordinates(self):
        rd = precess(RADec(12.0, 30.0), JD_B1950, JD_J2000)
        assert abs(float(rd.ra) - 12.0) > 0.01

    def test_dec_within_range(self):
        rd = precess(RADec(6.0, 89.999), JD_J2000, _JD_J2100)
        assert -90.0 <= float(rd.dec) <= 90.0

    def test_vmap(self):
        ras = jnp.linspace(0.0, 23.0, 24)
        out = jax.vmap(lambda r: precess(RADec(r, 20.0), JD_J2000, _JD_J2100))(ras)
        assert out.ra.shape == (24,)
        assert jnp.all((out.ra >= 0.0) & (out.ra < 24.0))


# ──────────────────────────────────────────────
# Horizontal
# ──────────────────────────────────────────────


_EPOCHS = [
    Epoch(2024, 1, 1, 22, 0, 0.0),
    Epoch(2024, 6, 21, 3, 30, 0.0),
    Epoch(2010, 9, 15, 12, 0, 0.0),
]


class TestRaDecToAzAlt:
    def test_transit_south(self):
        epc = Epoch(2024, 3, 1, 20, 0, 0.0)
        lst = float(epc.local_sidereal_time(-2.0))
        aa = ra_dec_to_az_alt(RADec(lst / 15.0, 20.0), 52.0, -2.0, epc, j2000=False)
        assert float(aa.az) == pytest.approx(180.0, abs=1e-4)
        assert float(aa.alt) == pytest.approx(58.0, abs=1e-6)

    def test_rising_due_east(self):
        epc = Epoch(2024, 3, 1, 20, 0, 0.0)
        lst = float(epc.local_sidereal_time(10.0))
        aa = ra_dec_to_az_alt(RADec((lst + 90.0) / 15.0, 0.0), 45.0, 10.0, epc, j2000=False)
        assert float(aa.az) == pytest.approx(90.0, abs=1e-6)
        assert float(aa.alt) == pytest.approx(0.0, abs=1e-6)

    def test_setting_due_west(self):
        epc = Epoch(2024, 3, 1, 20, 0, 0.0)
        lst = float(epc.local_sidereal_time(10.0))
        aa = ra_dec_to_az_alt(RADec((lst - 90.0) / 15.0 % 24.0, 0.0), 45.0, 10.0, epc, j2000=False)
        assert float(aa.az) == pytest.approx(270.0, abs=1e-6)

    def test_observer_at_pole(self):
        epc = Epoch(2024, 3, 1)
        aa = ra_dec_to_az_alt(RADec(3.0, 35.0), 90.0, 0.0, epc, j2000=False)
        assert jnp.isfinite(aa.az)
        assert 0.0 <= float(aa.az) < 360.0
        assert float(aa.alt) == pytest.approx(35.0, abs=1e-6)

    def test_j2000_flag_applies_precession(self):
        epc = Epoch(2024, 1, 1, 22, 0, 0.0)
        aa_j2000 = ra_dec_to_az_alt(RADec(5.5, -5.4), 51.5, 0.0, epc)
        aa_date = ra_dec_to_az_alt(RADec(5.5, -5.4), 51.5, 0.0, epc, j2000=False)
        diff = abs(float(aa_j2000.alt) - float(aa_date.alt)) + abs(float(aa_j2000.az) - float(aa_date.az))
        assert 1e-3 < diff < 2.0

    @pytest.mark.parametrize("epc", _EPOCHS)
    @pytest.mark.parametrize("ra,dec", [(0.5, 10.0), (5.5, -5.4), (12.0, 45.0), (18.7, 38.8), (22.9, -30.0)])
    def test_roundtrip(self, epc, ra, dec):
        lat, lon = 51.5, -0.1
        aa = ra_dec_to_az_alt(RADec(ra, dec), lat, lon, epc, j2000=False)
        rd = az_alt_to_ra_dec(aa, lat, lon, epc)
        assert float(rd.dec) == pytest.approx(dec, abs=1e-5)
        dra = (float(rd.ra) - ra + 12.0) % 24.0 - 12.0
        assert dra == pytest.approx(0.0, abs=1e-5)

    def test_azimuth_range(self):
        epc = Epoch(2024, 1, 1)
        offsets = jnp.linspace(0.0, 86400.0, 145)
        aa = jax.vmap(lambda dt: ra_dec_to_az_alt(RADec(6.75, -16.7), 35.0, 139.0, epc + dt))(offsets)
        assert jnp.all((aa.az >= 0.0) & (aa.az < 360.0))
        assert jnp.all((aa.alt >= -90.0) & (aa.alt <= 90.0))

    def test_jit(self):
        epc = Epoch(2024, 1, 1, 22, 0, 0.0)
        f = jax.jit(lambda e: ra_dec_to_az_alt(RADec(5.5, -5.4), 51.5, 0.0, e))
        aa = f(epc)
        aa_ref = ra_dec_to_az_alt(RADec(5.5, -5.4), 51.5, 0.0, epc)
        assert float(aa.az) == pytest.approx(float(aa_ref.az), abs=1e-9)
        assert float(aa.alt) == pytest.approx(float(aa_ref.alt), abs=1e-9)


class TestAzAltToRaDec:
    def test_zenith_is_local_sidereal_time(self):
        epc = Epoch(2024, 6, 21, 3, 30, 0.0)
        rd = az_alt_to_ra_dec(AzAlt(0.0, 90.0), 40.0, 20.0, epc)
        assert float(rd.dec) == pytest.approx(40.0, abs=1e-9)
        assert float(rd.ra) == pytest.approx(float(epc.local_sidereal_time(20.0)) / 15.0, abs=1e-9)

    def test_north_horizon_at_pole_latitude(self):
        epc = Epoch(2024, 6, 21)
        rd = az_alt_to_ra_dec(AzAlt(0.0, 0.0), 30.0, 0.0, epc)
        assert float(rd.dec) == pytest.approx(60.0, abs=1e-9)


class TestLstAndRaToLongitude:
    @pytest.mark.parametrize("lst,ra,expected", [
        (100.0, 2.0, -70.0),
        (10.0, 20.0, -70.0),
        (350.0, 1.0, 25.0),
        (0.0, 0.0, 0.0),
    ])
    def test_longitude(self, lst, ra, expected):
        assert float(lst_and_ra_to_longitude(lst, ra)) == pytest.approx(expected, abs=1e-12)

    def test_range(self):
        lst = jnp.linspace(0.0, 359.0, 50)
        lon = lst_and_ra_to_longitude(lst, 13.0)
        assert jnp.all(jnp.abs(lon) <= 180.0)


# ──────────────────────────────────────────────
# Galactic
# ──────────────────────────────────────────────


class TestGalactic:
    def test_north_galactic_pole(self):
        ngp = north_galactic_pole_j2000()
        assert ngp.ra == pytest.approx(192.8594813 / 15.0)
        assert ngp.dec == pytest.approx(27.1282511)

    def test_pole_maps_to_b90(self):
        ngp = north_galactic_pole_j2000()
        _, b = equatorial_to_galactic(ngp.ra, ngp.dec)
        assert float(b) == pytest.approx(90.0, abs=1e-6)

    def test_galactic_centre(self):
        l, b = equatorial_to_galactic(266.40499 / 15.0, -28.93617)
        assert min(float(l), 360.0 - float(l)) < 0.01
        assert float(b) == pytest.approx(0.0, abs=0.01)

    def test_galactic_centre_inverse(self):
        ra, dec = galactic_to_equatorial(0.0, 0.0)
        assert float(ra) == pytest.approx(266.40499 / 15.0, abs=1e-3)
        assert float(dec) == pytest.approx(-28.93617, abs=0.01)

    def test_north_celestial_pole(self):
        l, b = equatorial_to_galactic(0.0, 90.0)
        assert float(l) == pytest.approx(122.93129, abs=1e-6)
        assert float(b) == pytest.approx(27.1282511, abs=1e-6)

    @pytest.mark.parametrize("l", [0.0, 45.0, 120.0, 200.0, 300.0])
    @pytest.mark.parametrize("b", [-60.0, -10.0, 0.0, 25.0, 75.0])
    def test_roundtrip(self, l, b):
        ra, dec = galactic_to_equatorial(l, b)
        l2, b2 = equatorial_to_galactic(ra, dec)
        assert float(b2) == pytest.approx(b, abs=1e-9)
        dl = (float(l2) - l + 180.0) % 360.0 - 180.0
        assert dl == pytest.approx(0.0, abs=1e-9)

    def test_ranges(self):
        ras = jnp.linspace(0.0, 23.9, 40)
        decs = jnp.linspace(-85.0, 85.0, 40)
        l, b = equatorial_to_galactic(ras, decs)
        assert jnp.all((l >= 0.0) & (l < 360.0))
        assert jnp.all(jnp.abs(b) <= 90.0)
