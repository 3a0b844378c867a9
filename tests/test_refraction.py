import jax
import jax.numpy as jnp
import pytest

from skyjax.constants import DEG2RAD, HYDROGEN_LINE_FREQUENCY
from skyjax.coordinates import GeodeticPosition
from skyjax.refraction import (
    AtmosphereProfile,
    StratosphereModel,
    TroposphereModel,
    refco,
    refraction_pal,
    refraction_pal_atmosphere,
    refraction_saemundsson,
    refro,
    refz,
    stratosphere,
    troposphere,
)

# Visible light, 550 nm
_OPTICAL = 5.45e14


# ──────────────────────────────────────────────
# Saemundsson
# ──────────────────────────────────────────────


class TestSaemundsson:
    def test_zero_at_zenith(self):
        assert float(refraction_saemundsson(90.0)) == 0.0

    def test_forty_five_degrees(self):
        # About one arcminute at standard conditions
        assert float(refraction_saemundsson(45.0)) * 60.0 == pytest.approx(1.0146, rel=1e-3)

    def test_horizon(self):
        # Roughly half a degree at the horizon
        assert 0.45 < float(refraction_saemundsson(0.0)) < 0.52

    def test_decreasing_with_altitude(self):
        alts = jnp.array([0.0, 2.0, 5.0, 10.0, 20.0, 45.0, 70.0, 89.0])
        r = refraction_saemundsson(alts)
        assert jnp.all(jnp.diff(r) < 0.0)

    def test_pressure_scaling(self):
        r_full = refraction_saemundsson(30.0, 1010.0, 10.0)
        r_half = refraction_saemundsson(30.0, 505.0, 10.0)
        assert float(r_half) == pytest.approx(float(r_full) / 2.0, rel=1e-12)

    def test_finite_at_pole_of_formula(self):
        # 10.3 / (alt + 5.11) is singular at -5.11 degrees
        assert float(refraction_saemundsson(-5.11)) == 0.0
        r = refraction_saemundsson(jnp.array([-5.2, -5.11, -5.0, -1.0]))
        assert jnp.all(jnp.isfinite(r))

    def test_temperature_scaling(self):
        r_cold = refraction_saemundsson(30.0, 1010.0, -20.0)
        r_warm = refraction_saemundsson(30.0, 1010.0, 30.0)
        assert float(r_cold) > float(r_warm)


# ──────────────────────────────────────────────
# Model atmosphere
# ──────────────────────────────────────────────


class TestModelAtmosphere:
    _TROPO = TroposphereModel(
        r0=6378120.0, t0=283.15, alpha=0.0065, gamm2=3.26, delm2=16.36,
        c1=2.7e-4, c2=1.0e-6, c3=1.0e-7, c4=4.0e-8, c5=0.0, c6=0.0,
    )
    _STRATO = StratosphereModel(rt=6389120.0, tt=211.65, dnt=1.00008, gamal=0.03416)

    def test_troposphere_at_observer(self):
        t, dn, rdndr = troposphere(self._TROPO, self._TROPO.r0)
        m = self._TROPO
        assert float(t) == pytest.approx(m.t0)
        assert float(dn) == pytest.approx(1.0 + m.c1 - m.c2, rel=1e-14)
        assert float(rdndr) == pytest.approx(m.r0 * (m.c4 - m.c3), rel=1e-12)

    def test_troposphere_cools_with_height(self):
        t, _, _ = troposphere(self._TROPO, self._TROPO.r0 + 1000.0)
        assert float(t) == pytest.approx(283.15 - 6.5, abs=1e-9)

    def test_troposphere_temperature_clamped(self):
        t, _, _ = troposphere(self._TROPO, self._TROPO.r0 + 50000.0)
        assert float(t) == 100.0
        t, _, _ = troposphere(self._TROPO, self._TROPO.r0 - 10000.0)
        assert float(t) == 320.0

    def test_stratosphere_at_tropopause(self):
        dn, rdndr = stratosphere(self._STRATO, self._STRATO.rt)
        m = self._STRATO
        assert float(dn) == pytest.approx(m.dnt, rel=1e-14)
        assert float(rdndr) == pytest.approx(-m.rt * (m.gamal / m.tt) * (m.dnt - 1.0), rel=1e-12)

    def test_stratosphere_decays(self):
        dn_low, _ = stratosphere(self._STRATO, self._STRATO.rt + 1000.0)
        dn_high, _ = stratosphere(self._STRATO, self._STRATO.rt + 20000.0)
        assert 1.0 < float(dn_high) < float(dn_low) < self._STRATO.dnt


# ──────────────────────────────────────────────
# Rigorous refraction integral
# ──────────────────────────────────────────────


class TestRefro:
    _ARGS = (0.0, 283.15, 1010.0, 0.5, 0.55, 0.0, 0.0065, 1e-10)

    def test_forty_five_degrees(self):
        r = refro(jnp.pi / 4.0, *self._ARGS)
        # Close to 58 arcseconds
        assert 2.6e-4 < float(r) < 2.9e-4

    def test_sign_follows_zenith_distance(self):
        r_pos = refro(jnp.pi / 4.0, *self._ARGS)
        r_neg = refro(-jnp.pi / 4.0, *self._ARGS)
        assert float(r_neg) == pytest.approx(-float(r_pos), rel=1e-12)

    def test_zero_at_zenith(self):
        assert float(refro(0.0, *self._ARGS)) == pytest.approx(0.0, abs=1e-12)

    def test_vacuum(self):
        args = (0.0, 283.15, 0.0, 0.0, 0.55, 0.0, 0.0065, 1e-10)
        assert float(refro(jnp.pi / 4.0, *args)) == pytest.approx(0.0, abs=1e-12)

    def test_increases_toward_horizon(self):
        zs = [0.3, 0.8, 1.2, 1.5]
        rs = [float(refro(z, *self._ARGS)) for z in zs]
        assert rs == sorted(rs)

    def test_refco_coefficients(self):
        refa, refb = refco(*self._ARGS)
        assert 2.6e-4 < float(refa) < 2.9e-4
        assert float(refb) < 0.0
        assert abs(float(refb)) < 1e-6

    def test_refz_zenith(self):
        refa, refb = refco(*self._ARGS)
        assert float(refz(0.0, refa, refb)) == pytest.approx(0.0, abs=1e-15)

    def test_refz_reduces_zenith_distance(self):
        refa, refb = refco(*self._ARGS)
        zu = 60.0 * DEG2RAD
        zr = refz(zu, refa, refb)
        assert 0.0 < float(zu - zr) < 1e-3


# ──────────────────────────────────────────────
# PAL refraction in degrees
# ──────────────────────────────────────────────


class TestRefractionPal:
    def test_optical_forty_five_degrees(self):
        # Reference value from SLALIB/PAL refco + refz for the same conditions
        r = refraction_pal(45.0, 1010.0, 10.0, 50.0, _OPTICAL)
        assert float(r) * 60.0 == pytest.approx(0.96528, abs=1e-4)

    def test_agrees_with_saemundsson_in_optical(self):
        for alt in [30.0, 60.0]:
            pal = float(refraction_pal(alt, frequency=_OPTICAL, humidity=0.0))
            sae = float(refraction_saemundsson(alt))
            assert pal == pytest.approx(sae, rel=0.08)

    def test_zero_at_zenith(self):
        assert float(refraction_pal(90.0, frequency=_OPTICAL)) == pytest.approx(0.0, abs=1e-12)

    def test_continuous_at_hand_over(self):
        # The high zenith distance model takes over at 83 degrees
        below = refraction_pal(7.0 - 1e-7, frequency=_OPTICAL)
        above = refraction_pal(7.0 + 1e-7, frequency=_OPTICAL)
        assert float(below) == pytest.approx(float(above), abs=1e-6)

    def test_horizon(self):
        r = refraction_pal(0.0, frequency=_OPTICAL)
        assert 0.4 < float(r) < 0.65

    def test_constant_below_minus_three_degrees(self):
        r3 = refraction_pal(-3.0, frequency=_OPTICAL)
        r5 = refraction_pal(-5.0, frequency=_OPTICAL)
        assert float(r5) == pytest.approx(float(r3), abs=1e-12)

    def test_decreasing_with_altitude(self):
        alts = jnp.array([1.0, 5.0, 10.0, 20.0, 45.0, 80.0])
        r = refraction_pal(alts, frequency=_OPTICAL)
        assert r.shape == (6,)
        assert jnp.all(jnp.diff(r) < 0.0)

    def test_radio_exceeds_optical_when_humid(self):
        radio = refraction_pal(30.0, 1010.0, 25.0, 100.0, HYDROGEN_LINE_FREQUENCY)
        optical = refraction_pal(30.0, 1010.0, 25.0, 100.0, _OPTICAL)
        assert float(radio) > float(optical) * 1.1

    def test_humidity_matters_at_radio(self):
        dry = refraction_pal(30.0, humidity=0.0)
        wet = refraction_pal(30.0, humidity=100.0)
        assert float(wet) > float(dry)

    def test_atmosphere_profile_defaults(self):
        atm = AtmosphereProfile()
        assert atm.pressure == 1010.0
        assert atm.temperature == 10.0
        assert atm.humidity == 50.0
        assert atm.lapse_rate == 6.5

    def test_atmosphere_wrapper_matches(self):
        atm = AtmosphereProfile(990.0, 15.0, 70.0, 6.0)
        loc = GeodeticPosition(52.0, -1.0, 120.0)
        a = refraction_pal_atmosphere(20.0, atm, HYDROGEN_LINE_FREQUENCY, loc)
        b = refraction_pal(20.0, 990.0, 15.0, 70.0, HYDROGEN_LINE_FREQUENCY, 52.0, 120.0, 6.0)
        assert float(a) == pytest.approx(float(b), rel=1e-14)

    def test_jit(self):
        ref = refraction_pal(30.0, frequency=_OPTICAL)
        r = jax.jit(lambda alt: refraction_pal(alt, frequency=_OPTICAL))(30.0)
        assert float(r) == pytest.approx(float(ref), rel=1e-10)

    def test_vmap_over_pressure(self):
        pressures = jnp.array([800.0, 900.0, 1000.0, 1100.0])
        r = jax.vmap(lambda p: refraction_pal(30.0, p, frequency=_OPTICAL))(pressures)
        assert r.shape == (4,)
        assert jnp.all(jnp.diff(r) > 0.0)
