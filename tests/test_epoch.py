import datetime
import logging

import jax
import jax.numpy as jnp
import pytest

from skyjax.epoch import (
    Epoch,
    jd_now,
    julian_date,
    julian_date_to_datetime,
    julian_date_to_epoch,
    local_sidereal_time,
    modified_julian_date,
)

_SEC_TOL = 1e-6


# ──────────────────────────────────────────────
# Construction: date components
# ──────────────────────────────────────────────


class TestEpochDateConstruction:
    def test_epoch_from_date(self):
        epc = Epoch(2018, 12, 20)
        assert epc.caldate()[:5] == (2018, 12, 20, 0, 0)
        assert epc.caldate()[5] == pytest.approx(0.0, abs=_SEC_TOL)

    def test_epoch_from_date_with_time(self):
        year, month, day, hour, minute, second = Epoch(2018, 12, 20, 16, 22, 19.0).caldate()
        assert (year, month, day, hour, minute) == (2018, 12, 20, 16, 22)
        assert second == pytest.approx(19.0, abs=_SEC_TOL)

    def test_epoch_from_date_fractional_second(self):
        second = Epoch(2018, 12, 20, 16, 22, 19.123).caldate()[5]
        assert second == pytest.approx(19.123, abs=1e-5)

    def test_epoch_seconds_overflow_rolls_day(self):
        assert Epoch(2024, 1, 1, 0, 0, 86400.0) == Epoch(2024, 1, 2)

    def test_epoch_internal_range(self):
        epc = Epoch(2024, 6, 15, 18, 0, 0.0)
        assert 0.0 <= float(epc._seconds) < 86400.0
        assert epc._jd.dtype == jnp.int32


class TestEpochStringConstruction:
    def test_epoch_from_string_date_only(self):
        assert Epoch("2018-12-20") == Epoch(2018, 12, 20)

    def test_epoch_from_string_iso(self):
        assert Epoch("2018-12-20T16:22:19Z") == Epoch(2018, 12, 20, 16, 22, 19.0)

    def test_epoch_from_string_fractional_seconds(self):
        assert Epoch("2018-12-20T16:22:19.25Z") == Epoch(2018, 12, 20, 16, 22, 19.25)

    @pytest.mark.parametrize("string", ["2018/12/20", "20 Dec 2018", "2018-12-20T16:22", ""])
    def test_epoch_from_string_invalid(self, string):
        with pytest.raises(ValueError, match="ISO 8601"):
            Epoch(string)


class TestEpochOtherConstruction:
    def test_epoch_copy(self):
        epc = Epoch(2024, 3, 20, 3, 6, 0.0)
        assert Epoch(epc) == epc

    def test_epoch_no_args(self):
        with pytest.raises(ValueError):
            Epoch()

    def test_epoch_invalid_type(self):
        with pytest.raises(ValueError):
            Epoch(2451545.0)

    def test_epoch_too_many_args(self):
        with pytest.raises(ValueError):
            Epoch(2024, 1, 1, 0, 0, 0.0, 0)

    def test_from_jd(self):
        assert Epoch.from_jd(2451545.0) == Epoch(2000, 1, 1, 12, 0, 0.0)

    def test_from_jd_before_noon(self):
        assert Epoch.from_jd(2451544.75) == Epoch(2000, 1, 1, 6, 0, 0.0)

    def test_from_datetime_aware(self):
        dt = datetime.datetime(2024, 4, 8, 18, 17, 30, 500000, tzinfo=datetime.timezone.utc)
        assert Epoch.from_datetime(dt) == Epoch(2024, 4, 8, 18, 17, 30.5)

    def test_from_datetime_converts_timezone(self):
        tz = datetime.timezone(datetime.timedelta(hours=-5))
        dt = datetime.datetime(2024, 4, 8, 13, 17, 0, tzinfo=tz)
        assert Epoch.from_datetime(dt) == Epoch(2024, 4, 8, 18, 17, 0.0)

    def test_from_datetime_naive_is_utc(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="skyjax.epoch"):
            epc = Epoch.from_datetime(datetime.datetime(2024, 4, 8, 18, 17))
        assert epc == Epoch(2024, 4, 8, 18, 17, 0.0)
        assert "naive" in caplog.text

    def test_now(self):
        before = datetime.datetime.now(datetime.timezone.utc)
        epc = Epoch.now()
        after = datetime.datetime.now(datetime.timezone.utc)
        assert before - datetime.timedelta(seconds=1) <= epc.to_datetime()
        assert epc.to_datetime() <= after + datetime.timedelta(seconds=1)


# ──────────────────────────────────────────────
# Time scales
# ──────────────────────────────────────────────


class TestEpochJulianDate:
    def test_epoch_jd_j2000(self):
        assert float(Epoch(2000, 1, 1, 12, 0, 0.0).jd()) == pytest.approx(2451545.0, abs=1e-9)

    def test_epoch_jd_midnight(self):
        assert float(Epoch(2000, 1, 1).jd()) == pytest.approx(2451544.5, abs=1e-9)

    def test_epoch_mjd(self):
        assert float(Epoch(2000, 1, 1, 12, 0, 0.0).mjd()) == pytest.approx(51544.5, abs=1e-9)

    def test_epoch_mjd_unix_epoch(self):
        assert float(Epoch(1970, 1, 1).mjd()) == pytest.approx(40587.0, abs=1e-9)

    def test_unix_seconds(self):
        assert float(Epoch(1970, 1, 1).unix_seconds()) == pytest.approx(0.0, abs=1e-6)
        assert float(Epoch(2000, 1, 1, 12, 0, 0.0).unix_seconds()) == pytest.approx(946728000.0, abs=1e-6)

    def test_to_datetime(self):
        dt = Epoch(2024, 6, 21, 3, 43, 12.25).to_datetime()
        assert dt == datetime.datetime(2024, 6, 21, 3, 43, 12, 250000, tzinfo=datetime.timezone.utc)

    @pytest.mark.parametrize("jd", [2415020.5, 2433282.4229166666, 2451545.0, 2460409.262, 2488069.5])
    def test_jd_roundtrip(self, jd):
        """1900 to 2100 to within a millisecond."""
        assert float(Epoch.from_jd(jd).jd()) == pytest.approx(jd, abs=1e-3 / 86400.0)

    @pytest.mark.parametrize("year", [1900, 1950, 2000, 2024, 2100])
    def test_datetime_roundtrip(self, year):
        dt = datetime.datetime(year, 7, 4, 9, 15, 42, 125000, tzinfo=datetime.timezone.utc)
        assert Epoch.from_datetime(dt).to_datetime() == dt


class TestEpochFreeFunctions:
    def test_julian_date(self):
        assert float(julian_date(Epoch(2000, 1, 1, 12, 0, 0.0))) == pytest.approx(2451545.0, abs=1e-9)

    def test_modified_julian_date(self):
        assert float(modified_julian_date(Epoch(2000, 1, 1))) == pytest.approx(51544.0, abs=1e-9)

    def test_julian_date_to_epoch(self):
        assert julian_date_to_epoch(2451544.5) == Epoch(2000, 1, 1)

    def test_julian_date_to_datetime(self):
        dt = julian_date_to_datetime(2451545.0)
        assert dt == datetime.datetime(2000, 1, 1, 12, tzinfo=datetime.timezone.utc)

    def test_jd_now(self):
        jd = jd_now()
        assert isinstance(jd, float)
        assert jd > 2460000.0

    def test_local_sidereal_time(self):
        epc = Epoch(2000, 1, 1, 12, 0, 0.0)
        assert float(local_sidereal_time(epc, 0.0)) == pytest.approx(280.46, abs=1e-6)
        assert float(epc.local_sidereal_time(-80.46)) == pytest.approx(200.0, abs=1e-6)


# ──────────────────────────────────────────────
# Arithmetic
# ──────────────────────────────────────────────


class TestEpochArithmetic:
    def test_epoch_add_seconds(self):
        assert Epoch(2024, 1, 1) + 90.0 == Epoch(2024, 1, 1, 0, 1, 30.0)

    def test_epoch_add_day_rollover(self):
        epc = Epoch(2023, 12, 31, 23, 59, 0.0) + 120.0
        assert epc.caldate()[:5] == (2024, 1, 1, 0, 1)

    def test_epoch_add_negative(self):
        assert Epoch(2024, 1, 1) + (-60.0) == Epoch(2023, 12, 31, 23, 59, 0.0)

    def test_epoch_subtract_seconds(self):
        assert Epoch(2024, 1, 1) - 3600.0 == Epoch(2023, 12, 31, 23, 0, 0.0)

    def test_epoch_subtract_epoch(self):
        diff = Epoch(2024, 1, 2, 6, 0, 0.0) - Epoch(2024, 1, 1)
        assert float(diff) == pytest.approx(108000.0, abs=_SEC_TOL)

    def test_epoch_subtract_epoch_negative(self):
        diff = Epoch(2024, 1, 1) - Epoch(2024, 1, 1, 0, 0, 30.0)
        assert float(diff) == pytest.approx(-30.0, abs=_SEC_TOL)

    def test_epoch_kahan_small_steps(self):
        # 0.001 s steps near 43200 s would drift by ~3e-9 s without compensation
        epc0 = Epoch(2024, 1, 1)
        epc = epc0
        for _ in range(1000):
            epc = epc + 0.001
        assert float(epc - epc0) == pytest.approx(1.0, abs=1e-10)

    def test_epoch_kahan_compensator_in_pytree(self):
        epc = Epoch(2024, 1, 1) + 0.001
        leaves = jax.tree_util.tree_leaves(epc)
        assert len(leaves) == 3

    def test_epoch_kahan_scan(self):
        epc0 = Epoch(2024, 1, 1)

        def step(epc, _):
            return epc + 0.001, None

        final_epc, _ = jax.lax.scan(step, epc0, None, length=5000)
        assert float(final_epc - epc0) == pytest.approx(5.0, abs=1e-10)

    def test_epoch_subtract_seconds_after_steps(self):
        epc0 = Epoch(2024, 1, 1)
        epc = epc0
        for _ in range(500):
            epc = epc + 0.001
        epc = epc - 0.5
        assert float(epc - epc0) == pytest.approx(0.0, abs=1e-10)
        assert bool(epc == epc0)


class TestEpochComparison:
    def test_epoch_equality(self):
        assert Epoch(2024, 1, 1) == Epoch(2024, 1, 1)

    def test_epoch_inequality(self):
        assert Epoch(2024, 1, 1) != Epoch(2024, 1, 1, 0, 0, 1.0)

    def test_epoch_less_than(self):
        assert Epoch(2024, 1, 1) < Epoch(2024, 1, 2)

    def test_epoch_less_than_same_day(self):
        assert Epoch(2024, 1, 1, 13, 0, 0.0) < Epoch(2024, 1, 1, 14, 0, 0.0)

    def test_epoch_less_equal(self):
        assert Epoch(2024, 1, 1) <= Epoch(2024, 1, 1)
        assert Epoch(2024, 1, 1) <= Epoch(2024, 1, 2)

    def test_epoch_greater_than(self):
        assert Epoch(2024, 1, 2) > Epoch(2024, 1, 1)

    def test_epoch_greater_equal(self):
        assert Epoch(2024, 1, 2) >= Epoch(2024, 1, 1)
        assert Epoch(2024, 1, 1) >= Epoch(2024, 1, 1)

    def test_epoch_not_equal_to_non_epoch(self):
        assert Epoch(2024, 1, 1) != "2024-01-01"


# ──────────────────────────────────────────────
# Representations
# ──────────────────────────────────────────────


class TestEpochString:
    def test_epoch_str_format(self):
        assert str(Epoch(2024, 4, 8, 18, 17, 30.5)) == "2024-04-08T18:17:30.500Z"

    def test_epoch_str_midnight(self):
        assert str(Epoch(2024, 4, 8)) == "2024-04-08T00:00:00.000Z"

    def test_epoch_str_just_before_midnight(self):
        assert str(Epoch(2024, 4, 8, 23, 59, 59.0)) == "2024-04-08T23:59:59.000Z"

    def test_epoch_repr(self):
        assert repr(Epoch(2000, 1, 1, 12, 0, 0.0)) == "Epoch(_jd=2451545, _seconds=0.0, _kahan_c=0.0)"

    def test_epoch_hash(self):
        d = {Epoch(2000, 1, 1): "midnight"}
        assert d[Epoch("2000-01-01")] == "midnight"


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestEpochJAXCompatibility:
    def test_epoch_jit_add(self):
        result = jax.jit(lambda e: e + 60.0)(Epoch(2000, 1, 1))
        assert result.caldate()[:5] == (2000, 1, 1, 0, 1)

    def test_epoch_jit_sub_epochs(self):
        diff = jax.jit(lambda a, b: a - b)(Epoch(2000, 1, 2), Epoch(2000, 1, 1))
        assert float(diff) == pytest.approx(86400.0, abs=_SEC_TOL)

    def test_epoch_jit_jd(self):
        jd = jax.jit(lambda e: e.jd())(Epoch(2000, 1, 1, 12, 0, 0.0))
        assert float(jd) == pytest.approx(2451545.0, abs=1e-9)

    def test_epoch_jit_from_jd(self):
        epc = jax.jit(Epoch.from_jd)(2451545.25)
        assert epc == Epoch(2000, 1, 1, 18, 0, 0.0)

    def test_epoch_vmap_add(self):
        epc = Epoch(2000, 1, 1)
        deltas = jnp.array([0.0, 60.0, 3600.0, 86400.0, 172800.5])
        results = jax.vmap(lambda dt: (epc + dt) - epc)(deltas)
        assert jnp.allclose(results, deltas, atol=_SEC_TOL)

    def test_epoch_pytree_roundtrip(self):
        epc = Epoch(2000, 1, 1, 6, 30, 15.5)
        leaves, treedef = jax.tree_util.tree_flatten(epc)
        assert treedef.unflatten(leaves) == epc

    def test_epoch_lax_scan(self):
        epc0 = Epoch(2000, 1, 1)

        def step(epc, _):
            epc_next = epc + 60.0
            return epc_next, epc_next - epc0

        final_epc, elapsed = jax.lax.scan(step, epc0, None, length=60)
        assert final_epc.caldate()[:5] == (2000, 1, 1, 1, 0)
        assert float(elapsed[-1]) == pytest.approx(3600.0, abs=_SEC_TOL)
