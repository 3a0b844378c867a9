"""Tests for the skyjax.config module."""

import logging

import jax
import jax.numpy as jnp
import pytest

from skyjax.config import get_dtype, get_epoch_eq_tolerance, set_dtype
from skyjax.epoch import Epoch
from skyjax.radio import doppler_to_velocity
from skyjax.refraction import refraction_saemundsson
from skyjax.time import caldate_to_jd

pytestmark = pytest.mark.order("first")


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to the float64 default before and after each test."""
    set_dtype(jnp.float64)
    yield
    set_dtype(jnp.float64)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_x64_enabled_on_import(self):
        assert jax.config.jax_enable_x64 is True

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")

    def test_invalid_dtype_keeps_previous(self):
        set_dtype(jnp.float32)
        with pytest.raises(ValueError):
            set_dtype(jnp.int64)
        assert get_dtype() == jnp.float32

    def test_set_dtype_logs(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="skyjax.config"):
            set_dtype(jnp.float32)
        assert "float32" in caplog.text


class TestEpochEqTolerance:
    def test_float64_tolerance(self):
        assert get_epoch_eq_tolerance() == 1e-6

    def test_float32_tolerance(self):
        set_dtype(jnp.float32)
        assert get_epoch_eq_tolerance() == 1e-3

    @pytest.mark.parametrize("dtype", [jnp.float16, jnp.bfloat16])
    def test_half_precision_tolerance(self, dtype):
        set_dtype(dtype)
        assert get_epoch_eq_tolerance() == 0.1


class TestDtypeSwitchingOutputs:
    """Verify that output dtypes follow the configured dtype."""

    def test_epoch_seconds_dtype_float64(self):
        epc = Epoch(2024, 1, 1, 12, 0, 0.0)
        assert epc._seconds.dtype == jnp.float64

    def test_epoch_seconds_dtype_float32(self):
        set_dtype(jnp.float32)
        epc = Epoch(2024, 1, 1, 12, 0, 0.0)
        assert epc._seconds.dtype == jnp.float32

    def test_epoch_jd_stays_int32(self):
        set_dtype(jnp.float32)
        epc = Epoch(2024, 1, 1, 12, 0, 0.0)
        assert epc._jd.dtype == jnp.int32

    def test_caldate_to_jd_dtype(self):
        assert caldate_to_jd(2000, 1, 1, 12).dtype == jnp.float64

    def test_doppler_dtype_float32(self):
        set_dtype(jnp.float32)
        assert doppler_to_velocity(1.0e9, 1.001e9).dtype == jnp.float32

    def test_refraction_dtype_float32(self):
        set_dtype(jnp.float32)
        assert refraction_saemundsson(30.0).dtype == jnp.float32


class TestFloat64Precision:
    def test_jd_precision_float64(self):
        """Float64 JD keeps sub-millisecond resolution of the day fraction."""
        epc = Epoch(2024, 6, 15, 6, 30, 0.0)
        jd = float(epc.jd())
        fractional = jd - int(jd)
        expected_frac = (6.0 * 3600 + 30.0 * 60 + 43200.0) / 86400.0
        assert abs(fractional - expected_frac) < 1e-8

    def test_epoch_accumulation_float64(self):
        epc = Epoch(2024, 1, 1)
        for _ in range(1000):
            epc = epc + 0.001
        assert float(epc - Epoch(2024, 1, 1)) == pytest.approx(1.0, abs=1e-9)


class TestJITRetrace:
    def test_jit_retrace_on_dtype_change(self):
        @jax.jit
        def shift(f):
            return doppler_to_velocity(f, 1.0e9)

        set_dtype(jnp.float32)
        assert shift(jnp.float32(1.0e9)).dtype == jnp.float32

        set_dtype(jnp.float64)
        assert shift(jnp.float64(1.0e9)).dtype == jnp.float64
