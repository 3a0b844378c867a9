import jax
import jax.numpy as jnp
import pytest

from skyjax.coordinates import (
    AzAlt,
    az_alt_to_xy30,
    az_alt_to_xy85,
    xy30_to_az_alt,
    xy85_to_az_alt,
)

_GRID = [(az, el) for az in (10.0, 100.0, 200.0, 300.0) for el in (5.0, 30.0, 60.0, 85.0)]


def _assert_az_alt(aa, az, alt, tol=1e-9):
    daz = (float(aa.az) - az + 180.0) % 360.0 - 180.0
    assert daz == pytest.approx(0.0, abs=tol)
    assert float(aa.alt) == pytest.approx(alt, abs=tol)


# ──────────────────────────────────────────────
# XY85: X positive south, Y positive east
# ──────────────────────────────────────────────


class TestAzAltToXY85:
    def test_zenith(self):
        x, y = az_alt_to_xy85(AzAlt(123.0, 90.0))
        assert float(x) == 0.0
        assert float(y) == 0.0

    def test_south(self):
        x, y = az_alt_to_xy85(AzAlt(180.0, 45.0))
        assert float(x) == pytest.approx(45.0, abs=1e-9)
        assert float(y) == pytest.approx(0.0, abs=1e-9)

    def test_east(self):
        x, y = az_alt_to_xy85(AzAlt(90.0, 45.0))
        assert float(x) == pytest.approx(0.0, abs=1e-9)
        assert float(y) == pytest.approx(45.0, abs=1e-9)

    @pytest.mark.parametrize("az,expected_x,expected_y", [
        (0.0, -90.0, 0.0),
        (90.0, 0.0, 90.0),
        (135.0, 90.0, 45.0),
        (180.0, 90.0, 0.0),
        (270.0, 0.0, -90.0),
        (315.0, -90.0, -45.0),
    ])
    def test_horizon(self, az, expected_x, expected_y):
        x, y = az_alt_to_xy85(AzAlt(az, 0.0))
        assert float(x) == pytest.approx(expected_x, abs=1e-9)
        assert float(y) == pytest.approx(expected_y, abs=1e-9)

    def test_azimuth_360_reduced(self):
        x1, y1 = az_alt_to_xy85(AzAlt(370.0, 40.0))
        x2, y2 = az_alt_to_xy85(AzAlt(10.0, 40.0))
        assert float(x1) == pytest.approx(float(x2), abs=1e-9)
        assert float(y1) == pytest.approx(float(y2), abs=1e-9)

    def test_over_the_top(self):
        x1, y1 = az_alt_to_xy85(AzAlt(0.0, 100.0))
        x2, y2 = az_alt_to_xy85(AzAlt(180.0, 80.0))
        assert float(x1) == pytest.approx(float(x2), abs=1e-9)
        assert float(y1) == pytest.approx(float(y2), abs=1e-9)


class TestXY85ToAzAlt:
    def test_origin_is_zenith(self):
        aa = xy85_to_az_alt(0.0, 0.0)
        assert float(aa.az) == 0.0
        assert float(aa.alt) == 90.0

    @pytest.mark.parametrize("y,expected_az", [(30.0, 90.0), (-30.0, 270.0)])
    def test_x_zero(self, y, expected_az):
        aa = xy85_to_az_alt(0.0, y)
        _assert_az_alt(aa, expected_az, 60.0)

    @pytest.mark.parametrize("y,expected_az", [(90.0, 90.0), (-90.0, 270.0)])
    def test_y_at_pole(self, y, expected_az):
        aa = xy85_to_az_alt(20.0, y)
        _assert_az_alt(aa, expected_az, 0.0)

    def test_south(self):
        _assert_az_alt(xy85_to_az_alt(45.0, 0.0), 180.0, 45.0)

    def test_north(self):
        _assert_az_alt(xy85_to_az_alt(-45.0, 0.0), 0.0, 45.0)

    @pytest.mark.parametrize("az,el", _GRID)
    def test_roundtrip(self, az, el):
        x, y = az_alt_to_xy85(AzAlt(az, el))
        _assert_az_alt(xy85_to_az_alt(x, y), az, el)

    def test_roundtrip_horizon_north(self):
        x, y = az_alt_to_xy85(AzAlt(0.0, 0.0))
        _assert_az_alt(xy85_to_az_alt(x, y), 0.0, 0.0)


# ──────────────────────────────────────────────
# XY30: X positive east, Y positive north
# ──────────────────────────────────────────────


class TestAzAltToXY30:
    def test_zenith(self):
        x, y = az_alt_to_xy30(AzAlt(45.0, 90.0))
        assert float(x) == 0.0
        assert float(y) == 0.0

    def test_north(self):
        x, y = az_alt_to_xy30(AzAlt(0.0, 45.0))
        assert float(x) == pytest.approx(0.0, abs=1e-9)
        assert float(y) == pytest.approx(45.0, abs=1e-9)

    def test_east(self):
        x, y = az_alt_to_xy30(AzAlt(90.0, 45.0))
        assert float(x) == pytest.approx(45.0, abs=1e-9)
        assert float(y) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("az,expected_x,expected_y", [
        (0.0, 0.0, 90.0),
        (45.0, 90.0, 45.0),
        (90.0, 90.0, 0.0),
        (180.0, 0.0, -90.0),
        (270.0, -90.0, 0.0),
    ])
    def test_horizon(self, az, expected_x, expected_y):
        x, y = az_alt_to_xy30(AzAlt(az, 0.0))
        assert float(x) == pytest.approx(expected_x, abs=1e-9)
        assert float(y) == pytest.approx(expected_y, abs=1e-9)


class TestXY30ToAzAlt:
    def test_origin_is_zenith(self):
        aa = xy30_to_az_alt(0.0, 0.0)
        assert float(aa.az) == 0.0
        assert float(aa.alt) == 90.0

    @pytest.mark.parametrize("x,expected_az", [(30.0, 90.0), (-30.0, 270.0)])
    def test_y_zero(self, x, expected_az):
        _assert_az_alt(xy30_to_az_alt(x, 0.0), expected_az, 60.0)

    @pytest.mark.parametrize("y,expected_az", [(90.0, 0.0), (-90.0, 180.0)])
    def test_y_at_pole(self, y, expected_az):
        _assert_az_alt(xy30_to_az_alt(20.0, y), expected_az, 0.0)

    @pytest.mark.parametrize("az,el", _GRID)
    def test_roundtrip(self, az, el):
        x, y = az_alt_to_xy30(AzAlt(az, el))
        _assert_az_alt(xy30_to_az_alt(x, y), az, el)


class TestProjectionsJAX:
    def test_vmap_roundtrip(self):
        az = jnp.array([a for a, _ in _GRID])
        el = jnp.array([e for _, e in _GRID])
        x, y = jax.vmap(lambda a, e: az_alt_to_xy85(AzAlt(a, e)))(az, el)
        aa = jax.jit(xy85_to_az_alt)(x, y)
        assert jnp.allclose(aa.alt, el, atol=1e-9)

    def test_no_nans_over_grid(self):
        az, el = jnp.meshgrid(jnp.arange(0.0, 360.0, 15.0), jnp.arange(0.0, 91.0, 15.0))
        x85, y85 = az_alt_to_xy85(AzAlt(az, el))
        x30, y30 = az_alt_to_xy30(AzAlt(az, el))
        for v in (x85, y85, x30, y30):
            assert jnp.all(jnp.isfinite(v))
