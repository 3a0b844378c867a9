import jax.numpy as jnp
import pytest

from skyjax.frames import Rx, rotation_ecliptic_to_bcrs, rotation_ecliptic_to_equatorial

_OBLIQUITY = 23.4392911


class TestRx:
    def test_identity(self):
        assert jnp.allclose(Rx(0.0), jnp.eye(3))

    def test_degrees_matches_radians(self):
        assert jnp.allclose(Rx(30.0, use_degrees=True), Rx(jnp.pi / 6))

    def test_frame_rotation(self):
        # Rotating the frame +90 deg about x takes the old +y axis onto -z
        v = Rx(90.0, use_degrees=True) @ jnp.array([0.0, 1.0, 0.0])
        assert jnp.allclose(v, jnp.array([0.0, 0.0, -1.0]), atol=1e-12)

    @pytest.mark.parametrize("angle", [-170.0, -45.0, 10.0, 123.0])
    def test_orthonormal(self, angle):
        r = Rx(angle, use_degrees=True)
        assert jnp.allclose(r @ r.T, jnp.eye(3), atol=1e-12)
        assert float(jnp.linalg.det(r)) == pytest.approx(1.0, abs=1e-12)


class TestEclipticRotations:
    def test_ecliptic_pole_to_equatorial(self):
        pole = rotation_ecliptic_to_equatorial(_OBLIQUITY, use_degrees=True) @ jnp.array([0.0, 0.0, 1.0])
        # The ecliptic pole lies at RA 18h, Dec 90 - obliquity
        assert float(pole[0]) == pytest.approx(0.0, abs=1e-12)
        assert float(pole[1]) < 0.0
        assert float(jnp.rad2deg(jnp.arcsin(pole[2]))) == pytest.approx(90.0 - _OBLIQUITY, abs=1e-9)

    def test_equinox_unchanged(self):
        x = rotation_ecliptic_to_equatorial(0.4, use_degrees=False) @ jnp.array([1.0, 0.0, 0.0])
        assert jnp.allclose(x, jnp.array([1.0, 0.0, 0.0]))

    def test_bcrs_close_to_obliquity_rotation(self):
        r = rotation_ecliptic_to_bcrs()
        r_eps = rotation_ecliptic_to_equatorial(_OBLIQUITY, use_degrees=True)
        assert jnp.allclose(r, r_eps, atol=1e-6)

    def test_bcrs_nearly_orthonormal(self):
        r = rotation_ecliptic_to_bcrs()
        assert jnp.allclose(r @ r.T, jnp.eye(3), atol=1e-9)
