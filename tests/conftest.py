import jax.numpy as jnp
import pytest

from skyjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py switches the dtype and has its own autouse fixture
    that restores float64 afterwards; this keeps every other test module
    independent of the order tests run in.
    """
    set_dtype(jnp.float64)
