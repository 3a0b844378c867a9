"""Numerical quadrature.

- **simpson_adaptive**: composite Simpson's rule with strip doubling and
  reuse of previously evaluated points
- **SimpsonConfig**: strip limits and tolerance
- **QuadratureResult**: estimate, strip count and convergence flag
"""

from ._types import QuadratureResult, SimpsonConfig
from .simpson import simpson_adaptive

__all__ = [
    "QuadratureResult",
    "SimpsonConfig",
    "simpson_adaptive",
]
