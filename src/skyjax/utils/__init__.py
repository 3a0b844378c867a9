"""Shared utility functions for skyjax.

Provides angle conversion and range-reduction helpers.
"""

from skyjax.utils._angle import from_radians, modulo, range_pi, to_radians

__all__ = [
    "from_radians",
    "modulo",
    "range_pi",
    "to_radians",
]
