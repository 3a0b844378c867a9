"""Type definitions for atmospheric refraction.

- :class:`AtmosphereProfile`: surface meteorology and tropospheric lapse
  rate at the observer.
"""

from __future__ import annotations

from typing import NamedTuple


class AtmosphereProfile(NamedTuple):
    """Meteorological conditions at the observer.

    The defaults describe a temperate, moderately humid sea-level
    atmosphere, the conditions under which the closed-form refraction
    formulae are normalised.

    Attributes:
        pressure: Surface pressure. Units: *mb*
        temperature: Surface air temperature. Units: *°C*
        humidity: Relative humidity, 0-100. Units: *%*
        lapse_rate: Temperature lapse rate in the troposphere. Units: *K/km*
    """

    pressure: float = 1010.0
    temperature: float = 10.0
    humidity: float = 50.0
    lapse_rate: float = 6.5
