"""Atmospheric refraction.

- **Saemundsson**: closed-form correction for optical wavelengths
- **PAL**: numerical integration through a two-layer model atmosphere,
  valid from the optical to the radio
- **Atmosphere**: troposphere and stratosphere refractivity models
"""

from ._types import AtmosphereProfile
from .atmosphere import StratosphereModel, TroposphereModel, stratosphere, troposphere
from .pal import refco, refraction_pal, refraction_pal_atmosphere, refro, refz
from .saemundsson import refraction_saemundsson

__all__ = [
    "AtmosphereProfile",
    "TroposphereModel",
    "StratosphereModel",
    "troposphere",
    "stratosphere",
    "refraction_saemundsson",
    "refraction_pal",
    "refraction_pal_atmosphere",
    "refro",
    "refco",
    "refz",
]
