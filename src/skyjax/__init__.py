"""
skyjax is a small positional astronomy and atmospheric refraction library implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    JD_MJD_OFFSET,
    JD_UNIX_EPOCH,
    SECONDS_PER_DAY,
    C_LIGHT,
    BOLTZMANN,
    HYDROGEN_MASS,
    HYDROGEN_LINE_FREQUENCY,
    HYDROXYL_LINE_FREQUENCY,
    DEUTERIUM_LINE_FREQUENCY,
)

from .config import set_dtype, get_dtype

from .time import (
    JD_J2000,
    JD_B1950,
    jd_j2000,
    jd_b1950,
    caldate_to_jd,
    caldate_to_mjd,
    jd_to_caldate,
    jd_to_mjd,
    mjd_to_jd,
    jd_to_unix,
    unix_to_jd,
    jd_to_lst,
)

from .epoch import (
    Epoch,
    julian_date,
    modified_julian_date,
    julian_date_to_epoch,
    julian_date_to_datetime,
    local_sidereal_time,
    jd_now,
)

from .utils import modulo, range_pi

from .coordinates import (
    AzAlt,
    GeodeticPosition,
    RADec,
    precess,
    ra_dec_to_az_alt,
    az_alt_to_ra_dec,
    lst_and_ra_to_longitude,
    az_alt_to_xy85,
    az_alt_to_xy30,
    xy85_to_az_alt,
    xy30_to_az_alt,
    north_galactic_pole_j2000,
    equatorial_to_galactic,
    galactic_to_equatorial,
)

from .ephemerides import (
    EarthState,
    earth_state,
    moon_days,
    moon_position,
    sun_position,
    sunrise,
)

from .radio import (
    doppler_to_velocity,
    velocity_to_doppler,
    earth_rotation_velocity,
    earth_orbit_velocity_bcrs,
    sun_velocity_lsrk,
    observer_velocity_lsrk,
    noise_power_dbm,
    noise_temperature,
)

from .refraction import (
    AtmosphereProfile,
    refraction_saemundsson,
    refraction_pal,
    refraction_pal_atmosphere,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "AS2RAD",
    "RAD2AS",
    "JD_MJD_OFFSET",
    "JD_UNIX_EPOCH",
    "SECONDS_PER_DAY",
    "C_LIGHT",
    "BOLTZMANN",
    "HYDROGEN_MASS",
    "HYDROGEN_LINE_FREQUENCY",
    "HYDROXYL_LINE_FREQUENCY",
    "DEUTERIUM_LINE_FREQUENCY",
    # Config
    "set_dtype",
    "get_dtype",
    # Time
    "JD_J2000",
    "JD_B1950",
    "jd_j2000",
    "jd_b1950",
    "caldate_to_jd",
    "caldate_to_mjd",
    "jd_to_caldate",
    "jd_to_mjd",
    "mjd_to_jd",
    "jd_to_unix",
    "unix_to_jd",
    "jd_to_lst",
    # Epoch
    "Epoch",
    "julian_date",
    "modified_julian_date",
    "julian_date_to_epoch",
    "julian_date_to_datetime",
    "local_sidereal_time",
    "jd_now",
    # Utils
    "modulo",
    "range_pi",
    # Coordinates
    "AzAlt",
    "GeodeticPosition",
    "RADec",
    "precess",
    "ra_dec_to_az_alt",
    "az_alt_to_ra_dec",
    "lst_and_ra_to_longitude",
    "az_alt_to_xy85",
    "az_alt_to_xy30",
    "xy85_to_az_alt",
    "xy30_to_az_alt",
    "north_galactic_pole_j2000",
    "equatorial_to_galactic",
    "galactic_to_equatorial",
    # Ephemerides
    "EarthState",
    "earth_state",
    "moon_days",
    "moon_position",
    "sun_position",
    "sunrise",
    # Radio
    "doppler_to_velocity",
    "velocity_to_doppler",
    "earth_rotation_velocity",
    "earth_orbit_velocity_bcrs",
    "sun_velocity_lsrk",
    "observer_velocity_lsrk",
    "noise_power_dbm",
    "noise_temperature",
    # Refraction
    "AtmosphereProfile",
    "refraction_saemundsson",
    "refraction_pal",
    "refraction_pal_atmosphere",
]
