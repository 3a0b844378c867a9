"""
The `constants` module defines the mathematical, physical and astronomical constants used by skyjax.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / PI / 2.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the Unix epoch, 1970-01-01 00:00:00 UTC. Units: *days*
"""
JD_UNIX_EPOCH = 2440587.5

"""
Julian Date of the epoch from which the Sun and Moon mean elements are
counted, 2000 January 0.0 UT (1999-12-31 00:00:00). Units: *days*
"""
JD_2000_JAN_0 = 2451543.5

"""
Length of a tropical century. Units: *days*
"""
DAYS_PER_TROPICAL_CENTURY = 36524.219878

"""
Length of a Julian year. Units: *days*
"""
DAYS_PER_JULIAN_YEAR = 365.25

"""
Number of seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

# Physical Constants
"""
Speed of light in vacuum. Units: *m/s*
"""
C_LIGHT = 299792458.0

"""
Boltzmann constant. Units: *J/K*
"""
BOLTZMANN = 1.380649e-23

"""
Mass of a hydrogen atom. Units: *kg*
"""
HYDROGEN_MASS = 1.674e-27

# Spectral line rest frequencies
"""
Neutral hydrogen 21 cm hyperfine line. Units: *Hz*
"""
HYDROGEN_LINE_FREQUENCY = 1420405751.768

"""
Hydroxyl 1612 MHz line. Units: *Hz*
"""
HYDROXYL_LINE_FREQUENCY = 1612231000.0

"""
Deuterium 92 cm hyperfine line. Units: *Hz*
"""
DEUTERIUM_LINE_FREQUENCY = 327384000.0

# Earth motion
"""
Conversion from AU/day to km/s. Units: *(km/s)/(AU/day)*
"""
AU_PER_DAY_TO_KM_PER_S = 1.731e3

"""
Equatorial surface speed of the Earth's rotation. Units: *km/s*
"""
EARTH_ROTATION_SPEED = 0.4655

"""
Velocity of the Sun with respect to the kinematic Local Standard of Rest,
as a J2000 equatorial Cartesian vector ``(x, y, z)``. Corresponds to the
standard solar motion of 20 km/s towards RA 18h, Dec +30 (B1900). Units: *km/s*
"""
SUN_VELOCITY_LSRK = (0.29000, -17.31726, 10.00141)

# Galactic frame (J2000)
"""
Right ascension of the north galactic pole. Units: *deg*
"""
NGP_RA_J2000 = 192.8594813

"""
Declination of the north galactic pole. Units: *deg*
"""
NGP_DEC_J2000 = 27.1282511

"""
Galactic longitude of the north celestial pole. Units: *deg*
"""
NCP_GALACTIC_LONGITUDE = 122.93129
