"""The epoch module provides the ``Epoch`` class for representing instants in time.

An Epoch stores an integer Julian Day number and the seconds elapsed since
the start of that Julian day (noon UTC).  Splitting the value keeps
sub-millisecond resolution that a single float Julian Date near 2.45e6
cannot hold in reduced precision.

The Epoch class is registered as a JAX pytree, making it compatible with
``jax.jit`` and ``jax.vmap``.  Arithmetic, comparison and ``jd()``/``mjd()``
use JAX operations and are traceable; calendar and ``datetime`` conversions
extract concrete Python values and must be called outside of JIT.

Times are UTC. Leap seconds are not modelled.
"""

from __future__ import annotations

import datetime
import logging
import math
import re

import jax
import jax.numpy as jnp

from .config import get_dtype, get_epoch_eq_tolerance
from .constants import JD_MJD_OFFSET, JD_UNIX_EPOCH, SECONDS_PER_DAY
from .time import caldate_to_jd, jd_to_caldate, jd_to_lst

logger = logging.getLogger(__name__)

_UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

# Julian Day number in which the Unix epoch falls, and the seconds into it
_UNIX_EPOCH_JDN = int(math.floor(JD_UNIX_EPOCH))
_UNIX_EPOCH_SECONDS = (JD_UNIX_EPOCH - _UNIX_EPOCH_JDN) * SECONDS_PER_DAY
_MJD_EPOCH_JDN = int(math.floor(JD_MJD_OFFSET))

_EPOCH_PATTERNS = [
    # YYYY-MM-DD
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})$'),
    # YYYY-MM-DDTHH:MM:SSZ
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z$'),
    # YYYY-MM-DDTHH:MM:SS.fffZ
    re.compile(r'^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d+)Z$'),
]


class Epoch:
    """A single UTC instant.

    The internal representation uses three private components:
        ``_jd`` (jnp.int32) Julian Day number, ``_seconds`` (float dtype)
        seconds since the start of that Julian day, in ``[0, 86400)``, and
        ``_kahan_c`` (float dtype), the compensator of the running sum of
        added seconds.
    Use ``jd()`` and ``mjd()`` to access the absolute time as Julian Date
    or Modified Julian Date.

    Adding seconds uses Kahan compensated summation, so stepping an Epoch
    forward many times in small increments does not accumulate rounding
    error in ``_seconds``.

    Epochs are immutable; ``epc + 60.0`` returns a new instance.

    Constructors:
        Epoch(2018, 1, 1)
        Epoch(2018, 1, 1, 12, 0, 0.0)
        Epoch("2018-01-01T12:00:00Z")
        Epoch(other_epoch)
        Epoch.from_jd(2458120.0)
        Epoch.from_datetime(datetime.datetime(2018, 1, 1, tzinfo=datetime.timezone.utc))
        Epoch.now()
    """

    __slots__ = ('_jd', '_seconds', '_kahan_c')

    def __init__(self, *args: int | float | str | Epoch) -> None:
        """Initialize Epoch. Supports multiple constructor forms.

        Args:
            *args: Either (year, month, day[, hour, minute, second]),
                a string in ISO 8601 format, or another Epoch instance.

        Raises:
            ValueError: If the arguments match none of the supported forms.
        """
        if len(args) == 1:
            if isinstance(args[0], str):
                self._init_string(args[0])
            elif isinstance(args[0], Epoch):
                self._jd = args[0]._jd
                self._seconds = args[0]._seconds
                self._kahan_c = args[0]._kahan_c
            else:
                raise ValueError(f"Cannot construct Epoch from {type(args[0])}")
        elif 3 <= len(args) <= 6:
            self._init_date(*args)
        else:
            raise ValueError(
                "Epoch requires date components (3-6 args), a string, or an Epoch"
            )

    @classmethod
    def _from_internal(cls, jd, seconds, kahan_c=None):
        """Create an Epoch from raw JAX arrays without Python-side processing.

        No normalization is performed.  A missing compensator starts at zero.
        """
        obj = object.__new__(cls)
        obj._jd = jd
        obj._seconds = seconds
        obj._kahan_c = jnp.zeros_like(seconds) if kahan_c is None else kahan_c
        return obj

    @classmethod
    def _normalized(cls, jd, seconds, kahan_c=None):
        """Create an Epoch, carrying whole days out of ``seconds`` into ``jd``."""
        day_offset = jnp.floor(seconds / SECONDS_PER_DAY)
        seconds = seconds - day_offset * SECONDS_PER_DAY
        return cls._from_internal(jd + day_offset.astype(jnp.int32), seconds, kahan_c)

    def _compensated_seconds(self):
        """Seconds into the Julian day with the Kahan compensation applied."""
        return self._seconds - self._kahan_c

    @classmethod
    def from_jd(cls, jd) -> Epoch:
        """Create an Epoch from a Julian Date. Traceable under ``jax.jit``.

        Args:
            jd: Julian Date (UTC).

        Returns:
            Epoch: Instant at the given Julian Date.
        """
        jd = jnp.asarray(jd, dtype=get_dtype())
        jd_int = jnp.floor(jd)
        return cls._from_internal(jd_int.astype(jnp.int32), (jd - jd_int) * SECONDS_PER_DAY)

    @classmethod
    def from_datetime(cls, dt: datetime.datetime) -> Epoch:
        """Create an Epoch from a ``datetime.datetime``.

        Timezone-aware datetimes are converted to UTC.  Naive datetimes are
        taken to already be in UTC.

        Args:
            dt (datetime.datetime): Date and time.

        Returns:
            Epoch: Instant equal to *dt*.
        """
        if dt.tzinfo is None:
            logger.debug("Interpreting naive datetime %s as UTC", dt.isoformat())
        else:
            dt = dt.astimezone(datetime.timezone.utc)
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                   dt.second + dt.microsecond / 1e6)

    @classmethod
    def now(cls) -> Epoch:
        """Return the current system time as an Epoch."""
        return cls.from_datetime(datetime.datetime.now(datetime.timezone.utc))

    def _init_date(self, year, month, day, hour=0, minute=0, second=0.0):
        # Julian Date of midnight, whose fractional part is always 0.5
        jd_full = float(caldate_to_jd(year, month, day))

        jd_int = int(math.floor(jd_full))
        seconds = ((jd_full - jd_int) * SECONDS_PER_DAY
                   + hour * 3600.0 + minute * 60.0 + second)

        day_offset = int(math.floor(seconds / SECONDS_PER_DAY))
        self._jd = jnp.int32(jd_int + day_offset)
        self._seconds = get_dtype()(seconds - day_offset * SECONDS_PER_DAY)
        self._kahan_c = get_dtype()(0.0)

    def _init_string(self, string):
        for pattern in _EPOCH_PATTERNS:
            m = pattern.match(string)
            if m:
                groups = m.groups()
                year = int(groups[0])
                month = int(groups[1])
                day = int(groups[2])

                hour = 0
                minute = 0
                second = 0.0

                if len(groups) >= 6:
                    hour = int(groups[3])
                    minute = int(groups[4])
                    second = float(groups[5])

                if len(groups) == 7:
                    second += float(f"0.{groups[6]}")

                self._init_date(year, month, day, hour, minute, second)
                return

        raise ValueError(
            f'Invalid Epoch string: "{string}" is not ISO 8601 compliant'
        )

    # Arithmetic operators

    def __add__(self, delta: float) -> Epoch:
        """Return a new Epoch advanced by ``delta`` seconds.

        Uses Kahan compensated summation; the rounding error of this
        addition is carried in the new Epoch's compensator.

        Args:
            delta (float): Seconds to add.

        Returns:
            Epoch: New Epoch advanced by delta seconds.
        """
        y = jnp.asarray(delta, dtype=get_dtype()) - self._kahan_c
        t = self._seconds + y
        kahan_c = (t - self._seconds) - y
        return Epoch._normalized(self._jd, t, kahan_c)

    def __sub__(self, other: Epoch | float) -> Epoch | jax.Array:
        """Subtract seconds or compute difference between Epochs.

        Args:
            other: If Epoch, returns the time difference in seconds.
                If numeric, returns a new Epoch with seconds subtracted.

        Returns:
            float or Epoch: Time difference in seconds, or new Epoch.
        """
        if isinstance(other, Epoch):
            return (get_dtype()(self._jd - other._jd) * SECONDS_PER_DAY
                    + (self._compensated_seconds() - other._compensated_seconds()))
        return self.__add__(-jnp.asarray(other, dtype=get_dtype()))

    # Comparison operators

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return jnp.abs(self - other) < get_epoch_eq_tolerance()

    def __ne__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return ~self.__eq__(other)

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return jnp.where(
            self._jd != other._jd,
            self._jd < other._jd,
            self._compensated_seconds() < other._compensated_seconds(),
        )

    def __le__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__lt__(other) | self.__eq__(other)

    def __gt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return jnp.where(
            self._jd != other._jd,
            self._jd > other._jd,
            self._compensated_seconds() > other._compensated_seconds(),
        )

    def __ge__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__gt__(other) | self.__eq__(other)

    # Time properties

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return the UTC calendar date components.

        Not traceable under ``jax.jit``.

        Returns:
            tuple: (year, month, day, hour, minute, second) where second
                includes fractional part.
        """
        seconds = float(self._compensated_seconds())

        # The Julian day starts at noon, so its second half is the next civil day
        noon = int(self._jd) + (1 if seconds >= 43200.0 else 0)
        year, month, day, _, _, _ = jd_to_caldate(noon)

        civil_time = (seconds + 43200.0) % SECONDS_PER_DAY

        hour = int(civil_time // 3600)
        civil_time -= hour * 3600
        minute = int(civil_time // 60)
        second = civil_time - minute * 60

        return int(year), int(month), int(day), hour, minute, second

    def jd(self) -> jax.Array:
        """Return the Julian Date.

        Returns:
            Julian Date in the configured float dtype.
        """
        _float = get_dtype()
        return _float(self._jd) + self._compensated_seconds() / _float(SECONDS_PER_DAY)

    def mjd(self) -> jax.Array:
        """Return the Modified Julian Date.

        Returns:
            Modified Julian Date in the configured float dtype.
        """
        _float = get_dtype()
        return (_float(self._jd - jnp.int32(_MJD_EPOCH_JDN))
                - _float(JD_MJD_OFFSET - _MJD_EPOCH_JDN)
                + self._compensated_seconds() / _float(SECONDS_PER_DAY))

    def unix_seconds(self) -> jax.Array:
        """Return the number of seconds since 1970-01-01 00:00:00 UTC."""
        return (get_dtype()(self._jd - jnp.int32(_UNIX_EPOCH_JDN)) * SECONDS_PER_DAY
                + self._compensated_seconds() - _UNIX_EPOCH_SECONDS)

    def to_datetime(self) -> datetime.datetime:
        """Return the instant as a timezone-aware UTC ``datetime``.

        Resolution is limited to microseconds. Not traceable under ``jax.jit``.
        """
        return _UNIX_EPOCH + datetime.timedelta(seconds=float(self.unix_seconds()))

    def local_sidereal_time(self, longitude) -> jax.Array:
        """Local mean sidereal time at this instant.

        Args:
            longitude: Observer longitude, east positive. Units: *deg*

        Returns:
            Local sidereal time in ``[0, 360)``. Units: *deg*
        """
        return jd_to_lst(self.jd(), longitude)

    # String representations

    def __str__(self):
        year, month, day, hour, minute, second = self.caldate()
        return (f'{year:04d}-{month:02d}-{day:02d}T'
                f'{hour:02d}:{minute:02d}:{second:06.3f}Z')

    def __repr__(self):
        return (f'Epoch(_jd={int(self._jd)}, _seconds={float(self._seconds)}, '
                f'_kahan_c={float(self._kahan_c)})')

    def __hash__(self):
        return hash((int(self._jd), round(float(self._compensated_seconds()), 3)))


jax.tree_util.register_pytree_node(
    Epoch,
    lambda e: ((e._jd, e._seconds, e._kahan_c), None),
    lambda _, children: Epoch._from_internal(*children),
)


def julian_date(epc: Epoch) -> jax.Array:
    """Julian Date of an Epoch."""
    return epc.jd()


def modified_julian_date(epc: Epoch) -> jax.Array:
    """Modified Julian Date of an Epoch."""
    return epc.mjd()


def julian_date_to_epoch(jd) -> Epoch:
    """Convert a Julian Date to an Epoch. See :meth:`Epoch.from_jd`."""
    return Epoch.from_jd(jd)


def julian_date_to_datetime(jd) -> datetime.datetime:
    """Convert a Julian Date to a timezone-aware UTC ``datetime``.

    Args:
        jd: Julian Date (UTC).

    Returns:
        datetime.datetime: The same instant, to microsecond resolution.
    """
    return Epoch.from_jd(jd).to_datetime()


def local_sidereal_time(epc: Epoch, longitude) -> jax.Array:
    """Local mean sidereal time in degrees. See :func:`skyjax.time.jd_to_lst`."""
    return epc.local_sidereal_time(longitude)


def jd_now() -> float:
    """Julian Date of the current system time."""
    return float(Epoch.now().jd())
