"""Tolerant, orderable coordinate keys for sparse samples.

A PointCoordinate addresses one sample by latitude, longitude and, depending
on the variable's shape, a timestamp and a height. Comparison is tolerant
(about one metre at the equator for lat/lon), but the raw ``key`` tuple is
what variables use to store and look up samples. Two coordinates that are
tolerant-equal but not bit-identical are therefore two distinct samples.
"""

from datetime import datetime, timezone
from typing import Optional

import numpy as np

__all__ = [
    'COORDINATE_EPSILON',
    'HEIGHT_EPSILON',
    'PointCoordinate',
    'compare_coordinates',
    'as_float32',
    'as_utc',
]

COORDINATE_EPSILON = 1e-5  # about 1 metre on the equator
HEIGHT_EPSILON = 1e-7


def as_float32(value) -> float:
    """Round a number to float32 precision, returned as a Python float."""
    return float(np.float32(value))


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return a timezone-aware datetime; naive values are read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _compare_tolerant(a: float, b: float, epsilon: float) -> int:
    delta = a - b
    if delta > epsilon:
        return 1
    if delta < -epsilon:
        return -1
    return 0


def _compare_optional(a, b, compare) -> int:
    # Absent values sort after present ones
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return compare(a, b)


def _compare_time(a: datetime, b: datetime) -> int:
    return (a > b) - (a < b)


def compare_coordinates(a: "PointCoordinate", b: "PointCoordinate") -> int:
    """Compare two coordinates with tolerance.

    Parameters
    ----------
    a, b : PointCoordinate
        Coordinates to compare.

    Returns
    -------
    int
        -1, 0 or +1. Order is lexicographic on latitude, longitude, time
        and height. Lat/lon use ``COORDINATE_EPSILON``, heights use
        ``HEIGHT_EPSILON``; a missing time or height sorts last.

    Notes
    -----
    Tolerance makes the order only approximately transitive near the
    epsilon boundary: a ~ b and b ~ c does not imply a ~ c.
    """
    if a is b:
        return 0

    cmp = _compare_tolerant(a.lat, b.lat, COORDINATE_EPSILON)
    if cmp:
        return cmp

    cmp = _compare_tolerant(a.lon, b.lon, COORDINATE_EPSILON)
    if cmp:
        return cmp

    cmp = _compare_optional(a.time, b.time, _compare_time)
    if cmp:
        return cmp

    return _compare_optional(
        a.height, b.height,
        lambda x, y: _compare_tolerant(x, y, HEIGHT_EPSILON),
    )


class PointCoordinate:
    """Immutable location of one sample: lat, lon, optional time and height.

    Parameters
    ----------
    lat, lon : float
        Degrees north / east. Rounded to float32 precision.
    time : datetime, optional
        Sample timestamp. Naive datetimes are taken as UTC.
    height : float, optional
        Vertical coordinate in metres (positive up).

    Notes
    -----
    ``==`` and ordering are tolerant (see ``compare_coordinates``), so
    instances are unhashable. Use ``key`` (exact raw values) for dict
    lookups.

    Examples
    --------
    >>> a = PointCoordinate(-20.0, 150.0)
    >>> b = PointCoordinate(-20.000004, 150.0)
    >>> a == b, a.key == b.key
    (True, False)
    """

    __slots__ = ('_lat', '_lon', '_time', '_height')

    def __init__(self, lat: float, lon: float,
                 time: Optional[datetime] = None,
                 height: Optional[float] = None):
        object.__setattr__(self, '_lat', as_float32(lat))
        object.__setattr__(self, '_lon', as_float32(lon))
        object.__setattr__(self, '_time', as_utc(time))
        object.__setattr__(self, '_height', None if height is None else float(height))

    @classmethod
    def from_key(cls, key: tuple) -> "PointCoordinate":
        """Rebuild a coordinate from its raw ``key`` tuple."""
        return cls(*key)

    @property
    def lat(self) -> float:
        return self._lat

    @property
    def lon(self) -> float:
        return self._lon

    @property
    def time(self) -> Optional[datetime]:
        return self._time

    @property
    def height(self) -> Optional[float]:
        return self._height

    @property
    def key(self) -> tuple:
        """Raw (lat, lon, time, height) tuple, compared exactly."""
        return (self._lat, self._lon, self._time, self._height)

    def __setattr__(self, name, value):
        raise AttributeError("PointCoordinate is immutable")

    def __eq__(self, other):
        if not isinstance(other, PointCoordinate):
            return NotImplemented
        return compare_coordinates(self, other) == 0

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other):
        if not isinstance(other, PointCoordinate):
            return NotImplemented
        return compare_coordinates(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, PointCoordinate):
            return NotImplemented
        return compare_coordinates(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, PointCoordinate):
            return NotImplemented
        return compare_coordinates(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, PointCoordinate):
            return NotImplemented
        return compare_coordinates(self, other) >= 0

    __hash__ = None

    def __repr__(self):
        parts = [f"lat={self._lat!r}", f"lon={self._lon!r}"]
        if self._time is not None:
            parts.append(f"time={self._time.isoformat()}")
        if self._height is not None:
            parts.append(f"height={self._height!r}")
        return f"PointCoordinate({', '.join(parts)})"
