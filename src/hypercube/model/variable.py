"""Sparse variables: named maps from coordinate to sample value.

Three shape kinds are supported, each a subclass with a typed
``add_data_point`` / ``get_value`` signature:

- ``Variable``: no axis beyond lat/lon (e.g. bathymetry "botz")
- ``TimeVariable``: lat/lon plus time (e.g. wind)
- ``TimeDepthVariable``: lat/lon plus time and height (e.g. temperature, current)

Samples are stored sparsely and materialized into dense arrays only when
the file is written.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from hypercube.contracts import assert_coordinate_fits
from hypercube.model.coordinate import PointCoordinate

__all__ = ['ShapeKind', 'AbstractVariable', 'Variable', 'TimeVariable', 'TimeDepthVariable']


class ShapeKind(str, Enum):
    """Which axes a variable spans beyond latitude and longitude."""
    PLAIN = "plain"
    TIME = "time"
    TIME_DEPTH = "time_depth"

    @property
    def has_time(self) -> bool:
        return self in (ShapeKind.TIME, ShapeKind.TIME_DEPTH)

    @property
    def has_height(self) -> bool:
        return self is ShapeKind.TIME_DEPTH


class AbstractVariable:
    """Common storage for all shape kinds.

    Parameters
    ----------
    name : str
        Variable name in the output file.
    units : str
        Value of the mandatory ``units`` attribute.

    Notes
    -----
    Attributes and samples only accumulate. Samples are keyed by the
    coordinate's raw ``key`` tuple, so lookups are exact.
    """

    shape_kind: ShapeKind = None

    def __init__(self, name: str, units: str):
        self.name = name
        self.attributes: Dict[str, str] = {}
        self._data: Dict[tuple, float] = {}
        self.set_attribute("units", units)

    def __repr__(self):
        return (f"{type(self).__name__}(name={self.name!r}, "
                f"units={self.attributes.get('units')!r}, samples={len(self._data)})")

    def __len__(self):
        return len(self._data)

    def set_attribute(self, key: str, value: str) -> None:
        self.attributes[key] = value

    def get_attributes(self) -> Dict[str, str]:
        return self.attributes

    @property
    def data(self) -> Dict[tuple, float]:
        """Sparse samples keyed by raw (lat, lon, time, height) tuples."""
        return self._data

    def points(self) -> Iterator[Tuple[PointCoordinate, float]]:
        """Iterate samples as (PointCoordinate, value) pairs."""
        for key, value in self._data.items():
            yield PointCoordinate.from_key(key), value

    def add_point(self, coordinate: PointCoordinate, value: float) -> None:
        """Insert or overwrite the sample at ``coordinate``.

        Raises
        ------
        ContractViolation
            If the coordinate's time/height presence does not match
            this variable's shape kind.
        """
        assert_coordinate_fits(self.shape_kind, coordinate, self.name)
        self._data[coordinate.key] = float(value)

    def get_point(self, coordinate: PointCoordinate) -> Optional[float]:
        """Return the sample stored at a raw-equal coordinate, or None."""
        return self._data.get(coordinate.key)

    def get_dates(self) -> List[datetime]:
        """Sorted distinct timestamps used by this variable's samples."""
        return sorted({key[2] for key in self._data if key[2] is not None})


class Variable(AbstractVariable):
    """Variable without time nor depth, such as bathymetry."""

    shape_kind = ShapeKind.PLAIN

    def add_data_point(self, lat: float, lon: float, value: float) -> None:
        self.add_point(PointCoordinate(lat, lon), value)

    def get_value(self, lat: float, lon: float) -> Optional[float]:
        return self.get_point(PointCoordinate(lat, lon))


class TimeVariable(AbstractVariable):
    """Variable with time but no depth, such as wind."""

    shape_kind = ShapeKind.TIME

    def add_data_point(self, lat: float, lon: float, time: datetime, value: float) -> None:
        self.add_point(PointCoordinate(lat, lon, time), value)

    def get_value(self, lat: float, lon: float, time: datetime) -> Optional[float]:
        return self.get_point(PointCoordinate(lat, lon, time))


class TimeDepthVariable(AbstractVariable):
    """Variable with time and depth, such as temperature, salinity or current."""

    shape_kind = ShapeKind.TIME_DEPTH

    def add_data_point(self, lat: float, lon: float, time: datetime,
                       height: float, value: float) -> None:
        self.add_point(PointCoordinate(lat, lon, time, height), value)

    def get_value(self, lat: float, lon: float, time: datetime,
                  height: float) -> Optional[float]:
        return self.get_point(PointCoordinate(lat, lon, time, height))
