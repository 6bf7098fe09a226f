"""One hypercube worth of variables, vector pairs and global attributes."""

from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from hypercube.model.coordinate import as_utc
from hypercube.model.dimensions import Dimensions, derive_dates, derive_dimensions
from hypercube.model.variable import AbstractVariable
from hypercube.model.vector import VectorVariable

__all__ = ['HypercubeDataset', 'DEFAULT_TIME_UNIT', 'DEFAULT_TIME_EPOCH']

# The date represented by time = 0 in the NetCDF file
DEFAULT_TIME_UNIT = "hours since 1990-01-01"
DEFAULT_TIME_EPOCH = datetime(1990, 1, 1, tzinfo=timezone.utc)


class HypercubeDataset:
    """Ordered collection of variables sharing one set of axes.

    Iterating a dataset yields every plain variable (in insertion order)
    followed by the ``u`` then ``v`` component of each vector pair. That
    order is the declaration order in the output file.

    Parameters
    ----------
    time_unit : str, optional
        Units string of the time axis. Must agree with ``time_epoch``.
    time_epoch : datetime, optional
        Instant represented by time = 0.

    Notes
    -----
    A dataset exclusively owns its variables; do not add the same variable
    to two datasets. Axes are recomputed on every ``get_dimensions()`` call.

    Examples
    --------
    >>> dataset = HypercubeDataset()
    >>> botz = Variable("botz", "metre")
    >>> botz.add_data_point(-20.0, 150.0, -35.5)
    >>> dataset.add_variable(botz)
    >>> dataset.get_dimensions().shape
    (1, 1)
    """

    def __init__(self, time_unit: str = DEFAULT_TIME_UNIT,
                 time_epoch: Optional[datetime] = None):
        self.variables: List[AbstractVariable] = []
        self.vector_variables: List[VectorVariable] = []
        self.global_attributes: Dict[str, str] = {}
        self.time_unit = time_unit
        self.time_epoch = as_utc(time_epoch) if time_epoch is not None else DEFAULT_TIME_EPOCH

    def __iter__(self) -> Iterator[AbstractVariable]:
        yield from self.variables
        for vector_variable in self.vector_variables:
            yield vector_variable.u
            yield vector_variable.v

    def __len__(self):
        return len(self.variables) + 2 * len(self.vector_variables)

    def __repr__(self):
        return (f"HypercubeDataset(variables={[v.name for v in self.variables]}, "
                f"vector_variables={[v.group_name for v in self.vector_variables]})")

    def add_variable(self, variable: AbstractVariable) -> None:
        self.variables.append(variable)

    def add_vector_variable(self, vector_variable: VectorVariable) -> None:
        self.vector_variables.append(vector_variable)

    def set_global_attribute(self, key: str, value: str) -> None:
        self.global_attributes[key] = value

    def set_time_unit(self, time_unit: str, time_epoch: datetime) -> None:
        """Set the time axis units and the instant they count from.

        Example: ``set_time_unit("hours since 2000-01-01", datetime(2000, 1, 1, tzinfo=timezone.utc))``
        """
        self.time_unit = time_unit
        self.time_epoch = as_utc(time_epoch)

    def get_dimensions(self) -> Dimensions:
        """Lat/lon/height axes used by any variable (O(total samples))."""
        return derive_dimensions(self)

    def get_dates(self) -> List[datetime]:
        """Distinct timestamps used by any variable, chronological."""
        return derive_dates(self)

    def sample_count(self) -> int:
        return sum(len(variable) for variable in self)
