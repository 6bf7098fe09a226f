"""Derive the axes of a dataset from its sparse samples.

The axes are the distinct raw latitude, longitude and height values found
in any sample of any variable, sorted ascending. Deduplication is exact,
not tolerant: two coordinates within epsilon but not bit-identical give
two axis entries, matching how variables store samples.

The time axis is derived separately (``derive_dates``): it is the sorted
set of timestamps actually populated, so gaps in time are not filled.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Tuple

import numpy as np

from hypercube.model.variable import AbstractVariable

__all__ = ['Dimensions', 'derive_dimensions', 'derive_dates']


@dataclass(frozen=True, eq=False)
class Dimensions:
    """Sorted distinct axis values of one dataset.

    Attributes
    ----------
    latitudes : np.ndarray
        float32, ascending.
    longitudes : np.ndarray
        float32, ascending.
    heights : np.ndarray
        float64, ascending. Empty when no variable uses a height.
    """
    latitudes: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float32))
    longitudes: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float32))
    heights: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))

    @property
    def has_heights(self) -> bool:
        return self.heights.size > 0

    @property
    def is_empty(self) -> bool:
        return self.latitudes.size == 0 or self.longitudes.size == 0

    @property
    def shape(self) -> Tuple[int, ...]:
        """(n_lat, n_lon) or (n_lat, n_lon, n_height)."""
        if self.has_heights:
            return (self.latitudes.size, self.longitudes.size, self.heights.size)
        return (self.latitudes.size, self.longitudes.size)


def derive_dimensions(variables: Iterable[AbstractVariable]) -> Dimensions:
    """Scan every sample key once and build the dataset axes.

    Parameters
    ----------
    variables : iterable of AbstractVariable
        Usually a dataset's flattened view (plain variables, then u/v of
        each vector pair).

    Returns
    -------
    Dimensions
        Sorted, exactly deduplicated axes.
    """
    latitudes = set()
    longitudes = set()
    heights = set()

    for variable in variables:
        for lat, lon, _time, height in variable.data:
            latitudes.add(lat)
            longitudes.add(lon)
            if height is not None:
                heights.add(height)

    return Dimensions(
        latitudes=np.array(sorted(latitudes), dtype=np.float32),
        longitudes=np.array(sorted(longitudes), dtype=np.float32),
        heights=np.array(sorted(heights), dtype=np.float64),
    )


def derive_dates(variables: Iterable[AbstractVariable]) -> List[datetime]:
    """Sorted distinct timestamps used across the given variables.

    A variable with data at T0 and T2 and another with data at T1 yield
    [T0, T1, T2]; a timestamp no variable uses never becomes a record.
    """
    dates = set()
    for variable in variables:
        dates.update(variable.get_dates())
    return sorted(dates)
