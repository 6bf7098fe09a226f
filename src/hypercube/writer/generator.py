"""Pack one or more hypercube datasets into a single NetCDF file.

Each dataset becomes one hypercube with its own lat/lon/time (and optional
height) axes. Writing follows the two phases NetCDF imposes:

1. Schema: for every dataset declare its axes, its coordinate variables
   and one data variable per (vector component) variable, then the global
   attributes, then commit the header.
2. Data: for every dataset write the coordinate values, one time record
   per distinct timestamp, then every variable densified over the
   dataset's full axes. Gaps are filled with the missing value (NaN).

Axis names are suffixed with the dataset index from the second dataset
on (``lat``, ``lat1``, ``lat2``...), so several hypercubes never collide.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from hypercube.model.dataset import HypercubeDataset
from hypercube.model.dimensions import Dimensions
from hypercube.model.variable import AbstractVariable, ShapeKind
from hypercube.schemas import resolve_config
from hypercube.writer.container import NetCDFSchema

if TYPE_CHECKING:
    from hypercube.schemas import InternalConfig
    from hypercube.schemas.internal import InternalCoordNamesConfig

__all__ = ['AxisNames', 'HypercubePlan', 'Generator', 'generate', 'time_offset', 'iter_dense_records']

logger = logging.getLogger(__name__)

ONE_HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class AxisNames:
    """Names of the four axes (and coordinate variables) of one hypercube."""
    lat: str
    lon: str
    time: str
    height: str

    @classmethod
    def for_index(cls, coord_names: "InternalCoordNamesConfig", index: int) -> "AxisNames":
        """Base names for the first dataset, ``<base><index>`` for the others."""
        suffix = "" if index == 0 else str(index)
        return cls(
            lat=f"{coord_names.lat}{suffix}",
            lon=f"{coord_names.lon}{suffix}",
            time=f"{coord_names.time}{suffix}",
            height=f"{coord_names.height}{suffix}",
        )


@dataclass(frozen=True, eq=False)
class HypercubePlan:
    """Everything derived from a dataset before the file is touched."""
    index: int
    dataset: HypercubeDataset
    dimensions: Dimensions
    dates: List[datetime]
    names: AxisNames

    def axis_names(self) -> List[str]:
        names = [self.names.lat, self.names.lon, self.names.time]
        if self.dimensions.has_heights:
            names.append(self.names.height)
        return names

    def variable_dimensions(self, variable: AbstractVariable) -> Tuple[str, ...]:
        """Ordered dimension names of a data variable, by shape kind."""
        if variable.shape_kind is ShapeKind.PLAIN:
            return (self.names.lat, self.names.lon)
        if variable.shape_kind is ShapeKind.TIME or not self.dimensions.has_heights:
            # A time-depth variable only lacks heights when it has no samples
            return (self.names.time, self.names.lat, self.names.lon)
        return (self.names.time, self.names.lat, self.names.lon, self.names.height)


def time_offset(date: datetime, epoch: datetime) -> int:
    """Whole hours from ``epoch`` to ``date``, rounded down."""
    return (date - epoch) // ONE_HOUR


def _axis_index(values: np.ndarray) -> Dict[float, int]:
    return {float(value): position for position, value in enumerate(values)}


def iter_dense_records(variable: AbstractVariable, dimensions: Dimensions,
                       dates: Sequence[datetime],
                       missing_value: float = np.nan) -> Iterator[Tuple[Optional[int], np.ndarray]]:
    """Expand a sparse variable into dense buffers over the dataset axes.

    Parameters
    ----------
    variable : AbstractVariable
        Variable to densify.
    dimensions : Dimensions
        Axes of the whole dataset, not only the ones this variable uses.
    dates : sequence of datetime
        Timestamps of the dataset, in record order.
    missing_value : float
        Written where the variable has no sample.

    Yields
    ------
    (record, buffer)
        For plain variables a single ``(None, (n_lat, n_lon))`` pair. For
        time variables one ``(record, (n_lat, n_lon))`` pair per date, and
        for time-depth variables one ``(record, (n_lat, n_lon, n_height))``
        pair per date. A date the variable has no data for still yields a
        buffer full of ``missing_value``.
    """
    lat_index = _axis_index(dimensions.latitudes)
    lon_index = _axis_index(dimensions.longitudes)
    height_index = _axis_index(dimensions.heights)
    frame_2d = (dimensions.latitudes.size, dimensions.longitudes.size)

    if not variable.shape_kind.has_time:
        buffer = np.full(frame_2d, missing_value, dtype=np.float64)
        for (lat, lon, _time, _height), value in variable.data.items():
            buffer[lat_index[lat], lon_index[lon]] = value
        yield None, buffer
        return

    with_height = variable.shape_kind.has_height and dimensions.has_heights
    frame_shape = dimensions.shape if with_height else frame_2d

    samples_by_date = defaultdict(list)
    for key, value in variable.data.items():
        samples_by_date[key[2]].append((key, value))

    for record, date in enumerate(dates):
        buffer = np.full(frame_shape, missing_value, dtype=np.float64)
        for (lat, lon, _time, height), value in samples_by_date.get(date, ()):
            if with_height:
                buffer[lat_index[lat], lon_index[lon], height_index[height]] = value
            else:
                buffer[lat_index[lat], lon_index[lon]] = value
        yield record, buffer


class Generator:
    """Write hypercube datasets to a NetCDF file.

    Parameters
    ----------
    config : InternalConfig, optional
        Runtime configuration. ``resolve_config()`` defaults when omitted.
    container_factory : callable, optional
        ``factory(path, file_format)`` returning a context-managed schema
        object with the ``NetCDFSchema`` interface. Defaults to
        ``NetCDFSchema.create``.

    Notes
    -----
    A failed ``generate`` leaves the output file incomplete; it is always
    closed but never removed.

    Examples
    --------
    >>> generator = Generator()
    >>> generator.generate("gbr4.nc", hydro_dataset, bathymetry_dataset)
    PosixPath('gbr4.nc')
    """

    def __init__(self, config: Optional["InternalConfig"] = None,
                 container_factory: Optional[Callable] = None):
        if config is None:
            config = resolve_config()
        self.file_format = config.output.file_format
        self.missing_value = config.output.missing_value
        self.coord_names = config.coord_names
        self.container_factory = container_factory or NetCDFSchema.create

    def plan(self, output_path, datasets: Sequence[HypercubeDataset]) -> List[HypercubePlan]:
        """Validate the invocation and derive axes for every dataset.

        Raises
        ------
        ValueError
            No output path, no datasets, an argument that is not a
            HypercubeDataset, a dataset without any data point, or two
            names (axis or variable) colliding in the output file.
        """
        if output_path is None or str(output_path) == "":
            raise ValueError("No output file given")
        if not datasets:
            raise ValueError("No datasets given")

        plans = []
        for index, dataset in enumerate(datasets):
            if not isinstance(dataset, HypercubeDataset):
                raise ValueError(
                    f"Argument {index} is a {type(dataset).__name__}, expected HypercubeDataset")

            dimensions = dataset.get_dimensions()
            if dimensions.is_empty:
                raise ValueError(f"Dataset {index} has no data points")

            plans.append(HypercubePlan(
                index=index,
                dataset=dataset,
                dimensions=dimensions,
                dates=dataset.get_dates(),
                names=AxisNames.for_index(self.coord_names, index),
            ))

        owners = {}
        for plan in plans:
            names = plan.axis_names() + [variable.name for variable in plan.dataset]
            for name in names:
                if name in owners:
                    raise ValueError(
                        f"Name '{name}' of dataset {plan.index} is already used by dataset {owners[name]}")
                owners[name] = plan.index

        return plans

    def generate(self, output_path, *datasets: HypercubeDataset) -> Path:
        """Write every dataset into ``output_path`` (overwritten if present).

        Returns
        -------
        Path
            The written file.

        Raises
        ------
        ValueError
            Invalid invocation, raised before the file is created.
        OSError, RuntimeError
            Storage failures from netCDF4, propagated unchanged.
        """
        plans = self.plan(output_path, datasets)
        output_path = Path(output_path)
        logger.info("Generating %s with %d hypercube(s)", output_path, len(plans))

        with self.container_factory(output_path, self.file_format) as schema:
            for plan in plans:
                self._declare_hypercube(schema, plan)
            self._declare_global_attributes(schema, plans)

            writer = schema.commit()

            for plan in plans:
                self._write_hypercube(writer, plan)
            writer.flush()

        logger.info("Wrote %s", output_path)
        return output_path

    # ------------------------------------------------------------------
    # Schema phase
    # ------------------------------------------------------------------

    def _declare_hypercube(self, schema, plan: HypercubePlan) -> None:
        names = plan.names
        dimensions = plan.dimensions
        logger.info(
            "Hypercube %d: %d lat x %d lon x %d height, %d time record(s), %d variable(s)",
            plan.index, dimensions.latitudes.size, dimensions.longitudes.size,
            dimensions.heights.size, len(plan.dates), len(plan.dataset)
        )

        schema.declare_dimension(names.lat, dimensions.latitudes.size)
        schema.declare_dimension(names.lon, dimensions.longitudes.size)
        schema.declare_unlimited_dimension(names.time)
        if dimensions.has_heights:
            schema.declare_dimension(names.height, dimensions.heights.size)

        self._declare_coordinate(schema, names.lat, "f4", "degrees_north", "Lat", "Y")
        self._declare_coordinate(schema, names.lon, "f4", "degrees_east", "Lon", "X")
        self._declare_coordinate(schema, names.time, "i4", plan.dataset.time_unit, "Time", "T")
        if dimensions.has_heights:
            self._declare_coordinate(schema, names.height, "f8", "m", "Height", "Z")
            schema.set_variable_attribute(names.height, "positive", "up")
            schema.set_variable_attribute(names.height, "_CoordinateZisPositive", "up")

        # A non-NaN sentinel is declared as _FillValue and missing_value
        fill_value = None if np.isnan(self.missing_value) else float(self.missing_value)
        for variable in plan.dataset:
            variable_dimensions = plan.variable_dimensions(variable)
            logger.debug("Declaring %s%s", variable.name, variable_dimensions)
            schema.declare_variable(variable.name, "f8", variable_dimensions, fill_value=fill_value)
            if fill_value is not None:
                schema.set_variable_attribute(variable.name, "missing_value", fill_value)
            for key, value in variable.attributes.items():
                schema.set_variable_attribute(variable.name, key, value)

    @staticmethod
    def _declare_coordinate(schema, name: str, dtype: str, units: str,
                            axis_type: str, cf_axis: str) -> None:
        schema.declare_variable(name, dtype, [name])
        schema.set_variable_attribute(name, "units", units)
        schema.set_variable_attribute(name, "_CoordinateAxisType", axis_type)
        schema.set_variable_attribute(name, "axis", cf_axis)

    @staticmethod
    def _declare_global_attributes(schema, plans: List[HypercubePlan]) -> None:
        # Later datasets win on duplicate keys
        global_attributes = {}
        for plan in plans:
            global_attributes.update(plan.dataset.global_attributes)

        for key, value in global_attributes.items():
            logger.debug("Global attribute %s = %r", key, value)
            schema.set_global_attribute(key, value)

    # ------------------------------------------------------------------
    # Data phase
    # ------------------------------------------------------------------

    def _write_hypercube(self, writer, plan: HypercubePlan) -> None:
        names = plan.names
        dimensions = plan.dimensions

        writer.write(names.lat, (0,), dimensions.latitudes)
        writer.write(names.lon, (0,), dimensions.longitudes)
        if dimensions.has_heights:
            writer.write(names.height, (0,), dimensions.heights)

        epoch = plan.dataset.time_epoch
        for record, date in enumerate(plan.dates):
            offset = np.array([time_offset(date, epoch)], dtype=np.int32)
            writer.write(names.time, (record,), offset)

        for variable in plan.dataset:
            self._write_variable(writer, plan, variable)

    def _write_variable(self, writer, plan: HypercubePlan, variable: AbstractVariable) -> None:
        records = 0
        for record, buffer in iter_dense_records(variable, plan.dimensions, plan.dates, self.missing_value):
            if record is None:
                writer.write(variable.name, (0,) * buffer.ndim, buffer)
                continue
            writer.write(variable.name, (record,) + (0,) * buffer.ndim, buffer[np.newaxis])
            records += 1
        logger.debug("Wrote %s (%d samples, %d record(s))", variable.name, len(variable), records)


def generate(output_path, *datasets: HypercubeDataset,
             config: Optional["InternalConfig"] = None) -> Path:
    """Write datasets to ``output_path`` with a default-configured Generator.

    Examples
    --------
    >>> generate("botz.nc", dataset)
    PosixPath('botz.nc')
    """
    return Generator(config).generate(output_path, *datasets)
