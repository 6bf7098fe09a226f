"""Synthetic signals and sample datasets.

Pure numeric helpers producing plausible looking fields (gradients, waves,
day/night cycles) to exercise the generator and to build demo files that
can be checked visually in a NetCDF viewer such as Panoply.

Three sample layouts are provided:

- ``build_gradient_dataset``: test patterns (linear/radial gradients, a
  rotating wave vector field) on a plain lat/lon grid
- ``build_hydro_dataset``: a small hydrodynamic model look-alike with
  temperature, salinity, wind, current and bathymetry, optionally with
  missing frames
- ``build_multi_datasets``: two hypercubes of different resolution and
  time step packed in one file
"""

import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

import numpy as np

from hypercube.model import (
    HypercubeDataset,
    TimeDepthVariable,
    TimeVariable,
    Variable,
    VectorVariable,
)
from hypercube.model.coordinate import as_utc

__all__ = [
    'get_coordinates',
    'draw_linear_gradient',
    'draw_radial_gradient',
    'hourly_frames',
    'build_gradient_dataset',
    'build_hydro_dataset',
    'build_multi_datasets',
]

logger = logging.getLogger(__name__)

ONE_HOUR = timedelta(hours=1)

HYDRO_METADATA = {
    "metadata_link": "http://marlin.csiro.au/geonetwork/srv/eng/search?&uuid=72020224-f086-434a-bbe9-a222c8e5cf0d",
    "title": "GBR4 Hydro",
    "paramhead": "GBR 4km resolution grid",
}

# Hour offsets (from the first frame) left out when missing_data is set
SKIPPED_FRAMES = (2, 3)
SKIPPED_TEMP = (5,)
SKIPPED_WIND = (1,)
SKIPPED_SALT = (7, 8)
SKIPPED_CURRENT = (8, 9)


def get_coordinates(minimum: float, maximum: float, steps: int) -> np.ndarray:
    """Evenly spaced float32 axis, both ends included.

    Examples
    --------
    >>> get_coordinates(-50, 50, 5)
    array([-50., -25.,   0.,  25.,  50.], dtype=float32)
    """
    steps = int(steps)
    if steps < 2:
        raise ValueError(f"At least 2 steps are needed, got {steps}")
    index = np.arange(steps, dtype=np.float64)
    return (minimum + (maximum - minimum) * index / (steps - 1)).astype(np.float32)


def draw_linear_gradient(rng: np.random.Generator, lat: float, lon: float,
                         minimum: float, maximum: float,
                         frequency: float, angle: float, noise: float) -> float:
    """Value of a linear (sine) gradient at one coordinate.

    Parameters
    ----------
    rng : np.random.Generator
        Source of noise. Two draws are consumed per call, even when
        ``noise`` is 0, so sequences stay reproducible for a given seed.
    lat, lon : float
        Coordinate in degrees.
    minimum, maximum : float
        Output range.
    frequency : float
        Distance between two crests, in degrees.
    angle : float
        Gradient direction in degrees. 0 is horizontal, clockwise.
    noise : float
        Noise level in [0, 1].

    Returns
    -------
    float
        Value in [minimum, maximum].
    """
    noisy_lat = lat + (rng.random() - 0.5) * 90 * noise
    noisy_lon = lon + (rng.random() - 0.5) * 90 * noise

    radian_angle = math.radians(angle)
    lat_ratio = math.cos(radian_angle)
    lon_ratio = math.sin(radian_angle)

    # [-1, 1] -> [0, 1] -> [minimum, maximum]
    wave = math.sin(2 * math.pi * (noisy_lat * lat_ratio + noisy_lon * lon_ratio) / frequency)
    ratio = (wave + 1) / 2
    return minimum + ratio * (maximum - minimum)


def draw_radial_gradient(rng: np.random.Generator, lat: float, lon: float,
                         minimum: float, maximum: float,
                         diameter: float, noise: float) -> float:
    """Value of a radial (egg-box) gradient at one coordinate.

    ``diameter`` is the size of the circles in degrees. See
    ``draw_linear_gradient`` for the other parameters.
    """
    noisy_lat = lat + (rng.random() - 0.5) * 90 * noise
    noisy_lon = lon + (rng.random() - 0.5) * 90 * noise

    # [-2, 2] -> [0, 1] -> [minimum, maximum]
    wave = math.cos(2 * math.pi * noisy_lat / diameter) + math.sin(2 * math.pi * noisy_lon / diameter)
    ratio = (wave + 2) / 4
    return minimum + ratio * (maximum - minimum)


def hourly_frames(start: datetime, end: datetime) -> List[datetime]:
    """Hourly timestamps from ``start`` (inclusive) to ``end`` (exclusive)."""
    start = as_utc(start)
    end = as_utc(end)
    if end <= start:
        raise ValueError(f"End time {end.isoformat()} is not after start time {start.isoformat()}")
    count = math.ceil((end - start) / ONE_HOUR)
    return [start + hour * ONE_HOUR for hour in range(count)]


def _hours_since(epoch: datetime, date: datetime) -> int:
    return (date - epoch) // ONE_HOUR


def _bathymetry(lat: float, lon: float) -> float:
    # Sign of the dividend is kept, giving a checkerboard across the equator
    return math.fmod(lat, 10) + math.fmod(lon, 10)


def build_gradient_dataset(start: datetime, end: datetime,
                           lats: Sequence[float], lons: Sequence[float],
                           seed: int = 6930) -> HypercubeDataset:
    """Test pattern dataset, one frame per hour.

    Contains two plain variables (``botz`` and its negation ``botz2``),
    a rotating linear gradient, a radial gradient whose noise peaks
    mid-period and a ``testWave`` vector field drifting with time.
    """
    rng = np.random.default_rng(seed)
    frames = hourly_frames(start, end)
    nb_hours = len(frames)

    dataset = HypercubeDataset()

    botz = Variable("botz", "metre")
    dataset.add_variable(botz)
    botz2 = Variable("botz2", "metre")
    dataset.add_variable(botz2)

    linear_gradient = TimeVariable("testLinearGradient", "Index")
    dataset.add_variable(linear_gradient)
    radial_gradient = TimeVariable("testRadialGradient", "Index")
    dataset.add_variable(radial_gradient)

    wave_u = TimeVariable("testWaveU", "m")
    wave_v = TimeVariable("testWaveV", "m")
    dataset.add_vector_variable(VectorVariable("testWave", wave_u, wave_v))

    for lat in lats:
        lat = float(lat)
        for lon in lons:
            lon = float(lon)
            botz_value = _bathymetry(lat, lon)
            botz.add_data_point(lat, lon, botz_value)
            botz2.add_data_point(lat, lon, -botz_value)

            for hour, frame in enumerate(frames):
                linear_gradient.add_data_point(lat, lon, frame, draw_linear_gradient(
                    rng, lat, lon, 0, 10, 50, hour * (360.0 / nb_hours), 0))

                noise = abs(abs(hour - nb_hours / 2.0) - nb_hours / 2.0) * 0.01
                radial_gradient.add_data_point(lat, lon, frame, draw_radial_gradient(
                    rng, lat, lon, -10, 2, 50, noise))

                wave_u.add_data_point(lat, lon, frame, draw_linear_gradient(
                    rng, lat, lon - hour, -4, 0, 100, 70, 0))
                wave_v.add_data_point(lat, lon, frame, draw_linear_gradient(
                    rng, lat - hour, lon, 2, 10, 50, -20, 0))

    logger.debug("Built gradient dataset: %d frame(s), %d sample(s)", nb_hours, dataset.sample_count())
    return dataset


def _temperature(rng, lat, lon, hour, depth):
    noise = (-depth + 2) / 5000
    world = draw_linear_gradient(rng, lat + 45, lon, 0, 30, 180, 0, noise)  # hot at the equator
    coast = draw_linear_gradient(rng, lat, lon + 31, -4, 4, 20, 60, noise)  # hotter near the coastline
    day_night = (abs((hour + 12) % 24 - 12) - 6) / 4.0
    return world + coast + day_night + depth / 10


def _salinity(rng, lat, lon, hour, depth):
    return draw_radial_gradient(rng, lat + hour / 4.0, lon - hour / 4.0, 32, 36, 10, (-depth + 2) / 5000)


def _current(rng, lat, lon, hour, depth) -> Tuple[float, float]:
    noise = (-depth + 2) / 5000
    u = draw_radial_gradient(rng, lat - hour / 4.0, lon + hour / 4.0, -0.6, 0.6, 15, noise)
    v = draw_radial_gradient(rng, lat + hour / 4.0, lon + hour / 4.0, -0.6, 0.6, 15, noise)
    return u, v


def _wind(rng, lat, lon, hour) -> Tuple[float, float]:
    u = draw_linear_gradient(rng, lat, lon - hour, -10, -8, 100, 70, 0)
    v = draw_linear_gradient(rng, lat - hour, lon, 2, 17, 50, -20, 0)
    return u, v


def _wind_variables() -> Tuple[TimeVariable, TimeVariable]:
    wspeed_u = TimeVariable("wspeed_u", "ms-1")
    wspeed_u.set_attribute("long_name", "eastward_wind")
    wspeed_v = TimeVariable("wspeed_v", "ms-1")
    wspeed_v.set_attribute("long_name", "northward_wind")
    return wspeed_u, wspeed_v


def _current_variables() -> Tuple[TimeDepthVariable, TimeDepthVariable]:
    u = TimeDepthVariable("u", "ms-1")
    u.set_attribute("long_name", "Eastward current")
    v = TimeDepthVariable("v", "ms-1")
    v.set_attribute("long_name", "Northward current")
    return u, v


def _temperature_variable() -> TimeDepthVariable:
    temp = TimeDepthVariable("temp", "degrees C")
    temp.set_attribute("long_name", "Temperature")
    return temp


def _salinity_variable() -> TimeDepthVariable:
    salt = TimeDepthVariable("salt", "PSU")
    salt.set_attribute("long_name", "Salinity")
    return salt


def build_hydro_dataset(start: datetime, end: datetime,
                        lats: Sequence[float], lons: Sequence[float],
                        depths: Sequence[float], seed: int = 4280,
                        missing_data: bool = False) -> HypercubeDataset:
    """Hydrodynamic model look-alike, one frame per hour.

    Parameters
    ----------
    start, end : datetime
        Time range, end exclusive.
    lats, lons : sequence of float
        Grid axes.
    depths : sequence of float
        Heights (negative down) of the time-depth variables.
    seed : int
        Random seed of the noise.
    missing_data : bool
        Leave out frames 2 and 3 entirely, plus a few frames of single
        variables (temp 5, wind 1, salt 7-8, current 8-9), so the file
        contains whole missing records and NaN-filled records.

    Returns
    -------
    HypercubeDataset
        temp, salt, wind (vector), sea_water_velocity (vector) and botz.
    """
    rng = np.random.default_rng(seed)
    frames = hourly_frames(start, end)

    dataset = HypercubeDataset()
    for key, value in HYDRO_METADATA.items():
        dataset.set_global_attribute(key, value)

    temp = _temperature_variable()
    dataset.add_variable(temp)
    salt = _salinity_variable()
    dataset.add_variable(salt)

    wspeed_u, wspeed_v = _wind_variables()
    dataset.add_vector_variable(VectorVariable("wind", wspeed_u, wspeed_v))

    current_u, current_v = _current_variables()
    dataset.add_vector_variable(VectorVariable("sea_water_velocity", current_u, current_v))

    botz = Variable("botz", "metre")
    botz.set_attribute("long_name", "Depth of sea-bed")
    dataset.add_variable(botz)

    epoch = dataset.time_epoch
    for lat in lats:
        lat = float(lat)
        for lon in lons:
            lon = float(lon)
            botz.add_data_point(lat, lon, _bathymetry(lat, lon))

            for frame_index, frame in enumerate(frames):
                if missing_data and frame_index in SKIPPED_FRAMES:
                    continue
                skip_temp = missing_data and frame_index in SKIPPED_TEMP
                skip_wind = missing_data and frame_index in SKIPPED_WIND
                skip_salt = missing_data and frame_index in SKIPPED_SALT
                skip_current = missing_data and frame_index in SKIPPED_CURRENT

                hour = _hours_since(epoch, frame)

                if not skip_wind:
                    u, v = _wind(rng, lat, lon, hour)
                    wspeed_u.add_data_point(lat, lon, frame, u)
                    wspeed_v.add_data_point(lat, lon, frame, v)

                for depth in depths:
                    depth = float(depth)
                    if not skip_temp:
                        temp.add_data_point(lat, lon, frame, depth, _temperature(rng, lat, lon, hour, depth))
                    if not skip_salt:
                        salt.add_data_point(lat, lon, frame, depth, _salinity(rng, lat, lon, hour, depth))
                    if not skip_current:
                        u, v = _current(rng, lat, lon, hour, depth)
                        current_u.add_data_point(lat, lon, frame, depth, u)
                        current_v.add_data_point(lat, lon, frame, depth, v)

    logger.debug("Built hydro dataset: %d frame(s), %d sample(s), missing_data=%s",
                 len(frames), dataset.sample_count(), missing_data)
    return dataset


def build_multi_datasets(start: datetime, end: datetime, seed: int = 5610,
                         grids: Optional[dict] = None) -> Tuple[HypercubeDataset, HypercubeDataset]:
    """Two hypercubes meant to share one file.

    The first holds hourly temperature and wind on a coarse grid, the
    second salinity and current every 3 hours (starting on the third
    frame) on a finer, shifted grid with different depths.

    Parameters
    ----------
    grids : dict, optional
        Overrides of ``lats0``, ``lons0``, ``depths0``, ``lats1``,
        ``lons1``, ``depths1``.
    """
    rng = np.random.default_rng(seed)
    frames = hourly_frames(start, end)

    axes = {
        "lats0": get_coordinates(-26, -7.6, 15),
        "lons0": get_coordinates(142, 154, 10),
        "depths0": [-1.5, -17.75, -49.0],
        "lats1": get_coordinates(-28, -9.6, 30),
        "lons1": get_coordinates(144, 156, 20),
        "depths1": [-2.35, -18.0, -50.0],
    }
    axes.update(grids or {})

    dataset0 = HypercubeDataset()
    dataset0.set_global_attribute("metadata_link", HYDRO_METADATA["metadata_link"])
    dataset0.set_global_attribute("title", "Multi Hypercube")
    dataset0.set_global_attribute("paramhead", "GBR 4km and 1km resolution grid")

    temp = _temperature_variable()
    dataset0.add_variable(temp)
    wspeed_u, wspeed_v = _wind_variables()
    dataset0.add_vector_variable(VectorVariable("wind", wspeed_u, wspeed_v))

    dataset1 = HypercubeDataset()
    salt = _salinity_variable()
    dataset1.add_variable(salt)
    current_u, current_v = _current_variables()
    dataset1.add_vector_variable(VectorVariable("sea_water_velocity", current_u, current_v))

    epoch = dataset0.time_epoch
    for lat in axes["lats0"]:
        lat = float(lat)
        for lon in axes["lons0"]:
            lon = float(lon)
            for frame in frames:
                hour = _hours_since(epoch, frame)
                u, v = _wind(rng, lat, lon, hour)
                wspeed_u.add_data_point(lat, lon, frame, u)
                wspeed_v.add_data_point(lat, lon, frame, v)
                for depth in axes["depths0"]:
                    depth = float(depth)
                    temp.add_data_point(lat, lon, frame, depth, _temperature(rng, lat, lon, hour, depth))

    for lat in axes["lats1"]:
        lat = float(lat)
        for lon in axes["lons1"]:
            lon = float(lon)
            for frame in frames[2::3]:
                hour = _hours_since(epoch, frame)
                for depth in axes["depths1"]:
                    depth = float(depth)
                    salt.add_data_point(lat, lon, frame, depth, _salinity(rng, lat, lon, hour, depth))
                    u, v = _current(rng, lat, lon, hour, depth)
                    current_u.add_data_point(lat, lon, frame, depth, u)
                    current_v.add_data_point(lat, lon, frame, depth, v)

    logger.debug("Built multi hypercube datasets: %d and %d sample(s)",
                 dataset0.sample_count(), dataset1.sample_count())
    return dataset0, dataset1
