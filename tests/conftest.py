"""Root-level pytest fixtures for the hypercube test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, plus small datasets reused across model and writer tests.
"""

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
import tempfile
import shutil

from hypercube.model import (
    HypercubeDataset,
    TimeDepthVariable,
    TimeVariable,
    Variable,
)
from hypercube.schemas import ParamConfig, UserConfig, resolve_config


T0 = datetime(2019, 1, 1, tzinfo=timezone.utc)
ONE_HOUR = timedelta(hours=1)


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides).

    Examples
    --------
    >>> def test_generator_init(internal_config):
    ...     generator = Generator(internal_config)
    ...     assert generator.file_format == "NETCDF4"
    """
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_classic_format(make_config):
    ...     config = make_config(file_format="netcdf3_classic")
    ...     assert config.output.file_format == "NETCDF3_CLASSIC"
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        else:
            return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


# =============================================================================
# Dataset Fixtures
# =============================================================================

@pytest.fixture
def t0():
    return T0


@pytest.fixture
def botz_dataset():
    """Plain 2 x 3 grid, every cell populated."""
    dataset = HypercubeDataset()
    botz = Variable("botz", "metre")
    for lat in (-20.0, -19.0):
        for lon in (150.0, 151.0, 152.0):
            botz.add_data_point(lat, lon, lat + lon)
    dataset.add_variable(botz)
    return dataset


@pytest.fixture
def gap_dataset():
    """2 x 2 time variable with data at T0 and T2 only (T1 skipped)."""
    dataset = HypercubeDataset()
    wind = TimeVariable("wind", "ms-1")
    for hour in (0, 2):
        for lat in (-20.0, -19.0):
            for lon in (150.0, 151.0):
                wind.add_data_point(lat, lon, T0 + hour * ONE_HOUR, hour + lat + lon)
    dataset.add_variable(wind)
    return dataset


@pytest.fixture
def depth_dataset():
    """2 x 2 x 3 depths, one record, one sample never added."""
    dataset = HypercubeDataset()
    temp = TimeDepthVariable("temp", "degrees C")
    value = 0.0
    for lat in (-20.0, -19.0):
        for lon in (150.0, 151.0):
            for depth in (-1.5, -17.75, -49.0):
                value += 1.0
                if (lat, lon, depth) == (-19.0, 150.0, -17.75):
                    continue
                temp.add_data_point(lat, lon, T0, depth, value)
    dataset.add_variable(temp)
    return dataset
