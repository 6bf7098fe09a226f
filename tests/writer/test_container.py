"""Tests for the two-phase NetCDF container."""

import pytest
import numpy as np
import netCDF4

from hypercube.contracts import ContractViolation
from hypercube.writer import ContainerState, NetCDFSchema

pytestmark = pytest.mark.integration


@pytest.fixture
def nc_path(temp_dir):
    return temp_dir / "container.nc"


def test_declare_commit_write_read_back(nc_path):
    with NetCDFSchema.create(nc_path) as schema:
        schema.declare_dimension("lat", 3)
        schema.declare_unlimited_dimension("time")
        schema.declare_variable("lat", "f4", ["lat"])
        schema.declare_variable("time", "i4", ["time"])
        schema.declare_variable("temp", "f8", ["time", "lat"])
        schema.set_variable_attribute("lat", "units", "degrees_north")
        schema.set_variable_attribute("lat", "_CoordinateAxisType", "Lat")
        schema.set_global_attribute("title", "Container test")

        writer = schema.commit()
        assert writer.state is ContainerState.SCHEMA_DECLARED

        writer.write("lat", (0,), np.array([-20.0, -19.0, -18.0], dtype=np.float32))
        for record in range(2):
            writer.write("time", (record,), np.array([record * 6], dtype=np.int32))
            writer.write("temp", (record, 0), np.full((1, 3), float(record)))
        assert writer.state is ContainerState.WRITING
        writer.flush()

    assert schema.state is ContainerState.CLOSED

    with netCDF4.Dataset(nc_path) as nc:
        assert nc.dimensions["time"].isunlimited()
        assert len(nc.dimensions["time"]) == 2
        assert nc.title == "Container test"
        assert nc.variables["lat"].getncattr("_CoordinateAxisType") == "Lat"
        assert nc.variables["time"].dtype == np.int32
        np.testing.assert_array_equal(nc.variables["time"][:], [0, 6])
        np.testing.assert_array_equal(nc.variables["temp"][:], [[0, 0, 0], [1, 1, 1]])


def test_declaration_after_commit_rejected(nc_path):
    with NetCDFSchema.create(nc_path) as schema:
        schema.declare_dimension("lat", 1)
        schema.commit()

        with pytest.raises(ContractViolation, match="declare_variable"):
            schema.declare_variable("lat", "f4", ["lat"])
        with pytest.raises(ContractViolation, match="commit"):
            schema.commit()


def test_write_after_close_rejected(nc_path):
    with NetCDFSchema.create(nc_path) as schema:
        schema.declare_dimension("lat", 1)
        schema.declare_variable("lat", "f4", ["lat"])
        writer = schema.commit()

    with pytest.raises(ContractViolation, match="closed"):
        writer.write("lat", (0,), np.zeros(1, dtype=np.float32))


@pytest.mark.parametrize("file_format", ["NETCDF4", "NETCDF3_CLASSIC"])
def test_commit_leaves_define_mode(nc_path, file_format):
    with NetCDFSchema.create(nc_path, file_format) as schema:
        schema.declare_dimension("lat", 2)
        schema.declare_variable("depth", "f8", ["lat"], fill_value=-999.0)
        writer = schema.commit()
        writer.write("depth", (0,), np.array([1.5, -999.0]))

    with netCDF4.Dataset(nc_path) as nc:
        depth = nc.variables["depth"]
        assert depth.getncattr("_FillValue") == -999.0
        assert depth[:].mask.tolist() == [False, True]
        assert depth[0] == 1.5

def test_unsupported_element_type_rejected(nc_path):
    with NetCDFSchema.create(nc_path) as schema:
        schema.declare_dimension("lat", 1)
        with pytest.raises(ContractViolation, match="element type"):
            schema.declare_variable("lat", "i8", ["lat"])


def test_zero_length_dimension_rejected(nc_path):
    with NetCDFSchema.create(nc_path) as schema:
        with pytest.raises(ContractViolation, match="positive length"):
            schema.declare_dimension("lat", 0)


def test_rank_mismatch_rejected(nc_path):
    with NetCDFSchema.create(nc_path) as schema:
        schema.declare_dimension("lat", 2)
        schema.declare_variable("lat", "f4", ["lat"])
        writer = schema.commit()
        with pytest.raises(ContractViolation, match="rank"):
            writer.write("lat", (0, 0), np.zeros((1, 2)))


def test_close_is_idempotent(nc_path):
    schema = NetCDFSchema.create(nc_path)
    writer = schema.commit()
    writer.close()
    writer.close()
    assert writer.state is ContainerState.CLOSED


def test_body_error_propagates_and_file_is_closed(nc_path):
    with pytest.raises(KeyError):
        with NetCDFSchema.create(nc_path) as schema:
            writer = schema.commit()
            writer.write("missing", (0,), np.zeros(1))

    assert schema.state is ContainerState.CLOSED
    # The handle was released: the file can be opened again
    with netCDF4.Dataset(nc_path) as nc:
        assert len(nc.variables) == 0
