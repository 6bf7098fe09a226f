"""Generator write plan and failure handling, against a recording container."""

import pytest
import numpy as np
from datetime import timedelta

from hypercube.model import HypercubeDataset, TimeVariable, Variable
from hypercube.writer import AxisNames, Generator
from hypercube.writer.generator import iter_dense_records, time_offset
from tests.helpers.fake_container import FakeContainer

pytestmark = pytest.mark.unit

ONE_HOUR = timedelta(hours=1)


@pytest.fixture
def generator(internal_config):
    return Generator(internal_config, container_factory=FakeContainer.factory())


class TestInvalidInvocation:

    def test_no_output_path(self, generator, botz_dataset):
        with pytest.raises(ValueError, match="No output file"):
            generator.generate(None, botz_dataset)
        with pytest.raises(ValueError, match="No output file"):
            generator.generate("", botz_dataset)

    def test_no_datasets(self, generator):
        with pytest.raises(ValueError, match="No datasets"):
            generator.generate("out.nc")

    def test_not_a_dataset(self, generator):
        with pytest.raises(ValueError, match="expected HypercubeDataset"):
            generator.generate("out.nc", Variable("botz", "metre"))

    def test_dataset_without_samples(self, generator, botz_dataset):
        with pytest.raises(ValueError, match="Dataset 1 has no data points"):
            generator.generate("out.nc", botz_dataset, HypercubeDataset())

    def test_duplicate_variable_names(self, generator, botz_dataset):
        other = HypercubeDataset()
        botz = Variable("botz", "metre")
        botz.add_data_point(0.0, 0.0, 1.0)
        other.add_variable(botz)

        with pytest.raises(ValueError, match="'botz' of dataset 1"):
            generator.generate("out.nc", botz_dataset, other)

    def test_variable_named_like_an_axis(self, generator):
        dataset = HypercubeDataset()
        lat = Variable("lat", "degrees")
        lat.add_data_point(0.0, 0.0, 1.0)
        dataset.add_variable(lat)

        with pytest.raises(ValueError, match="'lat'"):
            generator.generate("out.nc", dataset)

    def test_nothing_opened_before_validation(self, botz_dataset, internal_config):
        opened = []
        generator = Generator(internal_config, container_factory=lambda *a: opened.append(a))

        with pytest.raises(ValueError):
            generator.generate(None, botz_dataset)
        assert opened == []


class TestWritePlan:

    def test_schema_committed_before_any_write(self, generator, gap_dataset):
        generator.generate("out.nc", gap_dataset)
        calls = [name for name, _ in FakeContainer.last.calls]

        commit = calls.index("commit")
        assert "write" not in calls[:commit]
        assert "declare_variable" not in calls[commit:]
        assert calls[-1] == "close"
        assert FakeContainer.last.flushes == 1

    def test_declarations(self, generator, gap_dataset):
        generator.generate("out.nc", gap_dataset)
        fake = FakeContainer.last

        assert fake.dimensions == {"lat": 2, "lon": 2, "time": None}
        assert fake.variables["lat"] == ("f4", ("lat",))
        assert fake.variables["time"] == ("i4", ("time",))
        assert fake.variables["wind"] == ("f8", ("time", "lat", "lon"))
        assert fake.variable_attributes["lon"]["axis"] == "X"
        assert fake.variable_attributes["wind"] == {"units": "ms-1"}
        assert fake.fill_values["wind"] is None

    def test_sentinel_declared_on_data_variables(self, make_config, gap_dataset):
        generator = Generator(make_config(missing_value=-999.0), container_factory=FakeContainer.factory())
        generator.generate("out.nc", gap_dataset)
        fake = FakeContainer.last

        assert fake.fill_values["wind"] == -999.0
        assert fake.variable_attributes["wind"]["missing_value"] == -999.0
        assert fake.fill_values["lat"] is None
        assert "missing_value" not in fake.variable_attributes["time"]

    def test_time_records_in_order(self, generator, gap_dataset, t0):
        generator.generate("out.nc", gap_dataset)
        writes = FakeContainer.last.writes_for("time")

        assert [start for start, _ in writes] == [(0,), (1,)]
        first_hour = writes[0][1][0]
        assert writes[1][1][0] == first_hour + 2
        assert writes[0][1].dtype == np.int32

    def test_one_write_per_record(self, generator, gap_dataset):
        generator.generate("out.nc", gap_dataset)
        writes = FakeContainer.last.writes_for("wind")

        assert [start for start, _ in writes] == [(0, 0, 0), (1, 0, 0)]
        assert all(buffer.shape == (1, 2, 2) for _, buffer in writes)

    def test_plain_variable_written_once(self, generator, botz_dataset):
        generator.generate("out.nc", botz_dataset)
        writes = FakeContainer.last.writes_for("botz")

        assert len(writes) == 1
        assert writes[0][0] == (0, 0)
        assert writes[0][1].shape == (2, 3)

    def test_file_format_from_config(self, make_config, botz_dataset):
        config = make_config(file_format="NETCDF4_CLASSIC")
        Generator(config, container_factory=FakeContainer.factory()).generate("out.nc", botz_dataset)
        assert FakeContainer.last.file_format == "NETCDF4_CLASSIC"


class TestFailurePropagation:

    def test_write_failure_propagates_and_closes(self, internal_config, gap_dataset):
        generator = Generator(internal_config, container_factory=FakeContainer.factory(fail_on_write="wind"))

        with pytest.raises(OSError, match="disk full"):
            generator.generate("out.nc", gap_dataset)

        fake = FakeContainer.last
        assert fake.closed
        assert fake.flushes == 0

    def test_first_error_wins_over_close_error(self, internal_config, gap_dataset):
        generator = Generator(internal_config, container_factory=FakeContainer.factory(
            fail_on_write="wind", fail_on_close=RuntimeError("close failed")))

        with pytest.raises(OSError, match="disk full"):
            generator.generate("out.nc", gap_dataset)

    def test_close_error_surfaces_after_successful_writes(self, internal_config, gap_dataset):
        generator = Generator(internal_config, container_factory=FakeContainer.factory(
            fail_on_close=RuntimeError("close failed")))

        with pytest.raises(RuntimeError, match="close failed"):
            generator.generate("out.nc", gap_dataset)


class TestHelpers:

    def test_axis_names(self, internal_config):
        assert AxisNames.for_index(internal_config.coord_names, 0) == AxisNames("lat", "lon", "time", "zc")
        assert AxisNames.for_index(internal_config.coord_names, 2) == AxisNames("lat2", "lon2", "time2", "zc2")

    def test_time_offset_floors(self, t0):
        assert time_offset(t0 + 90 * timedelta(minutes=1), t0) == 1
        assert time_offset(t0 - timedelta(minutes=1), t0) == -1

    def test_dense_records_fill_missing(self, gap_dataset, t0):
        wind = gap_dataset.variables[0]
        dates = [t0, t0 + ONE_HOUR, t0 + 2 * ONE_HOUR]

        records = list(iter_dense_records(wind, gap_dataset.get_dimensions(), dates))

        assert [record for record, _ in records] == [0, 1, 2]
        assert np.isnan(records[1][1]).all()
        assert not np.isnan(records[2][1]).any()

    def test_dense_plain_record(self, botz_dataset):
        botz = botz_dataset.variables[0]
        [(record, buffer)] = list(iter_dense_records(botz, botz_dataset.get_dimensions(), [], -1.0))

        assert record is None
        assert buffer[0, 0] == -20.0 + 150.0
