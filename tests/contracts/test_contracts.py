"""Tests for model and container contracts.

These tests verify that contracts raise ContractViolation directly,
straight from the model and container that enforce them.
"""

import pytest
from datetime import datetime, timezone

pytestmark = pytest.mark.unit

from hypercube.contracts import (
    ContractViolation,
    require,
    assert_coordinate_fits,
    assert_same_shape,
    assert_state,
)
from hypercube.contracts.invariants import MODEL_INVARIANTS, WRITER_INVARIANTS
from hypercube.model import PointCoordinate, ShapeKind, TimeDepthVariable, TimeVariable, Variable
from hypercube.writer import ContainerState

T0 = datetime(2019, 1, 1, tzinfo=timezone.utc)


class TestRequire:

    def test_passes_silently(self):
        require(True, "never raised")

    def test_raises_with_message(self):
        with pytest.raises(ContractViolation, match="broken"):
            require(False, "broken")

    def test_contract_violation_is_runtime_error(self):
        assert issubclass(ContractViolation, RuntimeError)


class TestShapeContract:

    @pytest.mark.parametrize("shape_kind, coordinate", [
        (ShapeKind.PLAIN, PointCoordinate(-20.0, 150.0)),
        (ShapeKind.TIME, PointCoordinate(-20.0, 150.0, T0)),
        (ShapeKind.TIME_DEPTH, PointCoordinate(-20.0, 150.0, T0, -1.5)),
    ])
    def test_matching_coordinate_passes(self, shape_kind, coordinate):
        assert_coordinate_fits(shape_kind, coordinate, "var")

    @pytest.mark.parametrize("shape_kind, coordinate", [
        (ShapeKind.PLAIN, PointCoordinate(-20.0, 150.0, T0)),
        (ShapeKind.PLAIN, PointCoordinate(-20.0, 150.0, None, -1.5)),
        (ShapeKind.TIME, PointCoordinate(-20.0, 150.0)),
        (ShapeKind.TIME_DEPTH, PointCoordinate(-20.0, 150.0, None, -1.5)),
    ])
    def test_mismatching_coordinate_fails(self, shape_kind, coordinate):
        with pytest.raises(ContractViolation, match="Shape contract violated"):
            assert_coordinate_fits(shape_kind, coordinate, "var")

    def test_same_shape_passes(self):
        assert_same_shape("wind", TimeVariable("u", "m"), TimeVariable("v", "m"))

    def test_different_shape_fails(self):
        with pytest.raises(ContractViolation, match="Vector contract violated"):
            assert_same_shape("wind", Variable("u", "m"), TimeDepthVariable("v", "m"))


class TestContainerContract:

    def test_single_allowed_state(self):
        assert_state(ContainerState.OPEN, ContainerState.OPEN, "declare_variable")

    def test_any_of_allowed_states(self):
        allowed = (ContainerState.SCHEMA_DECLARED, ContainerState.WRITING)
        assert_state(ContainerState.WRITING, allowed, "write")

    def test_wrong_state_fails(self):
        with pytest.raises(ContractViolation, match="'write' requires state schema_declared or writing"):
            assert_state(ContainerState.OPEN, (ContainerState.SCHEMA_DECLARED, ContainerState.WRITING), "write")


def test_invariants_documented():
    assert MODEL_INVARIANTS
    assert WRITER_INVARIANTS
