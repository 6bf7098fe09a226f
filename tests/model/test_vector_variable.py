"""Tests for vector variable pairs."""

import pytest

from hypercube.contracts import ContractViolation
from hypercube.model import ShapeKind, TimeDepthVariable, TimeVariable, VectorVariable

pytestmark = pytest.mark.unit


def test_standard_names_stamped_on_components():
    u = TimeVariable("wspeed_u", "ms-1")
    v = TimeVariable("wspeed_v", "ms-1")
    VectorVariable("wind", u, v)

    assert u.attributes["standard_name"] == "eastward_wind"
    assert v.attributes["standard_name"] == "northward_wind"


def test_standard_name_overrides_existing_attribute():
    u = TimeDepthVariable("u", "ms-1")
    u.set_attribute("standard_name", "something_else")
    v = TimeDepthVariable("v", "ms-1")
    VectorVariable("sea_water_velocity", u, v)

    assert u.attributes["standard_name"] == "eastward_sea_water_velocity"


def test_pair_exposes_components_in_order():
    u = TimeVariable("wspeed_u", "ms-1")
    v = TimeVariable("wspeed_v", "ms-1")
    wind = VectorVariable("wind", u, v)

    assert list(wind) == [u, v]
    assert wind.shape_kind is ShapeKind.TIME
    assert "wind" in repr(wind)


def test_mismatched_shape_kinds_rejected():
    u = TimeVariable("u", "ms-1")
    v = TimeDepthVariable("v", "ms-1")

    with pytest.raises(ContractViolation, match="sea_water_velocity"):
        VectorVariable("sea_water_velocity", u, v)

    assert "standard_name" not in u.attributes
