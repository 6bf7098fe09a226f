"""Shape contracts for variables and vector pairs.

A variable's shape kind fixes which optional coordinate fields every one
of its sample keys carries. Vector components must share a shape kind so
both halves of the pair span the same axes in the output file.
"""

from typing import TYPE_CHECKING

from hypercube.contracts.base import require

if TYPE_CHECKING:
    from hypercube.model.coordinate import PointCoordinate
    from hypercube.model.variable import AbstractVariable, ShapeKind


def assert_coordinate_fits(shape_kind: "ShapeKind", coordinate: "PointCoordinate", variable_name: str) -> None:
    """Enforce that a coordinate carries exactly the fields of a shape kind.

    Parameters
    ----------
    shape_kind : ShapeKind
        Shape kind of the receiving variable.
    coordinate : PointCoordinate
        Coordinate about to be used as a sample key.
    variable_name : str
        Name of the receiving variable (for the error message).

    Raises
    ------
    ContractViolation
        If time or height presence does not match the shape kind.
    """
    has_time = coordinate.time is not None
    has_height = coordinate.height is not None
    require(
        has_time == shape_kind.has_time,
        f"Shape contract violated: variable '{variable_name}' is {shape_kind.value}, "
        f"coordinate {'has' if has_time else 'lacks'} a time"
    )
    require(
        has_height == shape_kind.has_height,
        f"Shape contract violated: variable '{variable_name}' is {shape_kind.value}, "
        f"coordinate {'has' if has_height else 'lacks'} a height"
    )


def assert_same_shape(group_name: str, u: "AbstractVariable", v: "AbstractVariable") -> None:
    """Enforce that both components of a vector pair share a shape kind."""
    require(
        u.shape_kind == v.shape_kind,
        f"Vector contract violated: '{group_name}' pairs {u.name} ({u.shape_kind.value}) "
        f"with {v.name} ({v.shape_kind.value})"
    )
