"""In-memory model: coordinates, variables, vector pairs and datasets."""

from hypercube.model.coordinate import PointCoordinate, compare_coordinates
from hypercube.model.variable import (
    ShapeKind,
    AbstractVariable,
    Variable,
    TimeVariable,
    TimeDepthVariable,
)
from hypercube.model.vector import VectorVariable
from hypercube.model.dimensions import Dimensions, derive_dimensions, derive_dates
from hypercube.model.dataset import HypercubeDataset

__all__ = [
    "PointCoordinate",
    "compare_coordinates",
    "ShapeKind",
    "AbstractVariable",
    "Variable",
    "TimeVariable",
    "TimeDepthVariable",
    "VectorVariable",
    "Dimensions",
    "derive_dimensions",
    "derive_dates",
    "HypercubeDataset",
]
