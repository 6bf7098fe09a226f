"""`Hypercube` - sparse point observations packed into dense NetCDF hypercubes.

Subpackages:
- model: Coordinates, variables, vector pairs, datasets and axis derivation
- writer: Two-phase NetCDF container and the hypercube generator
- schemas: Layered pydantic configuration
- contracts: Fail-fast invariant enforcement
- synthetic: Synthetic signals and sample datasets
- cli: Sample file driver
"""

from hypercube.model import (
    PointCoordinate,
    ShapeKind,
    Variable,
    TimeVariable,
    TimeDepthVariable,
    VectorVariable,
    HypercubeDataset,
    Dimensions,
)
from hypercube.writer import Generator, generate

__version__ = "0.1.0"

__all__ = [
    "PointCoordinate",
    "ShapeKind",
    "Variable",
    "TimeVariable",
    "TimeDepthVariable",
    "VectorVariable",
    "HypercubeDataset",
    "Dimensions",
    "Generator",
    "generate",
]
