"""Hypercube contracts - fail-fast enforcement of model and writer invariants.

Contracts fail immediately and loudly when callers hand the model data
that breaks its invariants, or drive the container out of phase.

Key principle:
- Pydantic validates config correctness
- Contracts validate caller correctness
- Missing data is not an error (sentinel in the dense output)
"""

from hypercube.contracts.failure import ContractViolation
from hypercube.contracts.base import require
from hypercube.contracts.shapes import assert_coordinate_fits, assert_same_shape
from hypercube.contracts.container import assert_state

__all__ = [
    "ContractViolation",
    "require",
    "assert_coordinate_fits",
    "assert_same_shape",
    "assert_state",
]
