"""Container phase contract.

Array files are written in two irrevocable phases: the header (dimensions,
variables, attributes) is declared and committed, then data is written.
This contract rejects any operation issued in the wrong phase.
"""

from typing import TYPE_CHECKING, Iterable, Union

from hypercube.contracts.base import require

if TYPE_CHECKING:
    from hypercube.writer.container import ContainerState


def assert_state(current: "ContainerState",
                 expected: Union["ContainerState", Iterable["ContainerState"]],
                 operation: str) -> None:
    """Enforce that a container operation runs in an allowed phase.

    Parameters
    ----------
    current : ContainerState
        State the container is in.
    expected : ContainerState or iterable of ContainerState
        State(s) in which ``operation`` is permitted.
    operation : str
        Operation name (for the error message).

    Raises
    ------
    ContractViolation
        If the container is not in an allowed state.
    """
    allowed = (expected,) if isinstance(expected, str) else tuple(expected)
    require(
        current in allowed,
        f"Container contract violated: '{operation}' requires state "
        f"{' or '.join(state.value for state in allowed)}, container is {current.value}"
    )
