"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from hypercube.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a contract.

    Called where a caller hands the model or the container something it
    promised to be well formed. It is fail-fast: no recovery, no fallback,
    no silence.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require(coordinate.time is not None, "Shape contract: time required")
    >>> require(state is ContainerState.OPEN, "Container contract: schema already committed")
    """
    if not condition:
        raise ContractViolation(message)
