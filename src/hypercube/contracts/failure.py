"""Exception raised on contract violations.

All contract violations raise the same exception type, so callers can
handle programming errors uniformly.
"""


class ContractViolation(RuntimeError):
    """Raised when a model or container contract is violated.

    This indicates a bug in the calling code, not bad user input or a
    storage failure. It means a caller built a coordinate that does not
    fit its variable, paired mismatched vector components, or used the
    container outside of its current phase.

    Key distinction:
    - ValueError: Invalid invocation (no output path, no datasets)
    - ContractViolation: Programmer error (shape mismatch, wrong phase)
    - OSError / RuntimeError from netCDF4: Storage failure, propagated unchanged
    """
    pass
