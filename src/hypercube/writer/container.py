"""Two-phase NetCDF container built on netCDF4.

NetCDF files have a header (dimensions, variables, attributes) and a data
section. The header must be complete before data is written and the
unlimited (time) axis grows one record at a time. This module makes that
protocol explicit:

    OPEN  --commit()-->  SCHEMA_DECLARED  --write()-->  WRITING  --close()-->  CLOSED

``NetCDFSchema`` only exposes declarations; ``commit()`` hands back a
``NetCDFDataWriter`` that only exposes writes. Using either facade in the
wrong state raises ContractViolation instead of relying on the library's
runtime checks.

Example
-------
>>> with NetCDFSchema.create("/tmp/example.nc") as schema:
...     schema.declare_dimension("lat", 3)
...     schema.declare_variable("lat", "f4", ["lat"])
...     schema.set_variable_attribute("lat", "units", "degrees_north")
...     writer = schema.commit()
...     writer.write("lat", [0], np.array([39.0, 40.0, 41.0], dtype=np.float32))
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import netCDF4

from hypercube.contracts import assert_state, require

__all__ = ['ContainerState', 'ELEMENT_TYPES', 'NetCDFSchema', 'NetCDFDataWriter']

logger = logging.getLogger(__name__)

# Element types the generator declares: float32, float64, int32
ELEMENT_TYPES = {
    "f4": np.float32,
    "f8": np.float64,
    "i4": np.int32,
}


class ContainerState(str, Enum):
    """Lifecycle of one output file handle."""
    OPEN = "open"
    SCHEMA_DECLARED = "schema_declared"
    WRITING = "writing"
    CLOSED = "closed"


class _Handle:
    """Exclusively owned netCDF4 handle shared by both phase facades."""

    def __init__(self, nc: netCDF4.Dataset, path: Path):
        self.nc = nc
        self.path = path
        self.state = ContainerState.OPEN

    def flush(self) -> None:
        assert_state(self.state, (ContainerState.SCHEMA_DECLARED, ContainerState.WRITING), "flush")
        self.nc.sync()

    def close(self) -> None:
        """Flush then close; the first failure wins, later ones are dropped."""
        if self.state is ContainerState.CLOSED:
            return

        first_error = None
        try:
            self.nc.sync()
        except Exception as e:
            first_error = e

        try:
            self.nc.close()
        except Exception as e:
            if first_error is None:
                first_error = e

        self.state = ContainerState.CLOSED
        logger.debug("Closed %s", self.path)

        if first_error is not None:
            raise first_error


class NetCDFSchema:
    """Define phase of a new NetCDF file.

    Parameters
    ----------
    nc : netCDF4.Dataset
        Freshly created dataset opened in write mode.
    path : Path
        Location of the file (for logging).

    Notes
    -----
    Use as a context manager: the handle is flushed and closed on every
    exit path. If the body raised, close failures are logged and the
    original error propagates.
    """

    def __init__(self, nc: netCDF4.Dataset, path: Path):
        self._handle = _Handle(nc, path)

    @classmethod
    def create(cls, path, file_format: str = "NETCDF4") -> "NetCDFSchema":
        """Create (or overwrite) a NetCDF file and enter the define phase."""
        path = Path(path)
        nc = netCDF4.Dataset(str(path), mode="w", format=file_format)
        logger.debug("Created %s (%s)", path, file_format)
        return cls(nc, path)

    @property
    def state(self) -> ContainerState:
        return self._handle.state

    @property
    def path(self) -> Path:
        return self._handle.path

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self._handle.close()
        else:
            try:
                self._handle.close()
            except Exception:
                logger.warning("Failed to close %s after an earlier error", self.path, exc_info=True)
        return False

    def _require_open(self, operation: str) -> None:
        assert_state(self._handle.state, ContainerState.OPEN, operation)

    def declare_dimension(self, name: str, length: int) -> None:
        """Declare a fixed-length dimension."""
        self._require_open("declare_dimension")
        require(length > 0, f"Container contract violated: dimension '{name}' needs a positive length, got {length}")
        self._handle.nc.createDimension(name, length)

    def declare_unlimited_dimension(self, name: str) -> None:
        """Declare the growable (record) dimension."""
        self._require_open("declare_unlimited_dimension")
        self._handle.nc.createDimension(name, None)

    def declare_variable(self, name: str, dtype: str, dimensions: Sequence[str],
                         fill_value: Optional[float] = None) -> None:
        """Declare a variable of element type ``f4``, ``f8`` or ``i4``.

        ``fill_value`` becomes the variable's ``_FillValue``, which can only
        be set at creation time. None keeps the netCDF default.
        """
        self._require_open("declare_variable")
        require(dtype in ELEMENT_TYPES, f"Container contract violated: unsupported element type '{dtype}'")
        self._handle.nc.createVariable(name, ELEMENT_TYPES[dtype], tuple(dimensions), fill_value=fill_value)

    def set_variable_attribute(self, variable_name: str, key: str, value) -> None:
        self._require_open("set_variable_attribute")
        # setncattr: names starting with "_" would otherwise become Python attributes
        self._handle.nc.variables[variable_name].setncattr(key, value)

    def set_global_attribute(self, key: str, value) -> None:
        self._require_open("set_global_attribute")
        self._handle.nc.setncattr(key, value)

    def commit(self) -> "NetCDFDataWriter":
        """Write the header and switch off define mode (irrevocable)."""
        self._require_open("commit")
        # nc_sync ends define mode, so this is the enddef of the file
        self._handle.nc.sync()
        self._handle.state = ContainerState.SCHEMA_DECLARED
        logger.debug("Committed schema of %s", self.path)
        return NetCDFDataWriter(self._handle)


class NetCDFDataWriter:
    """Data phase of a NetCDF file: only writes, flush and close."""

    def __init__(self, handle: _Handle):
        self._handle = handle

    @property
    def state(self) -> ContainerState:
        return self._handle.state

    def write(self, variable_name: str, start: Sequence[int], buffer: np.ndarray) -> None:
        """Write a dense buffer at the given start offset of each dimension.

        Parameters
        ----------
        variable_name : str
            Declared variable to write to.
        start : sequence of int
            One offset per variable dimension. Writing past the end of the
            unlimited dimension extends it.
        buffer : np.ndarray
            Dense block, same rank as the variable.

        Raises
        ------
        ContractViolation
            If the container is not in the data phase or the rank of
            ``start``/``buffer`` does not match the variable.
        KeyError, IndexError, RuntimeError
            Propagated unchanged from netCDF4 (unknown variable, invalid
            range, I/O failure).
        """
        assert_state(self._handle.state, (ContainerState.SCHEMA_DECLARED, ContainerState.WRITING), "write")
        variable = self._handle.nc.variables[variable_name]
        buffer = np.asarray(buffer)
        require(
            len(start) == buffer.ndim == variable.ndim,
            f"Container contract violated: '{variable_name}' has {variable.ndim} dims, "
            f"got start of length {len(start)} and buffer of rank {buffer.ndim}"
        )

        index = tuple(slice(offset, offset + size) for offset, size in zip(start, buffer.shape))
        variable[index] = buffer
        self._handle.state = ContainerState.WRITING

    def flush(self) -> None:
        self._handle.flush()

    def close(self) -> None:
        self._handle.close()
