"""In-memory container recording every call made by the Generator.

Implements the NetCDFSchema / NetCDFDataWriter interface without touching
the filesystem, and can be told to fail on a given variable write or on
close, to exercise error propagation.
"""

import numpy as np

from hypercube.contracts import assert_state
from hypercube.writer.container import ContainerState


class FakeContainer:
    """Schema and data writer in one object, shared through ``FakeContainer.last``."""

    last = None

    def __init__(self, path, file_format, fail_on_write=None, fail_on_close=None):
        self.path = path
        self.file_format = file_format
        self.fail_on_write = fail_on_write
        self.fail_on_close = fail_on_close
        self.state = ContainerState.OPEN
        self.calls = []
        self.dimensions = {}
        self.variables = {}
        self.variable_attributes = {}
        self.fill_values = {}
        self.global_attributes = {}
        self.writes = []
        self.flushes = 0
        self.closed = False
        FakeContainer.last = self

    @classmethod
    def factory(cls, **kwargs):
        def _create(path, file_format):
            return cls(path, file_format, **kwargs)
        return _create

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.close()
        except Exception:
            if exc_type is None:
                raise
        return False

    # Schema phase
    def declare_dimension(self, name, length):
        assert_state(self.state, ContainerState.OPEN, "declare_dimension")
        self.calls.append(("declare_dimension", name))
        self.dimensions[name] = length

    def declare_unlimited_dimension(self, name):
        assert_state(self.state, ContainerState.OPEN, "declare_unlimited_dimension")
        self.calls.append(("declare_unlimited_dimension", name))
        self.dimensions[name] = None

    def declare_variable(self, name, dtype, dimensions, fill_value=None):
        assert_state(self.state, ContainerState.OPEN, "declare_variable")
        self.calls.append(("declare_variable", name))
        self.variables[name] = (dtype, tuple(dimensions))
        self.fill_values[name] = fill_value
        self.variable_attributes[name] = {}

    def set_variable_attribute(self, variable_name, key, value):
        assert_state(self.state, ContainerState.OPEN, "set_variable_attribute")
        self.variable_attributes[variable_name][key] = value

    def set_global_attribute(self, key, value):
        assert_state(self.state, ContainerState.OPEN, "set_global_attribute")
        self.global_attributes[key] = value

    def commit(self):
        assert_state(self.state, ContainerState.OPEN, "commit")
        self.calls.append(("commit", None))
        self.state = ContainerState.SCHEMA_DECLARED
        return self

    # Data phase
    def write(self, variable_name, start, buffer):
        assert_state(self.state, (ContainerState.SCHEMA_DECLARED, ContainerState.WRITING), "write")
        if variable_name == self.fail_on_write:
            raise OSError(f"disk full while writing {variable_name}")
        self.calls.append(("write", variable_name))
        self.writes.append((variable_name, tuple(start), np.array(buffer, copy=True)))
        self.state = ContainerState.WRITING

    def flush(self):
        self.flushes += 1

    def close(self):
        if self.closed:
            return
        self.closed = True
        self.state = ContainerState.CLOSED
        self.calls.append(("close", None))
        if self.fail_on_close is not None:
            raise self.fail_on_close

    # Helpers
    def writes_for(self, variable_name):
        return [(start, buffer) for name, start, buffer in self.writes if name == variable_name]
