"""Vector variables: paired eastward / northward components.

NetCDF consumers (ncWMS / EDAL, Panoply) recognise vector fields by
attribute convention, not by structure: a ``standard_name`` starting with
``eastward_`` or ``northward_`` marks the U or V component. Bundling the
components in a Group or Structure breaks most readers, so the pair is
only a construction-time link between two ordinary variables.
"""

from hypercube.contracts import assert_same_shape
from hypercube.model.variable import AbstractVariable

__all__ = ['VectorVariable']


class VectorVariable:
    """Two variables representing the components of one vector field.

    Parameters
    ----------
    group_name : str
        Physical quantity, e.g. ``"wind"`` or ``"sea_water_velocity"``.
    u : AbstractVariable
        Eastward component. Receives ``standard_name = "eastward_<group_name>"``.
    v : AbstractVariable
        Northward component. Receives ``standard_name = "northward_<group_name>"``.

    Raises
    ------
    ContractViolation
        If ``u`` and ``v`` have different shape kinds.

    Examples
    --------
    >>> u = TimeVariable("wspeed_u", "ms-1")
    >>> v = TimeVariable("wspeed_v", "ms-1")
    >>> wind = VectorVariable("wind", u, v)
    >>> u.attributes["standard_name"]
    'eastward_wind'
    """

    def __init__(self, group_name: str, u: AbstractVariable, v: AbstractVariable):
        assert_same_shape(group_name, u, v)

        self.group_name = group_name

        self.u = u
        self.u.set_attribute("standard_name", f"eastward_{group_name}")

        self.v = v
        self.v.set_attribute("standard_name", f"northward_{group_name}")

    @property
    def shape_kind(self):
        return self.u.shape_kind

    def __iter__(self):
        yield self.u
        yield self.v

    def __repr__(self):
        return f"VectorVariable({self.group_name!r}, u={self.u.name!r}, v={self.v.name!r})"
