"""Pydantic configuration schemas for hypercube generation.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from hypercube.schemas.resolve import resolve_config
from hypercube.schemas.internal import InternalConfig
from hypercube.schemas.param import ParamConfig
from hypercube.schemas.user import UserConfig
from hypercube.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
