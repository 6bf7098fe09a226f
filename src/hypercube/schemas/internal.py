"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.
"""

from typing import Optional
from pydantic import ConfigDict, Field
from hypercube.schemas.base import HypercubeBaseModel
from hypercube.schemas.param import FileFormat, LogLevel, SampleKind


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalOutputConfig(HypercubeBaseModel):
    """Runtime output container configuration."""
    file_format: FileFormat
    missing_value: float


class InternalCoordNamesConfig(HypercubeBaseModel):
    """Runtime axis base names."""
    lat: str = Field(min_length=1)
    lon: str = Field(min_length=1)
    time: str = Field(min_length=1)
    height: str = Field(min_length=1)


class InternalSampleConfig(HypercubeBaseModel):
    """Runtime sample driver configuration.

    Note: output_file is validated as non-None by the sample driver, not
    here, so the generator can be configured without a sample target.
    """
    kind: SampleKind
    output_file: Optional[str]
    start_time: str
    end_time: str
    seed: int
    n_lat: int = Field(ge=2)
    n_lon: int = Field(ge=2)
    lat_range: tuple[float, float]
    lon_range: tuple[float, float]
    depths: list[float]
    missing_data: bool


class InternalLoggingConfig(HypercubeBaseModel):
    """Runtime logging configuration."""
    level: LogLevel
    log_file: Optional[str]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(HypercubeBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that runtime code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.file_format = config.output.file_format  # NOT .get()
            self.lat_name = config.coord_names.lat

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code
    """

    output: InternalOutputConfig
    coord_names: InternalCoordNamesConfig
    sample: InternalSampleConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
