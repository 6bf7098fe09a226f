"""ParamConfig: Expert defaults for hypercube generation.

This module defines the complete default configuration. ALL generator and
sample-driver parameters must have defaults here. No runtime code should
define fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

import math
from typing import Literal, Optional
from pydantic import Field, field_validator
from hypercube.schemas.base import HypercubeBaseModel


FileFormat = Literal["NETCDF4", "NETCDF4_CLASSIC", "NETCDF3_64BIT_OFFSET", "NETCDF3_CLASSIC"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
SampleKind = Literal["gradient", "hydro", "multi"]


# =============================================================================
# Nested Configuration Models
# =============================================================================

class OutputConfig(HypercubeBaseModel):
    """Output container configuration."""
    # Switch to a NETCDF3 format if the reader chokes on NetCDF4 files
    file_format: FileFormat = "NETCDF4"
    missing_value: float = Field(math.nan, description="Sentinel written where a sample is missing")

    @field_validator("file_format", mode="before")
    @classmethod
    def normalize_file_format(cls, v):
        """Accept lowercase format names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


class CoordNamesConfig(HypercubeBaseModel):
    """Base names of the axes. Hypercube i > 0 appends i to each."""
    lat: str = "lat"
    lon: str = "lon"
    time: str = "time"
    height: str = "zc"  # as in eReefs files


class SampleConfig(HypercubeBaseModel):
    """Synthetic sample file settings (demo driver only)."""
    kind: SampleKind = "gradient"
    output_file: Optional[str] = None
    start_time: str = "2019-01-01T00:00:00+10:00"
    end_time: str = "2019-01-02T00:00:00+10:00"
    seed: int = 6930
    n_lat: int = Field(15, ge=2)
    n_lon: int = Field(10, ge=2)
    lat_range: tuple[float, float] = (-28.0, -7.6)
    lon_range: tuple[float, float] = (142.0, 156.0)
    depths: list[float] = Field(default_factory=lambda: [-1.5, -17.75, -49.0, -103.0, -200.0, -315.0])
    missing_data: bool = False

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        """Normalize sample kind to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class LoggingConfig(HypercubeBaseModel):
    """Logging configuration."""
    level: LogLevel = "INFO"
    log_file: Optional[str] = None


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(HypercubeBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    coord_names: CoordNamesConfig = Field(default_factory=CoordNamesConfig)
    sample: SampleConfig = Field(default_factory=SampleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
