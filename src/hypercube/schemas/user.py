"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., OUTPUT_FILE -> output_file, START_TIME -> start_time).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from hypercube.schemas.base import HypercubeBaseModel


class UserOutputConfig(HypercubeBaseModel):
    """User-facing output config."""
    file_format: Optional[str] = None
    missing_value: Optional[float] = None

    @field_validator("file_format", mode="before")
    @classmethod
    def normalize_file_format(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v


class UserCoordNamesConfig(HypercubeBaseModel):
    """User-facing axis base names."""
    lat: Optional[str] = None
    lon: Optional[str] = None
    time: Optional[str] = None
    height: Optional[str] = None


class UserSampleConfig(HypercubeBaseModel):
    """User-facing sample driver config."""
    kind: Optional[str] = None
    output_file: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    seed: Optional[int] = None
    n_lat: Optional[int] = None
    n_lon: Optional[int] = None
    lat_range: Optional[tuple[float, float]] = None
    lon_range: Optional[tuple[float, float]] = None
    depths: Optional[list[float]] = None
    missing_data: Optional[bool] = None


class UserConfig(HypercubeBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(
            output_file="/tmp/gbr4_simple.nc",
            sample_kind="hydro",
            start_time="2018-10-01T00:00:00+10:00",
            end_time="2018-10-02T00:00:00+10:00",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Output settings (flat aliases)
    output_file: Optional[str] = Field(None, alias="OUTPUT_FILE")
    file_format: Optional[str] = Field(None, alias="FILE_FORMAT")
    missing_value: Optional[float] = Field(None, alias="MISSING_VALUE")

    # Sample settings (flat aliases)
    sample_kind: Optional[Literal["gradient", "hydro", "multi"]] = Field(None, alias="SAMPLE_KIND")
    start_time: Optional[str] = Field(None, alias="START_TIME")
    end_time: Optional[str] = Field(None, alias="END_TIME")
    seed: Optional[int] = Field(None, alias="SEED")
    missing_data: Optional[bool] = Field(None, alias="MISSING_DATA")

    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")

    # Nested overrides (advanced users)
    output: Optional[UserOutputConfig] = None
    coord_names: Optional[UserCoordNamesConfig] = None
    sample: Optional[UserSampleConfig] = None

    model_config = HypercubeBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("sample_kind", mode="before")
    @classmethod
    def normalize_sample_kind(cls, v):
        """Normalize sample kind to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("file_format", "log_level", mode="before")
    @classmethod
    def normalize_upper(cls, v):
        """Accept lowercase format names and log levels."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("missing_value", mode="before")
    @classmethod
    def coerce_missing_value(cls, v):
        """Accept int or float (or "nan") for the sentinel."""
        if v is not None:
            return float(v)
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        # Output section
        output = {}
        if self.file_format is not None:
            output["file_format"] = self.file_format
        if self.missing_value is not None:
            output["missing_value"] = self.missing_value

        if self.output is not None:
            output.update(self.output.model_dump(exclude_none=True))

        if output:
            overrides["output"] = output

        # Coordinate names section
        if self.coord_names is not None:
            coord_names = self.coord_names.model_dump(exclude_none=True)
            if coord_names:
                overrides["coord_names"] = coord_names

        # Sample section
        sample = {}
        if self.output_file is not None:
            sample["output_file"] = self.output_file
        if self.sample_kind is not None:
            sample["kind"] = self.sample_kind
        if self.start_time is not None:
            sample["start_time"] = self.start_time
        if self.end_time is not None:
            sample["end_time"] = self.end_time
        if self.seed is not None:
            sample["seed"] = self.seed
        if self.missing_data is not None:
            sample["missing_data"] = self.missing_data

        if self.sample is not None:
            sample.update(self.sample.model_dump(exclude_none=True))

        if sample:
            overrides["sample"] = sample

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
