"""CLIConfig: Command-line operational overrides.

Minimal configuration for settings that commonly change between runs:
output file, sample kind, time range, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import field_validator
from hypercube.schemas.base import HypercubeBaseModel


class CLIConfig(HypercubeBaseModel):
    """Command-line configuration overrides.

    Operational-only settings that override user and param configs.
    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(
            output_file="/tmp/gbr4_v2_2014-12-02_missingFrames.nc",
            kind="hydro",
            missing_data=True,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    output_file: Optional[str] = None
    kind: Optional[Literal["gradient", "hydro", "multi"]] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    file_format: Optional[str] = None
    missing_data: Optional[bool] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("file_format", "log_level", mode="before")
    @classmethod
    def normalize_upper(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        sample_overrides = {}
        if self.output_file is not None:
            sample_overrides["output_file"] = str(self.output_file)
        if self.kind is not None:
            sample_overrides["kind"] = self.kind
        if self.start_time is not None:
            sample_overrides["start_time"] = self.start_time
        if self.end_time is not None:
            sample_overrides["end_time"] = self.end_time
        if self.missing_data is not None:
            sample_overrides["missing_data"] = self.missing_data

        if sample_overrides:
            overrides["sample"] = sample_overrides

        if self.file_format is not None:
            overrides["output"] = {"file_format": self.file_format}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
