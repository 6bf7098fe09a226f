"""Sample file generation logic.

This module contains the sample driver, separated from argument parsing.
``scripts/generate_sample.py`` is a thin wrapper; this is the real
implementation.
"""

import json
import logging
import importlib.util
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, Tuple

from hypercube.model import HypercubeDataset
from hypercube.model.coordinate import as_utc
from hypercube.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig, InternalConfig
from hypercube.synthetic import (
    build_gradient_dataset,
    build_hydro_dataset,
    build_multi_datasets,
    get_coordinates,
)
from hypercube.writer import Generator


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def configure_logging(config: InternalConfig) -> None:
    """Replace root handlers with a console (and optional file) handler."""
    log_level = config.logging.level
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if config.logging.log_file:
        fh = logging.FileHandler(config.logging.log_file)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.info("Logging: level=%s, file=%s", log_level, config.logging.log_file)


def parse_time(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; a trailing ``Z`` and naive values mean UTC."""
    try:
        return as_utc(datetime.fromisoformat(value.replace('Z', '+00:00')))
    except ValueError as e:
        raise ValueError(f"Invalid time {value!r}, expected ISO 8601") from e


def build_sample_datasets(config: InternalConfig) -> Tuple[HypercubeDataset, ...]:
    """Build the datasets of the configured sample kind."""
    sample = config.sample
    start = parse_time(sample.start_time)
    end = parse_time(sample.end_time)

    if sample.kind == "multi":
        return build_multi_datasets(start, end, seed=sample.seed)

    lats = get_coordinates(sample.lat_range[0], sample.lat_range[1], sample.n_lat)
    lons = get_coordinates(sample.lon_range[0], sample.lon_range[1], sample.n_lon)

    if sample.kind == "hydro":
        return (build_hydro_dataset(start, end, lats, lons, sample.depths,
                                    seed=sample.seed, missing_data=sample.missing_data),)

    return (build_gradient_dataset(start, end, lats, lons, seed=sample.seed),)


def run_sample(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False
) -> Path:
    """Generate a synthetic sample NetCDF file.

    This is the core driver function. It:
    1. Loads and resolves configuration (Param < User < CLI)
    2. Configures logging
    3. Builds the datasets of the selected sample kind
    4. Writes them with the Generator

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).

    cli_args : dict, optional
        CLI argument overrides. Keys: output_file, kind, start_time,
        end_time, file_format, missing_data, log_level. All optional.

    verbose : bool, optional
        If True, enable DEBUG logging and print full resolved config.

    Returns
    -------
    Path
        The generated file.

    Raises
    ------
    FileNotFoundError
        If user_config_path does not exist.
    ValueError
        If no output file is configured or a time is not ISO 8601.
    ValidationError
        If configuration validation fails.

    Examples
    --------
    Run with CLI overrides only::

        run_sample(cli_args={"output_file": "/tmp/gradient.nc"})

    Hydro sample with missing frames::

        run_sample(
            "scripts/user_config.py",
            cli_args={"kind": "hydro", "missing_data": True},
        )
    """
    # Load configurations
    param_cfg = ParamConfig()  # Expert defaults

    user_cfg = UserConfig()
    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    # Create CLI config from arguments
    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    # Filter None values
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    # Resolve to internal config (Param < User < CLI)
    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    configure_logging(config)

    if not config.sample.output_file:
        raise ValueError("No output file given (OUTPUT_FILE in the user config or --output)")

    if verbose:
        logger.debug("Full Internal Configuration:\n%s", json.dumps(config.model_dump(), indent=2, default=str))

    logger.info("Sample '%s' from %s to %s -> %s", config.sample.kind,
                config.sample.start_time, config.sample.end_time, config.sample.output_file)

    datasets = build_sample_datasets(config)
    return Generator(config).generate(config.sample.output_file, *datasets)
