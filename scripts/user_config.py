"""Hypercube sample User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the generated sample. Advanced settings are in src/hypercube/schemas/param.py

Usage:
    python scripts/generate_sample.py scripts/user_config.py
    python scripts/generate_sample.py scripts/user_config.py --kind multi
    python scripts/generate_sample.py scripts/user_config.py --missing-data
"""

CONFIG = {
    # ========================================================================
    # OUTPUT
    # ========================================================================
    "OUTPUT_FILE": "/tmp/gbr4_v2_2014-12-02.nc",
    "FILE_FORMAT": "NETCDF4",   # NETCDF3_CLASSIC for old readers (one hypercube only)

    # ========================================================================
    # SAMPLE
    # ========================================================================
    "SAMPLE_KIND": "hydro",     # "gradient", "hydro" or "multi"
    "START_TIME": "2014-12-02T00:00:00+10:00",  # inclusive
    "END_TIME": "2014-12-02T12:00:00+10:00",    # exclusive
    "SEED": 4280,
    "MISSING_DATA": False,      # leave out some frames to test gap handling

    # ========================================================================
    # LOGGING
    # ========================================================================
    "LOG_LEVEL": "INFO",

    # Advanced: nested overrides of the expert defaults
    # "sample": {"n_lat": 30, "n_lon": 20, "depths": [-1.5, -49.0]},
    # "coord_names": {"height": "depth"},
}
