#!/usr/bin/env python3
"""``Hypercube`` sample NetCDF file generator.

Usage:
    python scripts/generate_sample.py --output /tmp/gradient.nc
    python scripts/generate_sample.py scripts/user_config.py
    python scripts/generate_sample.py scripts/user_config.py --kind hydro --missing-data
    python scripts/generate_sample.py --kind multi --output /tmp/multi.nc -v

Note: User config in scripts/user_config.py, expert defaults in src/hypercube/schemas/param.py
"""

import sys
import argparse
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from hypercube.cli.run_sample import run_sample


def main():
    parser = argparse.ArgumentParser(description="Generate a synthetic NetCDF hypercube file")
    parser.add_argument("config", nargs="?", help="Path to user config file")
    parser.add_argument("-o", "--output", help="Output NetCDF file")
    parser.add_argument("--kind", choices=["gradient", "hydro", "multi"], help="Sample layout")
    parser.add_argument("--start-time", help="Start time, inclusive (ISO format)")
    parser.add_argument("--end-time", help="End time, exclusive (ISO format)")
    parser.add_argument("--file-format", help="NETCDF4, NETCDF4_CLASSIC, NETCDF3_64BIT_OFFSET or NETCDF3_CLASSIC")
    parser.add_argument("--missing-data", action="store_true", default=None,
                        help="Leave out some frames (hydro sample)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    output_path = run_sample(
        args.config,
        cli_args={
            "output_file": args.output,
            "kind": args.kind,
            "start_time": args.start_time,
            "end_time": args.end_time,
            "file_format": args.file_format,
            "missing_data": args.missing_data,
        },
        verbose=args.verbose,
    )
    print(f"Load the generated file ({output_path}) in a NetCDF viewer such as Panoply to check its integrity.")


if __name__ == "__main__":
    main()
