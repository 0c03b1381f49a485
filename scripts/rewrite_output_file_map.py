"""Rewrite a swiftc output file map for incremental compilation.

Usage: python scripts/rewrite_output_file_map.py <input-map> <output-map> [--config FILE]

Prints the relocation table (original path -> storage-area path) as JSON.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from swift_worker.config import load_config
from swift_worker.errors import OutputFileMapError
from swift_worker.logger import logger
from swift_worker.output_file_map import OutputFileMap


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Rewrite an output file map for incremental builds")
    parser.add_argument("input", type=Path, help="Output file map produced by the build rules")
    parser.add_argument("output", type=Path, help="Where to write the rewritten output file map")
    parser.add_argument("--config", type=Path, help="YAML file with incremental storage settings")
    args = parser.parse_args(argv)

    try:
        output_file_map = OutputFileMap(load_config(args.config))
        output_file_map.read_from_path(args.input)
        output_file_map.write_to_path(args.output)
    except (OutputFileMapError, OSError, ValueError) as err:
        logger.error("Failed to rewrite output file map", input=str(args.input), error=str(err))
        return 1

    print(json.dumps(dict(output_file_map.incremental_outputs), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
