"""Command line entry point: ``python -m seabird_trips INPUT_DIR -o OUTPUT.csv``."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import List, Optional

from .aggregation import STRATEGIES, process_directory
from .config import DEFAULT_CONFIG, configure_logging
from .summary import summarize_trips


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seabird_trips",
        description="Extract foraging trips from per-bird GPS files and merge them into one table.",
    )
    parser.add_argument("input_dir", help="Folder with one CSV file per bird.")
    parser.add_argument("-o", "--output", default=None, help="Destination CSV for the merged table.")
    parser.add_argument("--threshold-km", type=float, default=DEFAULT_CONFIG.threshold_km,
                        help="Distance from the colony that marks a trip (default: %(default)s).")
    parser.add_argument("--strategy", choices=STRATEGIES, default="loop")
    parser.add_argument("--cpus", type=int, default=None, help="Worker processes for --strategy pool.")
    parser.add_argument("--log-level", default=None,
                        help="Logging level name (default: the configured log_level, INFO).")
    parser.add_argument("--summary", action="store_true", help="Print per-bird trip statistics.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = replace(DEFAULT_CONFIG, threshold_km=args.threshold_km)
    configure_logging(args.log_level if args.log_level is not None else config.log_level)
    table = process_directory(args.input_dir, args.output, config=config,
                              strategy=args.strategy, cpus=args.cpus)
    if args.summary:
        print(summarize_trips(table).to_string())
    elif args.output is None:
        print(table.to_string())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
