"""Run transport detection and statistics over a JSON export of tracker data."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import config
from core.exceptions import TrackerAnalyticsError
from transport_detection import TrackerDataProcessor

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "export",
        type=Path,
        help="JSON file holding an array of tracker records",
    )
    parser.add_argument("--start-date", help="Inclusive start (YYYY-MM-DD or ISO)")
    parser.add_argument("--end-date", help="Inclusive end (YYYY-MM-DD or ISO)")
    parser.add_argument(
        "--no-statistics",
        action="store_true",
        help="Only emit enriched points and debug counters",
    )
    parser.add_argument("--indent", type=int, default=2)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        with args.export.open(encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError):
        logger.exception("Could not read tracker export %s", args.export)
        return 1

    if not isinstance(records, list):
        logger.error("Tracker export must be a JSON array, got %s", type(records).__name__)
        return 1

    try:
        result = TrackerDataProcessor().process(
            records,
            include_statistics=not args.no_statistics,
            start_date=args.start_date,
            end_date=args.end_date,
        )
    except TrackerAnalyticsError as e:
        logger.error("%s", e.message)
        return 2

    json.dump(result.to_dict(), sys.stdout, indent=args.indent)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
