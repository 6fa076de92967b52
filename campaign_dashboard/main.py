"""Campaign Dashboard entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dashboard.application.report_service import run_reporting_pipeline
from dashboard.application.reporting.selectors import CAMPAIGN_SORT_TYPES, SortDescriptor
from dashboard.config import DATA_SOURCE, DEFAULT_OUTPUT_DIR, FETCH_TIMEOUT_SECONDS, LOG_LEVEL
from dashboard.domain.errors import FetchError
from dashboard.infrastructure.data_source import MarketingDataSource

logger = logging.getLogger("campaign_dashboard")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render campaign dashboard views and export them.")
    parser.add_argument("--source", default=DATA_SOURCE, help="JSON file path or http(s) URL of the data bundle")
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR)
    parser.add_argument("--name", default="", help="Case-insensitive campaign name filter")
    parser.add_argument("--type", action="append", default=[], dest="types", help="Objective filter (repeatable)")
    parser.add_argument("--sort", default="revenue", choices=sorted(CAMPAIGN_SORT_TYPES))
    parser.add_argument("--direction", default="desc", choices=["asc", "desc"])
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)
    source = MarketingDataSource(args.source, timeout=FETCH_TIMEOUT_SECONDS)

    try:
        result = run_reporting_pipeline(
            source.fetch,
            output_dir=args.output_dir,
            name_query=args.name,
            type_selection=args.types,
            sort=SortDescriptor(key=args.sort, direction=args.direction),
        )
    except FetchError as exc:
        logger.error("Dashboard data unavailable: %s", exc)
        return 1

    print(f"Saved JSON: {result.json_path}")
    if result.excel_saved:
        print(f"Saved Excel: {result.excel_path}")
    else:
        print(f"Excel save skipped (file may be open/locked): {result.excel_error}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
