#!/usr/bin/env python
"""
CLI for rebuilding suburb statistics and momentum scores.

Usage:
    python -m suburbpulse.cli.compute_stats
    python -m suburbpulse.cli.compute_stats --year 2025
    python -m suburbpulse.cli.compute_stats --current-start 20250701 --prior-start 20240701
"""

import argparse
import json
import sys
from typing import List, Optional

from suburbpulse.analytics import compute_suburb_aggregates
from suburbpulse.config import AnalysisWindow, get_config
from suburbpulse.core.models import SuburbAggregate
from suburbpulse.core.store import SaleStore
from suburbpulse.exceptions import SuburbPulseError
from suburbpulse.logging_config import setup_logging, get_logger
from suburbpulse.utils.date_parser import year_start_key
from suburbpulse.utils.price_parser import format_price

JSON_SUMMARY_START = "---JSON_SUMMARY_START---"
JSON_SUMMARY_END = "---JSON_SUMMARY_END---"


def build_window(
    year: Optional[int] = None,
    current_start: Optional[str] = None,
    prior_start: Optional[str] = None,
) -> AnalysisWindow:
    """Resolve CLI overrides into an analysis window.

    ``--year`` sets the current window to that calendar year onwards and the
    prior window to the year before. Explicit start dates win over it, and
    anything left unset comes from configuration.
    """
    configured = get_config().analysis
    if year is not None:
        current_start = current_start or year_start_key(year)
        prior_start = prior_start or year_start_key(year - 1)
    return AnalysisWindow(
        current_start=current_start or configured.current_start,
        prior_start=prior_start or configured.prior_start,
        history_start=configured.history_start,
    )


def summarize(aggregates: List[SuburbAggregate], window: AnalysisWindow) -> dict:
    """JSON-friendly summary of one aggregation run."""
    scored = [agg for agg in aggregates if agg.momentum_score is not None]
    top = sorted(scored, key=lambda agg: agg.momentum_score, reverse=True)[:5]
    return {
        "stats_summary": {
            "current_start": window.current_start,
            "prior_start": window.prior_start,
            "prior_end": window.prior_end,
            "suburbs": len(aggregates),
            "scored": len(scored),
            "top_momentum": [
                {
                    "suburb": agg.suburb,
                    "postcode": agg.postcode,
                    "momentum_score": agg.momentum_score,
                    "median_price": agg.median_price,
                }
                for agg in top
            ],
        }
    }


def main():
    """Main entry point for the statistics rebuild CLI."""
    parser = argparse.ArgumentParser(
        description="Rebuild suburb statistics and momentum scores",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m suburbpulse.cli.compute_stats
    python -m suburbpulse.cli.compute_stats --year 2025
    python -m suburbpulse.cli.compute_stats --db ./sales.db
        """,
    )
    parser.add_argument("--db", type=str, default=None, help="Path to SQLite database file")
    parser.add_argument("--year", type=int, default=None, help="Current calendar year")
    parser.add_argument("--current-start", type=str, default=None, help="Current window start (YYYYMMDD)")
    parser.add_argument("--prior-start", type=str, default=None, help="Prior window start (YYYYMMDD)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    try:
        window = build_window(args.year, args.current_start, args.prior_start)
        store = SaleStore(args.db)
        store.init_schema()
        aggregates = compute_suburb_aggregates(store, window)
    except SuburbPulseError as e:
        logger.error("Statistics rebuild failed: %s", e)
        sys.exit(1)

    summary = summarize(aggregates, window)
    for entry in summary["stats_summary"]["top_momentum"]:
        logger.info(
            "%s %s: momentum %d, median %s",
            entry["suburb"], entry["postcode"], entry["momentum_score"],
            format_price(entry["median_price"]),
        )

    print(JSON_SUMMARY_START)
    print(json.dumps(summary, indent=2))
    print(JSON_SUMMARY_END)


if __name__ == "__main__":
    main()
