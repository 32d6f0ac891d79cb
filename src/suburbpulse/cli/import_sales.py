#!/usr/bin/env python
"""
CLI for importing sale records and rebuilding suburb statistics.

Usage:
    python -m suburbpulse.cli.import_sales sales.csv
    python -m suburbpulse.cli.import_sales sales.csv --skip-stats
"""

import argparse
import sys

from suburbpulse.analytics import compute_suburb_aggregates
from suburbpulse.core.store import SaleStore
from suburbpulse.exceptions import SuburbPulseError
from suburbpulse.ingestion import import_csv
from suburbpulse.logging_config import setup_logging, get_logger


def main():
    """Main entry point for the import CLI."""
    parser = argparse.ArgumentParser(
        description="Import sale records from CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m suburbpulse.cli.import_sales sales.csv
    python -m suburbpulse.cli.import_sales sales.csv --db ./sales.db
        """,
    )
    parser.add_argument("csv_path", help="CSV file of sale records")
    parser.add_argument("--db", type=str, default=None, help="Path to SQLite database file")
    parser.add_argument(
        "--skip-stats",
        action="store_true",
        help="Do not rebuild suburb statistics after importing",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    store = SaleStore(args.db)
    try:
        result = import_csv(store, args.csv_path)
        if not args.skip_stats:
            logger.info("Calculating suburb statistics...")
            compute_suburb_aggregates(store)
    except SuburbPulseError as e:
        logger.error("Import failed: %s", e)
        sys.exit(1)

    logger.info(
        "Database ready with %d sales records (%d rejected this run)",
        store.count_sales(), result.rejected,
    )


if __name__ == "__main__":
    main()
