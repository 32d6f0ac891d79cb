#!/usr/bin/env python
"""
CLI for serving suburb statistics over HTTP.

Usage:
    python -m suburbpulse.cli.api_server
    python -m suburbpulse.cli.api_server --db ./sales.db --port 8080
"""

import argparse
import sys

from suburbpulse.config import get_config
from suburbpulse.core.store import SaleStore
from suburbpulse.exceptions import SuburbPulseError
from suburbpulse.logging_config import setup_logging, get_logger


def check_database(db_path: str = None) -> int:
    """Make sure the schema exists and return how many sales are loaded."""
    store = SaleStore(db_path)
    store.init_schema()
    return store.count_sales()


def main():
    """Main entry point for the API server CLI."""
    parser = argparse.ArgumentParser(
        description="Serve suburb statistics, outliers and prediction features",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m suburbpulse.cli.api_server
    python -m suburbpulse.cli.api_server --db ./sales.db
    python -m suburbpulse.cli.api_server --host 0.0.0.0 --port 8080 --debug
        """,
    )
    parser.add_argument("--db", type=str, default=None, help="Path to SQLite database file")
    parser.add_argument("--host", type=str, default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    api_config = get_config().api
    db_path = args.db or get_config().database.path

    try:
        sales = check_database(db_path)
    except SuburbPulseError as e:
        logger.error("Cannot open database %s: %s", db_path, e)
        sys.exit(1)

    if sales == 0:
        logger.warning("No sales in %s; run suburbpulse-import first", db_path)
    else:
        logger.info("Serving %d sales from %s", sales, db_path)

    from suburbpulse.api.server import run_server
    try:
        run_server(
            host=args.host or api_config.host,
            port=args.port or api_config.port,
            debug=args.debug or api_config.debug,
            db_path=db_path,
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
