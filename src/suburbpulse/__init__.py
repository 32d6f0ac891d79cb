"""
Suburb Pulse

Property-sale market statistics: per-suburb aggregates, year-over-year
growth, momentum rankings and price-per-area outliers.

Main components:
- core: sale store, SQLite helpers and data models
- analytics: suburb aggregator, momentum scorer, outlier detector and
  prediction feature builder
- ingestion: CSV import of normalized sale records
- api: Flask REST API server
- cli: Command-line interfaces

Usage:
    from suburbpulse.core import SaleStore
    from suburbpulse.analytics import compute_suburb_aggregates, detect_outliers
"""

__version__ = "1.0.0"

from suburbpulse.config import get_config
from suburbpulse.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]
