"""
Core modules for Suburb Pulse.

Contains database helpers, the sale store, data models, and shared constants.
"""

from suburbpulse.core.constants import (
    MIN_SUBURB_SALES,
    MIN_MOMENTUM_SALES,
    MIN_PREFIX_SAMPLES,
    MIN_MONTHLY_SALES,
)
from suburbpulse.core.database import (
    get_connection,
    fetch_all,
    fetch_one,
    execute,
    transaction,
)
from suburbpulse.core.models import (
    Sale,
    SuburbAggregate,
    PrefixPriceStats,
    OutlierRecord,
    OutlierReport,
    PrefixMonthStats,
)
from suburbpulse.core.store import SaleStore

__all__ = [
    "MIN_SUBURB_SALES",
    "MIN_MOMENTUM_SALES",
    "MIN_PREFIX_SAMPLES",
    "MIN_MONTHLY_SALES",
    "get_connection",
    "fetch_all",
    "fetch_one",
    "execute",
    "transaction",
    "Sale",
    "SuburbAggregate",
    "PrefixPriceStats",
    "OutlierRecord",
    "OutlierReport",
    "PrefixMonthStats",
    "SaleStore",
]
