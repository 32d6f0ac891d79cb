"""
Market Analytics Operations

Entry points used by the API and CLI. Each one reads from a ``SaleStore``
and delegates the arithmetic to the aggregator, scorer, outlier detector
and feature builder modules.
"""

from typing import Any, Dict, List, Optional

from suburbpulse.analytics.aggregator import build_suburb_aggregates
from suburbpulse.analytics.features import build_feature_table
from suburbpulse.analytics.momentum import score_momentum
from suburbpulse.analytics.outliers import find_outliers
from suburbpulse.config import AnalysisWindow, get_config
from suburbpulse.core.constants import (
    DEFAULT_OUTLIER_LIMIT,
    DEFAULT_RANK_COLUMN,
    DEFAULT_RANK_LIMIT,
    RECENT_SALES_LIMIT,
)
from suburbpulse.core.models import OutlierReport, PrefixMonthStats, SuburbAggregate
from suburbpulse.core.store import SaleStore
from suburbpulse.logging_config import get_logger

logger = get_logger(__name__)


def _default_window(window: Optional[AnalysisWindow]) -> AnalysisWindow:
    return window if window is not None else get_config().analysis.window()


def compute_suburb_aggregates(
    store: SaleStore,
    window: Optional[AnalysisWindow] = None,
) -> List[SuburbAggregate]:
    """Rebuild the suburb statistics table and score momentum.

    The new snapshot is built and scored in memory first, then swapped in
    with a single transaction.

    Args:
        store: Sale store to read from and write to.
        window: Current/prior window boundaries. Defaults to configuration.

    Returns:
        The aggregates that were written.
    """
    window = _default_window(window)
    scan_start = min(window.current_start, window.prior_start)
    sales = store.scan_sales(start=scan_start)
    logger.info("Scanned %d sales since %s", len(sales), scan_start)

    aggregates = build_suburb_aggregates(sales, window)
    score_momentum(aggregates)
    store.replace_aggregates(aggregates)
    return aggregates


def rank_suburbs(
    store: SaleStore,
    sort_by: str = DEFAULT_RANK_COLUMN,
    order: str = "DESC",
    limit: int = DEFAULT_RANK_LIMIT,
) -> List[SuburbAggregate]:
    """Suburb statistics ordered by a rankable column."""
    return store.rank_aggregates(sort_by=sort_by, order=order, limit=limit)


def suburb_detail(store: SaleStore, suburb: str, postcode: str) -> Dict[str, Any]:
    """Statistics, recent sales and monthly price trend for one suburb.

    ``aggregate`` is None when the suburb has no statistics row.
    """
    return {
        "aggregate": store.get_aggregate(suburb, postcode),
        "recent_sales": store.recent_sales(suburb, postcode, limit=RECENT_SALES_LIMIT),
        "monthly_trend": store.monthly_price_trend(suburb, postcode),
    }


def detect_outliers(
    store: SaleStore,
    threshold: Optional[float] = None,
    limit: int = DEFAULT_OUTLIER_LIMIT,
    window: Optional[AnalysisWindow] = None,
) -> OutlierReport:
    """Over- and under-priced sales within the outlier window."""
    window = _default_window(window)
    if threshold is None:
        threshold = get_config().analysis.outlier_threshold
    sales = store.scan_sales(start=window.outlier_start, require_area=True)
    return find_outliers(sales, threshold=threshold, limit=limit, start=window.outlier_start)


def build_prediction_features(
    store: SaleStore,
    window: Optional[AnalysisWindow] = None,
) -> List[PrefixMonthStats]:
    """Monthly prefix price-per-area table from the history window onwards."""
    window = _default_window(window)
    sales = store.scan_sales(start=window.history_start)
    return build_feature_table(sales, start=window.history_start)
