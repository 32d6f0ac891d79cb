"""
Prediction Feature Builder

Produces the monthly price-per-area table, grouped by postcode prefix, that
a downstream price model trains on. No forecasting happens here.
"""

from typing import Iterable, List, Optional

import pandas as pd

from suburbpulse.core.constants import MIN_MONTHLY_SALES
from suburbpulse.core.models import PrefixMonthStats, Sale
from suburbpulse.logging_config import get_logger
from suburbpulse.utils.date_parser import month_key

logger = get_logger(__name__)

FEATURE_COLUMNS = [
    "postcode_prefix",
    "month",
    "sales_count",
    "avg_price_per_area",
    "min_price_per_area",
    "max_price_per_area",
]


def monthly_prefix_frame(
    sales: Iterable[Sale],
    start: Optional[str] = None,
    min_sales: int = MIN_MONTHLY_SALES,
) -> pd.DataFrame:
    """Monthly price-per-area summary per prefix as a DataFrame.

    Args:
        sales: Candidate sales.
        start: Optional inclusive ``YYYYMMDD`` settlement date lower bound.
        min_sales: Months with fewer sales in a prefix are dropped.

    Returns:
        DataFrame with ``FEATURE_COLUMNS`` sorted by prefix then month.
    """
    records = [
        {
            "postcode_prefix": sale.postcode_prefix,
            "month": month_key(sale.settlement_date),
            "price_per_area": sale.price_per_area,
        }
        for sale in sales
        if sale.price_per_area is not None
        and sale.price_per_area > 0
        and (start is None or sale.settlement_date >= start)
    ]
    if not records:
        return pd.DataFrame(columns=FEATURE_COLUMNS)

    df = pd.DataFrame.from_records(records)
    summary = (
        df.groupby(["postcode_prefix", "month"], sort=True)["price_per_area"]
        .agg(
            sales_count="count",
            avg_price_per_area="mean",
            min_price_per_area="min",
            max_price_per_area="max",
        )
        .reset_index()
    )
    summary = summary[summary["sales_count"] >= min_sales]
    return summary[FEATURE_COLUMNS].reset_index(drop=True)


def build_feature_table(
    sales: Iterable[Sale],
    start: Optional[str] = None,
    min_sales: int = MIN_MONTHLY_SALES,
) -> List[PrefixMonthStats]:
    """Monthly prefix summaries as model rows, ordered by prefix then month."""
    frame = monthly_prefix_frame(sales, start=start, min_sales=min_sales)
    rows = [
        PrefixMonthStats(
            postcode_prefix=row.postcode_prefix,
            month=row.month,
            sales_count=int(row.sales_count),
            avg_price_per_area=float(row.avg_price_per_area),
            min_price_per_area=int(row.min_price_per_area),
            max_price_per_area=int(row.max_price_per_area),
        )
        for row in frame.itertuples(index=False)
    ]
    logger.info("Built %d prefix-month feature rows", len(rows))
    return rows
