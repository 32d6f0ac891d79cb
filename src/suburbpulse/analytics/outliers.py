"""
Outlier Detector

Flags sales whose price per square metre is statistically extreme relative
to other sales in the same postcode prefix.

Each prefix needs at least five priced sales to form a baseline. The
standard deviation is the population one (divide by N): the observed sales
are the whole population being judged. Prefixes where every sale has the
same price per area have no usable z-score and produce no outliers.
"""

from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from suburbpulse.core.constants import (
    DEFAULT_OUTLIER_LIMIT,
    DEFAULT_OUTLIER_THRESHOLD,
    MIN_PREFIX_SAMPLES,
    OUTLIER_OVERPRICED,
    OUTLIER_UNDERPRICED,
)
from suburbpulse.core.models import OutlierRecord, OutlierReport, PrefixPriceStats, Sale
from suburbpulse.logging_config import get_logger
from suburbpulse.utils.numbers import round_half_up

logger = get_logger(__name__)


def eligible_sales(sales: Iterable[Sale], start: Optional[str] = None) -> List[Sale]:
    """Sales with a known area and positive price per area, from ``start`` on."""
    return [
        sale for sale in sales
        if sale.price_per_area is not None
        and sale.price_per_area > 0
        and sale.has_area
        and (start is None or sale.settlement_date >= start)
    ]


def _sales_frame(sales: List[Sale]) -> pd.DataFrame:
    return pd.DataFrame({
        "postcode_prefix": [sale.postcode_prefix for sale in sales],
        "price_per_area": np.array([sale.price_per_area for sale in sales], dtype=float),
    })


def compute_prefix_stats(
    sales: List[Sale],
    min_samples: int = MIN_PREFIX_SAMPLES,
) -> Dict[str, PrefixPriceStats]:
    """Mean, population std and count of price per area for each prefix.

    Prefixes with fewer than ``min_samples`` sales are left out.
    """
    if not sales:
        return {}

    df = _sales_frame(sales)
    grouped = df.groupby("postcode_prefix", sort=True)["price_per_area"]
    summary = pd.DataFrame({
        "mean": grouped.mean(),
        "std": grouped.std(ddof=0),
        "count": grouped.count(),
    })
    summary = summary[summary["count"] >= min_samples]

    return {
        prefix: PrefixPriceStats(
            mean=float(row["mean"]),
            std=float(row["std"]),
            count=int(row["count"]),
        )
        for prefix, row in summary.iterrows()
    }


def classify(z_score: float) -> str:
    return OUTLIER_UNDERPRICED if z_score < 0 else OUTLIER_OVERPRICED


def find_outliers(
    sales: Iterable[Sale],
    threshold: float = DEFAULT_OUTLIER_THRESHOLD,
    limit: int = DEFAULT_OUTLIER_LIMIT,
    start: Optional[str] = None,
) -> OutlierReport:
    """Detect over- and under-priced sales.

    Args:
        sales: Candidate sales; ineligible ones are filtered out here.
        threshold: Flag sales with |z| strictly greater than this.
        limit: Maximum number of outliers returned.
        start: Optional inclusive ``YYYYMMDD`` settlement date lower bound.

    Returns:
        Report with the strongest outliers first. Counts cover every
        outlier found, before ``limit`` is applied.
    """
    candidates = eligible_sales(sales, start)
    prefix_stats = compute_prefix_stats(candidates)

    flagged = []
    for sale in candidates:
        stats = prefix_stats.get(sale.postcode_prefix)
        if stats is None or stats.std == 0:
            continue

        z_score = (sale.price_per_area - stats.mean) / stats.std
        if abs(z_score) <= threshold:
            continue

        flagged.append(OutlierRecord(
            sale=sale,
            expected_price_per_area=round_half_up(stats.mean),
            z_score=round_half_up(z_score, 2),
            outlier_type=classify(z_score),
            deviation_pct=round_half_up((sale.price_per_area - stats.mean) / stats.mean * 100),
        ))

    # Ranked on the reported two-decimal score; ties keep scan order
    outliers = sorted(flagged, key=lambda record: abs(record.z_score), reverse=True)
    underpriced = sum(1 for o in outliers if o.outlier_type == OUTLIER_UNDERPRICED)

    logger.info(
        "Found %d outliers across %d prefixes (threshold %.2f)",
        len(outliers), len(prefix_stats), threshold,
    )
    return OutlierReport(
        outliers=outliers[:limit],
        total_count=len(outliers),
        underpriced_count=underpriced,
        overpriced_count=len(outliers) - underpriced,
        prefix_stats=prefix_stats,
    )
