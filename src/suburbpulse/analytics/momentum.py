"""
Momentum Scorer

Ranks well-traded suburbs on growth, volume and (inverted) price and blends
the three percentiles into a single 0-100 momentum score.
"""

from typing import Dict, List, Sequence

from suburbpulse.core.constants import (
    MIN_MOMENTUM_SALES,
    MOMENTUM_WEIGHTS,
    SINGLE_SUBURB_PERCENTILE,
)
from suburbpulse.core.models import SuburbAggregate
from suburbpulse.logging_config import get_logger
from suburbpulse.utils.numbers import percentile_of_index, round_half_up

logger = get_logger(__name__)


def first_match_percentiles(values: Sequence[float], descending: bool = False) -> List[int]:
    """Percentile of each value by its position in the sorted list.

    Tied values all take the position of the first equal element, so ties
    share the lowest percentile of their run. With a single value the
    percentile is fixed at 100.

    Args:
        values: Metric values in input order.
        descending: Rank highest value first (used for inverted metrics).

    Returns:
        Percentiles aligned with ``values``.
    """
    size = len(values)
    if size == 0:
        return []
    if size == 1:
        return [SINGLE_SUBURB_PERCENTILE]

    first_index: Dict[float, int] = {}
    for idx, value in enumerate(sorted(values, reverse=descending)):
        first_index.setdefault(value, idx)

    return [percentile_of_index(first_index[value], size) for value in values]


def momentum_score(growth_pct: int, volume_pct: int, price_pct: int) -> int:
    """Blend the three percentiles with the configured weights."""
    return round_half_up(
        growth_pct * MOMENTUM_WEIGHTS["growth"]
        + volume_pct * MOMENTUM_WEIGHTS["volume"]
        + price_pct * MOMENTUM_WEIGHTS["price"]
    )


def score_momentum(
    aggregates: List[SuburbAggregate],
    min_sales: int = MIN_MOMENTUM_SALES,
) -> int:
    """Set ``momentum_score`` on every aggregate with enough sales.

    Aggregates below ``min_sales`` are reset to None. Lower median prices
    rank higher on the price axis.

    Returns:
        Number of suburbs scored.
    """
    eligible = []
    for agg in aggregates:
        if agg.sales_count >= min_sales:
            eligible.append(agg)
        else:
            agg.momentum_score = None

    if not eligible:
        logger.info("No suburbs with %d+ sales to score", min_sales)
        return 0

    growth = first_match_percentiles([a.growth_pct for a in eligible])
    volume = first_match_percentiles([a.sales_count for a in eligible])
    price = first_match_percentiles([a.median_price for a in eligible], descending=True)

    for agg, g, v, p in zip(eligible, growth, volume, price):
        agg.momentum_score = momentum_score(g, v, p)

    logger.info("Calculated momentum scores for %d suburbs", len(eligible))
    return len(eligible)
