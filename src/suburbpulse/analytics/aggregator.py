"""
Suburb Aggregator

Groups sales by (suburb, postcode) and derives current-window price
statistics plus year-over-year growth against the prior window.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from suburbpulse.config import AnalysisWindow
from suburbpulse.core.constants import MIN_SUBURB_SALES
from suburbpulse.core.models import Sale, SuburbAggregate
from suburbpulse.logging_config import get_logger
from suburbpulse.utils.numbers import round_half_up

logger = get_logger(__name__)

SuburbKey = Tuple[str, str]


def upper_median(sorted_prices: Sequence[int]) -> Optional[int]:
    """Element at index n // 2 of an ascending list.

    For even n this is the upper of the two middle values, not their
    average: [100, 200, 300, 400] gives 300.
    """
    if not sorted_prices:
        return None
    return sorted_prices[len(sorted_prices) // 2]


def growth_percent(median: int, prior_median: Optional[int]) -> float:
    """Percentage change to one decimal; 0 when there is no usable baseline."""
    if not prior_median:
        return 0.0
    return round_half_up((median - prior_median) * 1000 / prior_median) / 10


def _average_price_per_area(sales: List[Sale]) -> Optional[int]:
    ratios = [sale.price / sale.land_area for sale in sales if sale.has_area]
    if not ratios:
        return None
    return round_half_up(sum(ratios) / len(ratios))


def _group(sales: Iterable[Sale]) -> Dict[SuburbKey, List[Sale]]:
    groups: Dict[SuburbKey, List[Sale]] = defaultdict(list)
    for sale in sales:
        groups[(sale.suburb, sale.postcode)].append(sale)
    return groups


def summarize_suburb(
    suburb: str,
    postcode: str,
    current: List[Sale],
    prior: List[Sale],
) -> SuburbAggregate:
    """Build the statistics row for one suburb from its window splits."""
    prices = sorted(sale.price for sale in current)
    total = sum(prices)
    median = upper_median(prices)

    prior_prices = sorted(sale.price for sale in prior)
    prior_median = upper_median(prior_prices)

    return SuburbAggregate(
        suburb=suburb,
        postcode=postcode,
        sales_count=len(prices),
        total_value=total,
        median_price=median,
        avg_price=round_half_up(total / len(prices)),
        min_price=prices[0],
        max_price=prices[-1],
        avg_price_per_area=_average_price_per_area(current),
        prior_sales_count=len(prior_prices),
        prior_median_price=prior_median,
        growth_pct=growth_percent(median, prior_median),
    )


def build_suburb_aggregates(
    sales: Iterable[Sale],
    window: AnalysisWindow,
    min_sales: int = MIN_SUBURB_SALES,
) -> List[SuburbAggregate]:
    """Aggregate every suburb with at least ``min_sales`` current-window sales.

    Sales outside both windows are ignored. The result is ordered by suburb
    then postcode so identical input always produces identical output.
    """
    current_sales = []
    prior_sales = []
    for sale in sales:
        if sale.settlement_date >= window.current_start:
            current_sales.append(sale)
        if window.prior_start <= sale.settlement_date < window.prior_end:
            prior_sales.append(sale)

    current_groups = _group(current_sales)
    prior_groups = _group(prior_sales)

    aggregates = []
    for key in sorted(current_groups):
        group = current_groups[key]
        if len(group) < min_sales:
            continue
        aggregates.append(
            summarize_suburb(key[0], key[1], group, prior_groups.get(key, []))
        )

    logger.info(
        "Aggregated %d of %d suburbs (min %d sales since %s)",
        len(aggregates), len(current_groups), min_sales, window.current_start,
    )
    return aggregates
