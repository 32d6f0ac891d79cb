"""
Shared Constants for Suburb Pulse

Contains all constant values used across the application.
"""

from typing import Dict, List

# Database table names
TABLE_SALES: str = "sales"
TABLE_SUBURB_STATS: str = "suburb_stats"

# Postcode prefix length used as the geographic bucket for outlier baselines
POSTCODE_PREFIX_LENGTH: int = 3

# Minimum sample sizes
MIN_SUBURB_SALES: int = 5
MIN_MOMENTUM_SALES: int = 10
MIN_PREFIX_SAMPLES: int = 5
MIN_MONTHLY_SALES: int = 3

# Momentum blend weights
MOMENTUM_WEIGHTS: Dict[str, float] = {
    "growth": 0.5,
    "volume": 0.3,
    "price": 0.2,
}

# Percentile assigned when only one suburb is eligible for scoring
SINGLE_SUBURB_PERCENTILE: int = 100

# Outlier detection defaults
DEFAULT_OUTLIER_THRESHOLD: float = 2.0
DEFAULT_OUTLIER_LIMIT: int = 100
API_OUTLIER_LIMIT: int = 200

OUTLIER_UNDERPRICED: str = "underpriced"
OUTLIER_OVERPRICED: str = "overpriced"

# Ranking
RANKABLE_COLUMNS: List[str] = [
    "median_price",
    "sales_count",
    "growth_pct",
    "avg_price_per_area",
    "total_value",
    "momentum_score",
]
DEFAULT_RANK_COLUMN: str = "median_price"
DEFAULT_RANK_LIMIT: int = 100
API_RANK_LIMIT: int = 500

# Suburb detail / search
RECENT_SALES_LIMIT: int = 50
SEARCH_RESULT_LIMIT: int = 20
MIN_SEARCH_QUERY_LENGTH: int = 2
