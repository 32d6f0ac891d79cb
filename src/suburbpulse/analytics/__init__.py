"""
Market analytics for suburb statistics, momentum and outliers.

Provides the aggregation pipeline (aggregator + momentum scorer) and the
read-side outlier and prediction-feature computations.
"""

from suburbpulse.analytics.service import (
    compute_suburb_aggregates,
    rank_suburbs,
    suburb_detail,
    detect_outliers,
    build_prediction_features,
)

__all__ = [
    "compute_suburb_aggregates",
    "rank_suburbs",
    "suburb_detail",
    "detect_outliers",
    "build_prediction_features",
]
