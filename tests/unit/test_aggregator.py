"""
Unit tests for the suburb aggregator.
"""

from suburbpulse.analytics.aggregator import (
    build_suburb_aggregates,
    growth_percent,
    upper_median,
)
from suburbpulse.config import AnalysisWindow


class TestUpperMedian:
    """Tests for upper_median function."""

    def test_even_count_takes_upper_middle(self):
        assert upper_median([100, 200, 300, 400]) == 300

    def test_odd_count(self):
        assert upper_median([100, 200, 300]) == 200

    def test_single(self):
        assert upper_median([250]) == 250

    def test_empty(self):
        assert upper_median([]) is None


class TestGrowthPercent:
    """Tests for growth_percent function."""

    def test_positive_growth(self):
        assert growth_percent(1100000, 1000000) == 10.0

    def test_negative_growth(self):
        assert growth_percent(900000, 1000000) == -10.0

    def test_rounds_to_one_decimal(self):
        # 2/3 of a percent -> 0.7
        assert growth_percent(1006667, 1000000) == 0.7

    def test_missing_baseline_is_zero(self):
        assert growth_percent(1000000, None) == 0
        assert growth_percent(1000000, 0) == 0


class TestBuildSuburbAggregates:
    """Tests for build_suburb_aggregates function."""

    def test_five_sales_produce_a_row(self, suburb_sales, window):
        sales = suburb_sales([100, 200, 300, 400, 500])
        aggregates = build_suburb_aggregates(sales, window)
        assert len(aggregates) == 1
        assert aggregates[0].sales_count == 5

    def test_four_sales_are_excluded(self, suburb_sales, window):
        sales = suburb_sales([100, 200, 300, 400])
        assert build_suburb_aggregates(sales, window) == []

    def test_summary_statistics(self, suburb_sales, window):
        sales = suburb_sales([500000, 700000, 900000, 1100000, 1300000, 1600000])
        agg = build_suburb_aggregates(sales, window)[0]

        assert agg.suburb == "CASTLE HILL"
        assert agg.postcode == "2154"
        assert agg.total_value == 6100000
        assert agg.median_price == 1100000
        assert agg.avg_price == 1016667
        assert agg.min_price == 500000
        assert agg.max_price == 1600000
        assert agg.momentum_score is None

    def test_avg_price_per_area_skips_unknown_area(self, suburb_sales, make_sale, window):
        sales = suburb_sales([1000000] * 4, land_area=500.0)
        sales.append(make_sale(price=3000000, land_area=0))
        agg = build_suburb_aggregates(sales, window)[0]
        assert agg.avg_price_per_area == 2000

    def test_avg_price_per_area_null_without_any_area(self, suburb_sales, window):
        sales = suburb_sales([1000000] * 5, land_area=0)
        agg = build_suburb_aggregates(sales, window)[0]
        assert agg.avg_price_per_area is None

    def test_growth_against_prior_year(self, suburb_sales, window):
        current = suburb_sales([1100000] * 5)
        prior = suburb_sales([900000, 1000000, 1000000], settlement_date="20240610")
        agg = build_suburb_aggregates(current + prior, window)[0]

        assert agg.prior_sales_count == 3
        assert agg.prior_median_price == 1000000
        assert agg.growth_pct == 10.0

    def test_growth_zero_without_prior_sales(self, suburb_sales, window):
        agg = build_suburb_aggregates(suburb_sales([1100000] * 5), window)[0]
        assert agg.prior_sales_count == 0
        assert agg.prior_median_price is None
        assert agg.growth_pct == 0

    def test_prior_sales_do_not_count_towards_minimum(self, suburb_sales, window):
        current = suburb_sales([1000000] * 4)
        prior = suburb_sales([1000000] * 10, settlement_date="20240610")
        assert build_suburb_aggregates(current + prior, window) == []

    def test_sales_before_prior_window_are_ignored(self, suburb_sales, window):
        current = suburb_sales([1000000] * 5)
        old = suburb_sales([500000] * 5, settlement_date="20230610")
        agg = build_suburb_aggregates(current + old, window)[0]
        assert agg.prior_sales_count == 0

    def test_groups_by_suburb_and_postcode(self, suburb_sales, window):
        sales = (
            suburb_sales([1000000] * 5, suburb="CASTLE HILL", postcode="2154")
            + suburb_sales([900000] * 5, suburb="BAULKHAM HILLS", postcode="2153")
            + suburb_sales([800000] * 5, suburb="CASTLE HILL", postcode="2155")
        )
        aggregates = build_suburb_aggregates(sales, window)
        assert [agg.key for agg in aggregates] == [
            ("BAULKHAM HILLS", "2153"),
            ("CASTLE HILL", "2154"),
            ("CASTLE HILL", "2155"),
        ]

    def test_custom_window(self, suburb_sales):
        window = AnalysisWindow(current_start="20250701", prior_start="20240701")
        first_half = suburb_sales([1000000] * 5, settlement_date="20250301")
        second_half = suburb_sales([1200000] * 5, settlement_date="20250801")
        agg = build_suburb_aggregates(first_half + second_half, window)[0]

        assert agg.sales_count == 5
        assert agg.median_price == 1200000
        assert agg.prior_median_price == 1000000
        assert agg.growth_pct == 20.0
