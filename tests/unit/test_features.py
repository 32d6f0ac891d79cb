"""
Unit tests for the prediction feature builder.
"""

import pytest

from suburbpulse.analytics.features import (
    FEATURE_COLUMNS,
    build_feature_table,
    monthly_prefix_frame,
)


def _sales(make_sale, month_day, values, postcode="2154"):
    return [
        make_sale(price=ppa * 500, land_area=500.0, postcode=postcode, settlement_date=month_day)
        for ppa in values
    ]


class TestMonthlyPrefixFrame:
    """Tests for monthly_prefix_frame function."""

    def test_columns_and_summary(self, make_sale):
        sales = _sales(make_sale, "20250310", [1000, 2000, 3000])
        frame = monthly_prefix_frame(sales)

        assert list(frame.columns) == FEATURE_COLUMNS
        assert len(frame) == 1
        row = frame.iloc[0]
        assert row["postcode_prefix"] == "215"
        assert row["month"] == "202503"
        assert row["sales_count"] == 3
        assert row["avg_price_per_area"] == pytest.approx(2000.0)
        assert row["min_price_per_area"] == 1000
        assert row["max_price_per_area"] == 3000

    def test_months_with_two_sales_dropped(self, make_sale):
        sales = _sales(make_sale, "20250310", [1000, 2000])
        assert monthly_prefix_frame(sales).empty

    def test_empty_input(self):
        frame = monthly_prefix_frame([])
        assert frame.empty
        assert list(frame.columns) == FEATURE_COLUMNS


class TestBuildFeatureTable:
    """Tests for build_feature_table function."""

    def test_ordered_by_prefix_then_month(self, make_sale):
        sales = (
            _sales(make_sale, "20250410", [1000] * 3, postcode="2760")
            + _sales(make_sale, "20250510", [1200] * 3, postcode="2154")
            + _sales(make_sale, "20250110", [1100] * 4, postcode="2153")
            + _sales(make_sale, "20250210", [900] * 3, postcode="2760")
        )
        rows = build_feature_table(sales)
        assert [(r.postcode_prefix, r.month) for r in rows] == [
            ("215", "202501"),
            ("215", "202505"),
            ("276", "202502"),
            ("276", "202504"),
        ]
        assert rows[0].sales_count == 4

    def test_skips_sales_without_price_per_area(self, make_sale):
        sales = _sales(make_sale, "20250310", [1000, 2000]) + [
            make_sale(land_area=0, settlement_date="20250311")
        ]
        assert build_feature_table(sales) == []

    def test_history_start(self, make_sale):
        sales = _sales(make_sale, "20230310", [1000] * 3) + _sales(make_sale, "20240310", [1000] * 3)
        rows = build_feature_table(sales, start="20240101")
        assert [r.month for r in rows] == ["202403"]

    def test_row_types(self, make_sale):
        row = build_feature_table(_sales(make_sale, "20250310", [1000, 1001, 1003]))[0]
        assert isinstance(row.sales_count, int)
        assert isinstance(row.min_price_per_area, int)
        assert row.to_dict()["avg_price_per_area"] == pytest.approx(1001.333, rel=1e-4)
