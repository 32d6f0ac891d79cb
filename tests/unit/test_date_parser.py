"""
Unit tests for date_parser module.
"""

from datetime import date, datetime

from suburbpulse.utils.date_parser import (
    parse_date,
    to_date_key,
    month_key,
    year_start_key,
)


class TestParseDate:
    """Tests for parse_date function."""

    def test_compact_key(self):
        assert parse_date("20250115") == datetime(2025, 1, 15)

    def test_integer_key(self):
        assert parse_date(20250115) == datetime(2025, 1, 15)

    def test_iso_format(self):
        assert parse_date("2025-01-15") == datetime(2025, 1, 15)

    def test_iso_with_time(self):
        assert parse_date("2025-01-15T10:30:00") == datetime(2025, 1, 15)

    def test_australian_format(self):
        assert parse_date("15/01/2025") == datetime(2025, 1, 15)

    def test_day_month_year(self):
        assert parse_date("15 Jan 2025") == datetime(2025, 1, 15)

    def test_date_object(self):
        assert parse_date(date(2025, 1, 15)) == datetime(2025, 1, 15)

    def test_empty_and_none(self):
        assert parse_date("") is None
        assert parse_date(None) is None

    def test_invalid(self):
        assert parse_date("not a date") is None
        assert parse_date("20251399") is None


class TestDateKeys:
    """Tests for key helpers."""

    def test_to_date_key(self):
        assert to_date_key("2025-02-03") == "20250203"
        assert to_date_key("3/2/2025") == "20250203"

    def test_to_date_key_invalid(self):
        assert to_date_key("garbage") is None

    def test_month_key(self):
        assert month_key("20250203") == "202502"

    def test_year_start_key(self):
        assert year_start_key(2025) == "20250101"
