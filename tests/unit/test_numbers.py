"""
Unit tests for numbers module.
"""

import pytest

from suburbpulse.utils.numbers import percentile_of_index, round_half_up


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1

    def test_negative_halves_round_towards_positive(self):
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.6) == -3

    def test_returns_int(self):
        assert isinstance(round_half_up(3.2), int)

    def test_decimal_places(self):
        assert round_half_up(1.234, 2) == 1.23
        assert round_half_up(-1.5, 1) == -1.5


class TestPercentileOfIndex:
    """Tests for percentile_of_index function."""

    def test_bounds(self):
        assert percentile_of_index(0, 5) == 0
        assert percentile_of_index(4, 5) == 100

    def test_middle(self):
        assert percentile_of_index(1, 3) == 50
        assert percentile_of_index(1, 4) == 33

    def test_single_item_rejected(self):
        with pytest.raises(ValueError):
            percentile_of_index(0, 1)
