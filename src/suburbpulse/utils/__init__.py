"""
Utility modules for Suburb Pulse.

Provides unified implementations for common parsing and rounding operations.
"""

from suburbpulse.utils.date_parser import (
    parse_date,
    to_date_key,
    month_key,
)
from suburbpulse.utils.numbers import round_half_up
from suburbpulse.utils.price_parser import (
    extract_price_value,
    parse_area,
    calculate_price_per_area,
    format_price,
)

__all__ = [
    "parse_date",
    "to_date_key",
    "month_key",
    "round_half_up",
    "extract_price_value",
    "parse_area",
    "calculate_price_per_area",
    "format_price",
]
