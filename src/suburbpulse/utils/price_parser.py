"""
Unified Price and Area Parsing Utilities

Provides consistent handling of purchase prices and land areas coming out of
sale extracts, plus the derived price-per-area figure.
"""

import math
import re
from typing import Optional, Union

from suburbpulse.logging_config import get_logger
from suburbpulse.utils.numbers import round_half_up

logger = get_logger(__name__)

Numeric = Union[str, int, float, None]


def extract_price_value(price: Numeric) -> Optional[int]:
    """Extract an integer purchase price.

    Handles plain numbers and strings like "1250000", "$1,250,000" or
    "1250000.0". Zero, negative and unparseable prices return None.

    Example:
        >>> extract_price_value("$1,250,000")
        1250000
    """
    if price is None:
        return None

    if isinstance(price, (int, float)):
        if isinstance(price, float) and math.isnan(price):
            return None
        value = int(price)
        return value if value > 0 else None

    price_str = str(price).strip()
    if not price_str:
        return None

    match = re.search(r"(-?)\s*\$?\s*(-?)([\d,]+(?:\.\d+)?)", price_str)
    if match:
        sign = "-" if match.group(1) or match.group(2) else ""
        try:
            value = int(float(sign + match.group(3).replace(",", "")))
        except ValueError:
            value = 0
        if value > 0:
            return value

    logger.debug("Could not extract price from: %s", price_str)
    return None


def parse_area(area: Numeric) -> float:
    """Parse a land area into square metres.

    Missing or unparseable areas return 0.0, which means "unknown".

    Example:
        >>> parse_area("450.5")
        450.5
        >>> parse_area("")
        0.0
    """
    if area is None:
        return 0.0

    if isinstance(area, (int, float)):
        if isinstance(area, float) and math.isnan(area):
            return 0.0
        return float(area) if area > 0 else 0.0

    match = re.search(r"(-?\d+(?:\.\d+)?)", str(area))
    if match:
        value = float(match.group(1))
        return value if value > 0 else 0.0
    return 0.0


def calculate_price_per_area(price: Optional[int], land_area: Optional[float]) -> Optional[int]:
    """Calculate price per square metre, rounded to whole currency units.

    Returns:
        Price per square metre, or None when either side is missing or zero.
    """
    if price is None or price <= 0:
        return None
    if land_area is None or land_area <= 0:
        return None
    return round_half_up(price / land_area)


def format_price(price: Union[int, float, None], compact: bool = False) -> str:
    """Format a price value as a string.

    Example:
        >>> format_price(1500000)
        "$1,500,000"
        >>> format_price(1500000, compact=True)
        "$1.5M"
    """
    if price is None:
        return "-"

    price = int(price)

    if compact:
        if price >= 1_000_000:
            value = price / 1_000_000
            if value == int(value):
                return f"${int(value)}M"
            return f"${value:.1f}M".rstrip("0").rstrip(".")
        elif price >= 1_000:
            value = price / 1_000
            if value == int(value):
                return f"${int(value)}K"
            return f"${value:.1f}K".rstrip("0").rstrip(".")

    return f"${price:,}"
