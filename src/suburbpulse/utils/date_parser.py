"""
Unified Date Parsing Utilities

Settlement dates are stored as sortable ``YYYYMMDD`` keys so window filters
are plain string comparisons. These helpers normalize the formats seen in
sale extracts into that key.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from suburbpulse.logging_config import get_logger

logger = get_logger(__name__)

DATE_KEY_FORMAT = "%Y%m%d"

# Common date format patterns
DATE_PATTERNS = [
    # Compact key: 20250115
    (r"^\d{8}$", "%Y%m%d"),
    # ISO format: 2025-01-15
    (r"^\d{4}-\d{2}-\d{2}$", "%Y-%m-%d"),
    # Australian format: 15/01/2025
    (r"^\d{1,2}/\d{1,2}/\d{4}$", "%d/%m/%Y"),
    # Day month year: 15 Jan 2025
    (r"^\d{1,2}\s+[A-Za-z]{3}\s+\d{4}$", "%d %b %Y"),
]

DateLike = Union[str, int, date, datetime, None]


def parse_date(value: DateLike) -> Optional[datetime]:
    """Parse a settlement date into a datetime object.

    Handles:
    - Compact keys: 20250115 (string or integer)
    - ISO format: 2025-01-15, 2025-01-15T10:30:00
    - Australian format: 15/01/2025
    - Day month year: 15 Jan 2025

    Args:
        value: Date value to parse.

    Returns:
        datetime object or None if parsing fails.

    Example:
        >>> parse_date("20250115")
        datetime(2025, 1, 15, 0, 0)
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    date_str = str(value).strip()
    if not date_str:
        return None

    # Drop a time component from ISO timestamps
    if "T" in date_str:
        date_str = date_str.split("T")[0]

    for pattern, fmt in DATE_PATTERNS:
        if re.match(pattern, date_str):
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue

    logger.debug("Could not parse date: %s", date_str)
    return None


def to_date_key(value: DateLike) -> Optional[str]:
    """Normalize a date value to a ``YYYYMMDD`` key.

    Example:
        >>> to_date_key("2025-01-15")
        "20250115"
    """
    dt = parse_date(value)
    if dt:
        return dt.strftime(DATE_KEY_FORMAT)
    return None


def month_key(date_key: str) -> str:
    """Return the ``YYYYMM`` month of a ``YYYYMMDD`` key."""
    return date_key[:6]


def year_start_key(year: int) -> str:
    """Return the ``YYYYMMDD`` key for the first day of ``year``."""
    return f"{year:04d}0101"
