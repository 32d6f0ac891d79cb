"""
Numeric helpers shared by the analytics modules.
"""

import math
from typing import Union

Number = Union[int, float]


def round_half_up(value: Number, ndigits: int = 0) -> Union[int, float]:
    """Round with .5 going towards positive infinity.

    Python's built-in ``round`` uses banker's rounding, which would make
    ``round(2.5) == 2``. Published figures (medians, percentiles, growth)
    use half-up rounding instead.

    Args:
        value: Value to round.
        ndigits: Decimal places to keep. 0 returns an int.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
        >>> round_half_up(1.2345, 2)
        1.23
    """
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def percentile_of_index(index: int, size: int) -> int:
    """Percentile (0-100) of a zero-based rank index in a list of ``size``."""
    if size <= 1:
        raise ValueError("percentile needs at least two ranked items")
    return round_half_up(index / (size - 1) * 100)
