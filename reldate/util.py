"""Utility constants and helpers for reldate.

Time unit constants represent durations in seconds. Months and years are
fixed approximations (30 and 365 days) with no calendar awareness.
"""

import math

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
MONTH = 2592000  # 30 days
YEAR = 31536000  # 365 days
DECADE = 10 * YEAR


def round_toward_zero(value: float) -> int:
    """Floor non-negative values and ceil negative ones."""
    return math.ceil(value) if value < 0 else math.floor(value)


def scale(seconds: float, unit: int) -> int:
    """Count whole `unit`s in `seconds`, rounding toward zero.

    Integer input is divided exactly so large deltas keep full precision.
    """
    if isinstance(seconds, int):
        count = abs(seconds) // unit
        return -count if seconds < 0 else count
    return round_toward_zero(seconds / unit)
