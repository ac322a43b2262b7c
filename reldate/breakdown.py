"""Decomposition of a signed time delta into calendar-like units.

A positive delta means the timestamp lies in the past relative to "now",
a negative delta means it lies in the future.
"""

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

from reldate.util import DAY, HOUR, MINUTE, MONTH, YEAR, scale

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Units:
    seconds: float
    minutes: int
    hours: int
    days: int
    months: int
    years: int

    def get(self, key: str) -> float:
        """Look up a granularity by name ("seconds", "minutes", ...)."""
        if key not in _FIELDS:
            valid = ", ".join(_FIELDS)
            raise KeyError(f"Unknown granularity: {key!r}\nValid: {valid}")
        return getattr(self, key)


_FIELDS = ("seconds", "minutes", "hours", "days", "months", "years")


@dataclass(frozen=True, kw_only=True)
class TimeBreakdown:
    """Cumulative (`total`) and remainder-style (`relative`) views of a delta.

    `relative.months` counts every month in the delta, including the ones
    already covered by `relative.years`. `relative.seconds` and
    `total.seconds` are the raw, unrounded delta.
    """

    total: Units
    relative: Units

    @property
    def seconds(self) -> float:
        return self.relative.seconds


def extract(seconds: float, unit: int) -> tuple[int, float]:
    """Split `seconds` into whole `unit`s and the leftover seconds."""
    count = scale(seconds, unit)
    return count, seconds - count * unit


def _as_delta(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        logger.debug("Non-numeric delta %r treated as 0 seconds", value)
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        logger.debug("Non-finite delta %r treated as 0 seconds", value)
        return 0
    return value if isinstance(value, int) else float(value)


def decompose(now: float, timestamp: float) -> TimeBreakdown:
    """Break `now - timestamp` down into years, months, days, hours and minutes."""
    try:
        delta = _as_delta(now - timestamp)
    except TypeError:
        logger.debug("Cannot subtract %r from %r, using 0 seconds", timestamp, now)
        delta = 0

    years, remainder = extract(delta, YEAR)
    months, remainder = extract(remainder, MONTH)
    days, _ = extract(remainder, DAY)

    total = Units(
        seconds=delta,
        minutes=scale(delta, MINUTE),
        hours=scale(delta, HOUR),
        days=days,
        months=months,
        years=years,
    )
    relative = Units(
        seconds=delta,
        minutes=scale(delta, MINUTE),
        hours=scale(delta, HOUR),
        days=scale(delta, DAY),
        months=months + 12 * years,
        years=years,
    )
    return TimeBreakdown(total=total, relative=relative)
