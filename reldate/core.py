import logging
import math
from datetime import date, datetime, time, timezone
from numbers import Real
from time import time as current_time
from typing import Any, Literal

from reldate.breakdown import decompose
from reldate.formatter import Formatter

logger = logging.getLogger(__name__)


class InvalidInput(ValueError):
    """Raised when a timestamp cannot be read as a number of epoch seconds."""


def coerce_timestamp(value: Any, name: Literal["timestamp", "now"] = "timestamp") -> float:
    """Convert a timestamp argument to epoch seconds.

    Accepts:
    - int / float: Passed through as-is (Unix seconds)
    - str: Numeric strings such as "1700000000" or "12.5"
    - datetime: Must be timezone-aware, converted to timestamp
    - date: Converted to midnight UTC

    Raises:
        InvalidInput: If the value is not numeric, not finite, or a naive datetime
    """
    if isinstance(value, bool):
        raise InvalidInput(
            f"{name} must be a number of epoch seconds, not a bool.\n"
            f"Got: {value!r}"
        )
    if isinstance(value, int):
        return value
    if isinstance(value, Real):
        seconds = float(value)
    elif isinstance(value, str):
        try:
            seconds = float(value.strip())
        except ValueError:
            raise InvalidInput(
                f"{name} is not numeric: {value!r}\n"
                f'Hint: pass epoch seconds, e.g. 1700000000 or "1700000000"'
            ) from None
    elif isinstance(value, datetime):
        if value.tzinfo is None:
            raise InvalidInput(
                f"{name} must be a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return value.timestamp()
    elif isinstance(value, date):
        return int(datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp())
    else:
        raise InvalidInput(
            f"{name} must be int, float, numeric str, datetime, or date.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )

    if not math.isfinite(seconds):
        raise InvalidInput(f"{name} must be finite, got {value!r}")
    return seconds


def relative_date(formatter: Formatter, timestamp: Any, now: Any = None) -> str:
    """Describe `timestamp` relative to `now` using `formatter`.

    Args:
        formatter: Any object with a ``format(breakdown) -> str`` method
        timestamp: Moment to describe (epoch seconds, numeric str, datetime, date)
        now: Reference moment, defaults to the current time

    Returns:
        The rendered phrase, e.g. "5 minutes ago" or "2 hours from now"
    """
    if isinstance(formatter, str) or not callable(getattr(formatter, "format", None)):
        raise TypeError(
            f"formatter must provide format(breakdown) -> str.\n"
            f"Got {type(formatter).__name__!r}\n"
            f"Hint: relative_date(StandardFormatter(), timestamp)"
        )

    seconds = coerce_timestamp(timestamp, "timestamp")
    reference = int(current_time()) if now is None else coerce_timestamp(now, "now")
    logger.debug("Formatting timestamp %s against now=%s", seconds, reference)

    return formatter.format(decompose(reference, seconds))
