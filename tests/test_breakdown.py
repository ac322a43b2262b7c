"""Tests for time delta decomposition."""

import math

import pytest

from reldate import DAY, HOUR, MONTH, YEAR, TimeBreakdown, decompose, round_toward_zero
from reldate.breakdown import extract
from reldate.util import scale


def test_round_toward_zero_floors_non_negative_values():
    """Test that non-negative ratios are floored."""
    assert round_toward_zero(0.0) == 0
    assert round_toward_zero(1.5) == 1
    assert round_toward_zero(2.0) == 2
    assert round_toward_zero(2.999) == 2


def test_round_toward_zero_ceils_negative_values():
    """Test that negative ratios are ceiled."""
    assert round_toward_zero(-1.5) == -1
    assert round_toward_zero(-2.0) == -2
    assert round_toward_zero(-0.2) == 0


def test_scale_keeps_integer_precision():
    """Test that integer deltas are divided exactly."""
    huge = 10**20 + 59
    assert scale(huge, 60) == (10**20 + 59) // 60
    assert scale(-huge, 60) == -((10**20 + 59) // 60)
    assert scale(-90, 60) == -1
    assert scale(90.9, 60) == 1


def test_extract_returns_count_and_remainder():
    """Test that extract threads the remainder explicitly."""
    assert extract(3 * DAY + 5, DAY) == (3, 5)
    assert extract(-(3 * DAY + 5), DAY) == (-3, -5)


def test_relative_seconds_is_raw_delta():
    """Test that relative.seconds is exactly now - timestamp."""
    for now, timestamp in [(1000000, 999910), (0, 7200), (5, 5), (10**12, 3)]:
        breakdown = decompose(now, timestamp)
        assert breakdown.relative.seconds == now - timestamp
        assert breakdown.total.seconds == now - timestamp
        assert breakdown.seconds == now - timestamp


def test_ninety_seconds_is_one_minute():
    """Test that 90 seconds floors to a single minute."""
    breakdown = decompose(1000000, 1000000 - 90)

    assert breakdown.relative.minutes == 1
    assert breakdown.relative.hours == 0
    assert breakdown.relative.days == 0
    assert breakdown.relative.months == 0
    assert breakdown.relative.years == 0


def test_total_and_relative_fields():
    """Test both groups for 400 days, 5 hours and 7 minutes."""
    delta = 400 * DAY + 5 * HOUR + 7 * 60
    breakdown = decompose(delta, 0)

    # Sequential extraction: 1 year, then 1 month, then 5 days
    assert breakdown.total.years == 1
    assert breakdown.total.months == 1
    assert breakdown.total.days == 5
    # Cumulative counts from the raw delta
    assert breakdown.total.hours == 9605
    assert breakdown.total.minutes == 576307

    assert breakdown.relative.years == 1
    assert breakdown.relative.months == 13
    assert breakdown.relative.days == 400
    assert breakdown.relative.hours == 9605
    assert breakdown.relative.minutes == 576307


def test_future_delta_is_negative_everywhere():
    """Test that a future timestamp yields negative counts."""
    delta = 400 * DAY + 5 * HOUR + 7 * 60
    breakdown = decompose(0, delta)

    assert breakdown.total.years == -1
    assert breakdown.total.months == -1
    assert breakdown.total.days == -5
    assert breakdown.relative.months == -13
    assert breakdown.relative.days == -400
    assert breakdown.relative.hours == -9605
    assert breakdown.relative.seconds == -delta


def test_two_hours_in_future():
    """Test that 7200 seconds ahead is -2 hours."""
    breakdown = decompose(1000000, 1000000 + 7200)

    assert breakdown.relative.hours == -2
    assert breakdown.relative.days == 0


def test_relative_months_includes_years():
    """Test that relative.months counts months across whole years."""
    for delta in [0, 59, 45 * DAY, 360 * DAY, 3 * YEAR + 2 * MONTH, -(7 * YEAR + 40 * DAY)]:
        breakdown = decompose(delta, 0)
        assert breakdown.relative.months == (
            breakdown.total.months + 12 * breakdown.total.years
        )


def test_three_hundred_sixty_days_is_not_a_year():
    """Test that the 365-day year is used for extraction."""
    breakdown = decompose(360 * DAY, 0)

    assert breakdown.relative.years == 0
    assert breakdown.relative.months == 12


def test_float_delta_keeps_precision_in_seconds():
    """Test that fractional deltas are only rounded in derived counts."""
    breakdown = decompose(100.5, 10)

    assert breakdown.relative.seconds == 90.5
    assert breakdown.relative.minutes == 1


@pytest.mark.parametrize(
    "now, timestamp",
    [("abc", 5), (None, None), (10, "x"), (math.nan, 0), (math.inf, 0)],
)
def test_invalid_delta_becomes_zero(now, timestamp):
    """Test that non-numeric deltas are coerced to zero seconds."""
    breakdown = decompose(now, timestamp)

    assert breakdown.relative.seconds == 0
    assert breakdown.total.years == 0
    assert breakdown.relative.months == 0


def test_breakdown_is_immutable():
    """Test that a breakdown cannot be modified after creation."""
    breakdown = decompose(100, 0)

    assert isinstance(breakdown, TimeBreakdown)
    with pytest.raises(AttributeError):
        breakdown.relative.minutes = 5  # type: ignore[misc]


def test_units_get_rejects_unknown_granularity():
    """Test that looking up an unknown granularity raises KeyError."""
    breakdown = decompose(100, 0)

    assert breakdown.relative.get("minutes") == 1
    with pytest.raises(KeyError, match="Unknown granularity"):
        breakdown.relative.get("weeks")
