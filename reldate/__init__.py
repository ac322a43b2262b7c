from .breakdown import TimeBreakdown, Units, decompose
from .core import InvalidInput, coerce_timestamp, relative_date
from .formatter import Formatter, FormatterConfig, StandardFormatter, UnitLabel
from .util import DAY, DECADE, HOUR, MINUTE, MONTH, SECOND, YEAR, round_toward_zero

# Shared formatter with the default English settings; its config is read-only
standard: StandardFormatter = StandardFormatter()

__all__ = [
    "TimeBreakdown",
    "Units",
    "decompose",
    "InvalidInput",
    "coerce_timestamp",
    "relative_date",
    "Formatter",
    "FormatterConfig",
    "StandardFormatter",
    "UnitLabel",
    "round_toward_zero",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "MONTH",
    "YEAR",
    "DECADE",
    "standard",
]
