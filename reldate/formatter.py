"""Formatters that turn a TimeBreakdown into a relative-time phrase."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import Any

from typing_extensions import override

from reldate.breakdown import TimeBreakdown
from reldate.util import round_toward_zero

logger = logging.getLogger(__name__)

PLACEHOLDER = "{{time}}"

# Evaluation order, largest granularity first
GRANULARITIES = (
    "decades",
    "years",
    "months",
    "days",
    "hours",
    "minutes",
    "seconds",
)

PHRASES = ("past", "future", "now_past", "now_future")

SECTIONS = ("units", "thresholds", "format")


class Formatter(ABC):

    @abstractmethod
    def format(self, breakdown: TimeBreakdown) -> str:
        """Render a breakdown as a human-readable string."""
        pass


@dataclass(frozen=True, kw_only=True)
class UnitLabel:
    singular: str
    plural: str

    @classmethod
    def of(cls, value: "UnitLabel | str | Mapping[str, str]") -> "UnitLabel":
        """Build a label from a bare string or a singular/plural mapping."""
        if isinstance(value, UnitLabel):
            return value
        if isinstance(value, str):
            return cls(singular=value, plural=value + "s")
        if isinstance(value, Mapping):
            missing = [k for k in ("singular", "plural") if k not in value]
            if missing:
                raise ValueError(
                    f"Unit label mapping is missing {', '.join(missing)}.\n"
                    f"Got: {dict(value)!r}\n"
                    f'Hint: use {{"singular": "child", "plural": "children"}}'
                )
            return cls(singular=str(value["singular"]), plural=str(value["plural"]))
        raise ValueError(
            f"Unit label must be a string or a singular/plural mapping.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )

    def pick(self, amount: float) -> str:
        return self.singular if amount == 1 else self.plural


_DEFAULT_UNITS = {
    "seconds": "second",
    "minutes": "minute",
    "hours": "hour",
    "days": "day",
    "months": "month",
    "years": "year",
    "decades": "decade",
}

_DEFAULT_THRESHOLDS: dict[str, float | None] = {
    "seconds": 5,
    "minutes": 60,
    "hours": 3600,
    "days": 86400,
    "months": 2592000,
    "years": 31104000,
    "decades": None,
}

_DEFAULT_FORMAT = {
    "past": "{{time}} ago",
    "future": "{{time}} from now",
    "now_past": "just now",
    "now_future": "now",
}


def _check_keys(section: str, given: Mapping[str, Any], valid: tuple[str, ...]) -> None:
    unknown = [k for k in given if k not in valid]
    if unknown:
        raise ValueError(
            f"Unknown {section} key(s): {', '.join(map(repr, unknown))}\n"
            f"Valid keys: {', '.join(valid)}"
        )


def _threshold(key: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(
            f"Threshold for {key!r} must be a number of seconds or None.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Hint: use None or 0 to disable a granularity"
        )
    return value


def _template(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(
            f"Phrase template {key!r} must be a string.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )
    return value


@dataclass(frozen=True, kw_only=True)
class FormatterConfig:
    """Fully resolved formatter settings.

    Built once from the defaults plus caller overrides; the maps are
    read-only views, so a config can be shared between threads.
    """

    units: Mapping[str, UnitLabel]
    thresholds: Mapping[str, float | None]
    format: Mapping[str, str]

    @classmethod
    def resolve(cls, overrides: Mapping[str, Any] | None = None) -> "FormatterConfig":
        """Merge `overrides` over the defaults, key by key within each section."""
        overrides = overrides or {}
        _check_keys("config section", overrides, SECTIONS)

        units = dict(_DEFAULT_UNITS) | dict(overrides.get("units") or {})
        thresholds = dict(_DEFAULT_THRESHOLDS) | dict(overrides.get("thresholds") or {})
        phrases = dict(_DEFAULT_FORMAT) | dict(overrides.get("format") or {})

        _check_keys("unit", units, GRANULARITIES)
        _check_keys("threshold", thresholds, GRANULARITIES)
        _check_keys("format", phrases, PHRASES)

        return cls(
            units=MappingProxyType({k: UnitLabel.of(v) for k, v in units.items()}),
            thresholds=MappingProxyType(
                {k: _threshold(k, v) for k, v in thresholds.items()}
            ),
            format=MappingProxyType({k: _template(k, v) for k, v in phrases.items()}),
        )


def _render_amount(amount: float) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


class StandardFormatter(Formatter):
    """English-style formatter driven by unit labels, thresholds and templates.

    Picks the largest granularity that has a non-zero amount and whose
    threshold (in seconds) is met by the absolute delta, e.g.
    "5 minutes ago" or "2 years from now". When nothing qualifies it falls
    back to the "now" phrases.
    """

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        units: Mapping[str, Any] | None = None,
        thresholds: Mapping[str, Any] | None = None,
        format: Mapping[str, str] | None = None,
    ):
        """
        Initialize a standard formatter.

        Args:
            config: Mapping with optional "units", "thresholds" and "format"
                sections overriding the defaults
            units: Unit label overrides, merged over `config["units"]`
            thresholds: Threshold overrides in seconds (None or 0 disables)
            format: Phrase overrides for "past", "future", "now_past"
                and "now_future"
        """
        merged: dict[str, Any] = {k: dict(v or {}) for k, v in (config or {}).items()}
        for section, extra in (
            ("units", units),
            ("thresholds", thresholds),
            ("format", format),
        ):
            if extra:
                merged[section] = dict(merged.get(section) or {}) | dict(extra)
        self.config: FormatterConfig = FormatterConfig.resolve(merged)

    def _candidates(self, breakdown: TimeBreakdown) -> dict[str, float]:
        relative = breakdown.relative
        amounts: dict[str, float] = {
            key: relative.get(key) for key in GRANULARITIES if key != "decades"
        }
        if self.config.thresholds.get("decades") and relative.years:
            amounts["decades"] = round_toward_zero(relative.years / 10)
        return amounts

    @override
    def format(self, breakdown: TimeBreakdown) -> str:
        seconds = breakdown.relative.seconds
        abs_seconds = abs(seconds)
        amounts = self._candidates(breakdown)

        for key in GRANULARITIES:
            amount = amounts.get(key)
            threshold = self.config.thresholds.get(key)
            if not amount or not threshold:
                continue
            if abs_seconds < threshold:
                continue

            abs_amount = abs(amount)
            phrase = self.config.format["future" if amount < 0 else "past"]
            label = self.config.units[key].pick(abs_amount)
            logger.debug("Rendering %s=%s for delta %ss", key, amount, seconds)
            return phrase.replace(PLACEHOLDER, f"{_render_amount(abs_amount)} {label}")

        return self.config.format["now_future" if seconds < 0 else "now_past"]
