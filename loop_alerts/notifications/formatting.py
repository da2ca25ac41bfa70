"""Number and duration formatting for alert text.

AlertFormatter is injected into the composer so a deployment can swap
in locale-specific wording; the default renders US English.
"""

import math
from datetime import timedelta

from loop_alerts.notifications.constants import MAX_FRACTION_DIGITS

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3600


def _as_seconds(interval: timedelta | float) -> float:
    if isinstance(interval, timedelta):
        return interval.total_seconds()
    return float(interval)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


class AlertFormatter:
    """Decimal numbers and single-unit durations.

    Durations use the largest unit among {hour, minute} and drop the
    remainder, so 80 minutes reads "1 hour".
    """

    def number(self, value: float) -> str:
        """Format a decimal: grouping separators, trailing zeros dropped.

        >>> AlertFormatter().number(1234.5)
        '1,234.5'
        >>> AlertFormatter().number(80.0)
        '80'
        """
        text = f"{value:,.{MAX_FRACTION_DIGITS}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        if text == "-0":
            text = "0"
        return text

    def duration(self, interval: timedelta | float) -> str | None:
        """Format an interval as one lower-case unit, e.g. "20 minutes".

        Returns None when the interval cannot be formatted: negative,
        NaN, infinite, or not a number at all.
        """
        try:
            seconds = _as_seconds(interval)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(seconds) or seconds < 0:
            return None

        hours = int(seconds // _SECONDS_PER_HOUR)
        if hours >= 1:
            return _plural(hours, "hour")
        return _plural(int(seconds // _SECONDS_PER_MINUTE), "minute")

    def time_remaining(self, interval: timedelta | float) -> str | None:
        """Format an approximate remaining time, e.g. "About 1 hour remaining"."""
        phrase = self.duration(interval)
        if phrase is None:
            return None
        return f"About {phrase} remaining"
