"""Chart date labels — granularity follows the span of the series."""
from __future__ import annotations

from datetime import datetime, timezone

SECONDS_PER_DAY = 86400
SHORT_SPAN_DAYS = 7


def span_days(first_timestamp: int, last_timestamp: int) -> float:
    """Days between the first and last point of a series."""
    return (last_timestamp - first_timestamp) / SECONDS_PER_DAY


def format_date_smart(timestamp: int, span: float) -> str:
    """Render a chart label for ``timestamp``.

    Series spanning a week or less get the time of day as well:
        "Feb 18 14:30"  (span <= 7 days)
        "Feb 18"        (longer spans)
    """
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    label = f"{dt:%b} {dt.day}"
    if span <= SHORT_SPAN_DAYS:
        return f"{label} {dt:%H:%M}"
    return label
