"""Time-period filter for chart series."""
from __future__ import annotations

import time
from enum import Enum
from typing import Sequence

from ..models import ChartDataPoint
from .dates import SECONDS_PER_DAY


class TimePeriod(str, Enum):
    WEEK = "1W"
    MONTH = "1M"
    QUARTER = "3M"
    ALL = "ALL"


_PERIOD_DAYS = {
    TimePeriod.WEEK: 7,
    TimePeriod.MONTH: 30,
    TimePeriod.QUARTER: 90,
}


def filter_by_time_period(
    series: Sequence[ChartDataPoint],
    period: TimePeriod | str,
    now: float | None = None,
) -> list[ChartDataPoint]:
    """Keep the points that fall inside the trailing ``period`` window."""
    period = TimePeriod(period)
    if period is TimePeriod.ALL or not series:
        return list(series)

    if now is None:
        now = time.time()
    cutoff = now - _PERIOD_DAYS[period] * SECONDS_PER_DAY
    return [point for point in series if point.timestamp >= cutoff]
