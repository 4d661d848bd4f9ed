"""History reconstruction — pure functions, no I/O."""
from .activity import (
    ActivityTransaction,
    ActivityType,
    build_activity_feed,
    build_borrow_transactions,
    build_pool_transactions,
    filter_activity,
)
from .periods import TimePeriod, filter_by_time_period
from .pipeline import build_aggregated_history
from .pool_history import build_pool_series

__all__ = [
    "ActivityTransaction",
    "ActivityType",
    "TimePeriod",
    "build_activity_feed",
    "build_aggregated_history",
    "build_borrow_transactions",
    "build_pool_series",
    "build_pool_transactions",
    "filter_activity",
    "filter_by_time_period",
]
