"""Point-in-time estimate of the user's deposit and borrow value."""
from __future__ import annotations

import bisect
import logging
from typing import Mapping, Sequence

from ..models import ChartDataPoint, PoolRatio, PoolSnapshot, format_units
from .dates import format_date_smart, span_days
from .parser import rate_to_percent

logger = logging.getLogger(__name__)


def find_latest_before(
    snapshots: Sequence[PoolSnapshot], timestamp: int
) -> PoolSnapshot | None:
    """Latest snapshot with ``timestamp <= target``, or None if all are later.

    ``snapshots`` must be sorted ascending by timestamp.
    """
    idx = bisect.bisect_right(snapshots, timestamp, key=lambda s: s.timestamp)
    if idx == 0:
        return None
    return snapshots[idx - 1]


def _weighted(weighted_sum: float, total: float) -> float:
    return weighted_sum / total if total > 0 else 0.0


def estimate_series(
    grouped: Mapping[str, Sequence[PoolSnapshot]],
    ratios: Mapping[str, PoolRatio],
    timeline: Sequence[int],
) -> tuple[list[ChartDataPoint], list[ChartDataPoint]]:
    """Build the deposit and borrow series, one point per timeline entry.

    Each pool contributes ``pool total * user ratio * price`` from its latest
    snapshot at or before the point; APY and borrow rate are averaged,
    weighted by the user's dollar value in each pool.
    """
    deposit_chart: list[ChartDataPoint] = []
    borrow_chart: list[ChartDataPoint] = []
    if not timeline:
        return deposit_chart, borrow_chart

    span = span_days(timeline[0], timeline[-1])

    for ts in timeline:
        total_user_deposit = 0.0
        total_user_borrow = 0.0
        weighted_deposit_apy = 0.0
        weighted_borrow_rate = 0.0

        for key, snaps in grouped.items():
            snap = find_latest_before(snaps, ts)
            if snap is None:
                continue

            ratio = ratios[key]
            pool_supply = format_units(snap.total_supply_assets, ratio.decimals)
            pool_borrow = format_units(snap.total_borrow_assets, ratio.decimals)

            user_deposit = pool_supply * ratio.deposit_ratio * ratio.price
            user_borrow = pool_borrow * ratio.borrow_ratio * ratio.price

            total_user_deposit += user_deposit
            total_user_borrow += user_borrow
            weighted_deposit_apy += rate_to_percent(snap.supply_apr) * user_deposit
            weighted_borrow_rate += rate_to_percent(snap.borrow_rate) * user_borrow

        date = format_date_smart(ts, span)
        deposit_chart.append(
            ChartDataPoint(
                timestamp=ts,
                date=date,
                total_deposits=total_user_deposit,
                supply_apy=_weighted(weighted_deposit_apy, total_user_deposit),
            )
        )
        borrow_chart.append(
            ChartDataPoint(
                timestamp=ts,
                date=date,
                total_borrows=total_user_borrow,
                borrow_rate=_weighted(weighted_borrow_rate, total_user_borrow),
            )
        )

    logger.debug("Estimated %d deposit/borrow points", len(timeline))
    return deposit_chart, borrow_chart
