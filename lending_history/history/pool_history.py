"""Pool-wide history for a single pool, straight from its snapshots."""
from __future__ import annotations

from typing import Iterable

from ..models import ChartDataPoint, PoolSnapshot, format_units
from .dates import format_date_smart, span_days
from .parser import rate_to_percent
from .ratios import pool_key


def build_pool_series(
    snapshots: Iterable[PoolSnapshot],
    address: str,
    borrow_decimals: int,
    collateral_decimals: int,
) -> list[ChartDataPoint]:
    """One point per snapshot of the pool at ``address`` (router or lending pool)."""
    addr = pool_key(address)
    matched = [
        s
        for s in snapshots
        if pool_key(s.lending_pool) == addr or pool_key(s.router) == addr
    ]
    matched.sort(key=lambda s: s.timestamp)

    span = (
        span_days(matched[0].timestamp, matched[-1].timestamp)
        if len(matched) >= 2
        else 0.0
    )

    return [
        ChartDataPoint(
            timestamp=s.timestamp,
            date=format_date_smart(s.timestamp, span),
            total_deposits=format_units(s.total_supply_assets, borrow_decimals),
            total_borrows=format_units(s.total_borrow_assets, borrow_decimals),
            total_collateral=format_units(s.total_collateral, collateral_decimals),
            supply_apy=rate_to_percent(s.supply_apr),
            borrow_rate=rate_to_percent(s.borrow_rate),
        )
        for s in matched
    ]
