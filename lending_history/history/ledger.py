"""Collateral ledger — exact collateral history replayed from events."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..models import ChartDataPoint, CollateralEvent, PoolCollateralInfo, format_units
from .dates import format_date_smart, span_days
from .ratios import pool_key

logger = logging.getLogger(__name__)

SUPPLY = 1
WITHDRAW = -1


@dataclass(frozen=True)
class TaggedEvent:
    """Collateral event normalized for replay; ``sign`` is +1 or -1."""

    timestamp: int
    pool: str
    amount: int
    sign: int


def tag_events(
    events: Iterable[CollateralEvent],
    sign: int,
    user: str,
    pool_infos: dict[str, PoolCollateralInfo],
) -> list[TaggedEvent]:
    """Keep the user's events for known pools, tagged with ``sign``."""
    tagged: list[TaggedEvent] = []
    for event in events:
        if pool_key(event.user) != user:
            continue
        pool = pool_key(event.lending_pool)
        if pool not in pool_infos:
            continue
        tagged.append(
            TaggedEvent(
                timestamp=event.timestamp, pool=pool, amount=event.amount, sign=sign
            )
        )
    return tagged


def apply_event(balance: int, event: TaggedEvent) -> int:
    """New raw balance after ``event``, floored at zero."""
    return max(balance + event.sign * event.amount, 0)


def collateral_usd(
    balances: dict[str, int], pool_infos: dict[str, PoolCollateralInfo]
) -> float:
    """Total USD value of the running balances at cached prices."""
    total = 0.0
    for pool, balance in balances.items():
        info = pool_infos[pool]
        total += format_units(balance, info.collateral_decimals) * info.collateral_price
    return total


def replay_collateral(
    supply_events: Iterable[CollateralEvent],
    withdraw_events: Iterable[CollateralEvent],
    collateral_infos: Iterable[PoolCollateralInfo] | None,
    user_address: str | None,
) -> list[ChartDataPoint]:
    """Replay supply (+) and withdraw (-) events into a collateral series.

    Events are merged and stably sorted by timestamp, so events sharing a
    timestamp keep their input order (supplies before withdrawals). One
    point is emitted per event.
    """
    if not user_address or not collateral_infos:
        return []

    user = pool_key(user_address)
    pool_infos = {pool_key(info.pool_address): info for info in collateral_infos}
    if not pool_infos:
        return []

    tagged = tag_events(supply_events, SUPPLY, user, pool_infos)
    tagged.extend(tag_events(withdraw_events, WITHDRAW, user, pool_infos))
    tagged.sort(key=lambda e: e.timestamp)
    if not tagged:
        return []

    span = span_days(tagged[0].timestamp, tagged[-1].timestamp)
    balances: dict[str, int] = {}
    chart: list[ChartDataPoint] = []

    for event in tagged:
        balances[event.pool] = apply_event(balances.get(event.pool, 0), event)
        chart.append(
            ChartDataPoint(
                timestamp=event.timestamp,
                date=format_date_smart(event.timestamp, span),
                total_collateral=collateral_usd(balances, pool_infos),
            )
        )

    logger.debug("Replayed %d collateral events", len(chart))
    return chart
