"""Transaction feeds: one wallet's activity, or one pool's liquidity and borrow side."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from .parser import extract_items, to_int
from .ratios import pool_key


class ActivityType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    BORROW = "borrow"
    REPAY = "repay"
    SUPPLY_COLLATERAL = "supply-collateral"
    WITHDRAW_COLLATERAL = "withdraw-collateral"


# Indexer collection → (activity type, amount field)
LIQUIDITY_SOURCES: tuple[tuple[str, ActivityType, str], ...] = (
    ("supplyLiquidityEvents", ActivityType.DEPOSIT, "amount"),
    ("withdrawLiquidityEvents", ActivityType.WITHDRAW, "amount"),
)

BORROW_SOURCES: tuple[tuple[str, ActivityType, str], ...] = (
    ("borrowDebtEvents", ActivityType.BORROW, "userAmount"),
    ("repayByPositionEvents", ActivityType.REPAY, "amount"),
    ("supplyCollateralEvents", ActivityType.SUPPLY_COLLATERAL, "amount"),
    ("withdrawCollateralEvents", ActivityType.WITHDRAW_COLLATERAL, "amount"),
)

ACTIVITY_SOURCES = LIQUIDITY_SOURCES + BORROW_SOURCES

LIQUIDITY_TYPES = tuple(source[1] for source in LIQUIDITY_SOURCES)
BORROW_TYPES = tuple(source[1] for source in BORROW_SOURCES)


@dataclass(frozen=True)
class ActivityTransaction:
    id: str
    type: ActivityType
    amount: str
    timestamp: int
    tx_hash: str
    user: str
    lending_pool: str
    shares: str = ""


def _map_events(
    items: Iterable[dict[str, Any]],
    activity_type: ActivityType,
    amount_field: str,
    match_field: str,
    match_value: str,
) -> list[ActivityTransaction]:
    return [
        ActivityTransaction(
            id=str(item.get("id") or ""),
            type=activity_type,
            amount=str(item.get(amount_field) or "0"),
            timestamp=to_int(item.get("timestamp")),
            tx_hash=str(item.get("txHash") or ""),
            user=str(item.get("user") or ""),
            lending_pool=str(item.get("lendingPool") or ""),
            shares=str(item.get("shares") or ""),
        )
        for item in items
        if pool_key(str(item.get(match_field) or "")) == match_value
    ]


def _collect(
    payload: dict[str, Any] | None,
    sources: Iterable[tuple[str, ActivityType, str]],
    match_field: str,
    address: str,
) -> list[ActivityTransaction]:
    """Events from ``sources`` whose ``match_field`` equals ``address``, newest first."""
    match_value = pool_key(address)
    if not match_value:
        return []
    feed: list[ActivityTransaction] = []
    for collection, activity_type, amount_field in sources:
        feed.extend(
            _map_events(
                extract_items(payload, collection),
                activity_type,
                amount_field,
                match_field,
                match_value,
            )
        )
    feed.sort(key=lambda tx: tx.timestamp, reverse=True)
    return feed


def build_activity_feed(
    payload: dict[str, Any] | None, user_address: str
) -> list[ActivityTransaction]:
    """All of the user's transactions, newest first."""
    return _collect(payload, ACTIVITY_SOURCES, "user", user_address)


def build_pool_transactions(
    payload: dict[str, Any] | None, pool_address: str
) -> list[ActivityTransaction]:
    """Deposits and withdrawals into one lending pool, by any user."""
    return _collect(payload, LIQUIDITY_SOURCES, "lendingPool", pool_address)


def build_borrow_transactions(
    payload: dict[str, Any] | None, pool_address: str
) -> list[ActivityTransaction]:
    """Borrows, repays and collateral moves in one lending pool, by any user."""
    return _collect(payload, BORROW_SOURCES, "lendingPool", pool_address)


def filter_activity(
    feed: Iterable[ActivityTransaction], activity_type: ActivityType | str
) -> list[ActivityTransaction]:
    """Keep transactions of one type; ``"all"`` keeps everything."""
    if activity_type == "all":
        return list(feed)
    wanted = ActivityType(activity_type)
    return [tx for tx in feed if tx.type is wanted]
