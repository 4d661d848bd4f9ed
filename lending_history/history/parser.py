"""Pure parsing functions for indexer payloads — no I/O."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..models import CollateralEvent, PoolSnapshot, format_units


def to_int(value: Any) -> int:
    """Parse an integer-string, decimal-string or number into an ``int``.

    Examples:
        "1000000000000000000" → 10**18
        "42.0" → 42
        None → 0
    """
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return int(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    # Decimal strings such as "12.0" or "1e18" keep their integer part.
    try:
        return int(Decimal(text))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def extract_items(payload: dict[str, Any] | None, collection: str) -> list[dict[str, Any]]:
    """Return ``payload["data"][collection]["items"]``, or ``[]`` if any level is missing."""
    if not isinstance(payload, dict):
        return []
    data = payload.get("data") or {}
    if not isinstance(data, dict):
        return []
    wrapper = data.get(collection) or {}
    if not isinstance(wrapper, dict):
        return []
    items = wrapper.get("items") or []
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def parse_snapshot(item: dict[str, Any]) -> PoolSnapshot:
    """Parse a single ``poolSnapshots`` item."""
    return PoolSnapshot(
        id=str(item.get("id") or ""),
        lending_pool=str(item.get("lendingPool") or ""),
        router=str(item.get("router") or ""),
        timestamp=to_int(item.get("timestamp")),
        block_number=to_int(item.get("blockNumber")),
        event_type=str(item.get("eventType") or ""),
        total_supply_assets=to_int(item.get("totalSupplyAssets")),
        total_borrow_assets=to_int(item.get("totalBorrowAssets")),
        total_collateral=to_int(item.get("totalCollateral")),
        available_liquidity=to_int(item.get("availableLiquidity")),
        supply_apr=to_int(item.get("supplyAPR")),
        borrow_rate=to_int(item.get("borrowRate")),
        utilization=to_int(item.get("utilization")),
    )


def parse_collateral_event(item: dict[str, Any]) -> CollateralEvent:
    """Parse a single supply/withdraw collateral event item."""
    return CollateralEvent(
        lending_pool=str(item.get("lendingPool") or ""),
        user=str(item.get("user") or ""),
        amount=to_int(item.get("amount")),
        timestamp=to_int(item.get("timestamp")),
        position_address=str(item.get("positionAddress") or ""),
    )


def parse_snapshots(payload: dict[str, Any] | None) -> list[PoolSnapshot]:
    return [parse_snapshot(item) for item in extract_items(payload, "poolSnapshots")]


def parse_supply_collateral_events(payload: dict[str, Any] | None) -> list[CollateralEvent]:
    return [
        parse_collateral_event(item)
        for item in extract_items(payload, "supplyCollateralEvents")
    ]


def parse_withdraw_collateral_events(payload: dict[str, Any] | None) -> list[CollateralEvent]:
    return [
        parse_collateral_event(item)
        for item in extract_items(payload, "withdrawCollateralEvents")
    ]


def rate_to_percent(raw_rate: int) -> float:
    """Convert an 18-decimal fixed-point rate into a percentage."""
    return format_units(raw_rate, 18) * 100
