"""Builders for indexer payloads and model records used across tests."""
from __future__ import annotations

from lending_history.models import CollateralEvent, PoolSnapshot

USER = "0xUserAbC0000000000000000000000000000000001"
POOL = "0xPoolAAAA000000000000000000000000000000001"
ROUTER = "0xRouterAA000000000000000000000000000000001"


def make_snapshot(
    timestamp: int,
    total_supply: int = 0,
    total_borrow: int = 0,
    supply_apr: int = 0,
    borrow_rate: int = 0,
    router: str = ROUTER,
    lending_pool: str = POOL,
    snap_id: str = "",
) -> PoolSnapshot:
    return PoolSnapshot(
        id=snap_id or f"{router}-{timestamp}",
        lending_pool=lending_pool,
        router=router,
        timestamp=timestamp,
        total_supply_assets=total_supply,
        total_borrow_assets=total_borrow,
        supply_apr=supply_apr,
        borrow_rate=borrow_rate,
    )


def make_event(
    amount: int, timestamp: int, user: str = USER, pool: str = POOL
) -> CollateralEvent:
    return CollateralEvent(lending_pool=pool, user=user, amount=amount, timestamp=timestamp)


def snapshot_item(
    timestamp: int,
    total_supply: str = "0",
    total_borrow: str = "0",
    supply_apr: str = "0",
    borrow_rate: str = "0",
    router: str = ROUTER,
    lending_pool: str = POOL,
) -> dict:
    """A ``poolSnapshots`` item as the indexer returns it."""
    return {
        "availableLiquidity": "0",
        "timestamp": timestamp,
        "blockNumber": "1",
        "borrowRate": borrow_rate,
        "eventType": "SUPPLY",
        "id": f"{router}-{timestamp}",
        "lendingPool": lending_pool,
        "router": router,
        "supplyAPR": supply_apr,
        "totalBorrowAssets": total_borrow,
        "totalCollateral": "0",
        "totalSupplyAssets": total_supply,
        "utilization": "0",
    }


def event_item(amount: str, timestamp: int, user: str = USER, pool: str = POOL) -> dict:
    return {"amount": amount, "lendingPool": pool, "timestamp": timestamp, "user": user}


def payload(
    snapshots: list[dict] | None = None,
    supplies: list[dict] | None = None,
    withdrawals: list[dict] | None = None,
) -> dict:
    return {
        "data": {
            "poolSnapshots": {"items": snapshots or []},
            "supplyCollateralEvents": {"items": supplies or []},
            "withdrawCollateralEvents": {"items": withdrawals or []},
        }
    }

