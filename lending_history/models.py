"""Data models — all frozen (immutable)."""
from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


def format_units(raw: int, decimals: int) -> float:
    """Scale a raw fixed-point integer down by ``10**decimals``.

    Integer true division rounds correctly, so the only precision loss
    happens here, at the final conversion. A magnitude no float can hold
    is treated like any other malformed amount and becomes 0.
    """
    try:
        return raw / (10**decimals)
    except OverflowError:
        logger.warning("Amount of %d bits does not fit a float; using 0", raw.bit_length())
        return 0.0


@dataclass(frozen=True)
class PoolSnapshot:
    """Protocol-wide state of one pool at one point in time."""

    id: str
    lending_pool: str
    router: str
    timestamp: int
    block_number: int = 0
    event_type: str = ""
    total_supply_assets: int = 0
    total_borrow_assets: int = 0
    total_collateral: int = 0
    available_liquidity: int = 0
    supply_apr: int = 0
    borrow_rate: int = 0
    utilization: int = 0


@dataclass(frozen=True)
class PoolData:
    """Cached on-chain state of a lending pool, as read by the caller."""

    pool_address: str
    router_address: str
    borrow_decimals: int = 18
    collateral_decimals: int = 18
    total_supply: int = 0
    total_borrow: int = 0
    borrow_price: int = 0
    borrow_price_decimals: int = 8
    collateral_price: int = 0
    collateral_price_decimals: int = 8
    borrow_symbol: str = ""
    collateral_symbol: str = ""


@dataclass(frozen=True)
class UserPoolPosition:
    """User's deposit and/or borrow in one pool."""

    pool: PoolData
    deposit_amount: int = 0
    deposit_usd: float = 0.0
    borrow_amount: int = 0
    borrow_usd: float = 0.0

    @classmethod
    def from_amounts(
        cls, pool: PoolData, deposit_amount: int = 0, borrow_amount: int = 0
    ) -> UserPoolPosition:
        """Build a position, valuing both amounts at the pool's borrow price."""
        price = format_units(pool.borrow_price, pool.borrow_price_decimals)
        return cls(
            pool=pool,
            deposit_amount=deposit_amount,
            deposit_usd=format_units(deposit_amount, pool.borrow_decimals) * price,
            borrow_amount=borrow_amount,
            borrow_usd=format_units(borrow_amount, pool.borrow_decimals) * price,
        )


@dataclass(frozen=True)
class PoolRatio:
    """User's share of a pool's current totals, plus conversion data."""

    deposit_ratio: float
    borrow_ratio: float
    decimals: int
    collateral_decimals: int
    price: float


@dataclass(frozen=True)
class PoolCollateralInfo:
    """Maps a lending pool to its collateral token details."""

    pool_address: str
    router_address: str
    collateral_decimals: int
    collateral_price: float

    @classmethod
    def from_pool(cls, pool: PoolData) -> PoolCollateralInfo:
        return cls(
            pool_address=pool.pool_address,
            router_address=pool.router_address,
            collateral_decimals=pool.collateral_decimals,
            collateral_price=format_units(
                pool.collateral_price, pool.collateral_price_decimals
            ),
        )


@dataclass(frozen=True)
class CollateralEvent:
    """A supply or withdraw collateral event as recorded by the indexer."""

    lending_pool: str
    user: str
    amount: int
    timestamp: int
    position_address: str = ""


@dataclass(frozen=True)
class ChartDataPoint:
    """Single point of a chart series. Unused fields stay zero."""

    timestamp: int
    date: str
    total_deposits: float = 0.0
    total_borrows: float = 0.0
    total_collateral: float = 0.0
    supply_apy: float = 0.0
    borrow_rate: float = 0.0


@dataclass(frozen=True)
class AggregatedHistory:
    """The three reconstructed series for one user."""

    deposit_chart: tuple[ChartDataPoint, ...] = ()
    borrow_chart: tuple[ChartDataPoint, ...] = ()
    collateral_chart: tuple[ChartDataPoint, ...] = ()
