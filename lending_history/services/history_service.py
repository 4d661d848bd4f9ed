"""History service — fetches indexer data and runs the history transforms."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..config import AppConfig, PoolPositionConfig
from ..history import (
    ActivityTransaction,
    build_activity_feed,
    build_borrow_transactions,
    build_pool_transactions,
    build_aggregated_history,
    build_pool_series,
)
from ..history import parser
from ..interfaces.indexer import IndexerClient
from ..indexer.queries import (
    AGGREGATED_HISTORY_QUERY,
    BORROW_TRANSACTIONS_QUERY,
    POOL_SNAPSHOTS_QUERY,
    POOL_TRANSACTIONS_QUERY,
    USER_ACTIVITY_QUERY,
)
from ..models import (
    AggregatedHistory,
    ChartDataPoint,
    PoolCollateralInfo,
    PoolData,
    UserPoolPosition,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalletPositions:
    """Caller-supplied inputs for one wallet."""

    user_address: str
    deposits: tuple[UserPoolPosition, ...] = ()
    loans: tuple[UserPoolPosition, ...] = ()
    collateral_infos: tuple[PoolCollateralInfo, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.deposits or self.loans or self.collateral_infos)


def pool_from_config(cfg: PoolPositionConfig) -> PoolData:
    return PoolData(
        pool_address=cfg.pool_address,
        router_address=cfg.router_address,
        borrow_decimals=cfg.borrow_decimals,
        collateral_decimals=cfg.collateral_decimals,
        total_supply=cfg.total_supply,
        total_borrow=cfg.total_borrow,
        borrow_price=cfg.borrow_price,
        borrow_price_decimals=cfg.borrow_price_decimals,
        collateral_price=cfg.collateral_price,
        collateral_price_decimals=cfg.collateral_price_decimals,
        borrow_symbol=cfg.borrow_symbol,
        collateral_symbol=cfg.collateral_symbol,
    )


def positions_from_config(config: AppConfig) -> WalletPositions:
    """Split configured pools into deposit positions, loans and collateral infos."""
    deposits: list[UserPoolPosition] = []
    loans: list[UserPoolPosition] = []
    infos: list[PoolCollateralInfo] = []

    for pool_cfg in config.pools:
        pool = pool_from_config(pool_cfg)
        position = UserPoolPosition.from_amounts(
            pool, pool_cfg.deposit_amount, pool_cfg.borrow_amount
        )
        if position.deposit_amount > 0:
            deposits.append(position)
        if position.borrow_amount > 0:
            loans.append(position)
        infos.append(PoolCollateralInfo.from_pool(pool))

    return WalletPositions(
        user_address=config.wallet.address,
        deposits=tuple(deposits),
        loans=tuple(loans),
        collateral_infos=tuple(infos),
    )


class HistoryService:
    """Runs one fetch + transform cycle per call."""

    def __init__(self, client: IndexerClient) -> None:
        self._client = client

    async def fetch_aggregated_history(
        self, positions: WalletPositions
    ) -> AggregatedHistory:
        """Fetch snapshots and collateral events, then rebuild the three series.

        Raises ``IndexerError`` if the fetch fails; nothing partial is returned.
        """
        if not positions.user_address or positions.is_empty:
            logger.info("No positions to chart for %s", positions.user_address or "—")
            return AggregatedHistory()

        payload = await self._client.execute(AGGREGATED_HISTORY_QUERY)
        history = build_aggregated_history(
            payload,
            positions.deposits,
            positions.loans,
            positions.collateral_infos,
            positions.user_address,
        )
        logger.info(
            "History for %s — deposits: %d pts · borrows: %d pts · collateral: %d pts",
            positions.user_address,
            len(history.deposit_chart),
            len(history.borrow_chart),
            len(history.collateral_chart),
        )
        return history

    async def fetch_pool_history(
        self, address: str, borrow_decimals: int, collateral_decimals: int
    ) -> list[ChartDataPoint]:
        """Pool-wide snapshot series for a single pool."""
        payload = await self._client.execute(POOL_SNAPSHOTS_QUERY)
        series = build_pool_series(
            parser.parse_snapshots(payload),
            address,
            borrow_decimals,
            collateral_decimals,
        )
        logger.info("Pool %s — %d snapshots", address, len(series))
        return series

    async def fetch_user_activity(self, user_address: str) -> list[ActivityTransaction]:
        """All lending events for the user, newest first."""
        payload = await self._client.execute(USER_ACTIVITY_QUERY)
        feed = build_activity_feed(payload, user_address)
        logger.info("Activity for %s — %d transactions", user_address, len(feed))
        return feed

    async def fetch_pool_transactions(
        self, pool_address: str, side: str = "liquidity"
    ) -> list[ActivityTransaction]:
        """Every user's transactions in one pool, newest first.

        ``side`` is ``"liquidity"`` (deposits and withdrawals) or
        ``"borrow"`` (borrows, repays and collateral moves).
        """
        if side == "liquidity":
            payload = await self._client.execute(POOL_TRANSACTIONS_QUERY)
            feed = build_pool_transactions(payload, pool_address)
        elif side == "borrow":
            payload = await self._client.execute(BORROW_TRANSACTIONS_QUERY)
            feed = build_borrow_transactions(payload, pool_address)
        else:
            raise ValueError(f"Unknown transaction side '{side}'")
        logger.info("Pool %s %s — %d transactions", pool_address, side, len(feed))
        return feed


def find_pool(pools: Iterable[PoolPositionConfig], address: str) -> PoolPositionConfig | None:
    """Configured pool whose pool or router address equals ``address``."""
    addr = address.lower()
    for pool in pools:
        if addr in (pool.pool_address.lower(), pool.router_address.lower()):
            return pool
    return None
