"""End-to-end transform: indexer payload → the user's three history series."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from ..models import AggregatedHistory, PoolCollateralInfo, UserPoolPosition
from . import parser
from .estimator import estimate_series
from .ledger import replay_collateral
from .ratios import compute_pool_ratios
from .snapshots import build_timeline, group_snapshots

logger = logging.getLogger(__name__)


def build_aggregated_history(
    payload: dict[str, Any] | None,
    deposits: Iterable[UserPoolPosition] | None,
    loans: Iterable[UserPoolPosition] | None,
    collateral_infos: Iterable[PoolCollateralInfo] | None,
    user_address: str | None,
) -> AggregatedHistory:
    """Reconstruct deposit, borrow and collateral history from one payload.

    Deposit and borrow values are estimates: the user's current share of
    each pool applied to historical pool totals. Collateral is exact,
    replayed from the user's supply/withdraw events.
    """
    ratios = compute_pool_ratios(deposits, loans)
    grouped = group_snapshots(parser.parse_snapshots(payload), ratios.keys())
    timeline = build_timeline(grouped)
    deposit_chart, borrow_chart = estimate_series(grouped, ratios, timeline)

    collateral_chart = replay_collateral(
        parser.parse_supply_collateral_events(payload),
        parser.parse_withdraw_collateral_events(payload),
        collateral_infos,
        user_address,
    )

    logger.debug(
        "History built: %d deposit, %d borrow, %d collateral points",
        len(deposit_chart),
        len(borrow_chart),
        len(collateral_chart),
    )
    return AggregatedHistory(
        deposit_chart=tuple(deposit_chart),
        borrow_chart=tuple(borrow_chart),
        collateral_chart=tuple(collateral_chart),
    )
