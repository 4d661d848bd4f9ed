"""User share of each pool's current totals."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from ..models import PoolRatio, UserPoolPosition, format_units

logger = logging.getLogger(__name__)


def pool_key(address: str) -> str:
    """Normalize an address for use as a dictionary key."""
    return address.lower()


def share_of(amount: int, total: int, decimals: int) -> float:
    """``amount / total`` on the same decimal scale, 0 when the total is 0."""
    total_num = format_units(total, decimals)
    if total_num <= 0:
        return 0.0
    return format_units(amount, decimals) / total_num


def _position_price(position: UserPoolPosition) -> float:
    pool = position.pool
    return format_units(pool.borrow_price, pool.borrow_price_decimals)


def compute_pool_ratios(
    deposits: Iterable[UserPoolPosition] | None,
    loans: Iterable[UserPoolPosition] | None,
) -> dict[str, PoolRatio]:
    """Merge deposit and loan positions into one ratio record per pool.

    Keyed by the lower-cased router address. A pool that appears in both
    lists ends up with both ratios set on a single record.
    """
    ratios: dict[str, PoolRatio] = {}

    for dep in deposits or ():
        pool = dep.pool
        ratios[pool_key(pool.router_address)] = PoolRatio(
            deposit_ratio=share_of(
                dep.deposit_amount, pool.total_supply, pool.borrow_decimals
            ),
            borrow_ratio=0.0,
            decimals=pool.borrow_decimals,
            collateral_decimals=pool.collateral_decimals,
            price=_position_price(dep),
        )

    for loan in loans or ():
        pool = loan.pool
        key = pool_key(pool.router_address)
        borrow_ratio = share_of(
            loan.borrow_amount, pool.total_borrow, pool.borrow_decimals
        )
        existing = ratios.get(key)
        if existing is not None:
            ratios[key] = replace(existing, borrow_ratio=borrow_ratio)
        else:
            ratios[key] = PoolRatio(
                deposit_ratio=0.0,
                borrow_ratio=borrow_ratio,
                decimals=pool.borrow_decimals,
                collateral_decimals=pool.collateral_decimals,
                price=_position_price(loan),
            )

    logger.debug("Computed share ratios for %d pools", len(ratios))
    return ratios
