"""Snapshot index and timeline — group pool snapshots and build the time axis."""
from __future__ import annotations

import logging
from typing import Collection, Iterable, Mapping, Sequence

from ..models import PoolSnapshot
from .ratios import pool_key

logger = logging.getLogger(__name__)


def match_pool(snapshot: PoolSnapshot, pool_keys: Collection[str]) -> str | None:
    """Return the key a snapshot belongs to: router first, then lending pool."""
    router = pool_key(snapshot.router)
    if router in pool_keys:
        return router
    lending_pool = pool_key(snapshot.lending_pool)
    if lending_pool in pool_keys:
        return lending_pool
    return None


def group_snapshots(
    snapshots: Iterable[PoolSnapshot], pool_keys: Collection[str]
) -> dict[str, list[PoolSnapshot]]:
    """Group snapshots by matched pool key, each list sorted ascending by time.

    Snapshots for pools not in ``pool_keys`` are dropped.
    """
    grouped: dict[str, list[PoolSnapshot]] = {}
    dropped = 0
    for snap in snapshots:
        key = match_pool(snap, pool_keys)
        if key is None:
            dropped += 1
            continue
        grouped.setdefault(key, []).append(snap)

    for snaps in grouped.values():
        snaps.sort(key=lambda s: s.timestamp)

    logger.debug(
        "Grouped snapshots into %d pools (%d unmatched dropped)", len(grouped), dropped
    )
    return grouped


def build_timeline(grouped: Mapping[str, Sequence[PoolSnapshot]]) -> list[int]:
    """Distinct snapshot timestamps across all pools, ascending."""
    timestamps = {snap.timestamp for snaps in grouped.values() for snap in snaps}
    return sorted(timestamps)
