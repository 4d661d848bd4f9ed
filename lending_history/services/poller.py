"""Polling loop — keeps the latest history available between refreshes."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from ..models import AggregatedHistory
from .history_service import HistoryService, WalletPositions

logger = logging.getLogger(__name__)


class HistoryPoller:
    """Re-runs the history pipeline on an interval.

    ``latest`` keeps the last good result while a refresh is in flight or
    after a failed one. Concurrent ``refresh()`` calls share one fetch.
    """

    def __init__(
        self,
        service: HistoryService,
        positions: WalletPositions,
        interval_seconds: int = 60,
        on_update: Callable[[AggregatedHistory], Awaitable[None]] | None = None,
    ) -> None:
        self._service = service
        self._positions = positions
        self._interval = interval_seconds
        self._on_update = on_update
        self._inflight: asyncio.Task[AggregatedHistory] | None = None
        self.latest: AggregatedHistory | None = None
        self.last_error: Exception | None = None

    @property
    def is_refreshing(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def _refresh_once(self) -> AggregatedHistory:
        try:
            history = await self._service.fetch_aggregated_history(self._positions)
        except Exception as e:
            self.last_error = e
            logger.error("History refresh failed, keeping previous result: %s", e)
            raise
        self.latest = history
        self.last_error = None
        if self._on_update is not None:
            await self._on_update(history)
        return history

    async def refresh(self) -> AggregatedHistory:
        """Fetch a fresh history; joins the in-flight fetch if there is one."""
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.create_task(self._refresh_once())
        return await asyncio.shield(self._inflight)

    async def run_continuous(self, interval_seconds: int | None = None) -> None:
        """Run the refresh loop forever."""
        interval = interval_seconds or self._interval
        logger.info("Starting history polling (refreshing every %d seconds)", interval)

        while True:
            try:
                await self.refresh()
            except Exception:
                # Already recorded in last_error and logged by _refresh_once.
                logger.debug("Retrying in %d seconds", interval)
            await asyncio.sleep(interval)
