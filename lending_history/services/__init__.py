"""Service modules"""
from .history_service import HistoryService, WalletPositions, positions_from_config
from .poller import HistoryPoller

__all__ = ["HistoryService", "HistoryPoller", "WalletPositions", "positions_from_config"]
