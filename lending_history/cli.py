"""Command-line interface for the lending history client."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .config import TIME_PERIODS, AppConfig, load_config
from .history import ActivityType, filter_activity, filter_by_time_period
from .indexer import GraphQLIndexerClient
from .logging_setup import configure_logging
from .models import AggregatedHistory
from .services import HistoryPoller, HistoryService, positions_from_config
from .services.history_service import find_pool

logger = logging.getLogger(__name__)

ACTIVITY_CHOICES = ["all"] + [t.value for t in ActivityType]
TRANSACTION_SIDES = ["liquidity", "borrow"]


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="lending-history",
        description="Reconstruct deposit, borrow and collateral history for a wallet",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    charts_parser = sub.add_parser("charts", help="Deposit, borrow and collateral series")
    charts_parser.add_argument(
        "--period",
        choices=TIME_PERIODS,
        default=None,
        help="Time window (overrides config)",
    )
    charts_parser.add_argument(
        "--output", default=None, help="Write JSON to this file instead of stdout"
    )

    pool_parser = sub.add_parser("pool", help="Pool-wide snapshot history")
    pool_parser.add_argument("address", help="Pool or router address")
    pool_parser.add_argument("--period", choices=TIME_PERIODS, default=None)

    activity_parser = sub.add_parser("activity", help="Wallet activity feed")
    activity_parser.add_argument(
        "--type", dest="activity_type", choices=ACTIVITY_CHOICES, default="all"
    )

    tx_parser = sub.add_parser("transactions", help="Pool transaction feed (all users)")
    tx_parser.add_argument("address", help="Lending pool address")
    tx_parser.add_argument(
        "--side",
        choices=TRANSACTION_SIDES,
        default="liquidity",
        help="liquidity: deposits/withdrawals; borrow: borrows, repays, collateral",
    )
    tx_parser.add_argument(
        "--type", dest="activity_type", choices=ACTIVITY_CHOICES, default="all"
    )

    watch_parser = sub.add_parser("watch", help="Continuous refresh loop")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=int,
        default=None,
        help="Refresh interval in seconds (overrides config)",
    )

    return parser


def history_to_dict(history: AggregatedHistory, period: str = "ALL") -> dict[str, Any]:
    return {
        "depositChart": [asdict(p) for p in filter_by_time_period(history.deposit_chart, period)],
        "borrowChart": [asdict(p) for p in filter_by_time_period(history.borrow_chart, period)],
        "collateralChart": [
            asdict(p) for p in filter_by_time_period(history.collateral_chart, period)
        ],
    }


def _emit(data: Any, output: str | None = None) -> None:
    text = json.dumps(data, indent=2, default=str)
    if output:
        Path(output).write_text(text + "\n")
        logger.info("Wrote %s", output)
    else:
        print(text)


async def _log_summary(history: AggregatedHistory) -> None:
    latest_deposit = history.deposit_chart[-1].total_deposits if history.deposit_chart else 0.0
    latest_borrow = history.borrow_chart[-1].total_borrows if history.borrow_chart else 0.0
    latest_collateral = (
        history.collateral_chart[-1].total_collateral if history.collateral_chart else 0.0
    )
    logger.info(
        "Deposits: $%.2f  Borrowed: $%.2f  Collateral: $%.2f",
        latest_deposit,
        latest_borrow,
        latest_collateral,
    )


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config: AppConfig = load_config(args.config)
    service = HistoryService(GraphQLIndexerClient(config.indexer))

    if args.command == "charts":
        history = await service.fetch_aggregated_history(positions_from_config(config))
        period = args.period or config.monitor.time_period
        _emit(history_to_dict(history, period), args.output)
    elif args.command == "pool":
        pool_cfg = find_pool(config.pools, args.address)
        borrow_decimals = pool_cfg.borrow_decimals if pool_cfg else 18
        collateral_decimals = pool_cfg.collateral_decimals if pool_cfg else 18
        series = await service.fetch_pool_history(
            args.address, borrow_decimals, collateral_decimals
        )
        period = args.period or config.monitor.time_period
        _emit([asdict(p) for p in filter_by_time_period(series, period)])
    elif args.command == "activity":
        feed = await service.fetch_user_activity(config.wallet.address)
        _emit([asdict(tx) for tx in filter_activity(feed, args.activity_type)])
    elif args.command == "transactions":
        feed = await service.fetch_pool_transactions(args.address, args.side)
        _emit([asdict(tx) for tx in filter_activity(feed, args.activity_type)])
    elif args.command == "watch":
        poller = HistoryPoller(
            service,
            positions_from_config(config),
            config.monitor.refresh_interval_seconds,
            on_update=_log_summary,
        )
        await poller.run_continuous(args.interval)
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))
