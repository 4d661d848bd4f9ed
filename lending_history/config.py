"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .history.periods import TimePeriod

logger = logging.getLogger(__name__)

TIME_PERIODS = tuple(p.value for p in TimePeriod)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IndexerConfig:
    graphql_url: str = "https://api.stylend.xyz/"
    timeout: int = 30


@dataclass(frozen=True)
class MonitorConfig:
    refresh_interval_seconds: int = 60
    time_period: str = "ALL"


@dataclass(frozen=True)
class WalletConfig:
    label: str = ""
    address: str = ""


@dataclass(frozen=True)
class PoolPositionConfig:
    """Cached pool state and the wallet's position in it.

    Raw token amounts and prices are fixed-point integers.
    """

    pool_address: str = ""
    router_address: str = ""
    borrow_symbol: str = ""
    collateral_symbol: str = ""
    borrow_decimals: int = 18
    collateral_decimals: int = 18
    total_supply: int = 0
    total_borrow: int = 0
    borrow_price: int = 0
    borrow_price_decimals: int = 8
    collateral_price: int = 0
    collateral_price_decimals: int = 8
    deposit_amount: int = 0
    borrow_amount: int = 0


@dataclass(frozen=True)
class AppConfig:
    indexer: IndexerConfig = field(default_factory=IndexerConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    wallet: WalletConfig = field(default_factory=WalletConfig)
    pools: tuple[PoolPositionConfig, ...] = ()


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _raw_int(value: Any) -> int:
    """Parse raw on-chain magnitudes; YAML may hand us ints or strings."""
    if value is None or value == "":
        return 0
    return int(str(value).strip())


def _build_indexer(raw: dict[str, Any]) -> IndexerConfig:
    return IndexerConfig(
        graphql_url=raw.get("graphql_url", IndexerConfig.graphql_url),
        timeout=int(raw.get("timeout", 30)),
    )


def _build_monitor(raw: dict[str, Any]) -> MonitorConfig:
    return MonitorConfig(
        refresh_interval_seconds=int(raw.get("refresh_interval_seconds", 60)),
        time_period=str(raw.get("time_period", "ALL")).upper(),
    )


def _build_wallet(raw: dict[str, Any]) -> WalletConfig:
    return WalletConfig(
        label=raw.get("label", ""),
        address=raw.get("address", ""),
    )


def _build_pools(raw: list[dict[str, Any]]) -> tuple[PoolPositionConfig, ...]:
    pools: list[PoolPositionConfig] = []
    for p in raw:
        pools.append(
            PoolPositionConfig(
                pool_address=p.get("pool_address", ""),
                router_address=p.get("router_address", ""),
                borrow_symbol=p.get("borrow_symbol", ""),
                collateral_symbol=p.get("collateral_symbol", ""),
                borrow_decimals=int(p.get("borrow_decimals", 18)),
                collateral_decimals=int(p.get("collateral_decimals", 18)),
                total_supply=_raw_int(p.get("total_supply")),
                total_borrow=_raw_int(p.get("total_borrow")),
                borrow_price=_raw_int(p.get("borrow_price")),
                borrow_price_decimals=int(p.get("borrow_price_decimals", 8)),
                collateral_price=_raw_int(p.get("collateral_price")),
                collateral_price_decimals=int(p.get("collateral_price_decimals", 8)),
                deposit_amount=_raw_int(p.get("deposit_amount")),
                borrow_amount=_raw_int(p.get("borrow_amount")),
            )
        )
    return tuple(pools)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    try:
        cfg = AppConfig(
            indexer=_build_indexer(raw.get("indexer", {})),
            monitor=_build_monitor(raw.get("monitor", {})),
            wallet=_build_wallet(raw.get("wallet", {})),
            pools=_build_pools(raw.get("pools", [])),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration value: {e}") from e

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.wallet.address:
        raise ValueError("Wallet address must be configured")

    if cfg.monitor.refresh_interval_seconds <= 0:
        raise ValueError("refresh_interval_seconds must be positive")

    if cfg.monitor.time_period not in TIME_PERIODS:
        raise ValueError(
            f"Unknown time_period '{cfg.monitor.time_period}' "
            f"(expected one of {', '.join(TIME_PERIODS)})"
        )

    for i, pool in enumerate(cfg.pools):
        if not pool.pool_address:
            raise ValueError(f"Pool #{i} has no pool_address")
        if not pool.router_address:
            raise ValueError(f"Pool '{pool.pool_address}' has no router_address")
