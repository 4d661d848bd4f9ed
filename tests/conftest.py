"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from lending_history.config import (
    AppConfig,
    IndexerConfig,
    MonitorConfig,
    PoolPositionConfig,
    WalletConfig,
)
from lending_history.models import PoolCollateralInfo, PoolData, UserPoolPosition
from tests.helpers import POOL, ROUTER, USER


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_pool() -> PoolData:
    """Pool with 0-decimal tokens and a $1 price so values are easy to read."""
    return PoolData(
        pool_address=POOL,
        router_address=ROUTER,
        borrow_decimals=0,
        collateral_decimals=18,
        total_supply=1000,
        total_borrow=400,
        borrow_price=100_000_000,
        borrow_price_decimals=8,
        collateral_price=200_000_000,
        collateral_price_decimals=8,
        borrow_symbol="USDC",
        collateral_symbol="WETH",
    )


@pytest.fixture()
def deposit_position(sample_pool: PoolData) -> UserPoolPosition:
    return UserPoolPosition.from_amounts(sample_pool, deposit_amount=500)


@pytest.fixture()
def loan_position(sample_pool: PoolData) -> UserPoolPosition:
    return UserPoolPosition.from_amounts(sample_pool, borrow_amount=100)


@pytest.fixture()
def collateral_info() -> PoolCollateralInfo:
    return PoolCollateralInfo(
        pool_address=POOL,
        router_address=ROUTER,
        collateral_decimals=18,
        collateral_price=2.0,
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config() -> AppConfig:
    return AppConfig(
        indexer=IndexerConfig(graphql_url="https://indexer.example.com/", timeout=5),
        monitor=MonitorConfig(refresh_interval_seconds=30, time_period="ALL"),
        wallet=WalletConfig(label="test-wallet", address=USER),
        pools=(
            PoolPositionConfig(
                pool_address=POOL,
                router_address=ROUTER,
                borrow_symbol="USDC",
                collateral_symbol="WETH",
                borrow_decimals=0,
                collateral_decimals=18,
                total_supply=1000,
                total_borrow=400,
                borrow_price=100_000_000,
                borrow_price_decimals=8,
                collateral_price=200_000_000,
                collateral_price_decimals=8,
                deposit_amount=500,
                borrow_amount=0,
            ),
        ),
    )


SAMPLE_YAML = textwrap.dedent("""\
    indexer:
      graphql_url: "https://indexer.example.com/"
      timeout: 10
    monitor:
      refresh_interval_seconds: 30
      time_period: 1m
    wallet:
      label: test-wallet
      address: "0xTEST"
    pools:
      - pool_address: "0xPOOL"
        router_address: "0xROUTER"
        borrow_symbol: USDC
        collateral_symbol: WETH
        borrow_decimals: 6
        collateral_decimals: 18
        total_supply: "1000000000000"
        total_borrow: 250000000000
        borrow_price: "100000000"
        borrow_price_decimals: 8
        collateral_price: "350000000000"
        collateral_price_decimals: 8
        deposit_amount: "5000000000"
        borrow_amount: "0"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
