"""Unit tests for the collateral ledger replay."""
from __future__ import annotations

import itertools

import pytest

from lending_history.history.ledger import (
    SUPPLY,
    WITHDRAW,
    TaggedEvent,
    apply_event,
    replay_collateral,
)
from lending_history.models import PoolCollateralInfo
from tests.helpers import POOL, USER, make_event

ONE = 10**18


class TestApplyEvent:
    def test_supply(self) -> None:
        assert apply_event(5, TaggedEvent(0, "p", 3, SUPPLY)) == 8

    def test_withdraw(self) -> None:
        assert apply_event(5, TaggedEvent(0, "p", 3, WITHDRAW)) == 2

    def test_clamps_at_zero(self) -> None:
        assert apply_event(5, TaggedEvent(0, "p", 30, WITHDRAW)) == 0


class TestReplayCollateral:
    def test_supply_withdraw_clamp_scenario(self, collateral_info: PoolCollateralInfo) -> None:
        chart = replay_collateral(
            [make_event(100 * ONE, 10)],
            [make_event(40 * ONE, 20), make_event(1000 * ONE, 30)],
            [collateral_info],
            USER,
        )
        assert [p.timestamp for p in chart] == [10, 20, 30]
        assert chart[0].total_collateral == pytest.approx(200.0)
        assert chart[1].total_collateral == pytest.approx(120.0)
        assert chart[2].total_collateral == 0.0
        assert all(
            p.total_deposits == 0 and p.total_borrows == 0 and p.supply_apy == 0
            and p.borrow_rate == 0
            for p in chart
        )

    def test_filters_other_users(self, collateral_info: PoolCollateralInfo) -> None:
        chart = replay_collateral(
            [make_event(ONE, 1), make_event(ONE, 2, user="0xsomeoneelse")],
            [],
            [collateral_info],
            USER.upper(),
        )
        assert len(chart) == 1

    def test_filters_unknown_pools(self, collateral_info: PoolCollateralInfo) -> None:
        chart = replay_collateral(
            [make_event(ONE, 1), make_event(ONE, 2, pool="0xunknownpool")],
            [],
            [collateral_info],
            USER,
        )
        assert [p.timestamp for p in chart] == [1]

    def test_pool_match_is_case_insensitive(self, collateral_info: PoolCollateralInfo) -> None:
        chart = replay_collateral([make_event(ONE, 1, pool=POOL.lower())], [], [collateral_info], USER)
        assert chart[0].total_collateral == pytest.approx(2.0)

    def test_sums_across_pools(self, collateral_info: PoolCollateralInfo) -> None:
        other = PoolCollateralInfo(
            pool_address="0xother", router_address="0xr2", collateral_decimals=8,
            collateral_price=100.0,
        )
        chart = replay_collateral(
            [make_event(ONE, 1), make_event(10**8, 2, pool="0xother")],
            [],
            [collateral_info, other],
            USER,
        )
        assert chart[1].total_collateral == pytest.approx(102.0)

    def test_sorted_by_time_with_stable_ties(self, collateral_info: PoolCollateralInfo) -> None:
        chart = replay_collateral(
            [make_event(10 * ONE, 50), make_event(5 * ONE, 20)],
            [make_event(5 * ONE, 20)],
            [collateral_info],
            USER,
        )
        assert [p.timestamp for p in chart] == [20, 20, 50]
        # supply at t=20 replays before the withdrawal at t=20
        assert chart[0].total_collateral == pytest.approx(10.0)
        assert chart[1].total_collateral == 0.0
        assert chart[2].total_collateral == pytest.approx(20.0)

    def test_balance_never_negative(self, collateral_info: PoolCollateralInfo) -> None:
        amounts = [3, 7, 1]
        for supplies in itertools.product(amounts, repeat=2):
            for withdrawals in itertools.product(amounts, repeat=2):
                chart = replay_collateral(
                    [make_event(a * ONE, t) for t, a in zip((1, 3), supplies)],
                    [make_event(a * ONE, t) for t, a in zip((2, 4), withdrawals)],
                    [collateral_info],
                    USER,
                )
                assert all(p.total_collateral >= 0 for p in chart)

    def test_no_events(self, collateral_info: PoolCollateralInfo) -> None:
        assert replay_collateral([], [], [collateral_info], USER) == []

    def test_no_user_or_infos(self, collateral_info: PoolCollateralInfo) -> None:
        events = [make_event(ONE, 1)]
        assert replay_collateral(events, [], [collateral_info], None) == []
        assert replay_collateral(events, [], [], USER) == []
        assert replay_collateral(events, [], None, USER) == []

    def test_labels_use_series_span(self, collateral_info: PoolCollateralInfo) -> None:
        chart = replay_collateral(
            [make_event(ONE, 0), make_event(ONE, 30 * 86400)], [], [collateral_info], USER
        )
        assert chart[0].date == "Jan 1"
        assert chart[1].date == "Jan 31"
