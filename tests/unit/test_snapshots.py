"""Unit tests for snapshot grouping and the timeline."""
from __future__ import annotations

from lending_history.history.ratios import pool_key
from lending_history.history.snapshots import build_timeline, group_snapshots, match_pool
from tests.helpers import POOL, ROUTER, make_snapshot

KEYS = {pool_key(ROUTER)}


class TestMatchPool:
    def test_router_match(self) -> None:
        assert match_pool(make_snapshot(1), KEYS) == pool_key(ROUTER)

    def test_lending_pool_fallback(self) -> None:
        snap = make_snapshot(1, router="0xunknown", lending_pool=ROUTER.upper())
        assert match_pool(snap, KEYS) == pool_key(ROUTER)

    def test_router_preferred_over_lending_pool(self) -> None:
        keys = {pool_key(ROUTER), pool_key(POOL)}
        assert match_pool(make_snapshot(1), keys) == pool_key(ROUTER)

    def test_no_match(self) -> None:
        assert match_pool(make_snapshot(1, router="0xa", lending_pool="0xb"), KEYS) is None


class TestGroupSnapshots:
    def test_sorted_ascending(self) -> None:
        grouped = group_snapshots(
            [make_snapshot(300), make_snapshot(100), make_snapshot(200)], KEYS
        )
        assert [s.timestamp for s in grouped[pool_key(ROUTER)]] == [100, 200, 300]

    def test_unmatched_dropped(self) -> None:
        grouped = group_snapshots(
            [make_snapshot(1), make_snapshot(2, router="0xother", lending_pool="0xother")],
            KEYS,
        )
        assert list(grouped) == [pool_key(ROUTER)]
        assert len(grouped[pool_key(ROUTER)]) == 1

    def test_router_miss_lending_pool_hit_is_grouped(self) -> None:
        keys = {pool_key(POOL)}
        grouped = group_snapshots([make_snapshot(5, router="0xnothing")], keys)
        assert [s.timestamp for s in grouped[pool_key(POOL)]] == [5]

    def test_stable_on_equal_timestamps(self) -> None:
        snaps = [
            make_snapshot(10, snap_id="b"),
            make_snapshot(5, snap_id="x"),
            make_snapshot(10, snap_id="a"),
        ]
        grouped = group_snapshots(snaps, KEYS)
        assert [s.id for s in grouped[pool_key(ROUTER)]] == ["x", "b", "a"]

    def test_empty(self) -> None:
        assert group_snapshots([], KEYS) == {}
        assert group_snapshots([make_snapshot(1)], set()) == {}


class TestBuildTimeline:
    def test_merges_and_dedups(self) -> None:
        grouped = {
            "a": [make_snapshot(100), make_snapshot(300)],
            "b": [make_snapshot(100, router="0xb"), make_snapshot(200, router="0xb")],
        }
        assert build_timeline(grouped) == [100, 200, 300]

    def test_empty(self) -> None:
        assert build_timeline({}) == []
