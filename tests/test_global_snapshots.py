"""Tests for the global snapshot publisher's stock/flow semantics."""

from __future__ import annotations

from market_analytics.aggregation.global_snapshots import (
    GlobalSnapshotPublisher,
    SnapshotValues,
    snapshot_id,
)
from market_analytics.models import GlobalStatsSnapshot
from market_analytics.store import InMemoryStore

T0 = 1_700_000_000 // 86400 * 86400


def _values(tvl: int, volume: int, mcap: int = 0, markets: int = 1, active: int = 1):
    return SnapshotValues(
        total_value_locked_raw=tvl,
        total_market_cap_raw=mcap,
        period_volume_raw=volume,
        total_markets=markets,
        active_markets=active,
    )


class TestGlobalSnapshotPublisher:
    def test_volume_accumulates_tvl_overwrites(self):
        store = InMemoryStore()
        pub = GlobalSnapshotPublisher(store, ["ONE_HOUR"])
        pub.publish(T0 + 10, _values(tvl=100, volume=5))
        pub.publish(T0 + 20, _values(tvl=120, volume=7))

        snap = store.get(GlobalStatsSnapshot, snapshot_id("ONE_HOUR", T0))
        assert snap.period_volume_raw == 12
        assert snap.total_value_locked_raw == 120

    def test_market_counts_are_stocks(self):
        store = InMemoryStore()
        pub = GlobalSnapshotPublisher(store, ["ONE_HOUR"])
        pub.publish(T0, _values(tvl=1, volume=1, markets=1, active=1))
        pub.publish(T0 + 1, _values(tvl=1, volume=1, markets=3, active=2))
        snap = store.get(GlobalStatsSnapshot, snapshot_id("ONE_HOUR", T0))
        assert snap.total_markets == 3
        assert snap.active_markets == 2

    def test_each_period_gets_its_own_bucket(self):
        store = InMemoryStore()
        pub = GlobalSnapshotPublisher(store)
        pub.publish(T0 + 10, _values(tvl=1, volume=5))
        pub.publish(T0 + 3600 + 10, _values(tvl=2, volume=7))

        hour_1 = store.get(GlobalStatsSnapshot, snapshot_id("ONE_HOUR", T0))
        hour_2 = store.get(GlobalStatsSnapshot, snapshot_id("ONE_HOUR", T0 + 3600))
        four_h = store.get(GlobalStatsSnapshot, snapshot_id("FOUR_HOURS", T0))
        day = store.get(GlobalStatsSnapshot, snapshot_id("ONE_DAY", T0))
        assert hour_1.period_volume_raw == 5
        assert hour_2.period_volume_raw == 7
        assert four_h.period_volume_raw == 12
        assert day.period_volume_raw == 12
        assert day.total_value_locked_raw == 2

    def test_id_format(self):
        assert snapshot_id("ONE_DAY", 86400) == "global-ONE_DAY-86400"

    def test_formatted_at_canonical_decimals(self):
        store = InMemoryStore()
        pub = GlobalSnapshotPublisher(store, ["ONE_DAY"])
        snap = pub.publish(T0, _values(tvl=25 * 10**17, volume=10**18, mcap=10**17))[0]
        assert snap.total_value_locked_formatted == "2.5"
        assert snap.period_volume_formatted == "1"
        assert snap.total_market_cap_formatted == "0.1"
