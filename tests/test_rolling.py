"""Tests for the rolling-stats publisher."""

from __future__ import annotations

from market_analytics.aggregation.context import (
    AggregationContext,
    PricePoint,
    SlidingWindowState,
)
from market_analytics.aggregation.rolling import RollingStatsPublisher, rolling_stats_id
from market_analytics.aggregation.window import SlidingWindowTracker
from market_analytics.models import MarketRollingStats
from market_analytics.store import InMemoryStore


def _window(*trades: tuple[int, int, int]):
    ctx = AggregationContext()
    tracker = SlidingWindowTracker(ctx)
    for ts, vol, price in trades:
        tracker.update("m1", 6, ts, vol, price)
    return ctx.windows["m1"]


class TestRollingStatsPublisher:
    def test_publish_returns_volume_and_count(self):
        store = InMemoryStore()
        state = _window((10, 1_500_000, 10**18), (20, 500_000, 3 * 10**18))
        volume, trades = RollingStatsPublisher(store).publish("m1", 6, state, 20)
        assert volume == 2_000_000
        assert trades == 2

        stats = store.get(MarketRollingStats, rolling_stats_id("m1", 86400))
        assert stats.window_seconds == 86400
        assert stats.volume_formatted == "2"
        assert stats.average_price_raw == 2 * 10**18
        assert stats.average_price_formatted == "2"
        assert stats.last_updated_at == 20

    def test_empty_window_average_is_zero(self):
        store = InMemoryStore()
        state = SlidingWindowState(decimals=6)
        RollingStatsPublisher(store).publish("m1", 6, state, 100)
        stats = store.get(MarketRollingStats, rolling_stats_id("m1", 86400))
        assert stats.average_price_raw == 0
        assert stats.trade_count == 0

    def test_republish_is_identical(self):
        store = InMemoryStore()
        state = _window((10, 7, 100), (20, 9, 300))
        publisher = RollingStatsPublisher(store)
        publisher.publish("m1", 6, state, 20)
        first = store.get(MarketRollingStats, rolling_stats_id("m1", 86400))
        publisher.publish("m1", 6, state, 20)
        second = store.get(MarketRollingStats, rolling_stats_id("m1", 86400))
        assert first.model_dump_json() == second.model_dump_json()

    def test_high_low_from_price_history(self):
        store = InMemoryStore()
        state = _window((10, 1, 5))
        points = [PricePoint(1, 40), PricePoint(2, 15), PricePoint(3, 25)]
        RollingStatsPublisher(store).publish("m1", 6, state, 10, points)
        stats = store.get(MarketRollingStats, rolling_stats_id("m1", 86400))
        assert stats.high_price_raw == 40
        assert stats.low_price_raw == 15
        assert stats.high_price_formatted == "0.00000000000000004"
        assert stats.low_price_formatted == "0.000000000000000015"

    def test_high_low_cover_every_trade_in_window(self):
        ctx = AggregationContext()
        tracker = SlidingWindowTracker(ctx)
        for i in range(2000):
            price = (i + 1) * 10**18
            tracker.update("m1", 6, i, 1, price)
            ctx.record_price("m1", i, price)

        store = InMemoryStore()
        RollingStatsPublisher(store).publish(
            "m1", 6, ctx.windows["m1"], 1999, ctx.price_history["m1"]
        )
        stats = store.get(MarketRollingStats, rolling_stats_id("m1", 86400))
        assert stats.trade_count == 2000
        assert stats.low_price_raw == 10**18
        assert stats.low_price_formatted == "1"
        assert stats.high_price_formatted == "2000"
