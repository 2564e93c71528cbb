"""Tests for the aggregation context lifecycle."""

from __future__ import annotations

from conftest import make_market

from market_analytics.aggregation.context import AggregationContext
from market_analytics.aggregation.window import SlidingWindowTracker
from market_analytics.store import InMemoryStore


class TestAggregationContext:
    def test_reset_clears_everything(self):
        ctx = AggregationContext()
        SlidingWindowTracker(ctx).update("m1", 18, 10, 1, 1)
        ctx.record_price("m1", 10, 1)
        ctx.observe_market(make_market("m1"))
        ctx.normalized_volume["m1"] = 5
        ctx.normalized_volume_total = 5

        ctx.reset()
        assert ctx.windows == {}
        assert ctx.price_history == {}
        assert ctx.markets_seen == set()
        assert ctx.active_markets == set()
        assert ctx.normalized_volume_total == 0

    def test_contexts_are_isolated(self):
        a = AggregationContext()
        b = AggregationContext()
        SlidingWindowTracker(a).update("m1", 18, 10, 1, 1)
        assert "m1" not in b.windows

    def test_price_history_is_bounded(self):
        ctx = AggregationContext(price_history_size=3)
        for t in range(10):
            ctx.record_price("m1", t, t)
        assert [p.timestamp for p in ctx.price_history["m1"]] == [7, 8, 9]

    def test_price_history_unbounded_by_default(self):
        ctx = AggregationContext()
        for t in range(5000):
            ctx.record_price("m1", t, t)
        assert len(ctx.price_history["m1"]) == 5000

    def test_trim_price_history(self):
        ctx = AggregationContext()
        for t in (5, 10, 15):
            ctx.record_price("m1", t, t)
        ctx.trim_price_history("m1", 10)
        assert [p.timestamp for p in ctx.price_history["m1"]] == [10, 15]

    def test_rehydrate_from_traded_markets(self):
        store = InMemoryStore()
        store.set(make_market("traded", current_price_raw=5))
        store.set(make_market("paused", current_price_raw=5, status="PAUSED"))
        store.set(make_market("untraded", current_price_raw=0))

        ctx = AggregationContext()
        assert ctx.rehydrate(store) == 2
        assert ctx.markets_seen == {"traded", "paused"}
        assert ctx.active_markets == {"traded"}
        assert ctx.windows == {}
