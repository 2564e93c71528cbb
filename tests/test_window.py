"""Tests for the sliding-window tracker."""

from __future__ import annotations

import random

from market_analytics.aggregation.context import AggregationContext
from market_analytics.aggregation.window import SlidingWindowTracker

DAY = 86400


def _tracker() -> tuple[AggregationContext, SlidingWindowTracker]:
    ctx = AggregationContext()
    return ctx, SlidingWindowTracker(ctx)


class TestSlidingWindowTracker:
    def test_first_trade_creates_state(self):
        ctx, tracker = _tracker()
        agg = tracker.update("m1", 18, 1000, 5, 100)
        assert agg.volume_raw == 5
        assert agg.trade_count == 1
        assert agg.average_price_raw == 100
        assert ctx.windows["m1"].decimals == 18

    def test_eviction_scenario(self):
        ctx, tracker = _tracker()
        tracker.update("m1", 18, 0, 1, 10)
        tracker.update("m1", 18, 100, 2, 20)
        agg = tracker.update("m1", 18, 86500, 3, 30)

        # cutoff = 86500 - 86400 = 100: t=0 is older, t=100 sits on the edge
        state = ctx.windows["m1"]
        assert [e.timestamp for e in state.entries] == [100, 86500]
        assert agg.volume_raw == 5
        assert agg.trade_count == 2
        assert agg.average_price_raw == 25

    def test_entry_exactly_one_window_old_is_kept(self):
        _, tracker = _tracker()
        tracker.update("m1", 18, 100, 2, 20)
        agg = tracker.update("m1", 18, 100 + DAY, 3, 30)
        assert agg.trade_count == 2
        assert agg.volume_raw == 5

    def test_entry_older_than_window_is_evicted(self):
        _, tracker = _tracker()
        tracker.update("m1", 18, 99, 2, 20)
        agg = tracker.update("m1", 18, 100 + DAY, 3, 30)
        assert agg.trade_count == 1
        assert agg.volume_raw == 3

    def test_cutoff_never_negative(self):
        _, tracker = _tracker()
        tracker.update("m1", 18, 0, 4, 10)
        agg = tracker.update("m1", 18, 50, 6, 10)
        assert agg.trade_count == 2
        assert agg.volume_raw == 10

    def test_average_is_unweighted_mean(self):
        _, tracker = _tracker()
        tracker.update("m1", 18, 10, 1_000_000, 10)
        agg = tracker.update("m1", 18, 20, 1, 21)
        # integer division, volume plays no part
        assert agg.average_price_raw == 15

    def test_markets_are_independent(self):
        ctx, tracker = _tracker()
        tracker.update("m1", 18, 10, 1, 10)
        tracker.update("m2", 6, 10, 7, 10)
        assert ctx.windows["m1"].total_volume_raw == 1
        assert ctx.windows["m2"].total_volume_raw == 7
        assert ctx.windows["m2"].decimals == 6

    def test_bulk_eviction_after_quiet_period(self):
        ctx, tracker = _tracker()
        for t in range(0, 1000, 10):
            tracker.update("m1", 18, t, 1, 1)
        agg = tracker.update("m1", 18, 10 * DAY, 9, 4)
        assert agg.trade_count == 1
        assert agg.volume_raw == 9
        assert len(ctx.windows["m1"].entries) == 1

    def test_out_of_order_trade_is_accepted(self):
        ctx, tracker = _tracker()
        tracker.update("m1", 18, 200_000, 5, 10)
        agg = tracker.update("m1", 18, 100, 3, 10)
        assert agg.volume_raw >= 0
        assert agg.trade_count >= 0
        assert ctx.windows["m1"].entries[-1].timestamp == 100

    def test_custom_window_length(self):
        ctx = AggregationContext()
        tracker = SlidingWindowTracker(ctx, window_seconds=60)
        tracker.update("m1", 18, 0, 1, 1)
        tracker.update("m1", 18, 30, 2, 1)
        agg = tracker.update("m1", 18, 61, 3, 1)
        assert agg.volume_raw == 5

    def test_window_bound_holds_for_random_monotonic_stream(self):
        rng = random.Random(7)
        ctx, tracker = _tracker()
        t = 0
        for _ in range(500):
            t += rng.randint(0, 20_000)
            agg = tracker.update("m1", 18, t, rng.randint(0, 10**20), rng.randint(1, 10**18))
            entries = ctx.windows["m1"].entries
            assert all(e.timestamp >= t - DAY for e in entries)
            assert agg.volume_raw == sum(e.reserve_amount_raw for e in entries)
            assert agg.trade_count == len(entries)
