"""Sliding-window tracker — trailing volume, trade count and mean price per market."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from market_analytics.aggregation.context import (
    AggregationContext,
    SlidingWindowState,
    WindowEntry,
)

log = structlog.get_logger("aggregation.window")

DEFAULT_WINDOW_SECONDS = 86400


@dataclass(frozen=True)
class WindowAggregate:
    volume_raw: int
    trade_count: int
    average_price_raw: int


def average_price(state: SlidingWindowState) -> int:
    """Unweighted arithmetic mean of trade prices (not volume- or time-weighted)."""
    if state.trade_count <= 0:
        return 0
    return state.price_sum_raw // state.trade_count


class SlidingWindowTracker:
    """Maintains one :class:`SlidingWindowState` per market on the context.

    An entry stays in the window while its timestamp is at least
    ``now - window_seconds``, so the retained bound is ``timestamp >= now -
    window_seconds`` rather than the strict ``>``: a trade exactly one window
    old still counts. Only entries strictly older than the cutoff are evicted.
    Entries are appended at the tail and evicted from the head, so each
    trade is inserted and removed at most once (amortised O(1)). Trades that
    arrive with an older timestamp than the tail are accepted as-is; the
    running totals are clamped at zero, which can under-report volume for
    out-of-order input.
    """

    def __init__(
        self,
        context: AggregationContext,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
    ) -> None:
        self.context = context
        self.window_seconds = window_seconds

    def state(self, market_id: str) -> SlidingWindowState | None:
        return self.context.windows.get(market_id)

    def update(
        self,
        market_id: str,
        decimals: int,
        timestamp: int,
        reserve_amount_raw: int,
        price_raw: int,
    ) -> WindowAggregate:
        state = self.context.windows.get(market_id)
        if state is None:
            state = SlidingWindowState(decimals=decimals)
            self.context.windows[market_id] = state
        state.decimals = decimals

        state.entries.append(WindowEntry(timestamp, reserve_amount_raw, price_raw))
        state.total_volume_raw += reserve_amount_raw
        state.trade_count += 1
        state.price_sum_raw += price_raw

        cutoff = max(0, timestamp - self.window_seconds)
        evicted = 0
        while state.entries and state.entries[0].timestamp < cutoff:
            old = state.entries.popleft()
            state.total_volume_raw -= old.reserve_amount_raw
            state.trade_count -= 1
            state.price_sum_raw -= old.price_raw
            evicted += 1

        state.total_volume_raw = max(0, state.total_volume_raw)
        state.trade_count = max(0, state.trade_count)
        state.price_sum_raw = max(0, state.price_sum_raw)

        if evicted:
            log.debug("window_evicted", market_id=market_id, evicted=evicted, cutoff=cutoff)

        return WindowAggregate(
            volume_raw=state.total_volume_raw,
            trade_count=state.trade_count,
            average_price_raw=average_price(state),
        )
