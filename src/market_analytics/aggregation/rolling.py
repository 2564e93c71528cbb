"""Materializes a market's sliding window into a persisted MarketRollingStats."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from market_analytics.aggregation.context import PricePoint, SlidingWindowState
from market_analytics.aggregation.decimals import format_amount
from market_analytics.aggregation.window import DEFAULT_WINDOW_SECONDS, average_price
from market_analytics.models import MarketRollingStats
from market_analytics.store.base import EntityStore

log = structlog.get_logger("aggregation.rolling")


def rolling_stats_id(market_id: str, window_seconds: int) -> str:
    return f"{market_id}-{window_seconds}"


class RollingStatsPublisher:
    def __init__(
        self,
        store: EntityStore,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        price_decimals: int = 18,
    ) -> None:
        self.store = store
        self.window_seconds = window_seconds
        self.price_decimals = price_decimals

    def build(
        self,
        market_id: str,
        decimals: int,
        state: SlidingWindowState,
        timestamp: int,
        price_points: Iterable[PricePoint] = (),
    ) -> MarketRollingStats:
        """Project the current window state; the output depends on nothing else."""
        prices = [p.price_raw for p in price_points]
        avg = average_price(state)
        high = max(prices, default=0)
        low = min(prices, default=0)
        return MarketRollingStats(
            id=rolling_stats_id(market_id, self.window_seconds),
            market_id=market_id,
            window_seconds=self.window_seconds,
            volume_raw=state.total_volume_raw,
            volume_formatted=format_amount(state.total_volume_raw, decimals),
            average_price_raw=avg,
            average_price_formatted=format_amount(avg, self.price_decimals),
            high_price_raw=high,
            high_price_formatted=format_amount(high, self.price_decimals),
            low_price_raw=low,
            low_price_formatted=format_amount(low, self.price_decimals),
            trade_count=state.trade_count,
            last_updated_at=timestamp,
        )

    def publish(
        self,
        market_id: str,
        decimals: int,
        state: SlidingWindowState,
        timestamp: int,
        price_points: Iterable[PricePoint] = (),
    ) -> tuple[int, int]:
        """Overwrite the market's rolling stats; returns (volume_24h_raw, trades_24h)."""
        stats = self.build(market_id, decimals, state, timestamp, price_points)
        self.store.set(stats)
        log.debug(
            "rolling_stats_published",
            market_id=market_id,
            volume_raw=stats.volume_raw,
            trade_count=stats.trade_count,
        )
        return stats.volume_raw, stats.trade_count
