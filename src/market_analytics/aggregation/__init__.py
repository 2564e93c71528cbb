"""Aggregation core — windows, candles, rolling stats and platform totals."""

from market_analytics.aggregation.candles import PERIOD_SECONDS, CandleAggregator, bucket_start
from market_analytics.aggregation.context import (
    AggregationContext,
    PricePoint,
    SlidingWindowState,
    WindowEntry,
)
from market_analytics.aggregation.decimals import format_amount, normalize
from market_analytics.aggregation.global_snapshots import GlobalSnapshotPublisher, SnapshotValues
from market_analytics.aggregation.global_stats import GlobalStatsAggregator, MarketValuation
from market_analytics.aggregation.ingestor import IngestResult, TradeIngestor
from market_analytics.aggregation.rolling import RollingStatsPublisher
from market_analytics.aggregation.tokens import TokenDecimals
from market_analytics.aggregation.window import SlidingWindowTracker, WindowAggregate

__all__ = [
    "AggregationContext",
    "CandleAggregator",
    "GlobalSnapshotPublisher",
    "GlobalStatsAggregator",
    "IngestResult",
    "MarketValuation",
    "PERIOD_SECONDS",
    "PricePoint",
    "RollingStatsPublisher",
    "SlidingWindowState",
    "SlidingWindowTracker",
    "SnapshotValues",
    "TokenDecimals",
    "TradeIngestor",
    "WindowAggregate",
    "WindowEntry",
    "bucket_start",
    "format_amount",
    "normalize",
]
