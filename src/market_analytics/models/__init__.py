"""Pydantic domain models."""

from market_analytics.models.analytics import (
    GLOBAL_STATS_ID,
    GlobalStats,
    GlobalStatsSnapshot,
    MarketRollingStats,
    MarketSnapshot,
    PriceCandle,
)
from market_analytics.models.market import Market, MarketStatus, Token
from market_analytics.models.trade import Trade, TradeType

__all__ = [
    "GLOBAL_STATS_ID",
    "GlobalStats",
    "GlobalStatsSnapshot",
    "Market",
    "MarketRollingStats",
    "MarketSnapshot",
    "MarketStatus",
    "PriceCandle",
    "Token",
    "Trade",
    "TradeType",
]
