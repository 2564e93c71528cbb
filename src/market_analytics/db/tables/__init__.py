"""Import all table modules so Base.metadata knows about them."""

from market_analytics.db.tables.analytics import (
    SCHEMA,
    GlobalStatsRow,
    GlobalStatsSnapshotRow,
    MarketRollingStatsRow,
    MarketSnapshotRow,
    PriceCandleRow,
)
from market_analytics.db.tables.markets import MarketRow, TokenRow

__all__ = [
    "GlobalStatsRow",
    "GlobalStatsSnapshotRow",
    "MarketRollingStatsRow",
    "MarketRow",
    "MarketSnapshotRow",
    "PriceCandleRow",
    "SCHEMA",
    "TokenRow",
]
