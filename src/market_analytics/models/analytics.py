"""Derived analytics records written by the aggregation core.

Every monetary field is published twice: ``*_raw`` is the exact integer in
the token's smallest unit, ``*_formatted`` is its human-readable decimal
string (see :func:`market_analytics.aggregation.decimals.format_amount`).
"""

from __future__ import annotations

from pydantic import BaseModel

from market_analytics.config.schema import Period

GLOBAL_STATS_ID = "global"


class MarketRollingStats(BaseModel):
    """Trailing-window aggregates for one market, overwritten on every trade."""

    id: str
    market_id: str
    window_seconds: int
    volume_raw: int
    volume_formatted: str
    # Unweighted mean of trade prices in the window, not a VWAP
    average_price_raw: int
    average_price_formatted: str
    # From the price-history cache; with a price_history_size cap only the
    # newest trades in the window are covered
    high_price_raw: int = 0
    high_price_formatted: str = "0"
    low_price_raw: int = 0
    low_price_formatted: str = "0"
    trade_count: int
    last_updated_at: int


class PriceCandle(BaseModel):
    """OHLCV bar for one market, period and left-aligned bucket."""

    id: str
    market_id: str
    period: Period
    timestamp: int
    open_raw: int
    open_formatted: str
    high_raw: int
    high_formatted: str
    low_raw: int
    low_formatted: str
    close_raw: int
    close_formatted: str
    volume_raw: int
    volume_formatted: str
    trades: int


class MarketSnapshot(BaseModel):
    """Point-in-time market state plus trailing volume, one per market per hour."""

    id: str
    market_id: str
    timestamp: int
    price_raw: int
    price_formatted: str
    floor_price_raw: int
    floor_price_formatted: str
    total_supply_raw: int
    total_supply_formatted: str
    market_supply_raw: int
    market_supply_formatted: str
    volume_24h_raw: int
    volume_24h_formatted: str
    trades_24h: int


class GlobalStats(BaseModel):
    """Platform-wide singleton. Debt/collateral totals belong to the credit handlers."""

    id: str = GLOBAL_STATS_ID
    total_markets: int = 0
    active_markets: int = 0
    total_volume_raw: int = 0
    total_volume_formatted: str = "0"
    total_debt_raw: int = 0
    total_collateral_raw: int = 0
    last_updated_at: int = 0


class GlobalStatsSnapshot(BaseModel):
    """Time-bucketed platform snapshot.

    TVL and market cap are stocks (latest value wins within a bucket);
    ``period_volume_raw`` is a flow (summed across the bucket).
    """

    id: str
    period: Period
    timestamp: int
    total_value_locked_raw: int
    total_value_locked_formatted: str
    total_market_cap_raw: int
    total_market_cap_formatted: str
    period_volume_raw: int
    period_volume_formatted: str
    total_markets: int
    active_markets: int
