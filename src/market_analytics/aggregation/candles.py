"""OHLCV candle aggregation over fixed, left-aligned time buckets."""

from __future__ import annotations

import structlog

from market_analytics.aggregation.decimals import format_amount
from market_analytics.config.schema import Period
from market_analytics.models import PriceCandle
from market_analytics.store.base import EntityStore

log = structlog.get_logger("aggregation.candles")

PERIOD_SECONDS: dict[str, int] = {
    "ONE_HOUR": 3600,
    "FOUR_HOURS": 14400,
    "ONE_DAY": 86400,
}


def bucket_start(timestamp: int, period_seconds: int) -> int:
    """Left edge of the bucket containing *timestamp*."""
    return timestamp // period_seconds * period_seconds


def candle_id(market_id: str, period: str, bucket: int) -> str:
    return f"{market_id}-{period}-{bucket}"


class CandleAggregator:
    """Writes one :class:`PriceCandle` per (market, period, bucket).

    ``close`` is whatever the last applied trade said, so trades must be
    applied in non-decreasing timestamp order per market for it to be the
    most recent price.
    """

    def __init__(self, store: EntityStore, price_decimals: int = 18) -> None:
        self.store = store
        self.price_decimals = price_decimals

    def apply(
        self,
        market_id: str,
        period: Period,
        period_seconds: int,
        timestamp: int,
        price_raw: int,
        reserve_amount_raw: int,
        volume_decimals: int,
    ) -> PriceCandle:
        bucket = bucket_start(timestamp, period_seconds)
        cid = candle_id(market_id, period, bucket)
        price_fmt = format_amount(price_raw, self.price_decimals)

        candle = self.store.get(PriceCandle, cid)
        if candle is None:
            candle = PriceCandle(
                id=cid,
                market_id=market_id,
                period=period,
                timestamp=bucket,
                open_raw=price_raw,
                open_formatted=price_fmt,
                high_raw=price_raw,
                high_formatted=price_fmt,
                low_raw=price_raw,
                low_formatted=price_fmt,
                close_raw=price_raw,
                close_formatted=price_fmt,
                volume_raw=reserve_amount_raw,
                volume_formatted=format_amount(reserve_amount_raw, volume_decimals),
                trades=1,
            )
            log.debug("candle_opened", candle_id=cid, period=period, bucket=bucket)
        else:
            if price_raw > candle.high_raw:
                candle.high_raw = price_raw
                candle.high_formatted = price_fmt
            if price_raw < candle.low_raw:
                candle.low_raw = price_raw
                candle.low_formatted = price_fmt
            candle.close_raw = price_raw
            candle.close_formatted = price_fmt
            candle.volume_raw += reserve_amount_raw
            candle.volume_formatted = format_amount(candle.volume_raw, volume_decimals)
            candle.trades += 1

        self.store.set(candle)
        return candle

    def apply_all(
        self,
        market_id: str,
        periods: list[Period],
        timestamp: int,
        price_raw: int,
        reserve_amount_raw: int,
        volume_decimals: int,
    ) -> list[PriceCandle]:
        """Apply one trade to every configured period independently."""
        return [
            self.apply(
                market_id,
                period,
                PERIOD_SECONDS[period],
                timestamp,
                price_raw,
                reserve_amount_raw,
                volume_decimals,
            )
            for period in periods
        ]
