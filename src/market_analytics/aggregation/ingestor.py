"""Trade ingestion entry point — drives every aggregation step for one trade.

Order per trade: sliding window → rolling stats → candles (one per period)
→ market snapshot → global stats → global snapshots. Market and token
metadata are resolved before anything is written, so a trade that raises
:class:`~market_analytics.errors.AggregationError` leaves no output behind.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from market_analytics.aggregation.candles import CandleAggregator, bucket_start
from market_analytics.aggregation.context import AggregationContext
from market_analytics.aggregation.decimals import format_amount
from market_analytics.aggregation.global_snapshots import GlobalSnapshotPublisher
from market_analytics.aggregation.global_stats import GlobalStatsAggregator
from market_analytics.aggregation.rolling import RollingStatsPublisher
from market_analytics.aggregation.tokens import TokenDecimals
from market_analytics.aggregation.window import SlidingWindowTracker
from market_analytics.config.schema import AggregationConfig
from market_analytics.errors import MarketNotFoundError
from market_analytics.logging import bind_trade_context, clear_trade_context
from market_analytics.models import Market, MarketSnapshot, Trade
from market_analytics.store.base import EntityStore

log = structlog.get_logger("aggregation.ingestor")


@dataclass(frozen=True)
class IngestResult:
    trade_id: str
    market_id: str
    volume_24h_raw: int
    trades_24h: int


class TradeIngestor:
    """Wires the aggregation components around one store and one context."""

    def __init__(
        self,
        store: EntityStore,
        context: AggregationContext | None = None,
        config: AggregationConfig | None = None,
    ) -> None:
        self.config = config or AggregationConfig()
        cfg = self.config
        self.store = store
        self.context = context or AggregationContext(price_history_size=cfg.price_history_size)
        self.tokens = TokenDecimals(store)
        self.window = SlidingWindowTracker(self.context, cfg.window_seconds)
        self.rolling = RollingStatsPublisher(store, cfg.window_seconds, cfg.price_decimals)
        self.candles = CandleAggregator(store, cfg.price_decimals)
        self.global_stats = GlobalStatsAggregator(
            store,
            self.context,
            GlobalSnapshotPublisher(store, cfg.snapshot_periods, cfg.canonical_decimals),
            canonical_decimals=cfg.canonical_decimals,
            price_decimals=cfg.price_decimals,
            incremental=cfg.incremental_global_volume,
        )

    def ingest(self, trade: Trade) -> IngestResult:
        market = self.store.get(Market, trade.market_id)
        if market is None:
            raise MarketNotFoundError(trade.market_id)
        reserve_decimals = self.tokens.decimals_of(market.reserve_token_id, market_id=market.id)
        issuance_decimals = self.tokens.decimals_of(market.issuance_token_id, market_id=market.id)

        bind_trade_context(trade.id, market.id, trade.timestamp)
        try:
            return self._aggregate(trade, market, reserve_decimals, issuance_decimals)
        finally:
            clear_trade_context()

    def _aggregate(
        self,
        trade: Trade,
        market: Market,
        reserve_decimals: int,
        issuance_decimals: int,
    ) -> IngestResult:
        cfg = self.config
        ctx = self.context

        ctx.observe_market(market)

        self.window.update(
            market.id,
            reserve_decimals,
            trade.timestamp,
            trade.reserve_amount_raw,
            trade.price_raw,
        )
        ctx.record_price(market.id, trade.timestamp, trade.price_raw)
        ctx.trim_price_history(market.id, max(0, trade.timestamp - cfg.window_seconds))

        volume_24h, trades_24h = self.rolling.publish(
            market.id,
            reserve_decimals,
            ctx.windows[market.id],
            trade.timestamp,
            ctx.price_history.get(market.id, ()),
        )

        self.candles.apply_all(
            market.id,
            cfg.candle_periods,
            trade.timestamp,
            trade.price_raw,
            trade.reserve_amount_raw,
            reserve_decimals,
        )

        self.write_market_snapshot(
            market, trade.timestamp, volume_24h, trades_24h, reserve_decimals, issuance_decimals
        )

        self.global_stats.recompute(
            trade.timestamp,
            trade.reserve_amount_raw,
            reserve_decimals,
            market_id=market.id,
        )

        log.info(
            "trade_ingested",
            trade_type=trade.trade_type,
            reserve_amount_raw=trade.reserve_amount_raw,
            price_raw=trade.price_raw,
            volume_24h_raw=volume_24h,
            trades_24h=trades_24h,
        )
        return IngestResult(trade.id, market.id, volume_24h, trades_24h)

    def write_market_snapshot(
        self,
        market: Market,
        timestamp: int,
        volume_24h_raw: int,
        trades_24h: int,
        reserve_decimals: int,
        issuance_decimals: int,
    ) -> MarketSnapshot:
        """Hourly market history; later trades in the same hour overwrite it."""
        bucket = bucket_start(timestamp, self.config.market_snapshot_seconds)
        price_decimals = self.config.price_decimals
        snapshot = MarketSnapshot(
            id=f"{market.id}-{bucket}",
            market_id=market.id,
            timestamp=bucket,
            price_raw=market.current_price_raw,
            price_formatted=format_amount(market.current_price_raw, price_decimals),
            floor_price_raw=market.floor_price_raw,
            floor_price_formatted=format_amount(market.floor_price_raw, price_decimals),
            total_supply_raw=market.total_supply_raw,
            total_supply_formatted=format_amount(market.total_supply_raw, issuance_decimals),
            market_supply_raw=market.market_supply_raw,
            market_supply_formatted=format_amount(market.market_supply_raw, issuance_decimals),
            volume_24h_raw=volume_24h_raw,
            volume_24h_formatted=format_amount(volume_24h_raw, reserve_decimals),
            trades_24h=trades_24h,
        )
        self.store.set(snapshot)
        return snapshot

    def reset(self) -> None:
        """Forget all transient state (windows, price history, market sets)."""
        self.context.reset()
        self.tokens.clear()
