"""Platform-wide totals: 24h volume, TVL and market cap across all markets."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from market_analytics.aggregation.context import AggregationContext
from market_analytics.aggregation.decimals import format_amount, normalize
from market_analytics.aggregation.global_snapshots import GlobalSnapshotPublisher, SnapshotValues
from market_analytics.models import GLOBAL_STATS_ID, GlobalStats, Market
from market_analytics.store.base import EntityStore

log = structlog.get_logger("aggregation.global_stats")


@dataclass(frozen=True)
class MarketValuation:
    total_value_locked_raw: int = 0
    total_market_cap_raw: int = 0


class GlobalStatsAggregator:
    """Recomputes the ``global`` singleton after every trade.

    By default the 24h volume is a full rescan of every market's window.
    With ``incremental=True`` a running total is adjusted by the traded
    market's delta instead; both produce the same number because a window
    only changes when its own market trades.
    Without a ``market_id`` the incremental totals are rebuilt from a rescan.
    """

    def __init__(
        self,
        store: EntityStore,
        context: AggregationContext,
        snapshots: GlobalSnapshotPublisher,
        canonical_decimals: int = 18,
        price_decimals: int = 18,
        incremental: bool = False,
    ) -> None:
        self.store = store
        self.context = context
        self.snapshots = snapshots
        self.canonical_decimals = canonical_decimals
        self.price_decimals = price_decimals
        self.incremental = incremental

    # ── 24h volume ────────────────────────────────────────────

    def total_volume_rescan(self) -> int:
        """Sum of every window's volume, each rescaled to canonical decimals."""
        return sum(
            normalize(state.total_volume_raw, state.decimals, self.canonical_decimals)
            for state in self.context.windows.values()
        )

    def _refresh_market_volume(self, market_id: str) -> int:
        ctx = self.context
        state = ctx.windows.get(market_id)
        current = (
            normalize(state.total_volume_raw, state.decimals, self.canonical_decimals)
            if state is not None
            else 0
        )
        previous = ctx.normalized_volume.get(market_id, 0)
        ctx.normalized_volume[market_id] = current
        ctx.normalized_volume_total += current - previous
        return ctx.normalized_volume_total

    def _resync_market_volumes(self) -> int:
        """Rebuild the incremental bookkeeping from every window."""
        ctx = self.context
        ctx.normalized_volume = {
            market_id: normalize(state.total_volume_raw, state.decimals, self.canonical_decimals)
            for market_id, state in ctx.windows.items()
        }
        ctx.normalized_volume_total = sum(ctx.normalized_volume.values())
        return ctx.normalized_volume_total

    # ── TVL / market cap ──────────────────────────────────────

    def valuation(self) -> MarketValuation:
        """TVL and market cap over every traded market with a non-zero price.

        Prices are fixed-point with ``price_decimals``; markets that have a
        zero price are skipped outright.
        """
        scale = 10**self.price_decimals
        tvl = 0
        mcap = 0
        for market_id in sorted(self.context.markets_seen):
            market = self.store.get(Market, market_id)
            if market is None or market.current_price_raw <= 0:
                continue
            tvl += market.total_supply_raw * market.current_price_raw // scale
            mcap += market.market_supply_raw * market.current_price_raw // scale
        return MarketValuation(tvl, mcap)

    # ── Recompute ─────────────────────────────────────────────

    def recompute(
        self,
        timestamp: int,
        trade_volume_raw: int,
        trade_volume_decimals: int,
        market_id: str | None = None,
    ) -> GlobalStats:
        if not self.incremental:
            volume = self.total_volume_rescan()
        elif market_id is not None:
            volume = self._refresh_market_volume(market_id)
        else:
            volume = self._resync_market_volumes()

        valuation = self.valuation()

        # Debt/collateral belong to other handlers; carry them over untouched
        stats = self.store.get(GlobalStats, GLOBAL_STATS_ID) or GlobalStats()
        stats.total_markets = len(self.context.markets_seen)
        stats.active_markets = len(self.context.active_markets)
        stats.total_volume_raw = volume
        stats.total_volume_formatted = format_amount(volume, self.canonical_decimals)
        stats.last_updated_at = timestamp
        self.store.set(stats)

        self.snapshots.publish(
            timestamp,
            SnapshotValues(
                total_value_locked_raw=valuation.total_value_locked_raw,
                total_market_cap_raw=valuation.total_market_cap_raw,
                period_volume_raw=normalize(
                    trade_volume_raw, trade_volume_decimals, self.canonical_decimals
                ),
                total_markets=stats.total_markets,
                active_markets=stats.active_markets,
            ),
        )

        log.debug(
            "global_stats_recomputed",
            total_markets=stats.total_markets,
            active_markets=stats.active_markets,
            total_volume_raw=volume,
            tvl_raw=valuation.total_value_locked_raw,
        )
        return stats
