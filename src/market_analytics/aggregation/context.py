"""Process-wide transient aggregation state, held in one explicit object.

Lifecycle: build one :class:`AggregationContext` when the indexer starts,
pass it to every component, and call :meth:`reset` between independent
test runs. None of this state is persisted. After a restart the windows
and price history are only exact if the trade log is replayed from
genesis; :meth:`rehydrate` restores just the market sets, which can be
derived exactly from persisted markets.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

import structlog

from market_analytics.models import Market
from market_analytics.store.base import EntityStore

log = structlog.get_logger("aggregation.context")


@dataclass
class WindowEntry:
    timestamp: int
    reserve_amount_raw: int
    price_raw: int


@dataclass
class SlidingWindowState:
    """Trades inside the trailing window for one market, oldest first."""

    decimals: int
    entries: deque[WindowEntry] = field(default_factory=deque)
    total_volume_raw: int = 0
    trade_count: int = 0
    price_sum_raw: int = 0


@dataclass
class PricePoint:
    timestamp: int
    price_raw: int


class AggregationContext:
    """Per-market windows, price history and market sets for one indexer process."""

    def __init__(self, price_history_size: int | None = None) -> None:
        self.price_history_size = price_history_size
        self.windows: dict[str, SlidingWindowState] = {}
        self.price_history: dict[str, deque[PricePoint]] = {}
        self.markets_seen: set[str] = set()
        self.active_markets: set[str] = set()
        # Incremental global volume bookkeeping (canonical decimals)
        self.normalized_volume: dict[str, int] = {}
        self.normalized_volume_total: int = 0

    def record_price(self, market_id: str, timestamp: int, price_raw: int) -> None:
        history = self.price_history.get(market_id)
        if history is None:
            history = deque(maxlen=self.price_history_size)
            self.price_history[market_id] = history
        history.append(PricePoint(timestamp, price_raw))

    def trim_price_history(self, market_id: str, cutoff: int) -> None:
        history = self.price_history.get(market_id)
        if not history:
            return
        while history and history[0].timestamp < cutoff:
            history.popleft()

    def observe_market(self, market: Market) -> None:
        """Track a traded market and whether it currently counts as active."""
        self.markets_seen.add(market.id)
        if market.status == "ACTIVE":
            self.active_markets.add(market.id)
        else:
            self.active_markets.discard(market.id)

    def rehydrate(self, store: EntityStore) -> int:
        """Rebuild the market sets from persisted markets that have traded.

        A market with a non-zero current price has been traded at least once.
        Returns the number of markets restored.
        """
        restored = 0
        for market in store.all(Market):
            if market.current_price_raw > 0:
                self.observe_market(market)
                restored += 1
        log.info(
            "context_rehydrated",
            markets_seen=len(self.markets_seen),
            active_markets=len(self.active_markets),
        )
        return restored

    def reset(self) -> None:
        """Drop all transient state."""
        self.windows.clear()
        self.price_history.clear()
        self.markets_seen.clear()
        self.active_markets.clear()
        self.normalized_volume.clear()
        self.normalized_volume_total = 0
