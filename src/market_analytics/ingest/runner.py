"""Replay runner — feeds an ordered trade log through the aggregation core.

Window and price-history state is not persisted, so a restart replays the
log from genesis: derived records are cleared and rebuilt on every run
unless ``resume`` is set.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from market_analytics.aggregation import AggregationContext, TradeIngestor
from market_analytics.config.loader import load_config
from market_analytics.config.schema import AppConfig
from market_analytics.db.engine import create_tables, get_session, init_engine
from market_analytics.errors import AggregationError
from market_analytics.logging.setup import get_logger, setup_logging
from market_analytics.models import (
    GLOBAL_STATS_ID,
    GlobalStats,
    GlobalStatsSnapshot,
    Market,
    MarketRollingStats,
    MarketSnapshot,
    PriceCandle,
    Token,
    Trade,
)
from market_analytics.store.base import EntityStore
from market_analytics.store.sql import SqlEntityStore

log = get_logger("ingest")

DERIVED_MODELS = (MarketRollingStats, PriceCandle, MarketSnapshot, GlobalStatsSnapshot)


@dataclass
class ReplaySummary:
    ingested: int = 0
    skipped: int = 0
    invalid: int = 0


def read_trades(path: str | Path) -> Iterator[tuple[int, Trade | None, str]]:
    """Yield ``(line_no, trade, raw_line)`` per non-blank JSON line.

    ``trade`` is None when the line doesn't validate as a Trade.
    """
    with open(path) as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield line_no, Trade.model_validate_json(line), line
            except ValidationError:
                yield line_no, None, line


def seed_markets(store: EntityStore, path: str | Path) -> tuple[int, int]:
    """Upsert the tokens and markets listed in a JSON seed file.

    Format: ``{"tokens": [Token, ...], "markets": [Market, ...]}``.
    """
    with open(path) as f:
        data = json.load(f)
    tokens = [Token.model_validate(t) for t in data.get("tokens", [])]
    markets = [Market.model_validate(m) for m in data.get("markets", [])]
    for entity in [*tokens, *markets]:
        store.set(entity)
    store.commit()
    log.info("seed_loaded", tokens=len(tokens), markets=len(markets))
    return len(tokens), len(markets)


def replay(
    store: EntityStore,
    ingestor: TradeIngestor,
    trades: Iterator[tuple[int, Trade | None, str]],
) -> ReplaySummary:
    """Ingest trades one at a time, committing after each one."""
    summary = ReplaySummary()
    for line_no, trade, raw in trades:
        if trade is None:
            summary.invalid += 1
            log.error("trade_invalid", line=line_no, raw=raw[:200])
            continue
        try:
            ingestor.ingest(trade)
        except AggregationError as exc:
            store.rollback()
            summary.skipped += 1
            log.warning("trade_skipped", line=line_no, trade_id=trade.id, reason=str(exc))
            continue
        except Exception:
            store.rollback()
            log.exception("trade_failed", line=line_no, trade_id=trade.id)
            raise
        store.commit()
        summary.ingested += 1
    return summary


def clear_derived(store: EntityStore) -> dict[str, int]:
    """Drop every record a genesis replay rebuilds, then commit.

    Candles and global snapshots accumulate per trade, so replaying onto
    them would count each trade twice. The ``global`` row keeps its
    debt/collateral totals; only the fields this core derives are zeroed.
    """
    removed = {model.__name__: store.delete_all(model) for model in DERIVED_MODELS}
    stats = store.get(GlobalStats, GLOBAL_STATS_ID)
    if stats is not None:
        stats.total_markets = 0
        stats.active_markets = 0
        stats.total_volume_raw = 0
        stats.total_volume_formatted = "0"
        store.set(stats)
    store.commit()
    log.info("derived_cleared", **removed)
    return removed


def run(
    config: AppConfig,
    trades_path: str | Path,
    *,
    markets_path: str | Path | None = None,
    reset_schema: bool = False,
    resume: bool = False,
) -> ReplaySummary:
    """Replay *trades_path* into the configured database.

    By default the log is treated as the full history: derived records are
    cleared first and rebuilt from scratch. With ``resume=True`` the log must
    hold only trades newer than the last run; derived records are kept and
    the market sets are rehydrated, but the 24h windows start empty.
    """
    engine = init_engine(config.database.url)
    create_tables(engine, drop_existing=reset_schema)

    session_gen = get_session()
    session = next(session_gen)
    try:
        store = SqlEntityStore(session)
        if markets_path is not None:
            seed_markets(store, markets_path)

        context = AggregationContext(price_history_size=config.aggregation.price_history_size)
        if resume:
            context.rehydrate(store)
        else:
            clear_derived(store)
        ingestor = TradeIngestor(store, context, config.aggregation)

        log.info("replay_started", trades=str(trades_path), resume=resume)
        summary = replay(store, ingestor, read_trades(trades_path))
        log.info(
            "replay_finished",
            ingested=summary.ingested,
            skipped=summary.skipped,
            invalid=summary.invalid,
            markets_seen=len(context.markets_seen),
        )
        return summary
    finally:
        try:
            next(session_gen)
        except StopIteration:
            pass


def main(
    trades_path: str,
    config_path: str | None = None,
    markets_path: str | None = None,
    reset_schema: bool = False,
    resume: bool = False,
) -> None:
    """Entry point — load config, set up logging, replay the trade log."""
    config = load_config(config_path)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    run(
        config,
        trades_path,
        markets_path=markets_path,
        reset_schema=reset_schema,
        resume=resume,
    )
