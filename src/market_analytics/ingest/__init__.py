"""Trade-log replay into the aggregation core."""

from market_analytics.ingest.runner import (
    ReplaySummary,
    clear_derived,
    read_trades,
    replay,
    run,
    seed_markets,
)

__all__ = ["ReplaySummary", "clear_derived", "read_trades", "replay", "run", "seed_markets"]
