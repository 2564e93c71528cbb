"""Structured logging."""

from market_analytics.logging.setup import (
    bind_trade_context,
    clear_trade_context,
    get_logger,
    setup_logging,
)

__all__ = ["bind_trade_context", "clear_trade_context", "get_logger", "setup_logging"]
