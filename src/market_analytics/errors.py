"""Exceptions raised by the aggregation core.

Both are raised before the core writes anything for a trade, so the caller
can skip the trade without rolling back partial output.
"""

from __future__ import annotations


class AggregationError(Exception):
    """Base class for trades the aggregation core refuses to process."""


class MarketNotFoundError(AggregationError):
    def __init__(self, market_id: str) -> None:
        super().__init__(f"market {market_id!r} is not in the entity store")
        self.market_id = market_id


class MissingTokenMetadataError(AggregationError):
    """Token decimals are unknown; the core never guesses a default."""

    def __init__(self, token_id: str, market_id: str | None = None) -> None:
        msg = f"no decimals for token {token_id!r}"
        if market_id is not None:
            msg += f" (market {market_id!r})"
        super().__init__(msg)
        self.token_id = token_id
        self.market_id = market_id
