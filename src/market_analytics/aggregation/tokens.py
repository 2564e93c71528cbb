"""Token decimals lookup, memoised — token precision never changes."""

from __future__ import annotations

from market_analytics.errors import MissingTokenMetadataError
from market_analytics.models import Token
from market_analytics.store.base import EntityStore


class TokenDecimals:
    def __init__(self, store: EntityStore) -> None:
        self.store = store
        self._cache: dict[str, int] = {}

    def decimals_of(self, token_id: str, *, market_id: str | None = None) -> int:
        """Return the token's decimals or raise; there is no default precision."""
        cached = self._cache.get(token_id)
        if cached is not None:
            return cached
        token = self.store.get(Token, token_id)
        if token is None:
            raise MissingTokenMetadataError(token_id, market_id)
        self._cache[token_id] = token.decimals
        return token.decimals

    def clear(self) -> None:
        self._cache.clear()
