"""Entity stores the aggregation core persists through."""

from market_analytics.store.base import EntityStore
from market_analytics.store.memory import InMemoryStore
from market_analytics.store.sql import SqlEntityStore

__all__ = ["EntityStore", "InMemoryStore", "SqlEntityStore"]
