"""Database layer — engine, session, ORM base."""

from market_analytics.db.base import Base
from market_analytics.db.engine import create_tables, get_session, init_engine

__all__ = ["Base", "create_tables", "get_session", "init_engine"]
