"""Database engine and session management."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, Engine, text
from sqlalchemy.orm import Session, sessionmaker

from market_analytics.db.base import Base
from market_analytics.db.tables import SCHEMA

_SessionLocal: sessionmaker[Session] | None = None


def _ensure_psycopg_driver(url: str) -> str:
    """Rewrite postgresql:// to postgresql+psycopg:// for psycopg v3."""
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


def init_engine(url: str, **kwargs) -> Engine:
    """Create the engine and the global session factory.

    SQLite has no schemas, so the analytics schema is translated away there.
    """
    global _SessionLocal
    if url.startswith("sqlite"):
        kwargs.setdefault("execution_options", {"schema_translate_map": {SCHEMA: None}})
    engine = create_engine(_ensure_psycopg_driver(url), **kwargs)
    _SessionLocal = sessionmaker(bind=engine)
    return engine


def get_session() -> Generator[Session, None, None]:
    """Yield a session, closing it when done."""
    if _SessionLocal is None:
        raise RuntimeError("Database engine not initialised — call init_engine() first")
    session = _SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_tables(engine: Engine, *, drop_existing: bool = False) -> None:
    """Create every analytics table, plus the schema on Postgres."""
    if engine.dialect.name == "postgresql":
        with engine.begin() as conn:
            conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {SCHEMA}"))
    if drop_existing:
        Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
