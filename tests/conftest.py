"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from market_analytics.aggregation import AggregationContext, TradeIngestor
from market_analytics.db.base import Base
from market_analytics.models import Market, Token, Trade
from market_analytics.store import InMemoryStore, SqlEntityStore

E18 = 10**18

USDC = Token(id="0xusdc", name="USD Coin", symbol="USDC", decimals=6)
DAI = Token(id="0xdai", name="Dai", symbol="DAI", decimals=18)
FLOOR_A = Token(id="0xfa", name="Floor A", symbol="FA", decimals=18)
FLOOR_B = Token(id="0xfb", name="Floor B", symbol="FB", decimals=18)


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created.

    SQLite has no schemas, so tables are moved to the default one.
    """
    engine = create_engine("sqlite:///:memory:")

    for table in Base.metadata.tables.values():
        table.schema = None

    Base.metadata.create_all(engine)

    session = Session(engine)
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def sql_store(db_session):
    return SqlEntityStore(db_session)


@pytest.fixture
def context():
    ctx = AggregationContext()
    yield ctx
    ctx.reset()


def seed_tokens(store) -> None:
    for token in (USDC, DAI, FLOOR_A, FLOOR_B):
        store.set(token)


def make_market(
    market_id: str = "0xmarket-a",
    reserve: Token = DAI,
    issuance: Token = FLOOR_A,
    **overrides,
) -> Market:
    fields = dict(
        id=market_id,
        reserve_token_id=reserve.id,
        issuance_token_id=issuance.id,
        current_price_raw=2 * E18,
        floor_price_raw=1 * E18,
        total_supply_raw=1_000 * E18,
        market_supply_raw=600 * E18,
        status="ACTIVE",
    )
    fields.update(overrides)
    return Market(**fields)


def make_trade(
    market_id: str = "0xmarket-a",
    timestamp: int = 1_700_000_000,
    reserve_amount_raw: int = E18,
    price_raw: int = 2 * E18,
    log_index: int = 0,
    trade_type: str = "BUY",
) -> Trade:
    return Trade(
        market_id=market_id,
        trade_type=trade_type,
        token_amount_raw=reserve_amount_raw // 2,
        reserve_amount_raw=reserve_amount_raw,
        price_raw=price_raw,
        timestamp=timestamp,
        transaction_hash=f"0xtx{timestamp}",
        log_index=log_index,
    )


@pytest.fixture
def seeded_store(store):
    seed_tokens(store)
    store.set(make_market())
    store.commit()
    return store


@pytest.fixture
def ingestor(seeded_store, context):
    return TradeIngestor(seeded_store, context)
