"""ORM tables for the market and token records owned by the handler layer."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from market_analytics.db.base import Base
from market_analytics.db.types import RawAmount

SCHEMA = "market_analytics"


class TokenRow(Base):
    __tablename__ = "tokens"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    symbol: Mapped[str] = mapped_column(Text, nullable=False, default="")
    decimals: Mapped[int] = mapped_column(Integer, nullable=False)


class MarketRow(Base):
    __tablename__ = "markets"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    reserve_token_id: Mapped[str] = mapped_column(Text, nullable=False)
    issuance_token_id: Mapped[str] = mapped_column(Text, nullable=False)
    current_price_raw: Mapped[int] = mapped_column(RawAmount, nullable=False, default=0)
    floor_price_raw: Mapped[int] = mapped_column(RawAmount, nullable=False, default=0)
    total_supply_raw: Mapped[int] = mapped_column(RawAmount, nullable=False, default=0)
    market_supply_raw: Mapped[int] = mapped_column(RawAmount, nullable=False, default=0)
    buy_fee_bps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sell_fee_bps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="ACTIVE")
