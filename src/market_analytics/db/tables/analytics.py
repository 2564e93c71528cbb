"""ORM tables for the derived analytics records."""

from sqlalchemy import BigInteger, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from market_analytics.db.base import Base
from market_analytics.db.types import RawAmount

SCHEMA = "market_analytics"


class MarketRollingStatsRow(Base):
    __tablename__ = "market_rolling_stats"
    __table_args__ = (
        Index("ix_market_rolling_stats_market_id", "market_id"),
        {"schema": SCHEMA},
    )

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    market_id: Mapped[str] = mapped_column(Text, nullable=False)
    window_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    volume_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    volume_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    average_price_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    average_price_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    high_price_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    high_price_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    low_price_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    low_price_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    trade_count: Mapped[int] = mapped_column(BigInteger, nullable=False)
    last_updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)


class PriceCandleRow(Base):
    __tablename__ = "price_candles"
    __table_args__ = (
        Index("ix_price_candles_market_id", "market_id"),
        {"schema": SCHEMA},
    )

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    market_id: Mapped[str] = mapped_column(Text, nullable=False)
    period: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    open_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    open_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    high_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    high_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    low_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    low_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    close_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    close_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    volume_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    volume_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    trades: Mapped[int] = mapped_column(BigInteger, nullable=False)


class MarketSnapshotRow(Base):
    __tablename__ = "market_snapshots"
    __table_args__ = (
        Index("ix_market_snapshots_market_id", "market_id"),
        {"schema": SCHEMA},
    )

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    market_id: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    price_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    price_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    floor_price_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    floor_price_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    total_supply_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    total_supply_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    market_supply_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    market_supply_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    volume_24h_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    volume_24h_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    trades_24h: Mapped[int] = mapped_column(BigInteger, nullable=False)


class GlobalStatsRow(Base):
    __tablename__ = "global_stats"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    total_markets: Mapped[int] = mapped_column(Integer, nullable=False)
    active_markets: Mapped[int] = mapped_column(Integer, nullable=False)
    total_volume_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    total_volume_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    total_debt_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    total_collateral_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    last_updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)


class GlobalStatsSnapshotRow(Base):
    __tablename__ = "global_stats_snapshots"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    period: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total_value_locked_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    total_value_locked_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    total_market_cap_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    total_market_cap_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    period_volume_raw: Mapped[int] = mapped_column(RawAmount, nullable=False)
    period_volume_formatted: Mapped[str] = mapped_column(Text, nullable=False)
    total_markets: Mapped[int] = mapped_column(Integer, nullable=False)
    active_markets: Mapped[int] = mapped_column(Integer, nullable=False)
