"""Create market, token and analytics tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-16
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = "market_analytics"


def _amount(name: str) -> sa.Column:
    # uint256 kept as decimal text, see market_analytics.db.types.RawAmount
    return sa.Column(name, sa.Text, nullable=False)


def upgrade() -> None:
    op.create_table(
        "tokens",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("symbol", sa.Text, nullable=False),
        sa.Column("decimals", sa.Integer, nullable=False),
        schema=SCHEMA,
    )

    op.create_table(
        "markets",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("reserve_token_id", sa.Text, nullable=False),
        sa.Column("issuance_token_id", sa.Text, nullable=False),
        _amount("current_price_raw"),
        _amount("floor_price_raw"),
        _amount("total_supply_raw"),
        _amount("market_supply_raw"),
        sa.Column("buy_fee_bps", sa.Integer, nullable=False),
        sa.Column("sell_fee_bps", sa.Integer, nullable=False),
        sa.Column("status", sa.Text, nullable=False),
        schema=SCHEMA,
    )

    op.create_table(
        "market_rolling_stats",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("market_id", sa.Text, nullable=False),
        sa.Column("window_seconds", sa.Integer, nullable=False),
        _amount("volume_raw"),
        sa.Column("volume_formatted", sa.Text, nullable=False),
        _amount("average_price_raw"),
        sa.Column("average_price_formatted", sa.Text, nullable=False),
        _amount("high_price_raw"),
        sa.Column("high_price_formatted", sa.Text, nullable=False),
        _amount("low_price_raw"),
        sa.Column("low_price_formatted", sa.Text, nullable=False),
        sa.Column("trade_count", sa.BigInteger, nullable=False),
        sa.Column("last_updated_at", sa.BigInteger, nullable=False),
        schema=SCHEMA,
    )

    op.create_table(
        "price_candles",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("market_id", sa.Text, nullable=False),
        sa.Column("period", sa.Text, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=False),
        _amount("open_raw"),
        sa.Column("open_formatted", sa.Text, nullable=False),
        _amount("high_raw"),
        sa.Column("high_formatted", sa.Text, nullable=False),
        _amount("low_raw"),
        sa.Column("low_formatted", sa.Text, nullable=False),
        _amount("close_raw"),
        sa.Column("close_formatted", sa.Text, nullable=False),
        _amount("volume_raw"),
        sa.Column("volume_formatted", sa.Text, nullable=False),
        sa.Column("trades", sa.BigInteger, nullable=False),
        schema=SCHEMA,
    )

    op.create_table(
        "market_snapshots",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("market_id", sa.Text, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=False),
        _amount("price_raw"),
        sa.Column("price_formatted", sa.Text, nullable=False),
        _amount("floor_price_raw"),
        sa.Column("floor_price_formatted", sa.Text, nullable=False),
        _amount("total_supply_raw"),
        sa.Column("total_supply_formatted", sa.Text, nullable=False),
        _amount("market_supply_raw"),
        sa.Column("market_supply_formatted", sa.Text, nullable=False),
        _amount("volume_24h_raw"),
        sa.Column("volume_24h_formatted", sa.Text, nullable=False),
        sa.Column("trades_24h", sa.BigInteger, nullable=False),
        schema=SCHEMA,
    )

    op.create_table(
        "global_stats",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("total_markets", sa.Integer, nullable=False),
        sa.Column("active_markets", sa.Integer, nullable=False),
        _amount("total_volume_raw"),
        sa.Column("total_volume_formatted", sa.Text, nullable=False),
        _amount("total_debt_raw"),
        _amount("total_collateral_raw"),
        sa.Column("last_updated_at", sa.BigInteger, nullable=False),
        schema=SCHEMA,
    )

    op.create_table(
        "global_stats_snapshots",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("period", sa.Text, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=False),
        _amount("total_value_locked_raw"),
        sa.Column("total_value_locked_formatted", sa.Text, nullable=False),
        _amount("total_market_cap_raw"),
        sa.Column("total_market_cap_formatted", sa.Text, nullable=False),
        _amount("period_volume_raw"),
        sa.Column("period_volume_formatted", sa.Text, nullable=False),
        sa.Column("total_markets", sa.Integer, nullable=False),
        sa.Column("active_markets", sa.Integer, nullable=False),
        schema=SCHEMA,
    )

    for table in ("market_rolling_stats", "price_candles", "market_snapshots"):
        op.create_index(f"ix_{table}_market_id", table, ["market_id"], schema=SCHEMA)


def downgrade() -> None:
    for table in (
        "global_stats_snapshots",
        "global_stats",
        "market_snapshots",
        "price_candles",
        "market_rolling_stats",
        "markets",
        "tokens",
    ):
        op.drop_table(table, schema=SCHEMA)
