"""Market and token models — read-only inputs owned by the handler layer."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

MarketStatus = Literal["ACTIVE", "PAUSED", "CLOSED"]


class Token(BaseModel):
    """An ERC-20 token as far as aggregation cares about it."""

    id: str
    name: str = ""
    symbol: str = ""
    decimals: int = Field(ge=0)


class Market(BaseModel):
    """A bonding-curve market with its reserve/issuance token pair."""

    id: str
    reserve_token_id: str
    issuance_token_id: str
    current_price_raw: int = Field(default=0, ge=0)
    floor_price_raw: int = Field(default=0, ge=0)
    total_supply_raw: int = Field(default=0, ge=0)
    market_supply_raw: int = Field(default=0, ge=0)
    buy_fee_bps: int = Field(default=0, ge=0)
    sell_fee_bps: int = Field(default=0, ge=0)
    status: MarketStatus = "ACTIVE"
