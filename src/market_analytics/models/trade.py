"""Trade event model — the input delivered by the event-sourcing host."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

TradeType = Literal["BUY", "SELL"]


class Trade(BaseModel):
    """One TokensBought / TokensSold event, already ordered by (block, log index)."""

    market_id: str
    trade_type: TradeType
    token_amount_raw: int = Field(ge=0)
    reserve_amount_raw: int = Field(ge=0)
    price_raw: int = Field(ge=0)
    timestamp: int = Field(ge=0)
    transaction_hash: str
    log_index: int = Field(ge=0)

    @property
    def id(self) -> str:
        return f"{self.transaction_hash}-{self.log_index}"
