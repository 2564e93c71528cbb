"""SQLAlchemy-backed entity store — one ORM table per entity model."""

from __future__ import annotations

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from market_analytics.db.base import Base
from market_analytics.db.tables import (
    GlobalStatsRow,
    GlobalStatsSnapshotRow,
    MarketRollingStatsRow,
    MarketRow,
    MarketSnapshotRow,
    PriceCandleRow,
    TokenRow,
)
from market_analytics.models import (
    GlobalStats,
    GlobalStatsSnapshot,
    Market,
    MarketRollingStats,
    MarketSnapshot,
    PriceCandle,
    Token,
)
from market_analytics.store.base import EntityT

ROW_FOR_MODEL: dict[type[BaseModel], type[Base]] = {
    Token: TokenRow,
    Market: MarketRow,
    MarketRollingStats: MarketRollingStatsRow,
    PriceCandle: PriceCandleRow,
    MarketSnapshot: MarketSnapshotRow,
    GlobalStats: GlobalStatsRow,
    GlobalStatsSnapshot: GlobalStatsSnapshotRow,
}


def _row_class(model: type[BaseModel]) -> type[Base]:
    try:
        return ROW_FOR_MODEL[model]
    except KeyError:
        raise TypeError(f"no table mapped for {model.__name__}") from None


class SqlEntityStore:
    """Upserts via ``Session.merge`` and flushes so later reads see the write."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, model: type[EntityT], entity_id: str) -> EntityT | None:
        row = self.session.get(_row_class(model), entity_id)
        if row is None:
            return None
        return model.model_validate(row, from_attributes=True)

    def set(self, entity: BaseModel) -> None:
        row_cls = _row_class(type(entity))
        self.session.merge(row_cls(**entity.model_dump()))
        self.session.flush()

    def all(self, model: type[EntityT]) -> list[EntityT]:
        row_cls = _row_class(model)
        rows = self.session.execute(select(row_cls).order_by(row_cls.id)).scalars().all()
        return [model.model_validate(r, from_attributes=True) for r in rows]

    def delete_all(self, model: type[EntityT]) -> int:
        result = self.session.execute(delete(_row_class(model)))
        self.session.flush()
        return result.rowcount

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
