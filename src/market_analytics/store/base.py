"""The entity store contract the aggregation core writes through."""

from __future__ import annotations

from typing import Protocol, TypeVar

from pydantic import BaseModel

EntityT = TypeVar("EntityT", bound=BaseModel)


class EntityStore(Protocol):
    """Key-value entity store with read-your-writes inside one trade.

    Entities are pydantic models with a string ``id``. ``set`` is an upsert.
    Nothing is transactional across trades; callers ``commit`` once per trade.
    """

    def get(self, model: type[EntityT], entity_id: str) -> EntityT | None: ...

    def set(self, entity: BaseModel) -> None: ...

    def all(self, model: type[EntityT]) -> list[EntityT]: ...

    def delete_all(self, model: type[EntityT]) -> int: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
