"""Dict-backed entity store for tests and dry-run replays."""

from __future__ import annotations

from pydantic import BaseModel

from market_analytics.store.base import EntityT


class InMemoryStore:
    """Stores deep copies so callers can't mutate persisted state in place.

    ``rollback`` restores the state as of the last ``commit``.
    """

    def __init__(self) -> None:
        self._data: dict[tuple[type, str], BaseModel] = {}
        self._committed: dict[tuple[type, str], BaseModel] = {}

    def get(self, model: type[EntityT], entity_id: str) -> EntityT | None:
        entity = self._data.get((model, entity_id))
        if entity is None:
            return None
        return entity.model_copy(deep=True)

    def set(self, entity: BaseModel) -> None:
        self._data[(type(entity), entity.id)] = entity.model_copy(deep=True)

    def all(self, model: type[EntityT]) -> list[EntityT]:
        return [
            e.model_copy(deep=True)
            for (kind, _), e in sorted(self._data.items(), key=lambda kv: kv[0][1])
            if kind is model
        ]

    def delete_all(self, model: type[EntityT]) -> int:
        doomed = [key for key in self._data if key[0] is model]
        for key in doomed:
            del self._data[key]
        return len(doomed)

    def commit(self) -> None:
        self._committed = dict(self._data)

    def rollback(self) -> None:
        self._data = dict(self._committed)
