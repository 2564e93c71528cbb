"""Column types for on-chain integer amounts."""

from __future__ import annotations

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


class RawAmount(TypeDecorator):
    """uint256 stored as its decimal string.

    NUMERIC on SQLite degrades to REAL past 2**63, so amounts are kept as
    text and converted back to ``int`` on load.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
