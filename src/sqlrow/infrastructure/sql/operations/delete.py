from typing import Sequence

from sqlrow.infrastructure.models.row import Column

from ..core.placeholders import PlaceholderFunc
from .statement import Statement, require_primary_key


def build_delete(table: str, row: Sequence[Column], placeholder: PlaceholderFunc) -> Statement:
    """
    Build a DELETE of the single row addressed by the primary key.

    Raises:
        NoPrimaryKeyError: If the row has no primary key column
    """
    pk = require_primary_key(table, row)
    return Statement(f"DELETE FROM {table} WHERE {pk.name}={placeholder()}", [pk.bind_value])
