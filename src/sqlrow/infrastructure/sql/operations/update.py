from typing import Sequence

from sqlrow.infrastructure.models.row import Column

from ..core.placeholders import PlaceholderFunc
from .statement import Statement, require_primary_key


def build_update(table: str, row: Sequence[Column], placeholder: PlaceholderFunc) -> Statement:
    """
    Build an UPDATE setting every non-key column, addressed by the primary key.

    Raises:
        NoPrimaryKeyError: If the row has no primary key column
        ValueError: If the row has no column besides the primary key
    """
    pk = require_primary_key(table, row)
    assignments = []
    args = []
    for column in row:
        if column.is_primary_key:
            continue
        assignments.append(f"{column.name}={placeholder()}")
        args.append(column.bind_value)
    if not assignments:
        raise ValueError(f"Nothing to update: {table} has only a primary key column")

    sql = f"UPDATE {table} SET {','.join(assignments)} WHERE {pk.name}={placeholder()}"
    args.append(pk.bind_value)
    return Statement(sql, args)
