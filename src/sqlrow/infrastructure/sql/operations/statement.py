from typing import Any, List, NamedTuple, Sequence

from sqlrow.exceptions import NoPrimaryKeyError
from sqlrow.infrastructure.models.row import Column, primary_key_of


class Statement(NamedTuple):
    """SQL text plus the positional arguments matching its placeholders."""

    sql: str
    args: List[Any]


def column_names(row: Sequence[Column]) -> str:
    return ",".join(column.name for column in row)


def require_primary_key(table: str, row: Sequence[Column]) -> Column:
    """Return the row's primary key column or raise NoPrimaryKeyError."""
    pk = primary_key_of(row)
    if pk is None:
        raise NoPrimaryKeyError(table)
    return pk
