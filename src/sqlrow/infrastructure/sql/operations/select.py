"""
SELECT statement builders.
"""

from typing import Any, Mapping, Optional, Sequence

from sqlrow.infrastructure.models.row import Column

from ..core.parameters import DEFAULT_PREFIX, bind_named_args, compile_named_query
from ..core.placeholders import PlaceholderFunc
from .statement import Statement, column_names, require_primary_key


def build_get(table: str, row: Sequence[Column], placeholder: PlaceholderFunc) -> Statement:
    """
    Build a SELECT of every row column addressed by the primary key.

    Raises:
        NoPrimaryKeyError: If the row has no primary key column
    """
    pk = require_primary_key(table, row)
    sql = f"SELECT {column_names(row)} FROM {table} WHERE {pk.name}={placeholder()}"
    return Statement(sql, [pk.bind_value])


def build_select(
    table: str,
    row: Sequence[Column],
    placeholder: PlaceholderFunc,
    clause: str = "",
    params: Optional[Mapping[str, Any]] = None,
    prefix: str = DEFAULT_PREFIX,
) -> Statement:
    """
    Build ``SELECT <columns> FROM <table> <clause>``.

    The clause (WHERE / ORDER BY / LIMIT ...) is copied verbatim apart from
    symbolic parameters, which become positional markers bound from ``params``.

    Args:
        table: Table name
        row: Row of a freshly constructed model, used for the column list
        placeholder: Fresh marker function for this statement
        clause: Text appended after the table name, may be empty
        params: Values for the symbolic parameters in ``clause``
        prefix: Character introducing a symbolic parameter

    Returns:
        Statement with the compiled SQL and positional arguments

    Raises:
        UnknownParameterError: If the clause names a parameter missing from params
    """
    sql = f"SELECT {column_names(row)} FROM {table}"
    if not clause:
        return Statement(sql, [])
    compiled = compile_named_query(clause, placeholder, prefix)
    args = bind_named_args(compiled.parameter_order, params)
    return Statement(f"{sql} {compiled.sql}", args)
