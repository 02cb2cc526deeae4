"""
Primary key resolution after INSERT.

After a plain (non-RETURNING) insert the generated key is recovered in this
order:

1. no primary key column: nothing to resolve, returns None
2. key supplied by the caller (not NO_INSERT): returned unchanged
3. auto-generated key: the driver's last insert id if it reports one,
   otherwise a lookup query over the inserted values, newest key first

The lookup is a heuristic. It compares only non-key, non-binary columns that
hold a value (NULL columns are left out). Two rows agreeing on those columns
cannot be told apart and the newest matching key is returned. Wrap the insert
in a transaction, or use a RETURNING dialect, when that matters.
"""

from typing import Any, Optional, Sequence

from sqlrow.infrastructure.models.row import Column, primary_key_of
from sqlrow.infrastructure.sql.dialects.base import DefaultDialect
from sqlrow.infrastructure.sql.operations.insert import InsertBuilder
from sqlrow.utils.logging import get_logger

from .models import Connection, ExecResult, StatementOptions

logger = get_logger(__name__)


def coerce_key(pk: Column, raw: Any) -> Column:
    """
    Convert a raw key value into the declared kind of the key column.

    Raises:
        TypeError: If the key column does not hold an integer kind
        PrimaryKeyOverflowError: If the value does not fit the declared width
    """
    kind = pk.value_kind
    if not kind.is_integer:
        raise TypeError(
            f"Expected integer kind for primary key {pk.name!r} but got {kind.name}"
        )
    return pk.with_value(kind.coerce(raw, pk.name))


def resolve_primary_key(
    conn: Connection,
    dialect: DefaultDialect,
    table: str,
    row: Sequence[Column],
    result: ExecResult,
    options: Optional[StatementOptions] = None,
) -> Optional[Column]:
    """
    Determine the primary key of a row that was just inserted.

    Args:
        conn: Connection the INSERT ran on
        dialect: Active dialect, used to build the lookup query
        table: Table the row was inserted into
        row: Row that was inserted
        result: Result of the INSERT
        options: Options of the insert call

    Returns:
        The primary key column carrying the resolved value, or None when the
        row has no primary key column
    """
    pk = primary_key_of(row)
    if pk is None:
        return None
    if not pk.skip_on_insert:
        return pk

    last_insert_id = result.last_insert_id()
    if last_insert_id is not None:
        return coerce_key(pk, last_insert_id)

    statement = InsertBuilder(dialect).key_lookup(table, row, pk)
    logger.debug(
        "primary_key.fallback_lookup",
        table=table,
        column=pk.name,
        conditions=len(statement.args),
    )
    found = conn.query_row(statement.sql, statement.args, options)
    if found is None:
        logger.warning("primary_key.fallback_no_match", table=table, column=pk.name)
        return pk.with_value(None)
    return pk.with_value(pk.value_kind.coerce(found[0], pk.name))
