"""
Statement operations over one connection.

Each function builds its statement with a fresh placeholder function from the
dialect, runs it on the given connection and maps the result back. Handle and
Transaction only decide which connection these run on.
"""

from typing import Any, Callable, List, Mapping, Optional

from sqlrow.exceptions import NoUnmarshalTargetError, NotFoundError, SqlRowError
from sqlrow.infrastructure.models.row import (
    Column,
    RowConfig,
    RowModel,
    primary_key_of,
    read_row,
)
from sqlrow.infrastructure.sql.core.parameters import DEFAULT_PREFIX
from sqlrow.infrastructure.sql.dialects.base import DefaultDialect
from sqlrow.infrastructure.sql.operations import (
    InsertBuilder,
    build_create_table,
    build_delete,
    build_drop_table,
    build_get,
    build_select,
    build_update,
)

from .key_resolver import coerce_key, resolve_primary_key
from .models import Connection, StatementOptions


def create_table(
    conn: Connection,
    dialect: DefaultDialect,
    model: Any,
    options: Optional[StatementOptions] = None,
) -> None:
    """Execute CREATE TABLE as described by the model's row."""
    table, row = read_row(model, dialect.row_config())
    statement = build_create_table(table, row)
    conn.execute(statement.sql, statement.args, options)


def drop_table(
    conn: Connection,
    dialect: DefaultDialect,
    model: Any,
    options: Optional[StatementOptions] = None,
) -> None:
    """Execute DROP TABLE for the model's table."""
    table = model.table_name()
    if not table:
        raise ValueError("Table name is required")
    statement = build_drop_table(table)
    conn.execute(statement.sql, statement.args, options)


def insert(
    conn: Connection,
    dialect: DefaultDialect,
    model: Any,
    options: Optional[StatementOptions] = None,
) -> Optional[Column]:
    """
    Insert a record and return its primary key column.

    Returns:
        The primary key column with the key value assigned to the new row, or
        None when the row has no primary key column

    Raises:
        PrimaryKeyOverflowError: If the generated key does not fit the key kind
    """
    table, row = read_row(model, dialect.row_config())
    statement = InsertBuilder(dialect).insert(table, row)

    pk = primary_key_of(row)
    if dialect.returns_inserted_key and pk is not None:
        returned = conn.query_row(statement.sql, statement.args, options)
        if returned is None:
            raise SqlRowError(f"INSERT INTO {table} returned no key")
        if pk.skip_on_insert:
            return coerce_key(pk, returned[0])
        return pk.with_value(pk.value_kind.coerce(returned[0], pk.name))

    result = conn.execute(statement.sql, statement.args, options)
    return resolve_primary_key(conn, dialect, table, row, result, options)


def get(
    conn: Connection,
    dialect: DefaultDialect,
    model: Any,
    options: Optional[StatementOptions] = None,
) -> None:
    """
    Load a record by the primary key currently set on the model.

    Raises:
        NoPrimaryKeyError: If the model's row has no primary key column
        NotFoundError: If no row has that primary key
    """
    table, row = read_row(model, dialect.row_config())
    statement = build_get(table, row, dialect.placeholder())
    values = conn.query_row(statement.sql, statement.args, options)
    if values is None:
        raise NotFoundError(table, statement.args[0])
    model.db_scan(values)


def update(
    conn: Connection,
    dialect: DefaultDialect,
    model: Any,
    options: Optional[StatementOptions] = None,
) -> None:
    """
    Update every non-key column of the record addressed by its primary key.

    Raises:
        NoPrimaryKeyError: If the model's row has no primary key column
        NotFoundError: If no row was affected
    """
    table, row = read_row(model, dialect.row_config())
    statement = build_update(table, row, dialect.placeholder())
    result = conn.execute(statement.sql, statement.args, options)
    # rowcount is -1 when the driver cannot tell
    if result.rowcount == 0:
        raise NotFoundError(table, statement.args[-1])


def delete(
    conn: Connection,
    dialect: DefaultDialect,
    model: Any,
    options: Optional[StatementOptions] = None,
) -> None:
    """
    Delete the record addressed by the model's primary key.

    Deleting a key that does not exist is not an error.

    Raises:
        NoPrimaryKeyError: If the model's row has no primary key column
    """
    table, row = read_row(model, dialect.row_config())
    statement = build_delete(table, row, dialect.placeholder())
    conn.execute(statement.sql, statement.args, options)


def _new_instance(factory: Callable[[], Any]) -> Any:
    if not callable(factory):
        raise NoUnmarshalTargetError(
            f"Select target {factory!r} is not a callable returning a RowModel"
        )
    instance = factory()
    if not isinstance(instance, RowModel):
        raise NoUnmarshalTargetError(
            f"{type(instance).__name__} does not implement "
            "table_name/db_row/db_scan"
        )
    return instance


def select(
    conn: Connection,
    dialect: DefaultDialect,
    factory: Callable[[], Any],
    clause: str = "",
    params: Optional[Mapping[str, Any]] = None,
    options: Optional[StatementOptions] = None,
    prefix: str = DEFAULT_PREFIX,
) -> List[Any]:
    """
    Run ``SELECT <columns> FROM <table> <clause>`` and build one model per row.

    Args:
        conn: Connection to run on
        dialect: Active dialect
        factory: Callable returning a fresh model instance, typically the
            model class; ``options.new_func`` takes precedence when set
        clause: WHERE / ORDER BY / LIMIT text with symbolic parameters
        params: Values for the symbolic parameters
        options: Call options
        prefix: Character introducing a symbolic parameter

    Returns:
        List of populated model instances, in result order

    Raises:
        NoUnmarshalTargetError: If the factory does not produce RowModel objects
        UnknownParameterError: If the clause names a parameter missing from params
    """
    if options is not None and options.new_func is not None:
        factory = options.new_func
    template = _new_instance(factory)

    config: RowConfig = dialect.row_config()
    table, row = read_row(template, config)
    statement = build_select(table, row, dialect.placeholder(), clause, params, prefix)

    results = []
    for values in conn.query(statement.sql, statement.args, options):
        instance = _new_instance(factory)
        instance.db_scan(values)
        results.append(instance)
    return results
