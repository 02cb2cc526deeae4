"""
CREATE TABLE / DROP TABLE builders.
"""

from typing import Sequence

from sqlrow.infrastructure.models.row import Column

from .statement import Statement

DEFAULT_INTEGER_TYPE = "int"
DEFAULT_TEXT_TYPE = "varchar(255)"


def guess_sql_type(column: Column) -> str:
    """
    Pick the SQL type for a column.

    The declared override wins; otherwise integer kinds map to ``int`` and
    everything else to ``varchar(255)``.

    Examples:
        >>> guess_sql_type(Column("year", 2015))
        'int'
        >>> guess_sql_type(Column("name", "IBM"))
        'varchar(255)'
    """
    if column.options is not None and column.options.type:
        return column.options.type
    if column.value_kind.is_integer:
        return DEFAULT_INTEGER_TYPE
    return DEFAULT_TEXT_TYPE


def build_create_table(table: str, row: Sequence[Column]) -> Statement:
    """Build ``CREATE TABLE`` with one column definition per row column."""
    definitions = ", ".join(f"{c.name} {guess_sql_type(c)}" for c in row)
    return Statement(f"CREATE TABLE {table} ({definitions})", [])


def build_drop_table(table: str) -> Statement:
    return Statement(f"DROP TABLE {table}", [])
