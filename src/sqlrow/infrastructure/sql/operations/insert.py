"""
SQL INSERT statement builders.

Provides the INSERT itself plus the key lookup query used to recover an
auto-generated primary key when the driver cannot report it.
"""

from typing import List, Sequence

from sqlrow.infrastructure.models.row import Column, primary_key_of

from ..dialects.base import DefaultDialect
from .statement import Statement


class InsertBuilder:
    """
    Builder for INSERT statements of one dialect.

    Example:
        >>> from sqlrow.infrastructure.sql.dialects import PostgreSQLDialect
        >>> from sqlrow.infrastructure.models import Column, RowConfig
        >>> config = PostgreSQLDialect().row_config()
        >>> row = [Column("id", 0, config.auto_key), Column("name", "IBM")]
        >>> InsertBuilder(PostgreSQLDialect()).insert("company", row).sql
        'INSERT INTO company (name) VALUES ($1) RETURNING id'
    """

    def __init__(self, dialect: DefaultDialect):
        """
        Initialize the InsertBuilder.

        Args:
            dialect: SQL dialect to use for statement generation
        """
        self.dialect = dialect

    def insert(self, table: str, row: Sequence[Column]) -> Statement:
        """
        Build an INSERT for every column not flagged NO_INSERT.

        On dialects that report the generated key through RETURNING, the
        primary key column (if any) is appended as a RETURNING clause.

        Args:
            table: Table name
            row: Row of the record being inserted

        Returns:
            Statement with one positional argument per inserted column
        """
        placeholder = self.dialect.placeholder()
        columns: List[str] = []
        args = []
        for column in row:
            if column.skip_on_insert:
                continue
            columns.append(column.name)
            args.append(column.bind_value)
        placeholders = [placeholder() for _ in columns]
        sql = self.dialect.build_insert(table, columns, placeholders)

        pk = primary_key_of(row)
        if self.dialect.returns_inserted_key and pk is not None:
            sql = self.dialect.build_returning(sql, pk.name)
        return Statement(sql, args)

    def key_lookup(self, table: str, row: Sequence[Column], pk: Column) -> Statement:
        """
        Build the query that recovers the key of a just-inserted row.

        Matches on every inserted column except the key itself, NO_INSERT
        columns, binary values and None values (``col = NULL`` never
        matches), newest key first. Rows sharing all of those
        values are indistinguishable, so the newest matching key is returned.

        Args:
            table: Table name
            row: Row of the record that was inserted
            pk: Primary key column of the row

        Returns:
            SELECT statement returning candidate keys, highest first
        """
        placeholder = self.dialect.placeholder()
        conditions = []
        args = []
        for column in row:
            if (
                column.is_primary_key
                or column.skip_on_insert
                or column.is_binary_blob
                or column.value is None
            ):
                continue
            conditions.append(f"{column.name}={placeholder()}")
            args.append(column.bind_value)

        sql = f"SELECT {pk.name} FROM {table}"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += f" ORDER BY {pk.name} DESC"
        return Statement(sql, args)
