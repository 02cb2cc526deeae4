"""
Default SQL dialect.

Covers qmark drivers such as sqlite3: ``?`` placeholders and a plain INSERT
whose generated key is recovered after the fact.
"""

from typing import List

from sqlrow.infrastructure.models.row import ColumnFlag, ColumnOptions, RowConfig

from ..core.placeholders import PlaceholderFunc, default_placeholder


class DefaultDialect:
    """Default (qmark) SQL dialect implementation."""

    name = "default"
    # True when INSERT ... RETURNING reports the generated key
    returns_inserted_key = False
    auto_key_type = "INTEGER PRIMARY KEY"
    blob_type = "BLOB"

    def placeholder(self) -> PlaceholderFunc:
        """Fresh marker function for one statement."""
        return default_placeholder()

    def row_config(self) -> RowConfig:
        """Column metadata models should use under this dialect."""
        return RowConfig(
            dialect=self.name,
            auto_key=ColumnOptions(
                self.auto_key_type, ColumnFlag.NO_INSERT | ColumnFlag.PRIMARY_KEY
            ),
            blob=ColumnOptions(self.blob_type),
        )

    def build_insert(
        self, table: str, columns: List[str], placeholders: List[str]
    ) -> str:
        """
        Build a simple INSERT statement.

        Args:
            table: Table name
            columns: Column names
            placeholders: One marker per column

        Returns:
            INSERT SQL statement
        """
        if not columns:
            return self.build_empty_insert(table)
        return (
            f"INSERT INTO {table} ({','.join(columns)}) "
            f"VALUES ({','.join(placeholders)})"
        )

    def build_empty_insert(self, table: str) -> str:
        """INSERT for a row whose columns are all generated by the database."""
        return f"INSERT INTO {table} DEFAULT VALUES"

    def build_returning(self, insert_sql: str, key_column: str) -> str:
        """Append the clause reporting the generated key."""
        return f"{insert_sql} RETURNING {key_column}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
