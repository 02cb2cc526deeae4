"""
sqlrow exceptions.

Every error raised by the library itself derives from SqlRowError. Errors
coming from SQLAlchemy or the DB-API driver are never wrapped.
"""

from typing import Any


class SqlRowError(Exception):
    """Base exception for sqlrow errors."""

    pass


class NotFoundError(SqlRowError):
    """Raised when a record with the given primary key was not found."""

    def __init__(self, table: str, key: Any):
        self.table = table
        self.key = key
        super().__init__(f"Record with primary key {key!r} not found in {table}")


class NoPrimaryKeyError(SqlRowError):
    """Raised when a row has no column flagged PRIMARY_KEY."""

    def __init__(self, table: str):
        self.table = table
        super().__init__(
            f"No primary key defined for {table}. Use the PRIMARY_KEY flag"
        )


class NoUnmarshalTargetError(SqlRowError):
    """Raised when a select target cannot build objects implementing RowModel."""

    pass


class PrimaryKeyOverflowError(SqlRowError):
    """Raised when a generated key does not fit the declared key type."""

    def __init__(self, column: str, kind: Any, value: int):
        self.column = column
        self.kind = kind
        self.value = value
        super().__init__(
            f"Last insert ID {value} returned by database overflows "
            f"{kind.name} primary key column {column!r}"
        )


class UnknownParameterError(SqlRowError):
    """Raised when a named query parameter has no supplied value."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such named keyword argument: {name}")


class StatementCancelledError(SqlRowError):
    """Raised when a statement is cancelled or its deadline passed."""

    pass
