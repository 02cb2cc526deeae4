"""
sqlrow - map plain records to SQL statements and back.

Models describe themselves as an ordered row of columns; sqlrow builds the
dialect-specific CREATE/INSERT/UPDATE/SELECT/DELETE statements, runs them
through SQLAlchemy and resolves generated primary keys.
"""

__version__ = "0.1.0"

from sqlrow.exceptions import (
    NoPrimaryKeyError,
    NotFoundError,
    NoUnmarshalTargetError,
    PrimaryKeyOverflowError,
    SqlRowError,
    StatementCancelledError,
    UnknownParameterError,
)
from sqlrow.infrastructure.models import (
    Column,
    ColumnFlag,
    ColumnOptions,
    RowConfig,
    RowModel,
    ValueKind,
)
from sqlrow.io.database import Handle, StatementOptions, Transaction

__all__ = [
    "Column",
    "ColumnFlag",
    "ColumnOptions",
    "Handle",
    "NoPrimaryKeyError",
    "NoUnmarshalTargetError",
    "NotFoundError",
    "PrimaryKeyOverflowError",
    "RowConfig",
    "RowModel",
    "SqlRowError",
    "StatementCancelledError",
    "StatementOptions",
    "Transaction",
    "UnknownParameterError",
    "ValueKind",
]
