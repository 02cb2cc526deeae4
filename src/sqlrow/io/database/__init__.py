"""
Database execution for sqlrow.

Handle and Transaction run statements built by the SQL layer through
SQLAlchemy and resolve generated primary keys after inserts.
"""

from .connection import SQLAlchemyConnection, SQLAlchemyExecResult
from .handle import Handle
from .key_resolver import coerce_key, resolve_primary_key
from .models import Connection, ExecResult, StatementOptions
from .transaction import Transaction

__all__ = [
    "Connection",
    "ExecResult",
    "Handle",
    "SQLAlchemyConnection",
    "SQLAlchemyExecResult",
    "StatementOptions",
    "Transaction",
    "coerce_key",
    "resolve_primary_key",
]
