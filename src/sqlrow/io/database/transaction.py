"""
Explicit transactions.

A Transaction owns one connection from the handle's engine for its whole
lifetime and must be used by one caller at a time.
"""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from sqlrow.exceptions import SqlRowError

from .base import Executor
from .connection import SQLAlchemyConnection

if TYPE_CHECKING:
    from .handle import Handle


class Transaction(Executor):
    """
    Transaction started by ``Handle.begin()``.

    Usage:
        tx = handle.begin()
        try:
            pk = tx.insert(person)
            tx.commit()
        except Exception:
            tx.rollback()
            raise

    Or as a context manager, committing on success and rolling back on error:
        with handle.begin() as tx:
            tx.insert(person)
    """

    def __init__(self, handle: "Handle"):
        self.handle = handle
        self.dialect = handle.dialect
        self.named_arg_prefix = handle.named_arg_prefix
        self._logger = handle.sql_logger
        self._log_sql = handle.log_sql
        self.default_options = handle.default_options

        self._conn = handle.engine.connect()
        try:
            self._tx = self._conn.begin()
        except Exception:
            self._conn.close()
            raise
        self._log("BEGIN")
        self._adapter = SQLAlchemyConnection(self._conn, self._logger, self._log_sql)
        self._finished = False

    def _log(self, statement: str) -> None:
        if self._log_sql:
            self._logger.debug("sql.transaction", sql=statement)

    @property
    def finished(self) -> bool:
        """True once the transaction was committed or rolled back."""
        return self._finished

    @contextmanager
    def _connection(self) -> Iterator[SQLAlchemyConnection]:
        if self._finished:
            raise SqlRowError("Transaction already committed or rolled back")
        yield self._adapter

    def commit(self) -> None:
        """Commit the transaction; it is unusable afterwards."""
        self._log("COMMIT")
        try:
            self._tx.commit()
        finally:
            self._close()

    def rollback(self) -> None:
        """Roll back the transaction; it is unusable afterwards."""
        self._log("ROLLBACK")
        try:
            self._tx.rollback()
        finally:
            self._close()

    def _close(self) -> None:
        self._finished = True
        self._conn.close()

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._finished:
            return
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
