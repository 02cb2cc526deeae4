"""
SQLAlchemy implementation of the execution contract.

Statements are passed to the DB-API driver untouched through
``Connection.exec_driver_sql``, so the placeholders produced by the active
dialect must match the driver's paramstyle (``?`` for sqlite3, ``$N`` for
drivers using the numeric dollar style).
"""

from typing import Any, Iterator, Optional, Sequence

from sqlalchemy.engine import Connection as SAConnection
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError

from .models import StatementOptions


class SQLAlchemyExecResult:
    """ExecResult backed by a SQLAlchemy CursorResult."""

    def __init__(self, result: CursorResult):
        self.rowcount = result.rowcount
        try:
            self._lastrowid = result.lastrowid
        except (AttributeError, NotImplementedError, SQLAlchemyError):
            self._lastrowid = None

    def last_insert_id(self) -> Optional[int]:
        return self._lastrowid


class SQLAlchemyConnection:
    """
    Connection adapter over a SQLAlchemy connection.

    Every round trip first checks the call's StatementOptions and logs the
    statement when SQL logging is enabled.
    """

    def __init__(self, conn: SAConnection, logger: Any, log_sql: bool = True):
        """
        Args:
            conn: Open SQLAlchemy connection (possibly inside a transaction)
            logger: structlog-compatible logger receiving ``sql.statement`` events
            log_sql: Emit one debug event per statement
        """
        self.conn = conn
        self._logger = logger
        self._log_sql = log_sql

    def _dispatch(
        self, sql: str, args: Sequence[Any], options: Optional[StatementOptions]
    ) -> CursorResult:
        if options is not None:
            options.check()
        if self._log_sql:
            self._logger.debug("sql.statement", sql=sql, args=list(args))
        return self.conn.exec_driver_sql(sql, tuple(args))

    def execute(
        self, sql: str, args: Sequence[Any], options: Optional[StatementOptions] = None
    ) -> SQLAlchemyExecResult:
        return SQLAlchemyExecResult(self._dispatch(sql, args, options))

    def query(
        self, sql: str, args: Sequence[Any], options: Optional[StatementOptions] = None
    ) -> Iterator[Sequence[Any]]:
        result = self._dispatch(sql, args, options)
        return self._iterate(result, options)

    def _iterate(
        self, result: CursorResult, options: Optional[StatementOptions]
    ) -> Iterator[Sequence[Any]]:
        try:
            for row in result:
                if options is not None:
                    options.check()
                yield tuple(row)
        finally:
            result.close()

    def query_row(
        self, sql: str, args: Sequence[Any], options: Optional[StatementOptions] = None
    ) -> Optional[Sequence[Any]]:
        row = self._dispatch(sql, args, options).first()
        return tuple(row) if row is not None else None
