from abc import ABC, abstractmethod
from typing import Any, Callable, ContextManager, List, Mapping, Optional

from sqlrow.infrastructure.models.row import Column, RowConfig
from sqlrow.infrastructure.sql.dialects.base import DefaultDialect

from . import operations
from .connection import SQLAlchemyConnection
from .models import StatementOptions


class Executor(ABC):
    """
    Statement methods shared by Handle and Transaction.

    Subclasses provide ``_connection()``, a context manager yielding the
    SQLAlchemyConnection a single call runs on. Per-call options are merged
    over ``default_options``, so a handle-wide cancel event or factory
    applies to every call that does not override it.
    """

    dialect: DefaultDialect
    named_arg_prefix: str
    default_options: StatementOptions

    @abstractmethod
    def _connection(self) -> ContextManager[SQLAlchemyConnection]:
        """Context manager yielding the connection for one call."""

    def _options(self, options: Optional[StatementOptions]) -> StatementOptions:
        return self.default_options.merge(options)

    @property
    def row_config(self) -> RowConfig:
        """Column metadata for models under the active dialect."""
        return self.dialect.row_config()

    def create_table(self, model: Any, options: Optional[StatementOptions] = None) -> None:
        """Execute CREATE TABLE as per the model's row."""
        with self._connection() as conn:
            operations.create_table(conn, self.dialect, model, self._options(options))

    def drop_table(self, model: Any, options: Optional[StatementOptions] = None) -> None:
        """Execute DROP TABLE for the model's table."""
        with self._connection() as conn:
            operations.drop_table(conn, self.dialect, model, self._options(options))

    def insert(
        self, model: Any, options: Optional[StatementOptions] = None
    ) -> Optional[Column]:
        """Insert a record; returns its primary key column (None without one)."""
        with self._connection() as conn:
            return operations.insert(conn, self.dialect, model, self._options(options))

    def get(self, model: Any, options: Optional[StatementOptions] = None) -> None:
        """Populate the model from the row matching its primary key."""
        with self._connection() as conn:
            operations.get(conn, self.dialect, model, self._options(options))

    def update(self, model: Any, options: Optional[StatementOptions] = None) -> None:
        """Write the model's non-key columns to the row matching its primary key."""
        with self._connection() as conn:
            operations.update(conn, self.dialect, model, self._options(options))

    def delete(self, model: Any, options: Optional[StatementOptions] = None) -> None:
        """Delete the row matching the model's primary key."""
        with self._connection() as conn:
            operations.delete(conn, self.dialect, model, self._options(options))

    def select(
        self,
        factory: Callable[[], Any],
        clause: str = "",
        params: Optional[Mapping[str, Any]] = None,
        options: Optional[StatementOptions] = None,
    ) -> List[Any]:
        """
        Select models of ``factory``'s table.

        Example:
            >>> handle.select(Company, "WHERE Ticker != @ticker ORDER BY ID", {"ticker": "INTC"})
        """
        with self._connection() as conn:
            return operations.select(
                conn,
                self.dialect,
                factory,
                clause,
                params,
                self._options(options),
                prefix=self.named_arg_prefix,
            )
