"""
Database handle: the entry point for storing and loading models.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from sqlrow.config import Settings, get_settings
from sqlrow.infrastructure.sql.core.parameters import DEFAULT_PREFIX, check_prefix
from sqlrow.infrastructure.sql.dialects import DefaultDialect, get_dialect
from sqlrow.utils.logging import get_logger

from .base import Executor
from .connection import SQLAlchemyConnection
from .models import StatementOptions
from .transaction import Transaction

logger = get_logger(__name__)


class Handle(Executor):
    """
    Handle supporting create/insert/get/update/delete/select on models.

    Each call outside a transaction checks out its own connection from the
    engine in autocommit mode, so a Handle can be shared between threads and
    nothing it runs is rolled back on failure. Only an explicit Transaction
    undoes work. Transactions cannot be shared between threads.

    Example:
        >>> from sqlalchemy import create_engine
        >>> handle = Handle(create_engine("sqlite:///companies.db"))
        >>> handle.create_table(Company())
        >>> pk = handle.insert(Company(name="IBM", ticker="IBM"))
        >>> company = Company(id=pk.value)
        >>> handle.get(company)
    """

    def __init__(
        self,
        engine: Engine,
        dialect: Union[str, DefaultDialect, None] = None,
        named_arg_prefix: str = DEFAULT_PREFIX,
        sql_logger: Optional[Any] = None,
        log_sql: bool = True,
        default_options: Optional[StatementOptions] = None,
    ):
        """
        Initialize the handle.

        Args:
            engine: SQLAlchemy engine whose driver matches the dialect's placeholders
            dialect: Dialect name or instance (default: qmark dialect)
            named_arg_prefix: Character introducing symbolic parameters in select clauses
            sql_logger: structlog-compatible logger receiving emitted SQL
            log_sql: Emit emitted SQL at debug level
            default_options: Options applied to every call, e.g. a shutdown cancel
                event; per-call options override the fields they set

        Raises:
            ValueError: For an unknown dialect, a bad prefix or a logger without ``debug``
        """
        if engine is None:
            raise ValueError("engine is required")
        if sql_logger is not None and not callable(getattr(sql_logger, "debug", None)):
            raise ValueError("sql_logger must provide a debug() method")

        self.engine = engine
        self.dialect = get_dialect(dialect)
        self.named_arg_prefix = check_prefix(named_arg_prefix)
        self.sql_logger = sql_logger or get_logger("sqlrow.sql")
        self.log_sql = log_sql
        self.default_options = default_options or StatementOptions()

        logger.info(
            "database.handle.initialized",
            dialect=self.dialect.name,
            named_arg_prefix=self.named_arg_prefix,
            log_sql=self.log_sql,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> "Handle":
        """
        Build a handle (and its engine) from configuration.

        Args:
            settings: Settings to use (default: get_settings())
            **kwargs: Extra Handle arguments such as sql_logger
        """
        settings = settings or get_settings()
        engine = create_engine(settings.database_url)
        return cls(
            engine,
            dialect=settings.dialect,
            named_arg_prefix=settings.named_arg_prefix,
            log_sql=settings.log_sql,
            **kwargs,
        )

    @contextmanager
    def _connection(self) -> Iterator[SQLAlchemyConnection]:
        # statements are durable as soon as they run; a failure after the
        # INSERT (key overflow, cancellation) leaves the row in place
        with self.engine.connect() as conn:
            conn = conn.execution_options(isolation_level="AUTOCOMMIT")
            yield SQLAlchemyConnection(conn, self.sql_logger, self.log_sql)

    def begin(self) -> Transaction:
        """Start a transaction on a dedicated connection."""
        return Transaction(self)

    @staticmethod
    def named(name: str, value: Any) -> Dict[str, Any]:
        """Named value for select parameters: ``handle.named("ticker", "IBM")``."""
        return {name: value}

    def __repr__(self) -> str:
        return f"Handle(engine={self.engine!r}, dialect={self.dialect.name!r})"
