"""
SQL dialects.

A dialect decides the placeholder syntax, how the generated key of an INSERT
is reported, and the default column metadata handed to models.
"""

from typing import Dict, Type, Union

from .base import DefaultDialect
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect

Dialect = DefaultDialect

_DIALECTS: Dict[str, Type[DefaultDialect]] = {
    "default": DefaultDialect,
    "sqlite": DefaultDialect,
    "postgresql": PostgreSQLDialect,
    "postgres": PostgreSQLDialect,
    "mysql": MySQLDialect,
}


def get_dialect(dialect: Union[str, DefaultDialect, None] = None) -> DefaultDialect:
    """
    Resolve a dialect by name.

    Args:
        dialect: Dialect name ("default", "sqlite", "postgresql", "postgres",
            "mysql"), an existing dialect instance, or None for the default

    Returns:
        Dialect instance

    Raises:
        ValueError: If the name is unknown
    """
    if dialect is None:
        return DefaultDialect()
    if isinstance(dialect, DefaultDialect):
        return dialect
    try:
        return _DIALECTS[dialect.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown dialect {dialect!r}; expected one of {sorted(_DIALECTS)}"
        ) from None


__all__ = [
    "DefaultDialect",
    "Dialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "get_dialect",
]
