"""
PostgreSQL-specific SQL dialect implementation.

Uses numbered ``$N`` placeholders and reads the generated primary key from an
``INSERT ... RETURNING`` row in the same round trip.
"""

from ..core.placeholders import PlaceholderFunc, numbered_placeholder
from .base import DefaultDialect


class PostgreSQLDialect(DefaultDialect):
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"
    returns_inserted_key = True
    auto_key_type = "SERIAL PRIMARY KEY"
    blob_type = "bytea"

    def placeholder(self) -> PlaceholderFunc:
        """Fresh ``$1, $2, ...`` marker function for one statement."""
        return numbered_placeholder()
