"""MySQL SQL dialect implementation."""

from .base import DefaultDialect


class MySQLDialect(DefaultDialect):
    """MySQL dialect: qmark placeholders, key taken from the driver's last insert id."""

    name = "mysql"
    auto_key_type = "SERIAL PRIMARY KEY"

    def build_empty_insert(self, table: str) -> str:
        return f"INSERT INTO {table} () VALUES ()"
