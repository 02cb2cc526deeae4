"""Statement builders: one module per SQL operation."""

from .ddl import build_create_table, build_drop_table, guess_sql_type
from .delete import build_delete
from .insert import InsertBuilder
from .select import build_get, build_select
from .statement import Statement, require_primary_key
from .update import build_update

__all__ = [
    "InsertBuilder",
    "Statement",
    "build_create_table",
    "build_delete",
    "build_drop_table",
    "build_get",
    "build_select",
    "build_update",
    "guess_sql_type",
    "require_primary_key",
]
