"""
Row model and value kinds shared by the SQL layer.
"""

from .kinds import ValueKind, infer_kind
from .row import (
    Column,
    ColumnFlag,
    ColumnOptions,
    RowConfig,
    RowModel,
    primary_key_of,
    read_row,
)

__all__ = [
    "Column",
    "ColumnFlag",
    "ColumnOptions",
    "RowConfig",
    "RowModel",
    "ValueKind",
    "infer_kind",
    "primary_key_of",
    "read_row",
]
