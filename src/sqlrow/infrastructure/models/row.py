"""
Row model: the persisted shape of one record.

A model describes itself to sqlrow through three methods (see RowModel):
its table name, its current row of columns, and how to populate itself from a
sequence of values read back from the database.

Example:
    >>> class Company:
    ...     def __init__(self, id=0, name="", ticker=""):
    ...         self.id, self.name, self.ticker = id, name, ticker
    ...     def table_name(self):
    ...         return "company"
    ...     def db_row(self, config):
    ...         return [
    ...             Column("ID", self.id, config.auto_key),
    ...             Column("Name", self.name),
    ...             Column("Ticker", self.ticker),
    ...         ]
    ...     def db_scan(self, values):
    ...         self.id, self.name, self.ticker = values
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .kinds import ValueKind, infer_kind


class ColumnFlag(enum.Flag):
    """Meta information about a column."""

    NONE = 0
    # Do not include this column on inserts (auto-generated values)
    NO_INSERT = enum.auto()
    # Column addressed by get/update/delete and key resolution
    PRIMARY_KEY = enum.auto()


@dataclass(frozen=True)
class ColumnOptions:
    """Optional column metadata.

    Attributes:
        type: SQL type to use on CREATE TABLE instead of the inferred one
        flags: ColumnFlag bits such as PRIMARY_KEY
    """

    type: str = ""
    flags: ColumnFlag = ColumnFlag.NONE


@dataclass(frozen=True)
class Column:
    """A named value of one record, with optional options and kind."""

    name: str
    value: Any
    options: Optional[ColumnOptions] = None
    kind: Optional[ValueKind] = None

    @property
    def value_kind(self) -> ValueKind:
        if self.kind is not None:
            return self.kind
        return infer_kind(self.value)

    @property
    def skip_on_insert(self) -> bool:
        return self.options is not None and bool(
            self.options.flags & ColumnFlag.NO_INSERT
        )

    @property
    def is_primary_key(self) -> bool:
        return self.options is not None and bool(
            self.options.flags & ColumnFlag.PRIMARY_KEY
        )

    @property
    def is_binary_blob(self) -> bool:
        return self.value_kind is ValueKind.BINARY

    @property
    def bind_value(self) -> Any:
        """Value as sent to the driver."""
        return self.value_kind.bind(self.value)

    def with_value(self, value: Any) -> "Column":
        """Copy of this column carrying a different value."""
        return Column(self.name, value, self.options, self.value_kind)


@dataclass(frozen=True)
class RowConfig:
    """Dialect-specific configuration handed to ``RowModel.db_row``.

    Attributes:
        dialect: Name of the active dialect
        auto_key: Options for an auto-generated integer primary key
        blob: Options for a binary column
    """

    dialect: str = "default"
    auto_key: ColumnOptions = field(
        default_factory=lambda: ColumnOptions(
            "INTEGER PRIMARY KEY", ColumnFlag.NO_INSERT | ColumnFlag.PRIMARY_KEY
        )
    )
    blob: ColumnOptions = field(default_factory=lambda: ColumnOptions("BLOB"))


@runtime_checkable
class RowModel(Protocol):
    """Contract a record must satisfy to be stored and loaded by sqlrow."""

    def table_name(self) -> str: ...

    def db_row(self, config: RowConfig) -> List[Column]: ...

    def db_scan(self, values: Sequence[Any]) -> None: ...


def primary_key_of(row: Sequence[Column]) -> Optional[Column]:
    """Return the primary key column of a row.

    The first column flagged PRIMARY_KEY wins when several are flagged.
    """
    for column in row:
        if column.is_primary_key:
            return column
    return None


def read_row(model: Any, config: RowConfig) -> Tuple[str, List[Column]]:
    """Fetch a model's table name and current row, validating both.

    Returns:
        The table name and the row as a list

    Raises:
        ValueError: If the table name or the row is empty
    """
    table = model.table_name()
    if not table:
        raise ValueError("Table name is required")
    row = list(model.db_row(config))
    if not row:
        raise ValueError(f"Row for table {table} has no columns")
    return table, row
