"""
Value kinds for row columns.

ValueKind is the closed set of value shapes a column can carry. Each kind owns
exactly one coercion function, picked from a table built at import time, which
turns a raw database value (or a driver-reported insert id) into the Python
value the model declared.
"""

from enum import Enum
from typing import Any, Callable, Dict

from sqlrow.exceptions import PrimaryKeyOverflowError


class ValueKind(str, Enum):
    """Closed set of column value kinds."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    TEXT = "text"
    BINARY = "binary"
    BIGINT = "bigint"

    @property
    def is_integer(self) -> bool:
        """True for the fixed-width integer kinds."""
        return self in _INT_WIDTHS

    def coerce(self, raw: Any, column: str = "") -> Any:
        """Convert a raw database value into this kind.

        Args:
            raw: Value as returned by the driver
            column: Column name, used in overflow errors

        Returns:
            The value converted to this kind

        Raises:
            PrimaryKeyOverflowError: If an integer does not fit this kind's width
        """
        if raw is None:
            return None
        return _COERCERS[self](self, raw, column)

    def bind(self, value: Any) -> Any:
        """Convert a Python value into what gets sent to the driver."""
        if self is ValueKind.BIGINT and value is not None:
            return str(value)
        return value


# (bits, signed)
_INT_WIDTHS = {
    ValueKind.INT8: (8, True),
    ValueKind.INT16: (16, True),
    ValueKind.INT32: (32, True),
    ValueKind.INT64: (64, True),
    ValueKind.UINT8: (8, False),
    ValueKind.UINT16: (16, False),
    ValueKind.UINT32: (32, False),
    ValueKind.UINT64: (64, False),
}


def narrow(value: int, bits: int, signed: bool) -> int:
    """Wrap an integer to a fixed width the way a machine cast would."""
    wrapped = value % (1 << bits)
    if signed and wrapped >= 1 << (bits - 1):
        wrapped -= 1 << bits
    return wrapped


def _coerce_int(kind: ValueKind, raw: Any, column: str) -> int:
    wide = int(raw)
    bits, signed = _INT_WIDTHS[kind]
    narrowed = narrow(wide, bits, signed)
    if narrowed != wide:
        raise PrimaryKeyOverflowError(column, kind, wide)
    return narrowed


def _coerce_text(kind: ValueKind, raw: Any, column: str) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8")
    return str(raw)


def _coerce_binary(kind: ValueKind, raw: Any, column: str) -> bytes:
    if isinstance(raw, str):
        return raw.encode("utf-8")
    return bytes(raw)


def _coerce_bigint(kind: ValueKind, raw: Any, column: str) -> int:
    return int(raw)


_COERCERS: Dict[ValueKind, Callable[[ValueKind, Any, str], Any]] = {
    **{kind: _coerce_int for kind in _INT_WIDTHS},
    ValueKind.TEXT: _coerce_text,
    ValueKind.BINARY: _coerce_binary,
    ValueKind.BIGINT: _coerce_bigint,
}


def infer_kind(value: Any) -> ValueKind:
    """Pick the kind for a value whose column did not declare one.

    ``bool`` is not treated as an integer: flags get a text column.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BINARY
    if isinstance(value, int) and not isinstance(value, bool):
        return ValueKind.INT64
    return ValueKind.TEXT
