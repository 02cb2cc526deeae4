"""
SQL parameter binding utilities.

Rewrites query fragments that use symbolic parameters (``@ticker``) into the
positional markers of the active dialect, and binds named values to the
resulting positions.
"""

import io
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, TextIO, Union

from sqlrow.exceptions import UnknownParameterError

from .placeholders import PlaceholderFunc

DEFAULT_PREFIX = "@"


class CompiledQuery(NamedTuple):
    """Rewritten SQL and the parameter names in order of appearance."""

    sql: str
    parameter_order: List[str]


def is_argument_char(ch: str) -> bool:
    """True if ``ch`` may appear in a symbolic parameter name."""
    return ch.isalpha() or ch.isdecimal() or ch in ("_", "-")


def check_prefix(prefix: str) -> str:
    """
    Validate a symbolic parameter prefix.

    Raises:
        ValueError: If the prefix is not a single non-name, non-space character
    """
    if not isinstance(prefix, str) or len(prefix) != 1:
        raise ValueError(f"Parameter prefix must be a single character, got {prefix!r}")
    if is_argument_char(prefix) or prefix.isspace():
        raise ValueError(f"Parameter prefix {prefix!r} cannot be a parameter name character")
    return prefix


class _ParseContext:
    """Mutable state of one compile call."""

    def __init__(self, prefix: str, placeholder: PlaceholderFunc, source: TextIO):
        self.prefix = prefix
        self.placeholder = placeholder
        self.source = source
        self.out: List[str] = []
        self.arg_buf: List[str] = []
        self.args: List[str] = []

    def close_argument(self) -> None:
        self.out.append(self.placeholder())
        self.args.append("".join(self.arg_buf))
        self.arg_buf = []


_State = Optional[Callable[[_ParseContext], Any]]


def _normal_state(ctx: _ParseContext) -> _State:
    ch = ctx.source.read(1)
    if not ch:
        return None
    if ch == ctx.prefix:
        return _argument_state
    ctx.out.append(ch)
    return _normal_state


def _argument_state(ctx: _ParseContext) -> _State:
    ch = ctx.source.read(1)
    if not ch:
        # end of input still closes the pending name
        ctx.close_argument()
        return None
    if is_argument_char(ch):
        ctx.arg_buf.append(ch)
        return _argument_state
    ctx.close_argument()
    ctx.out.append(ch)
    return _normal_state


def compile_named_query(
    query: Union[str, TextIO],
    placeholder: PlaceholderFunc,
    prefix: str = DEFAULT_PREFIX,
) -> CompiledQuery:
    """
    Rewrite symbolic parameters into positional placeholders.

    Parameter names consist of letters, digits, ``_`` and ``-``; any other
    character ends the name and is copied to the output. A prefix with no
    name characters after it yields an empty parameter name.

    Args:
        query: Query text or a text stream to read it from
        placeholder: Fresh marker function for this statement
        prefix: Character introducing a symbolic parameter

    Returns:
        CompiledQuery with the rewritten SQL and the parameter order

    Examples:
        >>> from sqlrow.infrastructure.sql.core.placeholders import numbered_placeholder
        >>> compile_named_query("WHERE a = @a AND b > @a", numbered_placeholder())
        CompiledQuery(sql='WHERE a = $1 AND b > $2', parameter_order=['a', 'a'])
    """
    source = io.StringIO(query) if isinstance(query, str) else query
    ctx = _ParseContext(prefix, placeholder, source)
    state: _State = _normal_state
    while state is not None:
        state = state(ctx)
    return CompiledQuery("".join(ctx.out), ctx.args)


def bind_named_args(
    parameter_order: List[str], params: Optional[Mapping[str, Any]]
) -> List[Any]:
    """
    Map parameter names to positional values.

    Args:
        parameter_order: Names as returned by compile_named_query
        params: Named values supplied by the caller; extra names are ignored

    Returns:
        Positional argument list matching the placeholders

    Raises:
        UnknownParameterError: If a name has no supplied value

    Examples:
        >>> bind_named_args(["ticker", "id", "id"], {"ticker": "IBM", "id": 3})
        ['IBM', 3, 3]
    """
    params = params or {}
    args = []
    for name in parameter_order:
        if name not in params:
            raise UnknownParameterError(name)
        args.append(params[name])
    return args
