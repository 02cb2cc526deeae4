"""Core SQL utilities package."""

from .parameters import CompiledQuery, bind_named_args, compile_named_query
from .placeholders import (
    PlaceholderFactory,
    PlaceholderFunc,
    default_placeholder,
    numbered_placeholder,
)

__all__ = [
    "CompiledQuery",
    "PlaceholderFactory",
    "PlaceholderFunc",
    "bind_named_args",
    "compile_named_query",
    "default_placeholder",
    "numbered_placeholder",
]
