"""
SQL module for statement generation.

This module turns rows into dialect-specific SQL text: placeholder
generation, named-parameter compilation, and one builder per operation.
"""

from .core.parameters import CompiledQuery, bind_named_args, compile_named_query
from .core.placeholders import default_placeholder, numbered_placeholder
from .dialects import DefaultDialect, MySQLDialect, PostgreSQLDialect, get_dialect
from .operations import InsertBuilder, Statement

__all__ = [
    "CompiledQuery",
    "bind_named_args",
    "compile_named_query",
    "default_placeholder",
    "numbered_placeholder",
    "DefaultDialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "get_dialect",
    "InsertBuilder",
    "Statement",
]
