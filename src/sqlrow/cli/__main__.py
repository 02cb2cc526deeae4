"""
CLI entry point for sqlrow.

Usage:
    python -m sqlrow.cli <command> [options]

Available commands:
    compile      - Rewrite a query fragment with symbolic parameters

Examples:
    python -m sqlrow.cli compile "WHERE Ticker != @ticker AND ID > @id"
    python -m sqlrow.cli compile "WHERE ID > @id" --dialect postgresql
"""

import argparse
import json
import sys
from typing import List, Optional

from sqlrow.infrastructure.sql.core.parameters import (
    DEFAULT_PREFIX,
    check_prefix,
    compile_named_query,
)
from sqlrow.infrastructure.sql.dialects import get_dialect


def _run_compile(args: argparse.Namespace) -> int:
    dialect = get_dialect(args.dialect)
    compiled = compile_named_query(args.query, dialect.placeholder(), args.prefix)
    print(compiled.sql)
    print(json.dumps(compiled.parameter_order, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run a sqlrow subcommand and return the process exit code (2 on usage errors)."""
    parser = argparse.ArgumentParser(
        prog="sqlrow.cli",
        description="sqlrow CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(title="commands", dest="command")

    compile_parser = subparsers.add_parser(
        "compile",
        help="Rewrite symbolic parameters into positional placeholders",
    )
    compile_parser.add_argument("query", help="Query fragment, e.g. 'WHERE id = @id'")
    compile_parser.add_argument(
        "--dialect",
        default="default",
        help="default, postgresql or mysql (default: %(default)s)",
    )
    compile_parser.add_argument(
        "--prefix",
        default=DEFAULT_PREFIX,
        help="Symbolic parameter prefix (default: %(default)s)",
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    try:
        check_prefix(args.prefix)
        get_dialect(args.dialect)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    return _run_compile(args)


if __name__ == "__main__":
    sys.exit(main())
