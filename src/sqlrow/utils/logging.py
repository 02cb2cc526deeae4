"""structlog setup for sqlrow.

Every sqlrow event is a JSON line on the ``sqlrow`` stdlib logger. Statement
events carry the SQL text and its positional arguments; binary arguments are
summarized by size and connection secrets are masked before rendering.

Environment:
- LOG_LEVEL: threshold, read through sqlrow.config (default INFO)
- SQLROW_LOG_TO_FILE: also write to a daily rotating file (1, true, yes)
- SQLROW_LOG_FILE_DIR: directory of that file (default logs/)

Usage:
    >>> from sqlrow.utils.logging import get_logger
    >>> log = get_logger(__name__)
    >>> log.debug("sql.statement", sql="SELECT ID FROM company WHERE ID=?", args=[1])
"""

import logging
import os
import re
from datetime import date
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import structlog
from pydantic import ValidationError
from structlog.types import EventDict, Processor, WrappedLogger

from sqlrow.config import get_settings

ROOT_LOGGER = "sqlrow"
MASK = "[REDACTED]"

_SECRET_KEY = re.compile(r"password|passwd|token|secret|^(sqlrow_)?database_url$", re.IGNORECASE)
_FILE_FLAG_VALUES = ("1", "true", "yes")


def mask_secrets(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``fields`` with secret-looking keys masked, nested mappings included.

    Example:
        >>> mask_secrets({"database_url": "postgresql://u:p@h/db", "table": "company"})
        {'database_url': '[REDACTED]', 'table': 'company'}
    """
    masked: Dict[str, Any] = {}
    for key, value in fields.items():
        if _SECRET_KEY.search(key):
            masked[key] = MASK
        elif isinstance(value, Mapping):
            masked[key] = mask_secrets(value)
        else:
            masked[key] = value
    return masked


def describe_args(args: List[Any]) -> List[Any]:
    """Statement arguments as logged: binary values become ``<N bytes>``."""
    return [
        f"<{len(bytes(a))} bytes>" if isinstance(a, (bytes, bytearray, memoryview)) else a
        for a in args
    ]


def _mask_processor(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    return mask_secrets(event_dict)


def _args_processor(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    args = event_dict.get("args")
    if isinstance(args, list):
        event_dict["args"] = describe_args(args)
    return event_dict


def _level() -> int:
    try:
        name = get_settings().LOG_LEVEL
    except ValidationError:
        # a broken SQLROW_* variable must not take logging down with it
        name = os.getenv("LOG_LEVEL", "INFO")
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _file_handler(level: int) -> Optional[logging.Handler]:
    if os.getenv("SQLROW_LOG_TO_FILE", "").lower() not in _FILE_FLAG_VALUES:
        return None
    directory = Path(os.getenv("SQLROW_LOG_FILE_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(directory / f"sqlrow-{date.today():%Y%m%d}.log"),
        when="midnight",
        backupCount=30,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def configure_logging() -> None:
    """Attach handlers to the ``sqlrow`` logger and configure structlog.

    Runs on import; calling it again only refreshes the level and structlog
    configuration, handlers are attached once.
    """
    level = _level()
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    if not root.handlers:
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        file_handler = _file_handler(level)
        if file_handler is not None:
            handlers.append(file_handler)
        for handler in handlers:
            handler.setLevel(level)
            root.addHandler(handler)

    chain: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _args_processor,
        _mask_processor,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(default=repr),
    ]
    structlog.configure(
        processors=chain,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> Any:
    """structlog logger for ``name``; names under ``sqlrow.`` share its handlers."""
    return structlog.get_logger(name)


def bind_context(**fields: Any) -> Any:
    """Logger carrying ``fields`` on every event.

    Example:
        >>> log = bind_context(dialect="postgresql", table="company")
        >>> log.info("database.handle.initialized")
    """
    return structlog.get_logger(ROOT_LOGGER).bind(**fields)
