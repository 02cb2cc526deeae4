"""Pytest configuration and shared database fixtures.

.sqlrow_env (repository root) is loaded first when present so local runs can
point SQLROW_* settings somewhere specific. Without it the suites run against
temporary SQLite files only.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

_SQLROW_ENV_FILE = Path(__file__).parent.parent / ".sqlrow_env"
if _SQLROW_ENV_FILE.exists():
    load_dotenv(_SQLROW_ENV_FILE, override=True)

import os
from typing import Generator
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from sqlrow import Handle
from sqlrow.config import get_settings

# Settings() must initialize without a bespoke .env file
os.environ.setdefault("DATABASE_URL", "sqlite:///sqlrow_test.db")


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sqlite_engine(tmp_path) -> Generator[Engine, None, None]:
    """Engine over a fresh SQLite file in the test's temporary directory."""
    engine = create_engine(f"sqlite:///{tmp_path / 'sqlrow.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def sql_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def handle(sqlite_engine, sql_logger) -> Handle:
    """Handle on the default dialect, recording SQL into a mock logger."""
    return Handle(sqlite_engine, sql_logger=sql_logger)
