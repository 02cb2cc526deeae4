"""
Configuration management for sqlrow.

Environment-based configuration using Pydantic BaseSettings. Variables use the
SQLROW_ prefix (SQLROW_DIALECT, SQLROW_NAMED_ARG_PREFIX, ...), with
DATABASE_URL and LOG_LEVEL also read without a prefix.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sqlrow.infrastructure.sql.core.parameters import check_prefix

ENV_FILE_OVERRIDE = os.getenv("SQLROW_ENV_FILE")
SETTINGS_ENV_FILE = Path(ENV_FILE_OVERRIDE).expanduser() if ENV_FILE_OVERRIDE else Path(".env")

DialectName = Literal["default", "sqlite", "postgresql", "postgres", "mysql"]


class Settings(BaseSettings):
    """
    sqlrow settings, read from SQLROW_* variables and an optional .env file.

    Fields:
    - LOG_LEVEL: Logging level (uppercase, no prefix)
    - database_url: SQLAlchemy URL (SQLROW_DATABASE_URL or DATABASE_URL)
    - dialect: Placeholder / insert dialect
    - named_arg_prefix: Character introducing symbolic parameters
    - log_sql: Log every emitted statement
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Threshold for the sqlrow logger (DEBUG shows statements)",
    )

    database_url: str = Field(
        default="sqlite:///sqlrow.db",
        validation_alias=AliasChoices("SQLROW_DATABASE_URL", "DATABASE_URL"),
        description="SQLAlchemy database URL",
    )
    dialect: DialectName = Field(
        default="default",
        description="SQL dialect: default (?), postgresql ($N + RETURNING) or mysql",
    )
    named_arg_prefix: str = Field(
        default="@",
        min_length=1,
        max_length=1,
        description="Character introducing a symbolic parameter such as @ticker",
    )
    log_sql: bool = Field(default=True, description="Log emitted SQL statements")

    @field_validator("dialect", mode="before")
    @classmethod
    def _lower_dialect(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("named_arg_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        return check_prefix(value)

    model_config = SettingsConfigDict(
        env_prefix="SQLROW_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Settings built once per process; call get_settings.cache_clear() to reload."""
    return Settings()
