"""Configuration management for sqlrow.

Usage:
    >>> from sqlrow.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.dialect)
"""

from sqlrow.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
