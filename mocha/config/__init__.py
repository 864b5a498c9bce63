"""Configuration package."""

from mocha.config.settings import (
    LedgerSettings,
    LoggingSettings,
    QuerySettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LedgerSettings",
    "LoggingSettings",
    "QuerySettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
