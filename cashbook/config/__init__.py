"""Configuration package."""

from cashbook.config.settings import (
    LoggingSettings,
    ReportSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LoggingSettings",
    "ReportSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
