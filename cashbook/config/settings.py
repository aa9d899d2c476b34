"""
Configuration Management for Cashbook

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Report thresholds and book identifiers live in one place, and a bad value
fails at startup instead of halfway through a balance sheet.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseSettings):
    """Settings that change what the reports compute."""

    model_config = SettingsConfigDict(
        env_prefix="CASHBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    reconciliation_tolerance: Decimal = Field(
        default=Decimal("1"),
        ge=0,
        description="Largest |assets - (liabilities + equity)| still treated as balanced"
    )
    default_category_label: str = Field(
        default="Other",
        min_length=1,
        description="Label used when a payment has no category"
    )
    cash_book_id: str = Field(
        default="CASH",
        min_length=1,
        description="Book identifier of the cash drawer"
    )
    business_units: str = Field(
        default="",
        description="Comma-separated list of tracked business units"
    )

    @field_validator('cash_book_id')
    @classmethod
    def normalize_book_id(cls, v: str) -> str:
        """Book ids on payments are upper case."""
        return v.strip().upper()

    @property
    def business_units_list(self) -> list[str]:
        """Get business units as a list."""
        return [u.strip() for u in self.business_units.split(",") if u.strip()]


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CASHBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level for local logs"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False = human-readable console)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def reports(self) -> ReportSettings:
        return ReportSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries describing failures.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.reports
        results["reports"] = True
    except ValueError as e:
        results["reports"] = False
        results["reports_error"] = str(e)

    try:
        _ = settings.logging
        results["logging"] = True
    except ValueError as e:
        results["logging"] = False
        results["logging_error"] = str(e)

    return results
