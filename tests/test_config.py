"""Tests for configuration loading."""

from decimal import Decimal

import pytest

from cashbook.config import LoggingSettings, ReportSettings, get_settings, validate_all_settings


class TestReportSettings:
    """Tests for ReportSettings."""

    def test_defaults(self):
        settings = ReportSettings()
        assert settings.reconciliation_tolerance == Decimal("1")
        assert settings.default_category_label == "Other"
        assert settings.cash_book_id == "CASH"
        assert settings.business_units_list == []

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CASHBOOK_RECONCILIATION_TOLERANCE", "0.5")
        monkeypatch.setenv("CASHBOOK_CASH_BOOK_ID", " drawer ")
        monkeypatch.setenv("CASHBOOK_BUSINESS_UNITS", "Quarry, Bakery,,")

        settings = ReportSettings()

        assert settings.reconciliation_tolerance == Decimal("0.5")
        assert settings.cash_book_id == "DRAWER"
        assert settings.business_units_list == ["Quarry", "Bakery"]

    def test_zero_tolerance_accepted(self, monkeypatch):
        monkeypatch.setenv("CASHBOOK_RECONCILIATION_TOLERANCE", "0")
        assert ReportSettings().reconciliation_tolerance == Decimal("0")

    def test_negative_tolerance_rejected(self, monkeypatch):
        monkeypatch.setenv("CASHBOOK_RECONCILIATION_TOLERANCE", "-1")
        with pytest.raises(ValueError):
            ReportSettings()


class TestLoggingSettings:
    def test_level_is_normalised(self, monkeypatch):
        monkeypatch.setenv("CASHBOOK_LOG_LEVEL", "debug")
        assert LoggingSettings().log_level == "DEBUG"

    def test_unknown_level_rejected(self, monkeypatch):
        monkeypatch.setenv("CASHBOOK_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError):
            LoggingSettings()


class TestValidateAllSettings:
    def test_all_valid(self):
        assert validate_all_settings() == {"reports": True, "logging": True}

    def test_reports_failure_is_reported(self, monkeypatch):
        monkeypatch.setenv("CASHBOOK_RECONCILIATION_TOLERANCE", "not-a-number")
        results = validate_all_settings()
        assert results["reports"] is False
        assert "reports_error" in results
        assert results["logging"] is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
