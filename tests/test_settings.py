"""
Tests for Configuration Management
"""

from datetime import datetime, timedelta, timezone

import pytest

from ledger_form.config import (
    AppSettings,
    BackendSettings,
    default_date_range,
    get_settings,
    validate_all_settings,
)


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "DATE_RANGE_YEARS_BACK", "DATE_RANGE_YEARS_FORWARD", "UTC_OFFSET_MINUTES"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.date_range_years_back == 10
        assert settings.date_range_years_forward == 1
        assert settings.tzinfo == timezone.utc

    def test_log_level_normalized(self):
        assert AppSettings(log_level=" debug ").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(ValueError, match="Unsupported log level"):
            AppSettings(log_level="LOUD")

    def test_offset_bounds(self):
        with pytest.raises(ValueError):
            AppSettings(utc_offset_minutes=1440)

    def test_tzinfo_from_offset(self):
        settings = AppSettings(utc_offset_minutes=-210)
        assert settings.tzinfo.utcoffset(None) == timedelta(hours=-3, minutes=-30)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DATE_RANGE_YEARS_BACK", "3")
        assert AppSettings().date_range_years_back == 3


class TestBackendSettings:
    """Tests for BackendSettings."""

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("BACKEND_URL", "http://entries.local/")
        monkeypatch.setenv("BACKEND_MAX_RETRIES", "5")
        settings = BackendSettings()
        assert settings.url == "http://entries.local"
        assert settings.max_retries == 5

    def test_max_retries_bounds(self):
        with pytest.raises(ValueError):
            BackendSettings(max_retries=0)


class TestDefaultDateRange:
    """Tests for building the selectable range around "now"."""

    def test_range_around_now(self):
        settings = AppSettings(date_range_years_back=10, date_range_years_forward=1, utc_offset_minutes=0)
        now = datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc)

        date_range = default_date_range(now, settings)

        assert date_range.start == datetime(2014, 6, 15, 10, 0, tzinfo=timezone.utc)
        assert date_range.end == datetime(2025, 6, 15, 10, 0, tzinfo=timezone.utc)

    def test_leap_day_shifts_to_28th(self):
        """Test 29 Feb lands on 28 Feb in common years."""
        settings = AppSettings(date_range_years_back=10, date_range_years_forward=1, utc_offset_minutes=0)
        now = datetime(2024, 2, 29, 10, 0, tzinfo=timezone.utc)

        date_range = default_date_range(now, settings)

        assert date_range.start.date().isoformat() == "2014-02-28"
        assert date_range.end.date().isoformat() == "2025-02-28"

    def test_range_in_configured_offset(self):
        """Test the bounds carry the configured offset, not the caller's."""
        settings = AppSettings(date_range_years_back=0, date_range_years_forward=0, utc_offset_minutes=120)
        now = datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc)

        date_range = default_date_range(now, settings)

        assert date_range.start.utcoffset() == timedelta(hours=2)
        # 23:00 UTC on 31 Dec is already 1 Jan at +02:00
        assert date_range.start.date().isoformat() == "2025-01-01"
        assert not date_range.is_inverted


class TestGetSettings:
    """Tests for the cached settings root."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        results = validate_all_settings()
        assert results["backend"] is True
        assert results["app"] is True

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        results = validate_all_settings()
        assert results["app"] is False
        assert "Unsupported log level" in results["app_error"]
