"""
Configuration Management for Ledger Form

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.

NOTE: The current time is never read here. Callers pass "now" in,
so everything built from these settings stays deterministic.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger_form.models.dates import DateRange


class BackendSettings(BaseSettings):
    """Entries backend configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BACKEND_",
        extra="ignore"
    )

    url: Optional[str] = Field(
        default=None,
        description="Base URL of the entries backend (offline mode if unset)"
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Per-request timeout"
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per request before reporting the backend unreachable"
    )
    fallback_categories: str = Field(
        default="Groceries,Housing,Transport,Utilities,Other",
        description="Comma-separated categories used when the backend is unavailable"
    )

    @field_validator('url')
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the base URL so paths can be appended."""
        if v is None:
            return v
        v = v.strip().rstrip("/")
        return v or None

    @property
    def fallback_categories_list(self) -> list[str]:
        """Get fallback categories as a list."""
        return [
            category.strip()
            for category in self.fallback_categories.split(",")
            if category.strip()
        ]


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Date selector bounds, relative to the injected "now"
    date_range_years_back: int = Field(
        default=10,
        ge=0,
        le=200,
        description="How many years before now an entry can be dated"
    )
    date_range_years_forward: int = Field(
        default=1,
        ge=0,
        le=50,
        description="How many years after now an entry can be dated"
    )
    utc_offset_minutes: int = Field(
        default=0,
        ge=-1439,
        le=1439,
        description="Fixed UTC offset used for entry dates"
    )

    # Validation thresholds
    max_entry_value: float = Field(
        default=1000000.0,
        gt=0.0,
        description="Entries above this amount get a sanity warning"
    )

    # Display
    currency_symbol: str = Field(
        default="€",
        max_length=5,
        description="Currency symbol shown next to monetary inputs"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only allow standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.strip().upper()
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level

    @property
    def tzinfo(self) -> timezone:
        """Fixed-offset timezone for entry dates."""
        return timezone(timedelta(minutes=self.utc_offset_minutes))


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
    def backend(self) -> BackendSettings:
        return BackendSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def _shift_years(moment: datetime, years: int) -> datetime:
    """Move a datetime by whole years; Feb 29 lands on Feb 28 in common years."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)


def default_date_range(now: datetime, settings: Optional[AppSettings] = None) -> DateRange:
    """
    Build the selectable range for entry dates around an injected "now".

    Args:
        now: Current instant (aware). Converted to the configured offset.
        settings: App settings; loaded from the environment if None.
    """
    settings = settings or get_settings().app
    local_now = now.astimezone(settings.tzinfo)
    return DateRange(
        start=_shift_years(local_now, -settings.date_range_years_back),
        end=_shift_years(local_now, settings.date_range_years_forward),
    )


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.backend
        results["backend"] = True
    except Exception as e:
        results["backend"] = False
        results["backend_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
