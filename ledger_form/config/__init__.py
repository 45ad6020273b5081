"""Configuration package."""

from ledger_form.config.settings import (
    AppSettings,
    BackendSettings,
    Settings,
    default_date_range,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "BackendSettings",
    "Settings",
    "default_date_range",
    "get_settings",
    "validate_all_settings",
]
