"""Configuration package."""

from src.config.settings import (
    AppSettings,
    PlanSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "PlanSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
