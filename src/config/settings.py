"""
Configuration Management for Meeting Scheduler

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every default matches the classic scheduler behavior, so running
without any environment variables or .env file gives the classic setup:
accounts in ``usuarios.csv``, 2 meetings for BASE and 5 for PREMIUM.
"""

from functools import lru_cache
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Flat-file account storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEDULER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    accounts_file: str = Field(
        default="usuarios.csv",
        description="Path to the comma-separated accounts file"
    )
    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed file write is attempted"
    )

    @field_validator('accounts_file')
    @classmethod
    def validate_accounts_file(cls, v: str) -> str:
        """An empty path would silently write into the working directory."""
        if not v.strip():
            raise ValueError("accounts_file must not be empty")
        return v


class PlanSettings(BaseSettings):
    """Per-plan meeting quotas."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEDULER_PLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    base_meeting_limit: int = Field(
        default=2,
        ge=0,
        description="Maximum meetings a BASE account can hold in a session"
    )
    premium_meeting_limit: int = Field(
        default=5,
        ge=0,
        description="Maximum meetings a PREMIUM account can hold in a session"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCHEDULER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="WARNING",
        description="Level for diagnostic output on stderr"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG log level)"
    )
    pin_upper_bound: int = Field(
        default=10000,
        ge=1,
        description="Largest number a generated meeting PIN can carry"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.strip().upper()
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


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
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def plans(self) -> PlanSettings:
        return PlanSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, Union[bool, str]]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    ``<name>_error`` entry for each section that failed.
    """
    results = {}

    settings = get_settings()

    sections = {
        "storage": lambda: settings.storage,
        "plans": lambda: settings.plans,
        "app": lambda: settings.app,
    }

    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
