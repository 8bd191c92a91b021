"""Configuration management for the D&D character tracker.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from dnd_tracker.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.reclamp_used_counters
    True

Environment Variables:
    DND_TRACKER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_TRACKER_JSON_LOGS: Emit JSON log lines instead of console output
    DND_TRACKER_RULES_RECLAMP_USED_COUNTERS: Clamp "used" counters to freshly
        computed maxima on every resolve
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_tracker.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """Configuration for rules-engine policy choices.

    Attributes:
        reclamp_used_counters: When a maximum is recomputed lower than a
            recorded "used" counter (level-down, reclassification), clamp the
            counter to the new maximum. When False, existing counters are
            carried over verbatim.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_TRACKER_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    reclamp_used_counters: bool = Field(
        default=True,
        description="Clamp used counters against recomputed maxima",
    )


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit logs as JSON.
        rules: Rules-engine policy settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D Character Tracker",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
