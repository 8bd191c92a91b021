"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DndTrackerError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Invalid caller input.
        RulesEngineError: Rejected rules transitions.
        LevelUpRejectedError: A level-up precondition failed.
        RestUnavailableError: A rest could not be taken.
        DiceRollError: A dice expression could not be rolled.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        character_context: Bind a character to log entries in a block.
"""

from __future__ import annotations

from dnd_tracker.core.config import (
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dnd_tracker.core.exceptions import (
    ConfigurationError,
    DiceRollError,
    DndTrackerError,
    LevelUpRejectedError,
    RestUnavailableError,
    RulesEngineError,
    ValidationError,
)
from dnd_tracker.core.logging import (
    bind_context,
    character_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "DndTrackerError",
    "ConfigurationError",
    "ValidationError",
    "RulesEngineError",
    "LevelUpRejectedError",
    "RestUnavailableError",
    "DiceRollError",
    # Configuration
    "Settings",
    "RulesSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "character_context",
]
