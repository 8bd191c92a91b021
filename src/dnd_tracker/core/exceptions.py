"""Custom exception hierarchy for the D&D character tracker.

All exceptions inherit from DndTrackerError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Bounds violations on resource consumption are deliberately NOT exceptions:
the ledger reports them as no-op results. Exceptions are reserved for
rejected state transitions and invalid caller input.

Example:
    >>> from dnd_tracker.core.exceptions import LevelUpRejectedError
    >>> raise LevelUpRejectedError("Hit point gain must be at least 1", reason="hp_gain_too_low")
"""

from __future__ import annotations

from typing import Any


class DndTrackerError(Exception):
    """Base exception for all character tracker errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DndTrackerError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(DndTrackerError):
    """Raised when caller input cannot be interpreted.

    This covers programming errors such as an unknown resource pool name
    or a non-positive amount, not rule violations during play.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Rules Engine Exceptions
# =============================================================================


class RulesEngineError(DndTrackerError):
    """Base exception for rejected rules-engine transitions.

    The character passed to the failing operation is never modified.
    """


class LevelUpRejectedError(RulesEngineError):
    """Raised when a level-up precondition fails.

    Attributes:
        reason: Machine-readable rejection code (a LevelUpRejection value).
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str,
        current_level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize level-up rejection with its reason code.

        Args:
            message: User-facing explanation of the failed precondition.
            reason: Machine-readable rejection code.
            current_level: Level of the character before the attempt.
            details: Optional dictionary containing additional error context.
        """
        self.reason = reason
        combined_details = details or {}
        combined_details["reason"] = str(reason)
        if current_level is not None:
            combined_details["current_level"] = current_level
        super().__init__(message, details=combined_details)


class RestUnavailableError(RulesEngineError):
    """Raised when a rest cannot be taken (e.g. no hit dice left)."""


class DiceRollError(RulesEngineError):
    """Raised when a dice expression cannot be rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


__all__ = [
    "DndTrackerError",
    "ConfigurationError",
    "ValidationError",
    "RulesEngineError",
    "LevelUpRejectedError",
    "RestUnavailableError",
    "DiceRollError",
]
