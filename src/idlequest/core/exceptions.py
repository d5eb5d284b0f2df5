"""Custom exception hierarchy for the IdleQuest progression engine.

Every failure the engine reports is a subclass of IdleQuestError, so
presentation collaborators can catch one type at the boundary and turn
it into a no-op or a user message. None of these errors leave partial
mutations behind: callers may retry or ignore them safely.

Example:
    >>> from idlequest.core.exceptions import InsufficientFundsError
    >>> raise InsufficientFundsError("Not enough gold", resource_id="gold", required=50, available=10)
"""

from __future__ import annotations

from typing import Any


class IdleQuestError(Exception):
    """Base exception for all IdleQuest errors.

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
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Economy Exceptions
# =============================================================================


class EconomyError(IdleQuestError):
    """Base exception for ledger operations."""


class InsufficientFundsError(EconomyError):
    """Raised when a debit or spend exceeds the available balance.

    The ledger is never mutated when this is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        resource_id: str | None = None,
        required: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize insufficient funds error with balance context.

        Args:
            message: Human-readable error description.
            resource_id: Resource that was short ("gold" or a material id).
            required: Amount the operation needed.
            available: Amount actually held.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if resource_id:
            combined_details["resource_id"] = resource_id
        if required is not None:
            combined_details["required"] = required
        if available is not None:
            combined_details["available"] = available
        super().__init__(message, details=combined_details)
        self.resource_id = resource_id
        self.required = required
        self.available = available


# =============================================================================
# Progression Exceptions
# =============================================================================


class ProgressionError(IdleQuestError):
    """Base exception for building, zone and prestige preconditions."""


class MaxLevelReachedError(ProgressionError):
    """Raised when upgrading a building that is already at its max level."""

    def __init__(
        self,
        message: str,
        *,
        building_id: str | None = None,
        max_level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize max level error with building context.

        Args:
            message: Human-readable error description.
            building_id: Building that could not be upgraded.
            max_level: The building's level cap.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if building_id:
            combined_details["building_id"] = building_id
        if max_level is not None:
            combined_details["max_level"] = max_level
        super().__init__(message, details=combined_details)


class PrestigeNotAvailableError(ProgressionError):
    """Raised when prestige is requested before any prestige zone is cleared."""


class ZoneLockedError(ProgressionError):
    """Raised when selecting a zone whose unlock requirement is not met."""

    def __init__(
        self,
        message: str,
        *,
        zone_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize zone locked error.

        Args:
            message: Human-readable error description.
            zone_id: Zone that was requested.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if zone_id is not None:
            combined_details["zone_id"] = zone_id
        super().__init__(message, details=combined_details)


class BossNotReadyError(ZoneLockedError):
    """Raised when a boss kill is reported before the zone's kill quota is met."""


# =============================================================================
# Quest Exceptions
# =============================================================================


class QuestError(IdleQuestError):
    """Base exception for quest and achievement claim preconditions."""

    def __init__(
        self,
        message: str,
        *,
        quest_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize quest error with quest context.

        Args:
            message: Human-readable error description.
            quest_id: Quest or achievement involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if quest_id:
            combined_details["quest_id"] = quest_id
        super().__init__(message, details=combined_details)


class NotCompletedError(QuestError):
    """Raised when claiming a quest whose objectives are not all met."""


class AlreadyClaimedError(QuestError):
    """Raised when claiming a quest that was already claimed."""


class RerollLimitError(QuestError):
    """Raised when the daily reroll allowance is used up."""


# =============================================================================
# Content Exceptions
# =============================================================================


class ContentError(IdleQuestError):
    """Base exception for content lookups and content parsing."""


class UnknownObjectiveKindError(ContentError):
    """Raised when content references an objective kind the engine lacks."""

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown objective kind error.

        Args:
            message: Human-readable error description.
            kind: The unrecognised objective kind.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if kind:
            combined_details["kind"] = kind
        super().__init__(message, details=combined_details)


class UnknownEntityError(ContentError):
    """Raised when an id does not resolve to any catalog entry."""

    def __init__(
        self,
        message: str,
        *,
        entity_type: str | None = None,
        entity_id: str | int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown entity error.

        Args:
            message: Human-readable error description.
            entity_type: Kind of entity ("building", "zone", "quest").
            entity_id: The id that failed to resolve.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entity_type:
            combined_details["entity_type"] = entity_type
        if entity_id is not None:
            combined_details["entity_id"] = entity_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(IdleQuestError):
    """Raised when a persistence adapter cannot read or write a record."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with key context.

        Args:
            message: Human-readable error description.
            key: Record key involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if key:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(IdleQuestError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

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


class ValidationError(IdleQuestError):
    """Raised when engine input fails validation.

    Covers negative amounts passed to the ledger and similar caller
    mistakes that are not content problems.
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


__all__ = [
    # Base exception
    "IdleQuestError",
    # Economy exceptions
    "EconomyError",
    "InsufficientFundsError",
    # Progression exceptions
    "ProgressionError",
    "MaxLevelReachedError",
    "PrestigeNotAvailableError",
    "ZoneLockedError",
    "BossNotReadyError",
    # Quest exceptions
    "QuestError",
    "NotCompletedError",
    "AlreadyClaimedError",
    "RerollLimitError",
    # Content exceptions
    "ContentError",
    "UnknownObjectiveKindError",
    "UnknownEntityError",
    # Storage exceptions
    "StorageError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
