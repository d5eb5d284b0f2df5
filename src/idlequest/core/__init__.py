"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        IdleQuestError: Base exception for all engine errors.
        InsufficientFundsError, MaxLevelReachedError, PrestigeNotAvailableError,
        ZoneLockedError, NotCompletedError, AlreadyClaimedError,
        UnknownObjectiveKindError: Typed, recoverable failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from idlequest.core.config import (
    GameSettings,
    SessionSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from idlequest.core.exceptions import (
    AlreadyClaimedError,
    ConfigurationError,
    ContentError,
    EconomyError,
    IdleQuestError,
    InsufficientFundsError,
    MaxLevelReachedError,
    NotCompletedError,
    PrestigeNotAvailableError,
    ProgressionError,
    QuestError,
    RerollLimitError,
    StorageError,
    UnknownEntityError,
    UnknownObjectiveKindError,
    ValidationError,
    ZoneLockedError,
)
from idlequest.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "IdleQuestError",
    "EconomyError",
    "InsufficientFundsError",
    "ProgressionError",
    "MaxLevelReachedError",
    "PrestigeNotAvailableError",
    "ZoneLockedError",
    "QuestError",
    "NotCompletedError",
    "AlreadyClaimedError",
    "RerollLimitError",
    "ContentError",
    "UnknownObjectiveKindError",
    "UnknownEntityError",
    "StorageError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "GameSettings",
    "SessionSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
