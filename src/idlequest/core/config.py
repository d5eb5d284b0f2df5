"""Configuration management for IdleQuest.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files and runtime overrides. Balancing curves live here
rather than in the engine so they can be tuned without code changes.

Example:
    >>> from idlequest.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.min_auto_attacks_per_second
    0.1

Environment Variables:
    IDLEQUEST_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    IDLEQUEST_GAME_DIFFICULTY_PER_CLEAR: Difficulty growth per zone clear
    IDLEQUEST_SESSION_AUTO_TICK_INTERVAL: Seconds between auto-attack ticks
    IDLEQUEST_STORAGE_DATABASE_PATH: Path to the SQLite save file
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from idlequest.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Tunable curves for combat, zones and prestige.

    All multiplier parameters are non-negative so the derived multipliers
    stay non-decreasing in clear count and prestige level.

    Attributes:
        min_auto_attacks_per_second: Floor applied to the auto attack rate.
        difficulty_per_clear: Linear growth term of the difficulty curve.
        difficulty_exponent: Exponent applied to the difficulty curve.
        reward_per_clear: Linear growth of the reward multiplier per clear.
        prestige_difficulty_bonus: Difficulty growth per prestige level.
        prestige_reward_bonus: Reward growth per prestige level.
        prestige_damage_bonus: Permanent damage bonus per prestige level.
        prestige_token_base: Flat tokens granted by every prestige.
        prestige_token_per_zone: Tokens per unlocked zone, scaled by zone id.
        prestige_token_per_clear: Tokens per zone clear beyond the first.
        prestige_token_level_bonus: Token multiplier growth per prestige level.
        prestige_resets_buildings: Whether prestige returns buildings to level 0.
        prestige_resets_economy: Whether prestige empties the ledger.
        prestige_resets_character: Whether prestige returns the hero to level 1.
        xp_curve_base: Experience needed for the first level up.
        xp_curve_growth: Growth factor of the experience curve.
        login_streak_gold: Gold granted per day of login streak.
        login_streak_token_interval: Streak length that grants prestige tokens.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLEQUEST_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    min_auto_attacks_per_second: float = Field(
        default=0.1,
        gt=0,
        description="Floor for auto attacks per second",
    )
    difficulty_per_clear: float = Field(default=0.5, ge=0)
    difficulty_exponent: float = Field(
        default=0.85,
        ge=0,
        le=1,
        description="Values below 1 keep difficulty growth sub-linear",
    )
    reward_per_clear: float = Field(default=0.3, ge=0)
    prestige_difficulty_bonus: float = Field(default=0.25, ge=0)
    prestige_reward_bonus: float = Field(default=0.15, ge=0)
    prestige_damage_bonus: float = Field(default=0.1, ge=0)
    prestige_token_base: int = Field(default=10, ge=0)
    prestige_token_per_zone: int = Field(default=2, ge=0)
    prestige_token_per_clear: float = Field(default=1.5, ge=0)
    prestige_token_level_bonus: float = Field(default=0.15, ge=0)
    prestige_resets_buildings: bool = Field(
        default=False,
        description="Reset town buildings to level 0 on prestige",
    )
    prestige_resets_economy: bool = Field(
        default=True,
        description="Clear gold, materials and inventory on prestige",
    )
    prestige_resets_character: bool = Field(
        default=True,
        description="Reset hero level and experience on prestige",
    )
    xp_curve_base: int = Field(default=50, ge=1)
    xp_curve_growth: float = Field(default=1.25, ge=1)
    login_streak_gold: int = Field(default=100, ge=0)
    login_streak_token_interval: int = Field(default=7, ge=1)


class SessionSettings(BaseSettings):
    """Configuration for session timers and bounded collections.

    Attributes:
        auto_tick_interval: Seconds between auto-attack ticks.
        analytics_sample_interval: Seconds between analytics samples.
        max_journal_entries: Number of journal entries kept in memory.
        daily_quest_count: Daily quests generated per calendar day.
        max_daily_rerolls: Daily quest rerolls allowed per day.
        offline_progress_enabled: Grant earnings for time spent away.
        offline_min_seconds: Absences shorter than this earn nothing.
        offline_max_hours: Cap on the rewarded time away.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLEQUEST_SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    auto_tick_interval: float = Field(default=1.0, gt=0)
    analytics_sample_interval: float = Field(default=60.0, gt=0)
    max_journal_entries: int = Field(default=100, ge=1, le=10_000)
    daily_quest_count: int = Field(default=5, ge=1, le=20)
    max_daily_rerolls: int = Field(default=1, ge=0)
    offline_progress_enabled: bool = Field(default=True, description="Grant offline progress")
    offline_min_seconds: float = Field(default=300.0, ge=0)
    offline_max_hours: float = Field(default=6.0, gt=0)

    @model_validator(mode="after")
    def validate_sample_interval(self) -> "SessionSettings":
        """Ensure analytics are not sampled faster than combat ticks.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the sample interval is below the tick interval.
        """
        if self.analytics_sample_interval < self.auto_tick_interval:
            raise ConfigurationError(
                f"analytics_sample_interval ({self.analytics_sample_interval}) must not be "
                f"shorter than auto_tick_interval ({self.auto_tick_interval})",
                config_key="analytics_sample_interval",
            )
        return self


class StorageSettings(BaseSettings):
    """Configuration for save game storage.

    Attributes:
        backend: Key-value backend used by the save manager.
        database_path: Path to the SQLite database file.
        key_prefix: Prefix applied to every persisted record key.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLEQUEST_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["memory", "sqlite"] = Field(
        default="sqlite",
        description="Key-value store backend",
    )
    database_path: Path = Field(
        default=Path("data/idlequest.db"),
        description="Path to SQLite database",
    )
    key_prefix: str = Field(
        default="idlequest",
        min_length=1,
        description="Prefix for persisted record keys",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit logs as JSON instead of console output.
        game: Balancing curves and prestige policy.
        session: Timer intervals and collection limits.
        storage: Save game storage settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLEQUEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="IdleQuest", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    game: GameSettings = Field(default_factory=GameSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "SessionSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
