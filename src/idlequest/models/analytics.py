"""Session analytics record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SessionMetrics(BaseModel):
    """Accumulated play metrics.

    ``current_session_start_time`` is transient: it is excluded from
    serialization and is 0 while no session is active.

    Attributes:
        total_session_time: Seconds played across all finished sessions.
        sessions_count: Sessions started.
        zones_cleared: Zone clears recorded.
        monsters_killed: Kills recorded.
        gold_earned: Gold earned from play.
        xp_gained: Experience earned from play.
        items_crafted: Items crafted.
        quests_completed: Quests and achievements claimed.
        prestige_count: Prestige resets performed.
        average_session_length: Mean finished session length in minutes.
        zones_per_minute: Zone clears per minute of total play time.
        last_active_date: ISO date of the last session start.
        activity_date: ISO date the daily counters belong to.
        sessions_today: Sessions started on ``activity_date``.
        seconds_today: Seconds played on ``activity_date``.
        zones_today: Zone clears recorded on ``activity_date``.
        last_active_time: Wall clock time the last session ended, until it is
            turned into offline progress.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    total_session_time: float = Field(default=0.0, ge=0)
    sessions_count: int = Field(default=0, ge=0)
    zones_cleared: int = Field(default=0, ge=0)
    monsters_killed: int = Field(default=0, ge=0)
    gold_earned: int = Field(default=0, ge=0)
    xp_gained: int = Field(default=0, ge=0)
    items_crafted: int = Field(default=0, ge=0)
    quests_completed: int = Field(default=0, ge=0)
    prestige_count: int = Field(default=0, ge=0)
    average_session_length: float = Field(default=0.0, ge=0)
    zones_per_minute: float = Field(default=0.0, ge=0)
    last_active_date: str = ""
    activity_date: str = ""
    sessions_today: int = Field(default=0, ge=0)
    seconds_today: float = Field(default=0.0, ge=0)
    zones_today: int = Field(default=0, ge=0)
    last_active_time: float | None = Field(default=None, ge=0)
    current_session_start_time: float = Field(default=0.0, ge=0, exclude=True)

    @property
    def session_active(self) -> bool:
        """Check whether a session is in progress."""
        return self.current_session_start_time > 0


class SessionStats(BaseModel):
    """Per-minute rates for the current session. Always finite."""

    model_config = ConfigDict(frozen=True)

    current_session_minutes: float = 0.0
    zones_per_minute: float = 0.0
    gold_per_minute: float = 0.0
    xp_per_minute: float = 0.0


class DailyStats(BaseModel):
    """Activity attributed to the given day."""

    model_config = ConfigDict(frozen=True)

    sessions_today: int = 0
    minutes_played_today: float = 0.0
    zones_today: int = 0


__all__ = [
    "SessionMetrics",
    "SessionStats",
    "DailyStats",
]
