"""Session analytics aggregator.

Counters only ever grow. Rates are derived on read as
``counter / elapsed_minutes`` and are 0 whenever no time has elapsed, so
every reported value is finite.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import date

from idlequest.core.logging import get_logger
from idlequest.models.analytics import DailyStats, SessionMetrics, SessionStats


logger = get_logger(__name__)

Clock = Callable[[], float]
TodayProvider = Callable[[], date]


def _per_minute(count: float, minutes: float) -> float:
    return count / minutes if minutes > 0 else 0.0


class SessionAnalytics:
    """Brackets play sessions and accumulates play counters.

    Rates in session_stats() cover the current session only: the counters
    are snapshotted when the session starts.
    """

    def __init__(
        self,
        metrics: SessionMetrics | None = None,
        *,
        clock: Clock = time.time,
        today: TodayProvider = date.today,
    ) -> None:
        """Initialize the aggregator.

        Args:
            metrics: Existing metrics record to operate on.
            clock: Wall clock in seconds. Must return positive values.
            today: Provider of the current calendar date.
        """
        self._metrics = metrics if metrics is not None else SessionMetrics()
        self._clock = clock
        self._today = today
        self._baseline = (0, 0, 0)

    @property
    def record(self) -> SessionMetrics:
        """The underlying durable record."""
        return self._metrics

    @property
    def session_active(self) -> bool:
        """Check whether a session is in progress."""
        return self._metrics.session_active

    # =========================================================================
    # Session Lifecycle
    # =========================================================================

    def start_session(self) -> None:
        """Begin a session. An active session is ended first."""
        if self._metrics.session_active:
            self.end_session()
        today = self._roll_day()
        m = self._metrics
        m.current_session_start_time = self._clock()
        m.sessions_count = m.sessions_count + 1
        m.sessions_today = m.sessions_today + 1
        m.last_active_date = today
        self._baseline = (m.zones_cleared, m.gold_earned, m.xp_gained)
        logger.info("Session started", sessions_count=m.sessions_count)

    def end_session(self) -> float:
        """End the active session and fold its duration into the totals.

        Does nothing when no session is active.

        Returns:
            Seconds the session lasted, 0 if none was active.
        """
        m = self._metrics
        if not m.session_active:
            return 0.0

        elapsed = max(0.0, self._clock() - m.current_session_start_time)
        self._roll_day()
        m.total_session_time = m.total_session_time + elapsed
        m.seconds_today = m.seconds_today + elapsed
        total_minutes = m.total_session_time / 60
        m.average_session_length = total_minutes / m.sessions_count if m.sessions_count else 0.0
        m.zones_per_minute = _per_minute(m.zones_cleared, total_minutes)
        m.current_session_start_time = 0.0
        m.last_active_time = self._clock()
        logger.info(
            "Session ended",
            elapsed_seconds=round(elapsed, 2),
            average_session_length=round(m.average_session_length, 2),
        )
        return elapsed

    def take_time_away(self) -> float:
        """Seconds since the last session ended, consumed by this call.

        Returns 0 while a session is active or when no session has ended
        since the last call, so the same absence is never counted twice.
        """
        m = self._metrics
        if m.session_active or m.last_active_time is None:
            return 0.0
        away = max(0.0, self._clock() - m.last_active_time)
        m.last_active_time = None
        return away

    # =========================================================================
    # Counters
    # =========================================================================

    def record_zone_cleared(self) -> None:
        """Count a zone clear."""
        self._roll_day()
        self._metrics.zones_cleared = self._metrics.zones_cleared + 1
        self._metrics.zones_today = self._metrics.zones_today + 1

    def record_monster_killed(self, count: int = 1) -> None:
        """Count monster kills."""
        self._metrics.monsters_killed = self._metrics.monsters_killed + count

    def record_gold_earned(self, amount: int) -> None:
        """Add earned gold."""
        if amount > 0:
            self._metrics.gold_earned = self._metrics.gold_earned + amount

    def record_xp_gained(self, amount: int) -> None:
        """Add earned experience."""
        if amount > 0:
            self._metrics.xp_gained = self._metrics.xp_gained + amount

    def record_item_crafted(self) -> None:
        """Count a crafted item."""
        self._metrics.items_crafted = self._metrics.items_crafted + 1

    def record_quest_completed(self) -> None:
        """Count a claimed quest or achievement."""
        self._metrics.quests_completed = self._metrics.quests_completed + 1

    def record_prestige(self) -> None:
        """Count a prestige reset."""
        self._metrics.prestige_count = self._metrics.prestige_count + 1

    # =========================================================================
    # Derived Rates
    # =========================================================================

    def session_stats(self) -> SessionStats:
        """Per-minute rates for the current session; all 0 when inactive."""
        m = self._metrics
        if not m.session_active:
            return SessionStats()
        minutes = max(0.0, self._clock() - m.current_session_start_time) / 60
        zones0, gold0, xp0 = self._baseline
        return SessionStats(
            current_session_minutes=minutes,
            zones_per_minute=_per_minute(m.zones_cleared - zones0, minutes),
            gold_per_minute=_per_minute(m.gold_earned - gold0, minutes),
            xp_per_minute=_per_minute(m.xp_gained - xp0, minutes),
        )

    def daily_stats(self, today: date | None = None) -> DailyStats:
        """Activity attributed to a calendar day, the current one by default.

        The running session counts toward today's minutes.
        """
        day = (today or self._today()).isoformat()
        m = self._metrics
        if m.activity_date != day:
            return DailyStats()
        seconds = m.seconds_today
        if m.session_active:
            seconds += max(0.0, self._clock() - m.current_session_start_time)
        return DailyStats(
            sessions_today=m.sessions_today,
            minutes_played_today=seconds / 60,
            zones_today=m.zones_today,
        )

    def _roll_day(self) -> str:
        today = self._today().isoformat()
        m = self._metrics
        if m.activity_date != today:
            m.activity_date = today
            m.sessions_today = 0
            m.seconds_today = 0.0
            m.zones_today = 0
        return today


__all__ = [
    "Clock",
    "TodayProvider",
    "SessionAnalytics",
]
