"""Tests for the session analytics aggregator."""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Any

import pytest

from idlequest.engine.analytics import SessionAnalytics
from idlequest.models import DailyStats, SessionMetrics, SessionStats


@pytest.fixture
def analytics(clock: Any, calendar: Any) -> SessionAnalytics:
    """Create an aggregator on fake time sources."""
    return SessionAnalytics(clock=clock, today=calendar)


class TestSessionLifecycle:
    """Tests for starting and ending sessions."""

    def test_start_session(self, analytics: SessionAnalytics, calendar: Any) -> None:
        """Starting records the start time and counts the session."""
        analytics.start_session()

        assert analytics.session_active
        assert analytics.record.sessions_count == 1
        assert analytics.record.last_active_date == calendar.day.isoformat()

    def test_end_session_accumulates(self, analytics: SessionAnalytics, clock: Any) -> None:
        """Ending folds elapsed time into the totals."""
        analytics.start_session()
        clock.advance(120)

        elapsed = analytics.end_session()

        assert elapsed == pytest.approx(120)
        assert not analytics.session_active
        assert analytics.record.total_session_time == pytest.approx(120)
        assert analytics.record.average_session_length == pytest.approx(2.0)

    def test_end_without_session(self, analytics: SessionAnalytics) -> None:
        """Ending with nothing running is a no-op."""
        assert analytics.end_session() == 0.0
        assert analytics.record.total_session_time == 0.0

    def test_end_twice(self, analytics: SessionAnalytics, clock: Any) -> None:
        """A second end does not count the time again."""
        analytics.start_session()
        clock.advance(60)
        analytics.end_session()
        clock.advance(60)

        assert analytics.end_session() == 0.0
        assert analytics.record.total_session_time == pytest.approx(60)

    def test_restart_ends_running_session(self, analytics: SessionAnalytics, clock: Any) -> None:
        """Starting while active ends the running session first."""
        analytics.start_session()
        clock.advance(30)

        analytics.start_session()

        assert analytics.record.sessions_count == 2
        assert analytics.record.total_session_time == pytest.approx(30)
        assert analytics.session_active

    def test_average_over_sessions(self, analytics: SessionAnalytics, clock: Any) -> None:
        """The average covers every finished session."""
        for seconds in (60, 180):
            analytics.start_session()
            clock.advance(seconds)
            analytics.end_session()

        assert analytics.record.average_session_length == pytest.approx(2.0)

    def test_zero_elapsed_is_finite(self, analytics: SessionAnalytics) -> None:
        """A session of zero seconds reports zeros, never NaN or infinity."""
        analytics.start_session()
        analytics.record_zone_cleared()

        stats = analytics.session_stats()
        analytics.end_session()

        assert stats.zones_per_minute == 0.0
        assert stats.gold_per_minute == 0.0
        metrics = analytics.record
        for value in (metrics.average_session_length, metrics.zones_per_minute):
            assert math.isfinite(value)
            assert value == 0.0


class TestCounters:
    """Tests for counters and derived rates."""

    def test_counters_grow(self, analytics: SessionAnalytics) -> None:
        """Every counter only grows."""
        analytics.record_monster_killed(3)
        analytics.record_gold_earned(50)
        analytics.record_gold_earned(-5)
        analytics.record_xp_gained(20)
        analytics.record_item_crafted()
        analytics.record_quest_completed()
        analytics.record_prestige()

        metrics = analytics.record
        assert metrics.monsters_killed == 3
        assert metrics.gold_earned == 50
        assert metrics.xp_gained == 20
        assert metrics.items_crafted == 1
        assert metrics.quests_completed == 1
        assert metrics.prestige_count == 1

    def test_session_rates(self, analytics: SessionAnalytics, clock: Any) -> None:
        """Rates are per minute of the current session."""
        analytics.start_session()
        clock.advance(120)
        analytics.record_zone_cleared()
        analytics.record_zone_cleared()
        analytics.record_gold_earned(300)
        analytics.record_xp_gained(60)

        stats = analytics.session_stats()

        assert stats.current_session_minutes == pytest.approx(2.0)
        assert stats.zones_per_minute == pytest.approx(1.0)
        assert stats.gold_per_minute == pytest.approx(150.0)
        assert stats.xp_per_minute == pytest.approx(30.0)

    def test_rates_exclude_previous_sessions(self, analytics: SessionAnalytics, clock: Any) -> None:
        """Earlier sessions do not inflate the current rates."""
        analytics.start_session()
        analytics.record_gold_earned(1000)
        clock.advance(60)
        analytics.end_session()

        analytics.start_session()
        clock.advance(60)
        analytics.record_gold_earned(30)

        assert analytics.session_stats().gold_per_minute == pytest.approx(30.0)

    def test_inactive_stats(self, analytics: SessionAnalytics) -> None:
        """Without a session all rates are zero."""
        assert analytics.session_stats() == SessionStats()

    def test_lifetime_zones_per_minute(self, analytics: SessionAnalytics, clock: Any) -> None:
        """The stored rate covers all finished play time."""
        analytics.start_session()
        clock.advance(240)
        analytics.record_zone_cleared()
        analytics.end_session()

        assert analytics.record.zones_per_minute == pytest.approx(0.25)


class TestDailyStats:
    """Tests for per-day attribution."""

    def test_today(self, analytics: SessionAnalytics, clock: Any) -> None:
        """Today's sessions, minutes and clears are reported."""
        analytics.start_session()
        analytics.record_zone_cleared()
        clock.advance(90)
        analytics.end_session()

        stats = analytics.daily_stats()

        assert stats.sessions_today == 1
        assert stats.minutes_played_today == pytest.approx(1.5)
        assert stats.zones_today == 1

    def test_running_session_counts(self, analytics: SessionAnalytics, clock: Any) -> None:
        """Minutes of the running session count toward today."""
        analytics.start_session()
        clock.advance(60)

        assert analytics.daily_stats().minutes_played_today == pytest.approx(1.0)

    def test_other_day(self, analytics: SessionAnalytics, calendar: Any) -> None:
        """Activity is not attributed to other days."""
        analytics.start_session()

        assert analytics.daily_stats(calendar.day - timedelta(days=1)) == DailyStats()

    def test_day_rollover(self, analytics: SessionAnalytics, calendar: Any, clock: Any) -> None:
        """Daily counters restart on a new calendar day."""
        analytics.start_session()
        analytics.record_zone_cleared()
        clock.advance(60)
        analytics.end_session()

        calendar.day = calendar.day + timedelta(days=1)
        analytics.start_session()

        stats = analytics.daily_stats()
        assert stats.sessions_today == 1
        assert stats.zones_today == 0
        assert analytics.record.sessions_count == 2
        assert analytics.record.zones_cleared == 1

    def test_resume_from_record(self, clock: Any) -> None:
        """Existing metrics are continued, not replaced."""
        metrics = SessionMetrics(sessions_count=4, total_session_time=600.0)
        analytics = SessionAnalytics(metrics, clock=clock, today=lambda: date(2026, 10, 19))

        analytics.start_session()
        clock.advance(120)
        analytics.end_session()

        assert analytics.record is metrics
        assert metrics.sessions_count == 5
        assert metrics.average_session_length == pytest.approx(12.0 / 5)


class TestTimeAway:
    """Tests for measuring the absence between sessions."""

    def test_no_previous_session(self, analytics: SessionAnalytics) -> None:
        """Nothing is away before the first session ends."""
        assert analytics.take_time_away() == 0.0

    def test_measured_once(self, analytics: SessionAnalytics, clock: Any) -> None:
        """The absence since the last session end is returned and consumed."""
        analytics.start_session()
        clock.advance(60)
        analytics.end_session()
        clock.advance(900)

        assert analytics.take_time_away() == 900.0
        assert analytics.take_time_away() == 0.0
        assert analytics.record.last_active_time is None

    def test_zero_while_active(self, analytics: SessionAnalytics, clock: Any) -> None:
        """A running session has no absence to report."""
        analytics.start_session()
        clock.advance(60)

        assert analytics.take_time_away() == 0.0
