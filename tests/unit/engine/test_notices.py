"""Tests for the notice bus and the progression journal."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from idlequest.engine.journal import ProgressionJournal
from idlequest.engine.notices import NoticeBus, ProgressionNotice
from idlequest.models import NoticeCategory


class TestNoticeBus:
    """Tests for publishing notices."""

    def test_emit_reaches_subscribers(self) -> None:
        """Subscribers receive the sender and the notice."""
        bus = NoticeBus()
        received: list[tuple[Any, ProgressionNotice]] = []

        def handler(sender: Any, **kwargs: Any) -> None:
            received.append((sender, kwargs["notice"]))

        bus.subscribe(handler)
        notice = bus.emit(NoticeCategory.TOWN, "Town Hall upgraded", level=2)

        assert received == [(bus, notice)]
        assert notice.data == {"level": 2}

    def test_unsubscribe(self) -> None:
        """Unsubscribed handlers are no longer called."""
        bus = NoticeBus()
        received: list[ProgressionNotice] = []

        def handler(sender: Any, **kwargs: Any) -> None:
            received.append(kwargs["notice"])

        bus.subscribe(handler)
        bus.unsubscribe(handler)
        bus.emit(NoticeCategory.GENERAL, "ignored")

        assert received == []

    def test_buses_are_independent(self) -> None:
        """Each bus has its own subscribers."""
        first = NoticeBus()
        second = NoticeBus()
        journal = ProgressionJournal(first)

        second.emit(NoticeCategory.GENERAL, "elsewhere")

        assert len(journal) == 0


class TestProgressionJournal:
    """Tests for the bounded notice log."""

    def test_records_notices(self) -> None:
        """Notices are kept oldest first."""
        bus = NoticeBus()
        journal = ProgressionJournal(bus)

        bus.emit(NoticeCategory.COMBAT, "Slime defeated")
        bus.emit(NoticeCategory.TOWN, "Forge upgraded", level=2)

        assert [n.message for n in journal.entries()] == ["Slime defeated", "Forge upgraded"]
        assert journal.latest() is not None
        assert journal.latest().message == "Forge upgraded"

    def test_filter_by_category(self) -> None:
        """Entries can be filtered by category."""
        bus = NoticeBus()
        journal = ProgressionJournal(bus)
        bus.emit(NoticeCategory.COMBAT, "Slime defeated")
        bus.emit(NoticeCategory.TOWN, "Forge upgraded")

        assert [n.message for n in journal.entries(NoticeCategory.TOWN)] == ["Forge upgraded"]

    def test_bounded(self) -> None:
        """Only the most recent notices are kept."""
        bus = NoticeBus()
        journal = ProgressionJournal(bus, max_entries=2)

        for n in range(5):
            bus.emit(NoticeCategory.GENERAL, f"notice {n}")

        assert [n.message for n in journal.entries()] == ["notice 3", "notice 4"]

    def test_default_size_from_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an explicit size the configured journal length applies."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("IDLEQUEST_SESSION_MAX_JOURNAL_ENTRIES", "3")
        bus = NoticeBus()
        journal = ProgressionJournal(bus)

        for n in range(5):
            bus.emit(NoticeCategory.GENERAL, f"notice {n}")

        assert len(journal) == 3
        assert journal.entries()[0].message == "notice 2"

    def test_clear_and_close(self) -> None:
        """Clearing empties the log; closing stops listening."""
        bus = NoticeBus()
        journal = ProgressionJournal(bus)
        bus.emit(NoticeCategory.GENERAL, "first")

        journal.clear()
        assert journal.latest() is None

        journal.close()
        bus.emit(NoticeCategory.GENERAL, "second")
        assert len(journal) == 0
