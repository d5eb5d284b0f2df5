"""Progression journal: a bounded, filterable log of engine notices."""

from __future__ import annotations

from collections import deque
from typing import Any

from idlequest.core.config import get_settings
from idlequest.core.logging import get_logger
from idlequest.engine.notices import NoticeBus, ProgressionNotice
from idlequest.models.enums import NoticeCategory


logger = get_logger(__name__)


class ProgressionJournal:
    """Subscribes to a notice bus, writes each notice to the log and keeps
    the most recent ones.

    Example:
        >>> bus = NoticeBus()
        >>> journal = ProgressionJournal(bus, max_entries=50)
        >>> _ = bus.emit(NoticeCategory.TOWN, "Forge upgraded", level=2)
        >>> journal.entries(NoticeCategory.TOWN)[0].message
        'Forge upgraded'
    """

    def __init__(self, bus: NoticeBus, *, max_entries: int | None = None) -> None:
        """Initialize the journal and subscribe it.

        Args:
            bus: Bus to listen on.
            max_entries: Number of notices kept; older ones are dropped.
                Defaults to ``SessionSettings.max_journal_entries``.
        """
        if max_entries is None:
            max_entries = get_settings().session.max_journal_entries
        self._bus = bus
        self._entries: deque[ProgressionNotice] = deque(maxlen=max_entries)
        bus.subscribe(self._on_notice)

    def _on_notice(self, sender: Any, **kwargs: Any) -> None:
        notice: ProgressionNotice | None = kwargs.get("notice")
        if notice is None:
            return
        self._entries.append(notice)
        logger.info(notice.message, category=notice.category.value, **notice.data)

    def entries(self, category: NoticeCategory | None = None) -> list[ProgressionNotice]:
        """Kept notices, oldest first, optionally of one category."""
        if category is None:
            return list(self._entries)
        return [notice for notice in self._entries if notice.category == category]

    def latest(self) -> ProgressionNotice | None:
        """Most recent notice, if any."""
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        """Drop every kept notice."""
        self._entries.clear()

    def close(self) -> None:
        """Stop listening to the bus."""
        self._bus.unsubscribe(self._on_notice)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ProgressionJournal"]
