"""Outbound progression notices.

The engine announces what happened (a building was upgraded, a reward was
claimed) by sending a ProgressionNotice through a blinker signal. Anything
that wants to log, display or record notices subscribes; the engine does
not know who listens.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from blinker import Signal
from pydantic import BaseModel, ConfigDict, Field

from idlequest.models.enums import NoticeCategory


class ProgressionNotice(BaseModel):
    """Something noteworthy that happened in the engine.

    Attributes:
        category: Area of the game the notice belongs to.
        message: Human-readable summary.
        data: Structured details.
    """

    model_config = ConfigDict(frozen=True)

    category: NoticeCategory = NoticeCategory.GENERAL
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


NoticeHandler = Callable[..., None]


class NoticeBus:
    """One blinker signal per engine instance."""

    def __init__(self, name: str = "progression-notice") -> None:
        self._signal = Signal(name)

    def subscribe(self, handler: NoticeHandler) -> None:
        """Connect a handler called as ``handler(sender, notice=...)``."""
        # Strong reference: bound methods of unreferenced subscribers stay connected.
        self._signal.connect(handler, weak=False)

    def unsubscribe(self, handler: NoticeHandler) -> None:
        """Disconnect a handler."""
        self._signal.disconnect(handler)

    def emit(
        self,
        category: NoticeCategory,
        message: str,
        **data: Any,
    ) -> ProgressionNotice:
        """Build a notice and send it to every subscriber."""
        notice = ProgressionNotice(category=category, message=message, data=data)
        self._signal.send(self, notice=notice)
        return notice


__all__ = [
    "ProgressionNotice",
    "NoticeHandler",
    "NoticeBus",
]
