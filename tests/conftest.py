"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the IdleQuest test suite.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


GAME_DAY = date(2026, 10, 19)


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class FakeCalendar:
    """Manually advanced calendar date provider."""

    def __init__(self, day: date = GAME_DAY) -> None:
        self.day = day

    def __call__(self) -> date:
        return self.day


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from idlequest.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> Any:
    """Create default application settings.

    Returns:
        Settings instance with memory storage.
    """
    from idlequest.core.config import Settings, StorageSettings

    return Settings(storage=StorageSettings(backend="memory"))


# =============================================================================
# Content Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> Any:
    """Provide the bundled content catalog.

    Returns:
        ContentCatalog instance.
    """
    from idlequest.content import default_catalog

    return default_catalog()


@pytest.fixture
def small_catalog() -> Any:
    """Provide a minimal catalog with two zones and one building.

    The second zone is the prestige zone and keeps its clears on prestige.

    Returns:
        ContentCatalog instance.
    """
    from idlequest.models.content import ContentCatalog

    return ContentCatalog.model_validate(
        {
            "buildings": [
                {
                    "id": "well",
                    "name": "Well",
                    "max_level": 2,
                    "costs": [{"gold": 10}, {"gold": 20, "materials": {"stone": 2}}],
                    "effects": [{"type": "gold_bonus", "operation": "add", "value": 0.1}],
                }
            ],
            "zones": [
                {"id": 1, "name": "Meadow", "monsters_to_defeat": 2, "monsters": ["rat"], "boss": "king_rat"},
                {
                    "id": 2,
                    "name": "Crypt",
                    "monsters_to_defeat": 2,
                    "monsters": ["skeleton"],
                    "boss": "lich",
                    "is_prestige": True,
                    "resets_on_prestige": False,
                },
            ],
            "quests": [
                {
                    "id": "rat_catcher",
                    "name": "Rat Catcher",
                    "objectives": [{"id": "rats", "kind": "kill_monster", "monster_id": "rat", "target": 3}],
                    "reward": {"gold": 30, "xp": 10, "materials": {"stone": 1}},
                }
            ],
        }
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Create a manually advanced clock starting at 1000 seconds.

    Returns:
        FakeClock instance.
    """
    return FakeClock()


@pytest.fixture
def calendar() -> FakeCalendar:
    """Create a manually advanced calendar.

    Returns:
        FakeCalendar instance.
    """
    return FakeCalendar()


@pytest.fixture
def game(catalog: Any, settings: Any, clock: FakeClock, calendar: FakeCalendar) -> Any:
    """Create a new game on the bundled catalog with fake time sources.

    Returns:
        Game instance.
    """
    from idlequest.engine.game import Game

    return Game(catalog, settings=settings, clock=clock, today=calendar)
