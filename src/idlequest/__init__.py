"""IdleQuest - progression core of an incremental RPG.

Turns player actions (clicks, kills, gathering, building upgrades) into
derived combat power, tracks quests, achievements and daily quests
across every kind of gameplay event, and scales zones by clear count and
prestige.

Example:
    >>> from idlequest import Game, default_catalog
    >>>
    >>> game = Game(default_catalog())
    >>> game.start_quest("story_first_steps")
    >>> for _ in range(5):
    ...     _ = game.kill_monster()
    >>> game.claim_reward("story_first_steps").gold
    100

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas for state, content and events.
    engine: The progression components and the Game facade.
    content: Bundled default content.
    storage: Key-value persistence and save slots.
"""

from __future__ import annotations

# Core
from idlequest.core.config import Settings, get_settings
from idlequest.core.exceptions import IdleQuestError
from idlequest.core.logging import configure_logging, get_logger

# Content and State
from idlequest.content import default_catalog
from idlequest.models.content import ContentCatalog, load_catalog
from idlequest.models.game_state import GameState

# Engine
from idlequest.engine.game import Game
from idlequest.engine.journal import ProgressionJournal

# Storage
from idlequest.storage import SaveManager, create_save_manager


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "IdleQuestError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Content and State
    "ContentCatalog",
    "GameState",
    "default_catalog",
    "load_catalog",
    # Engine
    "Game",
    "ProgressionJournal",
    # Storage
    "SaveManager",
    "create_save_manager",
]
