"""The owned state aggregate.

GameState holds every durable record the engine mutates. It replaces
per-subsystem global stores: components receive the parts they own
explicitly, and the facade passes the whole aggregate around.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from idlequest.models.analytics import SessionMetrics
from idlequest.models.buildings import TownState
from idlequest.models.character import Character
from idlequest.models.economy import Ledger
from idlequest.models.meta import MetaUpgradeState
from idlequest.models.quests import QuestLogState
from idlequest.models.zones import ZoneProgressionState


SAVE_VERSION = 1


class GameState(BaseModel):
    """Complete durable game state.

    Attributes:
        version: Save format version.
        character: The hero.
        ledger: Gold, materials and inventory.
        town: Building levels.
        zones: Zone progress and prestige.
        quests: Quest, achievement and daily quest progress.
        analytics: Session metrics.
        meta_upgrades: Meta upgrade levels bought with prestige tokens.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    version: int = SAVE_VERSION
    character: Character = Field(default_factory=Character)
    ledger: Ledger = Field(default_factory=Ledger)
    town: TownState = Field(default_factory=TownState)
    zones: ZoneProgressionState = Field(default_factory=ZoneProgressionState)
    quests: QuestLogState = Field(default_factory=QuestLogState)
    analytics: SessionMetrics = Field(default_factory=SessionMetrics)
    meta_upgrades: MetaUpgradeState = Field(default_factory=MetaUpgradeState)


__all__ = [
    "SAVE_VERSION",
    "GameState",
]
