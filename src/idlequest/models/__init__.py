"""Pydantic V2 schemas for IdleQuest.

Durable records (character, ledger, town, zone progression, quests,
session metrics), read-only content definitions and the inbound event
union.

Submodules:
    enums: Closed enumerations (EquipmentSlot, ObjectiveKind, ZoneStatus, ...)
    character: Attributes, equipment and the hero
    economy: Ledger, costs and inventory items
    buildings: Building content, town state and aggregated effects
    zones: Zone content, zone progress and prestige state
    objectives: The objective tagged union
    events: The gameplay event tagged union
    quests: Quest definitions, progress and daily quest state
    meta: Meta upgrade content and levels, offline progress
    analytics: Session metrics
    content: The content catalog
    game_state: The owned state aggregate

Example:
    >>> from idlequest.models import Ability, Attributes, Character
    >>> hero = Character(name="Aria", attributes=Attributes(strength=14))
    >>> hero.attributes.modifier(Ability.STR)
    2
"""

from __future__ import annotations

from idlequest.models.analytics import DailyStats, SessionMetrics, SessionStats
from idlequest.models.buildings import (
    BuildingDefinition,
    BuildingEffect,
    BuildingEffects,
    BuildingSynergy,
    BuildingUnlock,
    TownState,
)
from idlequest.models.character import (
    Attributes,
    Character,
    CharacterStats,
    Equipment,
    EquipmentStats,
    ability_modifier,
    xp_for_level,
)
from idlequest.models.content import ContentCatalog, load_catalog
from idlequest.models.economy import Cost, InventoryItem, Ledger
from idlequest.models.enums import (
    Ability,
    EffectOperation,
    EffectType,
    EquipmentSlot,
    ItemType,
    MetaEffect,
    NoticeCategory,
    ObjectiveKind,
    QuestCategory,
    QuestStatus,
    Rarity,
    RequirementType,
    ZoneStatus,
)
from idlequest.models.events import (
    BossDefeated,
    BuildingUpgraded,
    GameEvent,
    ItemCollected,
    MaterialGathered,
    MonsterKilled,
    PlayerLeveledUp,
    PrestigePerformed,
    ZoneCleared,
)
from idlequest.models.game_state import GameState
from idlequest.models.meta import (
    MetaBonuses,
    MetaUpgradeDefinition,
    MetaUpgradeState,
    OfflineProgress,
)
from idlequest.models.objectives import (
    CollectItemObjective,
    DefeatBossObjective,
    GatherMaterialObjective,
    KillMonsterObjective,
    Objective,
    ReachLevelObjective,
    UpgradeBuildingObjective,
    parse_objective,
)
from idlequest.models.quests import (
    DailyQuestState,
    DailyQuestTemplate,
    QuestDefinition,
    QuestLogState,
    QuestProgress,
    Reward,
)
from idlequest.models.zones import (
    PrestigeState,
    ZoneDefinition,
    ZoneProgress,
    ZoneProgressionState,
    ZoneRequirement,
    ZoneRewards,
)


__all__ = [
    # Enums
    "Ability",
    "EffectOperation",
    "EffectType",
    "EquipmentSlot",
    "ItemType",
    "MetaEffect",
    "NoticeCategory",
    "ObjectiveKind",
    "QuestCategory",
    "QuestStatus",
    "Rarity",
    "RequirementType",
    "ZoneStatus",
    # Character
    "Attributes",
    "Character",
    "CharacterStats",
    "Equipment",
    "EquipmentStats",
    "ability_modifier",
    "xp_for_level",
    # Economy
    "Cost",
    "InventoryItem",
    "Ledger",
    # Buildings
    "BuildingDefinition",
    "BuildingEffect",
    "BuildingEffects",
    "BuildingSynergy",
    "BuildingUnlock",
    "TownState",
    # Zones
    "PrestigeState",
    "ZoneDefinition",
    "ZoneProgress",
    "ZoneProgressionState",
    "ZoneRequirement",
    "ZoneRewards",
    # Objectives
    "CollectItemObjective",
    "DefeatBossObjective",
    "GatherMaterialObjective",
    "KillMonsterObjective",
    "Objective",
    "ReachLevelObjective",
    "UpgradeBuildingObjective",
    "parse_objective",
    # Events
    "BossDefeated",
    "BuildingUpgraded",
    "GameEvent",
    "ItemCollected",
    "MaterialGathered",
    "MonsterKilled",
    "PlayerLeveledUp",
    "PrestigePerformed",
    "ZoneCleared",
    # Quests
    "DailyQuestState",
    "DailyQuestTemplate",
    "QuestDefinition",
    "QuestLogState",
    "QuestProgress",
    "Reward",
    # Meta upgrades
    "MetaBonuses",
    "MetaUpgradeDefinition",
    "MetaUpgradeState",
    "OfflineProgress",
    # Analytics
    "DailyStats",
    "SessionMetrics",
    "SessionStats",
    # Aggregates
    "ContentCatalog",
    "load_catalog",
    "GameState",
]
