"""Enumeration types for IdleQuest.

Closed sets used across the models and the engine: equipment slots,
building effect kinds, zone unlock requirements, objective kinds and
the quest and zone lifecycle states.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six base attributes of a hero."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation.

        Returns:
            Three-letter abbreviation (e.g., 'STR').
        """
        return self.name


class EquipmentSlot(StrEnum):
    """Slots a hero can equip items into. At most one item per slot."""

    WEAPON = "weapon"
    HELMET = "helmet"
    CHEST = "chest"
    LEGS = "legs"
    BOOTS = "boots"
    GLOVES = "gloves"
    RING_LEFT = "ring_left"
    RING_RIGHT = "ring_right"


class Rarity(StrEnum):
    """Equipment rarity tiers."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class EffectType(StrEnum):
    """Bonus kinds a town building can contribute."""

    CLICK_DAMAGE = "click_damage"
    AUTO_DAMAGE = "auto_damage"
    AUTO_SPEED = "auto_speed"
    AUTO_CLICKER = "auto_clicker"
    CRIT_CHANCE = "crit_chance"
    GOLD_BONUS = "gold_bonus"
    XP_BONUS = "xp_bonus"
    MATERIAL_BONUS = "material_bonus"
    QUEST_EFFICIENCY = "quest_efficiency"


class EffectOperation(StrEnum):
    """How a building effect scales with level."""

    ADD = "add"
    """Linear: value * level, summed."""

    MULTIPLY = "multiply"
    """Compounding: value ** level, multiplied."""


class RequirementType(StrEnum):
    """Closed set of zone unlock requirement kinds."""

    NONE = "none"
    LEVEL = "level"
    ZONE_CLEAR = "zone_clear"
    PRESTIGE = "prestige"


class ZoneStatus(StrEnum):
    """Lifecycle of a zone as seen by the player."""

    LOCKED = "locked"
    UNLOCKED = "unlocked"
    ACTIVE = "active"
    CLEARED = "cleared"


class ObjectiveKind(StrEnum):
    """Closed set of objective kinds the tracker understands."""

    KILL_MONSTER = "kill_monster"
    DEFEAT_BOSS = "defeat_boss"
    COLLECT_ITEM = "collect_item"
    GATHER_MATERIAL = "gather_material"
    UPGRADE_BUILDING = "upgrade_building"
    REACH_LEVEL = "reach_level"


class QuestCategory(StrEnum):
    """Where a tracked entry comes from."""

    STORY = "story"
    ACHIEVEMENT = "achievement"
    DAILY = "daily"


class QuestStatus(StrEnum):
    """Claim state machine states. COMPLETED is derived, never stored."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CLAIMED = "claimed"


class ItemType(StrEnum):
    """Inventory item categories."""

    EQUIPMENT = "equipment"
    CONSUMABLE = "consumable"
    TROPHY = "trophy"


class MetaEffect(StrEnum):
    """Permanent bonus bought with prestige tokens."""

    GLOBAL_DAMAGE = "global_damage"
    AUTO_SPEED = "auto_speed"
    QUEST_EFFICIENCY = "quest_efficiency"
    OFFLINE_PROGRESS = "offline_progress"
    PRESTIGE_TOKENS = "prestige_tokens"


class NoticeCategory(StrEnum):
    """Journal categories for outbound progression notices."""

    COMBAT = "combat"
    TOWN = "town"
    PROGRESSION = "progression"
    QUESTS = "quests"
    SESSION = "session"
    GENERAL = "general"


__all__ = [
    "Ability",
    "EquipmentSlot",
    "Rarity",
    "EffectType",
    "EffectOperation",
    "RequirementType",
    "ZoneStatus",
    "ObjectiveKind",
    "QuestCategory",
    "QuestStatus",
    "ItemType",
    "MetaEffect",
    "NoticeCategory",
]
