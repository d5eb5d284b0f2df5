"""Hero attributes, equipment and level state.

The character owns its equipped items exclusively. Derived bonus values
(click damage, crit chance and the rest) are never stored: total_stats()
recomputes them from the equipped items, the base attributes and the
current building effects on every call.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, ConfigDict, Field

from idlequest.core.constants import ABILITY_SCORE_BASELINE, DEFAULT_ABILITY_SCORE
from idlequest.models.enums import Ability, EquipmentSlot, Rarity


if TYPE_CHECKING:
    from idlequest.models.buildings import BuildingEffects


AttributeScore = Annotated[
    int, Field(ge=0, description="Base attribute score")
]


def ability_modifier(score: int) -> int:
    """Calculate the modifier for an attribute score.

    Args:
        score: The attribute score.

    Returns:
        The modifier, (score - 10) // 2.
    """
    return (score - ABILITY_SCORE_BASELINE) // 2


def xp_for_level(level: int, *, base: int = 50, growth: float = 1.25) -> int:
    """Experience required to advance from ``level`` to ``level + 1``.

    Args:
        level: Current hero level (1 or higher).
        base: Experience needed at level 1.
        growth: Per-level growth factor.

    Returns:
        Experience threshold for the next level.
    """
    return math.ceil(base * growth ** (level - 1))


# =============================================================================
# Attributes
# =============================================================================


class Attributes(BaseModel):
    """Base attribute scores. All scores are non-negative."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    strength: AttributeScore = DEFAULT_ABILITY_SCORE
    dexterity: AttributeScore = DEFAULT_ABILITY_SCORE
    constitution: AttributeScore = DEFAULT_ABILITY_SCORE
    intelligence: AttributeScore = DEFAULT_ABILITY_SCORE
    wisdom: AttributeScore = DEFAULT_ABILITY_SCORE
    charisma: AttributeScore = DEFAULT_ABILITY_SCORE

    def score(self, ability: Ability) -> int:
        """Get the score for an ability."""
        return getattr(self, ability.value)

    def modifier(self, ability: Ability) -> int:
        """Get the modifier for an ability."""
        return ability_modifier(self.score(ability))


# =============================================================================
# Equipment
# =============================================================================


class EquipmentStats(BaseModel):
    """Bonuses granted by a single piece of equipment.

    Attribute bonuses are added to the wearer's base scores; the remaining
    fields feed the derived combat values directly.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0
    click_damage: int = 0
    auto_damage: int = 0
    auto_speed: float = 0.0
    crit_chance: float = 0.0
    gold_bonus: float = 0.0
    xp_bonus: float = 0.0


class Equipment(BaseModel):
    """An equippable item.

    Attributes:
        id: Unique item identifier.
        name: Display name.
        slot: Slot the item occupies.
        rarity: Rarity tier.
        level: Item level, informational only.
        stats: Bonuses granted while equipped.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str
    slot: EquipmentSlot
    rarity: Rarity = Rarity.COMMON
    level: int = Field(default=1, ge=1)
    stats: EquipmentStats = Field(default_factory=EquipmentStats)


class CharacterStats(BaseModel):
    """Read-only snapshot of a hero's attributes plus derived bonuses.

    Produced by Character.total_stats(); never persisted.
    """

    model_config = ConfigDict(frozen=True)

    attributes: Attributes
    click_damage: float = 0.0
    auto_damage: float = 0.0
    auto_speed: float = 0.0
    crit_chance: float = 0.0
    gold_bonus: float = 0.0
    xp_bonus: float = 0.0


def sum_equipment_stats(items: Iterable[Equipment]) -> EquipmentStats:
    """Aggregate the stats of several items.

    Args:
        items: Equipment pieces to sum.

    Returns:
        Combined stats.
    """
    totals: dict[str, float] = {}
    for item in items:
        for field_name, value in item.stats.model_dump().items():
            totals[field_name] = totals.get(field_name, 0) + value
    return EquipmentStats(**totals)


# =============================================================================
# Character
# =============================================================================


class Character(BaseModel):
    """The player's hero.

    Attributes:
        name: Hero name.
        level: Current level, starting at 1.
        xp: Experience accumulated towards the next level.
        attributes: Base attribute scores.
        equipped: Items currently worn, keyed by slot.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    name: str = "Hero"
    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0)
    attributes: Attributes = Field(default_factory=Attributes)
    equipped: dict[EquipmentSlot, Equipment] = Field(default_factory=dict)

    def equipment_bonuses(self) -> EquipmentStats:
        """Sum the stats of every equipped item."""
        return sum_equipment_stats(self.equipped.values())

    def total_attributes(self) -> Attributes:
        """Base attributes plus equipment attribute bonuses."""
        bonuses = self.equipment_bonuses()
        return Attributes(
            **{
                ability.value: max(0, self.attributes.score(ability) + getattr(bonuses, ability.value))
                for ability in Ability
            }
        )

    def total_stats(self, building_effects: BuildingEffects | None = None) -> CharacterStats:
        """Recompute the derived bonus fields from scratch.

        Args:
            building_effects: Current town bonuses, if any.

        Returns:
            Fresh CharacterStats snapshot.
        """
        bonuses = self.equipment_bonuses()
        click = float(bonuses.click_damage)
        auto = float(bonuses.auto_damage)
        speed = bonuses.auto_speed
        crit = bonuses.crit_chance
        gold = bonuses.gold_bonus
        xp = bonuses.xp_bonus
        if building_effects is not None:
            click += building_effects.click_damage
            auto += building_effects.auto_damage
            speed += building_effects.auto_speed
            crit += building_effects.crit_chance
            gold += building_effects.gold_bonus
            xp += building_effects.xp_bonus
        return CharacterStats(
            attributes=self.total_attributes(),
            click_damage=click,
            auto_damage=auto,
            auto_speed=speed,
            crit_chance=crit,
            gold_bonus=gold,
            xp_bonus=xp,
        )

    def equip(self, item: Equipment) -> Equipment | None:
        """Place an item into its slot.

        Args:
            item: Item to equip.

        Returns:
            The item previously in that slot, now owned by the caller.
        """
        displaced = self.equipped.get(item.slot)
        equipped = dict(self.equipped)
        equipped[item.slot] = item
        self.equipped = equipped
        return displaced

    def unequip(self, slot: EquipmentSlot) -> Equipment | None:
        """Remove the item in a slot.

        Args:
            slot: Slot to empty.

        Returns:
            The removed item, or None if the slot was empty.
        """
        if slot not in self.equipped:
            return None
        equipped = dict(self.equipped)
        removed = equipped.pop(slot)
        self.equipped = equipped
        return removed

    def add_xp(self, amount: int, *, base: int = 50, growth: float = 1.25) -> int:
        """Add experience and apply any level ups.

        Args:
            amount: Experience to add (already bonus-adjusted).
            base: Experience curve base.
            growth: Experience curve growth factor.

        Returns:
            Number of levels gained.
        """
        if amount <= 0:
            return 0
        xp = self.xp + amount
        level = self.level
        gained = 0
        while xp >= xp_for_level(level, base=base, growth=growth):
            xp -= xp_for_level(level, base=base, growth=growth)
            level += 1
            gained += 1
        self.xp = xp
        self.level = level
        return gained


__all__ = [
    "ability_modifier",
    "xp_for_level",
    "Attributes",
    "EquipmentStats",
    "Equipment",
    "CharacterStats",
    "Character",
    "sum_equipment_stats",
]
