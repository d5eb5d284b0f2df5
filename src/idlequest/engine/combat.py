"""Derived combat values.

Pure functions from (base attributes, equipped items, building effects,
level) to click damage, auto damage and auto attacks per second. Nothing
here is cached: callers recompute on every read, so a changed input can
never leave a stale derived value behind.

Example:
    >>> from idlequest.models import Attributes
    >>> compute_click_damage(Attributes(strength=14), [], BuildingEffects(), level=1)
    10
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from idlequest.core.constants import (
    AUTO_BASE_DAMAGE,
    AUTO_DAMAGE_PER_LEVEL,
    AUTO_MENTAL_BASE_WEIGHT,
    AUTO_MENTAL_WEIGHT_PER_LEVEL,
    BOSS_GOLD_MULTIPLIER,
    BOSS_HP_MULTIPLIER,
    BOSS_XP_MULTIPLIER,
    CLICK_BASE_DAMAGE,
    CLICK_DAMAGE_PER_LEVEL,
    CLICK_STR_SCALING_PER_LEVEL,
    DEX_SPEED_PER_MODIFIER,
    GOLD_PER_KILL_GROWTH,
    MINIMUM_DAMAGE,
    MONSTER_HP_BASE,
    MONSTER_HP_GROWTH,
    XP_PER_KILL_BASE,
    XP_PER_KILL_GROWTH,
)
from idlequest.models.buildings import BuildingEffects
from idlequest.models.character import (
    Attributes,
    Character,
    Equipment,
    EquipmentStats,
    ability_modifier,
    sum_equipment_stats,
)
from idlequest.models.enums import Ability, EffectType


# =============================================================================
# Helpers
# =============================================================================


def _modifier(stats: Attributes, gear: EquipmentStats, ability: Ability) -> int:
    score = max(0, stats.score(ability) + getattr(gear, ability.value))
    return ability_modifier(score)


# =============================================================================
# Derived Combat Values
# =============================================================================


def compute_click_damage(
    stats: Attributes,
    equipped: Iterable[Equipment],
    effects: BuildingEffects,
    level: int,
    *,
    damage_multiplier: float = 1.0,
) -> int:
    """Damage dealt by one manual click.

    Scales with the strength modifier, weighted more heavily at higher
    levels, plus flat click bonuses from gear and buildings.

    Args:
        stats: Base attributes.
        equipped: Items currently worn.
        effects: Aggregated building effects.
        level: Hero level.
        damage_multiplier: Permanent multiplier, e.g. from prestige.

    Returns:
        Click damage, never below 1.
    """
    gear = sum_equipment_stats(equipped)
    str_mod = _modifier(stats, gear, Ability.STR)
    damage = CLICK_BASE_DAMAGE + level * CLICK_DAMAGE_PER_LEVEL
    damage += str_mod * (1 + level * CLICK_STR_SCALING_PER_LEVEL)
    damage += gear.click_damage + effects.click_damage
    damage *= effects.multiplier(EffectType.CLICK_DAMAGE) * damage_multiplier
    return max(MINIMUM_DAMAGE, math.floor(damage))


def compute_auto_damage(
    stats: Attributes,
    equipped: Iterable[Equipment],
    effects: BuildingEffects,
    level: int,
    *,
    damage_multiplier: float = 1.0,
) -> int:
    """Damage dealt by one automatic attack.

    Scales with the intelligence and wisdom modifiers plus flat bonuses,
    then with the compounded building auto-damage multiplier.

    Returns:
        Auto damage, never below 1.
    """
    gear = sum_equipment_stats(equipped)
    mental = _modifier(stats, gear, Ability.INT) + _modifier(stats, gear, Ability.WIS)
    damage = AUTO_BASE_DAMAGE + level * AUTO_DAMAGE_PER_LEVEL
    damage += mental * (AUTO_MENTAL_BASE_WEIGHT + level * AUTO_MENTAL_WEIGHT_PER_LEVEL)
    damage += gear.auto_damage + effects.auto_damage
    damage *= effects.multiplier(EffectType.AUTO_DAMAGE) * damage_multiplier
    return max(MINIMUM_DAMAGE, math.floor(damage))


def compute_auto_aps(
    stats: Attributes,
    equipped: Iterable[Equipment],
    effects: BuildingEffects,
    *,
    minimum: float = 0.1,
    speed_multiplier: float = 1.0,
) -> float:
    """Automatic attacks per second.

    Auto clicker buildings give the base rate; positive dexterity
    modifiers and speed bonuses add to it.

    Args:
        stats: Base attributes.
        equipped: Items currently worn.
        effects: Aggregated building effects.
        minimum: Floor for the rate. Must be positive.
        speed_multiplier: Permanent speed factor, e.g. from meta upgrades.

    Returns:
        Attacks per second, never below ``minimum``.
    """
    gear = sum_equipment_stats(equipped)
    dex_mod = _modifier(stats, gear, Ability.DEX)
    aps = effects.auto_clicker
    if dex_mod > 0:
        aps += dex_mod * DEX_SPEED_PER_MODIFIER
    aps += gear.auto_speed + effects.auto_speed
    aps *= effects.multiplier(EffectType.AUTO_SPEED) * speed_multiplier
    return max(minimum, aps)


class CombatProfile(BaseModel):
    """Snapshot of every derived combat value. Safe to compute per render."""

    model_config = ConfigDict(frozen=True)

    click_damage: int
    auto_damage: int
    auto_attacks_per_second: float
    crit_chance: float = 0.0
    gold_bonus: float = 0.0
    xp_bonus: float = 0.0

    @property
    def auto_dps(self) -> float:
        """Auto damage per second."""
        return self.auto_damage * self.auto_attacks_per_second


def compute_combat_profile(
    character: Character,
    effects: BuildingEffects,
    *,
    damage_multiplier: float = 1.0,
    speed_multiplier: float = 1.0,
    minimum_aps: float = 0.1,
) -> CombatProfile:
    """Compute all derived combat values for a hero.

    Args:
        character: The hero.
        effects: Aggregated building effects.
        damage_multiplier: Permanent damage multiplier.
        speed_multiplier: Permanent auto speed multiplier.
        minimum_aps: Floor for auto attacks per second.

    Returns:
        A fresh CombatProfile.
    """
    equipped = list(character.equipped.values())
    totals = character.total_stats(effects)
    return CombatProfile(
        click_damage=compute_click_damage(
            character.attributes,
            equipped,
            effects,
            character.level,
            damage_multiplier=damage_multiplier,
        ),
        auto_damage=compute_auto_damage(
            character.attributes,
            equipped,
            effects,
            character.level,
            damage_multiplier=damage_multiplier,
        ),
        auto_attacks_per_second=compute_auto_aps(
            character.attributes,
            equipped,
            effects,
            minimum=minimum_aps,
            speed_multiplier=speed_multiplier,
        ),
        crit_chance=totals.crit_chance,
        gold_bonus=totals.gold_bonus,
        xp_bonus=totals.xp_bonus,
    )


# =============================================================================
# Monster Curves
# =============================================================================


def monster_hp(zone_id: int, *, is_boss: bool = False, difficulty: float = 1.0) -> int:
    """Hit points of a monster in a zone.

    Args:
        zone_id: Zone number, starting at 1.
        is_boss: Whether the monster is the zone boss.
        difficulty: Zone difficulty multiplier.

    Returns:
        Hit points, at least 1.
    """
    hp = MONSTER_HP_BASE * (zone_id - 1 + MONSTER_HP_GROWTH ** (zone_id - 1)) * difficulty
    if is_boss:
        hp *= BOSS_HP_MULTIPLIER
    return max(1, math.ceil(hp))


def gold_per_kill(zone_id: int, *, is_boss: bool = False, reward: float = 1.0) -> int:
    """Gold dropped by a monster in a zone."""
    gold = GOLD_PER_KILL_GROWTH**zone_id * reward
    if is_boss:
        gold *= BOSS_GOLD_MULTIPLIER
    return math.ceil(gold)


def xp_per_kill(zone_id: int, *, is_boss: bool = False, reward: float = 1.0) -> int:
    """Experience granted by a monster in a zone."""
    xp = XP_PER_KILL_BASE * XP_PER_KILL_GROWTH ** (zone_id - 1) * reward
    if is_boss:
        xp *= BOSS_XP_MULTIPLIER
    return math.floor(xp)


__all__ = [
    "CombatProfile",
    "compute_click_damage",
    "compute_auto_damage",
    "compute_auto_aps",
    "compute_combat_profile",
    "monster_hp",
    "gold_per_kill",
    "xp_per_kill",
]
