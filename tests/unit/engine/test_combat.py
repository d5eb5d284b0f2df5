"""Tests for derived combat values and monster curves."""

from __future__ import annotations

import pytest

from idlequest.engine.combat import (
    compute_auto_aps,
    compute_auto_damage,
    compute_click_damage,
    compute_combat_profile,
    gold_per_kill,
    monster_hp,
    xp_per_kill,
)
from idlequest.models import (
    Attributes,
    BuildingEffects,
    Character,
    EffectType,
    Equipment,
    EquipmentSlot,
    EquipmentStats,
)


NO_EFFECTS = BuildingEffects()


def gear(**stats: float) -> Equipment:
    return Equipment(id="gear", name="Gear", slot=EquipmentSlot.WEAPON, stats=EquipmentStats(**stats))


class TestClickDamage:
    """Tests for compute_click_damage."""

    def test_strength_modifier(self) -> None:
        """Strength 14 at level 1 deals 10."""
        assert compute_click_damage(Attributes(strength=14), [], NO_EFFECTS, level=1) == 10

    def test_default_hero(self) -> None:
        """Base damage plus level scaling with a +0 modifier."""
        assert compute_click_damage(Attributes(), [], NO_EFFECTS, level=1) == 7
        assert compute_click_damage(Attributes(), [], NO_EFFECTS, level=3) == 11

    def test_minimum_damage(self) -> None:
        """Very weak heroes still deal 1 damage."""
        assert compute_click_damage(Attributes(strength=0), [], NO_EFFECTS, level=1) == 1

    def test_stronger_hero_hits_harder(self) -> None:
        """Strength 5 beats strength 0."""
        weak = compute_click_damage(Attributes(strength=0), [], NO_EFFECTS, level=1)
        stronger = compute_click_damage(Attributes(strength=5), [], NO_EFFECTS, level=1)

        assert stronger == 2
        assert stronger > weak

    def test_gear_strength_counts(self) -> None:
        """Strength on gear works like base strength."""
        assert compute_click_damage(Attributes(), [gear(strength=4)], NO_EFFECTS, level=1) == 10

    def test_flat_and_multiplied_bonuses(self) -> None:
        """Flat bonuses add before multipliers apply."""
        effects = BuildingEffects(click_damage=2, multipliers={EffectType.CLICK_DAMAGE: 1.5})

        damage = compute_click_damage(Attributes(), [gear(click_damage=3)], effects, level=1)
        boosted = compute_click_damage(
            Attributes(), [gear(click_damage=3)], effects, level=1, damage_multiplier=2.0
        )

        assert damage == 18
        assert boosted == 36

    @pytest.mark.parametrize("level", [1, 5, 20])
    def test_non_decreasing_in_strength(self, level: int) -> None:
        """More strength never lowers click damage."""
        values = [
            compute_click_damage(Attributes(strength=score), [], NO_EFFECTS, level=level)
            for score in range(0, 31)
        ]

        assert values == sorted(values)


class TestAutoDamage:
    """Tests for compute_auto_damage."""

    def test_default_hero(self) -> None:
        """Base auto damage at level 1."""
        assert compute_auto_damage(Attributes(), [], NO_EFFECTS, level=1) == 4

    def test_mental_modifiers(self) -> None:
        """Intelligence and wisdom both contribute."""
        stats = Attributes(intelligence=14, wisdom=14)

        assert compute_auto_damage(stats, [], NO_EFFECTS, level=1) == 7

    def test_building_multiplier(self) -> None:
        """The compounded auto damage factor scales the result."""
        effects = BuildingEffects(multipliers={EffectType.AUTO_DAMAGE: 2.0})

        assert compute_auto_damage(Attributes(), [], effects, level=1) == 8


class TestAutoAttacksPerSecond:
    """Tests for compute_auto_aps."""

    def test_minimum_rate(self) -> None:
        """Without bonuses the floor applies."""
        assert compute_auto_aps(Attributes(), [], NO_EFFECTS) == pytest.approx(0.1)

    def test_dexterity_and_buildings(self) -> None:
        """Dexterity, auto clickers and speed bonuses add up."""
        effects = BuildingEffects(auto_clicker=0.5, auto_speed=0.1)

        assert compute_auto_aps(Attributes(dexterity=14), [], effects) == pytest.approx(1.0)

    def test_negative_dexterity_ignored(self) -> None:
        """Low dexterity never slows auto attacks."""
        effects = BuildingEffects(auto_clicker=1.0)

        assert compute_auto_aps(Attributes(dexterity=0), [], effects) == pytest.approx(1.0)

    def test_speed_multiplier(self) -> None:
        """The auto speed factor applies last."""
        effects = BuildingEffects(auto_clicker=0.5, multipliers={EffectType.AUTO_SPEED: 2.0})

        assert compute_auto_aps(Attributes(), [], effects) == pytest.approx(1.0)


class TestCombatProfile:
    """Tests for compute_combat_profile."""

    def test_new_hero(self) -> None:
        """A new hero's derived values."""
        profile = compute_combat_profile(Character(), NO_EFFECTS)

        assert profile.click_damage == 7
        assert profile.auto_damage == 4
        assert profile.auto_attacks_per_second == pytest.approx(0.1)
        assert profile.auto_dps == pytest.approx(0.4)

    def test_reflects_equipment_change(self) -> None:
        """Equipping an item changes the next computation."""
        character = Character()
        before = compute_combat_profile(character, NO_EFFECTS)

        character.equip(gear(click_damage=5, crit_chance=0.1))
        after = compute_combat_profile(character, NO_EFFECTS)

        assert after.click_damage == before.click_damage + 5
        assert after.crit_chance == pytest.approx(0.1)


class TestMonsterCurves:
    """Tests for monster hit points and drops."""

    def test_monster_hp(self) -> None:
        """Hit points grow with zone and difficulty."""
        assert monster_hp(1) == 10
        assert monster_hp(2) == 26
        assert monster_hp(1, difficulty=2.0) == 20

    def test_boss_hp(self) -> None:
        """Bosses are ten times tougher."""
        assert monster_hp(1, is_boss=True) == 100

    def test_drops(self) -> None:
        """Gold and experience for zone 1 kills."""
        assert gold_per_kill(1) == 2
        assert xp_per_kill(1) == 25
        assert xp_per_kill(1, is_boss=True) == 125
        assert gold_per_kill(1, is_boss=True) > gold_per_kill(1)

    def test_drops_grow_by_zone(self) -> None:
        """Later zones pay more."""
        for zone_id in range(1, 10):
            assert gold_per_kill(zone_id + 1) >= gold_per_kill(zone_id)
            assert xp_per_kill(zone_id + 1) > xp_per_kill(zone_id)
