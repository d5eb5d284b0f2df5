"""Tests for hero attribute, equipment and level models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from idlequest.models import (
    Ability,
    Attributes,
    BuildingEffects,
    Character,
    Equipment,
    EquipmentSlot,
    EquipmentStats,
    ability_modifier,
    xp_for_level,
)
from idlequest.models.character import sum_equipment_stats


def make_item(item_id: str, slot: EquipmentSlot = EquipmentSlot.WEAPON, **stats: float) -> Equipment:
    return Equipment(id=item_id, name=item_id.title(), slot=slot, stats=EquipmentStats(**stats))


class TestAbilityModifier:
    """Tests for the ability_modifier function."""

    @pytest.mark.parametrize(
        "score,expected",
        [(0, -5), (5, -3), (9, -1), (10, 0), (11, 0), (14, 2), (20, 5)],
    )
    def test_modifier_values(self, score: int, expected: int) -> None:
        """Modifiers round toward negative infinity."""
        assert ability_modifier(score) == expected


class TestXpCurve:
    """Tests for the experience curve."""

    def test_first_levels(self) -> None:
        """Thresholds grow by the default factor and round up."""
        assert xp_for_level(1) == 50
        assert xp_for_level(2) == 63
        assert xp_for_level(3) == 79

    def test_custom_curve(self) -> None:
        """Base and growth are configurable."""
        assert xp_for_level(3, base=100, growth=2.0) == 400


class TestAttributes:
    """Tests for base attribute scores."""

    def test_defaults(self) -> None:
        """Every score starts at 10."""
        attributes = Attributes()

        for ability in Ability:
            assert attributes.score(ability) == 10
            assert attributes.modifier(ability) == 0

    def test_negative_rejected(self) -> None:
        """Scores cannot go below zero."""
        with pytest.raises(ValidationError):
            Attributes(strength=-1)

    def test_assignment_validated(self) -> None:
        """Assignments are validated too."""
        attributes = Attributes()

        with pytest.raises(ValidationError):
            attributes.dexterity = -3


class TestEquipment:
    """Tests for equipment and stat aggregation."""

    def test_sum_equipment_stats(self) -> None:
        """Stats of several items are added field by field."""
        totals = sum_equipment_stats(
            [
                make_item("sword", strength=2, click_damage=3),
                make_item("helm", EquipmentSlot.HELMET, strength=1, crit_chance=0.05),
            ]
        )

        assert totals.strength == 3
        assert totals.click_damage == 3
        assert totals.crit_chance == pytest.approx(0.05)

    def test_sum_of_nothing(self) -> None:
        """No items means all-zero stats."""
        assert sum_equipment_stats([]) == EquipmentStats()

    def test_equipment_is_frozen(self) -> None:
        """Equipment records cannot be modified."""
        item = make_item("sword")

        with pytest.raises(ValidationError):
            item.name = "Other"  # type: ignore[misc]


class TestCharacter:
    """Tests for the Character model."""

    def test_new_character(self) -> None:
        """A new hero is level 1 with nothing equipped."""
        character = Character()

        assert character.level == 1
        assert character.xp == 0
        assert character.equipped == {}

    def test_equip_returns_displaced(self) -> None:
        """Equipping into an occupied slot hands back the old item."""
        character = Character()
        old = make_item("rusty_sword")
        new = make_item("fine_sword")

        assert character.equip(old) is None
        assert character.equip(new) == old
        assert character.equipped[EquipmentSlot.WEAPON] == new

    def test_unequip(self) -> None:
        """Unequipping empties the slot."""
        character = Character()
        ring = make_item("ring", EquipmentSlot.RING_LEFT)
        character.equip(ring)

        assert character.unequip(EquipmentSlot.RING_LEFT) == ring
        assert character.unequip(EquipmentSlot.RING_LEFT) is None
        assert character.equipped == {}

    def test_total_attributes_include_gear(self) -> None:
        """Gear attribute bonuses add to the base scores."""
        character = Character()
        character.equip(make_item("gauntlets", EquipmentSlot.GLOVES, strength=4))

        assert character.total_attributes().strength == 14
        assert character.attributes.strength == 10

    def test_total_attributes_clamped(self) -> None:
        """Penalties never push a score below zero."""
        character = Character()
        character.equip(make_item("cursed_ring", EquipmentSlot.RING_RIGHT, wisdom=-25))

        assert character.total_attributes().wisdom == 0

    def test_total_stats_recomputed(self) -> None:
        """Derived bonuses follow gear and buildings on every call."""
        character = Character()
        character.equip(make_item("sword", click_damage=3, gold_bonus=0.1))
        effects = BuildingEffects(click_damage=2, gold_bonus=0.05)

        stats = character.total_stats(effects)
        assert stats.click_damage == 5
        assert stats.gold_bonus == pytest.approx(0.15)

        character.unequip(EquipmentSlot.WEAPON)
        stats = character.total_stats(effects)
        assert stats.click_damage == 2
        assert stats.gold_bonus == pytest.approx(0.05)

    def test_add_xp_multiple_levels(self) -> None:
        """Excess experience carries into the next level."""
        character = Character()

        gained = character.add_xp(120)

        assert gained == 2
        assert character.level == 3
        assert character.xp == 7

    def test_add_xp_ignores_non_positive(self) -> None:
        """Zero or negative experience changes nothing."""
        character = Character()

        assert character.add_xp(0) == 0
        assert character.add_xp(-10) == 0
        assert character.xp == 0

    def test_extra_fields_rejected(self) -> None:
        """Unknown fields are refused."""
        with pytest.raises(ValidationError):
            Character(mana=10)
