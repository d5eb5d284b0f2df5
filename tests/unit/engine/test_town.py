"""Tests for the town building registry."""

from __future__ import annotations

from typing import Any

import pytest

from idlequest.core.exceptions import InsufficientFundsError, MaxLevelReachedError, UnknownEntityError
from idlequest.engine.economy import EconomyLedger
from idlequest.engine.town import TownRegistry, aggregate_building_effects
from idlequest.models import Cost, EffectType, Ledger, TownState


def rich_ledger() -> EconomyLedger:
    return EconomyLedger(Ledger(gold=1_000_000, materials={"wood": 10_000, "stone": 10_000, "iron": 10_000}))


class TestUpgradeCosts:
    """Tests for cost lookup."""

    def test_levels_start_at_zero(self, catalog: Any) -> None:
        """Every catalog building gets a level entry."""
        town = TownRegistry(catalog)

        assert set(town.levels) == {b.id for b in catalog.buildings}
        assert all(level == 0 for level in town.levels.values())

    def test_first_cost(self, catalog: Any) -> None:
        """The first town hall level costs gold only."""
        town = TownRegistry(catalog)

        assert town.get_cost("town_hall") == Cost(gold=100)
        assert town.get_cost("town_hall", 1) == Cost(gold=200, materials={"wood": 8})

    def test_cost_at_cap(self, small_catalog: Any) -> None:
        """There is no price beyond the cap."""
        town = TownRegistry(small_catalog)

        with pytest.raises(MaxLevelReachedError):
            town.get_cost("well", 2)

    def test_unknown_building(self, catalog: Any) -> None:
        """Unknown ids are content errors."""
        town = TownRegistry(catalog)

        with pytest.raises(UnknownEntityError):
            town.get_cost("castle")


class TestUpgrade:
    """Tests for the upgrade transaction."""

    def test_successful_upgrade(self, catalog: Any) -> None:
        """Paying the cost raises the level by one."""
        town = TownRegistry(catalog)
        ledger = EconomyLedger(Ledger(gold=150))

        assert town.upgrade("town_hall", ledger) == 1
        assert town.level("town_hall") == 1
        assert ledger.gold == 50

    def test_insufficient_funds_changes_nothing(self, catalog: Any) -> None:
        """A failed upgrade leaves gold and level untouched."""
        town = TownRegistry(catalog)
        ledger = EconomyLedger(Ledger(gold=99))

        with pytest.raises(InsufficientFundsError):
            town.upgrade("town_hall", ledger)

        assert ledger.gold == 99
        assert town.level("town_hall") == 0

    def test_missing_material_changes_nothing(self, catalog: Any) -> None:
        """Gold is not taken when a material is short."""
        town = TownRegistry(catalog, TownState(levels={"town_hall": 1}))
        ledger = EconomyLedger(Ledger(gold=500, materials={"wood": 7}))

        with pytest.raises(InsufficientFundsError):
            town.upgrade("town_hall", ledger)

        assert ledger.gold == 500
        assert ledger.quantity("wood") == 7
        assert town.level("town_hall") == 1

    def test_max_level(self, small_catalog: Any) -> None:
        """Upgrading past the cap raises and takes nothing."""
        town = TownRegistry(small_catalog)
        ledger = EconomyLedger(Ledger(gold=100, materials={"stone": 5}))
        town.upgrade("well", ledger)
        town.upgrade("well", ledger)

        with pytest.raises(MaxLevelReachedError):
            town.upgrade("well", ledger)

        assert town.level("well") == 2
        assert ledger.gold == 70
        assert town.is_max_level("well")
        assert not town.can_upgrade("well", ledger)

    def test_levels_never_decrease(self, catalog: Any) -> None:
        """Mixed successes and failures only ever raise levels."""
        town = TownRegistry(catalog)
        ledger = EconomyLedger(Ledger(gold=400, materials={"wood": 20}))
        seen = [town.level("town_hall")]

        for _ in range(5):
            try:
                town.upgrade("town_hall", ledger)
            except InsufficientFundsError:
                pass
            seen.append(town.level("town_hall"))

        assert seen == sorted(seen)
        assert seen[-1] == 2


class TestUnlocks:
    """Tests for construction requirements."""

    def test_town_hall_always_available(self, catalog: Any) -> None:
        """Buildings without requirements are available from the start."""
        town = TownRegistry(catalog)

        assert town.available_buildings(1, EconomyLedger()) == ["town_hall"]

    def test_building_requirements(self, catalog: Any) -> None:
        """The blacksmith needs town hall 2 and lumber mill 2."""
        town = TownRegistry(catalog, TownState(levels={"town_hall": 2, "lumber_mill": 1}))
        ledger = EconomyLedger()

        assert not town.is_unlocked("blacksmith", 1, ledger)

        town.upgrade("lumber_mill", rich_ledger())
        assert town.is_unlocked("blacksmith", 1, ledger)

    def test_player_level_requirement(self, catalog: Any) -> None:
        """The marketplace needs hero level 5."""
        town = TownRegistry(catalog, TownState(levels={"town_hall": 2}))

        assert not town.is_unlocked("marketplace", 4, EconomyLedger())
        assert town.is_unlocked("marketplace", 5, EconomyLedger())

    def test_has_upgrade_available(self, catalog: Any) -> None:
        """An upgrade is available once the town hall is affordable."""
        town = TownRegistry(catalog)

        assert not town.has_upgrade_available(EconomyLedger(), player_level=1)
        assert town.has_upgrade_available(EconomyLedger(Ledger(gold=100)), player_level=1)


class TestBuildingEffects:
    """Tests for effect aggregation."""

    def test_no_buildings(self, catalog: Any) -> None:
        """Level 0 buildings contribute nothing."""
        effects = TownRegistry(catalog).building_effects()

        assert effects.gold_bonus == 0
        assert effects.multiplier(EffectType.GOLD_BONUS) == 1.0

    def test_additive_scales_with_level(self, catalog: Any) -> None:
        """Additive effects are value times level."""
        effects = aggregate_building_effects(catalog.buildings, {"town_hall": 3})

        assert effects.gold_bonus == pytest.approx(0.06)
        assert effects.xp_bonus == pytest.approx(0.06)

    def test_multiplicative_compounds(self, catalog: Any) -> None:
        """Multiplicative effects compound per level."""
        effects = aggregate_building_effects(catalog.buildings, {"lumber_mill": 2})

        assert effects.multiplier(EffectType.MATERIAL_BONUS) == pytest.approx(1.21)

    def test_synergies(self, catalog: Any) -> None:
        """Synergies apply once the partner building is high enough."""
        without = aggregate_building_effects(catalog.buildings, {"blacksmith": 2, "barracks": 2})
        with_partner = aggregate_building_effects(catalog.buildings, {"blacksmith": 2, "barracks": 3})

        assert without.crit_chance == 0
        assert with_partner.crit_chance == pytest.approx(0.02)
        assert with_partner.click_damage == pytest.approx(4)

    def test_multiplicative_synergy_applies_once(self, catalog: Any) -> None:
        """A multiplicative synergy is not compounded by level."""
        effects = aggregate_building_effects(catalog.buildings, {"lumber_mill": 3, "marketplace": 1})

        assert effects.multiplier(EffectType.QUEST_EFFICIENCY) == pytest.approx(1.15)

    def test_effects_non_decreasing(self, catalog: Any) -> None:
        """Raising any building never lowers any bonus."""
        fields = [effect_type.value for effect_type in EffectType]
        for building in catalog.buildings:
            previous = aggregate_building_effects(catalog.buildings, {building.id: 0})
            for level in range(1, 6):
                current = aggregate_building_effects(catalog.buildings, {building.id: level})
                for name in fields:
                    assert getattr(current, name) >= getattr(previous, name)
                for effect_type in EffectType:
                    assert current.multiplier(effect_type) >= previous.multiplier(effect_type)
                previous = current

    def test_reset(self, catalog: Any) -> None:
        """Reset returns every building to level 0."""
        town = TownRegistry(catalog, TownState(levels={"town_hall": 4}))

        town.reset()

        assert town.level("town_hall") == 0
