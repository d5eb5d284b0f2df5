"""Tests for the objective tracking engine."""

from __future__ import annotations

import pytest

from idlequest.engine.economy import EconomyLedger
from idlequest.engine.objectives import ObjectiveTracker, update_objective
from idlequest.models import (
    BossDefeated,
    BuildingUpgraded,
    CollectItemObjective,
    DefeatBossObjective,
    GatherMaterialObjective,
    ItemCollected,
    KillMonsterObjective,
    Ledger,
    MaterialGathered,
    MonsterKilled,
    PlayerLeveledUp,
    QuestProgress,
    ReachLevelObjective,
    UpgradeBuildingObjective,
    ZoneCleared,
)


@pytest.fixture
def ledger() -> EconomyLedger:
    """Create an empty ledger."""
    return EconomyLedger()


class TestUpdatePolicies:
    """Tests for per-kind update rules."""

    def test_kill_increments(self, ledger: EconomyLedger) -> None:
        """Kill objectives add the event count."""
        objective = KillMonsterObjective(id="k", target=10)

        update_objective(objective, MonsterKilled(monster_id="slime"), ledger)
        update_objective(objective, MonsterKilled(monster_id="wolf", count=3), ledger)

        assert objective.current == 4

    def test_kill_filter(self, ledger: EconomyLedger) -> None:
        """A monster filter ignores other monsters and unknown ids."""
        objective = KillMonsterObjective(id="k", monster_id="goblin", target=5)

        assert not update_objective(objective, MonsterKilled(monster_id="slime"), ledger)
        assert not update_objective(objective, MonsterKilled(), ledger)
        assert update_objective(objective, MonsterKilled(monster_id="goblin"), ledger)
        assert objective.current == 1

    def test_boss_sets_one(self, ledger: EconomyLedger) -> None:
        """Boss objectives are set, not incremented."""
        objective = DefeatBossObjective(id="b", boss_zone=2)

        update_objective(objective, BossDefeated(zone_id=1), ledger)
        assert objective.current == 0

        update_objective(objective, BossDefeated(zone_id=2), ledger)
        update_objective(objective, BossDefeated(zone_id=2), ledger)
        assert objective.current == 1
        assert objective.completed

    def test_collect_adds_quantity(self, ledger: EconomyLedger) -> None:
        """Collect objectives add the collected quantity."""
        objective = CollectItemObjective(id="c", item_id="fang", target=5)

        update_objective(objective, ItemCollected(item_id="fang", qty=2), ledger)
        update_objective(objective, ItemCollected(item_id="pelt", qty=9), ledger)

        assert objective.current == 2

    def test_gather_reads_ledger(self) -> None:
        """Gather objectives snapshot the live balance, not the event amount."""
        ledger = EconomyLedger(Ledger(materials={"iron": 12}))
        objective = GatherMaterialObjective(id="g", material_id="iron", target=10)

        update_objective(objective, MaterialGathered(material_id="iron", amount=1), ledger)

        assert objective.current == 12

    def test_gather_wildcard_totals(self) -> None:
        """A gather objective without a material counts every material."""
        ledger = EconomyLedger(Ledger(materials={"iron": 2, "wood": 5}))
        objective = GatherMaterialObjective(id="g", target=5)

        update_objective(objective, MaterialGathered(material_id="wood", amount=5), ledger)

        assert objective.current == 7

    def test_upgrade_sets_level(self, ledger: EconomyLedger) -> None:
        """Upgrade objectives take the new building level."""
        objective = UpgradeBuildingObjective(id="u", building_id="town_hall", target=3)

        update_objective(objective, BuildingUpgraded(building_id="barracks", new_level=5), ledger)
        update_objective(objective, BuildingUpgraded(building_id="town_hall", new_level=2), ledger)

        assert objective.current == 2

    def test_level_sets_level(self, ledger: EconomyLedger) -> None:
        """Level objectives take the new hero level."""
        objective = ReachLevelObjective(id="l", target=10)

        update_objective(objective, PlayerLeveledUp(new_level=4), ledger)

        assert objective.current == 4

    def test_unrelated_event_ignored(self, ledger: EconomyLedger) -> None:
        """Events of another kind never touch an objective."""
        objective = KillMonsterObjective(id="k", target=1)

        assert not update_objective(objective, ZoneCleared(zone_id=1), ledger)
        assert objective.current == 0


class TestObjectiveTracker:
    """Tests for event routing over tracked entries."""

    def _entry(self, quest_id: str, *, claimed: bool = False) -> QuestProgress:
        return QuestProgress(
            quest_id=quest_id,
            objectives=[
                KillMonsterObjective(id="k", target=3),
                GatherMaterialObjective(id="g", material_id="iron", target=10),
            ],
            claimed=claimed,
        )

    def test_routes_to_every_entry(self, ledger: EconomyLedger) -> None:
        """One event updates matching objectives everywhere."""
        tracker = ObjectiveTracker()
        entries = [self._entry("a"), self._entry("b")]

        changed = tracker.apply_event(MonsterKilled(count=2), entries, ledger)

        assert len(changed) == 2
        assert [entry.objectives[0].current for entry in entries] == [2, 2]

    def test_claimed_entries_frozen(self, ledger: EconomyLedger) -> None:
        """Claimed entries are no longer updated."""
        tracker = ObjectiveTracker()
        claimed = self._entry("done", claimed=True)

        tracker.apply_event(MonsterKilled(), [claimed], ledger)

        assert claimed.objectives[0].current == 0

    def test_gather_regresses_after_spend(self) -> None:
        """Iron 5, then 12, then 3 after a spend: complete, then incomplete."""
        tracker = ObjectiveTracker()
        ledger = EconomyLedger()
        entry = self._entry("q")
        gather = entry.objectives[1]

        ledger.credit("iron", 5)
        tracker.apply_event(MaterialGathered(material_id="iron", amount=5), [entry], ledger)
        assert gather.current == 5

        ledger.credit("iron", 7)
        tracker.apply_event(MaterialGathered(material_id="iron", amount=7), [entry], ledger)
        assert gather.current == 12
        assert gather.completed

        ledger.debit("iron", 9)
        changed = tracker.refresh_material_objectives([entry], ledger)
        assert changed == [gather]
        assert gather.current == 3
        assert not gather.completed

    def test_refresh_without_changes(self, ledger: EconomyLedger) -> None:
        """A resync with matching balances reports nothing."""
        tracker = ObjectiveTracker()

        assert tracker.refresh_material_objectives([self._entry("q")], ledger) == []
