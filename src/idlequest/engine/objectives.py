"""Objective tracking engine.

A single dispatch entry point, apply_event(), routes every gameplay event
to every objective of every unclaimed entry. An objective is touched only
when its kind matches the event and its filter is unset or equal to the
event's value.

The update policy depends on the objective kind, not on the event:

* kill_monster, collect_item: increment by the event count.
* gather_material: set to the live ledger quantity. This is a snapshot,
  so spending materials can make a completed objective incomplete again.
* upgrade_building, reach_level: set to the event's new level.
* defeat_boss: set to 1.

The tracker only writes ``current``. Completion and claiming belong to
the quest book.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import assert_never

from idlequest.core.logging import get_logger
from idlequest.engine.economy import LedgerView
from idlequest.models.events import (
    BossDefeated,
    BuildingUpgraded,
    GameEvent,
    ItemCollected,
    MaterialGathered,
    MonsterKilled,
    PlayerLeveledUp,
)
from idlequest.models.objectives import (
    CollectItemObjective,
    DefeatBossObjective,
    GatherMaterialObjective,
    KillMonsterObjective,
    Objective,
    ReachLevelObjective,
    UpgradeBuildingObjective,
)
from idlequest.models.quests import QuestProgress


logger = get_logger(__name__)


def _filter_matches(expected: str | int | None, actual: str | int | None) -> bool:
    return expected is None or expected == actual


def _gathered_quantity(objective: GatherMaterialObjective, ledger: LedgerView) -> int:
    if objective.material_id is None:
        return ledger.total_materials()
    return ledger.quantity(objective.material_id)


def update_objective(objective: Objective, event: GameEvent, ledger: LedgerView) -> bool:
    """Apply one event to one objective.

    Args:
        objective: Objective to update in place.
        event: The gameplay event.
        ledger: Live material balances for gather objectives.

    Returns:
        True if ``current`` changed.
    """
    before = objective.current

    if isinstance(objective, KillMonsterObjective):
        if isinstance(event, MonsterKilled) and _filter_matches(
            objective.monster_id, event.monster_id
        ):
            objective.current = objective.current + event.count
    elif isinstance(objective, DefeatBossObjective):
        if isinstance(event, BossDefeated) and _filter_matches(
            objective.boss_zone, event.zone_id
        ):
            objective.current = 1
    elif isinstance(objective, CollectItemObjective):
        if isinstance(event, ItemCollected) and _filter_matches(
            objective.item_id, event.item_id
        ):
            objective.current = objective.current + event.qty
    elif isinstance(objective, GatherMaterialObjective):
        if isinstance(event, MaterialGathered) and _filter_matches(
            objective.material_id, event.material_id
        ):
            objective.current = _gathered_quantity(objective, ledger)
    elif isinstance(objective, UpgradeBuildingObjective):
        if isinstance(event, BuildingUpgraded) and _filter_matches(
            objective.building_id, event.building_id
        ):
            objective.current = event.new_level
    elif isinstance(objective, ReachLevelObjective):
        if isinstance(event, PlayerLeveledUp):
            objective.current = event.new_level
    else:
        assert_never(objective)

    return objective.current != before


class ObjectiveTracker:
    """Routes gameplay events to tracked objectives."""

    def apply_event(
        self,
        event: GameEvent,
        entries: Iterable[QuestProgress],
        ledger: LedgerView,
    ) -> list[Objective]:
        """Update every matching objective of every unclaimed entry.

        Args:
            event: The gameplay event.
            entries: Tracked quests, achievements and daily quests.
            ledger: Live material balances.

        Returns:
            Objectives whose ``current`` changed.
        """
        changed: list[Objective] = []
        for entry in entries:
            if entry.claimed:
                continue
            for objective in entry.objectives:
                if update_objective(objective, event, ledger):
                    changed.append(objective)
        if changed:
            logger.debug("Objectives updated", event_kind=event.kind, changed=len(changed))
        return changed

    def refresh_material_objectives(
        self,
        entries: Iterable[QuestProgress],
        ledger: LedgerView,
    ) -> list[Objective]:
        """Resync every gather objective with the ledger.

        Needed after spends, which do not emit MaterialGathered.

        Returns:
            Objectives whose ``current`` changed.
        """
        changed: list[Objective] = []
        for entry in entries:
            if entry.claimed:
                continue
            for objective in entry.objectives:
                if not isinstance(objective, GatherMaterialObjective):
                    continue
                quantity = _gathered_quantity(objective, ledger)
                if quantity != objective.current:
                    objective.current = quantity
                    changed.append(objective)
        return changed


__all__ = [
    "update_objective",
    "ObjectiveTracker",
]
