"""Objective models: a closed tagged union over six kinds.

Each objective carries ``current`` and ``target`` plus an optional
kind-specific filter. An unset filter is a wildcard. ``current`` is
never clamped; completion is always ``current >= target``.

Example:
    >>> objective = parse_objective({"id": "o1", "kind": "kill_monster", "target": 5})
    >>> objective.completed
    False
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from idlequest.core.exceptions import UnknownObjectiveKindError
from idlequest.models.enums import ObjectiveKind


class ObjectiveBase(BaseModel):
    """Fields shared by every objective kind.

    Attributes:
        id: Objective identifier, unique within its quest.
        description: Display text, not interpreted.
        current: Progress value, updated by the tracker.
        target: Value at which the objective counts as met.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: str = Field(min_length=1)
    description: str = ""
    current: int = Field(default=0, ge=0)
    target: int = Field(default=1, ge=1)

    @property
    def completed(self) -> bool:
        """Check whether the objective is currently met."""
        return self.current >= self.target

    def reset(self) -> None:
        """Return progress to zero."""
        self.current = 0


class KillMonsterObjective(ObjectiveBase):
    """Defeat monsters, optionally of one kind. Increments per kill."""

    kind: Literal["kill_monster"] = "kill_monster"
    monster_id: str | None = None


class DefeatBossObjective(ObjectiveBase):
    """Defeat a zone boss. Set to 1 on a matching boss kill."""

    kind: Literal["defeat_boss"] = "defeat_boss"
    boss_zone: int | None = None


class CollectItemObjective(ObjectiveBase):
    """Collect items. Increments by the collected quantity."""

    kind: Literal["collect_item"] = "collect_item"
    item_id: str | None = None


class GatherMaterialObjective(ObjectiveBase):
    """Hold materials. Set to the live ledger quantity, so it can regress."""

    kind: Literal["gather_material"] = "gather_material"
    material_id: str | None = None


class UpgradeBuildingObjective(ObjectiveBase):
    """Reach a building level. Set to the upgraded building's new level."""

    kind: Literal["upgrade_building"] = "upgrade_building"
    building_id: str | None = None


class ReachLevelObjective(ObjectiveBase):
    """Reach a hero level. Set to the new level on level up."""

    kind: Literal["reach_level"] = "reach_level"


Objective = Annotated[
    Union[
        KillMonsterObjective,
        DefeatBossObjective,
        CollectItemObjective,
        GatherMaterialObjective,
        UpgradeBuildingObjective,
        ReachLevelObjective,
    ],
    Field(discriminator="kind"),
]

_OBJECTIVE_ADAPTER: TypeAdapter[Objective] = TypeAdapter(Objective)


def check_objective_kind(data: Any) -> None:
    """Reject raw objective data whose kind the engine does not implement.

    Args:
        data: Raw objective mapping, or an already-built objective.

    Raises:
        UnknownObjectiveKindError: If the kind is missing or unknown.
    """
    if isinstance(data, ObjectiveBase):
        return
    if isinstance(data, dict):
        kind = data.get("kind")
        if kind in {k.value for k in ObjectiveKind}:
            return
        raise UnknownObjectiveKindError(
            f"Unknown objective kind {kind!r}",
            kind=str(kind),
            details={"objective_id": data.get("id")},
        )


def parse_objective(data: dict[str, Any]) -> Objective:
    """Build an objective from raw content data.

    Args:
        data: Raw objective mapping with a ``kind`` tag.

    Returns:
        The typed objective.

    Raises:
        UnknownObjectiveKindError: If the kind is missing or unknown.
    """
    check_objective_kind(data)
    return _OBJECTIVE_ADAPTER.validate_python(data)


__all__ = [
    "ObjectiveBase",
    "KillMonsterObjective",
    "DefeatBossObjective",
    "CollectItemObjective",
    "GatherMaterialObjective",
    "UpgradeBuildingObjective",
    "ReachLevelObjective",
    "Objective",
    "check_objective_kind",
    "parse_objective",
]
