"""Quest, achievement and daily quest models.

A QuestDefinition is content. QuestProgress is the durable per-player
entry: a copy of the objectives with live ``current`` values, the reward
to grant and the persisted ``claimed`` flag. Completion is never stored.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from idlequest.models.enums import QuestCategory, QuestStatus
from idlequest.models.objectives import Objective, check_objective_kind


def _check_objective_list(value: Any) -> Any:
    if isinstance(value, list):
        for item in value:
            check_objective_kind(item)
    return value


class Reward(BaseModel):
    """What claiming a quest grants.

    Attributes:
        gold: Gold credited to the ledger.
        xp: Experience granted to the hero.
        materials: Materials credited to the ledger.
        stat_points: Points added to every base attribute of the hero.
        prestige_tokens: Prestige tokens credited.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    gold: int = Field(default=0, ge=0)
    xp: int = Field(default=0, ge=0)
    materials: dict[str, int] = Field(default_factory=dict)
    stat_points: int = Field(default=0, ge=0)
    prestige_tokens: int = Field(default=0, ge=0)

    def scaled(self, factor: float, *, minimum_material: int = 0) -> Reward:
        """Scale gold, experience and materials by a factor, flooring.

        Args:
            factor: Scaling factor.
            minimum_material: Lower bound for each scaled material quantity.

        Returns:
            A new, scaled Reward.
        """
        return self.model_copy(
            update={
                "gold": math.floor(self.gold * factor),
                "xp": math.floor(self.xp * factor),
                "materials": {
                    material_id: max(minimum_material, math.floor(quantity * factor))
                    for material_id, quantity in self.materials.items()
                },
            }
        )


class QuestProgress(BaseModel):
    """Durable progress of one quest, achievement or daily quest."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    quest_id: str = Field(min_length=1)
    name: str = ""
    category: QuestCategory = QuestCategory.STORY
    objectives: list[Objective] = Field(min_length=1)
    reward: Reward = Field(default_factory=Reward)
    claimed: bool = False

    @field_validator("objectives", mode="before")
    @classmethod
    def validate_objective_kinds(cls, value: Any) -> Any:
        """Reject saved entries with objective kinds the engine lacks."""
        return _check_objective_list(value)

    @property
    def completed(self) -> bool:
        """Check whether every objective is met right now."""
        return all(objective.completed for objective in self.objectives)

    @property
    def status(self) -> QuestStatus:
        """Get the claim state machine state."""
        if self.claimed:
            return QuestStatus.CLAIMED
        if self.completed:
            return QuestStatus.COMPLETED
        return QuestStatus.IN_PROGRESS


class QuestDefinition(BaseModel):
    """Quest or achievement content.

    Attributes:
        id: Unique quest identifier.
        name: Display name.
        description: Flavor text, not interpreted.
        category: Story quest or achievement.
        objectives: Ordered objectives, all of which must be met.
        reward: Reward granted once on claim.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    category: QuestCategory = QuestCategory.STORY
    objectives: list[Objective] = Field(min_length=1)
    reward: Reward = Field(default_factory=Reward)

    @field_validator("objectives", mode="before")
    @classmethod
    def validate_objective_kinds(cls, value: Any) -> Any:
        """Fail fast on objective kinds the engine does not implement."""
        return _check_objective_list(value)

    @model_validator(mode="after")
    def validate_unique_objective_ids(self) -> "QuestDefinition":
        """Objective ids must be unique within a quest."""
        ids = [objective.id for objective in self.objectives]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Quest {self.id!r} has duplicate objective ids")
        return self

    def new_progress(self) -> QuestProgress:
        """Create a fresh progress entry with all objectives at zero."""
        objectives = [
            objective.model_copy(update={"current": 0}, deep=True)
            for objective in self.objectives
        ]
        return QuestProgress(
            quest_id=self.id,
            name=self.name,
            category=self.category,
            objectives=objectives,
            reward=self.reward,
        )


class DailyQuestTemplate(BaseModel):
    """Blueprint for generated daily quests.

    The template objective's target is the base target; generation scales
    it, and the reward, by a random difficulty factor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    objective: Objective
    reward: Reward = Field(default_factory=Reward)

    @field_validator("objective", mode="before")
    @classmethod
    def validate_objective_kind(cls, value: Any) -> Any:
        """Fail fast on objective kinds the engine does not implement."""
        check_objective_kind(value)
        return value


class DailyQuestState(BaseModel):
    """Durable daily quest bookkeeping.

    Attributes:
        quest_date: ISO date string of the current daily set.
        rerolls_used: Rerolls spent today.
        generated: Daily quests generated for ``quest_date``; seeds and ids use it.
        login_streak: Consecutive calendar days with a refresh.
        last_login_date: ISO date string of the last refresh.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    quest_date: str = ""
    rerolls_used: int = Field(default=0, ge=0)
    generated: int = Field(default=0, ge=0)
    login_streak: int = Field(default=0, ge=0)
    last_login_date: str = ""


class QuestLogState(BaseModel):
    """Durable quest state: every tracked entry plus daily bookkeeping."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    entries: dict[str, QuestProgress] = Field(default_factory=dict)
    daily: DailyQuestState = Field(default_factory=DailyQuestState)


__all__ = [
    "Reward",
    "QuestProgress",
    "QuestDefinition",
    "DailyQuestTemplate",
    "DailyQuestState",
    "QuestLogState",
]
