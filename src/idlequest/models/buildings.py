"""Town building content and state models.

BuildingDefinition is read-only content. TownState holds the only
mutable part, a level per building id. BuildingEffects is the flat bonus
structure handed to the combat model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from idlequest.models.economy import Cost
from idlequest.models.enums import EffectOperation, EffectType


class BuildingEffect(BaseModel):
    """A per-level bonus contributed by a building.

    Attributes:
        type: Which bonus is affected.
        operation: ADD scales linearly with level, MULTIPLY compounds.
        value: Per-level amount (ADD) or per-level factor (MULTIPLY).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: EffectType
    operation: EffectOperation = EffectOperation.ADD
    value: float

    @model_validator(mode="after")
    def validate_factor(self) -> "BuildingEffect":
        """Multiplicative factors below 1 would make upgrades harmful."""
        if self.operation == EffectOperation.MULTIPLY and self.value < 1:
            raise ValueError("Multiplicative building effects must have value >= 1")
        if self.operation == EffectOperation.ADD and self.value < 0:
            raise ValueError("Additive building effects cannot be negative")
        return self


class BuildingSynergy(BaseModel):
    """An extra effect active while a partner building is high enough."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    requires_building: str
    minimum_level: int = Field(default=1, ge=1)
    effect: BuildingEffect


class BuildingUnlock(BaseModel):
    """Requirements before a building may be constructed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    player_level: int = Field(default=1, ge=1)
    buildings: dict[str, int] = Field(default_factory=dict)
    materials: dict[str, int] = Field(default_factory=dict)


class BuildingDefinition(BaseModel):
    """Immutable building content.

    ``costs[n]`` is the price of upgrading from level ``n`` to ``n + 1``.

    Attributes:
        id: Unique building identifier.
        name: Display name.
        description: Flavor text, not interpreted.
        max_level: Level cap.
        costs: Upgrade cost per current level.
        effects: Per-level bonuses.
        synergies: Bonuses gated on other buildings.
        unlock: Construction requirements.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    max_level: int = Field(ge=1)
    costs: list[Cost]
    effects: list[BuildingEffect] = Field(default_factory=list)
    synergies: list[BuildingSynergy] = Field(default_factory=list)
    unlock: BuildingUnlock = Field(default_factory=BuildingUnlock)

    @field_validator("costs")
    @classmethod
    def validate_cost_curve(cls, value: list[Cost]) -> list[Cost]:
        """Ensure gold costs never decrease from one level to the next."""
        for previous, current in zip(value, value[1:]):
            if current.gold < previous.gold:
                raise ValueError("Building gold costs must be non-decreasing")
        return value

    @model_validator(mode="after")
    def validate_cost_count(self) -> "BuildingDefinition":
        """Every reachable level needs a price."""
        if len(self.costs) < self.max_level:
            raise ValueError(
                f"Building {self.id!r} defines {len(self.costs)} costs for "
                f"max_level {self.max_level}"
            )
        return self


class BuildingEffects(BaseModel):
    """Aggregated town bonuses consumed by the combat model.

    Additive fields start at 0. ``multipliers`` maps an effect type to
    its compounded factor; missing entries mean 1.0.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    click_damage: float = 0.0
    auto_damage: float = 0.0
    auto_speed: float = 0.0
    auto_clicker: float = 0.0
    crit_chance: float = 0.0
    gold_bonus: float = 0.0
    xp_bonus: float = 0.0
    material_bonus: float = 0.0
    quest_efficiency: float = 0.0
    multipliers: dict[EffectType, float] = Field(default_factory=dict)

    def multiplier(self, effect_type: EffectType) -> float:
        """Get the compounded factor for an effect type."""
        return self.multipliers.get(effect_type, 1.0)


class TownState(BaseModel):
    """Durable building levels keyed by building id."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    levels: dict[str, int] = Field(default_factory=dict)

    @field_validator("levels")
    @classmethod
    def validate_levels(cls, value: dict[str, int]) -> dict[str, int]:
        """Ensure no building level is negative."""
        for building_id, level in value.items():
            if level < 0:
                raise ValueError(f"Building {building_id!r} has negative level")
        return value


__all__ = [
    "BuildingEffect",
    "BuildingSynergy",
    "BuildingUnlock",
    "BuildingDefinition",
    "BuildingEffects",
    "TownState",
]
