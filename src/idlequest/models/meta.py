"""Meta upgrade content and state.

Meta upgrades are bought with prestige tokens and survive prestige. The
content side (MetaUpgradeDefinition) is read-only; MetaUpgradeState holds
the purchased level per upgrade id.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from idlequest.core.constants import DEFAULT_OFFLINE_MULTIPLIER
from idlequest.models.enums import MetaEffect


class MetaUpgradeDefinition(BaseModel):
    """Immutable meta upgrade content.

    Attributes:
        id: Upgrade id.
        name: Display name.
        description: Flavor text.
        effect: Which permanent bonus the upgrade raises.
        max_level: Highest purchasable level.
        base_cost: Token cost of the first level.
        cost_multiplier: Cost growth per level already bought.
        base_value: Bonus value at level 0.
        value_per_level: Bonus added by each level.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    effect: MetaEffect
    max_level: int = Field(ge=1)
    base_cost: int = Field(ge=1)
    cost_multiplier: float = Field(default=1.5, ge=1)
    base_value: float = Field(default=1.0, ge=0)
    value_per_level: float = Field(default=0.0, ge=0)

    def cost(self, level: int) -> int:
        """Token cost of the level after ``level``."""
        return math.floor(self.base_cost * self.cost_multiplier**level)

    def value(self, level: int) -> float:
        """Bonus value at a purchased level."""
        return self.base_value + self.value_per_level * level


class MetaUpgradeState(BaseModel):
    """Durable meta upgrade levels keyed by upgrade id."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    levels: dict[str, int] = Field(default_factory=dict)

    @field_validator("levels")
    @classmethod
    def validate_levels(cls, value: dict[str, int]) -> dict[str, int]:
        """Ensure no upgrade level is negative."""
        for upgrade_id, level in value.items():
            if level < 0:
                raise ValueError(f"Meta upgrade {upgrade_id!r} has negative level")
        return value

    def level(self, upgrade_id: str) -> int:
        """Purchased level of an upgrade; 0 if never bought."""
        return self.levels.get(upgrade_id, 0)


class MetaBonuses(BaseModel):
    """Permanent multipliers from meta upgrades.

    Every field is a factor applied on top of the regular value, except
    ``offline_progress`` which is the offline earnings multiplier itself.
    """

    model_config = ConfigDict(frozen=True)

    damage: float = 1.0
    auto_speed: float = 1.0
    quest_efficiency: float = 1.0
    offline_progress: float = DEFAULT_OFFLINE_MULTIPLIER
    prestige_tokens: float = 1.0


class OfflineProgress(BaseModel):
    """Earnings granted for time spent away.

    Attributes:
        seconds_away: Seconds since the last session ended.
        seconds_counted: Seconds actually rewarded, after the cap.
        efficiency: Share of online earnings granted.
        intelligence_bonus: Part of the efficiency contributed by intelligence.
        gold: Gold earned.
        materials: Materials earned.
    """

    model_config = ConfigDict(frozen=True)

    seconds_away: float
    seconds_counted: float
    efficiency: float
    intelligence_bonus: float = 0.0
    gold: int = 0
    materials: dict[str, int] = Field(default_factory=dict)


__all__ = [
    "MetaUpgradeDefinition",
    "MetaUpgradeState",
    "MetaBonuses",
    "OfflineProgress",
]
