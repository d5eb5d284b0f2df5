"""Zone content and zone progression state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from idlequest.models.enums import RequirementType


class ZoneRequirement(BaseModel):
    """Unlock requirement of a zone, evaluated against live player state.

    Attributes:
        type: Requirement kind.
        value: Player level, zone id or prestige level, depending on kind.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: RequirementType = RequirementType.NONE
    value: int = Field(default=0, ge=0)


class ZoneRewards(BaseModel):
    """Base reward table for a zone."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gold_multiplier: float = Field(default=1.0, gt=0)
    materials: dict[str, int] = Field(default_factory=dict)


class ZoneDefinition(BaseModel):
    """Immutable zone content.

    Attributes:
        id: Zone number; zones are ordered by id.
        name: Display name.
        monsters_to_defeat: Kills needed before the boss appears.
        monsters: Monster ids that spawn in the zone.
        boss: Boss monster id.
        difficulty: Base difficulty factor of the zone.
        rewards: Base reward table.
        unlock_requirement: Extra requirement beyond clearing the previous zone.
        is_prestige: Clearing this zone enables prestige.
        resets_on_prestige: Whether prestige wipes this zone's clear count.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(ge=1)
    name: str
    monsters_to_defeat: int = Field(default=10, ge=1)
    monsters: list[str] = Field(default_factory=list)
    boss: str | None = None
    difficulty: float = Field(default=1.0, gt=0)
    rewards: ZoneRewards = Field(default_factory=ZoneRewards)
    unlock_requirement: ZoneRequirement = Field(default_factory=ZoneRequirement)
    is_prestige: bool = False
    resets_on_prestige: bool = True


class ZoneProgress(BaseModel):
    """Mutable per-zone counters.

    Attributes:
        zone_id: Zone this entry tracks.
        clear_count: Number of full clears.
        kills: Kills in the current run through the zone.
        best_time: Fastest clear in seconds, if any.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    zone_id: int = Field(ge=1)
    clear_count: int = Field(default=0, ge=0)
    kills: int = Field(default=0, ge=0)
    best_time: float | None = Field(default=None, ge=0)

    @property
    def zone_level(self) -> int:
        """Zone level shown to players: one more than the clear count."""
        return self.clear_count + 1


class PrestigeState(BaseModel):
    """Prestige counters. prestige_level never decreases."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    prestige_level: int = Field(default=0, ge=0)
    prestige_tokens: int = Field(default=0, ge=0)
    total_tokens_earned: int = Field(default=0, ge=0)
    highest_zone_cleared: int = Field(default=0, ge=0)


class ZoneProgressionState(BaseModel):
    """Durable zone progression: current zone, per-zone progress and prestige."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    current_zone: int = Field(default=1, ge=1)
    zones: dict[int, ZoneProgress] = Field(default_factory=dict)
    prestige: PrestigeState = Field(default_factory=PrestigeState)

    @model_validator(mode="after")
    def validate_zone_keys(self) -> "ZoneProgressionState":
        """Keys must match the progress entries they hold."""
        for zone_id, progress in self.zones.items():
            if zone_id != progress.zone_id:
                raise ValueError(f"Zone progress key {zone_id} does not match {progress.zone_id}")
        return self

    def progress_for(self, zone_id: int) -> ZoneProgress:
        """Get progress for a zone, or a fresh zero entry (not stored)."""
        return self.zones.get(zone_id) or ZoneProgress(zone_id=zone_id)

    def clear_count(self, zone_id: int) -> int:
        """Get the clear count for a zone."""
        return self.progress_for(zone_id).clear_count


__all__ = [
    "ZoneRequirement",
    "ZoneRewards",
    "ZoneDefinition",
    "ZoneProgress",
    "PrestigeState",
    "ZoneProgressionState",
]
