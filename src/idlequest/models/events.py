"""Inbound gameplay events.

Every event is an immutable tagged record. GameEvent is the discriminated
union the tracker and the facade dispatch on.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class MonsterKilled(_Event):
    """A monster died. ``monster_id`` may be unknown."""

    kind: Literal["monster_killed"] = "monster_killed"
    monster_id: str | None = None
    count: int = Field(default=1, ge=1)


class BossDefeated(_Event):
    """A zone boss died."""

    kind: Literal["boss_defeated"] = "boss_defeated"
    zone_id: int = Field(ge=1)
    boss_id: str | None = None


class ItemCollected(_Event):
    """Items were added to the inventory."""

    kind: Literal["item_collected"] = "item_collected"
    item_id: str
    qty: int = Field(default=1, ge=1)


class MaterialGathered(_Event):
    """A material balance changed. Trackers read the ledger, not ``amount``."""

    kind: Literal["material_gathered"] = "material_gathered"
    material_id: str
    amount: int = Field(default=0, ge=0)


class BuildingUpgraded(_Event):
    """A building reached a new level."""

    kind: Literal["building_upgraded"] = "building_upgraded"
    building_id: str
    new_level: int = Field(ge=1)


class PlayerLeveledUp(_Event):
    """The hero reached a new level."""

    kind: Literal["player_leveled_up"] = "player_leveled_up"
    new_level: int = Field(ge=1)


class ZoneCleared(_Event):
    """A zone was fully cleared."""

    kind: Literal["zone_cleared"] = "zone_cleared"
    zone_id: int = Field(ge=1)


class PrestigePerformed(_Event):
    """A prestige reset completed."""

    kind: Literal["prestige_performed"] = "prestige_performed"
    prestige_level: int = Field(default=0, ge=0)


GameEvent = Annotated[
    Union[
        MonsterKilled,
        BossDefeated,
        ItemCollected,
        MaterialGathered,
        BuildingUpgraded,
        PlayerLeveledUp,
        ZoneCleared,
        PrestigePerformed,
    ],
    Field(discriminator="kind"),
]

GAME_EVENT_ADAPTER: TypeAdapter[GameEvent] = TypeAdapter(GameEvent)


__all__ = [
    "MonsterKilled",
    "BossDefeated",
    "ItemCollected",
    "MaterialGathered",
    "BuildingUpgraded",
    "PlayerLeveledUp",
    "ZoneCleared",
    "PrestigePerformed",
    "GameEvent",
    "GAME_EVENT_ADAPTER",
]
