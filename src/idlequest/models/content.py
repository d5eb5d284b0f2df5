"""Read-only content catalog: buildings, zones, quests, daily templates and
meta upgrades.

The engine never hard-codes content. A catalog is built from data, either
the bundled defaults or a JSON document supplied by a content pipeline.

Example:
    >>> from idlequest.models.content import load_catalog
    >>> catalog = load_catalog("content/catalog.json")
    >>> catalog.zone(1).name
    'Forest Outskirts'
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from idlequest.core.exceptions import ContentError, UnknownEntityError
from idlequest.core.logging import get_logger
from idlequest.models.buildings import BuildingDefinition
from idlequest.models.enums import QuestCategory
from idlequest.models.meta import MetaUpgradeDefinition
from idlequest.models.quests import DailyQuestTemplate, QuestDefinition
from idlequest.models.zones import ZoneDefinition


logger = get_logger(__name__)


class ContentCatalog(BaseModel):
    """All content definitions the engine consumes.

    Zones are kept sorted by id; zone order defines the unlock chain.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    buildings: list[BuildingDefinition] = Field(default_factory=list)
    zones: list[ZoneDefinition] = Field(min_length=1)
    quests: list[QuestDefinition] = Field(default_factory=list)
    daily_templates: list[DailyQuestTemplate] = Field(default_factory=list)
    meta_upgrades: list[MetaUpgradeDefinition] = Field(default_factory=list)

    @field_validator("zones")
    @classmethod
    def sort_zones(cls, value: list[ZoneDefinition]) -> list[ZoneDefinition]:
        """Order zones by id."""
        return sorted(value, key=lambda zone: zone.id)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "ContentCatalog":
        """Reject duplicate ids."""
        for label, ids in (
            ("building", [b.id for b in self.buildings]),
            ("zone", [z.id for z in self.zones]),
            ("quest", [q.id for q in self.quests]),
            ("daily template", [t.id for t in self.daily_templates]),
            ("meta upgrade", [u.id for u in self.meta_upgrades]),
        ):
            if len(ids) != len(set(ids)):
                raise ValueError(f"Duplicate {label} ids in content catalog")
        return self

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def building(self, building_id: str) -> BuildingDefinition:
        """Get a building definition.

        Raises:
            UnknownEntityError: If no building has this id.
        """
        for building in self.buildings:
            if building.id == building_id:
                return building
        raise UnknownEntityError(
            f"Unknown building {building_id!r}",
            entity_type="building",
            entity_id=building_id,
        )

    def zone(self, zone_id: int) -> ZoneDefinition:
        """Get a zone definition.

        Raises:
            UnknownEntityError: If no zone has this id.
        """
        for zone in self.zones:
            if zone.id == zone_id:
                return zone
        raise UnknownEntityError(
            f"Unknown zone {zone_id}",
            entity_type="zone",
            entity_id=zone_id,
        )

    def quest(self, quest_id: str) -> QuestDefinition:
        """Get a quest or achievement definition.

        Raises:
            UnknownEntityError: If no quest has this id.
        """
        for quest in self.quests:
            if quest.id == quest_id:
                return quest
        raise UnknownEntityError(
            f"Unknown quest {quest_id!r}",
            entity_type="quest",
            entity_id=quest_id,
        )

    def meta_upgrade(self, upgrade_id: str) -> MetaUpgradeDefinition:
        """Get a meta upgrade definition.

        Raises:
            UnknownEntityError: If no meta upgrade has this id.
        """
        for upgrade in self.meta_upgrades:
            if upgrade.id == upgrade_id:
                return upgrade
        raise UnknownEntityError(
            f"Unknown meta upgrade {upgrade_id!r}",
            entity_type="meta_upgrade",
            entity_id=upgrade_id,
        )

    def previous_zone(self, zone_id: int) -> ZoneDefinition | None:
        """Get the zone before this one in unlock order, if any."""
        previous: ZoneDefinition | None = None
        for zone in self.zones:
            if zone.id == zone_id:
                return previous
            previous = zone
        return None

    def next_zone(self, zone_id: int) -> ZoneDefinition | None:
        """Get the zone after this one in unlock order, if any."""
        for zone in self.zones:
            if zone.id > zone_id:
                return zone
        return None

    @property
    def first_zone(self) -> ZoneDefinition:
        """The zone every new or prestiged hero starts in."""
        return self.zones[0]

    @property
    def achievements(self) -> list[QuestDefinition]:
        """Definitions tracked from the start of the game."""
        return [q for q in self.quests if q.category == QuestCategory.ACHIEVEMENT]


def load_catalog(path: str | Path) -> ContentCatalog:
    """Load a content catalog from a JSON file.

    Args:
        path: Path to the JSON document.

    Returns:
        The validated catalog.

    Raises:
        ContentError: If the file cannot be read or fails validation.
        UnknownObjectiveKindError: If an objective kind is not implemented.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContentError(
            f"Cannot read content catalog: {exc}",
            details={"path": str(path)},
        ) from exc

    try:
        catalog = ContentCatalog.model_validate_json(raw)
    except ValueError as exc:
        raise ContentError(
            f"Invalid content catalog: {exc}",
            details={"path": str(path)},
        ) from exc

    logger.info(
        "Content catalog loaded",
        path=str(path),
        buildings=len(catalog.buildings),
        zones=len(catalog.zones),
        quests=len(catalog.quests),
    )
    return catalog


__all__ = [
    "ContentCatalog",
    "load_catalog",
]
