"""Town building registry.

Owns building levels. Upgrades are a single transaction: the level cap
is checked, then the cost is spent through the economy ledger (which
re-validates balances), then the level is incremented. Any failure
leaves both the ledger and the levels untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from idlequest.core.exceptions import MaxLevelReachedError
from idlequest.core.logging import get_logger
from idlequest.engine.economy import EconomyLedger, LedgerView
from idlequest.models.buildings import (
    BuildingDefinition,
    BuildingEffect,
    BuildingEffects,
    TownState,
)
from idlequest.models.content import ContentCatalog
from idlequest.models.economy import Cost
from idlequest.models.enums import EffectOperation, EffectType


logger = get_logger(__name__)


# =============================================================================
# Effect Aggregation
# =============================================================================


def aggregate_building_effects(
    definitions: Iterable[BuildingDefinition],
    levels: Mapping[str, int],
) -> BuildingEffects:
    """Combine every building's per-level effects into one bonus structure.

    Additive effects contribute ``value * level``. Multiplicative effects
    compound as ``value ** level``. Synergies apply while the partner
    building is at or above its minimum level; additive synergies scale
    with the owning building's level, multiplicative ones apply once.

    Args:
        definitions: Building content.
        levels: Current level per building id; missing ids count as 0.

    Returns:
        The aggregated effects.
    """
    additive: dict[EffectType, float] = {}
    multipliers: dict[EffectType, float] = {}

    def apply(effect: BuildingEffect, scale: int, *, compound: bool) -> None:
        if effect.operation == EffectOperation.ADD:
            additive[effect.type] = additive.get(effect.type, 0.0) + effect.value * scale
        else:
            factor = effect.value**scale if compound else effect.value
            multipliers[effect.type] = multipliers.get(effect.type, 1.0) * factor

    for definition in definitions:
        level = levels.get(definition.id, 0)
        if level <= 0:
            continue
        for effect in definition.effects:
            apply(effect, level, compound=True)
        for synergy in definition.synergies:
            partner_level = levels.get(synergy.requires_building, 0)
            if partner_level >= synergy.minimum_level:
                apply(synergy.effect, level, compound=False)

    return BuildingEffects(
        **{effect_type.value: value for effect_type, value in additive.items()},
        multipliers=multipliers,
    )


# =============================================================================
# Registry
# =============================================================================


class TownRegistry:
    """Building levels, upgrade costs and aggregated effects."""

    def __init__(self, catalog: ContentCatalog, state: TownState | None = None) -> None:
        """Initialize the registry.

        Every building in the catalog gets a level entry, starting at 0.

        Args:
            catalog: Content providing building definitions.
            state: Existing levels to operate on.
        """
        self._catalog = catalog
        self._state = state if state is not None else TownState()
        missing = {b.id: 0 for b in catalog.buildings if b.id not in self._state.levels}
        if missing:
            self._state.levels = {**self._state.levels, **missing}

    @property
    def record(self) -> TownState:
        """The underlying durable record."""
        return self._state

    @property
    def levels(self) -> dict[str, int]:
        """Copy of the level per building id."""
        return dict(self._state.levels)

    def level(self, building_id: str) -> int:
        """Get the level of a building.

        Raises:
            UnknownEntityError: If the building is not in the catalog.
        """
        self._catalog.building(building_id)
        return self._state.levels.get(building_id, 0)

    def get_cost(self, building_id: str, current_level: int | None = None) -> Cost:
        """Price of upgrading a building from ``current_level``.

        Args:
            building_id: Building to price.
            current_level: Level to price from; defaults to the current level.

        Returns:
            The upgrade cost.

        Raises:
            UnknownEntityError: If the building is not in the catalog.
            MaxLevelReachedError: If ``current_level`` is at or above the cap.
        """
        definition = self._catalog.building(building_id)
        if current_level is None:
            current_level = self._state.levels.get(building_id, 0)
        if current_level >= definition.max_level:
            raise MaxLevelReachedError(
                f"{definition.name} is already at max level",
                building_id=building_id,
                max_level=definition.max_level,
            )
        return definition.costs[current_level]

    def is_max_level(self, building_id: str) -> bool:
        """Check whether a building has reached its cap."""
        return self.level(building_id) >= self._catalog.building(building_id).max_level

    def can_upgrade(self, building_id: str, ledger: EconomyLedger) -> bool:
        """Check whether an upgrade would currently succeed."""
        if self.is_max_level(building_id):
            return False
        return ledger.can_afford(self.get_cost(building_id))

    def upgrade(self, building_id: str, ledger: EconomyLedger) -> int:
        """Upgrade a building by one level, paying its cost.

        Args:
            building_id: Building to upgrade.
            ledger: Ledger to pay from.

        Returns:
            The new level.

        Raises:
            UnknownEntityError: If the building is not in the catalog.
            MaxLevelReachedError: If the building is at its cap.
            InsufficientFundsError: If the ledger cannot pay.
        """
        cost = self.get_cost(building_id)
        ledger.spend(cost)

        new_level = self._state.levels.get(building_id, 0) + 1
        self._state.levels = {**self._state.levels, building_id: new_level}
        logger.info(
            "Building upgraded",
            building_id=building_id,
            level=new_level,
            gold_spent=cost.gold,
        )
        return new_level

    def is_unlocked(self, building_id: str, player_level: int, materials: LedgerView) -> bool:
        """Check a building's construction requirements against live state."""
        unlock = self._catalog.building(building_id).unlock
        if player_level < unlock.player_level:
            return False
        for required_id, required_level in unlock.buildings.items():
            if self._state.levels.get(required_id, 0) < required_level:
                return False
        return all(
            materials.quantity(material_id) >= amount
            for material_id, amount in unlock.materials.items()
        )

    def available_buildings(self, player_level: int, materials: LedgerView) -> list[str]:
        """Ids of buildings whose requirements are met, in catalog order."""
        return [
            definition.id
            for definition in self._catalog.buildings
            if self.is_unlocked(definition.id, player_level, materials)
        ]

    def has_upgrade_available(
        self,
        ledger: EconomyLedger,
        player_level: int,
    ) -> bool:
        """Check whether any unlocked building can be upgraded right now."""
        return any(
            self.can_upgrade(building_id, ledger)
            for building_id in self.available_buildings(player_level, ledger)
        )

    def building_effects(self) -> BuildingEffects:
        """Aggregate effects for the current levels. Recomputed on every call."""
        return aggregate_building_effects(self._catalog.buildings, self._state.levels)

    def reset(self) -> None:
        """Return every building to level 0."""
        self._state.levels = {b.id: 0 for b in self._catalog.buildings}
        logger.info("Town reset")


__all__ = [
    "aggregate_building_effects",
    "TownRegistry",
]
