"""Meta upgrades bought with prestige tokens.

Purchases are a single transaction: the level cap and the token balance
are checked, then the tokens are debited through the zone controller,
then the level is raised. A failed purchase changes nothing.
"""

from __future__ import annotations

from idlequest.core.exceptions import MaxLevelReachedError
from idlequest.core.logging import get_logger
from idlequest.engine.zones import ZoneProgression
from idlequest.models.content import ContentCatalog
from idlequest.models.enums import MetaEffect
from idlequest.models.meta import MetaBonuses, MetaUpgradeState


logger = get_logger(__name__)

_BONUS_FIELDS = {
    MetaEffect.GLOBAL_DAMAGE: "damage",
    MetaEffect.AUTO_SPEED: "auto_speed",
    MetaEffect.QUEST_EFFICIENCY: "quest_efficiency",
    MetaEffect.OFFLINE_PROGRESS: "offline_progress",
    MetaEffect.PRESTIGE_TOKENS: "prestige_tokens",
}


class MetaUpgrades:
    """Permanent upgrade levels and the bonuses they grant.

    Example:
        >>> from idlequest.content import default_catalog
        >>> meta = MetaUpgrades(default_catalog())
        >>> meta.cost("eternal_strength")
        10
    """

    def __init__(self, catalog: ContentCatalog, state: MetaUpgradeState | None = None) -> None:
        """Initialize the upgrade book.

        Args:
            catalog: Content providing meta upgrade definitions.
            state: Existing levels to operate on.
        """
        self._catalog = catalog
        self._state = state if state is not None else MetaUpgradeState()

    @property
    def record(self) -> MetaUpgradeState:
        """The underlying durable record."""
        return self._state

    def level(self, upgrade_id: str) -> int:
        """Get the purchased level of an upgrade.

        Raises:
            UnknownEntityError: If the upgrade is not in the catalog.
        """
        self._catalog.meta_upgrade(upgrade_id)
        return self._state.level(upgrade_id)

    def is_max_level(self, upgrade_id: str) -> bool:
        """Check whether an upgrade has reached its cap."""
        return self.level(upgrade_id) >= self._catalog.meta_upgrade(upgrade_id).max_level

    def cost(self, upgrade_id: str) -> int:
        """Token price of the next level.

        Raises:
            UnknownEntityError: If the upgrade is not in the catalog.
            MaxLevelReachedError: If the upgrade is at its cap.
        """
        definition = self._catalog.meta_upgrade(upgrade_id)
        level = self._state.level(upgrade_id)
        if level >= definition.max_level:
            raise MaxLevelReachedError(
                f"{definition.name} is already at max level",
                max_level=definition.max_level,
                details={"upgrade_id": upgrade_id},
            )
        return definition.cost(level)

    def can_purchase(self, upgrade_id: str, zones: ZoneProgression) -> bool:
        """Check whether a purchase would currently succeed."""
        if self.is_max_level(upgrade_id):
            return False
        return zones.prestige_tokens >= self.cost(upgrade_id)

    def purchase(self, upgrade_id: str, zones: ZoneProgression) -> int:
        """Buy one level of an upgrade.

        Args:
            upgrade_id: Upgrade to raise.
            zones: Zone controller holding the token balance.

        Returns:
            The new level.

        Raises:
            UnknownEntityError: If the upgrade is not in the catalog.
            MaxLevelReachedError: If the upgrade is at its cap.
            InsufficientFundsError: If too few tokens are held.
        """
        cost = self.cost(upgrade_id)
        zones.spend_prestige_tokens(cost)

        new_level = self._state.level(upgrade_id) + 1
        self._state.levels = {**self._state.levels, upgrade_id: new_level}
        logger.info("Meta upgrade purchased", upgrade_id=upgrade_id, level=new_level, tokens_spent=cost)
        return new_level

    def bonuses(self) -> MetaBonuses:
        """Aggregate bonuses for the current levels.

        Upgrades sharing an effect multiply. An effect without any upgrade
        in the catalog keeps its default.
        """
        values: dict[str, float] = {}
        for definition in self._catalog.meta_upgrades:
            field = _BONUS_FIELDS[definition.effect]
            value = definition.value(self._state.level(definition.id))
            values[field] = values.get(field, 1.0) * value
        return MetaBonuses(**values)


__all__ = ["MetaUpgrades"]
