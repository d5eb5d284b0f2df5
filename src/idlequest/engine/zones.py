"""Zone progression and prestige controller.

Zones move through LOCKED -> UNLOCKED -> ACTIVE -> CLEARED(n). Unlock
status is evaluated live on every query: the previous zone must have been
cleared at least once and the zone's own requirement must hold for the
current player level and prestige level.

Difficulty and reward multipliers are pure functions of a zone's clear
count and the prestige level. Both are non-decreasing in each argument
as long as the configured curve parameters are non-negative, which
GameSettings enforces.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import assert_never

from idlequest.core.config import GameSettings
from idlequest.core.constants import PRESTIGE_TOKEN_RESOURCE_ID
from idlequest.core.exceptions import (
    InsufficientFundsError,
    PrestigeNotAvailableError,
    ValidationError,
    ZoneLockedError,
)
from idlequest.core.logging import get_logger
from idlequest.models.content import ContentCatalog
from idlequest.models.enums import RequirementType, ZoneStatus
from idlequest.models.zones import PrestigeState, ZoneProgress, ZoneProgressionState


logger = get_logger(__name__)


@dataclass(frozen=True)
class PrestigePlan:
    """Outcome of a prestige, computed before anything is committed.

    Attributes:
        state: Zone progression record to swap in.
        new_level: Prestige level after the reset.
        tokens_awarded: Prestige tokens granted by the reset.
    """

    state: ZoneProgressionState
    new_level: int
    tokens_awarded: int


class ZoneProgression:
    """Current zone, per-zone clear counters and prestige."""

    def __init__(
        self,
        catalog: ContentCatalog,
        settings: GameSettings,
        state: ZoneProgressionState | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            catalog: Content providing zone definitions.
            settings: Curve parameters and prestige policy.
            state: Existing progression record to operate on.
        """
        self._catalog = catalog
        self._settings = settings
        self._state = state if state is not None else ZoneProgressionState(
            current_zone=catalog.first_zone.id
        )

    # =========================================================================
    # Read Accessors
    # =========================================================================

    @property
    def record(self) -> ZoneProgressionState:
        """The underlying durable record."""
        return self._state

    @property
    def current_zone(self) -> int:
        """Id of the active zone."""
        return self._state.current_zone

    @property
    def prestige_level(self) -> int:
        """Number of prestige resets performed."""
        return self._state.prestige.prestige_level

    @property
    def prestige_tokens(self) -> int:
        """Unspent prestige tokens."""
        return self._state.prestige.prestige_tokens

    @property
    def highest_zone_cleared(self) -> int:
        """Highest zone id cleared in the current run."""
        return self._state.prestige.highest_zone_cleared

    def clear_count(self, zone_id: int) -> int:
        """Get the number of times a zone was cleared."""
        self._catalog.zone(zone_id)
        return self._state.clear_count(zone_id)

    def progress(self, zone_id: int) -> ZoneProgress:
        """Get a copy of the progress counters for a zone."""
        self._catalog.zone(zone_id)
        return self._state.progress_for(zone_id).model_copy()

    def is_unlocked(self, zone_id: int, player_level: int) -> bool:
        """Evaluate a zone's unlock conditions against live state.

        Args:
            zone_id: Zone to check.
            player_level: Current hero level.

        Returns:
            True if the zone may be selected.
        """
        zone = self._catalog.zone(zone_id)
        previous = self._catalog.previous_zone(zone_id)
        if previous is not None and self._state.clear_count(previous.id) < 1:
            return False
        return self._requirement_met(
            zone.unlock_requirement.type,
            zone.unlock_requirement.value,
            player_level,
        )

    def zone_status(self, zone_id: int, player_level: int) -> ZoneStatus:
        """Get the lifecycle state of a zone.

        The active zone reports ACTIVE even if it was cleared before.
        """
        if zone_id == self._state.current_zone:
            return ZoneStatus.ACTIVE
        if self._state.clear_count(zone_id) > 0:
            return ZoneStatus.CLEARED
        if self.is_unlocked(zone_id, player_level):
            return ZoneStatus.UNLOCKED
        return ZoneStatus.LOCKED

    def unlocked_zones(self, player_level: int) -> list[int]:
        """Ids of every zone that may currently be selected."""
        return [z.id for z in self._catalog.zones if self.is_unlocked(z.id, player_level)]

    # =========================================================================
    # Multipliers
    # =========================================================================

    def difficulty_multiplier(
        self,
        zone_id: int,
        *,
        clear_count: int | None = None,
        prestige_level: int | None = None,
    ) -> float:
        """Difficulty multiplier for a zone.

        Args:
            zone_id: Zone to evaluate.
            clear_count: Override for the zone's clear count.
            prestige_level: Override for the prestige level.

        Returns:
            Multiplier of at least 1.0.
        """
        clears = self.clear_count(zone_id) if clear_count is None else clear_count
        prestige = self.prestige_level if prestige_level is None else prestige_level
        s = self._settings
        by_clears = (1 + s.difficulty_per_clear * clears) ** s.difficulty_exponent
        return by_clears * (1 + s.prestige_difficulty_bonus * prestige)

    def reward_multiplier(
        self,
        zone_id: int,
        *,
        clear_count: int | None = None,
        prestige_level: int | None = None,
    ) -> float:
        """Reward multiplier for a zone. Same overrides as difficulty_multiplier."""
        clears = self.clear_count(zone_id) if clear_count is None else clear_count
        prestige = self.prestige_level if prestige_level is None else prestige_level
        s = self._settings
        return (1 + s.reward_per_clear * clears) * (1 + s.prestige_reward_bonus * prestige)

    def permanent_multiplier(self, prestige_level: int | None = None) -> float:
        """Permanent damage multiplier granted by prestige."""
        prestige = self.prestige_level if prestige_level is None else prestige_level
        return 1 + self._settings.prestige_damage_bonus * prestige

    # =========================================================================
    # Transitions
    # =========================================================================

    def select_zone(self, zone_id: int, player_level: int) -> None:
        """Make a zone the active zone.

        Raises:
            UnknownEntityError: If the zone is not in the catalog.
            ZoneLockedError: If the zone is not unlocked.
        """
        if not self.is_unlocked(zone_id, player_level):
            logger.debug("Zone selection rejected", zone_id=zone_id, player_level=player_level)
            raise ZoneLockedError(f"Zone {zone_id} is locked", zone_id=zone_id)
        if zone_id != self._state.current_zone:
            self._state.current_zone = zone_id
            logger.info("Zone selected", zone_id=zone_id)

    def register_kill(self, zone_id: int, count: int = 1) -> bool:
        """Count regular kills in a zone.

        Returns:
            True once enough monsters were defeated for the boss to appear.
        """
        zone = self._catalog.zone(zone_id)
        progress = self._state.progress_for(zone_id)
        kills = min(zone.monsters_to_defeat, progress.kills + count)
        self._store(progress.model_copy(update={"kills": kills}))
        return kills >= zone.monsters_to_defeat

    def boss_ready(self, zone_id: int) -> bool:
        """Check whether the zone boss may be fought."""
        zone = self._catalog.zone(zone_id)
        return self._state.progress_for(zone_id).kills >= zone.monsters_to_defeat

    def clear_zone(self, zone_id: int, clear_time: float | None = None) -> int:
        """Record a full clear of a zone.

        Args:
            zone_id: Zone that was cleared.
            clear_time: Seconds the clear took, if measured.

        Returns:
            The new clear count.
        """
        self._catalog.zone(zone_id)
        progress = self._state.progress_for(zone_id)
        best_time = progress.best_time
        if clear_time is not None and (best_time is None or clear_time < best_time):
            best_time = clear_time
        updated = progress.model_copy(
            update={"clear_count": progress.clear_count + 1, "kills": 0, "best_time": best_time}
        )
        self._store(updated)
        if zone_id > self._state.prestige.highest_zone_cleared:
            self._state.prestige = self._state.prestige.model_copy(
                update={"highest_zone_cleared": zone_id}
            )
        logger.info("Zone cleared", zone_id=zone_id, clear_count=updated.clear_count)
        return updated.clear_count

    # =========================================================================
    # Prestige
    # =========================================================================

    def can_prestige(self) -> bool:
        """Check whether any prestige zone has been cleared at least once."""
        return any(
            zone.is_prestige and self._state.clear_count(zone.id) >= 1
            for zone in self._catalog.zones
        )

    def prestige_token_reward(self, multiplier: float = 1.0) -> int:
        """Tokens the next prestige would grant.

        Every zone reachable through the clear chain contributes a share
        based on its id and its clears; the total grows with prestige level.

        Args:
            multiplier: Token gain factor, e.g. from meta upgrades.
        """
        s = self._settings
        total = float(s.prestige_token_base)
        previous_cleared = True
        for zone in self._catalog.zones:
            if not previous_cleared:
                break
            clears = self._state.clear_count(zone.id)
            total += zone.id * s.prestige_token_per_zone + math.floor(clears * s.prestige_token_per_clear)
            previous_cleared = clears >= 1
        return math.floor(total * (1 + self.prestige_level * s.prestige_token_level_bonus) * multiplier)

    def plan_prestige(self, token_multiplier: float = 1.0) -> PrestigePlan:
        """Compute the post-prestige record without committing it.

        Args:
            token_multiplier: Token gain factor, e.g. from meta upgrades.

        Raises:
            PrestigeNotAvailableError: If no prestige zone has been cleared.
        """
        if not self.can_prestige():
            raise PrestigeNotAvailableError(
                "Clear a prestige zone before performing prestige",
                details={"prestige_level": self.prestige_level},
            )

        tokens = self.prestige_token_reward(token_multiplier)
        new_level = self.prestige_level + 1
        kept = {
            zone.id: self._state.zones[zone.id].model_copy()
            for zone in self._catalog.zones
            if not zone.resets_on_prestige and zone.id in self._state.zones
        }
        prestige = PrestigeState(
            prestige_level=new_level,
            prestige_tokens=self._state.prestige.prestige_tokens + tokens,
            total_tokens_earned=self._state.prestige.total_tokens_earned + tokens,
            highest_zone_cleared=0,
        )
        state = ZoneProgressionState(
            current_zone=self._catalog.first_zone.id,
            zones=kept,
            prestige=prestige,
        )
        return PrestigePlan(state=state, new_level=new_level, tokens_awarded=tokens)

    def perform_prestige(self) -> PrestigePlan:
        """Reset zone progress and raise the prestige level.

        The new record is built in full and swapped in with one assignment.

        Raises:
            PrestigeNotAvailableError: If no prestige zone has been cleared.
        """
        plan = self.plan_prestige()
        self.commit(plan)
        return plan

    def commit(self, plan: PrestigePlan) -> None:
        """Swap in the record of a prestige plan."""
        self._state = plan.state
        logger.info(
            "Prestige performed",
            prestige_level=plan.new_level,
            tokens_awarded=plan.tokens_awarded,
        )

    def add_prestige_tokens(self, amount: int) -> None:
        """Credit prestige tokens, e.g. from login streaks or rewards."""
        if amount <= 0:
            return
        self._state.prestige = self._state.prestige.model_copy(
            update={
                "prestige_tokens": self._state.prestige.prestige_tokens + amount,
                "total_tokens_earned": self._state.prestige.total_tokens_earned + amount,
            }
        )

    def spend_prestige_tokens(self, amount: int) -> None:
        """Debit prestige tokens.

        Raises:
            ValidationError: If the amount is negative.
            InsufficientFundsError: If fewer tokens are held. Nothing changes.
        """
        if amount < 0:
            raise ValidationError(
                "Token amount cannot be negative",
                field_name="amount",
                invalid_value=amount,
            )
        available = self._state.prestige.prestige_tokens
        if available < amount:
            raise InsufficientFundsError(
                "Not enough prestige tokens",
                resource_id=PRESTIGE_TOKEN_RESOURCE_ID,
                required=amount,
                available=available,
            )
        self._state.prestige = self._state.prestige.model_copy(
            update={"prestige_tokens": available - amount}
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _requirement_met(
        self,
        requirement: RequirementType,
        value: int,
        player_level: int,
    ) -> bool:
        if requirement is RequirementType.NONE:
            return True
        elif requirement is RequirementType.LEVEL:
            return player_level >= value
        elif requirement is RequirementType.ZONE_CLEAR:
            return self._state.clear_count(value) >= 1
        elif requirement is RequirementType.PRESTIGE:
            return self.prestige_level >= value
        else:
            assert_never(requirement)

    def _store(self, progress: ZoneProgress) -> None:
        self._state.zones = {**self._state.zones, progress.zone_id: progress}


__all__ = [
    "PrestigePlan",
    "ZoneProgression",
]
