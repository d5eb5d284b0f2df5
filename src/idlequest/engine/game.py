"""Game facade.

Game owns the GameState aggregate and wires the components together. It
is the only place where one component's result feeds another: a kill
credits the ledger, advances the zone, grants experience and is routed
to the objective tracker.

Every public operation is a transaction. Fallible steps run first and
mutations follow only after all of them succeeded, so a failure raised
from any operation leaves the state exactly as it was.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import date
from typing import Any

from idlequest.core.config import Settings, get_settings
from idlequest.core.constants import GOLD_RESOURCE_ID
from idlequest.core.exceptions import BossNotReadyError, IdleQuestError, ZoneLockedError
from idlequest.core.logging import bind_context, get_logger, unbind_context
from idlequest.engine.analytics import Clock, SessionAnalytics, TodayProvider
from idlequest.engine.combat import (
    CombatProfile,
    compute_combat_profile,
    gold_per_kill,
    monster_hp,
    xp_per_kill,
)
from idlequest.engine.economy import EconomyLedger
from idlequest.engine.journal import ProgressionJournal
from idlequest.engine.meta import MetaUpgrades
from idlequest.engine.notices import NoticeBus
from idlequest.engine.objectives import ObjectiveTracker
from idlequest.engine.offline import compute_offline_progress
from idlequest.engine.quests import DailyQuestBoard, DailyRefresh, QuestBook
from idlequest.engine.scheduler import TaskScheduler
from idlequest.engine.town import TownRegistry
from idlequest.engine.zones import ZoneProgression
from idlequest.models.analytics import DailyStats, SessionStats
from idlequest.models.buildings import BuildingEffects
from idlequest.models.character import Character, Equipment
from idlequest.models.content import ContentCatalog
from idlequest.models.economy import Cost, InventoryItem, Ledger
from idlequest.models.enums import (
    Ability,
    EffectType,
    EquipmentSlot,
    ItemType,
    NoticeCategory,
    ZoneStatus,
)
from idlequest.models.events import (
    BossDefeated,
    BuildingUpgraded,
    GameEvent,
    ItemCollected,
    MaterialGathered,
    MonsterKilled,
    PlayerLeveledUp,
    PrestigePerformed,
    ZoneCleared,
)
from idlequest.models.game_state import GameState
from idlequest.models.meta import MetaBonuses, OfflineProgress
from idlequest.models.objectives import Objective
from idlequest.models.quests import QuestProgress, Reward
from idlequest.models.zones import ZoneProgressionState


logger = get_logger(__name__)

AUTO_ATTACK_TASK = "auto_attack"
ANALYTICS_SAMPLE_TASK = "analytics_sample"


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class Encounter:
    """The monster currently being fought. Transient, never persisted."""

    zone_id: int
    monster_id: str | None
    is_boss: bool
    max_hp: int
    hp: int


@dataclass(frozen=True)
class KillResult:
    """What a kill granted.

    Attributes:
        gold: Gold credited.
        xp: Experience granted after bonuses.
        levels_gained: Hero levels gained.
        boss_ready: Whether the zone boss may now be fought.
        zone_cleared: Whether the kill cleared the zone.
    """

    gold: int
    xp: int
    levels_gained: int
    boss_ready: bool
    zone_cleared: bool


@dataclass(frozen=True)
class ZoneMultipliers:
    """Scaling applied to a zone right now."""

    zone_id: int
    difficulty: float
    reward: float
    permanent: float


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a prestige reset."""

    prestige_level: int
    tokens_awarded: int


# =============================================================================
# Game
# =============================================================================


class Game:
    """Single-threaded progression engine over one GameState.

    Example:
        >>> from idlequest.content import default_catalog
        >>> game = Game(default_catalog())
        >>> result = game.kill_monster()
        >>> game.ledger.gold == result.gold
        True
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        *,
        settings: Settings | None = None,
        state: GameState | None = None,
        clock: Clock = time.time,
        today: TodayProvider = date.today,
    ) -> None:
        """Initialize the game.

        Args:
            catalog: Content the engine runs on.
            settings: Application settings. Loaded from the environment if None.
            state: Saved state to resume. A new game is started if None.
            clock: Wall clock in seconds, used for sessions and timers.
            today: Provider of the current calendar date.
        """
        self._catalog = catalog
        self._settings = settings or get_settings()
        self._clock = clock
        self._today = today
        self._state = state or GameState(
            zones=ZoneProgressionState(current_zone=catalog.first_zone.id)
        )

        self._tracker = ObjectiveTracker()
        self._scheduler = TaskScheduler()
        self._notices = NoticeBus()
        self._journal = ProgressionJournal(
            self._notices,
            max_entries=self._settings.session.max_journal_entries,
        )
        self._analytics = SessionAnalytics(self._state.analytics, clock=clock, today=today)
        self._bind_components()
        self._quests.track_achievements()

        self._encounter: Encounter | None = None
        self._auto_damage_carry = 0.0
        self._zone_started_at: float | None = None

        logger.info(
            "Game initialized",
            zone=self._zones.current_zone,
            prestige_level=self._zones.prestige_level,
            buildings=len(catalog.buildings),
            quests=len(catalog.quests),
        )

    def _bind_components(self) -> None:
        state = self._state
        self._ledger = EconomyLedger(state.ledger)
        self._town = TownRegistry(self._catalog, state.town)
        self._zones = ZoneProgression(self._catalog, self._settings.game, state.zones)
        self._quests = QuestBook(self._catalog, state.quests)
        self._meta = MetaUpgrades(self._catalog, state.meta_upgrades)
        self._daily = DailyQuestBoard(
            self._quests,
            self._catalog.daily_templates,
            game_settings=self._settings.game,
            session_settings=self._settings.session,
        )

    # =========================================================================
    # Components
    # =========================================================================

    @property
    def state(self) -> GameState:
        """The durable state aggregate."""
        return self._state

    @property
    def catalog(self) -> ContentCatalog:
        """Content the engine runs on."""
        return self._catalog

    @property
    def settings(self) -> Settings:
        """Application settings."""
        return self._settings

    @property
    def character(self) -> Character:
        """The hero."""
        return self._state.character

    @property
    def ledger(self) -> EconomyLedger:
        """Gold, materials and inventory."""
        return self._ledger

    @property
    def town(self) -> TownRegistry:
        """Building levels."""
        return self._town

    @property
    def zones(self) -> ZoneProgression:
        """Zone progress and prestige."""
        return self._zones

    @property
    def quests(self) -> QuestBook:
        """Quests, achievements and daily quests."""
        return self._quests

    @property
    def daily(self) -> DailyQuestBoard:
        """Daily quest generation and rerolls."""
        return self._daily

    @property
    def meta(self) -> MetaUpgrades:
        """Permanent upgrades bought with prestige tokens."""
        return self._meta

    @property
    def analytics(self) -> SessionAnalytics:
        """Session metrics."""
        return self._analytics

    @property
    def scheduler(self) -> TaskScheduler:
        """Periodic tasks of the running session."""
        return self._scheduler

    @property
    def notices(self) -> NoticeBus:
        """Bus the engine announces progression notices on."""
        return self._notices

    @property
    def journal(self) -> ProgressionJournal:
        """Recent notices, bounded by the session settings."""
        return self._journal

    @property
    def encounter(self) -> Encounter:
        """The monster being fought, spawned on first access."""
        if self._encounter is None or self._encounter.zone_id != self._zones.current_zone:
            self._encounter = self._spawn_encounter()
        return self._encounter

    # =========================================================================
    # Read Accessors
    # =========================================================================

    def building_effects(self) -> BuildingEffects:
        """Aggregate town bonuses for the current building levels."""
        return self._town.building_effects()

    def meta_bonuses(self) -> MetaBonuses:
        """Permanent multipliers from meta upgrades."""
        return self._meta.bonuses()

    def combat_profile(self) -> CombatProfile:
        """Derived combat values, recomputed from current state."""
        meta = self._meta.bonuses()
        return compute_combat_profile(
            self._state.character,
            self._town.building_effects(),
            damage_multiplier=self._zones.permanent_multiplier() * meta.damage,
            speed_multiplier=meta.auto_speed,
            minimum_aps=self._settings.game.min_auto_attacks_per_second,
        )

    def zone_multipliers(self, zone_id: int | None = None) -> ZoneMultipliers:
        """Difficulty, reward and permanent multipliers for a zone."""
        zone_id = self._zones.current_zone if zone_id is None else zone_id
        return ZoneMultipliers(
            zone_id=zone_id,
            difficulty=self._zones.difficulty_multiplier(zone_id),
            reward=self._zones.reward_multiplier(zone_id),
            permanent=self._zones.permanent_multiplier(),
        )

    def zone_status(self, zone_id: int) -> ZoneStatus:
        """Lifecycle state of a zone for the current hero."""
        return self._zones.zone_status(zone_id, self._state.character.level)

    def active_objectives(self) -> list[Objective]:
        """Unmet objectives of every unclaimed entry."""
        return [
            objective
            for entry in self._quests.active_entries()
            for objective in entry.objectives
            if not objective.completed
        ]

    def completed_quests(self) -> list[QuestProgress]:
        """Entries waiting for their reward to be claimed."""
        return self._quests.completed_entries()

    def session_stats(self) -> SessionStats:
        """Per-minute rates of the current session."""
        return self._analytics.session_stats()

    def daily_stats(self, today: date | None = None) -> DailyStats:
        """Activity of a calendar day, today by default."""
        return self._analytics.daily_stats(today)

    # =========================================================================
    # Event Dispatch
    # =========================================================================

    def dispatch(self, event: GameEvent) -> list[Objective]:
        """Route an event to the objective tracker.

        Only objective progress reacts. Counters and balances are updated by
        the operations that produce events, not by dispatch.

        Returns:
            Objectives whose progress changed.
        """
        before = {entry.quest_id for entry in self._quests.completed_entries()}
        changed = self._tracker.apply_event(event, self._quests.active_entries(), self._ledger)
        self._announce_completions(before)
        return changed

    def _refresh_materials(self) -> None:
        before = {entry.quest_id for entry in self._quests.completed_entries()}
        self._tracker.refresh_material_objectives(self._quests.active_entries(), self._ledger)
        self._announce_completions(before)

    def _announce_completions(self, before: set[str]) -> None:
        for entry in self._quests.completed_entries():
            if entry.quest_id not in before:
                self._notices.emit(
                    NoticeCategory.QUESTS,
                    f"{entry.name or entry.quest_id} completed",
                    quest_id=entry.quest_id,
                )

    # =========================================================================
    # Combat
    # =========================================================================

    def click(self) -> int:
        """Attack the current monster with a click.

        Returns:
            Damage dealt.
        """
        damage = self.combat_profile().click_damage
        self._damage_encounter(damage)
        return damage

    def auto_attack(self, elapsed: float) -> int:
        """Apply auto attacks for ``elapsed`` seconds.

        Fractional damage carries over to the next call.

        Returns:
            Whole damage dealt.
        """
        profile = self.combat_profile()
        self._auto_damage_carry += profile.auto_dps * max(0.0, elapsed)
        damage = math.floor(self._auto_damage_carry)
        if damage <= 0:
            return 0
        self._auto_damage_carry -= damage
        self._damage_encounter(damage)
        return damage

    def _damage_encounter(self, damage: int) -> None:
        encounter = self.encounter
        encounter.hp = max(0, encounter.hp - damage)
        if encounter.hp == 0:
            self.kill_monster(encounter.monster_id, is_boss=encounter.is_boss)
            self._encounter = self._spawn_encounter()

    def _spawn_encounter(self) -> Encounter:
        zone = self._catalog.zone(self._zones.current_zone)
        is_boss = self._zones.boss_ready(zone.id)
        if is_boss:
            monster_id = zone.boss
        elif zone.monsters:
            kills = self._state.zones.progress_for(zone.id).kills
            monster_id = zone.monsters[kills % len(zone.monsters)]
        else:
            monster_id = None
        difficulty = zone.difficulty * self._zones.difficulty_multiplier(zone.id)
        hp = monster_hp(zone.id, is_boss=is_boss, difficulty=difficulty)
        if self._zone_started_at is None:
            self._zone_started_at = self._clock()
        return Encounter(zone_id=zone.id, monster_id=monster_id, is_boss=is_boss, max_hp=hp, hp=hp)

    def kill_monster(
        self,
        monster_id: str | None = None,
        *,
        is_boss: bool = False,
        count: int = 1,
    ) -> KillResult:
        """Record kills in the current zone and grant their rewards.

        A boss kill also counts as a monster kill and clears the zone.

        Args:
            monster_id: Monster that died, if known.
            is_boss: Whether the zone boss died.
            count: Number of regular monsters killed.

        Returns:
            What the kills granted.

        Raises:
            BossNotReadyError: If a boss kill is reported before the zone's
                kill quota is met.
        """
        zone = self._catalog.zone(self._zones.current_zone)
        if is_boss and not self._zones.boss_ready(zone.id):
            logger.debug("Boss kill rejected", zone_id=zone.id)
            raise BossNotReadyError(
                f"The boss of {zone.name} has not appeared yet",
                zone_id=zone.id,
            )
        count = 1 if is_boss else max(1, count)
        effects = self._town.building_effects()
        profile = self.combat_profile()

        reward = self._zones.reward_multiplier(zone.id) * zone.rewards.gold_multiplier
        gold_bonus = (1 + profile.gold_bonus) * effects.multiplier(EffectType.GOLD_BONUS)
        gold = math.floor(gold_per_kill(zone.id, is_boss=is_boss, reward=reward) * count * gold_bonus)
        base_xp = xp_per_kill(zone.id, is_boss=is_boss, reward=self._zones.reward_multiplier(zone.id))

        self._ledger.credit(GOLD_RESOURCE_ID, gold)
        self._analytics.record_gold_earned(gold)
        self._analytics.record_monster_killed(count)
        self.dispatch(MonsterKilled(monster_id=monster_id, count=count))

        zone_cleared = False
        if is_boss:
            self.dispatch(BossDefeated(zone_id=zone.id, boss_id=monster_id))
            self.clear_zone(zone.id)
            zone_cleared = True
            boss_ready = False
        else:
            boss_ready = self._zones.register_kill(zone.id, count)

        xp, levels = self._grant_xp(base_xp * count, apply_bonus=True)
        return KillResult(
            gold=gold,
            xp=xp,
            levels_gained=levels,
            boss_ready=boss_ready,
            zone_cleared=zone_cleared,
        )

    # =========================================================================
    # Character
    # =========================================================================

    def add_xp(self, amount: int) -> int:
        """Grant experience, applying the hero's experience bonuses.

        Returns:
            Levels gained.
        """
        _, levels = self._grant_xp(amount, apply_bonus=True)
        return levels

    def _grant_xp(self, amount: int, *, apply_bonus: bool) -> tuple[int, int]:
        if amount <= 0:
            return 0, 0
        if apply_bonus:
            profile = self.combat_profile()
            factor = (1 + profile.xp_bonus) * self._town.building_effects().multiplier(EffectType.XP_BONUS)
            amount = math.floor(amount * factor)
        character = self._state.character
        levels = character.add_xp(
            amount,
            base=self._settings.game.xp_curve_base,
            growth=self._settings.game.xp_curve_growth,
        )
        self._analytics.record_xp_gained(amount)
        if levels:
            self._notices.emit(
                NoticeCategory.PROGRESSION,
                f"Reached level {character.level}",
                level=character.level,
            )
            self.dispatch(PlayerLeveledUp(new_level=character.level))
        return amount, levels

    def equip(self, item_id: str) -> Equipment | None:
        """Equip an item from the inventory.

        Returns:
            The displaced item, which moves into the inventory.

        Raises:
            InsufficientFundsError: If the item is not in the inventory.
        """
        item = self._ledger.take_equipment(item_id)
        displaced = self._state.character.equip(item)
        if displaced is not None:
            self._ledger.store_equipment(displaced)
        logger.info("Item equipped", item_id=item_id, slot=item.slot.value)
        return displaced

    def unequip(self, slot: EquipmentSlot) -> Equipment | None:
        """Move the item in a slot into the inventory.

        Returns:
            The removed item, or None if the slot was empty.
        """
        removed = self._state.character.unequip(slot)
        if removed is not None:
            self._ledger.store_equipment(removed)
            logger.info("Item unequipped", item_id=removed.id, slot=slot.value)
        return removed

    # =========================================================================
    # Economy
    # =========================================================================

    def gather_material(self, material_id: str, amount: int) -> int:
        """Credit a gathered material.

        Returns:
            The new balance.
        """
        self._ledger.credit(material_id, amount)
        self.dispatch(MaterialGathered(material_id=material_id, amount=amount))
        return self._ledger.quantity(material_id)

    def collect_item(
        self,
        item_id: str,
        qty: int = 1,
        *,
        name: str = "",
        item_type: ItemType = ItemType.CONSUMABLE,
    ) -> None:
        """Add stackable items to the inventory."""
        self._ledger.add_items(
            [InventoryItem(item_id=item_id, name=name or item_id, item_type=item_type, quantity=qty)]
        )
        self.dispatch(ItemCollected(item_id=item_id, qty=qty))

    def craft_item(self, item: Equipment, cost: Cost) -> None:
        """Pay for and store a newly crafted equipment piece.

        Raises:
            InsufficientFundsError: If the cost cannot be paid.
        """
        self._ledger.spend(cost)
        self._ledger.store_equipment(item)
        self._analytics.record_item_crafted()
        self._refresh_materials()
        self.dispatch(ItemCollected(item_id=item.id, qty=1))
        self._notices.emit(NoticeCategory.GENERAL, f"Crafted {item.name}", item_id=item.id)

    # =========================================================================
    # Town
    # =========================================================================

    def upgrade_building(self, building_id: str) -> int:
        """Upgrade a building, paying its cost.

        Returns:
            The new level.

        Raises:
            UnknownEntityError: If the building is not in the catalog.
            MaxLevelReachedError: If the building is at its cap.
            InsufficientFundsError: If the cost cannot be paid.
        """
        try:
            new_level = self._town.upgrade(building_id, self._ledger)
        except IdleQuestError as exc:
            logger.warning("Building upgrade rejected", building_id=building_id, reason=exc.message)
            raise
        self._refresh_materials()
        self.dispatch(BuildingUpgraded(building_id=building_id, new_level=new_level))
        name = self._catalog.building(building_id).name
        self._notices.emit(
            NoticeCategory.TOWN,
            f"{name} upgraded to level {new_level}",
            building_id=building_id,
            level=new_level,
        )
        return new_level

    # =========================================================================
    # Zones
    # =========================================================================

    def select_zone(self, zone_id: int) -> None:
        """Make a zone the active zone.

        Raises:
            UnknownEntityError: If the zone is not in the catalog.
            ZoneLockedError: If the zone is locked.
        """
        previous = self._zones.current_zone
        self._zones.select_zone(zone_id, self._state.character.level)
        if zone_id != previous:
            self._encounter = None
            self._zone_started_at = None

    def clear_zone(self, zone_id: int | None = None) -> int:
        """Record a full clear of the active zone and grant its material rewards.

        Args:
            zone_id: Zone to clear. Must be the active zone; defaults to it.

        Returns:
            The zone's new clear count.

        Raises:
            UnknownEntityError: If the zone is not in the catalog.
            ZoneLockedError: If the zone is not the active, unlocked zone.
        """
        current = self._zones.current_zone
        zone = self._catalog.zone(current if zone_id is None else zone_id)
        if zone.id != current or not self._zones.is_unlocked(zone.id, self._state.character.level):
            logger.debug("Zone clear rejected", zone_id=zone.id, current_zone=current)
            raise ZoneLockedError(f"{zone.name} is not the active zone", zone_id=zone.id)
        reward = self._zones.reward_multiplier(zone.id)
        effects = self._town.building_effects()
        material_factor = reward * (1 + effects.material_bonus) * effects.multiplier(EffectType.MATERIAL_BONUS)

        clear_time = None
        if self._zone_started_at is not None:
            clear_time = max(0.0, self._clock() - self._zone_started_at)
        clears = self._zones.clear_zone(zone.id, clear_time)
        self._zone_started_at = None
        self._encounter = None
        self._analytics.record_zone_cleared()

        for material_id, quantity in zone.rewards.materials.items():
            amount = max(1, math.floor(quantity * material_factor))
            self._ledger.credit(material_id, amount)
            self.dispatch(MaterialGathered(material_id=material_id, amount=amount))

        self.dispatch(ZoneCleared(zone_id=zone.id))
        self._notices.emit(
            NoticeCategory.PROGRESSION,
            f"{zone.name} cleared",
            zone_id=zone.id,
            clear_count=clears,
        )
        return clears

    def perform_prestige(self) -> PrestigeResult:
        """Reset progression for a higher prestige level.

        Zone progress always resets (per zone content). The hero, the
        ledger and the buildings reset as configured in GameSettings. Quest
        progress, analytics and meta upgrades are kept.

        Raises:
            PrestigeNotAvailableError: If no prestige zone has been cleared.
        """
        plan = self._zones.plan_prestige(self._meta.bonuses().prestige_tokens)
        policy = self._settings.game

        old = self._state
        character = old.character
        if policy.prestige_resets_character:
            character = character.model_copy(update={"level": 1, "xp": 0})
        ledger = old.ledger
        if policy.prestige_resets_economy:
            ledger = Ledger(inventory=list(old.ledger.inventory))
        town = old.town
        if policy.prestige_resets_buildings:
            town = town.model_copy(update={"levels": {b.id: 0 for b in self._catalog.buildings}})

        self._state = old.model_copy(
            update={"character": character, "ledger": ledger, "town": town, "zones": plan.state}
        )
        self._bind_components()
        self._zones.commit(plan)
        self._encounter = None
        self._zone_started_at = None
        self._auto_damage_carry = 0.0

        self._analytics.record_prestige()
        self.dispatch(PrestigePerformed(prestige_level=plan.new_level))
        self._refresh_materials()
        self._notices.emit(
            NoticeCategory.PROGRESSION,
            f"Prestige {plan.new_level} reached",
            prestige_level=plan.new_level,
            tokens=plan.tokens_awarded,
        )
        return PrestigeResult(prestige_level=plan.new_level, tokens_awarded=plan.tokens_awarded)

    # =========================================================================
    # Meta Upgrades
    # =========================================================================

    def purchase_meta_upgrade(self, upgrade_id: str) -> int:
        """Spend prestige tokens on one level of a meta upgrade.

        Returns:
            The new level.

        Raises:
            UnknownEntityError: If the upgrade is not in the catalog.
            MaxLevelReachedError: If the upgrade is at its cap.
            InsufficientFundsError: If too few tokens are held.
        """
        try:
            new_level = self._meta.purchase(upgrade_id, self._zones)
        except IdleQuestError as exc:
            logger.warning("Meta upgrade rejected", upgrade_id=upgrade_id, reason=exc.message)
            raise
        name = self._catalog.meta_upgrade(upgrade_id).name
        self._notices.emit(
            NoticeCategory.PROGRESSION,
            f"{name} raised to level {new_level}",
            upgrade_id=upgrade_id,
            level=new_level,
        )
        return new_level

    # =========================================================================
    # Quests
    # =========================================================================

    def start_quest(self, quest_id: str) -> QuestProgress:
        """Begin tracking a story quest. Idempotent."""
        progress = self._quests.start_quest(quest_id)
        self._refresh_materials()
        return progress

    def claim_reward(self, quest_id: str) -> Reward:
        """Claim a completed entry and grant every part of its reward.

        Raises:
            UnknownEntityError: If the quest is not tracked.
            NotCompletedError: If an objective is not met.
            AlreadyClaimedError: If the reward was already claimed.
        """
        effects = self._town.building_effects()
        efficiency = (1 + effects.quest_efficiency) * effects.multiplier(EffectType.QUEST_EFFICIENCY)
        efficiency *= self._meta.bonuses().quest_efficiency
        try:
            reward = self._quests.claim_reward(quest_id, self._ledger, efficiency=efficiency)
        except IdleQuestError as exc:
            logger.debug("Claim rejected", quest_id=quest_id, reason=exc.message)
            raise

        if reward.stat_points:
            attributes = self._state.character.attributes
            self._state.character.attributes = attributes.model_copy(
                update={
                    ability.value: attributes.score(ability) + reward.stat_points
                    for ability in Ability
                }
            )
        self._zones.add_prestige_tokens(reward.prestige_tokens)
        self._analytics.record_gold_earned(reward.gold)
        self._analytics.record_quest_completed()
        for material_id, quantity in reward.materials.items():
            self.dispatch(MaterialGathered(material_id=material_id, amount=quantity))
        self._grant_xp(reward.xp, apply_bonus=False)

        self._notices.emit(
            NoticeCategory.QUESTS,
            f"Reward claimed for {quest_id}",
            quest_id=quest_id,
            gold=reward.gold,
            xp=reward.xp,
        )
        return reward

    def refresh_daily(self, today: date | None = None) -> DailyRefresh:
        """Apply the daily login and reset daily quests on a new day."""
        result = self._daily.refresh(today or self._today())
        if result.login_reward is not None:
            self._ledger.credit(GOLD_RESOURCE_ID, result.login_reward.gold)
            self._analytics.record_gold_earned(result.login_reward.gold)
            self._zones.add_prestige_tokens(result.login_reward.prestige_tokens)
            self._notices.emit(
                NoticeCategory.QUESTS,
                f"Login streak {result.login_reward.streak}",
                streak=result.login_reward.streak,
                gold=result.login_reward.gold,
            )
        if result.regenerated:
            self._refresh_materials()
        return result

    def reroll_daily(self, quest_id: str) -> QuestProgress:
        """Replace a daily quest with a new one.

        Raises:
            RerollLimitError: If no rerolls remain today.
        """
        progress = self._daily.reroll(quest_id)
        self._refresh_materials()
        return progress

    # =========================================================================
    # Session and Timers
    # =========================================================================

    def start_session(self) -> OfflineProgress | None:
        """Begin a play session and schedule its periodic tasks.

        Time since the previous session ended is turned into offline
        progress first.

        Returns:
            The offline earnings granted, if any.
        """
        offline = self._apply_offline_progress(self._analytics.take_time_away())
        self._analytics.start_session()
        bind_context(session=self._analytics.record.sessions_count)
        self.refresh_daily()

        now = self._clock()
        session = self._settings.session
        self._scheduler.schedule(AUTO_ATTACK_TASK, session.auto_tick_interval, self.auto_attack, now=now)
        self._scheduler.schedule(
            ANALYTICS_SAMPLE_TASK,
            session.analytics_sample_interval,
            self._sample_analytics,
            now=now,
        )
        self._notices.emit(NoticeCategory.SESSION, "Session started")
        return offline

    def _apply_offline_progress(self, seconds_away: float) -> OfflineProgress | None:
        session = self._settings.session
        if not session.offline_progress_enabled:
            return None
        character = self._state.character
        progress = compute_offline_progress(
            seconds_away,
            zone=self._catalog.zone(self._zones.current_zone),
            player_level=character.level,
            intelligence_modifier=character.total_attributes().modifier(Ability.INT),
            offline_multiplier=self._meta.bonuses().offline_progress,
            min_seconds=session.offline_min_seconds,
            max_seconds=session.offline_max_hours * 3600,
        )
        if progress is None:
            return None

        self._ledger.credit(GOLD_RESOURCE_ID, progress.gold)
        self._analytics.record_gold_earned(progress.gold)
        for material_id, amount in progress.materials.items():
            self._ledger.credit(material_id, amount)
            self.dispatch(MaterialGathered(material_id=material_id, amount=amount))
        self._notices.emit(
            NoticeCategory.SESSION,
            "Offline progress collected",
            seconds=round(progress.seconds_counted),
            gold=progress.gold,
        )
        return progress

    def end_session(self) -> float:
        """Cancel the session's tasks and fold its duration into the metrics.

        Returns:
            Seconds the session lasted, 0 if none was active.
        """
        self._scheduler.cancel(AUTO_ATTACK_TASK)
        self._scheduler.cancel(ANALYTICS_SAMPLE_TASK)
        if not self._analytics.session_active:
            return 0.0
        elapsed = self._analytics.end_session()
        self._notices.emit(NoticeCategory.SESSION, "Session ended", seconds=round(elapsed, 2))
        unbind_context("session")
        return elapsed

    def tick(self, now: float | None = None) -> int:
        """Run every due periodic task.

        Returns:
            Number of tasks that ran.
        """
        return self._scheduler.run_pending(self._clock() if now is None else now)

    def _sample_analytics(self, elapsed: float) -> None:
        stats = self._analytics.session_stats()
        logger.debug(
            "Session sample",
            minutes=round(stats.current_session_minutes, 2),
            gold_per_minute=round(stats.gold_per_minute, 2),
            zones_per_minute=round(stats.zones_per_minute, 3),
        )

    def close(self) -> None:
        """End the session and cancel every remaining task."""
        self.end_session()
        self._scheduler.cancel_all()

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_record(self) -> dict[str, Any]:
        """JSON-compatible snapshot of the durable state."""
        return self._state.model_dump(mode="json")

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        catalog: ContentCatalog,
        **kwargs: Any,
    ) -> Game:
        """Resume a game from a snapshot produced by to_record()."""
        return cls(catalog, state=GameState.model_validate(record), **kwargs)


__all__ = [
    "AUTO_ATTACK_TASK",
    "ANALYTICS_SAMPLE_TASK",
    "Encounter",
    "KillResult",
    "ZoneMultipliers",
    "PrestigeResult",
    "Game",
]
