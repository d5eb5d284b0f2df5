"""Progression engine for IdleQuest.

Each component owns one part of the GameState aggregate and exposes
pure read accessors next to its transactions. The Game facade wires them
together.

Submodules:
    combat: Derived combat values and monster curves
    economy: Atomic credit and debit over the ledger
    town: Building levels, upgrade costs and building effects
    zones: Zone unlocks, clear counters, multipliers and prestige
    objectives: The objective tracking engine
    quests: Completion and claim state machine, daily quests
    meta: Meta upgrades bought with prestige tokens
    offline: Offline progress earned while away
    analytics: Session metrics and per-minute rates
    scheduler: Fixed-interval polled tasks
    notices: Outbound progression notices (blinker)
    journal: Bounded log of progression notices
    game: The Game facade

Example:
    >>> from idlequest.content import default_catalog
    >>> from idlequest.engine import Game
    >>>
    >>> game = Game(default_catalog())
    >>> game.start_session()
    >>> game.click()
    >>> game.tick()
    >>> game.close()
"""

from __future__ import annotations

# =============================================================================
# Components
# =============================================================================
from idlequest.engine.analytics import SessionAnalytics
from idlequest.engine.combat import (
    CombatProfile,
    compute_auto_aps,
    compute_auto_damage,
    compute_click_damage,
    compute_combat_profile,
    gold_per_kill,
    monster_hp,
    xp_per_kill,
)
from idlequest.engine.economy import EconomyLedger, LedgerView
from idlequest.engine.meta import MetaUpgrades
from idlequest.engine.objectives import ObjectiveTracker, update_objective
from idlequest.engine.offline import compute_offline_progress, offline_efficiency
from idlequest.engine.quests import DailyQuestBoard, DailyRefresh, LoginReward, QuestBook
from idlequest.engine.town import TownRegistry, aggregate_building_effects
from idlequest.engine.zones import PrestigePlan, ZoneProgression

# =============================================================================
# Timers and Notices
# =============================================================================
from idlequest.engine.journal import ProgressionJournal
from idlequest.engine.notices import NoticeBus, ProgressionNotice
from idlequest.engine.scheduler import PeriodicTask, TaskScheduler

# =============================================================================
# Facade
# =============================================================================
from idlequest.engine.game import (
    Encounter,
    Game,
    KillResult,
    PrestigeResult,
    ZoneMultipliers,
)


__all__ = [
    # Components
    "SessionAnalytics",
    "CombatProfile",
    "compute_auto_aps",
    "compute_auto_damage",
    "compute_click_damage",
    "compute_combat_profile",
    "gold_per_kill",
    "monster_hp",
    "xp_per_kill",
    "EconomyLedger",
    "LedgerView",
    "MetaUpgrades",
    "compute_offline_progress",
    "offline_efficiency",
    "ObjectiveTracker",
    "update_objective",
    "DailyQuestBoard",
    "DailyRefresh",
    "LoginReward",
    "QuestBook",
    "TownRegistry",
    "aggregate_building_effects",
    "PrestigePlan",
    "ZoneProgression",
    # Timers and Notices
    "ProgressionJournal",
    "NoticeBus",
    "ProgressionNotice",
    "PeriodicTask",
    "TaskScheduler",
    # Facade
    "Encounter",
    "Game",
    "KillResult",
    "PrestigeResult",
    "ZoneMultipliers",
]
