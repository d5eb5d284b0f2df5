"""Application-wide constants for IdleQuest.

Combat formula coefficients and fixed rules values. Anything a designer
would want to rebalance per deployment belongs in GameSettings instead.
"""

from __future__ import annotations

# =============================================================================
# Ledger
# =============================================================================

GOLD_RESOURCE_ID = "gold"
"""Resource id that addresses the gold balance in credit/debit calls."""

# =============================================================================
# Ability Scores
# =============================================================================

ABILITY_SCORE_BASELINE = 10
"""Score that yields a +0 modifier."""

DEFAULT_ABILITY_SCORE = 10
"""Starting value for every attribute of a new hero."""

# =============================================================================
# Click Damage
# =============================================================================

CLICK_BASE_DAMAGE = 5
"""Flat click damage before any scaling."""

CLICK_DAMAGE_PER_LEVEL = 2
"""Click damage gained per hero level."""

CLICK_STR_SCALING_PER_LEVEL = 0.5
"""Extra weight of the strength modifier per hero level."""

# =============================================================================
# Auto Damage
# =============================================================================

AUTO_BASE_DAMAGE = 3
"""Flat auto damage before any scaling."""

AUTO_DAMAGE_PER_LEVEL = 1
"""Auto damage gained per hero level."""

AUTO_MENTAL_BASE_WEIGHT = 0.5
"""Base weight of the intelligence and wisdom modifiers."""

AUTO_MENTAL_WEIGHT_PER_LEVEL = 0.3
"""Extra weight of the mental modifiers per hero level."""

DEX_SPEED_PER_MODIFIER = 0.2
"""Auto attacks per second granted per positive dexterity modifier point."""

MINIMUM_DAMAGE = 1
"""Damage never drops below this value."""

# =============================================================================
# Monsters
# =============================================================================

MONSTER_HP_BASE = 10
"""Hit point scale of a zone 1 monster."""

MONSTER_HP_GROWTH = 1.55
"""Per-zone exponential growth of monster hit points."""

GOLD_PER_KILL_GROWTH = 1.6
"""Per-zone exponential growth of gold drops."""

XP_PER_KILL_BASE = 25
"""Experience for a zone 1 kill."""

XP_PER_KILL_GROWTH = 1.3
"""Per-zone exponential growth of kill experience."""

BOSS_HP_MULTIPLIER = 10
"""Bosses have this many times a regular monster's hit points."""

BOSS_GOLD_MULTIPLIER = 10
"""Bosses drop this many times a regular monster's gold."""

BOSS_XP_MULTIPLIER = 5
"""Bosses grant this many times a regular monster's experience."""

# =============================================================================
# Quests
# =============================================================================

DAILY_DIFFICULTY_MIN = 0.5
"""Lower bound of the random daily quest difficulty factor."""

DAILY_DIFFICULTY_MAX = 2.0
"""Upper bound of the random daily quest difficulty factor."""

# =============================================================================
# Meta Upgrades and Offline Progress
# =============================================================================

PRESTIGE_TOKEN_RESOURCE_ID = "prestige_tokens"
"""Resource id reported when a token balance is short."""

DEFAULT_OFFLINE_MULTIPLIER = 0.5
"""Offline progress multiplier when no meta upgrade provides one."""

OFFLINE_BASE_RATE = 0.25
"""Share of online earnings produced while away."""

OFFLINE_GOLD_PER_ZONE = 5
"""Offline gold per second contributed by each zone id step."""

OFFLINE_GOLD_PER_LEVEL = 2
"""Offline gold per second contributed by each hero level."""

OFFLINE_MATERIAL_RATE = 0.01
"""Share of a zone's clear reward produced per offline second."""

OFFLINE_INT_BONUS_PER_MODIFIER = 0.1
"""Offline efficiency bonus per point of positive intelligence modifier."""

OFFLINE_INT_BONUS_CAP = 2.0
"""Maximum offline efficiency bonus from intelligence."""
