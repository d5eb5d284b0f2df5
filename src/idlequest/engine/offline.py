"""Offline progress.

Time spent away earns a share of the online rate: gold scales with the
current zone and hero level, materials follow the current zone's clear
rewards. The counted time is capped, and the share grows with the
offline meta upgrade and a positive intelligence modifier.
"""

from __future__ import annotations

import math

from idlequest.core.constants import (
    OFFLINE_BASE_RATE,
    OFFLINE_GOLD_PER_LEVEL,
    OFFLINE_GOLD_PER_ZONE,
    OFFLINE_INT_BONUS_CAP,
    OFFLINE_INT_BONUS_PER_MODIFIER,
    OFFLINE_MATERIAL_RATE,
)
from idlequest.models.meta import OfflineProgress
from idlequest.models.zones import ZoneDefinition


def offline_efficiency(offline_multiplier: float, intelligence_modifier: int) -> tuple[float, float]:
    """Share of online earnings granted while away.

    Returns:
        The efficiency and the intelligence bonus it includes.
    """
    bonus = min(OFFLINE_INT_BONUS_CAP, max(0, intelligence_modifier) * OFFLINE_INT_BONUS_PER_MODIFIER)
    return OFFLINE_BASE_RATE * offline_multiplier * (1 + bonus), bonus


def compute_offline_progress(
    seconds_away: float,
    *,
    zone: ZoneDefinition,
    player_level: int,
    intelligence_modifier: int = 0,
    offline_multiplier: float = 0.5,
    min_seconds: float = 0.0,
    max_seconds: float | None = None,
) -> OfflineProgress | None:
    """Compute what a hero earned while away.

    Args:
        seconds_away: Seconds since the last session ended.
        zone: The zone the hero was left in.
        player_level: Hero level.
        intelligence_modifier: Intelligence modifier including gear.
        offline_multiplier: Offline multiplier from meta upgrades.
        min_seconds: Absences shorter than this earn nothing.
        max_seconds: Cap on the rewarded time, if any.

    Returns:
        The earnings, or None if the absence was too short.
    """
    if seconds_away <= 0 or seconds_away < min_seconds:
        return None

    counted = seconds_away if max_seconds is None else min(seconds_away, max_seconds)
    efficiency, bonus = offline_efficiency(offline_multiplier, intelligence_modifier)
    gold_rate = max(1, zone.id * OFFLINE_GOLD_PER_ZONE + player_level * OFFLINE_GOLD_PER_LEVEL)

    materials: dict[str, int] = {}
    for material_id, quantity in zone.rewards.materials.items():
        amount = math.floor(counted * efficiency * OFFLINE_MATERIAL_RATE * quantity)
        if amount > 0:
            materials[material_id] = amount

    return OfflineProgress(
        seconds_away=seconds_away,
        seconds_counted=counted,
        efficiency=efficiency,
        intelligence_bonus=bonus,
        gold=math.floor(gold_rate * efficiency * counted),
        materials=materials,
    )


__all__ = [
    "offline_efficiency",
    "compute_offline_progress",
]
