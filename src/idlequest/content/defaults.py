"""Bundled default content.

Everything here is data. Cost curves are generated from a base price and
a growth factor per level; the engine only sees the resulting tables.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any

from idlequest.models.content import ContentCatalog


def cost_curve(
    levels: int,
    gold_base: float,
    gold_growth: float,
    materials: dict[str, tuple[float, float, int]] | None = None,
) -> list[dict[str, Any]]:
    """Generate an upgrade cost table.

    Args:
        levels: Number of upgrade steps.
        gold_base: Gold price of the first step.
        gold_growth: Gold growth factor per step.
        materials: Per material ``(base, growth, first_step)``; the material
            is required from ``first_step`` on.

    Returns:
        Cost records, one per step.
    """
    table = []
    for step in range(levels):
        entry: dict[str, Any] = {"gold": math.floor(gold_base * gold_growth**step)}
        required = {
            material_id: math.floor(base * growth ** (step - first))
            for material_id, (base, growth, first) in (materials or {}).items()
            if step >= first
        }
        if required:
            entry["materials"] = required
        table.append(entry)
    return table


BUILDINGS: list[dict[str, Any]] = [
    {
        "id": "town_hall",
        "name": "Town Hall",
        "description": "The heart of the settlement.",
        "max_level": 20,
        "costs": cost_curve(20, 100, 2.0, {"wood": (8, 1.7, 1), "stone": (3, 1.6, 4)}),
        "effects": [
            {"type": "gold_bonus", "operation": "add", "value": 0.02},
            {"type": "xp_bonus", "operation": "add", "value": 0.02},
        ],
    },
    {
        "id": "lumber_mill",
        "name": "Lumber Mill",
        "description": "Processes wood and speeds up gathering.",
        "max_level": 15,
        "costs": cost_curve(15, 50, 1.9, {"wood": (4, 1.6, 1)}),
        "effects": [{"type": "material_bonus", "operation": "multiply", "value": 1.1}],
        "synergies": [
            {
                "requires_building": "marketplace",
                "minimum_level": 1,
                "effect": {"type": "quest_efficiency", "operation": "multiply", "value": 1.15},
            }
        ],
        "unlock": {"buildings": {"town_hall": 1}},
    },
    {
        "id": "barracks",
        "name": "Barracks",
        "description": "Trains soldiers who fight alongside the hero.",
        "max_level": 18,
        "costs": cost_curve(18, 150, 2.1, {"wood": (3, 1.5, 0), "iron": (5, 1.6, 2)}),
        "effects": [
            {"type": "auto_clicker", "operation": "add", "value": 0.5},
            {"type": "auto_speed", "operation": "add", "value": 0.1},
            {"type": "auto_damage", "operation": "multiply", "value": 1.05},
        ],
        "unlock": {"buildings": {"town_hall": 1}},
    },
    {
        "id": "blacksmith",
        "name": "Blacksmith",
        "description": "Forges sharper blades.",
        "max_level": 20,
        "costs": cost_curve(20, 200, 2.0, {"iron": (3, 1.6, 0), "wood": (2, 1.5, 0)}),
        "effects": [
            {"type": "click_damage", "operation": "add", "value": 2},
            {"type": "click_damage", "operation": "multiply", "value": 1.03},
        ],
        "synergies": [
            {
                "requires_building": "barracks",
                "minimum_level": 3,
                "effect": {"type": "crit_chance", "operation": "add", "value": 0.01},
            }
        ],
        "unlock": {"buildings": {"town_hall": 2, "lumber_mill": 2}},
    },
    {
        "id": "marketplace",
        "name": "Marketplace",
        "description": "Traders pay more for monster spoils.",
        "max_level": 15,
        "costs": cost_curve(15, 250, 2.0, {"wood": (5, 1.5, 0), "stone": (2, 1.6, 1)}),
        "effects": [{"type": "gold_bonus", "operation": "multiply", "value": 1.08}],
        "unlock": {"player_level": 5, "buildings": {"town_hall": 2}},
    },
]


ZONES: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Forest Outskirts",
        "monsters": ["slime", "wolf", "goblin"],
        "boss": "forest_guardian",
        "rewards": {"materials": {"wood": 5}},
    },
    {
        "id": 2,
        "name": "Dark Woods",
        "monsters": ["shadow_bat", "dire_wolf"],
        "boss": "shadow_wolf",
        "difficulty": 1.2,
        "rewards": {"gold_multiplier": 1.1, "materials": {"wood": 8, "stone": 2}},
    },
    {
        "id": 3,
        "name": "Mountain Base",
        "monsters": ["rock_troll", "harpy"],
        "boss": "stone_golem",
        "difficulty": 1.4,
        "rewards": {"gold_multiplier": 1.2, "materials": {"stone": 6, "iron": 3}},
    },
    {
        "id": 4,
        "name": "Crystal Caves",
        "monsters": ["crystal_bat", "cave_lurker"],
        "boss": "crystal_spider",
        "difficulty": 1.6,
        "rewards": {"gold_multiplier": 1.3, "materials": {"iron": 6, "crystal": 2}},
        "unlock_requirement": {"type": "level", "value": 10},
    },
    {
        "id": 5,
        "name": "Volcanic Fields",
        "monsters": ["fire_imp", "magma_hound"],
        "boss": "flame_titan",
        "difficulty": 1.8,
        "rewards": {"gold_multiplier": 1.5, "materials": {"iron": 8, "crystal": 4}},
        "unlock_requirement": {"type": "level", "value": 15},
    },
    {
        "id": 6,
        "name": "Void Nexus",
        "monsters_to_defeat": 15,
        "monsters": ["void_walker", "null_shade"],
        "boss": "void_emperor",
        "difficulty": 2.5,
        "rewards": {"gold_multiplier": 2.0, "materials": {"crystal": 10}},
        "unlock_requirement": {"type": "level", "value": 20},
        "is_prestige": True,
    },
]


QUESTS: list[dict[str, Any]] = [
    {
        "id": "story_first_steps",
        "name": "First Steps",
        "description": "Clear the goblins from the forest edge.",
        "category": "story",
        "objectives": [
            {"id": "kill_goblins", "kind": "kill_monster", "target": 5},
        ],
        "reward": {"gold": 100, "xp": 50},
    },
    {
        "id": "story_guardian",
        "name": "The Forest Guardian",
        "category": "story",
        "objectives": [
            {"id": "defeat_guardian", "kind": "defeat_boss", "boss_zone": 1},
            {"id": "gather_wood", "kind": "gather_material", "material_id": "wood", "target": 10},
        ],
        "reward": {"gold": 250, "xp": 120, "materials": {"stone": 5}},
    },
    {
        "id": "story_settlement",
        "name": "A Place to Call Home",
        "category": "story",
        "objectives": [
            {"id": "build_hall", "kind": "upgrade_building", "building_id": "town_hall", "target": 2},
        ],
        "reward": {"gold": 400, "xp": 200, "stat_points": 1},
    },
    {
        "id": "achievement_slayer",
        "name": "Slayer",
        "category": "achievement",
        "objectives": [{"id": "kill_100", "kind": "kill_monster", "target": 100}],
        "reward": {"gold": 500},
    },
    {
        "id": "achievement_veteran",
        "name": "Veteran",
        "category": "achievement",
        "objectives": [{"id": "level_10", "kind": "reach_level", "target": 10}],
        "reward": {"gold": 1000, "prestige_tokens": 1},
    },
    {
        "id": "achievement_iron_hoard",
        "name": "Iron Hoard",
        "category": "achievement",
        "objectives": [
            {"id": "hold_iron", "kind": "gather_material", "material_id": "iron", "target": 50},
        ],
        "reward": {"gold": 750},
    },
]


DAILY_TEMPLATES: list[dict[str, Any]] = [
    {
        "id": "daily_hunt",
        "name": "Daily Hunt",
        "objective": {"id": "hunt", "kind": "kill_monster", "target": 25},
        "reward": {"gold": 200, "xp": 100},
    },
    {
        "id": "daily_boss",
        "name": "Boss Bounty",
        "objective": {"id": "bounty", "kind": "defeat_boss", "target": 1},
        "reward": {"gold": 300, "xp": 150},
    },
    {
        "id": "daily_lumber",
        "name": "Lumber Run",
        "objective": {"id": "lumber", "kind": "gather_material", "material_id": "wood", "target": 20},
        "reward": {"gold": 150, "materials": {"stone": 3}},
    },
    {
        "id": "daily_builder",
        "name": "Town Works",
        "objective": {"id": "works", "kind": "upgrade_building", "target": 1},
        "reward": {"gold": 250, "materials": {"wood": 10}},
    },
    {
        "id": "daily_trophies",
        "name": "Trophy Hunter",
        "objective": {"id": "trophies", "kind": "collect_item", "target": 3},
        "reward": {"gold": 180, "xp": 80},
    },
]


META_UPGRADES: list[dict[str, Any]] = [
    {
        "id": "eternal_strength",
        "name": "Eternal Strength",
        "description": "Increases all damage permanently.",
        "effect": "global_damage",
        "max_level": 50,
        "base_cost": 10,
        "cost_multiplier": 1.5,
        "value_per_level": 0.2,
    },
    {
        "id": "temporal_acceleration",
        "name": "Temporal Acceleration",
        "description": "Increases auto attack speed permanently.",
        "effect": "auto_speed",
        "max_level": 25,
        "base_cost": 15,
        "cost_multiplier": 1.75,
        "value_per_level": 0.15,
    },
    {
        "id": "diplomatic_mastery",
        "name": "Diplomatic Mastery",
        "description": "Increases quest rewards.",
        "effect": "quest_efficiency",
        "max_level": 30,
        "base_cost": 20,
        "cost_multiplier": 1.6,
        "value_per_level": 0.25,
    },
    {
        "id": "mystic_presence",
        "name": "Mystic Presence",
        "description": "Improves progress made while away.",
        "effect": "offline_progress",
        "max_level": 20,
        "base_cost": 25,
        "cost_multiplier": 2.0,
        "base_value": 0.5,
        "value_per_level": 0.05,
    },
    {
        "id": "cosmic_insight",
        "name": "Cosmic Insight",
        "description": "Increases prestige token gain.",
        "effect": "prestige_tokens",
        "max_level": 15,
        "base_cost": 30,
        "cost_multiplier": 2.5,
        "value_per_level": 0.3,
    },
]


@lru_cache
def default_catalog() -> ContentCatalog:
    """Build the bundled content catalog.

    Returns:
        The validated catalog. The same instance is returned on every call.
    """
    return ContentCatalog.model_validate(
        {
            "buildings": BUILDINGS,
            "zones": ZONES,
            "quests": QUESTS,
            "daily_templates": DAILY_TEMPLATES,
            "meta_upgrades": META_UPGRADES,
        }
    )


__all__ = [
    "cost_curve",
    "BUILDINGS",
    "ZONES",
    "QUESTS",
    "DAILY_TEMPLATES",
    "META_UPGRADES",
    "default_catalog",
]
