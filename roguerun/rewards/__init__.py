"""Reward generation: rarity, sampling, generators and the gacha catalogue."""

from .gacha import GachaCatalog, GachaItem, ItemEffect, ItemRarity
from .generator import (
    exclusions_for,
    generate_aura,
    generate_rare_reward,
    generate_rewards,
    generate_shrine,
    generate_stat_boost,
    generate_synergy,
    generate_weapon_mod,
    generate_weapon_upgrade,
)
from .models import ExclusionSet, Reward, RewardCategory
from .rarity import Rarity, determine_rarity, rarity_multiplier

__all__ = [
    "ExclusionSet",
    "GachaCatalog",
    "GachaItem",
    "ItemEffect",
    "ItemRarity",
    "Rarity",
    "Reward",
    "RewardCategory",
    "determine_rarity",
    "exclusions_for",
    "generate_aura",
    "generate_rare_reward",
    "generate_rewards",
    "generate_shrine",
    "generate_stat_boost",
    "generate_synergy",
    "generate_weapon_mod",
    "generate_weapon_upgrade",
    "rarity_multiplier",
]
