"""Reward generators.

Every generator follows the same recipe: draw a rarity from luck, draw a
sub-kind, scale a level-dependent base value by the rarity multiplier (and
usually by luck), then describe the result. Generators never fail; when an
exclusion cannot be honoured within the retry budget they fall back to a fixed
sub-kind.
"""
from __future__ import annotations

import random
from dataclasses import replace
from typing import Dict, List, Optional, Set, Tuple

from roguerun.engine.logger import ChannelLogger
from roguerun.engine.settings import DEFAULT_BALANCE, BalanceSettings
from roguerun.engine.telemetry import record_exclusion_fallback, record_reward
from roguerun.progression.stats import StatKey
from roguerun.rewards import formatting
from roguerun.rewards.models import ExclusionSet, Reward, RewardCategory, VAMPIRE_AURA, next_reward_id
from roguerun.rewards.rarity import Rarity, determine_rarity, luck_scaling, rarity_multiplier
from roguerun.rewards.sampling import MAX_EXCLUSION_TRIES, WeightedTable, pick_uniform, sample_excluding

STAT_TABLE: WeightedTable[StatKey] = WeightedTable(
    [
        (0.12, StatKey.DIFFICULTY),
        (0.32, StatKey.DAMAGE),
        (0.50, StatKey.CRIT_CHANCE),
        (0.60, StatKey.CRIT_DAMAGE),
        (0.70, StatKey.HEALTH),
        (0.78, StatKey.ARMOR),
        (0.85, StatKey.SPEED),
        (0.92, StatKey.LUCK),
        (0.97, StatKey.REGENERATION),
        (0.992, StatKey.DROP_RATE),
        (0.994, StatKey.PICKUP_RANGE),
        (0.997, StatKey.JUMP_HEIGHT),
        (1.0, StatKey.XP_MULTIPLIER),
    ]
)

# Regeneration excluded: luck widens to 0.97 and regeneration moves to
# 0.97-0.995, which shadows the drop rate and pickup range slices.
STAT_TABLE_NO_REGENERATION: WeightedTable[StatKey] = WeightedTable(
    [
        (0.12, StatKey.DIFFICULTY),
        (0.32, StatKey.DAMAGE),
        (0.50, StatKey.CRIT_CHANCE),
        (0.60, StatKey.CRIT_DAMAGE),
        (0.70, StatKey.HEALTH),
        (0.78, StatKey.ARMOR),
        (0.85, StatKey.SPEED),
        (0.97, StatKey.LUCK),
        (0.995, StatKey.REGENERATION),
        (0.997, StatKey.JUMP_HEIGHT),
        (1.0, StatKey.XP_MULTIPLIER),
    ]
)

STAT_FALLBACK = StatKey.DAMAGE

AURA_TABLE: WeightedTable[str] = WeightedTable(
    [
        (0.25, VAMPIRE_AURA),
        (0.35, "Thorns Aura"),
        (0.45, "Regeneration Aura"),
        (0.55, "Fire Aura"),
        (0.65, "Ice Aura"),
        (0.75, "Lightning Aura"),
        (0.85, "Poison Aura"),
        (1.0, "Shield Aura"),
    ]
)

# Vampire's quarter goes to Shield Aura, the other auras keep 10% each.
AURA_TABLE_NO_VAMPIRE: WeightedTable[str] = WeightedTable(
    [
        (0.10, "Thorns Aura"),
        (0.20, "Regeneration Aura"),
        (0.30, "Fire Aura"),
        (0.40, "Ice Aura"),
        (0.50, "Lightning Aura"),
        (0.60, "Poison Aura"),
        (1.0, "Shield Aura"),
    ]
)

AURA_FALLBACK = "Shield Aura"
AURA_VALUE_CAP = 10.0

WEAPON_MODS: Tuple[str, ...] = (
    "Piercing Shot",
    "Explosive Rounds",
    "Chain Lightning",
    "Frost Nova",
    "Rapid Fire",
    "Homing Projectiles",
    "Multi-Shot",
    "Burn Effect",
)

SHRINES: Tuple[str, ...] = tuple(formatting.SHRINE_EFFECTS)

SYNERGIES: Tuple[str, ...] = (
    "Critical Mass",
    "Elemental Fusion",
    "Rapid Escalation",
    "Chain Reaction",
    "Berserker Mode",
    "Glass Cannon",
    "Immortal Build",
    "Lucky Streak",
)

UPGRADE_LEVELS: Dict[Rarity, int] = {
    Rarity.COMMON: 1,
    Rarity.RARE: 1,
    Rarity.EPIC: 2,
    Rarity.LEGENDARY: 3,
}

SHRINE_BASE_COOLDOWN = 30.0
SHRINE_MIN_COOLDOWN = 10.0

# Menu category roll; shrines are only handed out by physical shrines.
MENU_TABLE: WeightedTable[RewardCategory] = WeightedTable(
    [
        (0.22, RewardCategory.WEAPON_UPGRADE),
        (0.42, RewardCategory.WEAPON_MOD),
        (0.62, RewardCategory.AURA),
        (0.72, RewardCategory.SYNERGY),
        (1.0, RewardCategory.STAT_BOOST),
    ]
)

MENU_ATTEMPTS = 30
MENU_FILL_ATTEMPTS = 100
RARE_REWARD_BONUS = 1.5


_STAT_WEIGHTS: Dict[StatKey, float] = {
    StatKey.HEALTH: 2.0,
    StatKey.DAMAGE: 0.5,
    StatKey.SPEED: 0.1,
    StatKey.ARMOR: 1.0,
    StatKey.CRIT_CHANCE: 0.05,
    StatKey.CRIT_DAMAGE: 0.2,
    StatKey.LUCK: 0.15,
    StatKey.XP_MULTIPLIER: 0.1,
    StatKey.DIFFICULTY: 0.1,
}


def stat_base_value(stat: StatKey, level: int) -> float:
    if stat is StatKey.REGENERATION:
        return 1.0 + level * 0.15
    if stat is StatKey.DROP_RATE:
        return 0.02 + level * 0.005
    if stat is StatKey.PICKUP_RANGE:
        return 0.5 + level * 0.1
    if stat is StatKey.JUMP_HEIGHT:
        return 0.3 + level * 0.05
    level_scale = 1.0 + level * 0.15
    return _STAT_WEIGHTS.get(stat, 1.0) * level_scale


def _fallback_hook(kind: str, logger: Optional[ChannelLogger]):
    def _hook() -> None:
        record_exclusion_fallback()
        if logger:
            logger.debug("Exclusion retries exhausted, falling back to %s", kind)

    return _hook


def _finish(reward: Reward) -> Reward:
    record_reward(reward.rarity.value, reward.category.value)
    return reward


def _build_stat_boost(
    player_level: int,
    luck: float,
    exclusions: ExclusionSet,
    rng,
    logger: Optional[ChannelLogger],
) -> Reward:
    rng = rng or random
    rarity = determine_rarity(luck, rng)
    table = STAT_TABLE_NO_REGENERATION if exclusions.regeneration else STAT_TABLE
    stat = sample_excluding(
        lambda: table.draw(rng),
        StatKey.REGENERATION if exclusions.regeneration else None,
        MAX_EXCLUSION_TRIES,
        STAT_FALLBACK,
        _fallback_hook(STAT_FALLBACK.value, logger),
    )
    value = stat_base_value(stat, player_level) * rarity_multiplier(rarity) * luck_scaling(luck)
    return Reward(
        id=next_reward_id(stat.value),
        name=f"{stat.label} Boost",
        description=formatting.describe_stat_boost(stat, value),
        rarity=rarity,
        category=RewardCategory.STAT_BOOST,
        value=value,
        stat=stat,
    )


def generate_stat_boost(
    player_level: int,
    luck: float,
    exclusions: ExclusionSet = ExclusionSet(),
    rng=None,
    logger: Optional[ChannelLogger] = None,
) -> Reward:
    return _finish(_build_stat_boost(player_level, luck, exclusions, rng, logger))


def generate_weapon_upgrade(
    player_level: int,
    luck: float,
    exclusions: ExclusionSet = ExclusionSet(),
    rng=None,
    logger: Optional[ChannelLogger] = None,
) -> Reward:
    rarity = determine_rarity(luck, rng or random)
    levels = UPGRADE_LEVELS[rarity]
    return _finish(
        Reward(
            id=next_reward_id("weapon_upgrade"),
            name="Weapon Enhancement",
            description=formatting.describe_weapon_upgrade(levels),
            rarity=rarity,
            category=RewardCategory.WEAPON_UPGRADE,
            value=float(levels),
        )
    )


def generate_weapon_mod(
    player_level: int,
    luck: float,
    exclusions: ExclusionSet = ExclusionSet(),
    rng=None,
    logger: Optional[ChannelLogger] = None,
) -> Reward:
    rng = rng or random
    rarity = determine_rarity(luck, rng)
    name = pick_uniform(WEAPON_MODS, rng)
    value = (1.0 + player_level * 0.1) * rarity_multiplier(rarity) * luck
    return _finish(
        Reward(
            id=next_reward_id("mod"),
            name=name,
            description=formatting.describe_weapon_mod(name),
            rarity=rarity,
            category=RewardCategory.WEAPON_MOD,
            value=value,
        )
    )


def generate_aura(
    player_level: int,
    luck: float,
    exclusions: ExclusionSet = ExclusionSet(),
    rng=None,
    logger: Optional[ChannelLogger] = None,
) -> Reward:
    rng = rng or random
    rarity = determine_rarity(luck, rng)
    table = AURA_TABLE_NO_VAMPIRE if exclusions.vampire_aura else AURA_TABLE
    name = sample_excluding(
        lambda: table.draw(rng),
        VAMPIRE_AURA if exclusions.vampire_aura else None,
        MAX_EXCLUSION_TRIES,
        AURA_FALLBACK,
        _fallback_hook(AURA_FALLBACK, logger),
    )
    value = (0.5 + player_level * 0.05) * rarity_multiplier(rarity) * luck_scaling(luck)
    value = min(value, AURA_VALUE_CAP)
    return _finish(
        Reward(
            id=next_reward_id("aura"),
            name=name,
            description=formatting.describe_aura(name, value),
            rarity=rarity,
            category=RewardCategory.AURA,
            value=value,
        )
    )


def generate_shrine(
    player_level: int,
    luck: float,
    exclusions: ExclusionSet = ExclusionSet(),
    rng=None,
    logger: Optional[ChannelLogger] = None,
) -> Reward:
    """Shrine buff; ``value`` is its cooldown in seconds, lower with rarity."""

    rng = rng or random
    rarity = determine_rarity(luck, rng)
    name = pick_uniform(SHRINES, rng)
    cooldown = max(SHRINE_MIN_COOLDOWN, (SHRINE_BASE_COOLDOWN - player_level * 0.5) / rarity_multiplier(rarity))
    return _finish(
        Reward(
            id=next_reward_id("shrine"),
            name=name,
            description=formatting.describe_shrine(name, cooldown),
            rarity=rarity,
            category=RewardCategory.SHRINE,
            value=cooldown,
        )
    )


def generate_synergy(
    player_level: int,
    luck: float,
    exclusions: ExclusionSet = ExclusionSet(),
    rng=None,
    logger: Optional[ChannelLogger] = None,
) -> Reward:
    rng = rng or random
    rarity = determine_rarity(luck, rng)
    name = pick_uniform(SYNERGIES, rng)
    value = (1.5 + player_level * 0.1) * rarity_multiplier(rarity) * luck
    return _finish(
        Reward(
            id=next_reward_id("synergy"),
            name=name,
            description=formatting.describe_synergy(name, value),
            rarity=rarity,
            category=RewardCategory.SYNERGY,
            value=value,
        )
    )


GENERATORS = {
    RewardCategory.STAT_BOOST: generate_stat_boost,
    RewardCategory.WEAPON_UPGRADE: generate_weapon_upgrade,
    RewardCategory.WEAPON_MOD: generate_weapon_mod,
    RewardCategory.AURA: generate_aura,
    RewardCategory.SHRINE: generate_shrine,
    RewardCategory.SYNERGY: generate_synergy,
}


def exclusions_for(context, balance: BalanceSettings = DEFAULT_BALANCE) -> ExclusionSet:
    """Exclusions implied by a run's current build.

    ``context`` may be ``None``, an :class:`ExclusionSet`, or anything exposing
    ``ledger`` and ``collected_rewards`` (a Run or TeamRun).
    """

    if context is None:
        return ExclusionSet()
    if isinstance(context, ExclusionSet):
        return context
    regeneration = context.ledger.get(StatKey.REGENERATION)
    lifesteal = sum(reward.lifesteal_percent for reward in context.collected_rewards)
    return ExclusionSet(
        regeneration=regeneration >= balance.regeneration_cap,
        vampire_aura=lifesteal >= balance.lifesteal_cap,
    )


def uniqueness_key(reward: Reward) -> str:
    if reward.category is RewardCategory.WEAPON_UPGRADE:
        return "weapon_upgrade"
    if reward.category is RewardCategory.STAT_BOOST:
        stat = reward.target_stat
        return f"stat_{stat.value if stat else reward.name}"
    return f"{reward.category.value}_{reward.name}"


def generate_rewards(
    count: int,
    level: int,
    luck: float,
    context=None,
    *,
    rng=None,
    balance: BalanceSettings = DEFAULT_BALANCE,
    logger: Optional[ChannelLogger] = None,
) -> List[Reward]:
    """Build a selection menu of ``count`` distinct rewards."""

    if count <= 0:
        return []
    rng = rng or random
    exclusions = exclusions_for(context, balance)
    rewards: List[Reward] = []
    used: Set[str] = set()

    attempts = MENU_ATTEMPTS
    while len(rewards) < count and attempts > 0:
        attempts -= 1
        category = MENU_TABLE.draw(rng)
        reward = GENERATORS[category](level, luck, exclusions, rng, logger)
        key = uniqueness_key(reward)
        if key not in used:
            rewards.append(reward)
            used.add(key)

    fill_attempts = 0
    while len(rewards) < count:
        fill_attempts += 1
        reward = generate_stat_boost(level, luck, exclusions, rng, logger)
        key = uniqueness_key(reward)
        # Menus larger than the stat vocabulary accept repeats eventually.
        if key not in used or fill_attempts > MENU_FILL_ATTEMPTS:
            rewards.append(reward)
            used.add(key)

    if logger:
        logger.debug(
            "Menu level=%d luck=%.2f exclusions=%s -> %s",
            level,
            luck,
            exclusions,
            [f"{reward.name} ({reward.rarity.value})" for reward in rewards],
        )
    return rewards


def generate_rare_reward(
    level: int,
    luck: float,
    context=None,
    *,
    rng=None,
    balance: BalanceSettings = DEFAULT_BALANCE,
    logger: Optional[ChannelLogger] = None,
) -> Reward:
    """A stat boost forced to Rare with a 1.5x value bump."""

    exclusions = exclusions_for(context, balance)
    reward = _build_stat_boost(level, luck, exclusions, rng, logger)
    value = reward.value * RARE_REWARD_BONUS
    description = reward.description
    if reward.stat is not None:
        description = formatting.describe_stat_boost(reward.stat, value)
    return _finish(replace(reward, rarity=Rarity.RARE, value=value, description=description))


__all__ = [
    "STAT_TABLE",
    "STAT_TABLE_NO_REGENERATION",
    "AURA_TABLE",
    "AURA_TABLE_NO_VAMPIRE",
    "MENU_TABLE",
    "WEAPON_MODS",
    "SHRINES",
    "SYNERGIES",
    "UPGRADE_LEVELS",
    "AURA_VALUE_CAP",
    "GENERATORS",
    "stat_base_value",
    "generate_stat_boost",
    "generate_weapon_upgrade",
    "generate_weapon_mod",
    "generate_aura",
    "generate_shrine",
    "generate_synergy",
    "generate_rewards",
    "generate_rare_reward",
    "exclusions_for",
    "uniqueness_key",
]
