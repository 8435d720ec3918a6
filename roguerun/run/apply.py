"""Applying chosen rewards and chest items to a run."""
from __future__ import annotations

from typing import Optional

from roguerun.engine.logger import ChannelLogger
from roguerun.progression.stats import PARTICIPANT_ATTRIBUTES, StatKey
from roguerun.rewards.gacha import GachaItem, item_stat
from roguerun.rewards.models import Reward, RewardCategory
from roguerun.run.hooks import movement_speed_attribute
from roguerun.run.state import RunState

GLASS_CANNON_HEALTH_FACTOR = 0.5


def propagate(target: RunState, stat: StatKey) -> None:
    """Push a participant-facing stat to every online member.

    The value is read once from the shared ledger; only the hook call repeats.
    """

    if stat not in PARTICIPANT_ATTRIBUTES:
        return
    value = target.ledger.get(stat)
    hooks = target.hooks
    for member in target.online_members():
        if stat is StatKey.HEALTH:
            hooks.apply_max_health(member, value)
        elif stat is StatKey.SPEED:
            hooks.apply_movement_speed(member, movement_speed_attribute(value))
        elif stat is StatKey.ARMOR:
            hooks.apply_armor(member, value)


def _apply_stat_boost(reward: Reward, target: RunState, logger: Optional[ChannelLogger]) -> None:
    stat = reward.target_stat
    if stat is None:
        if logger:
            logger.warning("Stat boost %s matches no stat, recorded only", reward.id)
        return
    updated = target.ledger.add(stat, reward.value)
    if logger:
        logger.debug("%s +%.3f -> %.3f", stat.value, reward.value, updated)
    propagate(target, stat)


def _apply_weapon_upgrade(
    reward: Reward, target: RunState, logger: Optional[ChannelLogger], weapon_logger: Optional[ChannelLogger]
) -> None:
    weapon = target.weapon
    if weapon is None:
        if logger:
            logger.info("No weapon equipped, skipping %d upgrade level(s)", reward.upgrade_levels)
        return
    weapon.upgrade_levels(reward.upgrade_levels, weapon_logger or logger)


def _apply_glass_cannon(reward: Reward, target: RunState, logger: Optional[ChannelLogger]) -> None:
    target.ledger.add(StatKey.DAMAGE, reward.value)
    health = target.ledger.scale(StatKey.HEALTH, GLASS_CANNON_HEALTH_FACTOR)
    if logger:
        logger.info("Glass Cannon: damage +%.2f, health halved to %.2f", reward.value, health)
    propagate(target, StatKey.HEALTH)


def apply(
    reward: Reward,
    target: RunState,
    logger: Optional[ChannelLogger] = None,
    weapon_logger: Optional[ChannelLogger] = None,
) -> None:
    """Apply a selected reward to a Run or TeamRun.

    Every reward is recorded as collected, including upgrades that are skipped
    because no weapon is equipped.
    """

    if reward.category is RewardCategory.STAT_BOOST:
        _apply_stat_boost(reward, target, logger)
    elif reward.category is RewardCategory.WEAPON_UPGRADE:
        _apply_weapon_upgrade(reward, target, logger, weapon_logger)
    elif reward.is_glass_cannon:
        _apply_glass_cannon(reward, target, logger)
    target.record_reward(reward)


def apply_item(item: GachaItem, target: RunState, logger: Optional[ChannelLogger] = None) -> None:
    """Apply a chest item. Items without a direct stat are only recorded."""

    stat = item_stat(item)
    if stat is not None:
        target.ledger.add(stat, item.value)
        propagate(target, stat)
    if logger:
        logger.info("Item %s applied (%s)", item.name, stat.value if stat else item.effect.value)
    target.record_item(item)


__all__ = ["apply", "apply_item", "propagate"]
