"""Human-readable reward descriptions."""
from __future__ import annotations

import math

from roguerun.progression.stats import StatKey

SHRINE_EFFECTS = {
    "Shrine of Power": "Triple damage for 10 seconds",
    "Shrine of Swiftness": "Double speed for 15 seconds",
    "Shrine of Vitality": "Full heal + 50% max HP for 20 seconds",
    "Shrine of Fortune": "Quadruple XP for 30 seconds",
    "Shrine of Fury": "100% crit chance for 8 seconds",
    "Shrine of Protection": "Invulnerability for 5 seconds",
    "Shrine of Chaos": "Random powerful effect for 12 seconds",
    "Shrine of Time": "Slow all enemies by 80% for 15 seconds",
}


def format_stat_value(stat: StatKey, value: float) -> str:
    if stat is StatKey.CRIT_CHANCE:
        return f"{value * 100:.1f}%"
    if stat is StatKey.CRIT_DAMAGE:
        return f"{value:.1f}x"
    if stat in (StatKey.XP_MULTIPLIER, StatKey.DROP_RATE):
        return f"+{value * 100:.1f}%"
    if stat is StatKey.DIFFICULTY:
        return f"+{value:.2f}x"
    if stat is StatKey.REGENERATION:
        return f"{value:.2f} HP/s"
    if stat is StatKey.PICKUP_RANGE:
        return f"+{value:.1f} blocks"
    if stat is StatKey.JUMP_HEIGHT:
        slow_falling = int(min(4, math.floor(value / 0.5)))
        return f"+{value:.1f} (Slow Falling {slow_falling})"
    return f"{value:.1f}"


def describe_stat_boost(stat: StatKey, value: float) -> str:
    text = f"Increases {stat.label} by {format_stat_value(stat, value)}"
    if stat is StatKey.DIFFICULTY:
        text += " (enemies harder, better rewards)"
    return text


def describe_weapon_upgrade(levels: int) -> str:
    return f"Upgrades your weapon by {levels} level{'s' if levels > 1 else ''}"


def describe_weapon_mod(name: str) -> str:
    return f"Enhances your weapon with {name}"


def describe_aura(name: str, value: float) -> str:
    if name == "Thorns Aura":
        return f"Reflect {value * 10:.1f}% damage to attackers"
    if name == "Regeneration Aura":
        return f"Heal {value * 0.5:.1f} HP every 5 seconds"
    if name == "Vampire Aura":
        return f"Lifesteal {value * 2.0:.1f}% of damage dealt"
    if name == "Fire Aura":
        return f"Nearby enemies burn for {value * 2:.1f} damage/sec"
    if name == "Ice Aura":
        return f"Slow nearby enemies by {value * 15:.1f}%"
    if name == "Lightning Aura":
        return f"Chain lightning every 3 seconds for {value * 3:.1f} damage"
    if name == "Poison Aura":
        return f"Poison nearby enemies for {value:.1f} damage/sec"
    if name == "Shield Aura":
        return f"Absorb {value * 5:.1f} damage before taking HP loss"
    return f"Passive effect that scales with {value:.1f}"


def describe_shrine(name: str, cooldown: float) -> str:
    effect = SHRINE_EFFECTS.get(name, "Powerful temporary buff")
    return f"{effect} (Cooldown: {cooldown:.0f}s)"


def describe_synergy(name: str, value: float) -> str:
    if name == "Critical Mass":
        return f"Crits explode for {value * 50:.0f}% AOE damage"
    if name == "Elemental Fusion":
        return f"Weapon effects stack and multiply by {value:.1f}x"
    if name == "Rapid Escalation":
        return f"Gain {value * 2:.1f}% damage per kill (stacks, max +200% bonus)"
    if name == "Chain Reaction":
        return f"Kills have {value * 20:.0f}% chance to trigger free attack"
    if name == "Berserker Mode":
        return f"Gain {value * 30:.0f}% damage when below 30% HP"
    if name == "Glass Cannon":
        return f"+{value * 100:.0f}% damage, -50% max HP"
    if name == "Immortal Build":
        return f"Cannot die for {value:.1f} seconds after fatal damage (30s cooldown)"
    if name == "Lucky Streak":
        # value is 0 when luck is 0.
        kills = int(max(5, 20 / value)) if value > 0 else 5
        return f"Every {kills} kills grants random power-up effect"
    return f"Powerful combo effect (x{value:.1f})"


__all__ = [
    "SHRINE_EFFECTS",
    "format_stat_value",
    "describe_stat_boost",
    "describe_weapon_upgrade",
    "describe_weapon_mod",
    "describe_aura",
    "describe_shrine",
    "describe_synergy",
]
