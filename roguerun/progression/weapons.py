"""Weapon archetypes and the per-level upgrade curve."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from roguerun.engine.logger import ChannelLogger

TICKS_PER_SECOND = 20.0


@dataclass(frozen=True)
class WeaponArchetype:
    name: str
    description: str
    base_damage: float
    base_range: float
    base_attack_speed: float
    base_projectile_count: int
    base_aoe: float


class WeaponType(Enum):
    FIREBALL = WeaponArchetype(
        "Fireball Launcher", "Shoots auto-targeting fireballs at enemies", 8.0, 20.0, 1.0, 1, 2.0
    )
    ARROW_STORM = WeaponArchetype(
        "Arrow Storm", "Rapid-fire arrows at nearby enemies", 4.0, 25.0, 2.5, 1, 0.0
    )
    LIGHTNING_STRIKE = WeaponArchetype(
        "Lightning Strike", "Summons lightning bolts on enemies", 15.0, 15.0, 0.5, 1, 3.0
    )
    TNT_SPAWNER = WeaponArchetype(
        "TNT Spawner", "Spawns primed TNT near enemies", 20.0, 15.0, 0.33, 1, 5.0
    )
    POTION_THROWER = WeaponArchetype(
        "Potion Thrower", "Throws harmful potions at enemies", 6.0, 18.0, 1.5, 1, 4.0
    )
    ICE_SHARD = WeaponArchetype(
        "Ice Shard", "Launches ice shards that slow enemies", 5.0, 22.0, 2.0, 1, 1.5
    )
    MAGIC_MISSILE = WeaponArchetype(
        "Magic Missile", "Homing magical projectiles", 12.0, 28.0, 2.5, 1, 0.5
    )

    @property
    def archetype(self) -> WeaponArchetype:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value.name

    @classmethod
    def from_name(cls, name: str) -> Optional["WeaponType"]:
        lowered = name.strip().lower().replace(" ", "_")
        for member in cls:
            if member.name.lower() == lowered or member.display_name.lower().replace(" ", "_") == lowered:
                return member
        return None


@dataclass(frozen=True)
class UpgradeCurve:
    """Per-level growth for one archetype. ``None`` caps mean uncapped."""

    damage_rate: float = 1.15
    attack_speed_rate: float = 1.10
    attack_speed_cap: Optional[float] = None
    projectile_interval: int = 3
    projectile_cap: Optional[int] = None
    aoe_rate: float = 1.05
    aoe_cap: float = 1.5
    range_rate: float = 1.05
    range_interval: int = 2
    range_cap: float = 2.0


DEFAULT_CURVE = UpgradeCurve()

UPGRADE_CURVES: Dict[WeaponType, UpgradeCurve] = {
    WeaponType.FIREBALL: UpgradeCurve(damage_rate=1.18, attack_speed_rate=1.12, aoe_rate=1.07, aoe_cap=2.0),
    WeaponType.TNT_SPAWNER: UpgradeCurve(damage_rate=1.18, attack_speed_rate=1.12, aoe_rate=1.07, aoe_cap=2.0),
    WeaponType.ARROW_STORM: UpgradeCurve(
        attack_speed_rate=1.05, attack_speed_cap=2.0, projectile_interval=5, projectile_cap=3
    ),
    WeaponType.POTION_THROWER: UpgradeCurve(
        damage_rate=1.12, attack_speed_rate=1.05, attack_speed_cap=1.5, aoe_rate=1.03, aoe_cap=1.3
    ),
    WeaponType.LIGHTNING_STRIKE: UpgradeCurve(damage_rate=1.10, attack_speed_rate=1.05, attack_speed_cap=1.5),
    WeaponType.ICE_SHARD: DEFAULT_CURVE,
    WeaponType.MAGIC_MISSILE: DEFAULT_CURVE,
}


def upgrade_curve(weapon_type: WeaponType) -> UpgradeCurve:
    return UPGRADE_CURVES.get(weapon_type, DEFAULT_CURVE)


@dataclass
class WeaponDelta:
    old_level: int
    new_level: int
    damage: float
    range: float
    attack_speed: float
    projectile_count: int
    area_of_effect: float

    @property
    def levels_gained(self) -> int:
        return self.new_level - self.old_level


class Weapon:
    """An equipped weapon. Level only rises and every derived stat is non-decreasing.

    Upgrades and ``snapshot`` hold the weapon lock, which a team run shares.
    """

    def __init__(self, weapon_type: WeaponType) -> None:
        base = weapon_type.archetype
        self.type = weapon_type
        self.level = 1
        self.damage = base.base_damage
        self.range = base.base_range
        self.attack_speed = base.base_attack_speed
        self.projectile_count = base.base_projectile_count
        self.area_of_effect = base.base_aoe
        self._lock = threading.Lock()

    @property
    def curve(self) -> UpgradeCurve:
        return upgrade_curve(self.type)

    @property
    def attack_cooldown_ticks(self) -> int:
        return int(TICKS_PER_SECOND / max(0.01, self.attack_speed))

    def _stats(self) -> Tuple[int, float, float, float, int, float]:
        return (self.level, self.damage, self.range, self.attack_speed, self.projectile_count, self.area_of_effect)

    def snapshot(self) -> Tuple[int, float, float, float, int, float]:
        """Level, damage, range, attack speed, projectiles and area as one consistent read."""

        with self._lock:
            return self._stats()

    def _step(self) -> None:
        base = self.type.archetype
        curve = self.curve
        level = self.level + 1
        self.level = level

        if level % curve.range_interval == 0:
            self.range = min(self.range * curve.range_rate, base.base_range * curve.range_cap)

        attack_speed = self.attack_speed * curve.attack_speed_rate
        if curve.attack_speed_cap is not None:
            attack_speed = min(attack_speed, base.base_attack_speed * curve.attack_speed_cap)
        self.attack_speed = attack_speed

        if level % curve.projectile_interval == 0:
            if curve.projectile_cap is None or self.projectile_count < curve.projectile_cap:
                self.projectile_count += 1

        self.area_of_effect = min(self.area_of_effect * curve.aoe_rate, base.base_aoe * curve.aoe_cap)
        self.damage *= curve.damage_rate

    def upgrade(self) -> None:
        with self._lock:
            self._step()

    def upgrade_levels(self, levels: int, logger: Optional[ChannelLogger] = None) -> WeaponDelta:
        """Apply ``levels`` upgrades and report what changed."""

        with self._lock:
            before = self._stats()
            for _ in range(max(0, int(levels))):
                self._step()
            after = self._stats()
        delta = WeaponDelta(
            old_level=before[0],
            new_level=after[0],
            damage=after[1] - before[1],
            range=after[2] - before[2],
            attack_speed=after[3] - before[3],
            projectile_count=after[4] - before[4],
            area_of_effect=after[5] - before[5],
        )
        if logger and delta.levels_gained:
            logger.info(
                "%s upgraded %d -> %d dmg=%.1f range=%.1f aps=%.2f proj=%d aoe=%.2f",
                self.type.display_name,
                delta.old_level,
                delta.new_level,
                after[1],
                after[2],
                after[3],
                after[4],
                after[5],
            )
        return delta

    def __repr__(self) -> str:
        return f"Weapon({self.type.name}, level={self.level}, damage={self.damage:.2f})"


__all__ = [
    "Weapon",
    "WeaponType",
    "WeaponArchetype",
    "WeaponDelta",
    "UpgradeCurve",
    "UPGRADE_CURVES",
    "upgrade_curve",
]
