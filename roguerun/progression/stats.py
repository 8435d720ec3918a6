"""Stat vocabulary and the shared, lock-guarded stat ledger."""
from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union


class StatKey(str, Enum):
    HEALTH = "health"
    DAMAGE = "damage"
    SPEED = "speed"
    ARMOR = "armor"
    CRIT_CHANCE = "crit_chance"
    CRIT_DAMAGE = "crit_damage"
    LUCK = "luck"
    XP_MULTIPLIER = "xp_multiplier"
    DIFFICULTY = "difficulty"
    REGENERATION = "regeneration"
    DROP_RATE = "drop_rate"
    PICKUP_RANGE = "pickup_range"
    JUMP_HEIGHT = "jump_height"

    @property
    def label(self) -> str:
        return STAT_LABELS[self]


STAT_LABELS: Dict[StatKey, str] = {
    StatKey.HEALTH: "Health",
    StatKey.DAMAGE: "Damage",
    StatKey.SPEED: "Speed",
    StatKey.ARMOR: "Armor",
    StatKey.CRIT_CHANCE: "Critical Chance",
    StatKey.CRIT_DAMAGE: "Critical Damage",
    StatKey.LUCK: "Luck",
    StatKey.XP_MULTIPLIER: "XP Multiplier",
    StatKey.DIFFICULTY: "Difficulty",
    StatKey.REGENERATION: "Regeneration",
    StatKey.DROP_RATE: "Drop Rate",
    StatKey.PICKUP_RANGE: "Pickup Range",
    StatKey.JUMP_HEIGHT: "Jump Height",
}

# Stats that have an out-of-core attribute on each participant.
PARTICIPANT_ATTRIBUTES = frozenset({StatKey.HEALTH, StatKey.SPEED, StatKey.ARMOR})

# Checked in this order; "crit_damage" contains "damage" so crit damage ids
# resolve to DAMAGE here. Generated rewards carry their StatKey instead.
_IDENTITY_RULES: Tuple[Tuple[Tuple[str, ...], StatKey], ...] = (
    (("health",), StatKey.HEALTH),
    (("damage",), StatKey.DAMAGE),
    (("speed",), StatKey.SPEED),
    (("armor",), StatKey.ARMOR),
    (("crit_chance",), StatKey.CRIT_CHANCE),
    (("crit_damage",), StatKey.CRIT_DAMAGE),
    (("luck",), StatKey.LUCK),
    (("xp_multiplier",), StatKey.XP_MULTIPLIER),
    (("regeneration", "regen"), StatKey.REGENERATION),
    (("drop_rate", "droprate", "drop"), StatKey.DROP_RATE),
    (("difficulty",), StatKey.DIFFICULTY),
)

StatLike = Union[StatKey, str]


def resolve_stat_identity(identity: str) -> Optional[StatKey]:
    """Map a reward identity string onto a stat, first substring match wins."""

    lowered = identity.lower()
    for needles, stat in _IDENTITY_RULES:
        if any(needle in lowered for needle in needles):
            return stat
    return None


def _key(stat: StatLike) -> str:
    return stat.value if isinstance(stat, StatKey) else str(stat)


class StatLedger:
    """Named numeric attributes of a run.

    Unknown keys read as ``0.0``. ``add`` is a single critical section so
    concurrent selections in a team run never lose an update.
    """

    def __init__(self, baseline: Optional[Mapping[str, float]] = None) -> None:
        self._values: Dict[str, float] = {}
        self._lock = threading.Lock()
        if baseline:
            for key, value in baseline.items():
                self._values[_key(key)] = float(value)

    def get(self, stat: StatLike) -> float:
        with self._lock:
            return self._values.get(_key(stat), 0.0)

    def set(self, stat: StatLike, value: float) -> None:
        with self._lock:
            self._values[_key(stat)] = float(value)

    def add(self, stat: StatLike, delta: float) -> float:
        key = _key(stat)
        with self._lock:
            updated = self._values.get(key, 0.0) + float(delta)
            self._values[key] = updated
            return updated

    def scale(self, stat: StatLike, factor: float) -> float:
        key = _key(stat)
        with self._lock:
            updated = self._values.get(key, 0.0) * float(factor)
            self._values[key] = updated
            return updated

    def snapshot(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._values)

    def __contains__(self, stat: object) -> bool:
        if not isinstance(stat, (StatKey, str)):
            return False
        with self._lock:
            return _key(stat) in self._values

    def __repr__(self) -> str:
        return f"StatLedger({self.snapshot()!r})"


__all__ = [
    "StatKey",
    "StatLedger",
    "STAT_LABELS",
    "PARTICIPANT_ATTRIBUTES",
    "resolve_stat_identity",
]
