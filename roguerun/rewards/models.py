"""Immutable reward values handed from the generators to the run state."""
from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from roguerun.progression.stats import StatKey, resolve_stat_identity
from roguerun.rewards.rarity import Rarity

GLASS_CANNON = "Glass Cannon"
VAMPIRE_AURA = "Vampire Aura"
LIFESTEAL_PER_VALUE = 2.0

_reward_ids = itertools.count(1)


def next_reward_id(prefix: str) -> str:
    return f"dynamic_{prefix}_{next(_reward_ids)}"


class RewardCategory(Enum):
    STAT_BOOST = "StatBoost"
    WEAPON_UPGRADE = "WeaponUpgrade"
    WEAPON_MOD = "WeaponMod"
    AURA = "Aura"
    SHRINE = "Shrine"
    SYNERGY = "Synergy"


@dataclass(frozen=True)
class Reward:
    id: str
    name: str
    description: str
    rarity: Rarity
    category: RewardCategory
    value: float
    synergies: Tuple[str, ...] = ()
    stat: Optional[StatKey] = None

    @property
    def target_stat(self) -> Optional[StatKey]:
        """Stat a stat boost feeds; untagged rewards fall back to the id."""

        if self.category is not RewardCategory.STAT_BOOST:
            return None
        if self.stat is not None:
            return self.stat
        return resolve_stat_identity(self.id)

    @property
    def upgrade_levels(self) -> int:
        return max(0, int(self.value))

    @property
    def lifesteal_percent(self) -> float:
        if self.category is not RewardCategory.AURA:
            return 0.0
        lowered = self.name.lower()
        if "vampire" in lowered or "lifesteal" in lowered:
            return self.value * LIFESTEAL_PER_VALUE
        return 0.0

    @property
    def is_glass_cannon(self) -> bool:
        return self.category is RewardCategory.SYNERGY and self.name == GLASS_CANNON


@dataclass(frozen=True)
class ExclusionSet:
    """Sub-kinds a generator must avoid for the current run."""

    regeneration: bool = False
    vampire_aura: bool = False


__all__ = [
    "Reward",
    "RewardCategory",
    "ExclusionSet",
    "GLASS_CANNON",
    "VAMPIRE_AURA",
    "next_reward_id",
]
