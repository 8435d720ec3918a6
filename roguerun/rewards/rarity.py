"""Luck-driven rarity tiers for generated rewards."""
from __future__ import annotations

import random
from enum import Enum
from typing import Dict

LUCK_BONUS_PER_POINT = 0.005
LUCK_BONUS_CAP = 0.05

# Exclusive lower bounds on the luck-adjusted roll, best tier first.
LEGENDARY_THRESHOLD = 0.99
EPIC_THRESHOLD = 0.85
RARE_THRESHOLD = 0.60


class Rarity(Enum):
    COMMON = "Common"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"

    @property
    def label(self) -> str:
        return self.value


RARITY_MULTIPLIERS: Dict[Rarity, float] = {
    Rarity.COMMON: 1.0,
    Rarity.RARE: 1.5,
    Rarity.EPIC: 2.25,
    Rarity.LEGENDARY: 3.5,
}


def luck_bonus(luck: float) -> float:
    return min(LUCK_BONUS_CAP, luck * LUCK_BONUS_PER_POINT)


def rarity_for_roll(roll: float, luck: float) -> Rarity:
    effective = min(1.0, roll + luck_bonus(luck))
    if effective > LEGENDARY_THRESHOLD:
        return Rarity.LEGENDARY
    if effective > EPIC_THRESHOLD:
        return Rarity.EPIC
    if effective > RARE_THRESHOLD:
        return Rarity.RARE
    return Rarity.COMMON


def determine_rarity(luck: float, rng=None) -> Rarity:
    """Draw one rarity tier. Legendary stays near 1-6% however high luck goes."""

    rng = rng or random
    return rarity_for_roll(rng.random(), luck)


def rarity_multiplier(rarity: Rarity) -> float:
    return RARITY_MULTIPLIERS.get(rarity, 1.0)


def luck_scaling(luck: float) -> float:
    """Luck bonus applied on top of the rarity multiplier for most reward kinds."""

    return 0.8 + luck * 0.4


__all__ = [
    "Rarity",
    "RARITY_MULTIPLIERS",
    "determine_rarity",
    "rarity_for_roll",
    "rarity_multiplier",
    "luck_bonus",
    "luck_scaling",
]
