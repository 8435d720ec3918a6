"""Chest items and the luck-weighted gacha roll."""
from __future__ import annotations

import json
import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from roguerun.engine.logger import ChannelLogger
from roguerun.progression.stats import StatKey
from roguerun.rewards.sampling import pick_uniform

BASE_CHANCES = {
    "common": 0.50,
    "uncommon": 0.30,
    "rare": 0.15,
    "legendary": 0.05,
}
LUCK_CAP = 3.0


class ItemRarity(Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ItemEffect(Enum):
    STAT_BOOST = "statBoost"
    ON_HIT = "onHit"
    ON_KILL = "onKill"
    PASSIVE = "passive"
    SPECIAL = "special"


@dataclass(frozen=True)
class GachaItem:
    id: str
    name: str
    description: str
    rarity: ItemRarity
    effect: ItemEffect
    value: float

    @classmethod
    def from_dict(cls, data: Dict) -> "GachaItem":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            rarity=ItemRarity(data.get("rarity", "common")),
            effect=ItemEffect(data.get("effect", "passive")),
            value=float(data.get("value", 0.0)),
        )


# Keyword rules per effect kind; first match wins.
_STAT_BOOST_RULES: Tuple[Tuple[Tuple[str, ...], StatKey], ...] = (
    (("clover", "luck"), StatKey.LUCK),
    (("time_bracelet", "xp"), StatKey.XP_MULTIPLIER),
    (("gym_sauce", "damage"), StatKey.DAMAGE),
    (("oats", "hp", "health"), StatKey.HEALTH),
    (("turbo_socks", "speed"), StatKey.SPEED),
    (("forbidden_juice", "crit"), StatKey.CRIT_CHANCE),
)
_PASSIVE_RULES: Tuple[Tuple[Tuple[str, ...], StatKey], ...] = (
    (("medkit", "regen"), StatKey.REGENERATION),
)


def item_stat(item: GachaItem) -> Optional[StatKey]:
    """Ledger stat an item feeds directly, or ``None`` for effects resolved in combat."""

    if item.effect is ItemEffect.STAT_BOOST:
        rules = _STAT_BOOST_RULES
    elif item.effect is ItemEffect.PASSIVE:
        rules = _PASSIVE_RULES
    else:
        return None
    for needles, stat in rules:
        if any(needle in item.id for needle in needles):
            return stat
    return None


def tier_chances(luck: float) -> Dict[ItemRarity, float]:
    """Normalised tier probabilities. Luck 1.0 gives the base table."""

    effective = min(luck, LUCK_CAP)
    multiplier = (effective - 1.0) * 0.5 + 1.0
    raw = {
        ItemRarity.COMMON: BASE_CHANCES["common"] / multiplier,
        ItemRarity.UNCOMMON: BASE_CHANCES["uncommon"] * multiplier,
        ItemRarity.RARE: BASE_CHANCES["rare"] * multiplier,
        ItemRarity.LEGENDARY: BASE_CHANCES["legendary"] * multiplier,
    }
    total = sum(raw.values())
    return {rarity: chance / total for rarity, chance in raw.items()}


def tier_for_roll(roll: float, luck: float) -> ItemRarity:
    chances = tier_chances(luck)
    threshold = 0.0
    for rarity in (ItemRarity.LEGENDARY, ItemRarity.RARE, ItemRarity.UNCOMMON):
        threshold += chances[rarity]
        if roll < threshold:
            return rarity
    return ItemRarity.COMMON


class GachaCatalog:
    def __init__(self, items: Optional[Iterable[GachaItem]] = None) -> None:
        self.items: Dict[str, GachaItem] = {}
        self._by_rarity: Dict[ItemRarity, List[GachaItem]] = {rarity: [] for rarity in ItemRarity}
        for item in items or ():
            self.register(item)

    def register(self, item: GachaItem) -> None:
        previous = self.items.get(item.id)
        if previous is not None:
            self._by_rarity[previous.rarity].remove(previous)
        self.items[item.id] = item
        self._by_rarity[item.rarity].append(item)

    def load_directory(self, directory: Path) -> None:
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.json")):
            try:
                data = json.loads(path.read_text())
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict):
                data = [data]
            for entry in data:
                try:
                    self.register(GachaItem.from_dict(entry))
                except (KeyError, TypeError, ValueError):
                    continue

    def get(self, item_id: str) -> Optional[GachaItem]:
        return self.items.get(item_id)

    def by_rarity(self, rarity: ItemRarity) -> List[GachaItem]:
        return list(self._by_rarity[rarity])

    def __len__(self) -> int:
        return len(self.items)

    def roll(self, luck: float = 1.0, rng=None, logger: Optional[ChannelLogger] = None) -> Optional[GachaItem]:
        """Draw one item. Returns ``None`` only for an empty catalogue."""

        if not self.items:
            return None
        rng = rng or random
        rarity = tier_for_roll(rng.random(), luck)
        pool = self._by_rarity[rarity]
        if not pool:
            pool = self._by_rarity[ItemRarity.COMMON] or list(self.items.values())
        item = pick_uniform(pool, rng)
        if logger:
            logger.info("Gacha roll luck=%.2f -> %s (%s)", luck, item.name, item.rarity.label)
        return item


__all__ = [
    "ItemRarity",
    "ItemEffect",
    "GachaItem",
    "GachaCatalog",
    "item_stat",
    "tier_chances",
    "tier_for_roll",
]
