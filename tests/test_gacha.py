"""Chest item catalogue and luck-weighted rolls."""
from __future__ import annotations

import json
import random
from collections import Counter

import pytest

from roguerun.assets.content import ContentManager, load_gacha_catalog
from roguerun.engine.clock import ScriptedRolls
from roguerun.progression.stats import StatKey
from roguerun.rewards.gacha import (
    GachaCatalog,
    GachaItem,
    ItemEffect,
    ItemRarity,
    item_stat,
    tier_chances,
    tier_for_roll,
)


def test_bundled_catalogue() -> None:
    catalog = load_gacha_catalog()
    assert len(catalog) == 16
    sizes = {rarity: len(catalog.by_rarity(rarity)) for rarity in ItemRarity}
    assert sizes == {
        ItemRarity.COMMON: 6,
        ItemRarity.UNCOMMON: 4,
        ItemRarity.RARE: 3,
        ItemRarity.LEGENDARY: 3,
    }
    assert catalog.get("clover").effect is ItemEffect.STAT_BOOST
    assert catalog.get("missing") is None


def test_base_chances_at_neutral_luck() -> None:
    chances = tier_chances(1.0)
    assert chances[ItemRarity.COMMON] == pytest.approx(0.50)
    assert chances[ItemRarity.UNCOMMON] == pytest.approx(0.30)
    assert chances[ItemRarity.RARE] == pytest.approx(0.15)
    assert chances[ItemRarity.LEGENDARY] == pytest.approx(0.05)


def test_luck_shifts_odds_and_caps_at_three() -> None:
    chances = tier_chances(3.0)
    assert chances[ItemRarity.LEGENDARY] == pytest.approx(0.1 / 1.25)
    assert chances[ItemRarity.COMMON] == pytest.approx(0.25 / 1.25)
    assert tier_chances(50.0) == pytest.approx(chances)


def test_tiers_are_tested_best_first() -> None:
    assert tier_for_roll(0.0, 1.0) is ItemRarity.LEGENDARY
    assert tier_for_roll(0.06, 1.0) is ItemRarity.RARE
    assert tier_for_roll(0.25, 1.0) is ItemRarity.UNCOMMON
    assert tier_for_roll(0.999, 1.0) is ItemRarity.COMMON


def test_roll_frequencies() -> None:
    catalog = load_gacha_catalog()
    rng = random.Random(21)
    counts = Counter(catalog.roll(1.0, rng).rarity for _ in range(20000))
    assert counts[ItemRarity.COMMON] / 20000 == pytest.approx(0.5, abs=0.02)
    assert counts[ItemRarity.LEGENDARY] / 20000 == pytest.approx(0.05, abs=0.01)


def test_empty_tier_falls_back_to_common() -> None:
    common = GachaItem("pebble", "Pebble", "", ItemRarity.COMMON, ItemEffect.PASSIVE, 1.0)
    catalog = GachaCatalog([common])
    assert catalog.roll(1.0, ScriptedRolls([0.0])) is common
    assert GachaCatalog().roll(1.0) is None


@pytest.mark.parametrize(
    "item_id, effect, expected",
    [
        ("clover", ItemEffect.STAT_BOOST, StatKey.LUCK),
        ("time_bracelet", ItemEffect.STAT_BOOST, StatKey.XP_MULTIPLIER),
        ("gym_sauce", ItemEffect.STAT_BOOST, StatKey.DAMAGE),
        ("oats", ItemEffect.STAT_BOOST, StatKey.HEALTH),
        ("turbo_socks", ItemEffect.STAT_BOOST, StatKey.SPEED),
        ("forbidden_juice", ItemEffect.STAT_BOOST, StatKey.CRIT_CHANCE),
        ("battery", ItemEffect.STAT_BOOST, None),
        ("medkit", ItemEffect.PASSIVE, StatKey.REGENERATION),
        ("golden_glove", ItemEffect.PASSIVE, None),
        ("moldy_cheese", ItemEffect.ON_HIT, None),
    ],
)
def test_item_stat_mapping(item_id: str, effect: ItemEffect, expected) -> None:
    item = GachaItem(item_id, item_id, "", ItemRarity.COMMON, effect, 1.0)
    assert item_stat(item) is expected


def test_loader_skips_bad_files_and_entries(tmp_path) -> None:
    items = tmp_path / "data" / "items"
    items.mkdir(parents=True)
    (items / "broken.json").write_text("{not json")
    (items / "mixed.json").write_text(
        json.dumps(
            [
                {"id": "ok", "rarity": "rare", "effect": "onKill", "value": 0.5},
                {"id": "bad_rarity", "rarity": "mythic"},
                {"name": "no id"},
            ]
        )
    )
    (items / "single.json").write_text(json.dumps({"id": "solo", "value": "2"}))
    catalog = ContentManager(tmp_path).load().gacha
    assert sorted(catalog.items) == ["ok", "solo"]
    assert catalog.get("ok").rarity is ItemRarity.RARE
    assert catalog.get("solo").value == 2.0


def test_missing_directory_loads_nothing(tmp_path) -> None:
    assert len(ContentManager(tmp_path).load().gacha) == 0
