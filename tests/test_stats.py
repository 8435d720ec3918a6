"""Stat ledger accumulation and stat identity resolution."""
from __future__ import annotations

import threading
from math import isclose

import pytest

from roguerun.progression.stats import StatKey, StatLedger, resolve_stat_identity


def test_add_accumulates() -> None:
    ledger = StatLedger({"damage": 1.0})
    ledger.add("damage", 0.5)
    ledger.add("damage", 0.5)
    assert isclose(ledger.get("damage"), 2.0)
    assert isclose(ledger.get(StatKey.DAMAGE), 2.0)


def test_set_replaces_and_unknown_reads_zero() -> None:
    ledger = StatLedger()
    assert ledger.get("not_a_stat") == 0.0
    assert ledger.get(StatKey.ARMOR) == 0.0
    ledger.set(StatKey.ARMOR, 4.0)
    ledger.set(StatKey.ARMOR, 2.5)
    assert ledger.get("armor") == 2.5
    assert "armor" in ledger
    assert "luck" not in ledger


def test_scale_halves_in_place() -> None:
    ledger = StatLedger({"health": 20.0})
    assert ledger.scale(StatKey.HEALTH, 0.5) == 10.0
    assert ledger.scale(StatKey.HEALTH, 0.5) == 5.0


def test_concurrent_adds_never_lose_updates() -> None:
    ledger = StatLedger({"damage": 1.0})
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        for _ in range(1000):
            ledger.add(StatKey.DAMAGE, 0.25)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert isclose(ledger.get(StatKey.DAMAGE), 1.0 + 8 * 1000 * 0.25)


def test_snapshot_is_a_copy() -> None:
    ledger = StatLedger({"luck": 1.0})
    snap = ledger.snapshot()
    snap["luck"] = 99.0
    assert ledger.get("luck") == 1.0


@pytest.mark.parametrize(
    "identity, expected",
    [
        ("dynamic_health_1", StatKey.HEALTH),
        ("dynamic_damage_2", StatKey.DAMAGE),
        ("dynamic_speed_3", StatKey.SPEED),
        ("dynamic_armor_4", StatKey.ARMOR),
        ("dynamic_crit_chance_5", StatKey.CRIT_CHANCE),
        ("dynamic_luck_6", StatKey.LUCK),
        ("dynamic_xp_multiplier_7", StatKey.XP_MULTIPLIER),
        ("dynamic_regen_8", StatKey.REGENERATION),
        ("dynamic_drop_rate_9", StatKey.DROP_RATE),
        ("dynamic_difficulty_10", StatKey.DIFFICULTY),
        # "crit_damage" contains "damage", which is checked first.
        ("dynamic_crit_damage_11", StatKey.DAMAGE),
        ("dynamic_pickup_range_12", None),
        ("dynamic_jump_height_13", None),
    ],
)
def test_identity_resolution_order(identity: str, expected) -> None:
    assert resolve_stat_identity(identity) is expected


def test_labels_cover_every_key() -> None:
    for key in StatKey:
        assert key.label
