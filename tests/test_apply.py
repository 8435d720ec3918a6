"""Applying rewards and chest items to solo and team runs."""
from __future__ import annotations

import threading
from math import isclose

import pytest

from conftest import RecordingHooks
from roguerun.assets.content import load_gacha_catalog
from roguerun.progression.stats import StatKey
from roguerun.progression.weapons import Weapon, WeaponType
from roguerun.rewards.models import Reward, RewardCategory
from roguerun.rewards.rarity import Rarity
from roguerun.run.apply import apply, apply_item
from roguerun.run.state import Run, RunState, TeamRun


def _reward(category: RewardCategory, value: float, name: str = "Test", stat=None, id: str = "dynamic_test_1") -> Reward:
    return Reward(
        id=id,
        name=name,
        description="",
        rarity=Rarity.COMMON,
        category=category,
        value=value,
        stat=stat,
    )


def test_stat_boost_accumulates() -> None:
    run = Run("solo")
    reward = _reward(RewardCategory.STAT_BOOST, 0.5, stat=StatKey.DAMAGE)
    apply(reward, run)
    apply(reward, run)
    assert isclose(run.stat(StatKey.DAMAGE), 2.0)
    assert len(run.collected_rewards) == 2


def test_untagged_stat_boost_uses_identity() -> None:
    run = Run("solo")
    apply(_reward(RewardCategory.STAT_BOOST, 0.25, id="dynamic_drop_rate_3"), run)
    assert isclose(run.stat(StatKey.DROP_RATE), 1.25)
    # Identity matching checks "damage" before "crit_damage".
    apply(_reward(RewardCategory.STAT_BOOST, 0.5, id="dynamic_crit_damage_4"), run)
    assert isclose(run.stat(StatKey.DAMAGE), 1.5)
    assert isclose(run.stat(StatKey.CRIT_DAMAGE), 1.5)


def test_unresolvable_stat_boost_is_only_recorded() -> None:
    run = Run("solo")
    before = run.ledger.snapshot()
    apply(_reward(RewardCategory.STAT_BOOST, 1.0, id="dynamic_jump_height_9"), run)
    assert run.ledger.snapshot() == before
    assert len(run.collected_rewards) == 1


def test_weapon_upgrade_on_tnt() -> None:
    run = Run("solo", WeaponType.TNT_SPAWNER)
    apply(_reward(RewardCategory.WEAPON_UPGRADE, 3.0), run)
    assert run.weapon.level == 4
    assert isclose(run.weapon.damage, 20.0 * 1.18 ** 3)
    assert run.weapon.area_of_effect <= 10.0


def test_weapon_upgrade_without_weapon_is_skipped() -> None:
    run = Run("solo")
    before = run.ledger.snapshot()
    reward = _reward(RewardCategory.WEAPON_UPGRADE, 2.0)
    apply(reward, run)
    assert run.weapon is None
    assert run.ledger.snapshot() == before
    assert run.collected_rewards == [reward]


def test_glass_cannon_halves_health_every_time(hooks: RecordingHooks) -> None:
    run = Run("solo", hooks=hooks)
    reward = _reward(RewardCategory.SYNERGY, 1.6, name="Glass Cannon")
    apply(reward, run)
    assert isclose(run.stat(StatKey.HEALTH), 10.0)
    assert isclose(run.stat(StatKey.DAMAGE), 2.6)
    apply(reward, run)
    assert isclose(run.stat(StatKey.HEALTH), 5.0)
    assert isclose(run.stat(StatKey.DAMAGE), 4.2)
    assert hooks.attributes[("health", "solo")] == 5.0
    assert run.has_reward("Glass Cannon")


def test_passive_rewards_are_only_collected() -> None:
    run = Run("solo", WeaponType.FIREBALL)
    before = run.ledger.snapshot()
    for category in (RewardCategory.WEAPON_MOD, RewardCategory.AURA, RewardCategory.SHRINE, RewardCategory.SYNERGY):
        apply(_reward(category, 3.0, name="Fire Aura"), run)
    assert run.ledger.snapshot() == before
    assert run.weapon.level == 1
    assert [reward.category for reward in run.collected_rewards] == [
        RewardCategory.WEAPON_MOD,
        RewardCategory.AURA,
        RewardCategory.SHRINE,
        RewardCategory.SYNERGY,
    ]


def test_team_propagates_participant_attributes(hooks: RecordingHooks) -> None:
    hooks.offline.add("C")
    team = TeamRun(["A", "B", "C"], hooks=hooks)
    apply(_reward(RewardCategory.STAT_BOOST, 4.0, stat=StatKey.HEALTH), team)
    apply(_reward(RewardCategory.STAT_BOOST, 3.0, stat=StatKey.SPEED), team)
    apply(_reward(RewardCategory.STAT_BOOST, 20.0, stat=StatKey.SPEED), team)
    apply(_reward(RewardCategory.STAT_BOOST, 2.0, stat=StatKey.ARMOR), team)
    for member in ("A", "B"):
        assert hooks.attributes[("health", member)] == 24.0
        # 0.1 per speed point, clamped to 1.0.
        assert hooks.attributes[("speed", member)] == 1.0
        assert hooks.attributes[("armor", member)] == 2.0
    assert ("health", "C") not in hooks.attributes


def test_team_shares_one_ledger_under_concurrency() -> None:
    team = TeamRun(["A", "B", "C", "D"])
    reward = _reward(RewardCategory.STAT_BOOST, 0.5, stat=StatKey.DAMAGE)
    start = threading.Barrier(4)

    def session() -> None:
        start.wait()
        for _ in range(250):
            apply(reward, team)

    threads = [threading.Thread(target=session) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert isclose(team.stat(StatKey.DAMAGE), 1.0 + 1000 * 0.5)
    assert len(team.collected_rewards) == 1000


def test_team_weapon_upgrades_under_concurrency() -> None:
    team = TeamRun(["A", "B", "C", "D"], WeaponType.ARROW_STORM)
    reward = _reward(RewardCategory.WEAPON_UPGRADE, 1.0)
    start = threading.Barrier(4)

    def session() -> None:
        start.wait()
        for _ in range(250):
            apply(reward, team)

    threads = [threading.Thread(target=session) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    expected = Weapon(WeaponType.ARROW_STORM)
    expected.upgrade_levels(1000)
    # Interval-gated range and projectile steps land exactly once per level.
    assert team.weapon.snapshot() == expected.snapshot()
    assert team.weapon.level == 1001


def test_run_state_needs_a_roster() -> None:
    with pytest.raises(TypeError):
        RunState({})


def test_team_baseline_regeneration() -> None:
    assert isclose(TeamRun(["A"]).stat(StatKey.REGENERATION), 0.01)
    assert isclose(Run("A").stat(StatKey.REGENERATION), 0.1)


def test_items_feed_ledger(hooks: RecordingHooks) -> None:
    catalog = load_gacha_catalog()
    team = TeamRun(["A", "B"], hooks=hooks)
    apply_item(catalog.get("oats"), team)
    apply_item(catalog.get("medkit"), team)
    apply_item(catalog.get("turbo_socks"), team)
    apply_item(catalog.get("big_bonk"), team)
    assert isclose(team.stat(StatKey.HEALTH), 30.0)
    assert isclose(team.stat(StatKey.REGENERATION), 2.01)
    assert isclose(team.stat(StatKey.SPEED), 1.15)
    assert hooks.attributes[("health", "B")] == 30.0
    assert isclose(hooks.attributes[("speed", "A")], 0.115)
    assert [item.id for item in team.collected_items] == ["oats", "medkit", "turbo_socks", "big_bonk"]


def test_roster_changes() -> None:
    team = TeamRun(["A", "A", "B"])
    assert team.members == ("A", "B")
    assert team.add_member("C") is True
    assert team.add_member("C") is False
    assert team.remove_member("A") is True
    assert team.remove_member("A") is False
    assert team.members == ("B", "C")


def test_equip_replaces_weapon() -> None:
    run = Run("solo")
    weapon = run.equip(WeaponType.ICE_SHARD)
    apply(_reward(RewardCategory.WEAPON_UPGRADE, 1.0), run)
    assert run.weapon is weapon
    assert weapon.level == 2
    run.equip(WeaponType.MAGIC_MISSILE)
    assert run.weapon.level == 1
