"""Experience curve, gold, chest pricing and rerolls."""
from __future__ import annotations

from roguerun.engine.settings import BalanceSettings
from roguerun.progression.leveling import RunProgress, next_experience_requirement


def test_single_level_up() -> None:
    progress = RunProgress.from_balance(BalanceSettings())
    assert progress.add_experience(49) == 0
    assert progress.add_experience(1) == 1
    assert progress.level == 2
    assert progress.experience == 0
    assert progress.experience_to_next_level == int(50 * 1.2)


def test_overflow_carries_across_levels() -> None:
    progress = RunProgress.from_balance(BalanceSettings())
    second = int(50 * 1.2)
    third = int(second * 1.2)
    gained = progress.add_experience(50 + second + 5)
    assert gained == 2
    assert progress.level == 3
    assert progress.experience == 5
    assert progress.experience_to_next_level == third


def test_curve_steepens_after_level_five() -> None:
    balance = BalanceSettings()
    assert next_experience_requirement(100, 5, balance) == 120
    assert next_experience_requirement(100, 6, balance) == 135


def test_wave_counter() -> None:
    progress = RunProgress()
    assert progress.increment_wave() == 2
    assert progress.increment_wave() == 3


def test_gold_and_chests() -> None:
    progress = RunProgress.from_balance(BalanceSettings())
    progress.add_gold(60)
    assert progress.spend_gold(100) is False
    assert progress.buy_chest() is True
    assert progress.current_gold == 10
    assert progress.total_gold_collected == 60
    assert progress.chest_cost == 88
    assert progress.buy_chest() is False
    assert progress.increase_chest_cost() == 154


def test_rerolls_never_go_negative() -> None:
    progress = RunProgress.from_balance(BalanceSettings(starting_rerolls=1))
    assert progress.use_reroll() is True
    assert progress.use_reroll() is False
    assert progress.rerolls_remaining == 0
