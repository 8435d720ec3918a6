"""Headless balance simulation for the run core.

Plays a team run wave by wave with random menu choices and chest rolls, then
prints the final build and the reward telemetry.
"""
from __future__ import annotations

import cProfile
import io
import pstats
import random
from pathlib import Path
from typing import Any, Dict

from roguerun.assets.content import ContentManager
from roguerun.engine.logger import init_logger
from roguerun.engine.settings import SETTINGS_PATH, BalanceSettings, read_settings
from roguerun.engine.telemetry import log_reward_summary, reward_snapshot
from roguerun.progression.weapons import WeaponType
from roguerun.run.apply import apply_item
from roguerun.run.selection import SelectionCoordinator
from roguerun.run.state import TeamRun

DEFAULT_SIMULATION: Dict[str, Any] = {
    "members": ["alpha", "bravo"],
    "waves": 15,
    "experiencePerWave": 60,
    "goldPerWave": 40,
    "weapon": "fireball",
    "seed": None,
}


def load_simulation(path: Path = SETTINGS_PATH) -> Dict[str, Any]:
    section = read_settings(path).get("simulation", {})
    simulation = dict(DEFAULT_SIMULATION)
    if isinstance(section, dict):
        simulation.update(section)
    return simulation


def simulate(simulation: Dict[str, Any], balance: BalanceSettings, logger) -> TeamRun:
    rng = random.Random(simulation.get("seed"))
    weapon_type = WeaponType.from_name(str(simulation.get("weapon", ""))) or WeaponType.FIREBALL
    team = TeamRun(simulation["members"], weapon_type, balance=balance)
    coordinator = SelectionCoordinator(team, rng=rng, logger=logger)
    catalog = ContentManager().load().gacha
    runs_log = logger.channel("runs")

    for _ in range(int(simulation["waves"])):
        team.progress.add_gold(int(simulation["goldPerWave"]))
        levels = team.progress.add_experience(int(simulation["experiencePerWave"]), runs_log)
        for index in range(levels):
            member = team.members[index % len(team.members)]
            with coordinator.selecting(member) as menu:
                if rng.random() < 0.2:
                    menu = coordinator.reroll(member) or menu
                coordinator.confirm(member, menu[int(rng.random() * len(menu))])
        if team.progress.buy_chest():
            item = catalog.roll(team.luck, rng, logger.channel("gacha"))
            if item is not None:
                apply_item(item, team, runs_log)
        wave = team.progress.increment_wave()
        runs_log.debug("Wave %d reached, gold=%d", wave, team.progress.current_gold)
    return team


def main() -> None:
    logger = init_logger(SETTINGS_PATH)
    balance = BalanceSettings.from_settings(SETTINGS_PATH)
    simulation = load_simulation()

    profiler = cProfile.Profile()
    try:
        profiler.enable()
        team = simulate(simulation, balance, logger)
    finally:
        profiler.disable()

    log_reward_summary(logger.channel("rewards"))

    stats_stream = io.StringIO()
    stats = pstats.Stats(profiler, stream=stats_stream)
    stats.strip_dirs().sort_stats("cumulative").print_stats(15)

    print(f"\nFinal level {team.level}, wave {team.progress.wave}, weapon {team.weapon!r}")
    for key, value in sorted(team.ledger.snapshot().items()):
        print(f"  {key:<14} {value:8.3f}")
    print(f"Collected {len(team.collected_rewards)} rewards, {len(team.collected_items)} items")
    snapshot = reward_snapshot()
    print(f"Generated {snapshot.generated} rewards, {snapshot.exclusion_fallbacks} exclusion fallbacks")
    for rarity, count in sorted(snapshot.by_rarity.items()):
        print(f"  {rarity:<10} {count:5d} ({snapshot.rarity_share(rarity):.1%})")
    print("\nProfiler results (top 15 cumulative):")
    print(stats_stream.getvalue())


if __name__ == "__main__":
    main()
