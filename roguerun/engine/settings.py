"""Balance settings read from ``settings.json``."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

SETTINGS_PATH = Path("settings.json")

RUN_BASELINE_STATS: Dict[str, float] = {
    "health": 20.0,
    "damage": 1.0,
    "speed": 1.0,
    "armor": 0.0,
    "crit_chance": 0.05,
    "crit_damage": 1.5,
    "luck": 1.0,
    "xp_multiplier": 1.0,
    "difficulty": 1.0,
    "regeneration": 0.1,
    "drop_rate": 1.0,
    "pickup_range": 1.0,
    "jump_height": 0.0,
}

# Team builds start with a tenth of the solo regeneration.
TEAM_BASELINE_STATS: Dict[str, float] = {**RUN_BASELINE_STATS, "regeneration": 0.01}


def read_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the parsed settings document, or an empty mapping."""

    path = path or SETTINGS_PATH
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def _float(section: Dict[str, Any], key: str, default: float) -> float:
    try:
        return float(section.get(key, default))
    except (TypeError, ValueError):
        return float(default)


def _int(section: Dict[str, Any], key: str, default: int) -> int:
    try:
        return int(section.get(key, default))
    except (TypeError, ValueError):
        return int(default)


@dataclass
class BalanceSettings:
    """Run tunables that are safe to adjust without touching reward math."""

    starting_rerolls: int = 2
    base_experience_to_level: int = 50
    early_level_scale: float = 1.2
    late_level_scale: float = 1.35
    early_level_cutoff: int = 5
    starting_chest_cost: int = 50
    chest_cost_growth: float = 1.75
    regeneration_cap: float = 4.0
    lifesteal_cap: float = 4.0
    menu_size: int = 3
    run_baseline: Dict[str, float] = field(default_factory=lambda: dict(RUN_BASELINE_STATS))
    team_baseline: Dict[str, float] = field(default_factory=lambda: dict(TEAM_BASELINE_STATS))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BalanceSettings":
        defaults = cls()
        run_baseline = dict(RUN_BASELINE_STATS)
        team_baseline = dict(TEAM_BASELINE_STATS)
        overrides = data.get("baselineStats", {})
        if isinstance(overrides, dict):
            for key, value in overrides.items():
                try:
                    run_baseline[key] = float(value)
                    team_baseline[key] = float(value)
                except (TypeError, ValueError):
                    continue
        return cls(
            starting_rerolls=max(0, _int(data, "startingRerolls", defaults.starting_rerolls)),
            base_experience_to_level=max(1, _int(data, "baseExperience", defaults.base_experience_to_level)),
            early_level_scale=_float(data, "earlyLevelScale", defaults.early_level_scale),
            late_level_scale=_float(data, "lateLevelScale", defaults.late_level_scale),
            early_level_cutoff=_int(data, "earlyLevelCutoff", defaults.early_level_cutoff),
            starting_chest_cost=max(0, _int(data, "chestCost", defaults.starting_chest_cost)),
            chest_cost_growth=_float(data, "chestCostGrowth", defaults.chest_cost_growth),
            regeneration_cap=_float(data, "regenerationCap", defaults.regeneration_cap),
            lifesteal_cap=_float(data, "lifestealCap", defaults.lifesteal_cap),
            menu_size=max(1, _int(data, "menuSize", defaults.menu_size)),
            run_baseline=run_baseline,
            team_baseline=team_baseline,
        )

    @classmethod
    def from_settings(cls, settings_path: Optional[Path] = None) -> "BalanceSettings":
        section = read_settings(settings_path).get("balance", {})
        if not isinstance(section, dict):
            return cls()
        return cls.from_dict(section)


DEFAULT_BALANCE = BalanceSettings()


__all__ = [
    "BalanceSettings",
    "DEFAULT_BALANCE",
    "RUN_BASELINE_STATS",
    "TEAM_BASELINE_STATS",
    "SETTINGS_PATH",
    "read_settings",
]
