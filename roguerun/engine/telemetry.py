"""Counters for generated rewards, used for balance checks."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict

from roguerun.engine.logger import ChannelLogger


@dataclass
class RewardTelemetrySnapshot:
    generated: int
    by_rarity: Dict[str, int]
    by_category: Dict[str, int]
    exclusion_fallbacks: int

    def rarity_share(self, rarity: str) -> float:
        if self.generated <= 0:
            return 0.0
        return self.by_rarity.get(rarity, 0) / self.generated


@dataclass
class RewardTelemetry:
    """Tallies every reward produced by the generators."""

    generated: int = 0
    exclusion_fallbacks: int = 0
    _by_rarity: Dict[str, int] = field(default_factory=dict)
    _by_category: Dict[str, int] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record(self, rarity: str, category: str) -> None:
        with self._lock:
            self.generated += 1
            self._by_rarity[rarity] = self._by_rarity.get(rarity, 0) + 1
            self._by_category[category] = self._by_category.get(category, 0) + 1

    def record_fallback(self) -> None:
        with self._lock:
            self.exclusion_fallbacks += 1

    def reset(self) -> None:
        with self._lock:
            self.generated = 0
            self.exclusion_fallbacks = 0
            self._by_rarity.clear()
            self._by_category.clear()

    def snapshot(self) -> RewardTelemetrySnapshot:
        with self._lock:
            return RewardTelemetrySnapshot(
                generated=self.generated,
                by_rarity=dict(self._by_rarity),
                by_category=dict(self._by_category),
                exclusion_fallbacks=self.exclusion_fallbacks,
            )

    def log_summary(self, logger: ChannelLogger | None = None) -> None:
        if logger is None or not logger.enabled:
            return
        snap = self.snapshot()
        logger.info(
            "Rewards generated=%d rarity=%s category=%s fallbacks=%d",
            snap.generated,
            snap.by_rarity,
            snap.by_category,
            snap.exclusion_fallbacks,
        )


_reward_telemetry = RewardTelemetry()


def record_reward(rarity: str, category: str) -> None:
    _reward_telemetry.record(rarity, category)


def record_exclusion_fallback() -> None:
    _reward_telemetry.record_fallback()


def reward_snapshot() -> RewardTelemetrySnapshot:
    return _reward_telemetry.snapshot()


def reset_reward_telemetry() -> None:
    _reward_telemetry.reset()


def log_reward_summary(logger: ChannelLogger | None = None) -> None:
    _reward_telemetry.log_summary(logger)


__all__ = [
    "RewardTelemetry",
    "RewardTelemetrySnapshot",
    "record_reward",
    "record_exclusion_fallback",
    "reward_snapshot",
    "reset_reward_telemetry",
    "log_reward_summary",
]
