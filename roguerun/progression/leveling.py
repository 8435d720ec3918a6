"""Experience curve, wave counter, gold and reroll budget of a run."""
from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from typing import Optional

from roguerun.engine.logger import ChannelLogger
from roguerun.engine.settings import DEFAULT_BALANCE, BalanceSettings


def next_experience_requirement(previous: int, new_level: int, balance: BalanceSettings = DEFAULT_BALANCE) -> int:
    scale = balance.early_level_scale if new_level <= balance.early_level_cutoff else balance.late_level_scale
    return int(previous * scale)


@dataclass
class RunProgress:
    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 50
    wave: int = 1
    current_gold: int = 0
    total_gold_collected: int = 0
    chest_cost: int = 50
    rerolls_remaining: int = 2
    balance: BalanceSettings = field(default_factory=lambda: DEFAULT_BALANCE, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def from_balance(cls, balance: BalanceSettings) -> "RunProgress":
        return cls(
            experience_to_next_level=balance.base_experience_to_level,
            chest_cost=balance.starting_chest_cost,
            rerolls_remaining=balance.starting_rerolls,
            balance=balance,
        )

    def add_experience(self, amount: int, logger: Optional[ChannelLogger] = None) -> int:
        """Add experience and apply every level-up it pays for. Returns levels gained."""

        gained = 0
        with self._lock:
            self.experience += int(amount)
            while self.experience_to_next_level > 0 and self.experience >= self.experience_to_next_level:
                required = self.experience_to_next_level
                self.level += 1
                self.experience = max(0, self.experience - required)
                self.experience_to_next_level = max(
                    1, next_experience_requirement(required, self.level, self.balance)
                )
                gained += 1
            level = self.level
        if logger and gained:
            logger.info("Level up x%d -> level %d", gained, level)
        return gained

    def increment_wave(self) -> int:
        with self._lock:
            self.wave += 1
            return self.wave

    def add_gold(self, amount: int) -> None:
        with self._lock:
            self.current_gold += amount
            self.total_gold_collected += amount

    def spend_gold(self, amount: int) -> bool:
        with self._lock:
            if self.current_gold < amount:
                return False
            self.current_gold -= amount
            return True

    def increase_chest_cost(self) -> int:
        with self._lock:
            self.chest_cost = int(math.ceil(self.chest_cost * self.balance.chest_cost_growth))
            return self.chest_cost

    def buy_chest(self) -> bool:
        """Pay the current chest price and raise it. False when gold is short."""

        with self._lock:
            cost = self.chest_cost
            if self.current_gold < cost:
                return False
            self.current_gold -= cost
            self.chest_cost = int(math.ceil(cost * self.balance.chest_cost_growth))
            return True

    def use_reroll(self) -> bool:
        with self._lock:
            if self.rerolls_remaining <= 0:
                return False
            self.rerolls_remaining -= 1
            return True


__all__ = ["RunProgress", "next_experience_requirement"]
