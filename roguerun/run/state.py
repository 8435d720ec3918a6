"""Solo and team run aggregates."""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Iterable, List, Mapping, Optional, Tuple

from roguerun.engine.clock import Clock, monotonic_now
from roguerun.engine.settings import DEFAULT_BALANCE, BalanceSettings
from roguerun.progression.leveling import RunProgress
from roguerun.progression.stats import StatKey, StatLedger
from roguerun.progression.weapons import Weapon, WeaponType
from roguerun.rewards.gacha import GachaItem
from roguerun.rewards.models import Reward
from roguerun.run.barrier import ParticipationBarrier
from roguerun.run.hooks import RunHooks


class RunState(ABC):
    """Ledger, counters, weapon and collected rewards shared by one run."""

    is_team = False

    def __init__(
        self,
        baseline: Mapping[str, float],
        weapon_type: Optional[WeaponType] = None,
        balance: BalanceSettings = DEFAULT_BALANCE,
        hooks: Optional[RunHooks] = None,
    ) -> None:
        self.balance = balance
        self.hooks = hooks or RunHooks()
        self.ledger = StatLedger(baseline)
        self.progress = RunProgress.from_balance(balance)
        self.weapon: Optional[Weapon] = Weapon(weapon_type) if weapon_type is not None else None
        self._lock = threading.Lock()
        self._rewards: List[Reward] = []
        self._items: List[GachaItem] = []

    @property
    @abstractmethod
    def members(self) -> Tuple[str, ...]:
        pass

    def online_members(self) -> Tuple[str, ...]:
        return tuple(member for member in self.members if self.hooks.is_online(member))

    @property
    def level(self) -> int:
        return self.progress.level

    @property
    def luck(self) -> float:
        return self.ledger.get(StatKey.LUCK)

    def stat(self, stat) -> float:
        return self.ledger.get(stat)

    def equip(self, weapon_type: WeaponType) -> Weapon:
        self.weapon = Weapon(weapon_type)
        return self.weapon

    def record_reward(self, reward: Reward) -> None:
        with self._lock:
            self._rewards.append(reward)

    def record_item(self, item: GachaItem) -> None:
        with self._lock:
            self._items.append(item)

    @property
    def collected_rewards(self) -> List[Reward]:
        with self._lock:
            return list(self._rewards)

    @property
    def collected_items(self) -> List[GachaItem]:
        with self._lock:
            return list(self._items)

    def has_reward(self, name: str) -> bool:
        return any(reward.name == name for reward in self.collected_rewards)


class Run(RunState):
    def __init__(
        self,
        member_id: str,
        weapon_type: Optional[WeaponType] = None,
        balance: BalanceSettings = DEFAULT_BALANCE,
        hooks: Optional[RunHooks] = None,
    ) -> None:
        super().__init__(balance.run_baseline, weapon_type, balance, hooks)
        self.member_id = member_id

    @property
    def members(self) -> Tuple[str, ...]:
        return (self.member_id,)

    def __repr__(self) -> str:
        return f"Run({self.member_id!r}, level={self.level}, wave={self.progress.wave})"


class TeamRun(RunState):
    """One ledger and one weapon for every member of the team."""

    is_team = True

    def __init__(
        self,
        members: Iterable[str],
        weapon_type: Optional[WeaponType] = None,
        balance: BalanceSettings = DEFAULT_BALANCE,
        hooks: Optional[RunHooks] = None,
        clock: Clock = monotonic_now,
    ) -> None:
        super().__init__(balance.team_baseline, weapon_type, balance, hooks)
        self._members: List[str] = []
        for member in members:
            if member not in self._members:
                self._members.append(member)
        self.barrier = ParticipationBarrier(clock)

    @property
    def members(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._members)

    def add_member(self, member_id: str) -> bool:
        with self._lock:
            if member_id in self._members:
                return False
            self._members.append(member_id)
            return True

    def remove_member(self, member_id: str) -> bool:
        """Drop a member from the roster. Selection state is left to the coordinator."""

        with self._lock:
            if member_id not in self._members:
                return False
            self._members.remove(member_id)
            return True

    def __repr__(self) -> str:
        return f"TeamRun({list(self.members)!r}, level={self.level}, wave={self.progress.wave})"


__all__ = ["RunState", "Run", "TeamRun"]
