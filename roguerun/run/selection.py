"""Reward selection sessions and the automation pause they imply."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from roguerun.engine.clock import Clock, monotonic_now
from roguerun.engine.logger import GameLogger
from roguerun.rewards.generator import generate_rewards
from roguerun.rewards.models import Reward
from roguerun.run.apply import apply
from roguerun.run.barrier import ParticipationBarrier
from roguerun.run.state import RunState


class SelectionCoordinator:
    """Drives the participation barrier for the presentation layer.

    Automation for every online member stops when the first member opens a
    menu and restarts when the last one closes it. Intermediate enters and
    leaves do not touch automation. A solo run uses a private barrier, so the
    same rule reads as stop on open, start on close.

    Each enter opens a new session for the member. A ``selecting`` block only
    leaves for the session it opened, so a stale block exiting after the
    member re-entered does not release the newer session.
    """

    def __init__(
        self,
        target: RunState,
        *,
        rng=None,
        clock: Clock = monotonic_now,
        logger: Optional[GameLogger] = None,
    ) -> None:
        self.target = target
        self.rng = rng
        self.logger = logger.channel("barrier") if logger else None
        self.reward_logger = logger.channel("rewards") if logger else None
        self.weapon_logger = logger.channel("weapons") if logger else None
        barrier = getattr(target, "barrier", None)
        self.barrier: ParticipationBarrier = barrier if barrier is not None else ParticipationBarrier(clock)
        self._sessions: Dict[str, object] = {}

    def _stop_all(self) -> None:
        for member in self.target.online_members():
            self.target.hooks.stop_automation(member)

    def _start_all(self) -> None:
        for member in self.target.online_members():
            self.target.hooks.start_automation(member)

    def _enter(self, member_id: str) -> Tuple[bool, object]:
        token = object()
        with self.barrier.lock:
            was_active = self.barrier.is_anyone_participating()
            self.barrier.enter(member_id)
            self._sessions[member_id] = token
            edge = not was_active and self.barrier.is_anyone_participating()
            if edge:
                self._stop_all()
        if self.logger:
            if edge:
                self.logger.info("%s opened selection, automation paused", member_id)
            else:
                self.logger.debug("%s opened selection", member_id)
        return edge, token

    def _leave(self, member_id: str, token: Optional[object] = None) -> bool:
        with self.barrier.lock:
            if token is not None and self._sessions.get(member_id) is not token:
                stale = True
                left = edge = False
            else:
                stale = False
                self._sessions.pop(member_id, None)
                was_active = self.barrier.is_anyone_participating()
                left = self.barrier.leave(member_id)
                edge = was_active and not self.barrier.is_anyone_participating()
                if edge:
                    self._start_all()
        if self.logger:
            if stale:
                self.logger.debug("%s stale selection closed, newer one kept", member_id)
            elif edge:
                self.logger.info("%s closed selection, automation resumed", member_id)
            elif left:
                self.logger.debug("%s closed selection", member_id)
        return edge

    def enter_selection(self, member_id: str) -> bool:
        """Mark ``member_id`` as selecting. Returns True on the 0 -> 1 edge."""

        return self._enter(member_id)[0]

    def leave_selection(self, member_id: str) -> bool:
        """Clear ``member_id``. Returns True on the 1 -> 0 edge."""

        return self._leave(member_id)

    def handle_disconnect(self, member_id: str) -> bool:
        if self.logger and member_id in self.barrier:
            self.logger.warning("%s disconnected mid-selection", member_id)
        return self.leave_selection(member_id)

    @contextmanager
    def selecting(self, member_id: str) -> Iterator[List[Reward]]:
        """Hold ``member_id`` in the barrier for the body and yield a fresh menu.

        Leaving happens exactly once, when the block exits.
        """

        _, token = self._enter(member_id)
        try:
            yield self.menu()
        finally:
            self._leave(member_id, token)

    def menu(self, count: Optional[int] = None) -> List[Reward]:
        target = self.target
        return generate_rewards(
            target.balance.menu_size if count is None else count,
            target.level,
            target.luck,
            target,
            rng=self.rng,
            balance=target.balance,
            logger=self.reward_logger,
        )

    def reroll(self, member_id: str) -> Optional[List[Reward]]:
        """Spend a reroll for a new menu; ``None`` when none are left."""

        if not self.target.progress.use_reroll():
            if self.reward_logger:
                self.reward_logger.debug("%s has no rerolls left", member_id)
            return None
        return self.menu()

    def confirm(self, member_id: str, reward: Reward) -> None:
        """Apply the chosen reward. Closing the selection is left to the session that opened it."""

        if self.reward_logger:
            self.reward_logger.debug("%s confirmed %s", member_id, reward.name)
        apply(reward, self.target, self.reward_logger, self.weapon_logger)


__all__ = ["SelectionCoordinator"]
