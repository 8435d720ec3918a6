"""Participation barrier for team reward selection."""
from __future__ import annotations

import threading
from typing import Dict, FrozenSet, Optional

from roguerun.engine.clock import Clock, monotonic_now


class ParticipationBarrier:
    """Set of members currently choosing a reward, with entry timestamps.

    The barrier only holds state. Callers that act on edge transitions take
    :attr:`lock` around their check, mutation and re-check so that the
    observed transition is consistent; the lock is re-entrant so the
    barrier's own methods can be called while it is held.
    """

    def __init__(self, clock: Clock = monotonic_now) -> None:
        self._clock = clock
        self._entries: Dict[str, float] = {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def enter(self, member_id: str) -> bool:
        """Add ``member_id``. Returns False if it was already present."""

        with self._lock:
            if member_id in self._entries:
                return False
            self._entries[member_id] = self._clock()
            return True

    def leave(self, member_id: str) -> bool:
        """Remove ``member_id``. Unknown members are ignored."""

        with self._lock:
            return self._entries.pop(member_id, None) is not None

    def is_anyone_participating(self) -> bool:
        with self._lock:
            return bool(self._entries)

    def participants(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._entries)

    def entered_at(self, member_id: str) -> Optional[float]:
        with self._lock:
            return self._entries.get(member_id)

    def __contains__(self, member_id: object) -> bool:
        with self._lock:
            return member_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["ParticipationBarrier"]
