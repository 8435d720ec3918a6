"""Injectable time and randomness sources."""
from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]


def monotonic_now() -> float:
    return time.monotonic()


class ScriptedRolls:
    """Replays a fixed sequence of uniform draws, cycling when exhausted."""

    def __init__(self, rolls) -> None:
        self._rolls = [float(value) for value in rolls]
        if not self._rolls:
            raise ValueError("ScriptedRolls needs at least one value")
        self._index = 0

    def random(self) -> float:
        value = self._rolls[self._index % len(self._rolls)]
        self._index += 1
        return value

    @property
    def consumed(self) -> int:
        return self._index


__all__ = ["Clock", "ScriptedRolls", "monotonic_now"]
