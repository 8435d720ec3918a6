"""Discrete sampling helpers shared by the reward generators."""
from __future__ import annotations

import random
from typing import Callable, Generic, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

MAX_EXCLUSION_TRIES = 50


class WeightedTable(Generic[T]):
    """Cumulative thresholds on a uniform draw.

    ``bounds`` lists ``(upper, kind)`` pairs in ascending order; a draw below
    ``upper`` selects ``kind``. The last kind catches everything above.
    """

    def __init__(self, bounds: Sequence[Tuple[float, T]]) -> None:
        if not bounds:
            raise ValueError("WeightedTable needs at least one entry")
        self._bounds = tuple(bounds)

    @property
    def kinds(self) -> Tuple[T, ...]:
        return tuple(kind for _, kind in self._bounds)

    def pick(self, roll: float) -> T:
        for upper, kind in self._bounds:
            if roll < upper:
                return kind
        return self._bounds[-1][1]

    def draw(self, rng=None) -> T:
        rng = rng or random
        return self.pick(rng.random())

    def share(self, kind: T) -> float:
        """Probability mass of ``kind`` under a uniform draw."""

        lower = 0.0
        total = 0.0
        for index, (upper, entry) in enumerate(self._bounds):
            top = 1.0 if index == len(self._bounds) - 1 else min(upper, 1.0)
            if entry == kind:
                total += max(0.0, top - lower)
            lower = max(lower, top)
        return total


def sample_excluding(
    draw: Callable[[], T],
    excluded: Optional[T],
    max_tries: int,
    fallback: T,
    on_fallback: Optional[Callable[[], None]] = None,
) -> T:
    """Redraw while ``excluded`` comes up, giving up after ``max_tries`` draws.

    The underlying distribution is never renormalised; a run of ``max_tries``
    excluded draws yields ``fallback``.
    """

    result = draw()
    if excluded is None:
        return result
    attempts = 1
    while result == excluded and attempts < max_tries:
        result = draw()
        attempts += 1
    if result == excluded:
        if on_fallback is not None:
            on_fallback()
        return fallback
    return result


def pick_uniform(options: Sequence[T], rng=None) -> T:
    rng = rng or random
    index = int(rng.random() * len(options))
    return options[min(index, len(options) - 1)]


__all__ = ["WeightedTable", "sample_excluding", "pick_uniform", "MAX_EXCLUSION_TRIES"]
