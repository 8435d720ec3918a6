"""Run state, reward application and the team selection barrier."""

from .apply import apply, apply_item
from .barrier import ParticipationBarrier
from .hooks import RunHooks
from .selection import SelectionCoordinator
from .state import Run, RunState, TeamRun

__all__ = [
    "apply",
    "apply_item",
    "ParticipationBarrier",
    "RunHooks",
    "SelectionCoordinator",
    "Run",
    "RunState",
    "TeamRun",
]
