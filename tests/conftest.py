from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Dict, List, Set, Tuple

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from roguerun.engine.telemetry import reset_reward_telemetry
from roguerun.run.hooks import RunHooks


class RecordingHooks(RunHooks):
    """Remembers every collaborator call and flags double stops/starts."""

    def __init__(self, offline: Set[str] = frozenset()) -> None:
        self.offline = set(offline)
        self.events: List[Tuple[str, str]] = []
        self.attributes: Dict[Tuple[str, str], float] = {}
        self.running: Dict[str, bool] = {}
        self.violations: List[Tuple[str, str]] = []
        self._lock = threading.Lock()

    def _toggle(self, kind: str, member_id: str, running: bool) -> None:
        with self._lock:
            self.events.append((kind, member_id))
            if self.running.get(member_id, True) == running:
                self.violations.append((kind, member_id))
            self.running[member_id] = running

    def stop_automation(self, member_id: str) -> None:
        self._toggle("stop", member_id, False)

    def start_automation(self, member_id: str) -> None:
        self._toggle("start", member_id, True)

    def apply_max_health(self, member_id: str, health: float) -> None:
        self.attributes[("health", member_id)] = health

    def apply_movement_speed(self, member_id: str, speed: float) -> None:
        self.attributes[("speed", member_id)] = speed

    def apply_armor(self, member_id: str, armor: float) -> None:
        self.attributes[("armor", member_id)] = armor

    def is_online(self, member_id: str) -> bool:
        return member_id not in self.offline

    def count(self, kind: str) -> int:
        return sum(1 for event, _ in self.events if event == kind)


@pytest.fixture
def hooks() -> RecordingHooks:
    return RecordingHooks()


@pytest.fixture(autouse=True)
def fresh_telemetry():
    reset_reward_telemetry()
    yield
    reset_reward_telemetry()
