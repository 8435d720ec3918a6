"""Boundary to the systems outside the run core (combat loop, player attributes)."""
from __future__ import annotations

BASE_MOVEMENT_SPEED = 0.1


def movement_speed_attribute(speed: float) -> float:
    """Participant movement attribute for a speed stat, clamped to [0, 1]."""

    return max(0.0, min(1.0, BASE_MOVEMENT_SPEED * speed))


class RunHooks:
    """No-op collaborator; the host game subclasses this.

    Calls are made outside the run's internal locks except for automation
    toggles, which are issued while the participation barrier is held.
    """

    def stop_automation(self, member_id: str) -> None:
        pass

    def start_automation(self, member_id: str) -> None:
        pass

    def apply_max_health(self, member_id: str, health: float) -> None:
        pass

    def apply_movement_speed(self, member_id: str, speed: float) -> None:
        pass

    def apply_armor(self, member_id: str, armor: float) -> None:
        pass

    def is_online(self, member_id: str) -> bool:
        return True


__all__ = ["RunHooks", "movement_speed_attribute", "BASE_MOVEMENT_SPEED"]
