"""Distance checks for pickups, chests and shrine channelling."""
from __future__ import annotations

from pygame.math import Vector3

from roguerun.progression.stats import StatKey, StatLedger

INTERACT_DISTANCE = 3.0
SHRINE_CHANNEL_START = 3.0
SHRINE_CHANNEL_KEEP = 3.5


def within_pickup_range(player_pos: Vector3, item_pos: Vector3, ledger: StatLedger) -> bool:
    reach = max(0.0, ledger.get(StatKey.PICKUP_RANGE))
    return player_pos.distance_squared_to(item_pos) <= reach * reach


def can_open_chest(player_pos: Vector3, chest_pos: Vector3) -> bool:
    return player_pos.distance_to(chest_pos) <= INTERACT_DISTANCE


class ShrineChannel:
    """Tracks one member channelling a shrine.

    Channelling starts inside :data:`SHRINE_CHANNEL_START` and survives small
    drift up to :data:`SHRINE_CHANNEL_KEEP`; leaving that radius breaks it.
    """

    def __init__(self, shrine_pos: Vector3) -> None:
        self.shrine_pos = Vector3(shrine_pos)
        self.active = False

    def try_start(self, player_pos: Vector3) -> bool:
        if player_pos.distance_to(self.shrine_pos) <= SHRINE_CHANNEL_START:
            self.active = True
        return self.active

    def update(self, player_pos: Vector3) -> bool:
        """Returns whether the channel is still running."""

        if self.active and player_pos.distance_to(self.shrine_pos) > SHRINE_CHANNEL_KEEP:
            self.active = False
        return self.active


__all__ = [
    "within_pickup_range",
    "can_open_chest",
    "ShrineChannel",
    "INTERACT_DISTANCE",
    "SHRINE_CHANNEL_START",
    "SHRINE_CHANNEL_KEEP",
]
