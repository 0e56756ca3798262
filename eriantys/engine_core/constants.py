"""
Game Constants - Numbers that differ between the 2 and 3 player variants.

The variant is picked once, when the Game is created, and never changes.
"""

from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, Field

from .errors import InvalidArgument


class Variant(str, Enum):
    """Supported player-count variants."""
    TWO_PLAYERS = "two_players"
    THREE_PLAYERS = "three_players"


class GameConstants(BaseModel):
    """Capacities and counts for one variant."""
    variant: Variant
    num_players: int = Field(ge=2, le=3)
    entrance_capacity: int = Field(gt=0)
    cloud_capacity: int = Field(gt=0)
    num_towers: int = Field(gt=0)

    # Shared by both variants
    num_islands: int = 12
    dining_room_capacity: int = 10
    bag_students_per_color: int = 24
    island_students_per_color: int = 2
    min_islands: int = 3

    model_config = {"frozen": True}

    @property
    def fillable_threshold(self) -> int:
        """Entrance occupancy at which a whole cloud fits exactly."""
        return self.entrance_capacity - self.cloud_capacity


TWO_PLAYERS = GameConstants(
    variant=Variant.TWO_PLAYERS,
    num_players=2,
    entrance_capacity=7,
    cloud_capacity=3,
    num_towers=8,
)

THREE_PLAYERS = GameConstants(
    variant=Variant.THREE_PLAYERS,
    num_players=3,
    entrance_capacity=9,
    cloud_capacity=4,
    num_towers=6,
)

VARIANTS = {
    2: TWO_PLAYERS,
    3: THREE_PLAYERS,
}


def constants_for(num_players: int) -> GameConstants:
    """Get the constant set for a player count."""
    try:
        return VARIANTS[num_players]
    except KeyError:
        raise InvalidArgument(
            f"Unsupported number of players: {num_players} (expected 2 or 3)"
        ) from None
