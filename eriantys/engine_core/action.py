"""
Action System - Actions, payloads, and results.

Actions represent:
1. Setup actions (join, start)
2. Round actions (refill clouds)
3. Player actions (move students, move mother nature, take a cloud, end turn)

Callers outside the engine (sessions, API) drive a Game through actions
so that each change is validated, applied atomically and logged.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .students import Color


class ActionType(Enum):
    """Types of actions in the system."""
    # Setup
    ADD_PLAYER = "add_player"
    START_GAME = "start_game"

    # Round
    BAG_TO_CLOUDS = "bag_to_clouds"

    # Player actions
    MOVE_TO_DINING_ROOM = "move_to_dining_room"
    MOVE_TO_ISLAND = "move_to_island"
    MOVE_MOTHER_NATURE = "move_mother_nature"
    CLOUD_TO_BOARD = "cloud_to_board"
    END_TURN = "end_turn"


PLAYER_ACTIONS = {
    ActionType.MOVE_TO_DINING_ROOM,
    ActionType.MOVE_TO_ISLAND,
    ActionType.MOVE_MOTHER_NATURE,
    ActionType.CLOUD_TO_BOARD,
    ActionType.END_TURN,
}

SETUP_ACTIONS = {
    ActionType.ADD_PLAYER,
    ActionType.START_GAME,
}


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer and the Game.
    """
    nickname: str | None = None
    color: Color | None = None
    island_index: int | None = None
    cloud_index: int | None = None
    steps: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to a game.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)
    timestamp: float | None = None
    action_id: str | None = None

    @classmethod
    def add_player(cls, nickname: str) -> Action:
        return cls(ActionType.ADD_PLAYER, ActionPayload(nickname=nickname))

    @classmethod
    def start_game(cls) -> Action:
        return cls(ActionType.START_GAME)

    @classmethod
    def bag_to_clouds(cls) -> Action:
        return cls(ActionType.BAG_TO_CLOUDS)

    @classmethod
    def move_to_dining_room(cls, nickname: str, color: Color) -> Action:
        """Factory for entrance -> dining room."""
        return cls(
            ActionType.MOVE_TO_DINING_ROOM,
            ActionPayload(nickname=nickname, color=color),
        )

    @classmethod
    def move_to_island(cls, nickname: str, color: Color, island_index: int) -> Action:
        """Factory for entrance -> island."""
        return cls(
            ActionType.MOVE_TO_ISLAND,
            ActionPayload(nickname=nickname, color=color, island_index=island_index),
        )

    @classmethod
    def move_mother_nature(cls, nickname: str, steps: int) -> Action:
        return cls(
            ActionType.MOVE_MOTHER_NATURE,
            ActionPayload(nickname=nickname, steps=steps),
        )

    @classmethod
    def cloud_to_board(cls, nickname: str, cloud_index: int) -> Action:
        return cls(
            ActionType.CLOUD_TO_BOARD,
            ActionPayload(nickname=nickname, cloud_index=cloud_index),
        )

    @classmethod
    def end_turn(cls, nickname: str) -> Action:
        return cls(ActionType.END_TURN, ActionPayload(nickname=nickname))


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New game (if succeeded)
    - Error and error code (if failed)
    - Human-readable changes
    """
    success: bool
    new_state: Any | None = None  # Game
    error: str | None = None
    error_code: str | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
