"""
Engine Core - Authoritative game state and rule enforcement.

The engine:
1. Picks the variant constants for the player count
2. Registers players and sets up the table
3. Validates every move before applying it
4. Applies actions via the reducer
"""

from .errors import EngineError, InvalidArgument, IllegalState, IndexOutOfRange
from .constants import GameConstants, Variant, TWO_PLAYERS, THREE_PLAYERS, constants_for
from .students import Color, StudentSet, StudentBag
from .cloud import CloudTile
from .board import Board, TowerColor
from .archipelago import Archipelago, IslandTile
from .player import Player
from .game import Game, GamePhase
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action

__all__ = [
    "EngineError",
    "InvalidArgument",
    "IllegalState",
    "IndexOutOfRange",
    "GameConstants",
    "Variant",
    "TWO_PLAYERS",
    "THREE_PLAYERS",
    "constants_for",
    "Color",
    "StudentSet",
    "StudentBag",
    "CloudTile",
    "Board",
    "TowerColor",
    "Archipelago",
    "IslandTile",
    "Player",
    "Game",
    "GamePhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
]
