"""
API Module - HTTP interface to the engine.

Clients:
1. Open a table (session)
2. Join until the roster is full
3. Start and play through actions
4. Read the full game state at any time

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    JoinRequest,
    ActionRequest,
    # Responses
    ActionResponse,
    GameStateResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    BoardInfo,
    IslandInfo,
    CloudInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "JoinRequest",
    "ActionRequest",
    # Responses
    "ActionResponse",
    "GameStateResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "BoardInfo",
    "IslandInfo",
    "CloudInfo",
    # Service
    "APIService",
    "create_app",
]
