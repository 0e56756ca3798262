"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_ARGUMENT: Malformed input (empty nickname, bad player count)
- ILLEGAL_STATE: Move not allowed in the current game state
- INDEX_OUT_OF_RANGE: Cloud or island index does not exist
- INVALID_ACTION: Wrong phase or not the player's turn
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.action import ActionType
from ..engine_core.students import Color


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    LOBBY = "lobby"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    ILLEGAL_STATE = "ILLEGAL_STATE"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    INVALID_ACTION = "INVALID_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class BoardInfo(BaseModel):
    """A player's board."""
    entrance: dict[str, int]
    dining_room: dict[str, int]
    towers: int
    professors: list[str] = Field(default_factory=list)
    entrance_is_fillable: bool


class PlayerInfo(BaseModel):
    """Player information for display."""
    nickname: str
    tower_color: str
    is_current_turn: bool = False
    board: BoardInfo


class IslandInfo(BaseModel):
    """An island tile."""
    index: int
    size: int = 1
    tower: Optional[str] = None
    students: dict[str, int]
    has_mother_nature: bool = False


class CloudInfo(BaseModel):
    """A cloud tile."""
    index: int
    capacity: int
    students: dict[str, int]


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to open a new game table."""
    nickname: str = Field(description="Nickname of the creating player")
    num_players: int = Field(3, ge=2, le=3, description="Expected number of players")
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")


class JoinRequest(BaseModel):
    """Request to join an open table."""
    nickname: str


class ActionRequest(BaseModel):
    """A move by a player (or a round action)."""
    action_type: ActionType
    nickname: Optional[str] = None
    color: Optional[Color] = None
    island_index: Optional[int] = None
    cloud_index: Optional[int] = None
    steps: Optional[int] = Field(None, ge=1)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class GameStateResponse(BaseModel):
    """Full game state."""
    session_id: str
    status: SessionStatus
    phase: str
    expected_players: int
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player: Optional[str] = None
    mother_nature: int
    islands: list[IslandInfo] = Field(default_factory=list)
    clouds: list[CloudInfo] = Field(default_factory=list)
    bag_size: int = 0
    winner: Optional[str] = None
    game_over_reason: Optional[str] = None


class ActionResponse(BaseModel):
    """Result of an action."""
    success: bool
    changes: list[str] = Field(default_factory=list)
    game_state: Optional[GameStateResponse] = None


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    environment: str
