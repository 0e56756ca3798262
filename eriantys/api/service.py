"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages sessions
3. Formats game state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateSessionRequest,
    JoinRequest,
    ActionRequest,
    # Responses
    ActionResponse,
    ErrorResponse,
    GameStateResponse,
    # Shared
    BoardInfo,
    CloudInfo,
    IslandInfo,
    PlayerInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..engine_core.action import Action, ActionPayload
from ..engine_core.errors import EngineError
from ..engine_core.player import Player
from ..session import Session, SessionManager

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Open a table
        state = service.create_session(CreateSessionRequest(nickname="Dario"))

        # Join and start
        service.join(state.session_id, JoinRequest(nickname="Luca"))
        service.apply_action(state.session_id, ActionRequest(action_type="start_game"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse | ErrorResponse:
        """Open a new table with the creating player seated."""
        try:
            session = self.session_manager.create_session(
                first_player=request.nickname,
                num_players=request.num_players,
                seed=request.seed,
            )
        except EngineError as e:
            logger.warning("Could not create session: %s", e)
            return ErrorResponse(error=str(e), error_code=_error_code(e.error_code))
        return self._build_game_state(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get current game state."""
        session = self.session_manager.get_session(session_id)
        if not session or not session.game:
            return _session_not_found()
        return self._build_game_state(session)

    def join(self, session_id: str, request: JoinRequest) -> ActionResponse | ErrorResponse:
        """Add a player to a table."""
        return self.apply_action(
            session_id,
            ActionRequest(action_type="add_player", nickname=request.nickname),
        )

    def apply_action(self, session_id: str, request: ActionRequest) -> ActionResponse | ErrorResponse:
        """Apply a player or round action."""
        action = Action(
            action_type=request.action_type,
            payload=ActionPayload(
                nickname=request.nickname,
                color=request.color,
                island_index=request.island_index,
                cloud_index=request.cloud_index,
                steps=request.steps,
            ),
        )
        result = self.session_manager.apply(session_id, action)
        if not result.success:
            return ErrorResponse(
                error=result.error or "Action failed",
                error_code=_error_code(result.error_code),
            )

        session = self.session_manager.get_session(session_id)
        if not session or not session.game:
            return _session_not_found()
        return ActionResponse(
            success=True,
            changes=result.state_changes,
            game_state=self._build_game_state(session),
        )

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a game session."""
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _build_game_state(self, session: Session) -> GameStateResponse:
        """Build complete game state response."""
        game = session.game
        current = game.current_player if game.started else None
        winner = game.winner

        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            phase=game.phase.value,
            expected_players=game.expected_player_count,
            players=[self._build_player(p, p is current) for p in game.players],
            current_player=current.nickname if current else None,
            mother_nature=game.mother_nature,
            islands=[
                IslandInfo(
                    index=idx,
                    size=island.size,
                    tower=island.tower.value if island.tower else None,
                    students=island.island_students.to_dict(),
                    has_mother_nature=game.started and idx == game.mother_nature,
                )
                for idx, island in enumerate(game.archipelago)
            ],
            clouds=[
                CloudInfo(
                    index=idx,
                    capacity=cloud.capacity,
                    students=cloud.students.to_dict(),
                )
                for idx, cloud in enumerate(game.cloud_tiles)
            ],
            bag_size=game.bag.size,
            winner=winner.nickname if winner else None,
            game_over_reason=game.game_over_reason,
        )

    def _build_player(self, player: Player, is_current: bool) -> PlayerInfo:
        board = player.board
        return PlayerInfo(
            nickname=player.nickname,
            tower_color=player.tower_color.value,
            is_current_turn=is_current,
            board=BoardInfo(
                entrance=board.entrance.to_dict(),
                dining_room=board.dining_room.to_dict(),
                towers=board.towers,
                professors=sorted(c.value for c in board.professors),
                entrance_is_fillable=board.entrance_is_fillable(),
            ),
        )


def _error_code(code: str | None) -> ErrorCode:
    try:
        return ErrorCode(code)
    except ValueError:
        return ErrorCode.INTERNAL_ERROR


def _session_not_found() -> ErrorResponse:
    return ErrorResponse(
        error="Session not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )
