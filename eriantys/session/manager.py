"""
Session Manager - Creates and manages game sessions.

A session is one Game plus its bookkeeping. The manager is the
explicit registry of running games: each session owns its Game, and
nothing is shared between sessions.

LIFECYCLE:
1. First player creates a session (expected player count fixed here)
2. Other players join until the roster is full
3. Start, then play through actions
4. Game ends or players leave -> session destroyed

PERSISTENCE RULES:
- In-memory only
- Ending a session drops its Game

CONCURRENCY:
- A Game is not thread-safe. Each session carries a lock and every
  action on it is applied while holding that lock.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import threading
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.game import Game, GamePhase
from ..engine_core.reducer import Reducer

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    LOBBY = "lobby"  # Waiting for players
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # Players quit


@dataclass
class Session:
    """
    A game session.

    Contains:
    - The Game it drives
    - A lock serializing actions on that Game
    """
    session_id: str
    game: Game | None
    created_at: float
    state: SessionState = SessionState.LOBBY
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state in {SessionState.LOBBY, SessionState.ACTIVE}

    def sync_state(self) -> None:
        """Derive the session state from the game phase."""
        if not self.game or not self.is_active():
            return
        if self.game.phase == GamePhase.PLAYING:
            self.state = SessionState.ACTIVE
        elif self.game.phase == GamePhase.GAME_OVER:
            self.state = SessionState.GAME_OVER


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Route actions to the right Game, one at a time per session
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, reducer: Reducer | None = None):
        self._sessions: dict[str, Session] = {}
        self._reducer = reducer or Reducer()

    def create_session(
        self,
        first_player: str,
        num_players: int,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            first_player: Nickname of the creating player
            num_players: Expected number of players (2 or 3)
            seed: Optional seed for a reproducible game

        Returns:
            New Session waiting for the other players

        Raises:
            InvalidArgument: empty nickname or unsupported player count
        """
        game = Game(first_player, num_players, seed=seed)
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game,
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.info(
            "Session %s created by %s for %d players",
            session.session_id, first_player, num_players,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def apply(self, session_id: str, action: Action) -> ActionResult:
        """
        Apply an action to a session's game.

        The session's game is replaced only when the action succeeds.
        """
        session = self._sessions.get(session_id)
        if not session or not session.game:
            return ActionResult.failure("Session not found", error_code="SESSION_NOT_FOUND")

        with session.lock:
            # ended while waiting for the lock
            if not session.game:
                return ActionResult.failure("Session not found", error_code="SESSION_NOT_FOUND")
            result = self._reducer.apply(session.game, action)
            if result.success:
                session.game = result.new_state
                session.sync_state()
        return result

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop its game.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        with session.lock:
            if reason == "completed":
                session.state = SessionState.GAME_OVER
            else:
                session.state = SessionState.ABANDONED
            session.game = None
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
            and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
