"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when the first player opens a table
- Holds the current Game
- Serializes actions on that Game
- Destroyed when the game ends
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
