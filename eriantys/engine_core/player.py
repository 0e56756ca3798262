"""
Player - A registered player and the board they own.
"""

from __future__ import annotations

from .board import Board, TowerColor
from .constants import GameConstants


class Player:
    """A player in one game. Boards are never shared between players."""

    def __init__(self, nickname: str, tower_color: TowerColor, constants: GameConstants):
        self.nickname = nickname
        self.tower_color = tower_color
        self._board = Board(constants)

    @property
    def board(self) -> Board:
        return self._board

    def __repr__(self) -> str:
        return f"Player({self.nickname!r}, {self.tower_color.value})"
