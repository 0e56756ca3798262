"""
Pytest fixtures for Eriantys tests.
"""

import pytest

from ..engine_core.game import Game
from ..engine_core.students import Color


@pytest.fixture
def game() -> Game:
    """A 3-player game with only the first player seated."""
    # first player chooses the number of players
    return Game("Dario", 3, seed=7)


@pytest.fixture
def full_game(game: Game) -> Game:
    """A 3-player game with a full roster, not started."""
    game.add_player("Lorenzo")
    game.add_player("Luca")
    return game


@pytest.fixture
def started_game(full_game: Game) -> Game:
    """A started 3-player game."""
    full_game.start_game()
    return full_game


@pytest.fixture
def two_player_game() -> Game:
    """A started 2-player game."""
    g = Game("Dario", 2, seed=11)
    g.add_player("Lorenzo")
    g.start_game()
    return g


def remove_from_entrance(board, amount: int) -> None:
    """Take `amount` students out of a board's entrance, any colors."""
    removed = 0
    for color in Color:
        while board.student_in_entrance(color) and removed < amount:
            board.remove_student_from_entrance(color)
            removed += 1
    assert removed == amount
