"""
Tests for the reducer (state transitions).

Tests:
- Action application
- Input game is never mutated
- Validation
- Error handling
"""

import pytest

from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.game import Game, GamePhase
from ..engine_core.reducer import Reducer, apply_action
from ..engine_core.students import Color
from .conftest import remove_from_entrance


class TestSetupActions:
    """Tests for joining and starting through actions."""

    def test_add_player(self, game):
        result = apply_action(game, Action.add_player("Lorenzo"))

        assert result.success
        assert result.new_state.num_players == 2
        assert game.num_players == 1
        assert result.state_changes == ["Lorenzo joined the game"]

    def test_add_player_to_full_roster(self, full_game):
        result = apply_action(full_game, Action.add_player("Matteo"))

        assert result.success
        assert result.new_state.num_players == 3
        assert "Roster full" in result.state_changes[0]

    def test_add_duplicate_player(self, game):
        result = apply_action(game, Action.add_player("Dario"))

        assert not result.success
        assert result.error_code == "INVALID_ARGUMENT"
        assert "already taken" in result.error

    def test_add_player_without_nickname(self, game):
        result = apply_action(game, Action(ActionType.ADD_PLAYER))

        assert not result.success
        assert result.error_code == "INVALID_ARGUMENT"

    def test_start_game(self, full_game):
        result = apply_action(full_game, Action.start_game())

        assert result.success
        assert result.new_state.phase == GamePhase.PLAYING
        assert full_game.phase == GamePhase.SETUP
        assert "Dario plays first" in result.state_changes

    def test_start_without_full_roster(self, game):
        result = apply_action(game, Action.start_game())

        assert not result.success
        assert result.error_code == "ILLEGAL_STATE"

    def test_round_action_during_setup(self, full_game):
        result = apply_action(full_game, Action.bag_to_clouds())

        assert not result.success
        assert result.error_code == "INVALID_ACTION"
        assert "not started" in result.error

    def test_setup_action_after_start(self, started_game):
        result = apply_action(started_game, Action.start_game())

        assert not result.success
        assert result.error_code == "ILLEGAL_STATE"


class TestPlayerActions:
    """Tests for the current player's actions."""

    def test_move_to_dining_room(self, started_game):
        color = next(iter(started_game.current_player.board.entrance))
        action = Action.move_to_dining_room("Dario", color)

        result = apply_action(started_game, action)

        assert result.success
        new_board = result.new_state.current_player.board
        assert new_board.dining_room_count(color) == 1
        assert new_board.entrance_size() == 8
        assert f"Dario holds the {color.value} professor" in result.state_changes

        # input game untouched
        assert started_game.current_player.board.entrance_size() == 9
        assert started_game.professor_owner(color) is None

    def test_move_to_island(self, started_game):
        color = next(iter(started_game.current_player.board.entrance))
        before = started_game.archipelago[5].count(color)

        result = apply_action(started_game, Action.move_to_island("Dario", color, 5))

        assert result.success
        assert result.new_state.archipelago[5].count(color) == before + 1
        assert started_game.archipelago[5].count(color) == before

    def test_move_to_missing_island(self, started_game):
        color = next(iter(started_game.current_player.board.entrance))

        result = apply_action(started_game, Action.move_to_island("Dario", color, 40))

        assert not result.success
        assert result.error_code == "INDEX_OUT_OF_RANGE"

    def test_move_mother_nature(self, started_game):
        start = started_game.mother_nature

        result = apply_action(started_game, Action.move_mother_nature("Dario", 2))

        assert result.success
        assert result.new_state.mother_nature == (start + 2) % 12
        assert started_game.mother_nature == start

    def test_cloud_to_board(self, started_game):
        refilled = apply_action(started_game, Action.bag_to_clouds()).new_state
        remove_from_entrance(refilled.current_player.board, 4)

        result = apply_action(refilled, Action.cloud_to_board("Dario", 2))

        assert result.success
        assert result.new_state.current_player.board.entrance_size() == 9
        assert result.new_state.cloud_tiles[2].is_empty
        assert refilled.cloud_tiles[2].num_students() == 4

    def test_cloud_to_board_at_wrong_occupancy(self, started_game):
        refilled = apply_action(started_game, Action.bag_to_clouds()).new_state

        result = apply_action(refilled, Action.cloud_to_board("Dario", 0))

        assert not result.success
        assert result.error_code == "ILLEGAL_STATE"

    def test_end_turn(self, started_game):
        result = apply_action(started_game, Action.end_turn("Dario"))

        assert result.success
        assert result.new_state.current_player.nickname == "Lorenzo"
        assert started_game.current_player.nickname == "Dario"


class TestValidation:
    """Tests for action validation."""

    def test_wrong_turn(self, started_game):
        result = apply_action(started_game, Action.end_turn("Lorenzo"))

        assert not result.success
        assert result.error_code == "INVALID_ACTION"
        assert "turn" in result.error.lower()

    def test_unknown_player(self, started_game):
        result = apply_action(started_game, Action.end_turn("Matteo"))

        assert not result.success
        assert "not found" in result.error

    def test_missing_payload_field(self, started_game):
        action = Action(ActionType.MOVE_TO_ISLAND, ActionPayload(nickname="Dario", color=Color.RED))

        result = apply_action(started_game, action)

        assert not result.success
        assert result.error_code == "INVALID_ARGUMENT"
        assert "island_index" in result.error

    def test_zero_steps(self, started_game):
        result = apply_action(started_game, Action.move_mother_nature("Dario", 0))

        assert not result.success
        assert result.error_code == "INVALID_ARGUMENT"

    def test_no_actions_after_game_over(self, two_player_game):
        two_player_game._end_game("test")

        result = apply_action(two_player_game, Action.end_turn("Dario"))

        assert not result.success
        assert result.error == "Game is over - no actions allowed"


class TestGameOverThroughActions:
    """The final conquest is reported in the result."""

    def test_last_tower(self, two_player_game):
        dario = two_player_game.current_player
        dario.board.place_towers(7)
        dario.board.add_professor(Color.RED)
        target = two_player_game.archipelago.step(two_player_game.mother_nature, 1)
        two_player_game.archipelago[target].add_student(Color.RED)

        result = apply_action(two_player_game, Action.move_mother_nature("Dario", 1))

        assert result.success
        assert result.new_state.is_game_over
        assert "Winner: Dario" in result.state_changes
        assert not two_player_game.is_game_over


class TestHistory:
    """Tests for the action log."""

    def test_success_is_recorded(self, game):
        action = Action.add_player("Lorenzo")
        result = apply_action(game, action)

        assert result.new_state.action_history == [action]
        assert game.action_history == []

    def test_failure_is_not_recorded(self, started_game):
        result = apply_action(started_game, Action.end_turn("Luca"))

        assert not result.success
        assert started_game.action_history == []

    def test_history_entries_are_shared(self, game):
        first = apply_action(game, Action.add_player("Lorenzo")).new_state
        second = apply_action(first, Action.add_player("Luca")).new_state

        assert second.action_history[0] is first.action_history[0]
        assert second.action_history is not first.action_history
        assert len(first.action_history) == 1

    def test_history_disabled(self, game):
        reducer = Reducer(record_history=False)

        result = reducer.apply(game, Action.add_player("Lorenzo"))

        assert result.success
        assert result.new_state.action_history == []

    def test_full_turn_sequence(self):
        reducer = Reducer()
        g = Game("Dario", 2, seed=4)
        actions = [Action.add_player("Lorenzo"), Action.start_game(), Action.bag_to_clouds()]
        for action in actions:
            result = reducer.apply(g, action)
            assert result.success, result.error
            g = result.new_state

        board = g.current_player.board
        for _ in range(3):
            color = next(iter(board.entrance))
            result = reducer.apply(g, Action.move_to_dining_room("Dario", color))
            assert result.success, result.error
            g = result.new_state
            board = g.current_player.board

        for action in (
            Action.move_mother_nature("Dario", 1),
            Action.cloud_to_board("Dario", 0),
            Action.end_turn("Dario"),
        ):
            result = reducer.apply(g, action)
            assert result.success, result.error
            g = result.new_state

        assert g.current_player.nickname == "Lorenzo"
        assert g.players[0].board.entrance_size() == 7
        assert len(g.action_history) == 9


@pytest.mark.parametrize("action_type", list(ActionType))
def test_every_action_type_has_a_handler(action_type):
    assert Reducer()._get_handler(action_type) is not None
