"""
Reducer - Applies actions to a game.

The reducer is the single point of state mutation for callers outside
the engine. All changes driven by sessions and the API go through
apply_action().

Design principles:
- (game, action) -> new game: the input game is never touched
- Validates before applying
- Returns ActionResult with success/failure
- Rule violations raised by the Game become failed results
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging

from .action import Action, ActionPayload, ActionResult, ActionType, PLAYER_ACTIONS, SETUP_ACTIONS
from .errors import EngineError, InvalidArgument
from .game import Game, GamePhase

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to a game.

    Stateless - all state is in the Game. Each action runs on a
    deep copy, so a failure halfway through leaves nothing behind.
    """
    record_history: bool = True

    def apply(self, game: Game, action: Action) -> ActionResult:
        """
        Apply an action to the game.

        Returns ActionResult with the new game or an error.
        """
        validation_error = self._validate_action(game, action)
        if validation_error:
            logger.warning("Rejected %s: %s", action.action_type.value, validation_error)
            return ActionResult.failure(validation_error, error_code="INVALID_ACTION")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        new_game = game.clone()
        try:
            changes = handler(new_game, action.payload)
        except EngineError as e:
            logger.warning("Rejected %s: %s", action.action_type.value, e)
            return ActionResult.failure(str(e), error_code=e.error_code)

        if self.record_history:
            new_game.action_history.append(action)
        return ActionResult.success_with_state(new_game, changes=changes)

    def _validate_action(self, game: Game, action: Action) -> str | None:
        """
        Validate that an action is allowed in the current phase.

        Returns error message if invalid, None if valid.
        """
        if game.phase == GamePhase.GAME_OVER:
            return "Game is over - no actions allowed"

        if game.phase == GamePhase.SETUP and action.action_type not in SETUP_ACTIONS:
            return "Game not started - only setup actions allowed"

        if action.action_type in PLAYER_ACTIONS:
            nickname = action.payload.nickname
            if game.get_player(nickname) is None:
                return f"Player {nickname} not found"
            if nickname != game.current_player.nickname:
                return f"Not {nickname}'s turn"

        return None

    def _get_handler(self, action_type: ActionType) -> Callable[[Game, ActionPayload], list[str]] | None:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.ADD_PLAYER: self._handle_add_player,
            ActionType.START_GAME: self._handle_start_game,
            ActionType.BAG_TO_CLOUDS: self._handle_bag_to_clouds,
            ActionType.MOVE_TO_DINING_ROOM: self._handle_move_to_dining_room,
            ActionType.MOVE_TO_ISLAND: self._handle_move_to_island,
            ActionType.MOVE_MOTHER_NATURE: self._handle_move_mother_nature,
            ActionType.CLOUD_TO_BOARD: self._handle_cloud_to_board,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers.get(action_type)

    def _handle_add_player(self, game: Game, payload: ActionPayload) -> list[str]:
        before = game.num_players
        game.add_player(payload.nickname or "")
        if game.num_players == before:
            return [f"Roster full, {payload.nickname} was not added"]
        return [f"{payload.nickname} joined the game"]

    def _handle_start_game(self, game: Game, payload: ActionPayload) -> list[str]:
        game.start_game()
        return [
            f"Game started, mother nature on island {game.mother_nature}",
            f"{game.current_player.nickname} plays first",
        ]

    def _handle_bag_to_clouds(self, game: Game, payload: ActionPayload) -> list[str]:
        game.bag_to_clouds()
        return [f"Refilled {len(game.cloud_tiles)} clouds from the bag"]

    def _handle_move_to_dining_room(self, game: Game, payload: ActionPayload) -> list[str]:
        color = _require(payload.color, "color")
        game.move_student_to_dining_room(color)
        changes = [f"{payload.nickname} moved a {color.value} student to the dining room"]
        if game.professor_owner(color) is game.current_player:
            changes.append(f"{payload.nickname} holds the {color.value} professor")
        return changes

    def _handle_move_to_island(self, game: Game, payload: ActionPayload) -> list[str]:
        color = _require(payload.color, "color")
        island_index = _require(payload.island_index, "island_index")
        game.move_student_to_island(color, island_index)
        return [f"{payload.nickname} moved a {color.value} student to island {island_index}"]

    def _handle_move_mother_nature(self, game: Game, payload: ActionPayload) -> list[str]:
        steps = _require(payload.steps, "steps")
        game.move_mother_nature(steps)
        changes = [f"Mother nature moved to island {game.mother_nature}"]
        tower = game.archipelago[game.mother_nature].tower
        if tower is not None:
            changes.append(f"Island {game.mother_nature} is under {tower.value} towers")
        if game.is_game_over:
            winner = game.winner
            changes.append(f"Game over: {game.game_over_reason}")
            changes.append(f"Winner: {winner.nickname}" if winner else "The game is a draw")
        return changes

    def _handle_cloud_to_board(self, game: Game, payload: ActionPayload) -> list[str]:
        cloud_index = _require(payload.cloud_index, "cloud_index")
        game.cloud_to_board(cloud_index)
        return [f"{payload.nickname} took the students on cloud {cloud_index}"]

    def _handle_end_turn(self, game: Game, payload: ActionPayload) -> list[str]:
        game.end_turn()
        return [f"Turn ended. Next player: {game.current_player.nickname}"]


def _require(value, name: str):
    if value is None:
        raise InvalidArgument(f"Missing {name}")
    return value


def apply_action(game: Game, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(game, action)
