"""
Game - The authoritative state of one Eriantys match.

The Game is the single mutation entry point: players, archipelago,
clouds, bag and mother nature are all owned here, and every rule
is checked here before anything changes.

Lifecycle:
1. Create with the first player's nickname and the expected player count
2. add_player() until the roster is full
3. start_game() sets up islands, bag, clouds and entrances
4. Each round: bag_to_clouds(), then per turn the current player moves
   students, moves mother nature, takes a cloud, and ends the turn
"""

from __future__ import annotations
from copy import deepcopy
from enum import Enum
import logging
import random

from .archipelago import Archipelago, IslandTile
from .board import TowerColor
from .cloud import CloudTile
from .constants import GameConstants, constants_for
from .errors import IllegalState, IndexOutOfRange, InvalidArgument
from .player import Player
from .students import Color, StudentBag, StudentSet

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


TOWER_ORDER = [TowerColor.WHITE, TowerColor.BLACK, TowerColor.GREY]


class Game:
    """
    One game session's rules engine.

    Not thread-safe: callers sharing a Game across threads must
    serialize access (see SessionManager).
    """

    def __init__(
        self,
        first_player_nickname: str,
        expected_player_count: int,
        seed: int | None = None,
        constants: GameConstants | None = None,
    ):
        if constants is None:
            constants = constants_for(expected_player_count)
        elif constants.num_players != expected_player_count:
            raise InvalidArgument(
                f"Constants are for {constants.num_players} players, "
                f"game expects {expected_player_count}"
            )
        self.constants = constants
        self.expected_player_count = expected_player_count
        self.random_seed = seed
        self.phase = GamePhase.SETUP
        self.game_over_reason: str | None = None

        self._rng = random.Random(seed)
        self._players: list[Player] = []
        self._archipelago = Archipelago(self.constants.num_islands)
        self._cloud_tiles: list[CloudTile] = []
        self._bag = StudentBag(rng=self._rng)
        self._mother_nature = 0
        self._current_player_idx = 0

        # History (for replay, logging)
        self.action_history: list = []

        self.add_player(first_player_nickname)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def started(self) -> bool:
        return self.phase != GamePhase.SETUP

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def num_players(self) -> int:
        return len(self._players)

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    @property
    def cloud_tiles(self) -> list[CloudTile]:
        return list(self._cloud_tiles)

    @property
    def archipelago(self) -> Archipelago:
        return self._archipelago

    @property
    def mother_nature(self) -> int:
        """Index of the island holding mother nature."""
        return self._mother_nature

    @property
    def current_player(self) -> Player:
        if not self._players:
            raise IllegalState("No players registered")
        return self._players[self._current_player_idx]

    @property
    def bag(self) -> StudentBag:
        return self._bag

    def get_player(self, nickname: str) -> Player | None:
        """Get player by nickname."""
        for p in self._players:
            if p.nickname == nickname:
                return p
        return None

    def professor_owner(self, color: Color) -> Player | None:
        """Player currently holding the professor of a color, if any."""
        for p in self._players:
            if p.board.has_professor(color):
                return p
        return None

    def influence(self, player: Player, island: IslandTile) -> int:
        """
        Influence of a player on an island.

        One point per student whose professor the player holds, plus
        one per tower of theirs on the island.
        """
        score = sum(island.count(color) for color in player.board.professors)
        if island.tower == player.tower_color:
            score += island.size
        return score

    @property
    def winner(self) -> Player | None:
        """
        Winner of a finished game.

        Fewest towers left on the board wins, ties broken by most
        professors. A tie on both is a draw (None).
        """
        if not self.is_game_over:
            return None

        def rank(p: Player) -> tuple[int, int]:
            return (p.board.towers, -len(p.board.professors))

        best = min(rank(p) for p in self._players)
        leaders = [p for p in self._players if rank(p) == best]
        return leaders[0] if len(leaders) == 1 else None

    def clone(self) -> Game:
        """
        Deep copy the game.

        Recorded actions are never mutated, so the copy gets a new history
        list holding the same Action objects.
        """
        memo = {id(self.action_history): list(self.action_history)}
        return deepcopy(self, memo)

    # =========================================================================
    # Setup
    # =========================================================================

    def add_player(self, nickname: str) -> None:
        """
        Register a player.

        Once the roster holds expected_player_count players, further
        registrations are ignored.
        """
        if not nickname or not nickname.strip():
            raise InvalidArgument("Nickname must not be empty")
        if len(self._players) >= self.expected_player_count:
            logger.debug("Roster full, ignoring player %r", nickname)
            return
        if self.get_player(nickname) is not None:
            raise InvalidArgument(f"Nickname {nickname!r} is already taken")

        tower_color = TOWER_ORDER[len(self._players)]
        self._players.append(Player(nickname, tower_color, self.constants))
        logger.info(
            "Player %r joined (%d/%d)",
            nickname, len(self._players), self.expected_player_count,
        )

    def start_game(self) -> None:
        """Set up the table once the roster is complete."""
        if self.started:
            raise IllegalState("Game already started")
        if len(self._players) != self.expected_player_count:
            raise IllegalState(
                f"Need {self.expected_player_count} players to start, "
                f"have {len(self._players)}"
            )

        # Islands are seeded from their own small bag before the main one is filled
        setup_bag = StudentBag(
            StudentSet.uniform(self.constants.island_students_per_color),
            rng=self._rng,
        )
        mother_nature = self._rng.randrange(len(self._archipelago))
        opposite = self._archipelago.opposite(mother_nature)
        for idx, island in enumerate(self._archipelago):
            if idx in (mother_nature, opposite):
                continue
            island.add_student(setup_bag.draw())

        self._bag = StudentBag(
            StudentSet.uniform(self.constants.bag_students_per_color),
            rng=self._rng,
        )
        self._mother_nature = mother_nature
        self._cloud_tiles = [
            CloudTile(self.constants.cloud_capacity)
            for _ in range(self.expected_player_count)
        ]
        for player in self._players:
            player.board.fill_entrance(
                self._bag.draw_many(self.constants.entrance_capacity)
            )

        self._current_player_idx = 0
        self.phase = GamePhase.PLAYING
        logger.info(
            "Game started with %d players, mother nature on island %d",
            self.num_players, mother_nature,
        )

    # =========================================================================
    # Clouds
    # =========================================================================

    def bag_to_clouds(self) -> None:
        """Refill every cloud from the bag. All clouds must be empty."""
        self._require_playing()
        if any(not cloud.is_empty for cloud in self._cloud_tiles):
            raise IllegalState("Cloud tiles must all be empty before a refill")
        needed = sum(cloud.capacity for cloud in self._cloud_tiles)
        if self._bag.size < needed:
            raise IllegalState(
                f"Bag holds {self._bag.size} students, clouds need {needed}"
            )

        for cloud in self._cloud_tiles:
            while cloud.is_fillable():
                cloud.fill(self._bag.draw())
        logger.debug("Clouds refilled, %d students left in bag", self._bag.size)

    def cloud_to_board(self, cloud_index: int) -> None:
        """Move a whole cloud into the current player's entrance."""
        self._require_playing()
        if not 0 <= cloud_index < len(self._cloud_tiles):
            raise IndexOutOfRange(
                f"Cloud index {cloud_index} out of range "
                f"(0-{len(self._cloud_tiles) - 1})"
            )
        board = self.current_player.board
        if not board.can_receive_cloud():
            raise IllegalState(
                f"Entrance holds {board.entrance_size()} students, "
                f"must hold exactly {self.constants.fillable_threshold} to take a cloud"
            )
        cloud = self._cloud_tiles[cloud_index]
        if cloud.is_empty:
            raise IllegalState(f"Cloud {cloud_index} is empty")

        board.fill_entrance(cloud.take_all())
        logger.debug("%s took cloud %d", self.current_player.nickname, cloud_index)

    # =========================================================================
    # Turn actions
    # =========================================================================

    def move_student_to_dining_room(self, color: Color) -> None:
        """Move a student from the current player's entrance to their dining room."""
        self._require_playing()
        player = self.current_player
        player.board.move_student_to_dining_room(color)
        self._update_professor(player, color)

    def move_student_to_island(self, color: Color, island_index: int) -> None:
        """Move a student from the current player's entrance to an island."""
        self._require_playing()
        island = self._archipelago[island_index]
        self.current_player.board.remove_student_from_entrance(color)
        island.add_student(color)

    def move_mother_nature(self, steps: int) -> None:
        """Advance mother nature clockwise and resolve the island she lands on."""
        self._require_playing()
        if steps < 1:
            raise InvalidArgument("Mother nature must move at least one island")
        self._mother_nature = self._archipelago.step(self._mother_nature, steps)
        self._resolve_island(self._mother_nature)

    def end_turn(self) -> None:
        """Pass the turn to the next player in roster order."""
        self._require_playing()
        self._current_player_idx = (self._current_player_idx + 1) % self.num_players
        logger.debug("Turn passes to %s", self.current_player.nickname)

    # =========================================================================
    # Internals
    # =========================================================================

    def _require_playing(self) -> None:
        if self.phase == GamePhase.SETUP:
            raise IllegalState("Game has not started")
        if self.phase == GamePhase.GAME_OVER:
            raise IllegalState("Game is over")

    def _update_professor(self, challenger: Player, color: Color) -> None:
        """Hand the professor to the challenger on a strict majority."""
        owner = self.professor_owner(color)
        if owner is challenger:
            return
        owner_count = owner.board.dining_room_count(color) if owner else 0
        if challenger.board.dining_room_count(color) > owner_count:
            if owner:
                owner.board.remove_professor(color)
            challenger.board.add_professor(color)
            logger.debug("%s takes the %s professor", challenger.nickname, color.value)

    def _player_by_tower(self, tower: TowerColor) -> Player:
        for p in self._players:
            if p.tower_color == tower:
                return p
        raise IllegalState(f"No player owns {tower.value} towers")

    def _resolve_island(self, index: int) -> None:
        island = self._archipelago[index]
        scores = [(p, self.influence(p, island)) for p in self._players]
        best = max(score for _, score in scores)
        leaders = [p for p, score in scores if score == best]
        if best == 0 or len(leaders) != 1:
            return

        leader = leaders[0]
        if island.tower == leader.tower_color:
            return
        if island.tower is not None:
            self._player_by_tower(island.tower).board.return_towers(island.size)
        leader.board.place_towers(island.size)
        island.tower = leader.tower_color
        logger.info("%s takes control of island %d", leader.nickname, index)

        self._mother_nature = self._archipelago.merge_adjacent(index)
        self._check_game_over()

    def _check_game_over(self) -> None:
        for p in self._players:
            if p.board.towers == 0:
                self._end_game(f"{p.nickname} placed their last tower")
                return
        if len(self._archipelago) <= self.constants.min_islands:
            self._end_game(f"Only {len(self._archipelago)} islands left")

    def _end_game(self, reason: str) -> None:
        self.phase = GamePhase.GAME_OVER
        self.game_over_reason = reason
        winner = self.winner
        logger.info(
            "Game over: %s. Winner: %s",
            reason, winner.nickname if winner else "draw",
        )
