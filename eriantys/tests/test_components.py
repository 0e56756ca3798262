"""
Tests for the pieces the Game is built from.

Tests:
- StudentSet multiset behaviour
- StudentBag draws
- CloudTile capacity
- Board entrance, dining room, professors and towers
"""

import random

import pytest
from pydantic import ValidationError

from ..engine_core.board import Board
from ..engine_core.cloud import CloudTile
from ..engine_core.constants import THREE_PLAYERS, TWO_PLAYERS, constants_for
from ..engine_core.errors import IllegalState, InvalidArgument
from ..engine_core.students import Color, StudentBag, StudentSet


class TestStudentSet:
    """Tests for the student multiset."""

    def test_add_and_count(self):
        students = StudentSet()
        students.add(Color.RED)
        students.add(Color.RED)
        students.add(Color.BLUE)
        assert students.count(Color.RED) == 2
        assert students.count(Color.GREEN) == 0
        assert students.num_students() == 3
        assert len(students) == 3

    def test_remove_last_of_color(self):
        students = StudentSet({Color.PINK: 1})
        students.remove(Color.PINK)
        assert students.is_empty
        assert students == StudentSet()

    def test_remove_missing_color(self):
        students = StudentSet({Color.PINK: 1})
        with pytest.raises(IllegalState):
            students.remove(Color.YELLOW)
        assert students.count(Color.PINK) == 1

    def test_negative_counts_rejected(self):
        with pytest.raises(InvalidArgument):
            StudentSet({Color.RED: -1})

    def test_copy_is_independent(self):
        original = StudentSet({Color.GREEN: 2})
        snapshot = original.copy()
        snapshot.add(Color.GREEN)
        assert original.count(Color.GREEN) == 2

    def test_iterates_single_students(self):
        students = StudentSet({Color.RED: 2, Color.YELLOW: 1})
        assert sorted(c.value for c in students) == ["red", "red", "yellow"]

    def test_to_dict_lists_every_color(self):
        assert StudentSet({Color.BLUE: 3}).to_dict() == {
            "yellow": 0, "blue": 3, "green": 0, "red": 0, "pink": 0,
        }

    def test_accepts_color_values(self):
        assert StudentSet({"red": 2}).count(Color.RED) == 2


class TestStudentBag:
    """Tests for the bag."""

    def test_draw_removes_student(self):
        bag = StudentBag(StudentSet.uniform(2), rng=random.Random(1))
        color = bag.draw()
        assert bag.size == 9
        assert bag.count(color) == 1

    def test_draw_everything(self):
        bag = StudentBag(StudentSet.uniform(3), rng=random.Random(2))
        drawn = bag.draw_many(15)
        assert bag.is_empty
        assert drawn == StudentSet.uniform(3)

    def test_draw_from_empty_bag(self):
        with pytest.raises(IllegalState):
            StudentBag().draw()

    def test_draw_many_too_many(self):
        bag = StudentBag(StudentSet.uniform(1))
        with pytest.raises(IllegalState):
            bag.draw_many(6)
        assert bag.size == 5

    def test_put_back(self):
        bag = StudentBag()
        bag.put(Color.GREEN)
        assert bag.draw() == Color.GREEN

    def test_seeded_draws_repeat(self):
        a = StudentBag(StudentSet.uniform(24), rng=random.Random(5))
        b = StudentBag(StudentSet.uniform(24), rng=random.Random(5))
        assert [a.draw() for _ in range(30)] == [b.draw() for _ in range(30)]


class TestCloudTile:
    """Tests for cloud tiles."""

    def test_fill_to_capacity(self):
        cloud = CloudTile(3)
        assert cloud.is_empty
        for color in (Color.RED, Color.RED, Color.BLUE):
            assert cloud.is_fillable()
            cloud.fill(color)
        assert not cloud.is_fillable()
        assert cloud.num_students() == 3

    def test_overfill(self):
        cloud = CloudTile(1)
        cloud.fill(Color.RED)
        with pytest.raises(IllegalState):
            cloud.fill(Color.RED)

    def test_take_all_empties(self):
        cloud = CloudTile(2)
        cloud.fill(Color.PINK)
        cloud.fill(Color.GREEN)
        taken = cloud.take_all()
        assert taken == StudentSet({Color.PINK: 1, Color.GREEN: 1})
        assert cloud.is_empty

    def test_is_empty_is_a_property(self):
        """Same access form as StudentSet and StudentBag."""
        cloud = CloudTile(1)
        assert cloud.is_empty is True
        cloud.fill(Color.RED)
        assert cloud.is_empty is False
        assert StudentBag().is_empty is True
        assert StudentSet().is_empty is True

    def test_students_is_snapshot(self):
        cloud = CloudTile(2)
        cloud.fill(Color.PINK)
        cloud.students.add(Color.PINK)
        assert cloud.num_students() == 1


class TestConstants:
    """Tests for the variant constants."""

    def test_two_players(self):
        c = constants_for(2)
        assert (c.entrance_capacity, c.cloud_capacity, c.num_towers) == (7, 3, 8)
        assert c.fillable_threshold == 4

    def test_three_players(self):
        c = constants_for(3)
        assert (c.entrance_capacity, c.cloud_capacity, c.num_towers) == (9, 4, 6)
        assert c.fillable_threshold == 5

    def test_constants_are_frozen(self):
        with pytest.raises(ValidationError):
            TWO_PLAYERS.entrance_capacity = 10


class TestBoard:
    """Tests for a player's board."""

    @pytest.fixture
    def board(self):
        return Board(THREE_PLAYERS)

    def test_new_board(self, board):
        assert board.entrance_size() == 0
        assert board.entrance_is_fillable()
        assert board.towers == 6
        assert board.professors == set()

    def test_entrance_capacity(self, board):
        for _ in range(9):
            board.add_student_to_entrance(Color.RED)
        assert not board.entrance_is_fillable()
        with pytest.raises(IllegalState):
            board.add_student_to_entrance(Color.RED)

    def test_fill_entrance_over_capacity(self, board):
        board.fill_entrance(StudentSet({Color.RED: 6}))
        with pytest.raises(IllegalState):
            board.fill_entrance(StudentSet({Color.BLUE: 4}))
        assert board.entrance_size() == 6

    def test_remove_student_from_entrance(self, board):
        board.add_student_to_entrance(Color.GREEN)
        assert board.student_in_entrance(Color.GREEN)
        board.remove_student_from_entrance(Color.GREEN)
        assert not board.student_in_entrance(Color.GREEN)

    def test_remove_missing_student(self, board):
        board.add_student_to_entrance(Color.GREEN)
        with pytest.raises(IllegalState):
            board.remove_student_from_entrance(Color.RED)
        assert board.entrance_size() == 1

    def test_can_receive_cloud_only_at_threshold(self, board):
        board.fill_entrance(StudentSet({Color.RED: 4}))
        assert not board.can_receive_cloud()
        board.add_student_to_entrance(Color.RED)
        assert board.can_receive_cloud()
        board.add_student_to_entrance(Color.RED)
        assert not board.can_receive_cloud()

    def test_move_to_dining_room(self, board):
        board.add_student_to_entrance(Color.BLUE)
        board.move_student_to_dining_room(Color.BLUE)
        assert board.dining_room_count(Color.BLUE) == 1
        assert board.entrance_size() == 0

    def test_move_missing_student_to_dining_room(self, board):
        with pytest.raises(IllegalState):
            board.move_student_to_dining_room(Color.BLUE)
        assert board.dining_room_count(Color.BLUE) == 0

    def test_dining_table_full(self, board):
        for _ in range(10):
            board.add_student_to_entrance(Color.YELLOW)
            board.move_student_to_dining_room(Color.YELLOW)
        board.add_student_to_entrance(Color.YELLOW)
        with pytest.raises(IllegalState):
            board.move_student_to_dining_room(Color.YELLOW)
        assert board.dining_room_count(Color.YELLOW) == 10
        assert board.student_in_entrance(Color.YELLOW)

    def test_professors(self, board):
        board.add_professor(Color.PINK)
        assert board.has_professor(Color.PINK)
        board.remove_professor(Color.PINK)
        assert not board.has_professor(Color.PINK)

    def test_place_and_return_towers(self, board):
        assert board.place_towers(2) == 2
        assert board.towers == 4
        board.return_towers(2)
        assert board.towers == 6

    def test_place_more_towers_than_left(self, board):
        assert board.place_towers(10) == 6
        assert board.towers == 0

    def test_return_too_many_towers(self, board):
        with pytest.raises(IllegalState):
            board.return_towers(1)
