"""
Board - A player's school board.

Holds:
- Entrance: students waiting to be placed
- Dining room: committed students, one table per color
- Towers not yet placed on islands
- Professors currently controlled
"""

from __future__ import annotations
from enum import Enum

from .constants import GameConstants
from .errors import IllegalState, InvalidArgument
from .students import Color, StudentSet


class TowerColor(str, Enum):
    """Tower colors, handed out in registration order."""
    WHITE = "white"
    BLACK = "black"
    GREY = "grey"


class Board:
    """
    A player's board.

    Capacities come from the variant constants. Every mutator checks its
    precondition first, so a raised error leaves the board untouched.
    """

    def __init__(self, constants: GameConstants):
        self.constants = constants
        self.entrance = StudentSet()
        self.dining_room = StudentSet()
        self.towers = constants.num_towers
        self.professors: set[Color] = set()

    # =========================================================================
    # Entrance
    # =========================================================================

    @property
    def entrance_capacity(self) -> int:
        return self.constants.entrance_capacity

    def entrance_size(self) -> int:
        return self.entrance.num_students()

    def student_in_entrance(self, color: Color) -> bool:
        return self.entrance.contains(color)

    def entrance_is_fillable(self) -> bool:
        """True while the entrance is below capacity."""
        return self.entrance_size() < self.entrance_capacity

    def can_receive_cloud(self) -> bool:
        """True iff a whole cloud fits in the entrance with no room to spare."""
        return self.entrance_size() == self.constants.fillable_threshold

    def add_student_to_entrance(self, color: Color) -> None:
        if not self.entrance_is_fillable():
            raise IllegalState("Entrance is full")
        self.entrance.add(color)

    def fill_entrance(self, students: StudentSet) -> None:
        """Add a whole batch of students to the entrance."""
        if self.entrance_size() + students.num_students() > self.entrance_capacity:
            raise IllegalState(
                f"{students.num_students()} students do not fit in the entrance"
            )
        self.entrance.add_all(students)

    def remove_student_from_entrance(self, color: Color) -> None:
        """Remove one student of the given color from the entrance."""
        if not self.student_in_entrance(color):
            raise IllegalState(f"No {color.value} student in the entrance")
        self.entrance.remove(color)

    # =========================================================================
    # Dining room
    # =========================================================================

    def dining_room_count(self, color: Color) -> int:
        return self.dining_room.count(color)

    def move_student_to_dining_room(self, color: Color) -> None:
        """Move a student from the entrance to its color's table."""
        if not self.student_in_entrance(color):
            raise IllegalState(f"No {color.value} student in the entrance")
        if self.dining_room_count(color) >= self.constants.dining_room_capacity:
            raise IllegalState(f"The {color.value} table is full")
        self.entrance.remove(color)
        self.dining_room.add(color)

    # =========================================================================
    # Professors
    # =========================================================================

    def has_professor(self, color: Color) -> bool:
        return color in self.professors

    def add_professor(self, color: Color) -> None:
        self.professors.add(color)

    def remove_professor(self, color: Color) -> None:
        self.professors.discard(color)

    # =========================================================================
    # Towers
    # =========================================================================

    def place_towers(self, amount: int) -> int:
        """
        Take towers off the board to place them on islands.

        Returns how many were actually placed: a board running out of
        towers places what it has left.
        """
        if amount < 0:
            raise InvalidArgument("Cannot place a negative number of towers")
        placed = min(amount, self.towers)
        self.towers -= placed
        return placed

    def return_towers(self, amount: int) -> None:
        """Put towers back on the board."""
        if amount < 0:
            raise InvalidArgument("Cannot return a negative number of towers")
        if self.towers + amount > self.constants.num_towers:
            raise IllegalState("More towers returned than the board holds")
        self.towers += amount
