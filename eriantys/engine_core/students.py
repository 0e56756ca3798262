"""
Students - Colored student tokens, multisets of them, and the bag.

A StudentSet is the building block for every area that holds students:
entrances, dining rooms, islands, clouds and the bag itself.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterator
import random

from .errors import IllegalState, InvalidArgument


class Color(str, Enum):
    """Student (and professor) colors."""
    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    PINK = "pink"


class StudentSet:
    """
    Unordered multiset of students, counted per color.

    Colors with no students are not stored, so two sets holding
    the same students always compare equal.
    """

    def __init__(self, counts: dict[Color, int] | None = None):
        self._counts: dict[Color, int] = {}
        for key, count in (counts or {}).items():
            color = Color(key)
            if count < 0:
                raise InvalidArgument(f"Negative student count for {color.value}")
            if count:
                self._counts[color] = count

    @classmethod
    def uniform(cls, per_color: int) -> StudentSet:
        """Create a set with the same number of students of every color."""
        return cls({color: per_color for color in Color})

    def count(self, color: Color) -> int:
        return self._counts.get(color, 0)

    def num_students(self) -> int:
        return sum(self._counts.values())

    @property
    def is_empty(self) -> bool:
        return not self._counts

    def contains(self, color: Color) -> bool:
        return self.count(color) > 0

    def add(self, color: Color, amount: int = 1) -> None:
        """Add students of one color."""
        if amount < 0:
            raise InvalidArgument("Cannot add a negative number of students")
        if amount:
            self._counts[color] = self.count(color) + amount

    def remove(self, color: Color) -> None:
        """Remove one student of the given color."""
        current = self.count(color)
        if current == 0:
            raise IllegalState(f"No {color.value} student to remove")
        if current == 1:
            del self._counts[color]
        else:
            self._counts[color] = current - 1

    def add_all(self, other: StudentSet) -> None:
        """Add every student of another set."""
        for color, count in other.items():
            self.add(color, count)

    def clear(self) -> None:
        self._counts.clear()

    def items(self) -> Iterator[tuple[Color, int]]:
        """Iterate (color, count) pairs in Color order."""
        for color in Color:
            if color in self._counts:
                yield color, self._counts[color]

    def copy(self) -> StudentSet:
        return StudentSet(dict(self._counts))

    def to_dict(self) -> dict[str, int]:
        """Serialize with every color present, for display."""
        return {color.value: self.count(color) for color in Color}

    def __iter__(self) -> Iterator[Color]:
        """Iterate single students, one entry per token."""
        for color, count in self.items():
            for _ in range(count):
                yield color

    def __len__(self) -> int:
        return self.num_students()

    def __eq__(self, other):
        if not isinstance(other, StudentSet):
            return False
        return self._counts == other._counts

    def __repr__(self) -> str:
        inner = ", ".join(f"{c.value}={n}" for c, n in self.items())
        return f"StudentSet({inner})"


class StudentBag:
    """
    The bag students are drawn from.

    Draws are uniform over the remaining tokens. Pass a seeded
    random.Random for reproducible games.
    """

    def __init__(self, students: StudentSet | None = None, rng: random.Random | None = None):
        self._students = students.copy() if students else StudentSet()
        self._rng = rng or random.Random()

    @property
    def size(self) -> int:
        return self._students.num_students()

    @property
    def is_empty(self) -> bool:
        return self._students.is_empty

    def count(self, color: Color) -> int:
        return self._students.count(color)

    def put(self, color: Color) -> None:
        """Put a student back in the bag."""
        self._students.add(color)

    def draw(self) -> Color:
        """Draw one random student."""
        if self.is_empty:
            raise IllegalState("The student bag is empty")
        pick = self._rng.randrange(self.size)
        for color, count in self._students.items():
            if pick < count:
                self._students.remove(color)
                return color
            pick -= count
        raise IllegalState("Bag draw fell outside the bag contents")

    def draw_many(self, amount: int) -> StudentSet:
        """Draw several students; fails without drawing if the bag is too small."""
        if amount > self.size:
            raise IllegalState(
                f"Cannot draw {amount} students, only {self.size} left in the bag"
            )
        drawn = StudentSet()
        for _ in range(amount):
            drawn.add(self.draw())
        return drawn
