"""
Cloud Tile - Staging area refilled from the bag once per round.

A cloud is drained wholesale into one player's entrance. Between
refills it is either completely full or completely empty.
"""

from __future__ import annotations

from .errors import IllegalState
from .students import Color, StudentSet


class CloudTile:
    """A fixed-capacity cloud."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._students = StudentSet()

    @property
    def students(self) -> StudentSet:
        """Snapshot of the students on the cloud."""
        return self._students.copy()

    def num_students(self) -> int:
        return self._students.num_students()

    @property
    def is_empty(self) -> bool:
        return self._students.is_empty

    def is_fillable(self) -> bool:
        """True while there is room for at least one more student."""
        return self.num_students() < self.capacity

    def fill(self, color: Color) -> None:
        """Place one student on the cloud."""
        if not self.is_fillable():
            raise IllegalState("Cloud tile is already full")
        self._students.add(color)

    def take_all(self) -> StudentSet:
        """Remove and return every student on the cloud."""
        taken = self._students
        self._students = StudentSet()
        return taken

    def __repr__(self) -> str:
        return f"CloudTile({self.num_students()}/{self.capacity})"
