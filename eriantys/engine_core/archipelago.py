"""
Archipelago - The ring of island tiles.

Islands under the same tower that become adjacent are merged into
a single tile. The ring keeps its order; indices after a removed
tile shift down by one.
"""

from __future__ import annotations
from typing import Iterator

from .board import TowerColor
from .errors import IndexOutOfRange
from .students import Color, StudentSet


class IslandTile:
    """One island, or a group of merged islands."""

    def __init__(self):
        self._students = StudentSet()
        self.tower: TowerColor | None = None
        self.size = 1

    @property
    def island_students(self) -> StudentSet:
        """Snapshot of the students on the island."""
        return self._students.copy()

    def num_students(self) -> int:
        return self._students.num_students()

    def count(self, color: Color) -> int:
        return self._students.count(color)

    def add_student(self, color: Color) -> None:
        self._students.add(color)

    def absorb(self, other: IslandTile) -> None:
        """Fold another tile's students and size into this one."""
        self._students.add_all(other._students)
        self.size += other.size

    def __repr__(self) -> str:
        tower = self.tower.value if self.tower else None
        return f"IslandTile(size={self.size}, tower={tower}, students={self._students!r})"


class Archipelago:
    """Ordered ring of IslandTiles."""

    def __init__(self, num_islands: int = 12):
        self._tiles = [IslandTile() for _ in range(num_islands)]

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[IslandTile]:
        return iter(self._tiles)

    def __getitem__(self, index: int) -> IslandTile:
        return self._tiles[self.check_index(index)]

    def check_index(self, index: int) -> int:
        """Return index if it addresses a tile, raise IndexOutOfRange otherwise."""
        if not 0 <= index < len(self._tiles):
            raise IndexOutOfRange(
                f"Island index {index} out of range (0-{len(self._tiles) - 1})"
            )
        return index

    def opposite(self, index: int) -> int:
        """Index of the tile across the ring."""
        size = len(self._tiles)
        return (self.check_index(index) + size // 2) % size

    def step(self, index: int, steps: int) -> int:
        """Index reached moving clockwise by steps."""
        return (self.check_index(index) + steps) % len(self._tiles)

    def merge_adjacent(self, index: int) -> int:
        """
        Merge the tile at index with neighbours under the same tower.

        Returns the index of the merged tile, which may have shifted.
        Tiles without a tower never merge.
        """
        tile = self[index]
        if tile.tower is None:
            return index

        for direction in (1, -1):
            if len(self._tiles) < 2:
                break
            neighbour_idx = (index + direction) % len(self._tiles)
            neighbour = self._tiles[neighbour_idx]
            if neighbour is tile or neighbour.tower != tile.tower:
                continue
            tile.absorb(neighbour)
            del self._tiles[neighbour_idx]
            if neighbour_idx < index:
                index -= 1

        return index

    def towers_of(self, tower: TowerColor) -> int:
        """Number of towers of one color on the archipelago."""
        return sum(t.size for t in self._tiles if t.tower == tower)
