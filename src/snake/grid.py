# grid.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

Cell = Tuple[int, int]


class Direction(Enum):
    """Unit moves on the grid as (dx, dy); y grows downwards."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))

    def is_opposite(self, other: "Direction") -> bool:
        return self.dx == -other.dx and self.dy == -other.dy


@dataclass(frozen=True)
class Grid:
    width: int
    height: int

    @property
    def capacity(self) -> int:
        return self.width * self.height

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def wrap_or_bound(self, cell: Cell, direction: Direction) -> Cell:
        """
        Next cell from `cell` in `direction`. Walls are solid: the result is
        a plain translation and may be out of bounds; callers check that.
        """
        x, y = cell
        return (x + direction.dx, y + direction.dy)

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)
