# body.py
from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional, Tuple

from .grid import Cell, Direction, Grid


class SnakeBody:
    """
    Ordered snake segments, head at index 0 and tail last.

    Only the tick algorithm calls advance(); everything else reads.
    """

    def __init__(self, grid: Grid, segments: Iterable[Cell], direction: Direction):
        self.grid = grid
        self._segments: List[Cell] = [tuple(c) for c in segments]
        if not self._segments:
            raise ValueError("snake needs at least one segment")
        if len(set(self._segments)) != len(self._segments):
            raise ValueError("snake segments overlap")
        self.direction = direction

    @classmethod
    def initial(cls, grid: Grid, length: int) -> "SnakeBody":
        """Head at the grid centre moving right, body trailing left."""
        hx, hy = grid.width // 2, grid.height // 2
        return cls(grid, [(hx - i, hy) for i in range(length)], Direction.RIGHT)

    def __len__(self) -> int:
        return len(self._segments)

    @property
    def head(self) -> Cell:
        return self._segments[0]

    @property
    def tail(self) -> Cell:
        return self._segments[-1]

    @property
    def segments(self) -> Tuple[Cell, ...]:
        return tuple(self._segments)

    def occupies(self, cell: Cell) -> bool:
        return cell in self._segments

    def __contains__(self, cell: Cell) -> bool:
        return self.occupies(cell)

    def resolve(self, direction: Optional[Direction]) -> Direction:
        """Requested direction, or the current one if unset or a 180° turn."""
        if direction is None or direction.is_opposite(self.direction):
            return self.direction
        return direction

    def next_head(self, direction: Optional[Direction]) -> Cell:
        return self.grid.wrap_or_bound(self.head, self.resolve(direction))

    def blocking_cells(self, grew: bool) -> FrozenSet[Cell]:
        """
        Cells the new head may not enter this tick. Without growth the tail
        moves out in the same step, so it is not an obstacle.
        """
        if grew:
            return frozenset(self._segments)
        return frozenset(self._segments[:-1])

    def advance(self, direction: Optional[Direction], grew: bool) -> Cell:
        direction = self.resolve(direction)
        new_head = self.grid.wrap_or_bound(self.head, direction)
        self._segments.insert(0, new_head)
        if not grew:
            self._segments.pop()
        self.direction = direction
        return new_head
