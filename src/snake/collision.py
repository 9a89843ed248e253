# collision.py
from __future__ import annotations

from enum import Enum
from typing import Container, Optional

from .grid import Cell, Grid


class CollisionKind(Enum):
    WALL = "wall"
    SELF = "self"


def check(head: Cell, grid: Grid, body: Container[Cell]) -> Optional[CollisionKind]:
    """
    Classify the cell the head is about to enter.

    `body` is whatever blocks the head this tick (see
    SnakeBody.blocking_cells). Walls are checked first.
    """
    if not grid.in_bounds(head):
        return CollisionKind.WALL
    if head in body:
        return CollisionKind.SELF
    return None
