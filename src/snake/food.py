# food.py
from __future__ import annotations

import logging
import random
from collections import deque
from typing import Container, Iterable, Optional

from .errors import BoardFullError
from .grid import Cell, Grid

log = logging.getLogger(__name__)


class FoodSpawner:
    """
    Places food uniformly at random on a free cell.

    `queue` holds cells to use first, in order (replays, tests); a queued
    cell that is occupied when its turn comes is skipped.
    """

    def __init__(self, seed: Optional[int] = None, queue: Optional[Iterable[Cell]] = None):
        self.rng = random.Random(seed)
        self.queue = deque(tuple(c) for c in (queue or ()))

    def place(self, grid: Grid, exclude: Container[Cell]) -> Cell:
        while self.queue:
            cell = self.queue.popleft()
            if grid.in_bounds(cell) and cell not in exclude:
                log.debug("food placed at %s (queued)", cell)
                return cell
            log.debug("queued food cell %s unavailable, skipping", cell)

        free = [c for c in grid.cells() if c not in exclude]
        if not free:
            raise BoardFullError("snake covers every cell; nowhere to place food")
        cell = self.rng.choice(free)
        log.debug("food placed at %s (%d free cells)", cell, len(free))
        return cell
