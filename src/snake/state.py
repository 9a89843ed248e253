# state.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from .body import SnakeBody
from .collision import CollisionKind, check
from .config import Config
from .food import FoodSpawner
from .grid import Cell, Direction, Grid

log = logging.getLogger(__name__)


class Phase(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Outcome(Enum):
    """Why a game ended. BOARD_FULL is the win."""
    WALL = "wall"
    SELF = "self"
    BOARD_FULL = "board_full"

    @classmethod
    def from_collision(cls, kind: CollisionKind) -> "Outcome":
        return cls.WALL if kind is CollisionKind.WALL else cls.SELF


class InputEvent(Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"


EVENT_DIRECTIONS = {
    InputEvent.MOVE_UP: Direction.UP,
    InputEvent.MOVE_DOWN: Direction.DOWN,
    InputEvent.MOVE_LEFT: Direction.LEFT,
    InputEvent.MOVE_RIGHT: Direction.RIGHT,
}


# ---------- State ----------
@dataclass
class GameState:
    body: SnakeBody
    food: Optional[Cell]
    score: int
    phase: Phase
    # Single slot, last writer wins: only the latest input before a tick
    # counts. This is not a queue; an input source that delivers several
    # moves between ticks loses all but the last one.
    pending: Optional[Direction] = None
    outcome: Optional[Outcome] = None
    ticks: int = 0


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to renderers and agents."""
    width: int
    height: int
    snake: Tuple[Cell, ...]   # head first
    direction: Direction
    pending: Optional[Direction]
    food: Optional[Cell]
    score: int
    phase: Phase
    outcome: Optional[Outcome]
    ticks: int


def new_game_state(config: Config, grid: Grid, spawner: FoodSpawner) -> GameState:
    body = SnakeBody.initial(grid, config.initial_length)
    food = spawner.place(grid, frozenset(body.segments))
    return GameState(body=body, food=food, score=0, phase=Phase.RUNNING)


class GameStateMachine:
    """
    Owns one GameState and applies ticks and inputs to it.

    The host calls on_tick() at a fixed rate and on_input() for every
    event; observers read properties or snapshot() between calls.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        spawner_factory: Optional[Callable[[], FoodSpawner]] = None,
    ):
        self.config = (config or Config()).validate()
        self.grid = Grid(self.config.grid_w, self.config.grid_h)
        self._spawner_factory = spawner_factory or (lambda: FoodSpawner(self.config.seed))
        self._new_game()

    def _new_game(self) -> None:
        self.spawner = self._spawner_factory()
        self.state = new_game_state(self.config, self.grid, self.spawner)

    # ---------- read-only accessors ----------
    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def snake(self) -> Tuple[Cell, ...]:
        return self.state.body.segments

    @property
    def food(self) -> Optional[Cell]:
        return self.state.food

    @property
    def direction(self) -> Direction:
        return self.state.body.direction

    @property
    def pending_direction(self) -> Optional[Direction]:
        return self.state.pending

    @property
    def outcome(self) -> Optional[Outcome]:
        return self.state.outcome

    @property
    def ticks(self) -> int:
        return self.state.ticks

    @property
    def is_won(self) -> bool:
        return self.state.outcome is Outcome.BOARD_FULL

    @property
    def is_lost(self) -> bool:
        return self.state.outcome in (Outcome.WALL, Outcome.SELF)

    def snapshot(self) -> GameSnapshot:
        s = self.state
        return GameSnapshot(
            width=self.grid.width,
            height=self.grid.height,
            snake=s.body.segments,
            direction=s.body.direction,
            pending=s.pending,
            food=s.food,
            score=s.score,
            phase=s.phase,
            outcome=s.outcome,
            ticks=s.ticks,
        )

    # ---------- transitions ----------
    def restart(self) -> None:
        """Throw the current game away and start a fresh one."""
        log.info("restart (previous score %d)", self.state.score)
        self._new_game()

    def on_input(self, event: InputEvent) -> Phase:
        state = self.state
        if event in EVENT_DIRECTIONS:
            # Buffered in every phase; only a running tick consumes it.
            state.pending = EVENT_DIRECTIONS[event]
        elif event is InputEvent.TOGGLE_PAUSE:
            if state.phase is Phase.RUNNING:
                state.phase = Phase.PAUSED
                log.info("paused")
            elif state.phase is Phase.PAUSED:
                state.phase = Phase.RUNNING
                log.info("resumed")
        elif event is InputEvent.RESTART:
            if state.phase is Phase.GAME_OVER:
                self.restart()
        else:
            raise ValueError(f"Unknown input event: {event!r}")
        return self.phase

    def on_tick(self) -> Phase:
        """Advance one step if running. Returns the phase afterwards."""
        state = self.state
        if state.phase is not Phase.RUNNING:
            return state.phase

        body = state.body
        direction = body.resolve(state.pending)
        state.pending = None
        state.ticks += 1

        new_head = body.next_head(direction)
        grew = new_head == state.food

        kind = check(new_head, self.grid, body.blocking_cells(grew))
        if kind is not None:
            self._end(Outcome.from_collision(kind))
            return state.phase

        body.advance(direction, grew)
        if grew:
            state.score += self.config.growth_unit
            log.debug("ate food at %s, score %d, length %d", new_head, state.score, len(body))
            if len(body) == self.grid.capacity:
                state.food = None
                self._end(Outcome.BOARD_FULL)
            else:
                state.food = self.spawner.place(self.grid, frozenset(body.segments))
        return state.phase

    def _end(self, outcome: Outcome) -> None:
        self.state.phase = Phase.GAME_OVER
        self.state.outcome = outcome
        log.info(
            "game over: %s (score %d, length %d, ticks %d)",
            outcome.value, self.state.score, len(self.state.body), self.state.ticks,
        )
