# src/rl/env.py
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np  # type: ignore
import pygame       # type: ignore

from src.snake.collision import check
from src.snake.config import Config
from src.snake.food import FoodSpawner
from src.snake.game import window_size, draw_game
from src.snake.grid import Direction
from src.snake.state import GameStateMachine, InputEvent, Phase

# -----------------------------------------------------------------------------
# Actions: integers -> input events
# -----------------------------------------------------------------------------
ACTIONS = {
    0: InputEvent.MOVE_UP,
    1: InputEvent.MOVE_DOWN,
    2: InputEvent.MOVE_LEFT,
    3: InputEvent.MOVE_RIGHT,
}

ACTION_DIRECTIONS = {
    0: Direction.UP,
    1: Direction.DOWN,
    2: Direction.LEFT,
    3: Direction.RIGHT,
}

# -----------------------------------------------------------------------------
# Small geometry helpers
# -----------------------------------------------------------------------------
def left_of(direction: Direction) -> Direction:
    """Rotate a direction 90° CCW (on screen, y down)."""
    return Direction((direction.dy, -direction.dx))

def right_of(direction: Direction) -> Direction:
    """Rotate a direction 90° CW (on screen, y down)."""
    return Direction((-direction.dy, direction.dx))

def would_hit(machine: GameStateMachine, direction: Direction) -> bool:
    """
    True if moving the head one cell in `direction` next tick would end the
    game. A tail that moves out in the same tick does not count.
    """
    body = machine.state.body
    nxt = machine.grid.wrap_or_bound(body.head, direction)
    grew = nxt == machine.food
    return check(nxt, machine.grid, body.blocking_cells(grew)) is not None

def manhattan(ax: int, ay: int, bx: int, by: int) -> int:
    """Manhattan (L1) distance on the grid."""
    return abs(ax - bx) + abs(ay - by)

# -----------------------------------------------------------------------------
# Observation function
# -----------------------------------------------------------------------------
def observe(machine: GameStateMachine) -> np.ndarray:
    """
    Compact 9-D observation vector.

    Features:
      0: hx_n  - head x normalized in [0, 1]
      1: hy_n  - head y normalized in [0, 1]
      2: fx_n  - food x normalized in [0, 1] (head x if there is no food)
      3: fy_n  - food y normalized in [0, 1] (head y if there is no food)
      4: dx    - current direction x component in {-1, 0, 1}
      5: dy    - current direction y component in {-1, 0, 1}
      6: danger_ahead  - 1.0 if the next cell forward would be fatal
      7: danger_left   - 1.0 if the next cell to the left would be fatal
      8: danger_right  - 1.0 if the next cell to the right would be fatal
    """
    hx, hy = machine.snake[0]
    fx, fy = machine.food if machine.food is not None else (hx, hy)

    denom_w = max(machine.grid.width - 1, 1)
    denom_h = max(machine.grid.height - 1, 1)

    d = machine.direction
    return np.array(
        [
            hx / denom_w, hy / denom_h, fx / denom_w, fy / denom_h,
            float(d.dx), float(d.dy),
            float(would_hit(machine, d)),
            float(would_hit(machine, left_of(d))),
            float(would_hit(machine, right_of(d))),
        ],
        dtype=np.float32,
    )

# -----------------------------------------------------------------------------
# Environment
# -----------------------------------------------------------------------------
@dataclass
class SnakeEnv:
    """
    Gym-like headless driver for the snake state machine. Each step() sends
    one move input and one tick, so the game advances exactly one cell.

    Rewards:
      + eat_reward  when food is eaten
      + shaping_coef * (d_before - d_after) per step (closer -> positive)
      + step_penalty per step (tiny negative to discourage dithering)
      + death_reward on a collision, win_reward when the board fills
    """
    config: Config = field(default_factory=Config)
    step_penalty: float = -0.001
    eat_reward: float   = 1.0
    death_reward: float = -1.0
    win_reward: float   = 10.0
    shaping_coef: float = 0.01
    max_steps: int      = 10_000
    render_enabled: bool = False

    def __post_init__(self):
        self.machine: GameStateMachine | None = None
        self.steps = 0
        self._seed = self.config.seed
        self.rng = np.random.default_rng(self._seed)
        self.screen = None
        self.font = None
        self.clock = None

    # Gym-like API -------------------------------------------------------------
    def reset(self, seed: int | None = None) -> np.ndarray:
        """Start a new episode and return the initial observation."""
        if seed is not None:
            self._seed = seed
            self.rng = np.random.default_rng(seed)
        self.machine = GameStateMachine(self.config, lambda: FoodSpawner(self._seed))
        self.steps = 0
        return observe(self.machine)

    def step(self, action: int):
        """
        Apply an action (0..3), advance one tick and return
        (obs, reward, terminated, info).
        """
        if self.machine is None:
            raise RuntimeError("Call reset() first.")
        if action not in ACTIONS:
            raise ValueError(f"Invalid action {action}")
        m = self.machine
        if m.phase is Phase.GAME_OVER:
            raise RuntimeError("Episode is over; call reset().")

        hx, hy = m.snake[0]
        fx, fy = m.food
        d_before = manhattan(hx, hy, fx, fy)
        score_before = m.score

        m.on_input(ACTIONS[action])  # reversals are dropped by the tick
        m.on_tick()
        self.steps += 1

        reward = self.step_penalty
        info = {"score": m.score, "steps": self.steps, "outcome": None}

        if m.phase is Phase.GAME_OVER:
            info["outcome"] = m.outcome.value
            if m.is_won:
                reward += self.eat_reward + self.win_reward
            else:
                reward = self.death_reward
            return observe(m), reward, True, info

        if m.score > score_before:
            reward += self.eat_reward
        else:
            hx2, hy2 = m.snake[0]
            reward += self.shaping_coef * (d_before - manhattan(hx2, hy2, fx, fy))

        terminated = self.steps >= self.max_steps
        if terminated:
            info["outcome"] = "step_limit"
        return observe(m), reward, terminated, info

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def render(self, fps: int = 15) -> None:
        """Draw the current state with pygame; no-op unless render_enabled."""
        if not self.render_enabled or self.machine is None:
            return

        if self.screen is None:
            pygame.init()
            self.screen = pygame.display.set_mode(window_size(self.config.grid_w, self.config.grid_h))
            pygame.display.set_caption("Snake (headless policy)")
            self.font = pygame.font.SysFont(None, 24)
            self.clock = pygame.time.Clock()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.close()
                raise SystemExit

        draw_game(self.screen, self.font, self.machine.snapshot())
        pygame.display.flip()
        self.clock.tick(fps)

    def close(self) -> None:
        if self.screen is not None:
            pygame.quit()
            self.screen = None

    @property
    def action_space_n(self) -> int:
        return len(ACTIONS)

    @property
    def observation_space_shape(self):
        return (9,)
