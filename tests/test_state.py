from __future__ import annotations

import random

from src.snake.body import SnakeBody
from src.snake.config import Config
from src.snake.food import FoodSpawner
from src.snake.grid import Direction
from src.snake.state import GameStateMachine, InputEvent, Outcome, Phase


def make(width=10, height=10, length=1, queue=(), seed=0, **kw) -> GameStateMachine:
    cfg = Config(grid_w=width, grid_h=height, initial_length=length, seed=seed, **kw)
    return GameStateMachine(cfg, lambda: FoodSpawner(seed, queue=list(queue)))


def put_snake(m: GameStateMachine, segments, direction: Direction, food) -> None:
    m.state.body = SnakeBody(m.grid, segments, direction)
    m.state.food = food


def test_initial_state() -> None:
    m = make(length=3, queue=[(0, 0)])
    assert m.phase is Phase.RUNNING
    assert m.score == 0
    assert m.snake == ((5, 5), (4, 5), (3, 5))
    assert m.food == (0, 0)
    assert m.outcome is None
    assert m.pending_direction is None


def test_eating_food_grows_scores_and_replaces_food() -> None:
    m = make(queue=[(6, 5)])
    assert m.snake == ((5, 5),)
    assert m.food == (6, 5)

    assert m.on_tick() is Phase.RUNNING
    assert m.snake == ((6, 5), (5, 5))
    assert m.score == 1
    assert m.food is not None
    assert m.food not in {(6, 5), (5, 5)}
    assert m.grid.in_bounds(m.food)


def test_score_uses_growth_unit_but_body_grows_by_one() -> None:
    m = make(queue=[(6, 5)], growth_unit=5)
    m.on_tick()
    assert m.score == 5
    assert len(m.snake) == 2


def test_moving_without_food_keeps_length_and_vacates_tail() -> None:
    m = make(length=3, queue=[(0, 0)])
    old_tail = m.snake[-1]
    m.on_tick()
    assert len(m.snake) == 3
    assert old_tail not in m.snake
    assert m.snake[0] == (6, 5)


def test_reversal_input_keeps_direction() -> None:
    m = make(length=3, queue=[(0, 0)])
    m.on_input(InputEvent.MOVE_LEFT)
    m.on_tick()
    assert m.direction is Direction.RIGHT
    assert m.snake[0] == (6, 5)


def test_last_input_before_tick_wins() -> None:
    m = make(length=3, queue=[(0, 0)])
    m.on_input(InputEvent.MOVE_UP)
    m.on_input(InputEvent.MOVE_LEFT)  # reversal overwrites UP, then is ignored
    m.on_tick()
    assert m.direction is Direction.RIGHT

    m.on_input(InputEvent.MOVE_UP)
    m.on_input(InputEvent.MOVE_DOWN)
    m.on_tick()
    assert m.direction is Direction.DOWN
    assert m.snake[0] == (6, 6)


def test_pending_direction_consumed_once() -> None:
    m = make(length=3, queue=[(0, 0)])
    m.on_input(InputEvent.MOVE_DOWN)
    m.on_tick()
    assert m.pending_direction is None
    m.on_tick()
    assert m.snake[0] == (5, 7)


def test_moving_into_vacating_tail_is_not_a_collision() -> None:
    m = make(width=5, height=5, queue=[(4, 4)])
    # 2x2 loop: head (0,1) just moved left, tail at (0,0)
    put_snake(m, [(0, 1), (1, 1), (1, 0), (0, 0)], Direction.LEFT, (4, 4))

    m.on_input(InputEvent.MOVE_UP)
    assert m.on_tick() is Phase.RUNNING
    assert m.snake == ((0, 0), (0, 1), (1, 1), (1, 0))


def test_moving_into_body_is_self_collision() -> None:
    m = make(width=5, height=5, queue=[(4, 4)])
    segments = [(1, 1), (2, 1), (2, 2), (1, 2), (0, 2)]
    put_snake(m, segments, Direction.LEFT, (4, 4))

    m.on_input(InputEvent.MOVE_DOWN)
    assert m.on_tick() is Phase.GAME_OVER
    assert m.outcome is Outcome.SELF
    assert m.is_lost and not m.is_won
    # The fatal step is not applied.
    assert m.snake == tuple(segments)


def test_leaving_grid_is_wall_collision() -> None:
    m = make(queue=[(0, 0)])
    m.on_input(InputEvent.MOVE_UP)
    m.on_tick()
    m.on_input(InputEvent.MOVE_LEFT)
    for _ in range(5):
        assert m.on_tick() is Phase.RUNNING
    assert m.snake[0] == (0, 4)

    assert m.on_tick() is Phase.GAME_OVER
    assert m.outcome is Outcome.WALL
    assert m.snake[0] == (0, 4)

    # Ticks after game over do nothing.
    m.on_tick()
    assert m.snake[0] == (0, 4)


def test_filling_the_board_is_a_win() -> None:
    m = make(width=3, height=1, length=2)
    assert m.snake == ((1, 0), (0, 0))
    assert m.food == (2, 0)

    assert m.on_tick() is Phase.GAME_OVER
    assert m.outcome is Outcome.BOARD_FULL
    assert m.is_won and not m.is_lost
    assert m.food is None
    assert m.score == 1
    assert len(m.snake) == 3


def test_pause_buffers_direction_without_moving() -> None:
    m = make(length=3, queue=[(0, 0)])
    assert m.on_input(InputEvent.TOGGLE_PAUSE) is Phase.PAUSED

    m.on_input(InputEvent.MOVE_DOWN)
    before = m.snapshot()
    m.on_tick()
    m.on_tick()
    assert m.snake == before.snake
    assert m.ticks == before.ticks
    assert m.pending_direction is Direction.DOWN

    assert m.on_input(InputEvent.TOGGLE_PAUSE) is Phase.RUNNING
    m.on_tick()
    assert m.snake[0] == (5, 6)


def test_pause_and_restart_ignored_where_not_applicable() -> None:
    m = make(length=3, queue=[(0, 0)])
    m.on_tick()
    m.on_input(InputEvent.RESTART)
    assert m.snake[0] == (6, 5)

    put_snake(m, [(9, 5)], Direction.RIGHT, (0, 0))
    m.on_tick()
    assert m.phase is Phase.GAME_OVER
    assert m.on_input(InputEvent.TOGGLE_PAUSE) is Phase.GAME_OVER
    m.on_input(InputEvent.MOVE_UP)
    assert m.phase is Phase.GAME_OVER


def test_restart_matches_fresh_construction() -> None:
    cfg = Config(grid_w=8, grid_h=6, initial_length=3, seed=11)
    m = GameStateMachine(cfg)
    fresh = GameStateMachine(cfg).snapshot()

    while m.phase is Phase.RUNNING:
        m.on_tick()
    assert m.outcome is not None

    assert m.on_input(InputEvent.RESTART) is Phase.RUNNING
    assert m.snapshot() == fresh
    assert m.score == 0
    assert m.outcome is None


def test_invariants_hold_under_random_play() -> None:
    rng = random.Random(1234)
    moves = [InputEvent.MOVE_UP, InputEvent.MOVE_DOWN, InputEvent.MOVE_LEFT, InputEvent.MOVE_RIGHT]
    m = make(width=6, height=6, length=3, seed=5, growth_unit=2)
    games = 0

    for _ in range(3000):
        if m.phase is Phase.GAME_OVER:
            m.on_input(InputEvent.RESTART)
            games += 1
        if rng.random() < 0.5:
            m.on_input(rng.choice(moves))

        before = m.snapshot()
        m.on_tick()
        after = m.snapshot()

        if after.phase is not Phase.RUNNING:
            continue
        assert len(after.snake) >= 1
        assert len(set(after.snake)) == len(after.snake)
        assert all(m.grid.in_bounds(c) for c in after.snake)
        assert after.food not in after.snake

        if after.score > before.score:
            assert len(after.snake) == len(before.snake) + 1
            assert after.score - before.score == 2
        else:
            old_tail = before.snake[-1]
            assert len(after.snake) == len(before.snake)
            assert old_tail not in after.snake[1:]

    assert games > 0


def test_restart_ignored_while_paused() -> None:
    m = make(length=3, queue=[(0, 0)])
    m.on_tick()
    m.on_input(InputEvent.TOGGLE_PAUSE)
    assert m.on_input(InputEvent.RESTART) is Phase.PAUSED
    assert m.snake[0] == (6, 5)
    assert m.ticks == 1


class RecordingSpawner(FoodSpawner):
    def __init__(self, queue) -> None:
        super().__init__(0, queue=queue)
        self.excluded = []

    def place(self, grid, exclude):
        self.excluded.append(exclude)
        return super().place(grid, exclude)


def test_food_placement_gets_snake_cells_as_a_set() -> None:
    spawner = RecordingSpawner([(6, 5), (0, 0)])
    m = GameStateMachine(Config(grid_w=10, grid_h=10, initial_length=1), lambda: spawner)
    m.on_tick()
    assert spawner.excluded == [frozenset({(5, 5)}), frozenset({(6, 5), (5, 5)})]
    assert all(isinstance(e, frozenset) for e in spawner.excluded)
    assert m.food == (0, 0)
