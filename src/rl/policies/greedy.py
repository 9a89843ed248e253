# src/rl/policies/greedy.py
import numpy as np # type: ignore
from src.snake.grid import Direction
from src.rl.env import ACTION_DIRECTIONS, left_of, right_of


def best_move_toward_food(hx: int, hy: int, fx: int, fy: int):
    """
    Returns a preference ordering of moves that reduce Manhattan distance to food,
    followed by the remaining directions. Does NOT check collisions.
    """
    prefs = []
    if fx < hx:
        prefs.append(Direction.LEFT)
    elif fx > hx:
        prefs.append(Direction.RIGHT)
    if fy < hy:
        prefs.append(Direction.UP)
    elif fy > hy:
        prefs.append(Direction.DOWN)
    for d in Direction:
        if d not in prefs:
            prefs.append(d)
    return prefs  # length 4


def dir_to_action(direction: Direction) -> int:
    """Map a Direction to the env action id."""
    for a, d in ACTION_DIRECTIONS.items():
        if d is direction:
            return a
    raise ValueError(f"No action for {direction!r}")


def decode_obs(obs: np.ndarray):
    """
    Matches observe() layout (9 dims):
    [hx_n, hy_n, fx_n, fy_n, dx, dy, danger_ahead, danger_left, danger_right]
    """
    hx_n, hy_n, fx_n, fy_n, dx, dy, dan_f, dan_l, dan_r = obs.tolist()
    return hx_n, hy_n, fx_n, fy_n, int(dx), int(dy), bool(dan_f), bool(dan_l), bool(dan_r)


def policy_greedy(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Greedy on food distance with simple safety:
    - prefer actions that reduce Manhattan distance
    - avoid any move flagged dangerous if possible
    - the 180° turn is never chosen on purpose (the game ignores it anyway)
    - if every move looks dangerous, keep going forward
    """
    hx_n, hy_n, fx_n, fy_n, dx, dy, dan_f, dan_l, dan_r = decode_obs(obs)

    # Normalized values are exact multiples of 1/(W-1), so comparing them
    # orders cells the same way the grid coordinates do.
    forward = Direction((dx, dy))
    danger = {
        forward: dan_f,
        left_of(forward): dan_l,
        right_of(forward): dan_r,
        forward.opposite: True,
    }

    for d in best_move_toward_food(hx_n, hy_n, fx_n, fy_n):
        if not danger[d]:
            return dir_to_action(d)

    return dir_to_action(forward)
