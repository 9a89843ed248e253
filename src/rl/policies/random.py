# src/rl/policies/random.py
import numpy as np # type: ignore


def policy_random(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Uniformly random action from env.rng.
    Reversals are legal actions but the game ignores them.
    """
    return int(env.rng.integers(env.action_space_n))
