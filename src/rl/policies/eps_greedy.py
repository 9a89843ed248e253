# src/rl/policies/eps_greedy.py
import numpy as np # type: ignore
from src.rl.policies.random import policy_random
from src.rl.policies.greedy import policy_greedy


def policy_eps_greedy(obs: np.ndarray, env, epsilon: float = 0.1) -> int:
    """
    With probability epsilon explore with a random action, otherwise play greedy.
    Draws from env.rng so a seeded env replays the same episode.
    """
    if not 0.0 <= epsilon <= 1.0:
        raise ValueError(f"epsilon must be in [0, 1], got {epsilon}")
    if env.rng.random() < epsilon:
        return policy_random(obs, env)
    return policy_greedy(obs, env)
