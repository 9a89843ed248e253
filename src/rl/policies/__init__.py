# src/rl/policies/__init__.py
"""Baseline policies for the headless snake environment."""

from src.rl.policies.random import policy_random
from src.rl.policies.greedy import policy_greedy
from src.rl.policies.eps_greedy import policy_eps_greedy

POLICIES = {
    "random": policy_random,
    "greedy": policy_greedy,
    "eps-greedy": policy_eps_greedy,
}

__all__ = ["POLICIES", "policy_random", "policy_greedy", "policy_eps_greedy"]
