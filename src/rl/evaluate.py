# src/rl/evaluate.py
from __future__ import annotations
import argparse
import csv
import logging
import os
from typing import Tuple

from src.rl.env import SnakeEnv
from src.rl.policies import POLICIES
from src.snake.config import Config


# --------------------------
# Episode loop
# --------------------------
def run_episode(
    env: SnakeEnv,
    policy: str,
    epsilon: float = 0.1,
    seed: int | None = None,
) -> Tuple[int, float, int, str]:
    """
    Play one episode with a fixed (non-learning) policy.

    Returns:
        steps: number of steps taken
        total: total return (sum of rewards)
        score: final score
        outcome: "wall", "self", "board_full" or "step_limit"
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    act = POLICIES[policy]

    obs = env.reset(seed)
    total = 0.0
    steps = 0
    info = {"score": 0, "outcome": None}

    done = False
    while not done:
        a = act(obs, env, epsilon)
        obs, r, done, info = env.step(a)
        total += r
        steps += 1
        env.render()

    return steps, total, info["score"], info["outcome"]


def write_csv(rows, out_csv: str) -> None:
    with open(out_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)


# --------------------------
# Main
# --------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run baseline policies on headless snake.")
    parser.add_argument("--episodes", type=int, default=50)
    parser.add_argument("--policy", type=str, default="greedy", choices=sorted(POLICIES))
    parser.add_argument("--epsilon", type=float, default=0.1, help="epsilon for eps-greedy")
    parser.add_argument("--width", type=int, default=20)
    parser.add_argument("--height", type=int, default=20)
    parser.add_argument("--seed", type=int, default=0, help="episode i uses seed + i")
    parser.add_argument("--max-steps", type=int, default=10_000)
    parser.add_argument("--outdir", type=str, default="data/runs", help="CSV is saved here")
    parser.add_argument("--render", action="store_true", help="watch the episodes in a window")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    cfg = Config(grid_w=args.width, grid_h=args.height, seed=args.seed).validate()
    env = SnakeEnv(config=cfg, max_steps=args.max_steps, render_enabled=args.render)

    os.makedirs(args.outdir, exist_ok=True)
    out_csv = os.path.join(args.outdir, f"eval_{args.policy}.csv")

    print(f"Running {args.episodes} episode(s) with policy={args.policy} ε={args.epsilon}")
    print("ep,steps,return,score,outcome")

    rows = [("ep", "steps", "return", "score", "outcome")]
    try:
        for ep in range(1, args.episodes + 1):
            steps, ret, score, outcome = run_episode(
                env, args.policy, args.epsilon, seed=args.seed + ep
            )
            print(f"{ep},{steps},{ret:.3f},{score},{outcome}")
            rows.append((ep, steps, float(f"{ret:.6f}"), score, outcome))
    finally:
        env.close()

    write_csv(rows, out_csv)
    print(f"\nSaved results → {out_csv}")
    return out_csv


if __name__ == "__main__":
    main()
