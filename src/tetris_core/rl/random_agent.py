from __future__ import annotations

import argparse
import logging

import gymnasium as gym

# Ensure envs are registered
import tetris_core.env  # noqa: F401


logger = logging.getLogger(__name__)


def run_random(steps: int = 2000, seed: int | None = None) -> float:
    env = gym.make("Tetris-10x20-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d ended after %d pieces", episodes, info["pieces_locked"])
            obs, info = env.reset()
    env.close()
    print(f"Random agent total lines: {total_reward:.0f} over {episodes} finished episodes")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
