"""
Command line entry point

    python -m starfall.play window --difficulty hard
    python -m starfall.play random --episodes 3 --seed 42
"""

import argparse
import time
from typing import Optional

import numpy as np

from .difficulty import DIFFICULTY_NAMES
from .shooter_env import ShooterEnv


def run_random_episodes(
    n_episodes: int = 1,
    difficulty: str = "normal",
    seed: Optional[int] = None,
    render: bool = False,
    max_steps: Optional[int] = None,
):
    """Run episodes with uniformly random actions and report the results"""
    kwargs = {"max_steps": max_steps} if max_steps else {}
    env = ShooterEnv(render_mode="human" if render else None, difficulty=difficulty, **kwargs)

    results = []
    for episode in range(n_episodes):
        ep_seed = None if seed is None else seed + episode
        obs, info = env.reset(seed=ep_seed)
        env.action_space.seed(ep_seed)

        terminated = truncated = False
        total = 0.0
        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total += reward
            if render:
                time.sleep(env.frame_ms / 1000)

        print(f"Episode {episode + 1}: return={total:.2f} score={info['score']} "
              f"level={info['level']} steps={info['step']} "
              f"{'died' if terminated else 'survived'}")
        results.append({"return": total, **info})

    env.close()

    if results:
        returns = np.array([r["return"] for r in results])
        print(f"Mean return over {len(results)} episodes: {returns.mean():.2f} +/- {returns.std():.2f}")
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Starfall arcade shooter")
    sub = parser.add_subparsers(dest="command", required=True)

    win = sub.add_parser("window", help="Play in an Arcade window")
    win.add_argument("--difficulty", choices=DIFFICULTY_NAMES, default="normal")

    rnd = sub.add_parser("random", help="Run headless episodes with random actions")
    rnd.add_argument("--difficulty", choices=DIFFICULTY_NAMES, default="normal")
    rnd.add_argument("--episodes", type=int, default=1)
    rnd.add_argument("--seed", type=int, default=None)
    rnd.add_argument("--max-steps", type=int, default=None)
    rnd.add_argument("--render", action="store_true")

    args = parser.parse_args(argv)

    if args.command == "window":
        from .window import run_window
        run_window(args.difficulty)
    else:
        run_random_episodes(
            n_episodes=args.episodes,
            difficulty=args.difficulty,
            seed=args.seed,
            render=args.render,
            max_steps=args.max_steps,
        )


if __name__ == "__main__":
    main()
