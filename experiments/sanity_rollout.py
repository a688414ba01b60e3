# /experiments/sanity_rollout.py
"""
Rollouts of SkyHopEnv with two baseline policies, one CSV row per episode.

  python -m experiments.sanity_rollout                         # both policies, seeds 101..120
  python -m experiments.sanity_rollout --policies heuristic --seeds 7,8,9
  python -m experiments.sanity_rollout --save-traces           # also <out>/traces/<policy>/<seed>.npy
"""

from __future__ import annotations
import argparse
import csv
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from src.env.skyhop_env import SkyHopEnv
from src.game.config import HEIGHT, FLYER_H
from src.game.logger import setup_logging

log = logging.getLogger("src.experiments.sanity_rollout")

Policy = Callable[[np.ndarray], int]


def make_random(seed: int, jump_prob: float = 0.08) -> Policy:
    rng = np.random.RandomState(10_000 + seed)
    return lambda _obs: int(rng.random_sample() < jump_prob)


def make_heuristic(seed: int, margin: float = 0.04) -> Policy:
    """Jump while falling once the flyer's bottom nears the bottom of the next opening."""
    span = (HEIGHT - FLYER_H) / HEIGHT
    h_norm = FLYER_H / HEIGHT

    def act(obs: np.ndarray) -> int:
        bottom = obs[0] * span + h_norm
        return int(obs[1] > 0.0 and bottom >= obs[4] - margin)
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": make_random,
    "heuristic": make_heuristic,
}


@dataclass
class Episode:
    policy: str
    seed: int
    frame_skip: int
    decisions: int = 0
    reward: float = 0.0
    score: int = 0
    terminated: bool = False
    truncated: bool = False
    end_cause: Optional[str] = None


def play(policy_name: str, seed: int, frame_skip: int, max_steps: int) -> tuple[Episode, List[int]]:
    policy = POLICIES[policy_name](seed)
    ep = Episode(policy=policy_name, seed=seed, frame_skip=frame_skip)
    actions: List[int] = []

    env = SkyHopEnv(frame_skip=frame_skip)
    try:
        obs, _ = env.reset(seed=seed)
        while ep.decisions < max_steps and not (ep.terminated or ep.truncated):
            a = policy(obs)
            actions.append(a)
            obs, r, ep.terminated, ep.truncated, info = env.step(a)
            ep.decisions += 1
            ep.reward += float(r)
            ep.score = int(info["score"])
            ep.end_cause = info["end_cause"]
    finally:
        env.close()
    return ep, actions


def main():
    ap = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("--policies", nargs="+", default=sorted(POLICIES), choices=sorted(POLICIES))
    ap.add_argument("--seeds", default="101-120", help="'a-b' range or comma list")
    ap.add_argument("--frame-skip", type=int, default=2)
    ap.add_argument("--steps", type=int, default=10_000, help="cap on decisions per episode")
    ap.add_argument("--out-dir", type=Path, default=Path("experiments/runs"))
    ap.add_argument("--save-traces", action="store_true")
    ap.add_argument("--log-level", default="warning")
    args = ap.parse_args()
    setup_logging(args.log_level)

    if "-" in args.seeds:
        lo, hi = (int(v) for v in args.seeds.split("-", 1))
        seeds = list(range(lo, hi + 1))
    else:
        seeds = [int(v) for v in args.seeds.split(",") if v.strip()]

    args.out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = args.out_dir / "episodes.csv"
    new_file = not csv_path.exists()

    with csv_path.open("a", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=[f.name for f in fields(Episode)])
        if new_file:
            writer.writeheader()
        for name in args.policies:
            for seed in seeds:
                ep, actions = play(name, seed, args.frame_skip, args.steps)
                writer.writerow(asdict(ep))
                if args.save_traces:
                    trace_dir = args.out_dir / "traces" / name
                    trace_dir.mkdir(parents=True, exist_ok=True)
                    np.save(trace_dir / f"{seed}.npy", np.asarray(actions, dtype=np.int8))
                log.info("episode %s/%d written", name, seed)
                print(f"{name:>9} seed={seed:<5} score={ep.score:<4} decisions={ep.decisions:<6} "
                      f"reward={ep.reward:8.1f} cause={ep.end_cause or '-'}")

    print(f"wrote {csv_path}")


if __name__ == "__main__":
    main()
