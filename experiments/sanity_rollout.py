# /experiments/sanity_rollout.py
"""
Sanity rollouts for GGEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds and difficulties
- Writes an episodes CSV for notebook analysis
- Saves per-episode action sequences for exact replay

Usage examples (from repo root):
  # Both policies, 20 default seeds, every difficulty, save traces:
  python -m experiments.sanity_rollout --policies both --save-traces

  # Only heuristic on hard, custom seeds:
  python -m experiments.sanity_rollout --policies heuristic --difficulties hard --seeds 111,222,333

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from src.env.gg_env import GGEnv


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, flip_prob: float = 0.1):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < flip_prob)
    return act

def tiny_heuristic_policy_init():
    """
    Very small rule:
      - If gravity is down: flip when the floor ahead (+120) is missing or has
        an obstacle, and the ceiling there exists and is clear.
      - If gravity is up: mirror for the ceiling.
    """
    def act(obs: np.ndarray) -> int:
        grav = obs[2]  # +1 down, -1 up
        # Near probe (+120) lives at indices 3..6
        ceil_n, floor_n, danger_top, danger_bot = obs[3], obs[4], obs[5], obs[6]
        if grav > 0:
            cur_danger = (danger_bot == 1.0) or (floor_n >= 0.999)   # no floor sentinel
            target_safe = (danger_top == 0.0) and (ceil_n > 0.0)
        else:
            cur_danger = (danger_top == 1.0) or (ceil_n <= 0.001)    # no ceiling sentinel
            target_safe = (danger_bot == 0.0) and (floor_n < 1.0)
        return 1 if (cur_danger and target_safe) else 0
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    difficulty: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, int, float, str, Optional[str]]:
    """
    Returns: (ep_len, ret_sum, score, distance_px, outcome, death_cause)
    Also writes the action trace to disk if requested.
    """
    env = GGEnv(difficulty=difficulty, frame_skip=frame_skip)

    if policy_name == "random":
        action_seed = 10_000 + seed
        policy = random_policy_init(action_seed)
    elif policy_name == "heuristic":
        action_seed = -1
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError("Unknown policy")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / difficulty / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        meta_lines = [
            f"seed={seed}",
            f"difficulty={difficulty}",
            f"frame_skip={frame_skip}",
            f"policy={policy_name}",
            f"action_rng_seed={action_seed}",
            f"steps_limit={steps_limit}",
        ]
        (trace_dir / f"{seed}_meta.txt").write_text("\n".join(meta_lines), encoding="utf-8")

    return (ep_len, ret_sum, int(info.get("score", 0)), float(info.get("distance_px", 0.0)),
            str(info.get("outcome", "continue")), info.get("death_cause"))


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"])
    ap.add_argument("--difficulties", type=str, default="easy,medium,hard",
                    help="Comma-separated difficulties")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))
    difficulties = [d.strip().lower() for d in args.difficulties.split(",") if d.strip()]

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "policy_name", "difficulty", "seed", "frame_skip",
        "episode_len_decisions", "return_sum", "score", "distance_px",
        "outcome", "death_cause",
    ]

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} difficulties={difficulties} on {len(seeds)} seeds "
          f"(frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv}")

    for difficulty in difficulties:
        for policy_name in to_run:
            for seed in seeds:
                ep_len, ret_sum, score, dist, outcome, cause = run_one_episode(
                    policy_name=policy_name,
                    difficulty=difficulty,
                    seed=seed,
                    frame_skip=args.frame_skip,
                    steps_limit=args.steps,
                    save_traces=args.save_traces,
                    out_dir=out_dir,
                )
                write_episode_row(episodes_csv, header, [
                    policy_name, difficulty, seed, args.frame_skip,
                    ep_len, f"{ret_sum:.1f}", score, f"{dist:.1f}",
                    outcome, cause or "",
                ])
                print(f"[{difficulty}/{policy_name}] seed={seed}  len={ep_len}  score={score}  "
                      f"dist={dist:.1f}  ret={ret_sum:.1f}  outcome={outcome}  cause={cause}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
