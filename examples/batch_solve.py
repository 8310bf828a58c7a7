#!/usr/bin/env python3
"""Build a batch of seeded puzzles and auto-solve each one through the tool environment."""

from __future__ import annotations

import argparse
import json

from ringpuzzle.core import Config, load_config
from ringpuzzle.environment import RingPuzzleEnvironment


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ring puzzle batch solve check.")
    parser.add_argument("--config", help="Path to a ring puzzle YAML config")
    parser.add_argument("--runs", type=int, default=20, help="Number of puzzles to build")
    parser.add_argument("--seed-base", type=int, default=0, help="Seed of the first puzzle")
    parser.add_argument("--json", action="store_true", help="Print per-run results as JSON")
    return parser


def run_batch(config: Config, runs: int, seed_base: int) -> list:
    env = RingPuzzleEnvironment(config)
    results = []
    try:
        for i in range(runs):
            seed = seed_base + i
            env.reset(seed=seed)
            moves = env.session.moves_to_solve
            pieces = len(env.session.registry)
            solve = env.execute_tool_call("solve", {})
            check = env.execute_tool_call("check_solve", {})
            results.append({
                "seed": seed,
                "pieces": pieces,
                "moves_to_solve": moves,
                "played": solve.get("played", 0),
                "solved": check.get("solved", False),
            })
    finally:
        env.close()
    return results


def main() -> int:
    args = build_parser().parse_args()
    config = load_config(args.config) if args.config else Config()
    results = run_batch(config, max(1, args.runs), args.seed_base)

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        for r in results:
            print(f"seed={r['seed']:<4} pieces={r['pieces']:<3} moves={r['moves_to_solve']:<3} "
                  f"solved={r['solved']}")
    solved = sum(1 for r in results if r["solved"])
    print(f"Solved {solved}/{len(results)}")
    return 0 if solved == len(results) else 1


if __name__ == "__main__":
    raise SystemExit(main())


# python examples/batch_solve.py --runs 50
# python examples/batch_solve.py --config configs/origami_default.yaml --runs 10 --seed-base 100 --json
