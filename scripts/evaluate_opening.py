#!/usr/bin/env python3
"""Measure how often a search configuration finds the winning Nim opening.

Usage:
    uv run python scripts/evaluate_opening.py configs/search.yaml
    uv run python scripts/evaluate_opening.py configs/search.yaml --trials 50 --target 21
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from mctsearch.config.display import format_config_summary
from mctsearch.config.loader import load_config
from mctsearch.eval.trials import run_trials
from mctsearch.games.nim import NimConfig, NimMove, NimState
from mctsearch.mcts.config import SearchConfig


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run repeated searches from the Nim opening and tally the chosen moves."
    )
    parser.add_argument("config", type=Path, help="Path to search YAML config file")
    parser.add_argument("--trials", type=int, default=20, help="Number of independent searches")
    parser.add_argument("--target", type=int, default=21, help="Target number")
    parser.add_argument("--max-take", type=int, default=3, help="Largest amount per move")
    parser.add_argument(
        "overrides", nargs="*", help="Dotted config overrides, e.g. workers=4 limit.total=5000"
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(SearchConfig, args.config, args.overrides)
    game = NimConfig(target=args.target, max_take=args.max_take)
    print(format_config_summary(("Game", game), ("Search", config)))
    print()

    report = run_trials(NimState(config=game), config, args.trials, verbose=True)

    optimal = NimMove(game.target % (game.max_take + 1))
    print()
    print(report.table())
    if optimal.amount > 0:
        print(f"Optimal opening {optimal}: {report.frequency(optimal):.1%}")
    else:
        print("Opening position is lost for the first player; every move loses.")


if __name__ == "__main__":
    main()
