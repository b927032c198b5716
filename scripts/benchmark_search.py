#!/usr/bin/env python3
"""Benchmark MCTS iterations per second.

Usage:
    uv run python scripts/benchmark_search.py
    uv run python scripts/benchmark_search.py --iterations 20000 --workers 4
    uv run python scripts/benchmark_search.py --profile
"""

from __future__ import annotations

import argparse
import cProfile
import statistics
import time

from mctsearch.games.nim import NimState
from mctsearch.mcts.config import IterationLimit, SearchConfig
from mctsearch.mcts.rng import NumpyRandomSource
from mctsearch.mcts.search import MCTS
from mctsearch.mcts.worker import iteration_budget, run_worker


def benchmark_iterations_per_second(
    n_iterations: int = 10_000,
    workers: int = 1,
) -> tuple[float, float, int]:
    """Run one search and return (iterations/s, elapsed seconds, iterations)."""
    config = SearchConfig(workers=workers, limit=IterationLimit(total=n_iterations))
    mcts = MCTS(config)

    start = time.perf_counter()
    result = mcts.search(NimState())
    elapsed = time.perf_counter() - start

    return result.total_iterations / elapsed, elapsed, result.total_iterations


def run_for_profile(n_iterations: int = 20_000) -> None:
    """Run a single worker in-thread so the profiler sees the search."""
    run_worker(
        NimState(),
        exploration_factor=SearchConfig(workers=1).exploration_factor,
        should_stop=iteration_budget(n_iterations),
        n_workers=1,
        rng=NumpyRandomSource(42),
    )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--profile", action="store_true", help="Run with cProfile")
    parser.add_argument("--iterations", type=int, default=10_000, help="Total iterations")
    parser.add_argument("--workers", type=int, default=1, help="Number of parallel workers")
    args = parser.parse_args()

    if args.profile:
        print(f"Profiling {args.iterations} iterations...")

        profiler = cProfile.Profile()
        profiler.enable()
        run_for_profile(n_iterations=args.iterations)
        profiler.disable()

        profile_path = "mcts_profile.prof"
        profiler.dump_stats(profile_path)
        print(f"\nProfile saved to {profile_path}")
        print(f"Run: snakeviz {profile_path}")
        return

    print("MCTS Benchmark")
    print("=" * 50)

    print("\nWarm-up (1 run)...")
    benchmark_iterations_per_second(n_iterations=args.iterations // 10 or 1, workers=args.workers)

    print(f"\nBenchmarking {args.iterations} iterations on {args.workers} workers (5 trials)...")
    rates = []
    for i in range(5):
        rate, _, _ = benchmark_iterations_per_second(args.iterations, args.workers)
        rates.append(rate)
        print(f"  Trial {i + 1}: {rate:.1f} iterations/s")

    mean_rate = statistics.mean(rates)
    stdev = statistics.stdev(rates)

    print("\nResults:")
    print(f"  Mean: {mean_rate:.1f} iterations/s (+/-{stdev:.1f})")
    print(f"  Time per iteration: {1000 / mean_rate:.3f}ms")


if __name__ == "__main__":
    main()
