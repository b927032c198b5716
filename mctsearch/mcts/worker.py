"""Single-worker search loop.

Each worker owns one SearchTree and one RandomSource for its whole run and
shares nothing with other workers. Only the root-level visit counts leave the
worker, packaged as a WorkerSummary.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from mctsearch.mcts.tree import SearchTree

if TYPE_CHECKING:
    from collections.abc import Callable

    from mctsearch.mcts.rng import RandomSource
    from mctsearch.mcts.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class WorkerSummary:
    """What a finished worker reports back.

    Attributes:
        iterations: Number of completed search iterations.
        root_visits: Visit count of each root child, in `all_moves()` order.
            Counts include the creation baseline of 1.
    """

    iterations: int
    root_visits: np.ndarray


def run_iteration(tree: SearchTree, rng: RandomSource) -> None:
    """Run one select → expand → simulate → backpropagate cycle.

    A terminal selection is backed up with its own outcome. Otherwise the
    leaf is fully expanded but only one randomly chosen new child is played
    out; its siblings keep their initial statistics until selection reaches
    them.
    """
    idx = tree.select()
    outcome = tree[idx].state.is_terminal_state()

    if outcome is not None:
        tree.backpropagate(idx, outcome)
        return

    children = tree.expand(idx)
    child = children[rng.gen_range(0, len(children))]
    tree.backpropagate(child, tree.random_playout(child, rng))


def run_worker(
    state: GameState,
    exploration_factor: float,
    should_stop: Callable[[int, int], bool],
    n_workers: int,
    rng: RandomSource,
) -> WorkerSummary:
    """Search from state until should_stop fires.

    The stop condition is checked after every iteration with the worker
    count and the number of iterations completed so far, so at least one
    iteration always runs and an iteration is never interrupted.

    Returns:
        WorkerSummary with iteration count and root child visit counts.
    """
    tree = SearchTree(state, exploration_factor)
    iterations = 0

    while True:
        run_iteration(tree, rng)
        iterations += 1
        if should_stop(n_workers, iterations):
            break

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Worker finished after {iterations} iterations: {tree.get_statistics()}")

    return WorkerSummary(iterations=iterations, root_visits=tree.root_visit_counts())


def iteration_budget(total_iterations: int) -> Callable[[int, int], bool]:
    """Stop condition splitting a total budget evenly across workers.

    Each worker stops after total_iterations // n_workers iterations (but
    never fewer than one, since the check follows the first iteration).
    """
    if total_iterations < 1:
        raise ValueError(f"total_iterations must be >= 1, got {total_iterations}")

    def should_stop(n_workers: int, iterations: int) -> bool:
        return iterations >= total_iterations // n_workers

    return should_stop


def deadline_reached(deadline: float) -> Callable[[int, int], bool]:
    """Stop condition firing once time.monotonic() passes deadline.

    A worker may overrun by up to one iteration (one full playout).
    """

    def should_stop(n_workers: int, iterations: int) -> bool:
        return time.monotonic() >= deadline

    return should_stop
