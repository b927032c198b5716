"""Monte Carlo Tree Search with UCT selection and root parallelization."""

from mctsearch.mcts.config import (
    DEFAULT_EXPLORATION_FACTOR,
    DurationLimit,
    IterationLimit,
    SearchConfig,
    SearchLimit,
    default_worker_count,
)
from mctsearch.mcts.node import Node
from mctsearch.mcts.result import SearchResult, aggregate
from mctsearch.mcts.rng import NumpyRandomSource, RandomSource, spawn_random_sources
from mctsearch.mcts.search import MCTS, SearchHandle
from mctsearch.mcts.state import ContractViolationError, GameState, moves_are_stable
from mctsearch.mcts.tree import SearchTree
from mctsearch.mcts.worker import (
    WorkerSummary,
    deadline_reached,
    iteration_budget,
    run_iteration,
    run_worker,
)

__all__ = [
    "DEFAULT_EXPLORATION_FACTOR",
    "MCTS",
    "ContractViolationError",
    "DurationLimit",
    "GameState",
    "IterationLimit",
    "Node",
    "NumpyRandomSource",
    "RandomSource",
    "SearchConfig",
    "SearchHandle",
    "SearchLimit",
    "SearchResult",
    "SearchTree",
    "WorkerSummary",
    "aggregate",
    "deadline_reached",
    "default_worker_count",
    "iteration_budget",
    "moves_are_stable",
    "run_iteration",
    "run_worker",
    "spawn_random_sources",
]
