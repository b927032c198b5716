"""Generic Monte Carlo Tree Search for two-outcome sequential games."""

from mctsearch.mcts import (
    MCTS,
    ContractViolationError,
    GameState,
    NumpyRandomSource,
    RandomSource,
    SearchConfig,
    SearchHandle,
    SearchResult,
)

__all__ = [
    "MCTS",
    "ContractViolationError",
    "GameState",
    "NumpyRandomSource",
    "RandomSource",
    "SearchConfig",
    "SearchHandle",
    "SearchResult",
]
