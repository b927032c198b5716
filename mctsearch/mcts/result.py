"""Search result and cross-worker aggregation.

Workers never share a tree. Their root-level visit counts are combined by
position, which is only meaningful because every worker's root children were
expanded in the same canonical `all_moves()` order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mctsearch.mcts.worker import WorkerSummary


@dataclass
class SearchResult:
    """Result of a root-parallel MCTS search.

    Fields:
        total_iterations: Iterations summed over all workers.
        best_move: Move with the most combined root visits.
        visit_counts: Combined root child visits, aligned with `moves`.
        moves: Canonical root move order captured at search start.
    """

    total_iterations: int
    best_move: Any
    visit_counts: np.ndarray
    moves: list[Any]

    @property
    def best_index(self) -> int:
        return int(np.argmax(self.visit_counts))

    def visit_share(self) -> dict[Any, float]:
        """Fraction of combined root visits per move, for display."""
        total = float(self.visit_counts.sum())
        return {move: float(v) / total for move, v in zip(self.moves, self.visit_counts)}


def aggregate(summaries: Sequence[WorkerSummary], moves: Sequence[Any]) -> SearchResult:
    """Combine worker summaries into one recommendation.

    Iteration counts are summed and visit vectors summed elementwise.
    The move with the highest combined count wins; ties go to the first
    move in canonical order.

    Args:
        summaries: One summary per worker.
        moves: Canonical root move order.

    Returns:
        SearchResult with total iterations and selected move.
    """
    if not summaries:
        raise ValueError("Cannot aggregate zero worker summaries")

    total_iterations = sum(s.iterations for s in summaries)
    votes = np.sum([s.root_visits for s in summaries], axis=0)
    if votes.size == 0:
        raise ValueError("Cannot pick a move: workers reported no root children")
    best = int(np.argmax(votes))

    return SearchResult(
        total_iterations=total_iterations,
        best_move=moves[best],
        visit_counts=votes,
        moves=list(moves),
    )
