"""Arena-backed MCTS tree.

The tree owns a flat list of nodes; parent/child links are list indices.
Indices are never reused or invalidated, and the arena only grows, so an
index handed out by `expand` stays valid for the tree's whole lifetime.

The four primitives here (select, expand, random_playout, backpropagate) are
composed into search iterations by `mctsearch.mcts.worker`.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import numpy as np

from mctsearch.mcts.node import Node
from mctsearch.mcts.state import ContractViolationError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mctsearch.mcts.rng import RandomSource
    from mctsearch.mcts.state import GameState


class SearchTree:
    """MCTS statistics tree for a single worker.

    Attributes:
        exploration_factor: UCT exploration constant (c).
    """

    def __init__(self, root_state: GameState, exploration_factor: float) -> None:
        """Initialize the tree with a root node at index 0.

        Args:
            root_state: State to search from.
            exploration_factor: UCT exploration constant, must be >= 0.
        """
        if exploration_factor < 0:
            raise ValueError(f"exploration_factor must be >= 0, got {exploration_factor}")
        self.exploration_factor = exploration_factor
        self._nodes: list[Node] = [Node(root_state)]

    @property
    def root(self) -> Node:
        return self._nodes[0]

    def __getitem__(self, idx: int) -> Node:
        return self._nodes[idx]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def add_node(self, node: Node) -> int:
        """Append a node to the arena and link it into its parent.

        Returns:
            The new node's index.
        """
        idx = len(self._nodes)
        self._nodes.append(node)
        if node.parent is not None:
            self._nodes[node.parent].children.append(idx)
        return idx

    def uct(self, node_idx: int, parent_idx: int) -> float:
        """Upper confidence bound of a child as seen from its parent.

        UCT = W/N + c * sqrt(ln(N_parent) / N)
        """
        node = self._nodes[node_idx]
        parent = self._nodes[parent_idx]

        exploitation = node.wins / node.visits
        exploration = self.exploration_factor * math.sqrt(math.log(parent.visits) / node.visits)

        return exploitation + exploration

    def select(self) -> int:
        """Walk from the root following the best UCT child.

        Stops at the first node that is terminal or has no children.
        Ties go to the earliest child.

        Returns:
            Index of the selected node.
        """
        idx = 0
        while True:
            node = self._nodes[idx]
            if node.state.is_terminal_state() is not None or not node.children:
                return idx

            best_idx = node.children[0]
            best_score = self.uct(best_idx, idx)
            for child_idx in node.children[1:]:
                score = self.uct(child_idx, idx)
                if score > best_score:
                    best_idx, best_score = child_idx, score
            idx = best_idx

    def expand(self, idx: int) -> list[int]:
        """Create one child per legal move of a leaf.

        Args:
            idx: Index of an unexpanded, non-terminal node.

        Returns:
            Indices of the new children, in `all_moves()` order.

        Raises:
            ContractViolationError: If the state reports no legal moves.
        """
        state = self._nodes[idx].state
        moves = state.all_moves()
        if not moves:
            raise ContractViolationError(
                f"Non-terminal state {state!r} has no legal moves; cannot expand"
            )

        return [self.add_node(Node(state.apply_move(move), parent=idx)) for move in moves]

    def random_playout(self, idx: int, rng: RandomSource) -> Any:
        """Play uniformly random moves from a node's state until the game ends.

        Tree statistics are not touched.

        Returns:
            The outcome descriptor of the terminal state reached.

        Raises:
            ContractViolationError: If a non-terminal state yields no move.
        """
        state = self._nodes[idx].state
        while True:
            outcome = state.is_terminal_state()
            if outcome is not None:
                return outcome

            move = state.random_move(rng)
            if move is None:
                raise ContractViolationError(
                    f"Non-terminal state {state!r} has no legal moves during playout"
                )
            state = state.apply_move(move)

    def backpropagate(self, idx: int, outcome: Any) -> None:
        """Record one playout outcome on a node and all of its ancestors.

        Every node on the path gets one more visit, and one more win when its
        own state considers the outcome favorable.
        """
        current: int | None = idx
        while current is not None:
            node = self._nodes[current]
            node.visits += 1
            if node.state.terminal_is_win(outcome):
                node.wins += 1
            current = node.parent

    def root_visit_counts(self) -> np.ndarray:
        """Visit counts of the root's children, in move order."""
        return np.array([self._nodes[c].visits for c in self.root.children], dtype=np.int64)

    def get_statistics(self) -> dict[str, Any]:
        """Summary statistics, mainly for debug logging."""
        return {
            "total_nodes": len(self._nodes),
            "root_visits": self.root.visits,
            "root_children": len(self.root.children),
            "max_depth": self._max_depth(),
        }

    def _max_depth(self) -> int:
        """Depth of the deepest node (root = 0).

        Children always have larger indices than their parents, so one
        forward pass over the arena is enough.
        """
        depths = [0] * len(self._nodes)
        for idx, node in enumerate(self._nodes):
            if node.parent is not None:
                depths[idx] = depths[node.parent] + 1
        return max(depths)
