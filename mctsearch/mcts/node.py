"""MCTS Node implementation.

Nodes live in a SearchTree arena and refer to each other by index, so a node
never holds a direct reference to its parent or children.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mctsearch.mcts.state import GameState


class Node:
    """One vertex of the search tree.

    Attributes:
        state: The game state this node represents.
        parent: Arena index of the parent node (None for the root).
        children: Arena indices of child nodes, in `all_moves()` order.
        visits: Visit count. Starts at 1 so UCT never divides by zero.
        wins: Number of playouts whose outcome this node's state judged a win.
    """

    __slots__ = ("state", "parent", "children", "visits", "wins")

    def __init__(self, state: GameState, parent: int | None = None) -> None:
        self.state = state
        self.parent = parent
        self.children: list[int] = []
        self.visits: int = 1
        self.wins: int = 0

    @property
    def is_expanded(self) -> bool:
        """Whether this node has been expanded (has children)."""
        return len(self.children) > 0

    @property
    def win_rate(self) -> float:
        return self.wins / self.visits

    def __repr__(self) -> str:
        return (
            f"Node(visits={self.visits}, wins={self.wins}, "
            f"children={len(self.children)}, parent={self.parent})"
        )
