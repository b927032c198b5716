"""Game state contract consumed by the search engine.

A game plugs into the engine by subclassing GameState and implementing the
four transition/evaluation methods. The engine never inspects a state beyond
this interface.
"""

from __future__ import annotations

import pickle
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mctsearch.mcts.rng import RandomSource


class ContractViolationError(RuntimeError):
    """Raised when a GameState implementation breaks the engine's assumptions.

    The only such case the engine detects is a non-terminal state that
    reports no legal moves. This is a defect in the game code, never a
    transient condition, so it is not retried.
    """


class GameState(ABC):
    """Base class for games searchable by MCTS.

    Outcome perspective:
        `terminal_is_win` is asked of every state on the path from a node to
        the root. A state should answer from the point of view of the player
        who made the move leading INTO it, since that is the player whose
        choice the parent's UCT selection is making. In a two-player game this
        makes adjacent plies disagree about the same outcome.

    Move ordering:
        `all_moves` must return the same moves in the same order for equal
        states. Root-level statistics from independent workers are combined
        by position, so an unstable ordering silently corrupts the result.
    """

    @abstractmethod
    def all_moves(self) -> Sequence[Any]:
        """Return all moves that can be performed from this state."""
        ...

    @abstractmethod
    def apply_move(self, move: Any) -> GameState:
        """Return the state reached by applying move. Must not mutate self."""
        ...

    @abstractmethod
    def is_terminal_state(self) -> Any | None:
        """Return an outcome descriptor if the game is over, else None."""
        ...

    @abstractmethod
    def terminal_is_win(self, outcome: Any) -> bool:
        """Given the outcome of a finished game, is it a win for this state?"""
        ...

    def random_move(self, rng: RandomSource) -> Any | None:
        """Pick a uniformly random legal move, or None if there are none.

        Used during random playout. Override for a faster sampler if
        building the full move list is expensive.
        """
        moves = self.all_moves()
        if not moves:
            return None
        return moves[rng.gen_range(0, len(moves))]


def moves_are_stable(state: GameState, repeats: int = 3) -> bool:
    """Check that move ordering survives serialization round-trips.

    Pickles the state, restores it `repeats` times and compares each copy's
    move list against the original's, element by element and in order.

    Returns:
        True if every restored copy yields an identical move sequence.
    """
    expected = list(state.all_moves())
    payload = pickle.dumps(state)

    for _ in range(repeats):
        restored: GameState = pickle.loads(payload)
        if list(restored.all_moves()) != expected:
            return False
        if list(state.all_moves()) != expected:
            return False

    return True
