"""Sample games implementing the GameState contract."""

from mctsearch.games.nim import NimConfig, NimMove, NimState

__all__ = [
    "NimConfig",
    "NimMove",
    "NimState",
]
