"""Shared fixtures: small games implementing the GameState contract."""

from __future__ import annotations

import pytest

from mctsearch.games.nim import NimConfig, NimState
from mctsearch.mcts.rng import NumpyRandomSource


@pytest.fixture
def nim() -> NimState:
    """Standard opening position: target 21, take 1-3."""
    return NimState()


@pytest.fixture
def small_nim() -> NimState:
    """Tiny race (target 9) whose full game tree is a few hundred nodes."""
    return NimState(config=NimConfig(target=9, max_take=3))


@pytest.fixture
def rng() -> NumpyRandomSource:
    """Seeded random source."""
    return NumpyRandomSource(1234)
