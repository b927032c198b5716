"""Random source contract and the default numpy-backed implementation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer sampler used for playouts and child selection.

    Each search worker owns its own instance, so implementations need no
    internal locking.
    """

    def gen_range(self, low: int, high: int) -> int:
        """Return a uniformly random integer in [low, high)."""
        ...


class NumpyRandomSource:
    """RandomSource backed by a numpy Generator (PCG64).

    Args:
        seed: Anything numpy.random.default_rng accepts, including a
            SeedSequence. None draws fresh OS entropy.
    """

    def __init__(self, seed: int | np.random.SeedSequence | None = None) -> None:
        self._generator = np.random.default_rng(seed)

    def gen_range(self, low: int, high: int) -> int:
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")
        return int(self._generator.integers(low, high))


def spawn_random_sources(n: int, seed: int | None = None) -> list[NumpyRandomSource]:
    """Create n independent random sources from a single seed.

    Uses SeedSequence.spawn so streams do not overlap. With seed=None every
    call produces different streams.
    """
    children = np.random.SeedSequence(seed).spawn(n)
    return [NumpyRandomSource(child) for child in children]
