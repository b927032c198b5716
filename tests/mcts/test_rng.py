"""Tests for random sources."""

import numpy as np
import pytest

from mctsearch.mcts.rng import NumpyRandomSource, RandomSource, spawn_random_sources


class TestNumpyRandomSource:
    """Tests for the numpy-backed sampler."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(NumpyRandomSource(0), RandomSource)

    def test_values_in_half_open_range(self) -> None:
        rng = NumpyRandomSource(0)
        values = [rng.gen_range(3, 7) for _ in range(500)]
        assert min(values) == 3
        assert max(values) == 6
        assert all(isinstance(v, int) for v in values)

    def test_single_value_range(self) -> None:
        assert NumpyRandomSource(0).gen_range(4, 5) == 4

    def test_empty_range_rejected(self) -> None:
        with pytest.raises(ValueError, match="Empty range"):
            NumpyRandomSource(0).gen_range(2, 2)

    def test_seed_is_reproducible(self) -> None:
        a, b = NumpyRandomSource(42), NumpyRandomSource(42)
        assert [a.gen_range(0, 1000) for _ in range(5)] == [b.gen_range(0, 1000) for _ in range(5)]

    def test_accepts_seed_sequence(self) -> None:
        seq = np.random.SeedSequence(5)
        assert 0 <= NumpyRandomSource(seq).gen_range(0, 10) < 10


class TestSpawnRandomSources:
    """Tests for independent per-worker sources."""

    def test_count(self) -> None:
        assert len(spawn_random_sources(4, seed=1)) == 4

    def test_seeded_spawn_is_reproducible(self) -> None:
        first = [r.gen_range(0, 2**31) for r in spawn_random_sources(3, seed=8)]
        second = [r.gen_range(0, 2**31) for r in spawn_random_sources(3, seed=8)]
        assert first == second

    def test_streams_differ(self) -> None:
        streams = [
            tuple(r.gen_range(0, 2**31) for _ in range(4)) for r in spawn_random_sources(3, seed=8)
        ]
        assert len(set(streams)) == 3
