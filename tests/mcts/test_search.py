"""Tests for root-parallel search orchestration."""

import logging
import threading
import time

import numpy as np
import pytest

from mctsearch.games.nim import NimMove, NimState
from mctsearch.mcts.config import DurationLimit, IterationLimit, SearchConfig
from mctsearch.mcts.rng import NumpyRandomSource
from mctsearch.mcts.search import MCTS, SearchHandle
from mctsearch.mcts.state import ContractViolationError, GameState
from tests.mcts.fakes import DeadEndState, FinishedState, OverButPlayableState


def _config(workers: int = 2, total: int = 200, seed: int | None = 0) -> SearchConfig:
    return SearchConfig(workers=workers, seed=seed, limit=IterationLimit(total=total))


class TestStart:
    """Tests for starting a search."""

    def test_returns_handle_with_canonical_moves(self, nim: NimState) -> None:
        handle = MCTS(_config()).run(nim)

        assert isinstance(handle, SearchHandle)
        assert handle.moves == nim.all_moves()
        assert handle.n_workers == 2
        handle.join()

    def test_does_not_block_while_workers_run(self, nim: NimState) -> None:
        release = threading.Event()
        handle = MCTS(_config(workers=3)).run_with_end_condition(
            nim, lambda n_workers, iterations: release.is_set()
        )

        assert not handle.is_finished()
        release.set()
        result = handle.join()
        assert handle.is_finished()
        assert result.total_iterations >= 3

    def test_root_without_moves_rejected(self) -> None:
        with pytest.raises(ValueError, match="no legal moves"):
            MCTS(_config()).run(DeadEndState(depth=1))

    @pytest.mark.parametrize("state", [FinishedState(), OverButPlayableState()])
    def test_terminal_root_rejected(self, state: GameState) -> None:
        """A finished game has no move to recommend, even if it lists moves."""
        with pytest.raises(ValueError, match="already over"):
            MCTS(_config()).run(state)

    def test_rng_factory_called_once_per_worker(self, nim: NimState) -> None:
        created: list[NumpyRandomSource] = []

        def factory() -> NumpyRandomSource:
            created.append(NumpyRandomSource(len(created)))
            return created[-1]

        MCTS(_config(workers=4), rng_factory=factory).run(nim).join()
        assert len(created) == 4

    def test_default_config(self) -> None:
        assert MCTS().config == SearchConfig()


class TestJoin:
    """Tests for waiting on and combining workers."""

    @pytest.mark.parametrize("workers,total,expected", [(1, 100, 100), (2, 100, 100), (3, 100, 99)])
    def test_iteration_budget_split_evenly(
        self, nim: NimState, workers: int, total: int, expected: int
    ) -> None:
        result = MCTS(_config(workers=workers)).run_with_iterations(nim, total).join()
        assert result.total_iterations == expected

    def test_votes_cover_every_root_move(self, nim: NimState) -> None:
        result = MCTS(_config(workers=2, total=300)).search(nim)

        assert result.moves == nim.all_moves()
        assert result.visit_counts.shape == (3,)
        # Each worker adds its iterations plus a baseline of 1 per child.
        assert int(result.visit_counts.sum()) == 300 + 2 * 3
        assert result.best_move in result.moves

    def test_join_twice_rejected(self, nim: NimState) -> None:
        handle = MCTS(_config()).run(nim)
        handle.join()
        with pytest.raises(RuntimeError, match="twice"):
            handle.join()

    def test_is_finished_eventually(self, nim: NimState) -> None:
        handle = MCTS(_config(total=50)).run(nim)
        deadline = time.monotonic() + 10.0
        while not handle.is_finished() and time.monotonic() < deadline:
            time.sleep(0.01)
        assert handle.is_finished()
        handle.join()

    def test_worker_failure_surfaces_at_join(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        handle = MCTS(_config(workers=2)).run(DeadEndState())

        with caplog.at_level(logging.ERROR), pytest.raises(ContractViolationError):
            handle.join()
        assert "search workers failed" in caplog.text

    def test_same_seed_same_result(self, nim: NimState) -> None:
        a = MCTS(_config(workers=3, total=300, seed=11)).search(nim)
        b = MCTS(_config(workers=3, total=300, seed=11)).search(nim)

        np.testing.assert_array_equal(a.visit_counts, b.visit_counts)
        assert a.best_move == b.best_move


class TestLimits:
    """Tests for termination modes."""

    def test_run_uses_duration_limit(self, nim: NimState) -> None:
        config = SearchConfig(workers=2, seed=0, limit=DurationLimit(seconds=0.05))
        start = time.monotonic()
        result = MCTS(config).search(nim)

        assert result.total_iterations >= 2
        assert time.monotonic() - start < 5.0

    def test_run_with_duration_rejects_non_positive(self, nim: NimState) -> None:
        with pytest.raises(ValueError, match="seconds"):
            MCTS(_config()).run_with_duration(nim, 0)


class TestMoveQuality:
    """Searches with an obvious answer."""

    @pytest.mark.parametrize(
        "total,winning_move",
        [
            (18, NimMove(3)),
            (19, NimMove(2)),
            (20, NimMove(1)),
        ],
    )
    def test_takes_immediate_win(self, total: int, winning_move: NimMove) -> None:
        result = MCTS(_config(workers=2, total=1000)).search(NimState(total=total))
        assert result.best_move == winning_move

    def test_avoids_handing_over_the_win(self) -> None:
        """From 16 only +1 leaves the opponent without a winning reply."""
        result = MCTS(_config(workers=2, total=4000)).search(NimState(total=16))
        assert result.best_move == NimMove(1)
