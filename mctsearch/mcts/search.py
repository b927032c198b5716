"""Root-parallel MCTS orchestration.

MCTS starts N independent workers, each with a private tree and random
source, on a thread pool and returns a SearchHandle immediately. Joining the
handle combines the workers' root statistics into a SearchResult.

Usage:
    mcts = MCTS(SearchConfig(workers=4))
    handle = mcts.run_with_duration(state, seconds=1.0)
    ...  # do something else, optionally poll handle.is_finished()
    result = handle.join()
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Any

from mctsearch.mcts.config import DurationLimit, IterationLimit, SearchConfig
from mctsearch.mcts.result import aggregate
from mctsearch.mcts.rng import spawn_random_sources
from mctsearch.mcts.worker import deadline_reached, iteration_budget, run_worker

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mctsearch.mcts.result import SearchResult
    from mctsearch.mcts.rng import RandomSource
    from mctsearch.mcts.state import GameState
    from mctsearch.mcts.worker import WorkerSummary

logger = logging.getLogger(__name__)


class SearchHandle:
    """Handle on a running search.

    Workers move from running to finished independently. `is_finished` polls
    without blocking; `join` blocks until all are done and can only be
    called once.

    Attributes:
        moves: Canonical root move order captured when the search started.
    """

    def __init__(self, futures: list[Future[WorkerSummary]], moves: Sequence[Any]) -> None:
        self._futures = futures
        self.moves = list(moves)
        self._joined = False

    @property
    def n_workers(self) -> int:
        return len(self._futures)

    def is_finished(self) -> bool:
        """True once every worker has finished (successfully or not)."""
        return all(f.done() for f in self._futures)

    def join(self) -> SearchResult:
        """Wait for all workers and combine their results.

        If any worker raised, the whole search fails: the first worker's
        exception is re-raised after every worker has stopped.

        Raises:
            RuntimeError: If the handle was already joined.
        """
        if self._joined:
            raise RuntimeError("SearchHandle.join() called twice")
        self._joined = True

        wait(self._futures)

        failures = [f.exception() for f in self._futures if f.exception() is not None]
        if failures:
            logger.error(f"{len(failures)}/{self.n_workers} search workers failed: {failures[0]!r}")
            raise failures[0]  # type: ignore[misc]

        result = aggregate([f.result() for f in self._futures], self.moves)
        logger.info(
            f"Search finished: {result.total_iterations} iterations across "
            f"{self.n_workers} workers, best move {result.best_move!r}"
        )
        return result


class MCTS:
    """Root-parallel Monte Carlo Tree Search engine.

    Attributes:
        config: Worker count, exploration factor, seed and default limit.
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        rng_factory: Callable[[], RandomSource] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Search configuration. Defaults to SearchConfig().
            rng_factory: Builds one RandomSource per worker. When omitted,
                numpy sources are spawned from `config.seed`.
        """
        self.config = config if config is not None else SearchConfig()
        self._rng_factory = rng_factory

    def run(self, state: GameState) -> SearchHandle:
        """Start a search using the termination mode from config.limit."""
        limit = self.config.limit
        if isinstance(limit, DurationLimit):
            return self.run_with_duration(state, limit.seconds)
        assert isinstance(limit, IterationLimit)
        return self.run_with_iterations(state, limit.total)

    def search(self, state: GameState) -> SearchResult:
        """Run a search to completion and return its result."""
        return self.run(state).join()

    def run_with_iterations(self, state: GameState, total_iterations: int) -> SearchHandle:
        """Start a search with a total iteration budget split across workers."""
        return self.run_with_end_condition(state, iteration_budget(total_iterations))

    def run_with_duration(self, state: GameState, seconds: float) -> SearchHandle:
        """Start a search that stops once `seconds` of wall-clock time have passed."""
        if seconds <= 0:
            raise ValueError(f"seconds must be > 0, got {seconds}")
        return self.run_with_end_condition(state, deadline_reached(time.monotonic() + seconds))

    def run_with_end_condition(
        self,
        state: GameState,
        should_stop: Callable[[int, int], bool],
    ) -> SearchHandle:
        """Start workers that each search until should_stop fires.

        Args:
            state: Root state. Must have at least one legal move.
            should_stop: Called after every iteration with
                (n_workers, iterations_done); True ends that worker.

        Returns:
            SearchHandle, returned without waiting for any worker.

        Raises:
            ValueError: If state is terminal or has no legal moves.
        """
        if state.is_terminal_state() is not None:
            raise ValueError(f"Cannot search from {state!r}: the game is already over")
        moves = list(state.all_moves())
        if not moves:
            raise ValueError(f"Cannot search from {state!r}: it has no legal moves")

        n_workers = self.config.workers
        rngs = self._make_rngs(n_workers)

        executor = ThreadPoolExecutor(max_workers=n_workers, thread_name_prefix="mcts-worker")
        futures = [
            executor.submit(
                run_worker,
                state,
                self.config.exploration_factor,
                should_stop,
                n_workers,
                rng,
            )
            for rng in rngs
        ]
        # Threads keep running; this only stops the pool accepting new work.
        executor.shutdown(wait=False)

        logger.debug(f"Started {n_workers} workers over {len(moves)} root moves")
        return SearchHandle(futures, moves)

    def _make_rngs(self, n: int) -> list[RandomSource]:
        if self._rng_factory is not None:
            return [self._rng_factory() for _ in range(n)]
        return list(spawn_random_sources(n, self.config.seed))
