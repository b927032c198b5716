"""Tests for repeated-search evaluation."""

from collections import Counter

import pytest

from mctsearch.eval.trials import TrialReport, run_trials, trial_seeds
from mctsearch.games.nim import NimMove, NimState
from mctsearch.mcts.config import IterationLimit, SearchConfig


class TestTrialSeeds:
    """Tests for per-trial seed derivation."""

    def test_unseeded(self) -> None:
        assert trial_seeds(None, 3) == [None, None, None]

    def test_seeded_is_reproducible_and_distinct(self) -> None:
        seeds = trial_seeds(5, 4)
        assert seeds == trial_seeds(5, 4)
        assert len(set(seeds)) == 4
        assert all(isinstance(s, int) and s >= 0 for s in seeds)


class TestTrialReport:
    """Tests for report helpers."""

    def test_frequency_and_table(self) -> None:
        report = TrialReport(trials=4, choices=Counter({NimMove(1): 3, NimMove(2): 1}))

        assert report.frequency(NimMove(1)) == pytest.approx(0.75)
        assert report.frequency(NimMove(3)) == 0.0
        assert report.most_common() == NimMove(1)
        assert "75.0%" in report.table()


class TestRunTrials:
    """Tests for running repeated searches."""

    def test_counts_every_trial(self, small_nim: NimState) -> None:
        config = SearchConfig(workers=1, seed=1, limit=IterationLimit(total=100))
        report = run_trials(small_nim, config, trials=5)

        assert report.trials == 5
        assert sum(report.choices.values()) == 5
        assert report.total_iterations == 500

    def test_rejects_zero_trials(self, small_nim: NimState) -> None:
        with pytest.raises(ValueError, match="trials"):
            run_trials(small_nim, SearchConfig(workers=1), trials=0)

    def test_small_race_finds_winning_opening(self, small_nim: NimState) -> None:
        """Target 9: the whole tree fits in the budget, so +1 (to 1) dominates."""
        config = SearchConfig(workers=1, seed=2, limit=IterationLimit(total=3000))
        report = run_trials(small_nim, config, trials=10)
        assert report.frequency(NimMove(1)) >= 0.8

    @pytest.mark.slow
    def test_standard_race_finds_winning_opening(self, nim: NimState) -> None:
        """Target 21, take 1-3: opening with 1 wins, and search should find it.

        Randomized, so judged by frequency over repeated independent searches.
        """
        config = SearchConfig(workers=1, seed=21, limit=IterationLimit(total=50_000))
        report = run_trials(nim, config, trials=20)
        assert report.frequency(NimMove(1)) >= 0.95, report.table()
