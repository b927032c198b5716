"""Evaluation utilities for search configurations."""

from mctsearch.eval.trials import TrialReport, run_trials, trial_seeds

__all__ = [
    "TrialReport",
    "run_trials",
    "trial_seeds",
]
