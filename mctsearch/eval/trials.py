"""Repeated independent searches for measuring move-choice stability.

MCTS is randomized, so the quality of a configuration is a frequency rather
than a single answer. run_trials searches the same position many times with
fresh trees and tallies the chosen moves.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from mctsearch.mcts.search import MCTS

if TYPE_CHECKING:
    from mctsearch.mcts.config import SearchConfig
    from mctsearch.mcts.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class TrialReport:
    """Tally of best moves over repeated searches.

    Attributes:
        trials: Number of searches run.
        choices: How often each move was selected.
        total_iterations: Iterations summed over all searches.
    """

    trials: int
    choices: Counter[Any] = field(default_factory=Counter)
    total_iterations: int = 0

    def frequency(self, move: Any) -> float:
        """Fraction of trials that selected move."""
        if self.trials == 0:
            return 0.0
        return self.choices[move] / self.trials

    def most_common(self) -> Any:
        return self.choices.most_common(1)[0][0]

    def table(self) -> str:
        """Format choice frequencies as a string, most frequent first."""
        lines = [f"Move choices over {self.trials} trials", "=" * 30]
        for move, count in self.choices.most_common():
            lines.append(f"{str(move):>8}  {count:>5}  {count / self.trials:6.1%}")
        lines.append(f"Iterations: {self.total_iterations}")
        return "\n".join(lines)


def trial_seeds(seed: int | None, trials: int) -> list[int | None]:
    """Derive one search seed per trial.

    With seed=None every trial is unseeded. Otherwise seeds come from
    SeedSequence.spawn, so runs are reproducible and trials independent.
    """
    if seed is None:
        return [None] * trials
    return [int(child.generate_state(1)[0]) for child in np.random.SeedSequence(seed).spawn(trials)]


def run_trials(
    state: GameState,
    config: SearchConfig,
    trials: int,
    verbose: bool = False,
) -> TrialReport:
    """Run `trials` independent searches from state.

    Args:
        state: Position to search.
        config: Search configuration; its limit applies to every trial.
        trials: Number of searches.
        verbose: Print progress every 10 trials.

    Returns:
        TrialReport with move counts and total iterations.
    """
    if trials < 1:
        raise ValueError(f"trials must be >= 1, got {trials}")

    report = TrialReport(trials=trials)

    for i, seed in enumerate(trial_seeds(config.seed, trials)):
        mcts = MCTS(config.model_copy(update={"seed": seed}))
        result = mcts.search(state)
        report.choices[result.best_move] += 1
        report.total_iterations += result.total_iterations

        if verbose and (i + 1) % 10 == 0:
            print(f"Completed {i + 1}/{trials} trials")

    logger.info(f"Trials finished, most common move {report.most_common()!r}")
    return report
