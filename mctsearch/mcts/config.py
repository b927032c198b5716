"""Search configuration.

SearchConfig uses a discriminated union for the termination mode, so YAML
selects it by `type`:

Example YAML:
    workers: 4
    exploration_factor: 1.4
    seed: 7
    limit:
      type: duration
      seconds: 1.5
"""

from __future__ import annotations

import math
import os
from typing import Annotated, Literal

from pydantic import Field

from mctsearch.config.base import StrictBaseModel

DEFAULT_EXPLORATION_FACTOR = math.sqrt(2)

PARALLEL_ENV_VAR = "MCTSEARCH_PARALLEL"


def default_worker_count() -> int:
    """Number of workers used when the config does not specify one.

    One worker per available CPU, or 1 if the CPU count is unknown or
    parallelism is disabled by setting MCTSEARCH_PARALLEL to 0/false/no.
    """
    if os.environ.get(PARALLEL_ENV_VAR, "").strip().lower() in ("0", "false", "no"):
        return 1
    return os.cpu_count() or 1


class IterationLimit(StrictBaseModel):
    """Stop after a fixed total number of iterations, split evenly across workers."""

    type: Literal["iterations"] = "iterations"
    total: int = Field(default=10_000, ge=1)


class DurationLimit(StrictBaseModel):
    """Stop every worker once a wall-clock deadline has passed."""

    type: Literal["duration"] = "duration"
    seconds: float = Field(gt=0.0)


SearchLimit = Annotated[IterationLimit | DurationLimit, Field(discriminator="type")]


class SearchConfig(StrictBaseModel):
    """Root-parallel MCTS configuration.

    Attributes:
        workers: Number of independent search trees run in parallel.
        exploration_factor: UCT exploration constant.
        seed: Seeds the per-worker random sources. None = nondeterministic.
        limit: Termination mode used by `MCTS.run`.
    """

    workers: int = Field(default_factory=default_worker_count, ge=1)
    exploration_factor: float = Field(default=DEFAULT_EXPLORATION_FACTOR, ge=0.0)
    seed: int | None = Field(default=None, ge=0)
    limit: SearchLimit = Field(default_factory=IterationLimit)
