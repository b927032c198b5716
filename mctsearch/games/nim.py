"""Nim-style subtraction race, the sample game for the engine.

Two players alternately add 1..max_take to a running total. Whoever brings
the total to exactly `target` wins. Totals congruent to
`target mod (max_take + 1)` are winning to move to, so with target 21 and
max_take 3 the first player wins by opening with 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import ConfigDict, Field, model_validator

from mctsearch.config.base import StrictBaseModel
from mctsearch.mcts.state import GameState


class NimConfig(StrictBaseModel):
    """Rules of the race."""

    model_config = ConfigDict(frozen=True)

    target: int = Field(default=21, ge=1)
    max_take: int = Field(default=3, ge=1)

    @model_validator(mode="after")
    def _check_take(self) -> NimConfig:
        if self.max_take > self.target:
            raise ValueError(f"max_take ({self.max_take}) cannot exceed target ({self.target})")
        return self

    def winning_totals(self) -> list[int]:
        """Totals a player should move to (target included)."""
        step = self.max_take + 1
        return list(range(self.target % step, self.target + 1, step))


@dataclass(frozen=True)
class NimMove:
    """Add `amount` to the running total."""

    amount: int

    def __str__(self) -> str:
        return str(self.amount)


@dataclass(frozen=True)
class NimState(GameState):
    """Position in the race.

    Attributes:
        total: Running total so far.
        player: Index (0 or 1) of the player to move.
        config: Game rules.
    """

    total: int = 0
    player: int = 0
    config: NimConfig = field(default_factory=NimConfig)

    def all_moves(self) -> list[NimMove]:
        remaining = self.config.target - self.total
        return [NimMove(n) for n in range(1, min(self.config.max_take, remaining) + 1)]

    def apply_move(self, move: NimMove) -> NimState:
        return NimState(total=self.total + move.amount, player=1 - self.player, config=self.config)

    def is_terminal_state(self) -> int | None:
        """Index of the winner once the target is reached."""
        if self.total >= self.config.target:
            # The player who just moved reached the target.
            return 1 - self.player
        return None

    def terminal_is_win(self, outcome: int) -> bool:
        # Judged for the player who moved into this state.
        return outcome == 1 - self.player

    def __str__(self) -> str:
        return f"Current number: {self.total}"
