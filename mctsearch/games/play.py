"""Interactive Nim against the MCTS engine.

Usage:
    mctsearch-nim
    mctsearch-nim --seconds 0.5 --workers 2
    mctsearch-nim --config configs/nim.yaml --human-first
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field

from mctsearch.config.base import StrictBaseModel
from mctsearch.config.display import format_config_summary
from mctsearch.config.loader import apply_overrides, load_raw_config
from mctsearch.games.nim import NimConfig, NimMove, NimState
from mctsearch.mcts.config import DurationLimit, SearchConfig
from mctsearch.mcts.search import MCTS

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_THINKING_LIMIT = {"type": "duration", "seconds": 1.0}


def _default_search() -> SearchConfig:
    return SearchConfig(limit=DurationLimit.model_validate(DEFAULT_THINKING_LIMIT))


class NimPlayConfig(StrictBaseModel):
    """Interactive game configuration."""

    game: NimConfig = Field(default_factory=NimConfig)
    search: SearchConfig = Field(default_factory=_default_search)
    human_first: bool = False


def prompt_for_move(state: NimState, read: Callable[[str], str] = input) -> NimMove:
    """Ask until the human enters a legal amount."""
    max_take = len(state.all_moves())
    prompt = f"Reach {state.config.target} to win. Enter a number between 1 and {max_take}: "
    while True:
        text = read(prompt).strip()
        try:
            value = int(text)
        except ValueError:
            continue
        if 1 <= value <= max_take:
            return NimMove(value)


def play(
    config: NimPlayConfig,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Play one game in the terminal.

    Returns:
        Index of the winner: 0 for the computer, 1 for the human.
    """
    mcts = MCTS(config.search)
    game = NimState(config=config.game)
    computer_to_move = not config.human_first

    write(str(game))
    while game.is_terminal_state() is None:
        if computer_to_move:
            result = mcts.search(game)
            write(
                f"Computer chooses {result.best_move} after considering "
                f"{result.total_iterations} iterations."
            )
            game = game.apply_move(result.best_move)
        else:
            game = game.apply_move(prompt_for_move(game, read))

        write(str(game))
        computer_to_move = not computer_to_move

    # The player who just moved reached the target.
    computer_won = not computer_to_move
    write("Computer wins." if computer_won else "You win.")
    return 0 if computer_won else 1


def build_config(args: argparse.Namespace) -> NimPlayConfig:
    """Merge the YAML file (if any) with command-line overrides and validate."""
    overrides: list[str] = []
    if args.workers is not None:
        overrides.append(f"search.workers={args.workers}")
    if args.target is not None:
        overrides.append(f"game.target={args.target}")
    if args.seed is not None:
        overrides.append(f"search.seed={args.seed}")
    if args.seconds is not None:
        overrides.append(f"search.limit={{type: duration, seconds: {args.seconds}}}")
    elif args.iterations is not None:
        overrides.append(f"search.limit={{type: iterations, total: {args.iterations}}}")
    if args.human_first:
        overrides.append("human_first=true")

    if args.config is not None:
        data = load_raw_config(args.config, overrides)
    else:
        data = apply_overrides({}, overrides)

    # Interactive play thinks for a fixed time unless told otherwise.
    search = data.setdefault("search", {})
    if isinstance(search, dict):
        search.setdefault("limit", dict(DEFAULT_THINKING_LIMIT))

    return NimPlayConfig.model_validate(data)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Nim against Monte Carlo Tree Search.")
    parser.add_argument("--config", type=Path, help="Path to YAML config file")
    limit = parser.add_mutually_exclusive_group()
    limit.add_argument("--seconds", type=float, help="Thinking time per computer move")
    limit.add_argument("--iterations", type=int, help="Total iterations per computer move")
    parser.add_argument("--workers", type=int, help="Override number of parallel workers")
    parser.add_argument("--target", type=int, help="Override the target number")
    parser.add_argument("--seed", type=int, help="Seed for reproducible searches")
    parser.add_argument("--human-first", action="store_true", help="Let the human open")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = build_config(args)
    print(format_config_summary(("Game", config.game), ("Search", config.search)))
    print()

    try:
        play(config)
    except (KeyboardInterrupt, EOFError):
        print()
        logger.info("Game aborted")


if __name__ == "__main__":
    main()
