#!/usr/bin/env python3
"""Play Nim against the MCTS engine.

Usage:
    uv run python scripts/play_nim.py
    uv run python scripts/play_nim.py --config configs/nim.yaml --workers 2
"""

from __future__ import annotations

from mctsearch.games.play import main

if __name__ == "__main__":
    main()
