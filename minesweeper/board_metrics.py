"""
I keep "board metrics" here so the project has one source of truth for:
- how many safe squares a board has (the win threshold)
- how a visible-board snapshot breaks down into opened / flagged / unopened squares

The game uses `total_safe_cells` for its win check, and tests use
`count_visible_cells` to cross-check the counters against what the board shows.
"""

from __future__ import annotations

from typing import Dict, List

VisibleBoard = List[List[str]]

UNOPENED = "E"
FLAGGED = "F"
MINE = "M"


def total_safe_cells(*, width: int, height: int, mine_count: int) -> int:
    """Number of mine-free squares; the game is won when this many are opened."""
    return max(0, int(width) * int(height) - int(mine_count))


def count_visible_cells(visible_board: VisibleBoard) -> Dict[str, int]:
    """
    Count visible-board symbols.

    Returns a dict:
      - unopened: count of "E"
      - flagged: count of "F"
      - mines_shown: count of "M"
      - safe_opened: everything else ("0"-"8")
    """
    counts = {"unopened": 0, "flagged": 0, "mines_shown": 0, "safe_opened": 0}
    for row in visible_board:
        for symbol in row:
            if symbol == UNOPENED:
                counts["unopened"] += 1
            elif symbol == FLAGGED:
                counts["flagged"] += 1
            elif symbol == MINE:
                counts["mines_shown"] += 1
            else:
                counts["safe_opened"] += 1
    return counts
