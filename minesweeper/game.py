"""
This is the core Minesweeper rules engine: the game coordinator.

`MinesweeperGame` wraps a `Minefield` and owns everything the minefield does not:
- the game phase (not started -> active -> won | lost)
- the opened-square and flag counters (and so `flags_left()`)
- the start / win / loss callbacks
- the chord deduction ("which neighbors must be safe?")

The visible board uses the same single-character symbols everywhere:
- `"E"` = unopened
- `"F"` = flagged
- `"M"` = opened mine
- `"0"`-`"8"` = opened safe square with its adjacent mine count
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .board_metrics import FLAGGED, MINE, UNOPENED, count_visible_cells, total_safe_cells
from .difficulty import Difficulty, get_difficulty
from .events import Callback, EventRegistry
from .minefield import Coord, Minefield

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Coarse lifecycle of a game. WON and LOST are terminal."""
    NOT_STARTED = "NOT_STARTED"
    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


@dataclass
class GameStatus:
    """
    Phase and counters, kept together so they only ever change together.

    `flagged_count` is deliberately unbounded: it can exceed the mine count,
    which makes `flags_left` negative.
    """
    mine_count: int
    safe_squares: int
    phase: GamePhase = GamePhase.NOT_STARTED
    opened_count: int = 0
    flagged_count: int = 0

    @property
    def flags_left(self) -> int:
        return self.mine_count - self.flagged_count

    def start(self) -> None:
        self.phase = GamePhase.ACTIVE

    def record_opened(self, squares: int) -> bool:
        """Count newly opened safe squares; returns True if that wins the game."""
        self.opened_count += squares
        if self.opened_count == self.safe_squares:
            self.phase = GamePhase.WON
            return True
        return False

    def lose(self) -> None:
        self.phase = GamePhase.LOST

    def record_flag(self, now_flagged: bool) -> None:
        self.flagged_count += 1 if now_flagged else -1


class MinesweeperGame:
    """
    The player-facing Minesweeper game.

    Mines are not placed until the first `open_square` call, and that first
    square is guaranteed to be mine-free. Out-of-range coordinates are not
    checked here; the minefield raises `OutOfBoundsError` for them.
    """

    def __init__(self, width: int, height: int, mine_count: int,
                 minefield: Optional[Minefield] = None, seed: Optional[int] = None):
        """
        Create a new game.

        Args:
            width: Number of columns
            height: Number of rows
            mine_count: Number of mines placed on the first open
            minefield: Optional pre-built minefield (anything with the Minefield interface)
            seed: Random seed for the default minefield (not allowed together with `minefield`)
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        if not 0 <= mine_count < width * height:
            raise ValueError(
                f"mine_count must be in [0, {width * height}) for a {width}x{height} board, got {mine_count}"
            )
        if minefield is not None and seed is not None:
            raise ValueError("Pass either a minefield or a seed, not both")
        if minefield is None:
            minefield = Minefield(width, height, seed=seed)
        elif (minefield.get_width(), minefield.get_height()) != (width, height):
            raise ValueError(
                f"Minefield is {minefield.get_width()}x{minefield.get_height()}, "
                f"expected {width}x{height}"
            )

        self.minefield = minefield
        self.status = GameStatus(
            mine_count=mine_count,
            safe_squares=total_safe_cells(width=width, height=height, mine_count=mine_count),
        )
        self.on_start = EventRegistry("start")
        self.on_win = EventRegistry("win")
        self.on_loss = EventRegistry("loss")

    @classmethod
    def from_difficulty(cls, difficulty: Union[Difficulty, str],
                        seed: Optional[int] = None) -> "MinesweeperGame":
        """Create a game from a `Difficulty` or a preset name like "expert"."""
        if not isinstance(difficulty, Difficulty):
            difficulty = get_difficulty(difficulty)
        return cls(difficulty.width, difficulty.height, difficulty.mine_count, seed=seed)

    # Dimensions and counters

    @property
    def width(self) -> int:
        return self.minefield.get_width()

    @property
    def height(self) -> int:
        return self.minefield.get_height()

    @property
    def mine_count(self) -> int:
        return self.status.mine_count

    @property
    def phase(self) -> GamePhase:
        return self.status.phase

    @property
    def opened_count(self) -> int:
        return self.status.opened_count

    @property
    def flagged_count(self) -> int:
        return self.status.flagged_count

    @property
    def is_started(self) -> bool:
        return self.status.phase is not GamePhase.NOT_STARTED

    @property
    def is_over(self) -> bool:
        return self.status.phase.is_terminal

    def flags_left(self) -> int:
        """Mines minus flags placed. Can go negative if the player over-flags."""
        return self.status.flags_left

    # Observers

    def add_on_start(self, callback: Callback) -> Callback:
        """Run `callback` when the first square is opened."""
        return self.on_start.add(callback)

    def add_on_win(self, callback: Callback) -> Callback:
        """Run `callback` when the last safe square is opened."""
        return self.on_win.add(callback)

    def add_on_loss(self, callback: Callback) -> Callback:
        """Run `callback` when a mine is opened."""
        return self.on_loss.add(callback)

    # Square queries

    def has_mine(self, x: int, y: int) -> bool:
        return self.minefield.has_mine(x, y)

    def is_opened(self, x: int, y: int) -> bool:
        return self.minefield.is_opened(x, y)

    def is_flagged(self, x: int, y: int) -> bool:
        return self.minefield.is_flagged(x, y)

    def adjacent_mine_count(self, x: int, y: int) -> int:
        """Mines among the (up to 8) in-bounds neighbors of (x, y)."""
        return self.minefield.adjacent_mine_count(x, y)

    # Mutations

    def toggle_flag(self, x: int, y: int) -> None:
        """
        Flag or unflag a square.

        Opened squares can't be flagged, and nothing can be flagged after a loss.
        Flagging before the first click and after a win is allowed.
        """
        if self.minefield.is_opened(x, y) or self.status.phase is GamePhase.LOST:
            logger.debug("Ignoring flag toggle at (%d, %d) in phase %s", x, y, self.status.phase.value)
            return
        self.minefield.toggle_flag(x, y)
        self.status.record_flag(self.minefield.is_flagged(x, y))

    def open_square(self, x: int, y: int) -> List[Coord]:
        """
        Open a square.

        The first call places the mines (keeping (x, y) safe) and fires the
        start callbacks. Opening a mine loses the game; opening the last safe
        square wins it. Re-opening a square, opening a flagged square, or
        opening anything once the game is over does nothing.

        Returns:
            The (x, y) squares newly opened by this call, cascade included
        """
        if self.status.phase is GamePhase.NOT_STARTED:
            # Place first so a rejected first square leaves the game unstarted.
            self.minefield.place_mines(self.status.mine_count, x, y)
            self.status.start()
            logger.info(
                "Game started on %dx%d board with %d mines (first square (%d, %d))",
                self.width, self.height, self.status.mine_count, x, y,
            )
            self.on_start.fire()

        if self.minefield.is_opened(x, y) or self.status.phase.is_terminal:
            return []

        newly_opened = self.minefield.open_square(x, y)
        if not self.minefield.is_opened(x, y):
            return newly_opened

        if self.minefield.has_mine(x, y):
            self.status.lose()
            logger.info("Game lost: mine opened at (%d, %d)", x, y)
            self.on_loss.fire()
            return newly_opened

        safe_opened = sum(1 for sx, sy in newly_opened if not self.minefield.has_mine(sx, sy))
        if self.status.record_opened(safe_opened):
            logger.info("Game won: all %d safe squares opened", self.status.safe_squares)
            self.on_win.fire()
        return newly_opened

    def deducible_safe_squares(self, x: int, y: int) -> List[Coord]:
        """
        Neighbors of an opened square that must be safe, if its flags are right.

        When the number of flagged neighbors equals the square's adjacent mine
        count, every unflagged, unopened neighbor is returned. Otherwise (or if
        (x, y) is not opened) the result is empty. This is a purely local check.
        """
        if not self.minefield.is_opened(x, y):
            return []
        adjacent_mines = self.adjacent_mine_count(x, y)
        adjacent_flags = 0
        candidates: List[Coord] = []
        for nx, ny in self.minefield.neighbors(x, y):
            if self.minefield.is_flagged(nx, ny):
                adjacent_flags += 1
            elif not self.minefield.is_opened(nx, ny):
                candidates.append((nx, ny))
        if adjacent_flags != adjacent_mines:
            return []
        return candidates

    def chord(self, x: int, y: int) -> List[Coord]:
        """
        Open every square `deducible_safe_squares(x, y)` reports, in order.

        Stops as soon as the game ends (a wrong flag can make this lose).

        Returns:
            All squares newly opened, cascades included
        """
        if self.status.phase is not GamePhase.ACTIVE:
            return []
        opened: List[Coord] = []
        for sx, sy in self.deducible_safe_squares(x, y):
            if self.status.phase.is_terminal:
                break
            opened.extend(self.open_square(sx, sy))
        return opened

    # Snapshots

    def get_visible_board(self) -> List[List[str]]:
        """Rows (indexed by y) of what the player can see; see module docstring for symbols."""
        board = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if self.minefield.is_flagged(x, y):
                    row.append(FLAGGED)
                elif not self.minefield.is_opened(x, y):
                    row.append(UNOPENED)
                elif self.minefield.has_mine(x, y):
                    row.append(MINE)
                else:
                    row.append(str(self.adjacent_mine_count(x, y)))
            board.append(row)
        return board

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get game statistics.

        Counters come from the game itself; `unopened` is read off the visible
        board (flagged squares are not included in it).
        """
        visible = count_visible_cells(self.get_visible_board())
        return {
            "phase": self.status.phase.value,
            "opened_count": self.status.opened_count,
            "flagged_count": self.status.flagged_count,
            "flags_left": self.status.flags_left,
            "mine_count": self.status.mine_count,
            "safe_squares": self.status.safe_squares,
            "unopened": visible["unopened"],
        }

    def __repr__(self) -> str:
        return (
            f"MinesweeperGame({self.width}x{self.height}, mines={self.mine_count}, "
            f"phase={self.status.phase.value}, opened={self.status.opened_count})"
        )
