"""
This is the minefield (grid) the game coordinator drives.

I store the board as three numpy boolean masks of shape `(height, width)`,
indexed `[y, x]`:
- `mines`   = where the mines are (all False until `place_mines`)
- `opened`  = squares the player has opened
- `flagged` = squares the player has flagged

The minefield does not know about win/loss or counters. It only places mines,
opens squares (with the zero-region cascade), and flips flags.
"""

import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

_OFFSETS = (-1, 0, 1)


class OutOfBoundsError(IndexError):
    """Raised when a per-square operation gets coordinates outside the board."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Square ({x}, {y}) is outside the {width}x{height} minefield")
        self.x = x
        self.y = y


class Minefield:
    """
    A rectangular minefield with deferred mine placement.

    Mines are placed once, after the first click is known, so the first
    square (and its neighborhood when there is room) is always safe.
    """

    def __init__(self, width: int, height: int, seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None, cascade: bool = True):
        """
        Args:
            width: Number of columns
            height: Number of rows
            seed: Seed for the default random generator (ignored if `rng` is given)
            rng: Explicit numpy Generator to draw mine positions from
            cascade: If True, opening a zero square flood-opens its region
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Minefield dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self.cascade = cascade

        self.mines = np.zeros((self._height, self._width), dtype=bool)
        self.opened = np.zeros((self._height, self._width), dtype=bool)
        self.flagged = np.zeros((self._height, self._width), dtype=bool)
        self._mines_placed = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        return not (0 <= x < self._width and 0 <= y < self._height)

    def _check(self, x: int, y: int) -> None:
        if self.is_out_of_bounds(x, y):
            raise OutOfBoundsError(x, y, self._width, self._height)

    def neighbors(self, x: int, y: int) -> Iterator[Coord]:
        """
        Yield the in-bounds neighbors of a square (up to 8, diagonals included).

        Order is row-major over the offsets: dy outer, dx inner.
        """
        for dy in _OFFSETS:
            for dx in _OFFSETS:
                if dx == 0 and dy == 0:
                    continue
                nx = x + dx
                ny = y + dy
                if not self.is_out_of_bounds(nx, ny):
                    yield (nx, ny)

    def has_mine(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self.mines[y, x])

    def is_opened(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self.opened[y, x])

    def is_flagged(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self.flagged[y, x])

    def adjacent_mine_count(self, x: int, y: int) -> int:
        """Count mines in the 8-neighborhood of (x, y); 0 before placement."""
        self._check(x, y)
        return sum(1 for nx, ny in self.neighbors(x, y) if self.mines[ny, nx])

    def toggle_flag(self, x: int, y: int) -> None:
        """Flip the flag bit. The coordinator decides whether flagging is allowed."""
        self._check(x, y)
        self.flagged[y, x] = not self.flagged[y, x]

    def _safe_zone(self, safe_x: int, safe_y: int, count: int) -> List[Coord]:
        """
        Pick the squares that must stay mine-free.

        I prefer the full 3x3 block around the first click (it almost always
        gives a real opening). If that leaves too few squares for `count`
        mines, I only protect the clicked square itself.
        """
        block = [(safe_x, safe_y)] + list(self.neighbors(safe_x, safe_y))
        if self._width * self._height - len(block) >= count:
            return block
        return [(safe_x, safe_y)]

    def place_mines(self, count: int, safe_x: int, safe_y: int) -> None:
        """
        Place `count` mines uniformly at random, never on (safe_x, safe_y).

        Args:
            count: Number of mines to place
            safe_x: Column of the first click
            safe_y: Row of the first click
        """
        self._check(safe_x, safe_y)
        if self._mines_placed:
            raise RuntimeError("Mines have already been placed on this minefield")
        if count < 0 or count >= self._width * self._height:
            raise ValueError(
                f"Cannot place {count} mines on a {self._width}x{self._height} minefield "
                "while keeping the first square safe"
            )

        forbidden = np.zeros(self._width * self._height, dtype=bool)
        for fx, fy in self._safe_zone(safe_x, safe_y, count):
            forbidden[fy * self._width + fx] = True
        candidates = np.flatnonzero(~forbidden)

        chosen = self._rng.choice(candidates, size=count, replace=False)
        self._set_mines(chosen)
        logger.debug("Placed %d mines, first square (%d, %d) kept safe", count, safe_x, safe_y)

    def _set_mines(self, flat_indices) -> None:
        flat = self.mines.reshape(-1)
        flat[np.asarray(flat_indices, dtype=np.intp)] = True
        self._mines_placed = True

    def open_square(self, x: int, y: int) -> List[Coord]:
        """
        Open a square, cascading through zero regions when enabled.

        Flagged and already-opened squares are left alone. Mines are never
        opened by the cascade, only by a direct open.

        Returns:
            The (x, y) squares this call newly opened, target first
        """
        self._check(x, y)
        if self.opened[y, x] or self.flagged[y, x]:
            return []

        self.opened[y, x] = True
        newly_opened = [(x, y)]
        if self.mines[y, x] or not self.cascade:
            return newly_opened

        # Iterative flood fill so large empty boards don't hit the recursion limit.
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            if self.adjacent_mine_count(cx, cy) != 0:
                continue
            for nx, ny in self.neighbors(cx, cy):
                if self.opened[ny, nx] or self.flagged[ny, nx] or self.mines[ny, nx]:
                    continue
                self.opened[ny, nx] = True
                newly_opened.append((nx, ny))
                stack.append((nx, ny))
        return newly_opened
