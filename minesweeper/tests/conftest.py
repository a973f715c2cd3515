"""
Pytest fixtures for Minesweeper tests.
"""

from typing import Callable, Iterable, List

import pytest

from minesweeper.game import MinesweeperGame
from minesweeper.minefield import Coord, Minefield


class FixedMinefield(Minefield):
    """A minefield whose mines are chosen up front instead of at random."""

    def __init__(self, width: int, height: int, mines: Iterable[Coord], cascade: bool = True):
        super().__init__(width, height, cascade=cascade)
        self.fixed_mines = list(mines)

    def place_mines(self, count: int, safe_x: int, safe_y: int) -> None:
        self._check(safe_x, safe_y)
        if self.mines_placed:
            raise RuntimeError("Mines have already been placed on this minefield")
        assert count == len(self.fixed_mines), "game mine count must match the fixed layout"
        assert (safe_x, safe_y) not in self.fixed_mines, "first click must not be a fixed mine"
        self._set_mines([y * self.width + x for x, y in self.fixed_mines])


@pytest.fixture
def make_game() -> Callable[..., MinesweeperGame]:
    """Factory for games with a known mine layout."""

    def _make(width: int, height: int, mines: Iterable[Coord], cascade: bool = True) -> MinesweeperGame:
        mines = list(mines)
        field = FixedMinefield(width, height, mines, cascade=cascade)
        return MinesweeperGame(width, height, len(mines), minefield=field)

    return _make


@pytest.fixture
def corner_game(make_game) -> MinesweeperGame:
    """3x3 board, single mine at (2, 2), no cascade so every open counts once."""
    return make_game(3, 3, [(2, 2)], cascade=False)


@pytest.fixture
def events() -> List[str]:
    """Log that recording callbacks append to."""
    return []


@pytest.fixture
def recorded(corner_game, events) -> MinesweeperGame:
    """`corner_game` with start/win/loss callbacks appending to `events`."""
    corner_game.add_on_start(lambda: events.append("start"))
    corner_game.add_on_win(lambda: events.append("win"))
    corner_game.add_on_loss(lambda: events.append("loss"))
    return corner_game
