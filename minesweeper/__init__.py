"""
This is the top-level Minesweeper package: the rules engine and its minefield.

The game coordinator (`MinesweeperGame`) is the entry point; `Minefield` is the
grid it drives, and `PRESETS` holds the classic board sizes.
"""

from .difficulty import PRESETS, Difficulty, get_difficulty
from .events import EventRegistry
from .game import GamePhase, GameStatus, MinesweeperGame
from .minefield import Minefield, OutOfBoundsError

__all__ = [
    'MinesweeperGame',
    'GamePhase',
    'GameStatus',
    'Minefield',
    'OutOfBoundsError',
    'EventRegistry',
    'Difficulty',
    'PRESETS',
    'get_difficulty',
]
