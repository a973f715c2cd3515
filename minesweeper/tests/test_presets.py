"""
Tests for difficulty presets and board metrics.
"""

import pytest

from minesweeper.board_metrics import count_visible_cells, total_safe_cells
from minesweeper.difficulty import PRESETS, get_difficulty


def test_classic_presets():
    assert (PRESETS["beginner"].width, PRESETS["beginner"].height, PRESETS["beginner"].mine_count) == (9, 9, 10)
    assert PRESETS["intermediate"].cells == 256
    assert PRESETS["expert"].mine_count == 99


def test_lookup_ignores_case_and_spaces():
    assert get_difficulty("  Intermediate ") is PRESETS["intermediate"]


def test_unknown_preset_lists_choices():
    with pytest.raises(KeyError, match="beginner"):
        get_difficulty("nightmare")


def test_total_safe_cells():
    assert total_safe_cells(width=3, height=3, mine_count=1) == 8
    assert total_safe_cells(width=30, height=16, mine_count=99) == 381


def test_count_visible_cells():
    board = [
        ["0", "F", "E"],
        ["E", "1", "E"],
        ["E", "E", "M"],
    ]
    assert count_visible_cells(board) == {
        "unopened": 5,
        "flagged": 1,
        "mines_shown": 1,
        "safe_opened": 2,
    }
