"""
Difficulty presets.

A preset is just the three numbers a game needs: width, height and mine count.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Difficulty:
    name: str
    width: int
    height: int
    mine_count: int

    @property
    def cells(self) -> int:
        return self.width * self.height


# Classic board sizes.
PRESETS: Dict[str, Difficulty] = {
    "beginner": Difficulty("beginner", width=9, height=9, mine_count=10),
    "intermediate": Difficulty("intermediate", width=16, height=16, mine_count=40),
    "expert": Difficulty("expert", width=30, height=16, mine_count=99),
}


def get_difficulty(name: str) -> Difficulty:
    """Look up a preset by name (case-insensitive)."""
    key = str(name).strip().lower()
    try:
        return PRESETS[key]
    except KeyError:
        raise KeyError(
            f"Unknown difficulty {name!r}; expected one of: {', '.join(sorted(PRESETS))}"
        ) from None
