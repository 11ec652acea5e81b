"""
Memorama symbol sets.

Each difficulty uses a prefix of the same ordered symbol list, so the
harder boards add symbols rather than swapping them out. Symbols are plain
identifiers; how they are drawn is decided by the renderer.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.state import Difficulty


# Identifier -> inline glyph
GLYPHS: dict[str, str] = {
    "gamepad": "🎮",
    "target": "🎯",
    "palette": "🎨",
    "masks": "🎭",
    "circus": "🎪",
    "guitar": "🎸",
    "piano": "🎹",
    "trumpet": "🎺",
    "violin": "🎻",
    "clapper": "🎬",
    "microphone": "🎤",
    "headphones": "🎧",
}

CARD_BACK_GLYPH = "❓"

_ALL_SYMBOLS = tuple(GLYPHS)


@dataclass(frozen=True)
class DifficultyInfo:
    """Everything the selection screen and the board need per difficulty."""
    difficulty: Difficulty
    label: str
    symbols: tuple[str, ...]
    compact_columns: int  # narrow screens
    wide_columns: int

    @property
    def pair_count(self) -> int:
        return len(self.symbols)

    @property
    def card_count(self) -> int:
        return 2 * len(self.symbols)


DIFFICULTIES: dict[Difficulty, DifficultyInfo] = {
    Difficulty.EASY: DifficultyInfo(
        difficulty=Difficulty.EASY,
        label="Easy 😊",
        symbols=_ALL_SYMBOLS[:6],
        compact_columns=3,
        wide_columns=4,
    ),
    Difficulty.MEDIUM: DifficultyInfo(
        difficulty=Difficulty.MEDIUM,
        label="Medium 🤔",
        symbols=_ALL_SYMBOLS[:8],
        compact_columns=4,
        wide_columns=4,
    ),
    Difficulty.HARD: DifficultyInfo(
        difficulty=Difficulty.HARD,
        label="Hard 😤",
        symbols=_ALL_SYMBOLS[:12],
        compact_columns=4,
        wide_columns=6,
    ),
}

SYMBOL_SETS: dict[Difficulty, tuple[str, ...]] = {
    difficulty: info.symbols for difficulty, info in DIFFICULTIES.items()
}


def get_difficulty_info(difficulty: Difficulty) -> DifficultyInfo:
    return DIFFICULTIES[difficulty]
