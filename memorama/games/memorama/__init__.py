"""
Memorama - The pairs game.

Twelve symbols, three board sizes:
- Easy uses 6 pairs, Medium 8, Hard 12
- Cards are drawn as inline glyphs or as images

This module contains:
- Symbol sets, labels and board columns per difficulty
- The symbol renderer shared by both card styles
"""

from .symbols import (
    CARD_BACK_GLYPH,
    DIFFICULTIES,
    GLYPHS,
    SYMBOL_SETS,
    DifficultyInfo,
    get_difficulty_info,
)
from .rendering import AssetKind, RenderedFace, SymbolRenderer, format_elapsed

__all__ = [
    "CARD_BACK_GLYPH",
    "DIFFICULTIES",
    "GLYPHS",
    "SYMBOL_SETS",
    "DifficultyInfo",
    "get_difficulty_info",
    "AssetKind",
    "RenderedFace",
    "SymbolRenderer",
    "format_elapsed",
]
