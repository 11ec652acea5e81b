"""
Deck shuffling and dealing.

Decks are shuffled with Fisher-Yates, which draws every permutation with
equal probability.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

from .state import Card

T = TypeVar("T")


def fisher_yates(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a uniformly shuffled copy of items."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def deal_deck(symbols: Sequence[str], rng: random.Random) -> list[Card]:
    """
    Build a face-down deck with every symbol exactly twice.

    Ids are assigned after shuffling, so card_id is the board position.
    """
    if len(set(symbols)) != len(symbols):
        raise ValueError("Symbols must be distinct")

    shuffled = fisher_yates([*symbols, *symbols], rng)
    return [Card(card_id=index, symbol=symbol) for index, symbol in enumerate(shuffled)]
