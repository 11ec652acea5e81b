"""
Pytest fixtures for Memorama tests.
"""

import random

import pytest

from ..config import GameConfig
from ..engine_core.state import Card, Difficulty, GameSession
from ..engine_core.reducer import Reducer
from ..games.memorama.symbols import SYMBOL_SETS
from ..session import GameLoop, ManualScheduler


def ordered_deck(difficulty: Difficulty) -> list[Card]:
    """Unshuffled deck: every pair sits side by side (0-1, 2-3, ...)."""
    cards = []
    for symbol in SYMBOL_SETS[difficulty]:
        cards.append(Card(card_id=len(cards), symbol=symbol))
        cards.append(Card(card_id=len(cards), symbol=symbol))
    return cards


def pairs_of(session: GameSession) -> list[tuple[int, int]]:
    """Card id pairs sharing a symbol, in deck order."""
    positions: dict[str, list[int]] = {}
    for card in session.deck:
        positions.setdefault(card.symbol, []).append(card.card_id)
    return [tuple(ids) for ids in positions.values()]


def mismatch_of(session: GameSession) -> tuple[int, int]:
    """Two unmatched card ids with different symbols."""
    first = next(c for c in session.deck if not c.is_matched)
    second = next(c for c in session.deck if not c.is_matched and c.symbol != first.symbol)
    return first.card_id, second.card_id


@pytest.fixture
def reducer() -> Reducer:
    return Reducer(rng=random.Random(1234))


@pytest.fixture
def easy_session() -> GameSession:
    """A started Easy session with the pairs laid out side by side."""
    return GameSession.dealt(Difficulty.EASY, ordered_deck(Difficulty.EASY))


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def game_loop(scheduler: ManualScheduler) -> GameLoop:
    return GameLoop(scheduler, reducer=Reducer(rng=random.Random(99)))


@pytest.fixture
def test_config() -> GameConfig:
    return GameConfig()
