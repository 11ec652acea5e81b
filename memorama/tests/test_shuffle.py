"""
Tests for shuffling and dealing.

Tests:
- Deck composition per difficulty
- Uniformity of the shuffle
- Reproducibility with a seed
"""

from collections import Counter
from itertools import permutations
import random

import pytest

from ..engine_core.shuffle import deal_deck, fisher_yates
from ..engine_core.state import Difficulty
from ..games.memorama.symbols import SYMBOL_SETS


# Chi-square critical values at p = 0.001
CHI2_CRITICAL_5_DOF = 20.515
CHI2_CRITICAL_11_DOF = 31.264


def chi_square(observed: list[int], expected: float) -> float:
    return sum((o - expected) ** 2 / expected for o in observed)


class TestDealDeck:
    """Tests for deck composition."""

    @pytest.mark.parametrize("difficulty,symbol_count", [
        (Difficulty.EASY, 6),
        (Difficulty.MEDIUM, 8),
        (Difficulty.HARD, 12),
    ])
    def test_every_symbol_twice(self, difficulty, symbol_count):
        """Deck holds two of each symbol and nothing else."""
        deck = deal_deck(SYMBOL_SETS[difficulty], random.Random(7))

        assert len(deck) == 2 * symbol_count
        counts = Counter(card.symbol for card in deck)
        assert set(counts) == set(SYMBOL_SETS[difficulty])
        assert all(count == 2 for count in counts.values())

    def test_ids_are_positions(self):
        """Ids run 0..N-1 in deck order."""
        deck = deal_deck(SYMBOL_SETS[Difficulty.HARD], random.Random(3))
        assert [card.card_id for card in deck] == list(range(24))

    def test_cards_start_face_down(self):
        deck = deal_deck(SYMBOL_SETS[Difficulty.EASY], random.Random(3))
        assert not any(card.is_face_up or card.is_matched for card in deck)

    def test_same_seed_same_deal(self):
        first = deal_deck(SYMBOL_SETS[Difficulty.MEDIUM], random.Random(42))
        second = deal_deck(SYMBOL_SETS[Difficulty.MEDIUM], random.Random(42))
        assert [c.symbol for c in first] == [c.symbol for c in second]

    def test_duplicate_symbols_rejected(self):
        with pytest.raises(ValueError):
            deal_deck(["a", "b", "a"], random.Random(0))


class TestShuffleUniformity:
    """Statistical checks against a uniform permutation."""

    def test_fisher_yates_does_not_mutate_input(self):
        items = [1, 2, 3, 4]
        fisher_yates(items, random.Random(0))
        assert items == [1, 2, 3, 4]

    def test_all_permutations_equally_likely(self):
        """Each of the 3! orderings of three items shows up about equally often."""
        rng = random.Random(2024)
        trials = 60_000
        counts = Counter(tuple(fisher_yates("abc", rng)) for _ in range(trials))

        assert set(counts) == set(permutations("abc"))
        statistic = chi_square(list(counts.values()), trials / 6)
        assert statistic < CHI2_CRITICAL_5_DOF

    def test_no_positional_bias_in_easy_deck(self):
        """A symbol's cards land on every board position equally often."""
        rng = random.Random(5)
        symbols = SYMBOL_SETS[Difficulty.EASY]
        trials = 12_000
        position_counts = {symbol: [0] * 12 for symbol in symbols}

        for _ in range(trials):
            for card in deal_deck(symbols, rng):
                position_counts[card.symbol][card.card_id] += 1

        # Two copies per deal spread over 12 positions
        expected = trials * 2 / 12
        for symbol, observed in position_counts.items():
            assert chi_square(observed, expected) < CHI2_CRITICAL_11_DOF, symbol
