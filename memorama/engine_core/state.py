"""
Game State - The cards and the session that holds them.

Design principles:
- Immutable-friendly: the reducer returns new sessions instead of mutating
- Identity-carrying: every session has its own session_id, which scheduled
  callbacks use to recognise a session that has since been replaced
- Derived values (phase, has_won) are computed, never stored
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import time
import uuid


class Difficulty(Enum):
    """Board sizes offered on the selection screen."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GamePhase(Enum):
    """High-level phase of a session, derived from its flags."""
    MENU = "menu"
    PLAYING = "playing"
    EVALUATING = "evaluating"
    WON = "won"


@dataclass
class Card:
    """
    A card on the board.

    card_id is the card's position in the deck after shuffling.
    symbol references a shared asset; the engine only compares symbols
    for equality and never looks at how they are drawn.
    """
    card_id: int
    symbol: str
    is_face_up: bool = False
    is_matched: bool = False

    def flipped(self, face_up: bool) -> Card:
        """Return a copy facing up or down."""
        return Card(
            card_id=self.card_id,
            symbol=self.symbol,
            is_face_up=face_up,
            is_matched=self.is_matched,
        )

    def matched(self) -> Card:
        """Return a copy marked as matched."""
        return Card(
            card_id=self.card_id,
            symbol=self.symbol,
            is_face_up=True,
            is_matched=True,
        )


def _new_session_id() -> str:
    return str(uuid.uuid4())


@dataclass
class GameSession:
    """
    One play-through, from dealing the deck to the last pair.

    A session is replaced wholesale when the player starts or restarts a
    game and when they go back to the menu. The idle session shown at the
    menu has no difficulty and an empty deck.
    """
    session_id: str = field(default_factory=_new_session_id)
    difficulty: Difficulty | None = None
    deck: list[Card] = field(default_factory=list)
    pending_flips: list[int] = field(default_factory=list)

    # Counters
    move_count: int = 0
    matched_pair_count: int = 0
    elapsed_seconds: int = 0

    # Flags
    is_evaluating: bool = False
    is_started: bool = False

    started_at: float | None = None

    @classmethod
    def idle(cls) -> GameSession:
        """The session shown at the difficulty selection screen."""
        return cls()

    @classmethod
    def dealt(cls, difficulty: Difficulty, deck: list[Card]) -> GameSession:
        """A freshly started session for the given deck."""
        return cls(
            difficulty=difficulty,
            deck=deck,
            is_started=True,
            started_at=time.time(),
        )

    @property
    def total_pairs(self) -> int:
        return len(self.deck) // 2

    @property
    def has_won(self) -> bool:
        """True once every pair on the board has been found."""
        return (
            self.is_started
            and self.difficulty is not None
            and self.matched_pair_count == self.total_pairs
        )

    @property
    def timer_running(self) -> bool:
        """The clock runs while a game is in progress and not yet won."""
        return self.is_started and self.matched_pair_count < self.total_pairs

    @property
    def phase(self) -> GamePhase:
        if not self.is_started:
            return GamePhase.MENU
        if self.has_won:
            return GamePhase.WON
        if self.is_evaluating:
            return GamePhase.EVALUATING
        return GamePhase.PLAYING

    def get_card(self, card_id: int) -> Card | None:
        """Get a card by id, or None when the id is off the board."""
        if isinstance(card_id, bool) or not isinstance(card_id, int):
            return None
        if 0 <= card_id < len(self.deck):
            return self.deck[card_id]
        return None

    def face_up_unmatched(self) -> list[Card]:
        return [c for c in self.deck if c.is_face_up and not c.is_matched]

    def with_cards(self, *cards: Card) -> GameSession:
        """Return new session with the given cards replaced by id."""
        replacements = {c.card_id: c for c in cards}
        new_deck = [replacements.get(c.card_id, c) for c in self.deck]
        return self._copy_with(deck=new_deck)

    def _copy_with(self, **kwargs) -> GameSession:
        """Create a copy with some fields replaced. Keeps the session_id."""
        return GameSession(
            session_id=self.session_id,
            difficulty=kwargs.get("difficulty", self.difficulty),
            deck=kwargs.get("deck", list(self.deck)),
            pending_flips=kwargs.get("pending_flips", list(self.pending_flips)),
            move_count=kwargs.get("move_count", self.move_count),
            matched_pair_count=kwargs.get("matched_pair_count", self.matched_pair_count),
            elapsed_seconds=kwargs.get("elapsed_seconds", self.elapsed_seconds),
            is_evaluating=kwargs.get("is_evaluating", self.is_evaluating),
            is_started=kwargs.get("is_started", self.is_started),
            started_at=kwargs.get("started_at", self.started_at),
        )
