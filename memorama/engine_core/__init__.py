"""
Engine Core - Deterministic session state and action handling.

The engine is the runtime that:
1. Deals uniformly shuffled decks
2. Holds the GameSession
3. Applies player and scheduled actions via the reducer
"""

from .state import Card, Difficulty, GamePhase, GameSession
from .shuffle import deal_deck, fisher_yates
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action

__all__ = [
    "Card",
    "Difficulty",
    "GamePhase",
    "GameSession",
    "deal_deck",
    "fisher_yates",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
]
