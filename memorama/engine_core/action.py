"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player input (pick a difficulty, flip a card, go back to the menu)
2. Scheduled events (timer tick, hiding a mismatched pair)

All session changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import Difficulty


class ActionType(Enum):
    """Types of actions in the system."""
    # Player actions
    START_GAME = "start_game"
    FLIP_CARD = "flip_card"
    RETURN_TO_MENU = "return_to_menu"

    # Scheduled actions
    TICK = "tick"
    RESOLVE_MISMATCH = "resolve_mismatch"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Scheduled actions carry the session_id of the session that scheduled
    them so the reducer can ignore them once that session is gone.
    """
    difficulty: Difficulty | None = None
    card_id: Any = None
    session_id: str | None = None
    seed: int | None = None


@dataclass
class Action:
    """A complete action to be applied to a session."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def start_game(cls, difficulty: Difficulty | None, seed: int | None = None) -> Action:
        """Factory for dealing a new game."""
        return cls(
            action_type=ActionType.START_GAME,
            payload=ActionPayload(difficulty=difficulty, seed=seed),
        )

    @classmethod
    def flip_card(cls, card_id: int) -> Action:
        """Factory for a card click."""
        return cls(
            action_type=ActionType.FLIP_CARD,
            payload=ActionPayload(card_id=card_id),
        )

    @classmethod
    def return_to_menu(cls) -> Action:
        return cls(action_type=ActionType.RETURN_TO_MENU)

    @classmethod
    def tick(cls, session_id: str) -> Action:
        """Factory for one timer tick of the given session."""
        return cls(
            action_type=ActionType.TICK,
            payload=ActionPayload(session_id=session_id),
        )

    @classmethod
    def resolve_mismatch(cls, session_id: str) -> Action:
        """Factory for hiding the pending mismatched pair of the given session."""
        return cls(
            action_type=ActionType.RESOLVE_MISMATCH,
            payload=ActionPayload(session_id=session_id),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Invalid actions are not errors: they come back with applied=False,
    the unchanged session, and a reason for debugging.
    """
    applied: bool
    new_state: Any | None = None  # GameSession
    reason: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # Set when a mismatched pair is face-up and must be hidden later
    resolution_pending: bool = False

    @classmethod
    def ignored(cls, state: Any, reason: str) -> ActionResult:
        """Create a no-op result."""
        return cls(applied=False, new_state=state, reason=reason)

    @classmethod
    def with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        resolution_pending: bool = False,
    ) -> ActionResult:
        """Create an applied result with new state."""
        return cls(
            applied=True,
            new_state=state,
            state_changes=changes or [],
            resolution_pending=resolution_pending,
        )
