"""
Reducer - Applies actions to game sessions.

The reducer is the single point of session change.
All changes must go through apply_action().

Design principles:
- (session, action) -> new session; the input session is never mutated
- Invalid actions are no-ops, reported with a reason instead of an error
- Scheduled actions are ignored unless they belong to the current session
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .state import Difficulty, GameSession
from .shuffle import deal_deck
from .action import Action, ActionType, ActionResult

logger = logging.getLogger(__name__)


def _default_symbol_sets() -> dict[Difficulty, tuple[str, ...]]:
    from ..games.memorama.symbols import SYMBOL_SETS
    return dict(SYMBOL_SETS)


@dataclass
class Reducer:
    """
    Reducer applies actions to a game session.

    Stateless apart from the random source used for dealing.
    symbol_sets provides the symbols dealt for each difficulty.
    """
    symbol_sets: dict[Difficulty, tuple[str, ...]] = field(default_factory=_default_symbol_sets)
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: GameSession, action: Action) -> ActionResult:
        """
        Apply an action to the session.

        Returns ActionResult with the new session, or the unchanged
        session and a reason when the action does not apply.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.ignored(state, f"No handler for action type: {action.action_type}")

        result = handler(state, action)
        if not result.applied:
            logger.debug("Ignored %s: %s", action.action_type.value, result.reason)
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.FLIP_CARD: self._handle_flip_card,
            ActionType.RETURN_TO_MENU: self._handle_return_to_menu,
            ActionType.TICK: self._handle_tick,
            ActionType.RESOLVE_MISMATCH: self._handle_resolve_mismatch,
        }
        return handlers.get(action_type)

    def _handle_start_game(self, state: GameSession, action: Action) -> ActionResult:
        """Deal a new deck. The new session replaces the old one entirely."""
        difficulty = action.payload.difficulty
        if not isinstance(difficulty, Difficulty):
            return ActionResult.ignored(state, "No difficulty selected")

        symbols = self.symbol_sets.get(difficulty)
        if not symbols:
            return ActionResult.ignored(state, f"No symbols for difficulty {difficulty.value}")

        seed = action.payload.seed
        rng = random.Random(seed) if seed is not None else self.rng
        deck = deal_deck(symbols, rng)

        new_state = GameSession.dealt(difficulty, deck)
        return ActionResult.with_state(
            new_state,
            changes=[f"Dealt {len(deck)} cards ({difficulty.value})"],
        )

    def _handle_flip_card(self, state: GameSession, action: Action) -> ActionResult:
        """
        Turn a card face up.

        The second flip of a pair counts as a move and is evaluated at
        once. A match is settled immediately; a mismatch stays face up
        and the result asks for a delayed RESOLVE_MISMATCH.
        """
        card_id = action.payload.card_id

        if not state.is_started:
            return ActionResult.ignored(state, "No game in progress")
        if state.has_won:
            return ActionResult.ignored(state, "Game already won")
        if state.is_evaluating:
            return ActionResult.ignored(state, "Evaluation in progress")
        if len(state.pending_flips) >= 2:
            return ActionResult.ignored(state, "Two cards already pending")

        card = state.get_card(card_id)
        if card is None:
            return ActionResult.ignored(state, f"Card {card_id!r} is not on the board")
        if card_id in state.pending_flips:
            return ActionResult.ignored(state, f"Card {card_id} is already face up")
        if card.is_matched:
            return ActionResult.ignored(state, f"Card {card_id} is already matched")

        pending = [*state.pending_flips, card_id]
        new_state = state.with_cards(card.flipped(True))._copy_with(pending_flips=pending)
        changes = [f"Flipped card {card_id}"]

        if len(pending) < 2:
            return ActionResult.with_state(new_state, changes=changes)

        new_state = new_state._copy_with(
            move_count=state.move_count + 1,
            is_evaluating=True,
        )

        first = new_state.deck[pending[0]]
        second = new_state.deck[pending[1]]

        if first.symbol != second.symbol:
            changes.append(f"No match: cards {first.card_id} and {second.card_id}")
            return ActionResult.with_state(new_state, changes=changes, resolution_pending=True)

        new_state = new_state.with_cards(first.matched(), second.matched())._copy_with(
            matched_pair_count=state.matched_pair_count + 1,
            pending_flips=[],
            is_evaluating=False,
        )
        changes.append(f"Matched {first.symbol}: cards {first.card_id} and {second.card_id}")
        if new_state.has_won:
            changes.append("All pairs found")

        return ActionResult.with_state(new_state, changes=changes)

    def _handle_resolve_mismatch(self, state: GameSession, action: Action) -> ActionResult:
        """Turn a mismatched pair back face down and accept input again."""
        if action.payload.session_id != state.session_id:
            return ActionResult.ignored(state, "Resolution belongs to a replaced session")
        if not state.is_evaluating or len(state.pending_flips) != 2:
            return ActionResult.ignored(state, "Nothing to resolve")

        hidden = [state.deck[card_id].flipped(False) for card_id in state.pending_flips]
        new_state = state.with_cards(*hidden)._copy_with(
            pending_flips=[],
            is_evaluating=False,
        )
        return ActionResult.with_state(
            new_state,
            changes=[f"Hid cards {hidden[0].card_id} and {hidden[1].card_id}"],
        )

    def _handle_tick(self, state: GameSession, action: Action) -> ActionResult:
        """Advance the clock by one second."""
        if action.payload.session_id != state.session_id:
            return ActionResult.ignored(state, "Tick belongs to a replaced session")
        if not state.timer_running:
            return ActionResult.ignored(state, "Timer is not running")

        new_state = state._copy_with(elapsed_seconds=state.elapsed_seconds + 1)
        return ActionResult.with_state(new_state)

    def _handle_return_to_menu(self, state: GameSession, action: Action) -> ActionResult:
        return ActionResult.with_state(GameSession.idle(), changes=["Returned to menu"])


def apply_action(state: GameSession, action: Action, rng: random.Random | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rng=rng) if rng is not None else Reducer()
    return reducer.apply(state, action)
