"""
Game Loop - Drives one game session for one display surface.

The loop:
1. Player picks a difficulty -> a new session is dealt, the clock starts
2. Player flips cards -> the reducer evaluates each completed pair
3. A mismatched pair is hidden again after a short delay
4. The clock stops when the last pair is found
5. Restart deals again; going back to the menu clears the board

Scheduled work (the clock and the delayed hide) always belongs to the
session that scheduled it. When that session is replaced the work is
cancelled, and the reducer ignores it anyway if it still fires.
"""

from __future__ import annotations
import logging
from typing import Callable

from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.state import Difficulty, GamePhase, GameSession
from .scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

Listener = Callable[[GameSession], None]


class GameLoop:
    """
    The game loop driver.

    Usage:
        loop = GameLoop(scheduler)
        loop.subscribe(render)

        loop.start_game(Difficulty.EASY)
        loop.flip_card(0)
        loop.flip_card(5)

        # render() is called after every change, including clock ticks
    """

    def __init__(
        self,
        scheduler: Scheduler,
        reducer: Reducer | None = None,
        mismatch_delay: float = 1.0,
        tick_interval: float = 1.0,
    ):
        self.scheduler = scheduler
        self.reducer = reducer or Reducer()
        self.mismatch_delay = mismatch_delay
        self.tick_interval = tick_interval

        self._session = GameSession.idle()
        self._tick_task: ScheduledTask | None = None
        self._resolve_task: ScheduledTask | None = None
        self._listeners: list[Listener] = []
        self._close_callbacks: list[Callable[[], None]] = []
        self._closed = False

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def phase(self) -> GamePhase:
        return self._session.phase

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    # =========================================================================
    # Player input
    # =========================================================================

    def start_game(self, difficulty: Difficulty | None, seed: int | None = None) -> ActionResult:
        """Deal a new game, replacing whatever is on the table."""
        return self._dispatch(Action.start_game(difficulty, seed=seed))

    def restart(self, seed: int | None = None) -> ActionResult:
        """Deal again at the current difficulty. Ignored at the menu."""
        difficulty = self._session.difficulty
        if difficulty is None:
            return ActionResult.ignored(self._session, "No game to restart")
        return self.start_game(difficulty, seed=seed)

    def flip_card(self, card_id: int) -> ActionResult:
        return self._dispatch(Action.flip_card(card_id))

    def return_to_menu(self) -> ActionResult:
        return self._dispatch(Action.return_to_menu())

    # =========================================================================
    # Subscribers
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with the new session after every change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_close(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Call callback once when the loop is closed.

        Returns a function that removes the callback.
        """
        self._close_callbacks.append(callback)

        def remove() -> None:
            if callback in self._close_callbacks:
                self._close_callbacks.remove(callback)

        return remove

    def close(self) -> None:
        """Cancel all scheduled work, stop accepting input and run close callbacks."""
        if self._closed:
            return
        self._cancel_timers()
        self._listeners.clear()
        self._closed = True

        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            callback()

    # =========================================================================
    # Internals
    # =========================================================================

    def _dispatch(self, action: Action) -> ActionResult:
        if self._closed:
            return ActionResult.ignored(self._session, "Game loop is closed")

        previous = self._session
        result = self.reducer.apply(previous, action)
        if not result.applied:
            return result

        session = result.new_state
        self._session = session

        if session.session_id != previous.session_id:
            self._cancel_timers()
            if session.timer_running:
                self._start_clock(session.session_id)
        elif not session.timer_running and self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None

        if result.resolution_pending:
            self._schedule_resolution(session.session_id)

        for change in result.state_changes:
            logger.info("[%s] %s", session.session_id[:8], change)
        if session.has_won and not previous.has_won:
            logger.info(
                "[%s] Won %s in %d moves, %d seconds",
                session.session_id[:8],
                session.difficulty.value,
                session.move_count,
                session.elapsed_seconds,
            )

        for listener in list(self._listeners):
            listener(session)

        return result

    def _start_clock(self, session_id: str) -> None:
        def tick() -> None:
            self._dispatch(Action.tick(session_id))

        self._tick_task = self.scheduler.call_every(self.tick_interval, tick)

    def _schedule_resolution(self, session_id: str) -> None:
        def resolve() -> None:
            self._resolve_task = None
            self._dispatch(Action.resolve_mismatch(session_id))

        if self._resolve_task is not None:
            self._resolve_task.cancel()
        self._resolve_task = self.scheduler.call_later(self.mismatch_delay, resolve)

    def _cancel_timers(self) -> None:
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
        if self._resolve_task is not None:
            self._resolve_task.cancel()
            self._resolve_task = None
