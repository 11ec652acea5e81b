"""
Session Module - Runs game sessions for display surfaces.

A table represents one display surface:
- Created when a player opens the game
- Owns a game loop, which owns the current session
- Replaces the session on every start, restart and return to menu
- Destroyed when the player leaves or the table goes idle

Sessions are EPHEMERAL:
- No persistence
- Timers are cancelled when their session is replaced
"""

from .scheduler import AsyncioScheduler, ManualScheduler, ScheduledTask, Scheduler
from .game_loop import GameLoop
from .manager import Table, TableManager

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "ScheduledTask",
    "Scheduler",
    "GameLoop",
    "Table",
    "TableManager",
]
