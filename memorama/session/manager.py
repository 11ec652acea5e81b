"""
Table Manager - Creates and tracks game tables.

A table is one display surface: a browser tab or a terminal. Each table
owns exactly one GameLoop, and the loop owns the current game session.

Tables are EPHEMERAL:
- Held in memory only
- Closing a table cancels its timers and drops its session
- Idle tables are reaped after a configurable time
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time
import uuid

from ..config import GameConfig
from ..engine_core.reducer import Reducer
from ..games.memorama.rendering import AssetKind, SymbolRenderer
from .game_loop import GameLoop
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass
class Table:
    """
    One display surface and its game loop.

    last_activity is refreshed on every player action so idle tables
    can be told apart from tables in use.
    """
    table_id: str
    loop: GameLoop
    renderer: SymbolRenderer
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)

    def touch(self) -> None:
        self.last_activity = time.time()

    def is_idle(self, max_idle_seconds: float, now: float | None = None) -> bool:
        current = time.time() if now is None else now
        return current - self.last_activity > max_idle_seconds


class TableManager:
    """
    Manages game tables.

    Responsibilities:
    - Create tables with a game loop on the shared scheduler
    - Look tables up by id
    - Close tables and reap idle ones

    No persistence - tables are in-memory only.
    """

    def __init__(self, scheduler: Scheduler, config: GameConfig | None = None):
        self.scheduler = scheduler
        self.config = config or GameConfig()
        self._tables: dict[str, Table] = {}

    def create_table(
        self,
        asset_kind: AssetKind | None = None,
        reducer: Reducer | None = None,
    ) -> Table:
        """
        Create a new table at the difficulty selection screen.

        Args:
            asset_kind: Card style for this table (defaults to config)
            reducer: Optional reducer, e.g. with a seeded random source

        Returns:
            New Table
        """
        loop = GameLoop(
            scheduler=self.scheduler,
            reducer=reducer,
            mismatch_delay=self.config.mismatch_delay_seconds,
            tick_interval=self.config.tick_seconds,
        )
        renderer = SymbolRenderer(
            asset_kind=asset_kind or self.config.asset_kind,
            image_base_url=self.config.image_base_url,
        )
        table = Table(table_id=str(uuid.uuid4()), loop=loop, renderer=renderer)
        self._tables[table.table_id] = table
        logger.info("Created table %s (%s)", table.table_id, renderer.asset_kind.value)
        return table

    def get_table(self, table_id: str) -> Table | None:
        """Get a table by ID."""
        return self._tables.get(table_id)

    def close_table(self, table_id: str) -> bool:
        """
        Close a table and cancel its scheduled work.

        Returns False if the table did not exist.
        """
        table = self._tables.pop(table_id, None)
        if table is None:
            return False
        table.loop.close()
        logger.info("Closed table %s", table_id)
        return True

    def list_tables(self) -> list[str]:
        """List IDs of open tables."""
        return list(self._tables)

    def cleanup_idle_tables(self, max_idle_seconds: float | None = None, now: float | None = None) -> list[str]:
        """
        Close tables that have not seen input for max_idle_seconds.

        Tables with a connected display (a loop subscriber) are never idle.
        Returns the IDs of the closed tables.
        """
        limit = self.config.table_idle_seconds if max_idle_seconds is None else max_idle_seconds
        stale = [
            table_id for table_id, table in self._tables.items()
            if table.loop.subscriber_count == 0 and table.is_idle(limit, now=now)
        ]
        for table_id in stale:
            self.close_table(table_id)
        return stale

    def close_all(self) -> None:
        for table_id in list(self._tables):
            self.close_table(table_id)
