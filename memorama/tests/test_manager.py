"""
Tests for the table manager.
"""

from dataclasses import replace
import time

import pytest

from ..engine_core.state import Difficulty
from ..games.memorama.rendering import AssetKind
from ..session import TableManager


@pytest.fixture
def manager(scheduler, test_config):
    return TableManager(scheduler, test_config)


class TestTableManager:
    def test_create_table(self, manager):
        table = manager.create_table()

        assert manager.get_table(table.table_id) is table
        assert table.renderer.asset_kind is AssetKind.GLYPH
        assert table.loop.session.deck == []

    def test_tables_are_independent(self, manager, scheduler):
        first = manager.create_table()
        second = manager.create_table()

        first.loop.start_game(Difficulty.EASY)
        scheduler.advance(2)

        assert first.loop.session.elapsed_seconds == 2
        assert second.loop.session.elapsed_seconds == 0
        assert first.table_id != second.table_id

    def test_asset_kind_override(self, manager):
        table = manager.create_table(asset_kind=AssetKind.IMAGE)
        assert table.renderer.asset_kind is AssetKind.IMAGE

    def test_config_reaches_loop(self, scheduler, test_config):
        manager = TableManager(scheduler, replace(test_config, mismatch_delay_seconds=0.3))
        table = manager.create_table()
        assert table.loop.mismatch_delay == 0.3

    def test_close_table(self, manager, scheduler):
        table = manager.create_table()
        table.loop.start_game(Difficulty.MEDIUM)

        assert manager.close_table(table.table_id)
        assert manager.get_table(table.table_id) is None
        assert table.loop.closed
        assert scheduler.pending_count == 0

    def test_close_unknown_table(self, manager):
        assert not manager.close_table("missing")

    def test_list_tables(self, manager):
        ids = {manager.create_table().table_id for _ in range(3)}
        assert set(manager.list_tables()) == ids

    def test_cleanup_idle_tables(self, manager):
        idle = manager.create_table()
        busy = manager.create_table()
        now = time.time()
        idle.last_activity = now - 120
        busy.last_activity = now - 10

        closed = manager.cleanup_idle_tables(max_idle_seconds=60, now=now)

        assert closed == [idle.table_id]
        assert manager.list_tables() == [busy.table_id]

    def test_cleanup_skips_watched_tables(self, manager):
        watched = manager.create_table()
        watched.loop.subscribe(lambda session: None)
        watched.last_activity = 0

        assert manager.cleanup_idle_tables(max_idle_seconds=60) == []
        assert manager.get_table(watched.table_id) is watched

    def test_close_notifies_loop_callbacks(self, manager):
        table = manager.create_table()
        calls = []
        table.loop.on_close(lambda: calls.append(table.table_id))

        manager.close_table(table.table_id)
        assert calls == [table.table_id]

    def test_touch_refreshes_activity(self, manager):
        table = manager.create_table()
        table.last_activity = 0
        table.touch()
        assert not table.is_idle(60)

    def test_close_all(self, manager, scheduler):
        for _ in range(2):
            manager.create_table().loop.start_game(Difficulty.EASY)

        manager.close_all()

        assert manager.list_tables() == []
        assert scheduler.pending_count == 0
