"""
API Service - Business logic layer between the API and the engine.

The service:
1. Translates API requests to game loop calls
2. Manages tables
3. Builds board views for display surfaces

This layer is framework-agnostic (can be used with FastAPI, a terminal, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..config import GameConfig
from ..engine_core.state import Difficulty, GameSession
from ..games.memorama.rendering import AssetKind, format_elapsed
from ..games.memorama.symbols import DIFFICULTIES, get_difficulty_info
from ..session import AsyncioScheduler, Scheduler, Table, TableManager
from .schemas import (
    # Requests
    CreateTableRequest,
    StartGameRequest,
    FlipCardRequest,
    # Responses
    BoardView,
    ErrorResponse,
    # Shared
    CardFace,
    CardView,
    DifficultyOption,
    StatsView,
    WinSummary,
    # Enums
    AssetKindOption,
    DifficultyLevel,
    ErrorCode,
    Phase,
)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        board = service.create_table(CreateTableRequest())
        board = service.start_game(board.table_id, StartGameRequest(difficulty="easy"))
        board = service.flip_card(board.table_id, FlipCardRequest(card_id=3))
    """
    config: GameConfig = field(default_factory=GameConfig)
    scheduler: Scheduler = field(default_factory=AsyncioScheduler)
    table_manager: TableManager = field(init=False)

    def __post_init__(self):
        self.table_manager = TableManager(scheduler=self.scheduler, config=self.config)

    def create_table(self, request: CreateTableRequest | None = None) -> BoardView:
        """
        Open a new table at the difficulty selection screen.

        Idle tables are reaped first.
        """
        self.table_manager.cleanup_idle_tables()

        asset_kind = None
        if request is not None and request.asset_kind is not None:
            asset_kind = AssetKind(request.asset_kind.value)

        table = self.table_manager.create_table(asset_kind=asset_kind)
        return self.build_board(table)

    def get_board(self, table_id: str) -> BoardView | ErrorResponse:
        table = self.table_manager.get_table(table_id)
        if table is None:
            return self._table_not_found(table_id)
        return self.build_board(table)

    def start_game(self, table_id: str, request: StartGameRequest) -> BoardView | ErrorResponse:
        table = self.table_manager.get_table(table_id)
        if table is None:
            return self._table_not_found(table_id)

        table.touch()
        table.loop.start_game(Difficulty(request.difficulty.value), seed=request.seed)
        return self.build_board(table)

    def flip_card(self, table_id: str, request: FlipCardRequest) -> BoardView | ErrorResponse:
        """Flip a card. Flips that do not apply leave the board unchanged."""
        table = self.table_manager.get_table(table_id)
        if table is None:
            return self._table_not_found(table_id)

        table.touch()
        table.loop.flip_card(request.card_id)
        return self.build_board(table)

    def restart(self, table_id: str, seed: int | None = None) -> BoardView | ErrorResponse:
        table = self.table_manager.get_table(table_id)
        if table is None:
            return self._table_not_found(table_id)

        table.touch()
        table.loop.restart(seed=seed)
        return self.build_board(table)

    def return_to_menu(self, table_id: str) -> BoardView | ErrorResponse:
        table = self.table_manager.get_table(table_id)
        if table is None:
            return self._table_not_found(table_id)

        table.touch()
        table.loop.return_to_menu()
        return self.build_board(table)

    def close_table(self, table_id: str) -> bool:
        return self.table_manager.close_table(table_id)

    def list_tables(self) -> list[str]:
        return self.table_manager.list_tables()

    def shutdown(self) -> None:
        """Close every table, cancelling all scheduled work."""
        self.table_manager.close_all()

    # =========================================================================
    # View building
    # =========================================================================

    def build_board(self, table: Table, session: GameSession | None = None) -> BoardView:
        """Build the complete view of a table."""
        session = session or table.loop.session
        renderer = table.renderer

        stats = StatsView(
            moves=session.move_count,
            pairs_found=session.matched_pair_count,
            total_pairs=session.total_pairs,
            elapsed_seconds=session.elapsed_seconds,
            elapsed=format_elapsed(session.elapsed_seconds),
        )

        cards = []
        for card in session.deck:
            face = renderer.face_for(card)
            cards.append(
                CardView(
                    card_id=card.card_id,
                    face=CardFace(kind=AssetKindOption(face.kind.value), value=face.value),
                    is_face_up=card.is_face_up,
                    is_matched=card.is_matched,
                    is_clickable=(
                        not card.is_face_up
                        and not card.is_matched
                        and not session.is_evaluating
                        and not session.has_won
                    ),
                )
            )

        board = BoardView(
            table_id=table.table_id,
            session_id=session.session_id,
            phase=Phase(session.phase.value),
            asset_kind=AssetKindOption(renderer.asset_kind.value),
            cards=cards,
            stats=stats,
            started_at=session.started_at,
            has_won=session.has_won,
        )

        if session.difficulty is None:
            board.difficulty_options = self._difficulty_options()
            return board

        info = get_difficulty_info(session.difficulty)
        level = DifficultyLevel(session.difficulty.value)
        board.difficulty = level
        board.difficulty_label = info.label
        board.compact_columns = info.compact_columns
        board.wide_columns = info.wide_columns

        if session.has_won:
            board.win_summary = WinSummary(
                difficulty=level,
                label=info.label,
                moves=session.move_count,
                elapsed_seconds=session.elapsed_seconds,
                elapsed=stats.elapsed,
            )

        return board

    def _difficulty_options(self) -> list[DifficultyOption]:
        return [
            DifficultyOption(
                difficulty=DifficultyLevel(info.difficulty.value),
                label=info.label,
                pair_count=info.pair_count,
                card_count=info.card_count,
            )
            for info in DIFFICULTIES.values()
        ]

    def _table_not_found(self, table_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Table {table_id} not found",
            error_code=ErrorCode.TABLE_NOT_FOUND,
        )
