"""
API Module - Display surface interface.

Exposes game tables via REST and WebSocket.
A client:
1. Opens a table
2. Deals a game at a chosen difficulty
3. Flips cards
4. Receives board updates, including clock ticks and hidden pairs

All state is table-scoped and in memory. No accounts required.
"""

from .schemas import (
    # Requests
    CreateTableRequest,
    StartGameRequest,
    FlipCardRequest,
    ClientMessage,
    # Responses
    BoardView,
    ErrorResponse,
    TableListResponse,
    CloseTableResponse,
    HealthResponse,
    # Shared
    CardFace,
    CardView,
    StatsView,
    DifficultyOption,
    WinSummary,
    # Enums
    AssetKindOption,
    DifficultyLevel,
    ErrorCode,
    Phase,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateTableRequest",
    "StartGameRequest",
    "FlipCardRequest",
    "ClientMessage",
    # Responses
    "BoardView",
    "ErrorResponse",
    "TableListResponse",
    "CloseTableResponse",
    "HealthResponse",
    # Shared
    "CardFace",
    "CardView",
    "StatsView",
    "DifficultyOption",
    "WinSummary",
    # Enums
    "AssetKindOption",
    "DifficultyLevel",
    "ErrorCode",
    "Phase",
    # Service
    "APIService",
    "create_app",
]
