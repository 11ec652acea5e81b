"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a display surface (browser,
terminal, anything that can draw a grid) and the engine.

Error Codes:
- TABLE_NOT_FOUND: Table does not exist or has been reaped
- VALIDATION_ERROR: Request body is invalid
- INVALID_MESSAGE: WebSocket message could not be understood
- INTERNAL_ERROR: Unexpected failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class DifficultyLevel(str, Enum):
    """Difficulty values accepted by the API."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Phase(str, Enum):
    """Phase of the table's current session."""
    MENU = "menu"
    PLAYING = "playing"
    EVALUATING = "evaluating"
    WON = "won"


class AssetKindOption(str, Enum):
    """Card style."""
    GLYPH = "glyph"
    IMAGE = "image"


class ErrorCode(str, Enum):
    """Structured error codes."""
    TABLE_NOT_FOUND = "TABLE_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_MESSAGE = "INVALID_MESSAGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardFace(BaseModel):
    """The visible side of a card."""
    kind: AssetKindOption
    value: str = Field(description="Glyph to print, or image URL")


class CardView(BaseModel):
    """One card on the board."""
    card_id: int
    face: CardFace
    is_face_up: bool = False
    is_matched: bool = False
    is_clickable: bool = True


class StatsView(BaseModel):
    """Counters shown above the board."""
    moves: int = 0
    pairs_found: int = 0
    total_pairs: int = 0
    elapsed_seconds: int = 0
    elapsed: str = Field("00:00", description="Elapsed time as MM:SS")


class DifficultyOption(BaseModel):
    """A button on the difficulty selection screen."""
    difficulty: DifficultyLevel
    label: str
    pair_count: int
    card_count: int


class WinSummary(BaseModel):
    """Contents of the win overlay."""
    difficulty: DifficultyLevel
    label: str
    moves: int
    elapsed_seconds: int
    elapsed: str


class BoardView(BaseModel):
    """
    Everything needed to draw a table.

    Returned by every REST call and pushed over the WebSocket on every
    change, clock ticks included.
    """
    table_id: str
    session_id: str
    phase: Phase
    asset_kind: AssetKindOption

    difficulty: Optional[DifficultyLevel] = None
    difficulty_label: Optional[str] = None
    compact_columns: Optional[int] = Field(None, description="Grid columns on narrow screens")
    wide_columns: Optional[int] = Field(None, description="Grid columns on wide screens")

    cards: list[CardView] = Field(default_factory=list)
    stats: StatsView = Field(default_factory=StatsView)
    started_at: Optional[float] = Field(None, description="Unix time the current game was dealt")

    has_won: bool = False
    win_summary: Optional[WinSummary] = None

    # Populated at the menu
    difficulty_options: list[DifficultyOption] = Field(default_factory=list)

    api_version: str = "v1"


# =============================================================================
# Request Models
# =============================================================================

class CreateTableRequest(BaseModel):
    """Request to open a new table."""
    asset_kind: Optional[AssetKindOption] = Field(
        None, description="Card style; server default when omitted"
    )


class StartGameRequest(BaseModel):
    """Request to deal a new game."""
    difficulty: DifficultyLevel
    seed: Optional[int] = Field(None, description="Seed for a reproducible deal")


class FlipCardRequest(BaseModel):
    """Request to flip a card. Cards that cannot be flipped are ignored."""
    card_id: int


class ClientMessage(BaseModel):
    """
    A message from a WebSocket client.

    type is one of: ping, state, start, flip, restart, menu
    """
    type: str
    difficulty: Optional[DifficultyLevel] = None
    card_id: Optional[int] = None
    seed: Optional[int] = None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class TableListResponse(BaseModel):
    """Response listing open tables."""
    tables: list[str]
    count: int


class CloseTableResponse(BaseModel):
    """Response after closing a table."""
    success: bool
    table_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
