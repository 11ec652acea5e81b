"""
FastAPI Application - REST and WebSocket surface for game tables.

Endpoints:
    POST   /api/v1/tables                 Open a table
    GET    /api/v1/tables                 List open tables
    GET    /api/v1/tables/{id}            Get the board
    DELETE /api/v1/tables/{id}            Close a table
    POST   /api/v1/tables/{id}/start      Deal a new game
    POST   /api/v1/tables/{id}/flip       Flip a card
    POST   /api/v1/tables/{id}/restart    Deal again at the same difficulty
    POST   /api/v1/tables/{id}/menu       Back to difficulty selection
    WS     /api/v1/tables/{id}/ws         Board updates, clock ticks included

Every call returns the full board. Flips that do not apply (during
evaluation, on matched cards, off the board) are not errors: the board
simply comes back unchanged.

Run with:
    uvicorn memorama.api.app:create_app --factory
"""

from contextlib import asynccontextmanager
from typing import Optional, Union
import asyncio
import json
import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .. import __version__
from ..config import GameConfig, configure_logging
from ..engine_core.state import Difficulty
from .service import APIService
from .schemas import (
    # Request models
    CreateTableRequest,
    StartGameRequest,
    FlipCardRequest,
    ClientMessage,
    # Response models
    BoardView,
    ErrorResponse,
    TableListResponse,
    CloseTableResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

logger = logging.getLogger(__name__)


async def stop_sender(sender: asyncio.Task, table_id: str) -> None:
    """Cancel a WebSocket sender task and collect its outcome."""
    sender.cancel()
    (outcome,) = await asyncio.gather(sender, return_exceptions=True)
    if isinstance(outcome, Exception):
        logger.debug("WebSocket sender for table %s failed: %r", table_id, outcome)


def create_app(service: Optional[APIService] = None, config: Optional[GameConfig] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        config: Optional config (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    config = config or (service.config if service else GameConfig.from_env())
    configure_logging(config)

    api_service = service or APIService(config=config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Memorama API starting (%s)", config.env)
        yield
        api_service.shutdown()
        logger.info("Memorama API stopped")

    app = FastAPI(
        title="Memorama API",
        description="""
Memory matching game - flip two cards at a time and find every pair.

## Flow

1. `POST /tables` opens a table at the difficulty selection screen
2. `POST /tables/{id}/start` deals a board
3. `POST /tables/{id}/flip` turns cards; a mismatched pair is hidden again after a short delay
4. Connect to `WS /tables/{id}/ws` to receive clock ticks and delayed updates

## Error Codes

| Code | Description |
|------|-------------|
| `TABLE_NOT_FOUND` | Table does not exist |
| `VALIDATION_ERROR` | Request body is invalid |
| `INVALID_MESSAGE` | WebSocket message not understood |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def board_or_error(response: Union[BoardView, ErrorResponse]) -> Union[BoardView, JSONResponse]:
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        return response

    # =========================================================================
    # Table Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/tables",
        response_model=BoardView,
        status_code=201,
        tags=["Tables"],
        summary="Open a new table",
    )
    async def create_table(body: Optional[CreateTableRequest] = None) -> BoardView:
        """Open a table showing the difficulty selection screen."""
        return api_service.create_table(body)

    @app.get(
        "/api/v1/tables",
        response_model=TableListResponse,
        tags=["Tables"],
        summary="List open tables",
    )
    async def list_tables() -> TableListResponse:
        tables = api_service.list_tables()
        return TableListResponse(tables=tables, count=len(tables))

    @app.get(
        "/api/v1/tables/{table_id}",
        response_model=BoardView,
        responses={404: {"model": ErrorResponse}},
        tags=["Tables"],
        summary="Get the board",
    )
    async def get_board(table_id: str) -> Union[BoardView, JSONResponse]:
        return board_or_error(api_service.get_board(table_id))

    @app.delete(
        "/api/v1/tables/{table_id}",
        response_model=CloseTableResponse,
        tags=["Tables"],
        summary="Close a table",
    )
    async def close_table(table_id: str) -> CloseTableResponse:
        """Close a table and cancel its timers."""
        success = api_service.close_table(table_id)
        return CloseTableResponse(success=success, table_id=table_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/tables/{table_id}/start",
        response_model=BoardView,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Deal a new game",
    )
    async def start_game(table_id: str, body: StartGameRequest) -> Union[BoardView, JSONResponse]:
        """Deal a shuffled board for the chosen difficulty. Replaces any game in progress."""
        return board_or_error(api_service.start_game(table_id, body))

    @app.post(
        "/api/v1/tables/{table_id}/flip",
        response_model=BoardView,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Flip a card",
    )
    async def flip_card(table_id: str, body: FlipCardRequest) -> Union[BoardView, JSONResponse]:
        """
        Flip a card face up.

        The second card of a pair is evaluated immediately. A mismatched
        pair stays visible and is hidden after the configured delay; the
        change is pushed over the WebSocket.
        """
        return board_or_error(api_service.flip_card(table_id, body))

    @app.post(
        "/api/v1/tables/{table_id}/restart",
        response_model=BoardView,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Deal again at the same difficulty",
    )
    async def restart(table_id: str) -> Union[BoardView, JSONResponse]:
        return board_or_error(api_service.restart(table_id))

    @app.post(
        "/api/v1/tables/{table_id}/menu",
        response_model=BoardView,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Return to difficulty selection",
    )
    async def return_to_menu(table_id: str) -> Union[BoardView, JSONResponse]:
        return board_or_error(api_service.return_to_menu(table_id))

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    def handle_client_message(table, message: ClientMessage) -> Optional[dict]:
        """
        Apply a client message to the table.

        Returns a direct reply, or None when the reply is the state update
        pushed by the game loop.
        """
        table.touch()
        if message.type == "ping":
            return {"type": "pong"}
        if message.type == "state":
            return {"type": "state_update", "payload": api_service.build_board(table).model_dump(mode="json")}

        if message.type == "start":
            if message.difficulty is None:
                return error_message("start requires a difficulty")
            table.loop.start_game(Difficulty(message.difficulty.value), seed=message.seed)
        elif message.type == "flip":
            if message.card_id is None:
                return error_message("flip requires a card_id")
            table.loop.flip_card(message.card_id)
        elif message.type == "restart":
            table.loop.restart(seed=message.seed)
        elif message.type == "menu":
            table.loop.return_to_menu()
        else:
            return error_message(f"Unknown message type: {message.type}")
        return None

    def error_message(text: str, error_code: ErrorCode = ErrorCode.INVALID_MESSAGE) -> dict:
        return {
            "type": "error",
            "payload": {"error_code": error_code.value, "message": text},
        }

    async def pump(websocket: WebSocket, outbox: asyncio.Queue) -> None:
        """Send queued messages. None means the table was closed."""
        while True:
            message = await outbox.get()
            if message is None:
                await websocket.close(code=4404)
                return
            await websocket.send_json(message)

    @app.websocket("/api/v1/tables/{table_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, table_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Board changed (player input, clock tick, hidden pair)
        - pong: Reply to ping
        - error: Message not understood

        The socket is closed with code 4404 when the table is closed or
        reaped.

        Messages from client:
        - ping, state
        - start {difficulty, seed?}, flip {card_id}, restart, menu
        """
        table = api_service.table_manager.get_table(table_id)
        if table is None:
            await websocket.close(code=4404)
            return

        await websocket.accept()

        event_loop = asyncio.get_running_loop()
        outbox: asyncio.Queue = asyncio.Queue()

        def on_change(session) -> None:
            update = {
                "type": "state_update",
                "payload": api_service.build_board(table, session).model_dump(mode="json"),
            }
            event_loop.call_soon_threadsafe(outbox.put_nowait, update)

        def on_table_closed() -> None:
            event_loop.call_soon_threadsafe(outbox.put_nowait, None)

        unsubscribe = table.loop.subscribe(on_change)
        remove_close_hook = table.loop.on_close(on_table_closed)
        if table.loop.closed:
            on_table_closed()
        outbox.put_nowait({
            "type": "state_update",
            "payload": api_service.build_board(table).model_dump(mode="json"),
        })
        sender = asyncio.create_task(pump(websocket, outbox))

        try:
            while True:
                data = await websocket.receive_text()
                if table.loop.closed:
                    # The sender closes the socket once it reaches the close marker
                    await asyncio.wait([sender])
                    break
                try:
                    message = ClientMessage.model_validate(json.loads(data))
                except (json.JSONDecodeError, ValidationError) as e:
                    outbox.put_nowait(error_message(f"Invalid message: {e}", ErrorCode.VALIDATION_ERROR))
                    continue

                reply = handle_client_message(table, message)
                if reply is not None:
                    outbox.put_nowait(reply)
        except WebSocketDisconnect:
            logger.debug("WebSocket for table %s disconnected", table_id)
        finally:
            unsubscribe()
            remove_close_hook()
            await stop_sender(sender, table_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="memorama",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Memorama API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
