"""
FastAPI Application - REST API for the browser front end.

Endpoints:
    GET    /api/v1/rules                     Rule catalog and surprise pool
    POST   /api/v1/sessions                  Create game session
    GET    /api/v1/sessions                  List active sessions
    GET    /api/v1/sessions/{id}             Get session status and view
    DELETE /api/v1/sessions/{id}             End session
    PUT    /api/v1/sessions/{id}/text        Replace the password text
    POST   /api/v1/sessions/{id}/submit      Submit the password
    POST   /api/v1/sessions/{id}/restart     Restart the game
    WS     /api/v1/sessions/{id}/ws          Real-time input, glitches, Konami

Submit Flow:
    1. Every active rule satisfied, delete-password not active:
       - A surprise rule is appended, outcome=surprise_rule
    2. Every active rule satisfied, delete-password active:
       - The game is won, outcome=victory
    3. Otherwise: 409 SUBMIT_DISABLED

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import asyncio
import json
import logging
import os

from ..engine_core.narration import GameView, IMPOSSIBILITY_LEVELS
from ..session.cosmetics import GLITCH_DISPLAY_SECONDS

# Environment configuration
PASSGAME_ENV = os.getenv("PASSGAME_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
GLITCH_INTERVAL_SECONDS = float(os.getenv("PASSGAME_GLITCH_INTERVAL", "1.0"))
GLITCH_CHANCE = float(os.getenv("PASSGAME_GLITCH_CHANCE", "0.01"))
SESSION_TTL_SECONDS = int(os.getenv("PASSGAME_SESSION_TTL", "3600"))

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


async def run_glitch_timer(send, roll, interval, chance, disconnect_errors=(RuntimeError, OSError)):
    """
    Roll for a glitch every interval seconds and send any hit.

    Runs until cancelled. Returns quietly once sending fails because
    the client has gone away.
    """
    while True:
        await asyncio.sleep(interval)
        message = roll(chance)
        if not message:
            continue
        try:
            await send({
                "type": "glitch",
                "payload": {"message": message, "seconds": GLITCH_DISPLAY_SECONDS},
            })
        except disconnect_errors:
            logger.debug("Glitch timer stopped: client gone")
            return


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Form, WebSocket, WebSocketDisconnect, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn python-multipart"
        )

    from .service import APIService
    from .models import (
        CreateSessionRequest as ServiceCreateRequest,
        UpdateTextRequest as ServiceUpdateRequest,
        ErrorResponse as ServiceError,
    )
    from .schemas import (
        # Request models
        UpdateTextRequest,
        # Response models
        SessionResponse,
        TurnResponse,
        CatalogResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        ErrorResponse,
        # Enums
        ErrorCode,
        # Nested models
        GameViewResponse,
        RuleInfo,
        RuleView,
    )
    from .. import __version__
    from ..session.cosmetics import FLIP_SECONDS

    app = FastAPI(
        title="Passgame API",
        description="""
The Password Game - every rule you satisfy unlocks a worse one.

## Submit Flow

`POST /submit` is only accepted when every active rule is satisfied:

1. **delete-password not active**: a surprise rule is appended
2. **delete-password active**: you win

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `SUBMIT_DISABLED` | Some active rule is not satisfied |
| `SURPRISE_POOL_EXHAUSTED` | No surprise rule left to add |
| `INVALID_ACTION` | Action not allowed now (game already won) |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # WebSocket connections
    ws_connections: dict[str, list[WebSocket]] = {}

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

    def not_found(error: ServiceError) -> JSONResponse:
        return make_error_response(ErrorCode.SESSION_NOT_FOUND, error.error, status_code=404)

    def turn_or_error(session_id: str, result) -> Union[TurnResponse, JSONResponse]:
        if isinstance(result, ServiceError):
            return not_found(result)
        if not result.success:
            return make_error_response(
                ErrorCode(result.error_code) if result.error_code in ErrorCode.__members__
                else ErrorCode.INTERNAL_ERROR,
                result.error or "Action failed",
                status_code=409,
                details={"view": _convert_view(result.view).model_dump(mode="json")},
            )
        return _convert_turn(session_id, result)

    async def broadcast_to_session(session_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a session."""
        dead_connections = []
        for ws in ws_connections.get(session_id, []):
            try:
                await ws.send_json(message)
            except (RuntimeError, WebSocketDisconnect):
                dead_connections.append(ws)
        for ws in dead_connections:
            ws_connections[session_id].remove(ws)

    # =========================================================================
    # Rules Endpoint
    # =========================================================================

    @app.get(
        "/api/v1/rules",
        response_model=CatalogResponse,
        tags=["Rules"],
        summary="List the rule catalog and the surprise pool",
    )
    async def list_rules() -> CatalogResponse:
        """All rules in unlock order, plus the rules a submission can add."""
        rules, surprises = api_service.list_rules()
        return CatalogResponse(
            rules=[RuleInfo.model_validate(r) for r in rules],
            surprise_rules=[RuleInfo.model_validate(r) for r in surprises],
            impossibility_levels=list(IMPOSSIBILITY_LEVELS),
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        seed: Annotated[Optional[int], Form(description="Seed for reproducible surprises")] = None,
    ) -> SessionResponse:
        """Create a new game session with an empty password."""
        api_service.cleanup_stale_sessions(SESSION_TTL_SECONDS)
        snapshot = api_service.create_session(ServiceCreateRequest(seed=seed))
        return _convert_snapshot(snapshot)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status and view of a game session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ServiceError):
            return not_found(response)
        return _convert_snapshot(response)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.put(
        "/api/v1/sessions/{session_id}/text",
        response_model=TurnResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Replace the password text",
    )
    async def update_text(
        session_id: str,
        body: UpdateTextRequest,
    ) -> Union[TurnResponse, JSONResponse]:
        """Send the full text after every change; all rules are re-checked."""
        result = api_service.update_text(ServiceUpdateRequest(session_id=session_id, text=body.text))
        response = turn_or_error(session_id, result)
        if isinstance(response, TurnResponse):
            await broadcast_to_session(session_id, {
                "type": "state_update",
                "payload": response.model_dump(mode="json"),
            })
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/submit",
        response_model=TurnResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Submit the password",
    )
    async def submit(session_id: str) -> Union[TurnResponse, JSONResponse]:
        """
        Submit the current password.

        Earns a surprise rule, or wins if the final rule is active.
        """
        response = turn_or_error(session_id, api_service.submit(session_id))
        if isinstance(response, TurnResponse):
            await broadcast_to_session(session_id, {
                "type": "state_update",
                "payload": response.model_dump(mode="json"),
            })
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=TurnResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Restart the game",
    )
    async def restart(session_id: str) -> Union[TurnResponse, JSONResponse]:
        """Discard the current game and start a new one in the same session."""
        return turn_or_error(session_id, api_service.restart(session_id))

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time play.

        Messages from server:
        - state_update: View changed
        - flip: Konami code entered, flip the page
        - glitch: Show a fake error for a moment
        - pong: Keep-alive reply
        - error: Bad message

        Messages from client:
        - input: {"text": "..."}
        - key: {"code": "ArrowUp"}
        - submit, restart
        - ping: Keep-alive
        """
        loop = api_service.get_loop(session_id)
        if not loop:
            await websocket.close(code=4404)
            return

        await websocket.accept()
        ws_connections.setdefault(session_id, []).append(websocket)

        glitches = asyncio.create_task(run_glitch_timer(
            websocket.send_json,
            loop.roll_glitch,
            GLITCH_INTERVAL_SECONDS,
            GLITCH_CHANCE,
            disconnect_errors=(RuntimeError, OSError, WebSocketDisconnect),
        ))

        try:
            await websocket.send_json({
                "type": "state_update",
                "payload": _convert_view(loop.view()).model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if not isinstance(message, dict):
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Expected a JSON object"},
                    })
                    continue

                kind = message.get("type")
                if kind == "ping":
                    await websocket.send_json({"type": "pong"})
                elif kind == "key":
                    if loop.press_key(str(message.get("code", ""))):
                        await websocket.send_json({
                            "type": "flip",
                            "payload": {"seconds": FLIP_SECONDS},
                        })
                elif kind == "input" and not isinstance(message.get("text"), str):
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "input needs a string 'text'"},
                    })
                elif kind in ("input", "submit", "restart"):
                    if kind == "input":
                        result = loop.update_text(message["text"])
                    elif kind == "submit":
                        result = loop.submit()
                    else:
                        result = loop.restart()
                    await websocket.send_json({
                        "type": "state_update",
                        "payload": _convert_turn(session_id, result).model_dump(mode="json"),
                    })
                else:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": f"Unknown message type: {kind}"},
                    })

        except WebSocketDisconnect:
            logger.debug("WebSocket for %s disconnected", session_id)
        finally:
            glitches.cancel()
            if websocket in ws_connections.get(session_id, []):
                ws_connections[session_id].remove(websocket)

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
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="passgame",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Passgame API",
            "version": API_VERSION,
            "environment": PASSGAME_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _convert_view(view: GameView) -> GameViewResponse:
        """Convert engine GameView to Pydantic model."""
        return GameViewResponse(
            text=view.text,
            rules=[
                RuleView(
                    rule_id=r.rule_id,
                    text=r.text,
                    level=r.level,
                    status=r.status.value,
                    icon=r.icon,
                )
                for r in view.rules
            ],
            satisfied_count=view.satisfied_count,
            total_count=view.total_count,
            difficulty=view.difficulty,
            progress=view.progress,
            submit_enabled=view.submit_enabled,
            status_message=view.status_message,
            contradiction=view.contradiction,
            game_over=view.game_over,
            catalog_size=view.catalog_size,
            easter_egg=view.easter_egg,
        )

    def _convert_snapshot(snapshot) -> SessionResponse:
        return SessionResponse(
            session_id=snapshot.session_id,
            status=snapshot.status,
            created_at=snapshot.created_at,
            view=_convert_view(snapshot.view),
        )

    def _convert_turn(session_id: str, result) -> TurnResponse:
        return TurnResponse(
            session_id=session_id,
            success=result.success,
            view=_convert_view(result.view),
            outcome=result.outcome.value if result.outcome else None,
            added_rule=RuleInfo.model_validate(result.added_rule) if result.added_rule else None,
            changes=result.changes,
        )

    return app


# For running directly: uvicorn passgame.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
