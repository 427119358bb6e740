"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to game loop calls
2. Manages sessions
3. Returns framework-agnostic results

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .models import (
    CreateSessionRequest,
    UpdateTextRequest,
    SessionSnapshot,
    ErrorResponse,
)
from ..engine_core.state import RuleDefinition
from ..games.password import create_password_catalog, create_surprise_pool
from ..session import SessionManager, Session, GameLoop, TurnResult

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        snapshot = service.create_session(CreateSessionRequest(seed=7))
        result = service.update_text(UpdateTextRequest(snapshot.session_id, "Hunter2!"))
        if result.view.submit_enabled:
            result = service.submit(snapshot.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_session(self, request: CreateSessionRequest) -> SessionSnapshot:
        """Create a new game session."""
        session = self.session_manager.create_session(seed=request.seed)
        self._game_loops[session.session_id] = GameLoop(session)
        return self._snapshot(session)

    def get_session(self, session_id: str) -> SessionSnapshot | ErrorResponse:
        """Get session status and current view."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._snapshot(session)

    def get_loop(self, session_id: str) -> GameLoop | None:
        return self._game_loops.get(session_id)

    def update_text(self, request: UpdateTextRequest) -> TurnResult | ErrorResponse:
        """Replace the session's text and re-evaluate."""
        loop = self.get_loop(request.session_id)
        if not loop:
            return _not_found(request.session_id)
        return loop.update_text(request.text)

    def submit(self, session_id: str) -> TurnResult | ErrorResponse:
        """Submit the session's current password."""
        loop = self.get_loop(session_id)
        if not loop:
            return _not_found(session_id)
        result = loop.submit()
        if not result.success:
            logger.debug("Submit rejected for %s: %s", session_id, result.error_code)
        return result

    def restart(self, session_id: str) -> TurnResult | ErrorResponse:
        """Throw the game away and start a fresh one in the same session."""
        loop = self.get_loop(session_id)
        if not loop:
            return _not_found(session_id)
        return loop.restart()

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a session."""
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    def cleanup_stale_sessions(self, max_age_seconds: int) -> int:
        removed = self.session_manager.cleanup_stale_sessions(max_age_seconds)
        for session_id in list(self._game_loops):
            if not self.session_manager.get_session(session_id):
                del self._game_loops[session_id]
        return removed

    def list_rules(self) -> tuple[list[RuleDefinition], list[RuleDefinition]]:
        """The base catalog and the surprise pool."""
        return list(create_password_catalog()), list(create_surprise_pool())

    def _snapshot(self, session: Session) -> SessionSnapshot:
        loop = self._game_loops.get(session.session_id) or GameLoop(session)
        return SessionSnapshot(
            session_id=session.session_id,
            status=session.state.value,
            created_at=session.created_at,
            view=loop.view(),
        )


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code="SESSION_NOT_FOUND",
    )
