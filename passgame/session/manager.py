"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Player opens the game → create ephemeral session (in-memory only)
2. During game:
   - Every keystroke replaces the text and re-evaluates
   - Submitting either adds a surprise rule or wins
3. Restart → the session's GameState is replaced by a fresh one
4. Session ended or stale → session destroyed, ALL state deleted

PERSISTENCE RULES:
- NO database
- Game state is session-scoped only
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import time
import uuid

from ..engine_core.context import ContextProvider, live_context
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState, RuleCatalog
from ..games.password import create_password_reducer
from .cosmetics import KonamiDetector

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    WON = "won"  # Player deleted the password
    ENDED = "ended"  # Session closed


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The reducer (catalog, predicates, injected context and chooser)
    - The current canonical GameState
    - Cosmetic state (easter egg, Konami detector, glitch RNG)

    The session is destroyed when it ends.
    State is NOT persisted.
    """
    session_id: str
    reducer: Reducer
    game_state: GameState
    created_at: float
    last_active: float = 0.0

    state: SessionState = SessionState.ACTIVE

    # Shown instead of the strength narration until the next input
    notice: str | None = None

    # Cosmetics
    easter_egg_visible: bool = False
    konami: KonamiDetector = field(default_factory=KonamiDetector)
    glitch_rng: random.Random = field(default_factory=random.Random)

    def is_active(self) -> bool:
        """Check if session is still in play."""
        return self.state in {SessionState.ACTIVE, SessionState.WON}

    def touch(self):
        self.last_active = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own reducer and RNG
    - Track active sessions
    - Clean up stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        context_provider: ContextProvider = live_context,
        catalog: RuleCatalog | None = None,
    ):
        self.context_provider = context_provider
        # Starting catalog for new sessions; None means the full game
        self.catalog = catalog
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        seed: int | None = None,
        catalog: RuleCatalog | None = None,
        reducer: Reducer | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            seed: Seed for surprise-rule selection and glitches
            catalog: Optional starting catalog (defaults to the manager's)
            reducer: Optional fully configured reducer

        Returns:
            New Session with a freshly evaluated empty password
        """
        session_id = str(uuid.uuid4())
        rng = random.Random(seed)

        if reducer is None:
            reducer = create_password_reducer(
                context_provider=self.context_provider,
                chooser=rng.choice,
                catalog=catalog if catalog is not None else self.catalog,
            )

        now = time.time()
        session = Session(
            session_id=session_id,
            reducer=reducer,
            game_state=reducer.new_game(session_id),
            created_at=now,
            last_active=now,
            glitch_rng=random.Random(seed),
        )

        self._sessions[session_id] = session
        logger.info("Session %s created (seed=%s)", session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        The session is removed from memory.
        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ENDED
        session.notice = None
        session.konami.reset()
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_age.

        Called periodically to free memory. Returns how many were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
