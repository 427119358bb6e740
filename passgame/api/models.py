"""
API Models - Framework-agnostic request and response objects.

These are what APIService accepts and returns. The FastAPI layer
converts them to the Pydantic schemas in schemas.py.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.narration import GameView


# =============================================================================
# Request Models
# =============================================================================

@dataclass
class CreateSessionRequest:
    """
    Request to start a new game.

    seed makes surprise-rule selection and glitches reproducible.
    """
    seed: int | None = None


@dataclass
class UpdateTextRequest:
    """The player's text changed."""
    session_id: str
    text: str


# =============================================================================
# Response Models
# =============================================================================

@dataclass
class SessionSnapshot:
    """A session and what it currently shows."""
    session_id: str
    status: str
    created_at: float
    view: GameView


@dataclass
class ErrorResponse:
    """Error returned instead of a normal response."""
    error: str
    error_code: str
    details: dict[str, Any] = field(default_factory=dict)
