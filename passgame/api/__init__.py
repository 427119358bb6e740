"""
API Module - Browser front end interface.

Exposes the engine via REST and WebSocket. The front end:
1. Creates a game session
2. Sends the full text on every change
3. Submits when the submit button is enabled
4. Restarts when it likes

All state is session-scoped. No persistent user accounts required.
"""

from .models import (
    CreateSessionRequest,
    UpdateTextRequest,
    SessionSnapshot,
    ErrorResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    "CreateSessionRequest",
    "UpdateTextRequest",
    "SessionSnapshot",
    "ErrorResponse",
    "APIService",
    "create_app",
]
