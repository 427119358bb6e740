"""
Session Module - Manages ephemeral game sessions.

A session represents one player's game:
- Created when the player opens the game
- Holds the current game state
- Processes input, submissions and restarts
- Destroyed when the player leaves

Sessions are EPHEMERAL:
- No persistence to database
- Restart replaces the state, it never mutates it in place
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult
from .cosmetics import KonamiDetector, roll_glitch, GLITCH_MESSAGES, KONAMI_CODE

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "KonamiDetector",
    "roll_glitch",
    "GLITCH_MESSAGES",
    "KONAMI_CODE",
]
