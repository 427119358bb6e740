"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player input (the text changed)
2. Submitting the current password
3. Restarting the game

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    INPUT = "input"
    SUBMIT = "submit"
    RESTART = "restart"


class SubmitOutcome(Enum):
    """What an accepted submission did."""
    SURPRISE_RULE = "surprise_rule"
    VICTORY = "victory"


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    text: str | None = None

    @classmethod
    def input(cls, text: str) -> Action:
        """Factory for a text change."""
        return cls(action_type=ActionType.INPUT, text=text)

    @classmethod
    def submit(cls) -> Action:
        """Factory for a submission."""
        return cls(action_type=ActionType.SUBMIT)

    @classmethod
    def restart(cls) -> Action:
        """Factory for a restart."""
        return cls(action_type=ActionType.RESTART)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - A status notice for the player (surprise, victory)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)
    notice: str | None = None

    # For submissions
    outcome: SubmitOutcome | None = None
    added_rule: Any | None = None  # RuleDefinition

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        notice: str | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            notice=notice,
        )
