"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between the browser front end
and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- SUBMIT_DISABLED: Submitted while some active rule is unsatisfied
- SURPRISE_POOL_EXHAUSTED: No surprise rule left to add
- INVALID_ACTION: Action not allowed now (e.g. typing after winning)
- VALIDATION_ERROR: Malformed request
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    WON = "won"
    ENDED = "ended"


class RuleStatus(str, Enum):
    """How a rule is rendered."""
    SATISFIED = "satisfied"
    VIOLATED = "violated"
    IMPOSSIBLE = "impossible"
    PENDING = "pending"


class SubmitOutcome(str, Enum):
    """What an accepted submission did."""
    SURPRISE_RULE = "surprise_rule"
    VICTORY = "victory"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SUBMIT_DISABLED = "SUBMIT_DISABLED"
    SURPRISE_POOL_EXHAUSTED = "SURPRISE_POOL_EXHAUSTED"
    INVALID_ACTION = "INVALID_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class RuleInfo(BaseModel):
    """A rule definition."""
    rule_id: str
    text: str
    level: int = Field(ge=0, le=10)

    model_config = {"from_attributes": True}


class RuleView(BaseModel):
    """A rule as currently shown to the player."""
    rule_id: str
    text: str
    level: int
    status: RuleStatus
    icon: str


class GameViewResponse(BaseModel):
    """Everything the front end renders."""
    text: str
    rules: list[RuleView] = Field(default_factory=list)
    satisfied_count: int = 0
    total_count: int = 0
    difficulty: str
    progress: float = Field(ge=0, le=100, description="Strength bar, 0-100")
    submit_enabled: bool = False
    status_message: str
    contradiction: bool = False
    game_over: bool = False
    catalog_size: int = 0
    easter_egg: bool = False


# =============================================================================
# Request Models
# =============================================================================

class UpdateTextRequest(BaseModel):
    """The player's current text."""
    text: str = Field(description="Full text value; replaces the previous one")


# =============================================================================
# Response Models
# =============================================================================

class SessionResponse(BaseModel):
    """Session status with its current view."""
    session_id: str
    status: SessionStatus
    created_at: float
    view: GameViewResponse


class TurnResponse(BaseModel):
    """Result of an input, submit or restart."""
    session_id: str
    success: bool
    view: GameViewResponse
    outcome: Optional[SubmitOutcome] = None
    added_rule: Optional[RuleInfo] = None
    changes: list[str] = Field(default_factory=list)


class CatalogResponse(BaseModel):
    """The rule catalog and the surprise pool."""
    rules: list[RuleInfo]
    surprise_rules: list[RuleInfo]
    impossibility_levels: list[str]


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
