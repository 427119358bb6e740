"""
Tests for API Pydantic schemas.

Validates that:
- Views and turns serialize correctly
- Out-of-range values are rejected
- Error codes are properly structured
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_game_view_schema(self):
        """GameViewResponse serializes rule statuses as strings."""
        from passgame.api.schemas import GameViewResponse, RuleView, RuleStatus

        view = GameViewResponse(
            text="Hunter2!",
            rules=[
                RuleView(rule_id="length", text="8+", level=0,
                         status=RuleStatus.SATISFIED, icon="✅"),
                RuleView(rule_id="number", text="digit", level=1,
                         status="violated", icon="❌"),
            ],
            satisfied_count=1,
            total_count=2,
            difficulty="Easy",
            progress=50.0,
            status_message="⚡ Good progress! Keep going!",
        )

        data = view.model_dump(mode="json")
        assert data["rules"][0]["status"] == "satisfied"
        assert data["rules"][1]["status"] == "violated"
        assert data["submit_enabled"] is False
        assert data["easter_egg"] is False

    def test_progress_out_of_range(self):
        from passgame.api.schemas import GameViewResponse

        with pytest.raises(ValidationError):
            GameViewResponse(text="", difficulty="Beginner", progress=101.0, status_message="")

    def test_rule_info_level_range(self):
        from passgame.api.schemas import RuleInfo

        with pytest.raises(ValidationError):
            RuleInfo(rule_id="x", text="X", level=11)

    def test_rule_info_from_definition(self):
        """RuleInfo reads RuleDefinition attributes directly."""
        from passgame.api.schemas import RuleInfo
        from passgame.games.password.rules import SPONSORS

        info = RuleInfo.model_validate(SPONSORS)
        assert info.rule_id == "sponsors"
        assert info.level == 9

    def test_unknown_rule_status(self):
        from passgame.api.schemas import RuleView

        with pytest.raises(ValidationError):
            RuleView(rule_id="x", text="X", level=0, status="maybe", icon="?")

    def test_turn_response_schema(self):
        from passgame.api.schemas import TurnResponse, GameViewResponse, SubmitOutcome

        turn = TurnResponse(
            session_id="session-123",
            success=True,
            view=GameViewResponse(text="", difficulty="Beginner", progress=0, status_message=""),
            outcome=SubmitOutcome.VICTORY,
        )
        data = turn.model_dump(mode="json")
        assert data["outcome"] == "victory"
        assert data["added_rule"] is None
        assert data["changes"] == []


class TestErrorCodes:
    """Tests for error code structure."""

    def test_error_codes(self):
        from passgame.api.schemas import ErrorCode

        assert {code.value for code in ErrorCode} == {
            "SESSION_NOT_FOUND",
            "SUBMIT_DISABLED",
            "SURPRISE_POOL_EXHAUSTED",
            "INVALID_ACTION",
            "VALIDATION_ERROR",
            "INTERNAL_ERROR",
        }

    def test_error_response(self):
        from passgame.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(error="Session x not found", error_code=ErrorCode.SESSION_NOT_FOUND)
        data = error.model_dump(mode="json")
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"] is None
