"""
Game Loop - Drives one session from the presentation layer.

The loop:
1. Player types → update_text() re-evaluates
2. Player submits → a surprise rule is added, or the game is won
3. Player restarts → a fresh GameState replaces the old one

Cosmetic hooks (key presses, glitch ticks) live here too; they never
change the rules or the text.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging

from ..engine_core.action import Action, ActionResult, SubmitOutcome
from ..engine_core.narration import GameView, build_view
from ..engine_core.state import GamePhase, RuleDefinition
from .cosmetics import easter_egg_unlocked, roll_glitch

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_INPUT = "waiting_input"
    READY_TO_SUBMIT = "ready_to_submit"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing one player interaction.

    Always carries the view to render, even on failure.
    """
    success: bool
    loop_state: LoopState
    view: GameView

    outcome: SubmitOutcome | None = None
    added_rule: RuleDefinition | None = None

    changes: list[str] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)

        result = loop.update_text("Hunter2!")
        render(result.view)

        if result.view.submit_enabled:
            result = loop.submit()
    """

    def __init__(self, session: Session):
        self.session = session

    @property
    def state(self) -> LoopState:
        game_state = self.session.game_state
        if game_state.phase == GamePhase.WON:
            return LoopState.GAME_OVER
        if self.view().submit_enabled:
            return LoopState.READY_TO_SUBMIT
        return LoopState.WAITING_INPUT

    def view(self) -> GameView:
        """Current view, including the easter egg flag."""
        view = build_view(self.session.game_state, notice=self.session.notice)
        view.easter_egg = self.session.easter_egg_visible
        return view

    def update_text(self, text: str) -> TurnResult:
        """The text changed: re-evaluate everything."""
        result = self._apply(Action.input(text))
        if result.success:
            self.session.notice = None
            # Once revealed, the easter egg stays until restart
            if easter_egg_unlocked(text):
                self.session.easter_egg_visible = True
        return self._to_turn_result(result)

    def submit(self) -> TurnResult:
        """Submit the current password."""
        from .manager import SessionState

        result = self._apply(Action.submit())
        if result.success:
            self.session.notice = result.notice
            if result.outcome == SubmitOutcome.VICTORY:
                self.session.state = SessionState.WON
                logger.info("Session %s won", self.session.session_id)
        return self._to_turn_result(result)

    def restart(self) -> TurnResult:
        """Discard the game and start over."""
        from .manager import SessionState

        result = self._apply(Action.restart())
        if result.success:
            self.session.notice = None
            self.session.easter_egg_visible = False
            self.session.konami.reset()
            self.session.state = SessionState.ACTIVE
        return self._to_turn_result(result)

    def press_key(self, code: str) -> bool:
        """Feed a key code to the Konami detector. True means flip the page."""
        return self.session.konami.feed(code)

    def roll_glitch(self, chance: float) -> str | None:
        """One glitch-timer tick for this session."""
        return roll_glitch(self.session.glitch_rng, chance)

    def _apply(self, action: Action) -> ActionResult:
        self.session.touch()
        result = self.session.reducer.apply(self.session.game_state, action)
        if result.success and result.new_state is not None:
            self.session.game_state = result.new_state
        return result

    def _to_turn_result(self, result: ActionResult) -> TurnResult:
        return TurnResult(
            success=result.success,
            loop_state=self.state,
            view=self.view(),
            outcome=result.outcome,
            added_rule=result.added_rule,
            changes=result.state_changes,
            error=result.error,
            error_code=result.error_code,
        )
