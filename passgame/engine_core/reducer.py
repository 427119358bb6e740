"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure
- Randomness and live context are injected, never read ambiently
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Sequence
import logging
import random

from .action import Action, ActionType, ActionResult, SubmitOutcome
from .activation import active_rules, evaluation_window
from .context import ContextProvider, live_context
from .evaluator import PredicateRegistry, evaluate
from .narration import MSG_SURPRISE, MSG_VICTORY, is_submit_enabled
from .state import GameState, GamePhase, RuleCatalog, RuleDefinition

logger = logging.getLogger(__name__)

TERMINAL_RULE_ID = "delete-password"

Chooser = Callable[[Sequence[RuleDefinition]], RuleDefinition]


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The registry provides predicates; the surprise pool provides
    the rules a successful submission can add.
    """
    registry: PredicateRegistry
    initial_catalog: RuleCatalog
    surprise_pool: tuple[RuleDefinition, ...] = ()
    context_provider: ContextProvider = live_context
    chooser: Chooser = field(default=random.choice)

    def new_game(self, game_id: str) -> GameState:
        """Fresh state for the initial catalog, evaluated for empty text."""
        state = GameState(game_id=game_id, catalog=self.initial_catalog)
        return state.with_text("", self._evaluate(state.catalog, ""))

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            logger.debug("Rejected %s: %s", action.action_type.value, validation_error)
            return ActionResult.failure(validation_error, error_code="INVALID_ACTION")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

        if result.success and result.new_state:
            result.new_state.action_history.append(action)
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Validate that an action is legal in the current state.

        Returns error message if invalid, None if valid.
        """
        if state.phase == GamePhase.WON and action.action_type != ActionType.RESTART:
            return "Game is over - only restart is allowed"

        if action.action_type == ActionType.INPUT and action.text is None:
            return "Input action requires text"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.INPUT: self._handle_input,
            ActionType.SUBMIT: self._handle_submit,
            ActionType.RESTART: self._handle_restart,
        }
        return handlers.get(action_type)

    def _evaluate(self, catalog: RuleCatalog, text: str) -> frozenset[str]:
        return evaluate(
            self.registry,
            evaluation_window(catalog, text),
            text,
            self.context_provider(),
        )

    def _handle_input(self, state: GameState, action: Action) -> ActionResult:
        """Handle a text change: full re-evaluation."""
        text = action.text or ""
        satisfied = self._evaluate(state.catalog, text)
        new_state = state.with_text(text, satisfied)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{len(satisfied)} of {len(active_rules(new_state))} rules satisfied"],
        )

    def _handle_submit(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle a submission.

        With every active rule satisfied, the terminal rule wins the
        game; anything else earns a surprise rule.
        """
        if not is_submit_enabled(state):
            return ActionResult.failure(
                "Not all active rules are satisfied",
                error_code="SUBMIT_DISABLED",
            )

        rules = active_rules(state)
        if any(r.rule_id == TERMINAL_RULE_ID for r in rules):
            new_state = state._copy_with(
                phase=GamePhase.WON,
                submissions=state.submissions + 1,
            )
            logger.info("Game %s won after %d submissions", state.game_id, new_state.submissions)
            result = ActionResult.success_with_state(
                new_state,
                changes=["Password deleted"],
                notice=MSG_VICTORY,
            )
            result.outcome = SubmitOutcome.VICTORY
            return result

        candidates = [r for r in self.surprise_pool if not state.catalog.contains(r.rule_id)]
        if not candidates:
            return ActionResult.failure(
                "No surprise rules left to add",
                error_code="SURPRISE_POOL_EXHAUSTED",
            )

        rule = self.chooser(candidates)
        new_state = state._copy_with(
            catalog=state.catalog.append(rule),
            submissions=state.submissions + 1,
        )
        logger.info("Game %s: surprise rule '%s' added", state.game_id, rule.rule_id)

        result = ActionResult.success_with_state(
            new_state,
            changes=[f"Added rule: {rule.text}"],
            notice=MSG_SURPRISE,
        )
        result.outcome = SubmitOutcome.SURPRISE_RULE
        result.added_rule = rule
        return result

    def _handle_restart(self, state: GameState, action: Action) -> ActionResult:
        """Discard the state and start over with the initial catalog."""
        return ActionResult.success_with_state(
            self.new_game(state.game_id),
            changes=["Game restarted"],
        )


def apply_action(reducer: Reducer, state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return reducer.apply(state, action)
