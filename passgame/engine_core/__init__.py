"""
Engine Core - Deterministic rule evaluation and state management.

The engine is the runtime that:
1. Holds a RuleCatalog and a PredicateRegistry
2. Manages GameState
3. Picks the active rule window
4. Evaluates the text and detects contradictions
5. Applies actions via the reducer
"""

from .state import GameState, GamePhase, RuleCatalog, RuleDefinition, RuleStatus
from .context import PlayContext, ContextProvider, live_context, moon_phase_emoji
from .action import Action, ActionType, ActionResult, SubmitOutcome
from .evaluator import PredicateRegistry, Predicate, evaluate, check_rule
from .activation import active_rule_count, active_rules, active_rules_for, evaluation_window
from .contradictions import CONTRADICTORY_PAIRS, EXCLUSIVE_RULES, find_contradictions, has_contradiction
from .narration import GameView, RuleView, build_view, IMPOSSIBILITY_LEVELS
from .reducer import Reducer, apply_action, TERMINAL_RULE_ID

__all__ = [
    "GameState",
    "GamePhase",
    "RuleCatalog",
    "RuleDefinition",
    "RuleStatus",
    "PlayContext",
    "ContextProvider",
    "live_context",
    "moon_phase_emoji",
    "Action",
    "ActionType",
    "ActionResult",
    "SubmitOutcome",
    "PredicateRegistry",
    "Predicate",
    "evaluate",
    "check_rule",
    "active_rule_count",
    "active_rules",
    "active_rules_for",
    "evaluation_window",
    "CONTRADICTORY_PAIRS",
    "EXCLUSIVE_RULES",
    "find_contradictions",
    "has_contradiction",
    "GameView",
    "RuleView",
    "build_view",
    "IMPOSSIBILITY_LEVELS",
    "Reducer",
    "apply_action",
    "TERMINAL_RULE_ID",
]
