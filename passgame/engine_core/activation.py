"""
Activation Policy - Which rules are currently in play.

The active rules are always a prefix of the catalog. The window
grows with the text length, and doing well is rewarded with two
extra rules.
"""

from __future__ import annotations

from .state import GameState, RuleCatalog, RuleDefinition

BASE_RULE_COUNT = 3
CHARACTERS_PER_RULE = 2
BONUS_THRESHOLD = 0.8
BONUS_RULES = 2


def active_rule_count(text_length: int, catalog_size: int, satisfied_count: int = 0) -> int:
    """
    Number of active rules.

    count = min(len // 2 + 3, size), bumped by 2 (still clamped)
    when more than 80% of that window is satisfied.
    """
    count = min(text_length // CHARACTERS_PER_RULE + BASE_RULE_COUNT, catalog_size)
    if satisfied_count > count * BONUS_THRESHOLD:
        count = min(count + BONUS_RULES, catalog_size)
    return count


def active_rules_for(
    catalog: RuleCatalog,
    text: str,
    satisfied: frozenset[str] = frozenset(),
) -> list[RuleDefinition]:
    """Active prefix of a catalog for a text and satisfaction set."""
    return catalog.prefix(active_rule_count(len(text), len(catalog), len(satisfied)))


def evaluation_window(catalog: RuleCatalog, text: str) -> list[RuleDefinition]:
    """
    The rules a fresh evaluation checks.

    Satisfaction is cleared before each evaluation, so the window is
    computed without the bonus. Bonus rules appear afterwards,
    unevaluated.
    """
    return active_rules_for(catalog, text)


def active_rules(state: GameState) -> list[RuleDefinition]:
    """Active rules for a state, bonus included."""
    return active_rules_for(state.catalog, state.text, state.satisfied)
