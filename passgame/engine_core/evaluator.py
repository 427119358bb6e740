"""
Evaluator - Applies rules to the current text.

Predicates are registered by rule id. Evaluation is a full
recomputation: every call checks every given rule from scratch,
there is no incremental update.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .context import PlayContext
from .state import RuleDefinition

Predicate = Callable[[str, PlayContext], bool]


@dataclass
class PredicateRegistry:
    """
    Maps rule ids to predicates.

    Predicates must be total: they return a bool for every string,
    including the empty string and arbitrary unicode.
    """
    _predicates: dict[str, Predicate] = field(default_factory=dict)

    def register(self, rule_id: str, predicate: Predicate) -> None:
        if rule_id in self._predicates:
            raise ValueError(f"Predicate for rule '{rule_id}' already registered")
        self._predicates[rule_id] = predicate

    def rule(self, rule_id: str) -> Callable[[Predicate], Predicate]:
        """Decorator form of register()."""
        def decorator(predicate: Predicate) -> Predicate:
            self.register(rule_id, predicate)
            return predicate
        return decorator

    def has(self, rule_id: str) -> bool:
        return rule_id in self._predicates

    def get(self, rule_id: str) -> Predicate:
        try:
            return self._predicates[rule_id]
        except KeyError:
            raise ValueError(f"No predicate registered for rule '{rule_id}'") from None

    @property
    def rule_ids(self) -> list[str]:
        return list(self._predicates)


def check_rule(
    registry: PredicateRegistry,
    rule: RuleDefinition,
    text: str,
    context: PlayContext,
) -> bool:
    """Check a single rule against the text."""
    return bool(registry.get(rule.rule_id)(text, context))


def evaluate(
    registry: PredicateRegistry,
    rules: Iterable[RuleDefinition],
    text: str,
    context: PlayContext,
) -> frozenset[str]:
    """Return the ids of the given rules that the text satisfies."""
    return frozenset(
        rule.rule_id for rule in rules
        if check_rule(registry, rule, text, context)
    )
