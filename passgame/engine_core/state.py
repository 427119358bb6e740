"""
Game State - Rule definitions, the rule catalog and the game state.

Design principles:
- Immutable-friendly: all mutations return new objects
- Behaviour-free: rules are tagged data, predicates live in a registry
- Ordered: catalog order is both difficulty and activation order
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    WON = "won"


class RuleStatus(Enum):
    """How a rule is presented to the player."""
    SATISFIED = "satisfied"
    VIOLATED = "violated"
    IMPOSSIBLE = "impossible"
    PENDING = "pending"


@dataclass(frozen=True)
class RuleDefinition:
    """
    A validation rule.

    Note: This is data only. The predicate that decides whether
    a text satisfies the rule is looked up by rule_id in a
    PredicateRegistry.
    """
    rule_id: str
    text: str
    level: int = 0


@dataclass(frozen=True)
class RuleCatalog:
    """
    Ordered, append-only sequence of rules.

    The catalog grows at runtime when a surprise rule is added.
    """
    rules: tuple[RuleDefinition, ...] = ()

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[RuleDefinition]:
        return iter(self.rules)

    @property
    def ids(self) -> list[str]:
        return [r.rule_id for r in self.rules]

    def contains(self, rule_id: str) -> bool:
        """Check if catalog contains a rule with given id."""
        return any(r.rule_id == rule_id for r in self.rules)

    def get(self, rule_id: str) -> RuleDefinition | None:
        """Get rule by ID."""
        for rule in self.rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def prefix(self, count: int) -> list[RuleDefinition]:
        """First `count` rules in catalog order."""
        return list(self.rules[:max(count, 0)])

    def append(self, rule: RuleDefinition) -> RuleCatalog:
        """Return new catalog with rule added at the end."""
        if self.contains(rule.rule_id):
            raise ValueError(f"Rule '{rule.rule_id}' is already in the catalog")
        return RuleCatalog(rules=self.rules + (rule,))

    @classmethod
    def of(cls, rules: list[RuleDefinition]) -> RuleCatalog:
        """Build a catalog from a list, rejecting duplicate ids."""
        catalog = cls()
        for rule in rules:
            catalog = catalog.append(rule)
        return catalog


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    catalog: RuleCatalog

    text: str = ""
    satisfied: frozenset[str] = frozenset()
    phase: GamePhase = GamePhase.PLAYING

    # Number of accepted submissions (surprise rules drawn + victory)
    submissions: int = 0

    # History (for replay, debugging)
    action_history: list[Any] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.WON

    def with_text(self, text: str, satisfied: frozenset[str]) -> GameState:
        """Return new state with updated text and satisfaction."""
        return self._copy_with(text=text, satisfied=satisfied)

    def with_catalog(self, catalog: RuleCatalog) -> GameState:
        """Return new state with a grown catalog."""
        return self._copy_with(catalog=catalog)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            catalog=kwargs.get("catalog", self.catalog),
            text=kwargs.get("text", self.text),
            satisfied=kwargs.get("satisfied", self.satisfied),
            phase=kwargs.get("phase", self.phase),
            submissions=kwargs.get("submissions", self.submissions),
            action_history=kwargs.get("action_history", list(self.action_history)),
        )
