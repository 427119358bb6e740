"""
Contradiction Detection - Known mutually exclusive rules.

This is a fixed lookup table, not a constraint solver.
"""

from __future__ import annotations
from typing import Iterable

from .state import RuleDefinition

# Pairs that can never be satisfied together
CONTRADICTORY_PAIRS: tuple[tuple[str, str], ...] = (
    ("no-vowels", "all-vowels"),
    ("exactly-16", "exactly-32"),
)

# Rules that contradict every other active rule
EXCLUSIVE_RULES: tuple[str, ...] = (
    "delete-password",
)


def find_contradictions(rules: Iterable[RuleDefinition]) -> list[tuple[str, str]]:
    """List the co-active contradictory pairs, in table order."""
    ids = [r.rule_id for r in rules]
    present = set(ids)
    found = [pair for pair in CONTRADICTORY_PAIRS if pair[0] in present and pair[1] in present]

    for exclusive in EXCLUSIVE_RULES:
        if exclusive in present:
            found.extend((exclusive, other) for other in ids if other != exclusive)

    return found


def has_contradiction(rules: Iterable[RuleDefinition]) -> bool:
    """True if any contradictory combination is active."""
    return len(find_contradictions(rules)) > 0
