"""
Catalog Validation - Checks a rule catalog before a game uses it.

Validates that:
1. Rule ids are present and unique (catalog and surprise pool together)
2. Every rule has display text and a level in range
3. Every rule has a registered predicate
4. The catalog has a terminal rule (warning only)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from ..engine_core.evaluator import PredicateRegistry
from ..engine_core.state import RuleCatalog, RuleDefinition

MIN_LEVEL = 0
MAX_LEVEL = 10


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalog(
    catalog: RuleCatalog,
    registry: PredicateRegistry,
    surprise_pool: Iterable[RuleDefinition] = (),
    terminal_rule_id: str = "delete-password",
) -> ValidationResult:
    """
    Validate a catalog and its surprise pool against a registry.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    seen: set[str] = set()
    pool = list(surprise_pool)

    for rule in list(catalog) + pool:
        errors.extend(_validate_rule(rule, registry))
        if rule.rule_id in seen:
            errors.append(f"Duplicate rule id '{rule.rule_id}'")
        seen.add(rule.rule_id)

    if len(catalog) == 0:
        warnings.append("Catalog is empty - no rule will ever be active")
    elif not catalog.contains(terminal_rule_id):
        warnings.append(f"No terminal rule '{terminal_rule_id}' - the game cannot be won")

    if not pool:
        warnings.append("No surprise rules defined")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_rule(rule: RuleDefinition, registry: PredicateRegistry) -> list[str]:
    """Validate a single rule definition."""
    errors = []
    if not rule.rule_id:
        errors.append("Rule has empty ID")
        return errors
    if not rule.text:
        errors.append(f"Rule '{rule.rule_id}' has empty text")
    if not MIN_LEVEL <= rule.level <= MAX_LEVEL:
        errors.append(
            f"Rule '{rule.rule_id}' level {rule.level} outside {MIN_LEVEL}..{MAX_LEVEL}"
        )
    if not registry.has(rule.rule_id):
        errors.append(f"Rule '{rule.rule_id}' has no registered predicate")
    return errors
