"""
Password Game Specification

Assembles the catalog, the surprise pool and the predicate registry
into a ready-to-use Reducer.
"""

from __future__ import annotations
from typing import Sequence
import random

from ...engine_core.context import ContextProvider, live_context
from ...engine_core.reducer import Reducer, Chooser
from ...engine_core.state import RuleCatalog, RuleDefinition
from ...spec_schema import validate_catalog, CatalogValidationError
from .predicates import create_password_registry
from .rules import PASSWORD_RULES, SURPRISE_RULES


def create_password_catalog() -> RuleCatalog:
    """The starting catalog, in unlock order."""
    return RuleCatalog.of(PASSWORD_RULES)


def create_surprise_pool() -> tuple[RuleDefinition, ...]:
    return tuple(SURPRISE_RULES)


def create_password_reducer(
    context_provider: ContextProvider = live_context,
    chooser: Chooser | None = None,
    seed: int | None = None,
    catalog: RuleCatalog | None = None,
    surprise_pool: Sequence[RuleDefinition] | None = None,
) -> Reducer:
    """
    Create a reducer for the password game.

    Args:
        context_provider: Source of live context (time, moon, ...)
        chooser: Picks the surprise rule; defaults to a Random(seed)
        seed: Seed for the default chooser
        catalog: Override the starting catalog (tests, variants)
        surprise_pool: Override the surprise pool

    Raises:
        CatalogValidationError: if a rule has no predicate or ids clash
    """
    registry = create_password_registry()
    catalog = catalog if catalog is not None else create_password_catalog()
    pool = tuple(surprise_pool) if surprise_pool is not None else create_surprise_pool()

    result = validate_catalog(catalog, registry, surprise_pool=pool)
    if not result.valid:
        raise CatalogValidationError(result.errors)

    if chooser is None:
        chooser = random.Random(seed).choice

    return Reducer(
        registry=registry,
        initial_catalog=catalog,
        surprise_pool=pool,
        context_provider=context_provider,
        chooser=chooser,
    )
