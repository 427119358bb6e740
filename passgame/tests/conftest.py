"""
Pytest fixtures for Passgame tests.
"""

from datetime import datetime, timezone

import pytest

from ..engine_core.context import PlayContext
from ..engine_core.evaluator import PredicateRegistry
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState, RuleCatalog
from ..games.password import create_password_registry, create_password_reducer
from ..games.password.rules import LENGTH, UPPERCASE, LOWERCASE, DELETE_PASSWORD
from ..session import SessionManager

JULY_15 = datetime(2024, 7, 15, 12, 0, tzinfo=timezone.utc)


def first_choice(candidates):
    """Deterministic chooser: always the first candidate."""
    return candidates[0]


@pytest.fixture
def play_context() -> PlayContext:
    """Context pinned to 15 July 2024, no temperature or Wordle answer."""
    return PlayContext.at(JULY_15)


@pytest.fixture
def registry() -> PredicateRegistry:
    return create_password_registry()


@pytest.fixture
def reducer(play_context: PlayContext) -> Reducer:
    """Reducer for the full game with fixed context and chooser."""
    return create_password_reducer(
        context_provider=lambda: play_context,
        chooser=first_choice,
    )


@pytest.fixture
def new_game(reducer: Reducer) -> GameState:
    return reducer.new_game("test_game")


@pytest.fixture
def basic_catalog() -> RuleCatalog:
    """length, uppercase, lowercase - easy to satisfy completely."""
    return RuleCatalog.of([LENGTH, UPPERCASE, LOWERCASE])


@pytest.fixture
def basic_reducer(play_context: PlayContext, basic_catalog: RuleCatalog) -> Reducer:
    return create_password_reducer(
        context_provider=lambda: play_context,
        chooser=first_choice,
        catalog=basic_catalog,
    )


@pytest.fixture
def terminal_reducer(play_context: PlayContext) -> Reducer:
    """Catalog holding only the terminal rule: the empty text wins."""
    return create_password_reducer(
        context_provider=lambda: play_context,
        chooser=first_choice,
        catalog=RuleCatalog.of([DELETE_PASSWORD]),
    )


@pytest.fixture
def manager(play_context: PlayContext) -> SessionManager:
    return SessionManager(context_provider=lambda: play_context)


@pytest.fixture
def basic_manager(play_context: PlayContext, basic_catalog: RuleCatalog) -> SessionManager:
    return SessionManager(context_provider=lambda: play_context, catalog=basic_catalog)
