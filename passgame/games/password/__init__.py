"""
Password - The built-in game

Rules unlock as the password grows. Each level adds something more
absurd: maths, dates, chess, the moon, contradictions, and finally a
rule asking the player to delete everything.

This module contains:
- Rule definitions (base catalog and surprise pool)
- Predicates for every rule
- The game spec that wires them into a Reducer
"""

from .rules import PASSWORD_RULES, SURPRISE_RULES
from .predicates import create_password_registry
from .spec import create_password_catalog, create_surprise_pool, create_password_reducer

__all__ = [
    "PASSWORD_RULES",
    "SURPRISE_RULES",
    "create_password_registry",
    "create_password_catalog",
    "create_surprise_pool",
    "create_password_reducer",
]
