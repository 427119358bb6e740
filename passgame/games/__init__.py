"""
Games module - Game-specific rule sets.

Each game has its own subpackage with:
- Rule definitions
- Predicates keyed by rule id
- A spec function that builds the reducer
"""
