"""
Passgame - The Password Game Engine

A deterministic, rules-driven engine for the password puzzle.
The player edits a single text value; validation rules unlock as the
text grows and the player must satisfy every active rule at once.

The engine provides:
- Rule catalog and predicate registry
- Activation policy and contradiction detection
- A reducer for input, submit and restart actions
- Session management and a REST/WebSocket API
"""

__version__ = "0.1.0"
