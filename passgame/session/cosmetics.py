"""
Cosmetics - Side effects that never touch the rules.

- Konami code: flips the page for a few seconds
- Glitches: a small chance each tick to flash a fake error
- Easter egg: revealed once the password gets long

None of these read or change GameState.
"""

from __future__ import annotations
from collections import deque
import random

KONAMI_CODE = (
    "ArrowUp", "ArrowUp", "ArrowDown", "ArrowDown",
    "ArrowLeft", "ArrowRight", "ArrowLeft", "ArrowRight",
    "KeyB", "KeyA",
)

FLIP_SECONDS = 3.0

GLITCH_MESSAGES = (
    "ERROR: Password too secure, please make it weaker",
    "WARNING: This password might become sentient",
    "NOTICE: Your password is being judged by a committee of cats",
    "ALERT: Password rejected by the International Password Council",
)

GLITCH_DISPLAY_SECONDS = 2.0

EASTER_EGG_THRESHOLD = 50


class KonamiDetector:
    """Watches a stream of key codes for the Konami sequence."""

    def __init__(self, sequence: tuple[str, ...] = KONAMI_CODE):
        self.sequence = sequence
        self._recent: deque[str] = deque(maxlen=len(sequence))

    def feed(self, code: str) -> bool:
        """Record a key press. True when it completes the sequence."""
        self._recent.append(code)
        return tuple(self._recent) == self.sequence

    def reset(self):
        self._recent.clear()


def roll_glitch(rng: random.Random, chance: float) -> str | None:
    """One tick of the glitch timer: a message, or None most of the time."""
    if rng.random() < chance:
        return rng.choice(GLITCH_MESSAGES)
    return None


def easter_egg_unlocked(text: str) -> bool:
    return len(text) > EASTER_EGG_THRESHOLD
