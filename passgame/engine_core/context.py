"""
Play Context - Live values that some rules check against.

A few rules depend on the world outside the text: the current month,
the moon phase, today's temperature, today's Wordle answer, the
player's IP address. Predicates never read the clock themselves;
they receive a PlayContext, so tests can pin every value.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable


# Reference new moon: 2000-01-06 18:14 UTC
_KNOWN_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)
_SYNODIC_MONTH_DAYS = 29.530588853

MOON_PHASE_EMOJIS = ("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘")

DEFAULT_IP_ADDRESS = "192.168.1.1"


def moon_phase_emoji(when: datetime) -> str:
    """Approximate moon phase for a moment, as one of eight emojis."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    days = (when - _KNOWN_NEW_MOON).total_seconds() / 86400.0
    age = (days % _SYNODIC_MONTH_DAYS) / _SYNODIC_MONTH_DAYS
    return MOON_PHASE_EMOJIS[int(age * 8 + 0.5) % 8]


@dataclass(frozen=True)
class PlayContext:
    """
    Snapshot of the outside world at check time.

    temperature and wordle_answer are optional: when unknown, the
    matching rules fall back to accepting any plausible answer.
    """
    now: datetime
    moon_phase: str = "🌙"
    temperature: str | None = None
    wordle_answer: str | None = None
    ip_address: str = DEFAULT_IP_ADDRESS

    @property
    def month(self) -> str:
        """Current month as two digits, e.g. '07'."""
        return f"{self.now.month:02d}"

    @classmethod
    def at(cls, when: datetime, **kwargs) -> PlayContext:
        """Context for a fixed moment, with the moon phase derived from it."""
        kwargs.setdefault("moon_phase", moon_phase_emoji(when))
        return cls(now=when, **kwargs)


ContextProvider = Callable[[], PlayContext]


def live_context() -> PlayContext:
    """Context for the player's local wall-clock time."""
    return PlayContext.at(datetime.now().astimezone())
