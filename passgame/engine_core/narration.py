"""
Narration - Everything the presentation layer shows, derived from state.

Pure functions of GameState: rule statuses, counts, difficulty name,
progress, submit availability and the status message. Nothing here
remembers anything between calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .activation import active_rules
from .contradictions import find_contradictions
from .state import GameState, RuleDefinition, RuleStatus

IMPOSSIBILITY_LEVELS = (
    "Beginner", "Easy", "Normal", "Hard", "Expert", "Nightmare",
    "Impossible", "Absurd", "Ridiculous", "Insane", "Cosmic Horror",
)

STATUS_ICONS = {
    RuleStatus.SATISFIED: "✅",
    RuleStatus.VIOLATED: "❌",
    RuleStatus.IMPOSSIBLE: "💀",
    RuleStatus.PENDING: "⏳",
}

MSG_START = "Start typing to see the rules appear..."
MSG_ALL_SATISFIED = "🎉 All current rules satisfied! But wait... there are more rules coming..."
MSG_GREAT = "🔥 You're doing great! Just a few more rules to go..."
MSG_GOOD = "⚡ Good progress! Keep going!"
MSG_TRICKY = "🤔 This is getting tricky..."
MSG_HARD = "😅 This is harder than it looks, isn't it?"
MSG_CONTRADICTION = "💀 Wait... some of these rules contradict each other! This might be impossible..."
MSG_SURPRISE = "🎪 Surprise! Here's another rule just for you!"
MSG_VICTORY = "🏆 You deleted the password. You win!"


@dataclass
class RuleView:
    """One rule as shown to the player."""
    rule_id: str
    text: str
    level: int
    status: RuleStatus

    @property
    def icon(self) -> str:
        return STATUS_ICONS[self.status]


@dataclass
class GameView:
    """Renderable snapshot of a game."""
    text: str
    rules: list[RuleView] = field(default_factory=list)
    satisfied_count: int = 0
    total_count: int = 0
    difficulty: str = IMPOSSIBILITY_LEVELS[0]
    progress: float = 0.0
    submit_enabled: bool = False
    status_message: str = MSG_START
    contradiction: bool = False
    game_over: bool = False
    catalog_size: int = 0
    easter_egg: bool = False


def difficulty_name(rules: list[RuleDefinition]) -> str:
    """Name for the highest level among the rules."""
    if not rules:
        return IMPOSSIBILITY_LEVELS[0]
    top = max(r.level for r in rules)
    return IMPOSSIBILITY_LEVELS[max(0, min(top, len(IMPOSSIBILITY_LEVELS) - 1))]


def progress_percent(satisfied_count: int, total_count: int) -> float:
    if total_count == 0:
        return 0.0
    return satisfied_count / total_count * 100


def is_submit_enabled(state: GameState) -> bool:
    """Every active rule satisfied, and at least one active."""
    rules = active_rules(state)
    return len(rules) > 0 and len(state.satisfied) == len(rules)


def rule_status(
    rule: RuleDefinition,
    state: GameState,
    contradiction: bool,
) -> RuleStatus:
    if rule.rule_id in state.satisfied:
        return RuleStatus.SATISFIED
    if contradiction:
        return RuleStatus.IMPOSSIBLE
    if len(state.text) == 0:
        return RuleStatus.PENDING
    return RuleStatus.VIOLATED


def status_message(state: GameState, rules: list[RuleDefinition] | None = None) -> str:
    """
    Strength narration for the current state.

    Bands by satisfied percentage; a contradiction overrides them all.
    """
    if rules is None:
        rules = active_rules(state)

    if find_contradictions(rules):
        return MSG_CONTRADICTION

    if len(state.text) == 0:
        return MSG_START

    percent = progress_percent(len(state.satisfied), len(rules))
    if percent == 100:
        return MSG_ALL_SATISFIED
    if percent >= 80:
        return MSG_GREAT
    if percent >= 50:
        return MSG_GOOD
    if percent >= 20:
        return MSG_TRICKY
    return MSG_HARD


def build_view(state: GameState, notice: str | None = None) -> GameView:
    """
    Build the full view of a state.

    A notice (surprise rule, victory) replaces the status message
    until the next input.
    """
    rules = active_rules(state)
    contradiction = len(find_contradictions(rules)) > 0

    return GameView(
        text=state.text,
        rules=[
            RuleView(
                rule_id=r.rule_id,
                text=r.text,
                level=r.level,
                status=rule_status(r, state, contradiction),
            )
            for r in rules
        ],
        satisfied_count=len(state.satisfied),
        total_count=len(rules),
        difficulty=difficulty_name(rules),
        progress=progress_percent(len(state.satisfied), len(rules)),
        submit_enabled=not state.is_over and is_submit_enabled(state),
        status_message=notice or status_message(state, rules),
        contradiction=contradiction,
        game_over=state.is_over,
        catalog_size=len(state.catalog),
    )
