"""Rule-based plan suggestions for focus sessions."""

import math

from .plan import (
    DEEP_WORK_TAGS,
    LIGHT_TAGS,
    Plan,
    SessionHistory,
    SliderState,
    Task,
    clamp,
    normalize_rating,
    normalize_tag,
)

FOCUS_MINUTES_MIN = 5
FOCUS_MINUTES_MAX = 18
MICRO_BREAK_MIN = 20
MICRO_BREAK_MAX = 90
PULSES_PER_SET_MIN = 3
PULSES_PER_SET_MAX = 6

RATIONALE_SEPARATOR = " · "

TAG_PHRASES = {
    "coding": "Deep build",
    "writing": "Generate words",
    "study": "Active recall",
    "admin": "Quick admin sweep",
    "chores": "Momentum burst",
}
DEFAULT_TAG_PHRASE = "Momentum pulse"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class PlanSuggestionEngine:
    """Derive a Plan from task metadata, slider state and session history.

    The engine is deterministic and holds no mutable state.
    """

    def _get_base_focus_minutes(self, tag: str) -> int:
        """Baseline pulse length by tag category."""
        if tag in DEEP_WORK_TAGS:
            return 12
        if tag in LIGHT_TAGS:
            return 7
        return 8

    def _get_focus_seconds(self, tag: str, energy: int, distraction: int) -> int:
        minutes = self._get_base_focus_minutes(tag)
        minutes += round_half_away((energy - 3) * 1.5)
        minutes -= round_half_away((distraction - 3) * 1.0)
        minutes = clamp(minutes, FOCUS_MINUTES_MIN, FOCUS_MINUTES_MAX)
        return int(minutes) * 60

    def _get_micro_break_seconds(self, distraction: int) -> int:
        return int(clamp(40 + (distraction - 3) * 10, MICRO_BREAK_MIN, MICRO_BREAK_MAX))

    def _get_macro_break_seconds(self, energy: int) -> int:
        minutes = 6 if energy >= 4 else 8
        return minutes * 60

    def _get_pulses_per_set(self, tag: str, history: SessionHistory | None) -> int:
        """Deep-work tags get longer sets; a full repeat of the same tag grows it."""
        pulses = 4 if tag in DEEP_WORK_TAGS else 3
        last = history.last_session if history else None
        if last and last.tag == tag and last.completed_pulses >= pulses:
            pulses = clamp(pulses + 1, PULSES_PER_SET_MIN, PULSES_PER_SET_MAX)
        return int(pulses)

    def make_rationale(
        self, task: Task | None, energy: int, distraction: int, tag: str
    ) -> str:
        """Human-readable reason for the suggested plan."""
        parts = []
        if task and task.title:
            parts.append(f"Focus on “{task.title}”")
        parts.append(f"Energy {energy}/5, distraction {distraction}/5")
        parts.append(TAG_PHRASES.get(tag, DEFAULT_TAG_PHRASE))
        return RATIONALE_SEPARATOR.join(parts)

    def suggest(
        self,
        task: Task | None,
        sliders: SliderState | None = None,
        history: SessionHistory | None = None,
    ) -> Plan:
        """
        Suggest a plan for the given task.

        Args:
            task: Task to plan for; ``None`` plans a generic pulse.
            sliders: Current energy/distraction ratings; unset values count as 3.
            history: Last-session summary used to grow the set size.

        Returns:
            A fully-populated Plan. Inputs are defaulted, never rejected.
        """
        energy = normalize_rating(sliders.energy if sliders else None)
        distraction = normalize_rating(sliders.distraction if sliders else None)
        tag = normalize_tag(task.tag if task else None)

        return Plan(
            focus_seconds=self._get_focus_seconds(tag, energy, distraction),
            micro_break_seconds=self._get_micro_break_seconds(distraction),
            macro_break_seconds=self._get_macro_break_seconds(energy),
            pulses_per_set=self._get_pulses_per_set(tag, history),
            tag=tag,
            rationale=self.make_rationale(task, energy, distraction, tag),
        )
