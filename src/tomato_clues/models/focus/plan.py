"""Value types shared by the planner, the scheduler and the session coordinator."""

import uuid
from dataclasses import asdict, dataclass, field
from typing import Literal

Tag = Literal["coding", "writing", "study", "admin", "chores", "generic"]

TAGS: tuple[str, ...] = ("coding", "writing", "study", "admin", "chores", "generic")
DEEP_WORK_TAGS = frozenset({"coding", "writing", "study"})
LIGHT_TAGS = frozenset({"admin", "chores"})

RATING_MIN = 1
RATING_MAX = 5
DEFAULT_RATING = 3


def clamp(value: float, low: float, high: float):
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def normalize_tag(tag: str | None) -> str:
    """Map unknown or empty tags to ``generic``."""
    if tag in TAGS:
        return tag
    return "generic"


def normalize_rating(value: int | None) -> int:
    """Coerce a 1-5 rating; unset or zero falls back to the default."""
    if not value:
        return DEFAULT_RATING
    return int(clamp(int(value), RATING_MIN, RATING_MAX))


@dataclass
class SliderState:
    """Current energy and distraction ratings (1-5)."""

    energy: int = DEFAULT_RATING
    distraction: int = DEFAULT_RATING

    def __post_init__(self):
        self.energy = normalize_rating(self.energy)
        self.distraction = normalize_rating(self.distraction)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SliderState":
        return cls(
            energy=data.get("energy", DEFAULT_RATING),
            distraction=data.get("distraction", DEFAULT_RATING),
        )


@dataclass(frozen=True)
class Task:
    """A unit of work the user wants to focus on."""

    id: str
    title: str
    tag: str = "generic"
    energy: int = DEFAULT_RATING
    distraction: int = DEFAULT_RATING

    @classmethod
    def create(cls, title: str, tag: str | None, sliders: SliderState) -> "Task":
        """Create a task that snapshots the current slider values."""
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            tag=normalize_tag(tag),
            energy=sliders.energy,
            distraction=sliders.distraction,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            tag=normalize_tag(data.get("tag")),
            energy=normalize_rating(data.get("energy")),
            distraction=normalize_rating(data.get("distraction")),
        )


@dataclass
class LastSession:
    """Summary of the most recent session's set."""

    tag: str | None = None
    completed_pulses: int = 0


@dataclass
class SessionHistory:
    """History the planner consults when sizing a set."""

    last_session: LastSession | None = field(default=None)


@dataclass(frozen=True)
class Plan:
    """Durations and pulse grouping governing one session."""

    focus_seconds: int
    micro_break_seconds: int
    macro_break_seconds: int
    pulses_per_set: int
    tag: str = "generic"
    rationale: str = ""

    def summary(self) -> str:
        """One-line description shown when a plan is proposed."""
        return (
            f"{self.rationale} · Focus {round(self.focus_seconds / 60)}m, "
            f"micro {self.micro_break_seconds}s, "
            f"macro {round(self.macro_break_seconds / 60)}m, "
            f"{self.pulses_per_set} pulses"
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Plan":
        """Rebuild a stored plan.

        Raises:
            KeyError: a duration field is missing.
            TypeError, ValueError: a field is not a number, or a duration is
                not positive.
        """
        plan = cls(
            focus_seconds=int(data["focus_seconds"]),
            micro_break_seconds=int(data["micro_break_seconds"]),
            macro_break_seconds=int(data["macro_break_seconds"]),
            pulses_per_set=int(data["pulses_per_set"]),
            tag=normalize_tag(data.get("tag")),
            rationale=str(data.get("rationale", "")),
        )
        if min(plan.focus_seconds, plan.micro_break_seconds, plan.macro_break_seconds) <= 0:
            raise ValueError(f"plan durations must be positive: {data!r}")
        # 0 means "use the default set size"
        if plan.pulses_per_set < 0:
            raise ValueError(f"negative pulses_per_set: {data!r}")
        return plan
