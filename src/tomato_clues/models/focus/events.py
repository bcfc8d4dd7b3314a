"""Events emitted by the phase scheduler."""

from dataclasses import dataclass
from typing import Literal, Union

Phase = Literal["idle", "focus", "micro", "macro"]
LifecycleType = Literal["pulse_complete", "micro_complete", "macro_complete"]


@dataclass(frozen=True)
class Tick:
    """Clock sample while a phase is running."""

    phase: Phase
    remaining_seconds: int
    total_seconds: int
    pulses_done: int


@dataclass(frozen=True)
class PhaseStart:
    """A phase was entered."""

    phase: Phase
    total_seconds: int
    pulses_done: int


@dataclass(frozen=True)
class Lifecycle:
    """A phase completed, naturally or by skip."""

    type: LifecycleType
    skipped: bool = False
    pulses_done: int | None = None


SchedulerEvent = Union[Tick, PhaseStart, Lifecycle]
