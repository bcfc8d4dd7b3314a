"""Focus mode - planner, phase scheduler and session UI."""

from .events import Lifecycle, PhaseStart, SchedulerEvent, Tick
from .plan import LastSession, Plan, SessionHistory, SliderState, Task
from .planner import PlanSuggestionEngine
from .scheduler import PhaseScheduler, SchedulerState
from .stats import FocusStats

__all__ = [
    "Task",
    "SliderState",
    "LastSession",
    "SessionHistory",
    "Plan",
    "PlanSuggestionEngine",
    "PhaseScheduler",
    "SchedulerState",
    "SchedulerEvent",
    "Tick",
    "PhaseStart",
    "Lifecycle",
    "FocusStats",
]
