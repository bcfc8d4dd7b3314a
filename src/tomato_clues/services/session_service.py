"""Session coordination: application state, plans, rewards and persistence.

The coordinator owns the application state, asks the planner for plans,
feeds them to the phase scheduler and reacts to scheduler events by
updating points and streaks, ringing feedback and persisting everything
through the storage service.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from pydantic import BaseModel, Field, ValidationError

from tomato_clues.models.focus.events import Lifecycle, PhaseStart, SchedulerEvent, Tick
from tomato_clues.models.focus.plan import Plan, SliderState, Task, normalize_tag
from tomato_clues.models.focus.planner import PlanSuggestionEngine
from tomato_clues.models.focus.scheduler import PhaseScheduler
from tomato_clues.models.focus.stats import FocusStats
from tomato_clues.utils.logger import get_logger

from .feedback_service import FeedbackService
from .storage_service import StorageService

logger = get_logger("session")

EVENT_LOG_SIZE = 50
GENERIC_TASK_TITLE = "Generic pulse"

PHASE_START_MESSAGES = {
    "focus": "Focus pulse started",
    "micro": "Micro-break started",
    "macro": "Macro-break started",
}
LIFECYCLE_MESSAGES = {
    "pulse_complete": "Pulse completed",
    "micro_complete": "Micro-break complete",
    "macro_complete": "Macro-break complete",
}


class Settings(BaseModel):
    """User-facing settings."""

    dark: bool = Field(default=True)
    sound: bool = Field(default=True)


@dataclass
class AppState:
    """Everything the coordinator persists between runs."""

    tasks: list[Task] = field(default_factory=list)
    current_tag: str | None = None
    sliders: SliderState = field(default_factory=SliderState)
    plan: Plan | None = None
    stats: FocusStats = field(default_factory=FocusStats)
    settings: Settings = field(default_factory=Settings)
    intent: str = ""


def _load_tasks(raw) -> list[Task]:
    if not isinstance(raw, list):
        return []
    tasks = []
    for item in raw:
        try:
            tasks.append(Task.from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("dropping unreadable task record: %r", item)
    return tasks


def _load_sliders(raw) -> SliderState:
    if not isinstance(raw, dict):
        return SliderState()
    try:
        return SliderState.from_dict(raw)
    except (TypeError, ValueError):
        logger.warning("falling back to default sliders: %r", raw)
        return SliderState()


def _load_plan(raw) -> Plan | None:
    if not isinstance(raw, dict):
        return None
    try:
        return Plan.from_dict(raw)
    except (KeyError, TypeError, ValueError):
        logger.warning("dropping unreadable plan: %r", raw)
        return None


def _load_model(raw, model_cls):
    if raw is None:
        return model_cls()
    try:
        return model_cls.model_validate(raw)
    except ValidationError:
        logger.warning("falling back to default %s", model_cls.__name__)
        return model_cls()


def load_app_state(storage: StorageService) -> AppState:
    """Read application state, substituting defaults for anything unreadable."""
    intent = storage.get("intent", "")
    return AppState(
        tasks=_load_tasks(storage.get("tasks", [])),
        sliders=_load_sliders(storage.get("sliders", None)),
        plan=_load_plan(storage.get("plan", None)),
        stats=_load_model(storage.get("stats", None), FocusStats),
        settings=_load_model(storage.get("settings", None), Settings),
        intent=intent if isinstance(intent, str) else "",
    )


class SessionCoordinator:
    """Glue between the planner, the scheduler and persisted state."""

    def __init__(
        self,
        storage: StorageService,
        feedback: FeedbackService | None = None,
        scheduler: PhaseScheduler | None = None,
        planner: PlanSuggestionEngine | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.storage = storage
        self.state = load_app_state(storage)
        self.feedback = feedback or FeedbackService()
        self.feedback.set_enabled(self.state.settings.sound)
        self.scheduler = scheduler or PhaseScheduler()
        self.planner = planner or PlanSuggestionEngine()
        self.today = today

        self.event_log: deque[str] = deque(maxlen=EVENT_LOG_SIZE)
        self.last_reward: str | None = None
        self._new_session = False
        self._last_minute_tick: int | None = None

        self.scheduler.subscribe(self.handle_event)

    def save(self) -> None:
        """Persist every state key."""
        state = self.state
        self.storage.set("tasks", [t.to_dict() for t in state.tasks])
        self.storage.set("sliders", state.sliders.to_dict())
        self.storage.set("plan", state.plan.to_dict() if state.plan else None)
        self.storage.set("stats", state.stats.model_dump(mode="json"))
        self.storage.set("settings", state.settings.model_dump())
        self.storage.set("intent", state.intent)

    def log_event(self, text: str) -> None:
        self.event_log.appendleft(text)
        logger.info(text)

    # -- tasks and inputs ----------------------------------------------------

    def add_task(self, title: str, tag: str | None = None) -> Task | None:
        """Add a task (newest first) and propose a plan for it."""
        title = (title or "").strip()
        if not title:
            return None

        task = Task.create(title, tag or self.state.current_tag, self.state.sliders)
        self.state.tasks.insert(0, task)
        self.save()
        self.propose_plan(task)
        self.feedback.notify("chime")
        return task

    def find_task(self, task_id: str) -> Task | None:
        """Find a task by full id or unique prefix."""
        matches = [t for t in self.state.tasks if t.id.startswith(task_id)]
        return matches[0] if len(matches) == 1 else None

    def delete_task(self, task_id: str) -> bool:
        task = self.find_task(task_id)
        if task is None:
            return False
        self.state.tasks.remove(task)
        self.save()
        return True

    def select_tag(self, tag: str) -> None:
        self.state.current_tag = normalize_tag(tag)

    def set_sliders(self, energy: int | None = None, distraction: int | None = None) -> None:
        sliders = self.state.sliders
        self.state.sliders = SliderState(
            energy=energy if energy is not None else sliders.energy,
            distraction=distraction if distraction is not None else sliders.distraction,
        )
        self.save()

    def set_intent(self, text: str) -> None:
        self.state.intent = text
        self.save()

    def toggle_theme(self) -> bool:
        self.state.settings.dark = not self.state.settings.dark
        self.save()
        return self.state.settings.dark

    def toggle_sound(self) -> bool:
        settings = self.state.settings
        settings.sound = not settings.sound
        self.save()
        self.feedback.set_enabled(settings.sound)
        self.feedback.notify("chime")
        return settings.sound

    # -- plans ---------------------------------------------------------------

    def _default_task(self) -> Task:
        if self.state.tasks:
            return self.state.tasks[0]
        sliders = self.state.sliders
        return Task(
            id="generic",
            title=GENERIC_TASK_TITLE,
            tag=normalize_tag(self.state.current_tag),
            energy=sliders.energy,
            distraction=sliders.distraction,
        )

    def propose_plan(self, task: Task | None = None) -> Plan:
        """Ask the planner for a plan and remember it as the current one."""
        task = task or self._default_task()
        plan = self.planner.suggest(task, self.state.sliders, self.state.stats.history())
        self.state.plan = plan
        self.save()
        logger.info("proposed plan: %s", plan.summary())
        return plan

    def accept_plan(self) -> bool:
        """Start a fresh session on the current plan."""
        if self.state.plan is None:
            return False
        self.scheduler.configure(self.state.plan)
        self.scheduler.reset()
        self._new_session = True
        self.scheduler.start_focus()
        return True

    # -- controls ------------------------------------------------------------

    def start_or_toggle(self) -> None:
        """Start when idle, otherwise toggle pause/resume."""
        scheduler = self.scheduler
        if scheduler.phase == "idle":
            if self.state.plan is None:
                self.propose_plan()
            scheduler.configure(self.state.plan)
            self._new_session = True
            scheduler.start_focus()
        elif scheduler.paused:
            scheduler.resume()
        else:
            scheduler.pause()

    def skip(self) -> None:
        self.scheduler.skip()

    def adjust(self, delta_seconds: int) -> None:
        self.scheduler.adjust(delta_seconds)

    def reset(self) -> None:
        self.scheduler.reset()

    # -- scheduler events ----------------------------------------------------

    def handle_event(self, event: SchedulerEvent) -> None:
        """React to scheduler events."""
        if isinstance(event, Tick):
            self._on_tick(event)
        elif isinstance(event, PhaseStart):
            self._on_phase_start(event)
        elif isinstance(event, Lifecycle):
            self._on_lifecycle(event)

    def _on_tick(self, event: Tick) -> None:
        remaining = event.remaining_seconds
        if event.phase != "focus" or remaining <= 0 or remaining % 60 != 0:
            return
        # Several ticks can sample the same second
        if self._last_minute_tick == remaining:
            return
        self._last_minute_tick = remaining
        self.feedback.notify("tick")

    def _on_phase_start(self, event: PhaseStart) -> None:
        self._last_minute_tick = None
        self.feedback.notify("chime")
        self.log_event(PHASE_START_MESSAGES[event.phase])

    def _on_lifecycle(self, event: Lifecycle) -> None:
        if event.type == "pulse_complete":
            plan = self.scheduler.plan
            tag = plan.tag if plan else "generic"
            self.last_reward = self.state.stats.reward_pulse(
                tag, self.today(), new_session=self._new_session
            )
            self._new_session = False
        self.log_event(LIFECYCLE_MESSAGES[event.type])
        self.save()
