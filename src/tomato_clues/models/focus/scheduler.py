"""Phase scheduler: focus pulse -> micro-break; after a full set -> macro-break."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from tomato_clues.utils.logger import get_logger

from .events import Lifecycle, Phase, PhaseStart, SchedulerEvent, Tick
from .plan import Plan, clamp

logger = get_logger("scheduler")

ADJUST_TOTAL_MIN = 10
ADJUST_TOTAL_MAX = 3600
DEFAULT_PULSES_PER_SET = 4
DEFAULT_TICK_INTERVAL = 0.25

Listener = Callable[[SchedulerEvent], None]


class TimerHandle(Protocol):
    """Anything with ``cancel()``, e.g. ``asyncio.TimerHandle``."""

    def cancel(self) -> Any: ...


CallLater = Callable[[float, Callable[[], None]], TimerHandle]


@dataclass(frozen=True)
class SchedulerState:
    """Read-only snapshot of the scheduler."""

    phase: Phase = "idle"
    remaining_seconds: int = 0
    total_seconds: int = 0
    pulses_done: int = 0
    paused: bool = False
    anchor: float = 0.0


class PhaseScheduler:
    """Drive a session through focus/micro/macro phases.

    Remaining time is recomputed from a monotonic clock on every tick instead
    of being decremented, so late or missed ticks catch up without drift.

    Args:
        clock: Monotonic time source in seconds.
        call_later: ``call_later(delay, callback) -> handle`` used to schedule
            the next tick (``loop.call_later`` works). When omitted the owner
            calls :meth:`tick` itself.
        tick_interval: Delay between scheduled ticks in seconds.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        call_later: CallLater | None = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ):
        self._clock = clock
        self._call_later = call_later
        self.tick_interval = tick_interval
        self._listeners: list[Listener] = []
        self._plan: Plan | None = None
        self._handle: TimerHandle | None = None
        self._clear()

    def _clear(self) -> None:
        self._phase: Phase = "idle"
        self._remaining = 0
        self._total = 0
        self._pulses_done = 0
        self._paused = False
        self._anchor = 0.0
        # Remaining seconds at the last anchor; elapsed time counts down from here.
        self._anchor_remaining = 0

    # -- observers -----------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Register a listener for Tick, PhaseStart and Lifecycle events."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: SchedulerEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("listener failed on %s", type(event).__name__)

    # -- read-only views -----------------------------------------------------

    @property
    def plan(self) -> Plan | None:
        return self._plan

    @property
    def state(self) -> SchedulerState:
        return SchedulerState(
            phase=self._phase,
            remaining_seconds=self._remaining,
            total_seconds=self._total,
            pulses_done=self._pulses_done,
            paused=self._paused,
            anchor=self._anchor,
        )

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def paused(self) -> bool:
        return self._paused

    # -- tick loop -----------------------------------------------------------

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        if self._call_later is not None:
            self._handle = self._call_later(self.tick_interval, self.tick)

    def _reanchor(self) -> None:
        self._anchor = self._clock()
        self._anchor_remaining = self._remaining

    def tick(self) -> None:
        """Sample the clock, emit a Tick and advance when the phase runs out."""
        self._handle = None
        if self._paused or self._phase == "idle":
            return

        elapsed = int(self._clock() - self._anchor)
        self._remaining = max(0, self._anchor_remaining - elapsed)
        self._emit(
            Tick(self._phase, self._remaining, self._total, self._pulses_done)
        )
        if self._remaining <= 0:
            self._advance()
            return
        self._schedule_tick()

    # -- commands ------------------------------------------------------------

    def configure(self, plan: Plan) -> None:
        """Use plan for every phase entered from now on."""
        self._plan = plan
        logger.debug("configured plan: %s", plan)

    def start_focus(self) -> None:
        """Enter a focus phase. No-op until a plan is configured."""
        if self._plan is None:
            return
        self._set_phase("focus", self._plan.focus_seconds)

    def _set_phase(self, phase: Phase, seconds: int) -> None:
        self._phase = phase
        self._total = seconds
        self._remaining = seconds
        self._paused = False
        self._reanchor()
        logger.debug("phase %s (%ss), pulses=%s", phase, seconds, self._pulses_done)
        self._emit(PhaseStart(phase, seconds, self._pulses_done))
        self._schedule_tick()

    def pause(self) -> None:
        """Freeze the running phase."""
        if self._phase == "idle" or self._paused:
            return
        self._paused = True
        self._cancel_tick()

    def resume(self) -> None:
        """Continue from the remaining time; the phase length restarts from here."""
        if self._phase == "idle":
            return
        self._paused = False
        if self._remaining <= 0:
            self._advance()
            return
        self._total = self._remaining
        self._reanchor()
        self._schedule_tick()

    def adjust(self, delta_seconds: int) -> None:
        """Lengthen or shorten the current phase by delta_seconds."""
        if self._phase == "idle":
            return
        self._total = int(clamp(self._total + delta_seconds, ADJUST_TOTAL_MIN, ADJUST_TOTAL_MAX))
        self._remaining = int(clamp(self._remaining + delta_seconds, 0, self._total))
        self._reanchor()

    def skip(self) -> None:
        """Complete the current phase immediately."""
        if self._phase == "idle":
            return
        self._advance(skipped=True)

    def reset(self) -> None:
        """Return to idle. The configured plan is kept."""
        self._cancel_tick()
        self._clear()

    def _advance(self, skipped: bool = False) -> None:
        self._cancel_tick()
        plan = self._plan
        if self._phase == "focus":
            self._pulses_done += 1
            per_set = plan.pulses_per_set or DEFAULT_PULSES_PER_SET
            set_completed = self._pulses_done % per_set == 0
            self._emit(
                Lifecycle("pulse_complete", skipped=skipped, pulses_done=self._pulses_done)
            )
            if set_completed:
                self._set_phase("macro", plan.macro_break_seconds)
            else:
                self._set_phase("micro", plan.micro_break_seconds)
        elif self._phase in ("micro", "macro"):
            self._emit(Lifecycle(f"{self._phase}_complete", skipped=skipped))
            self.start_focus()
