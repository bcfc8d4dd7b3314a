"""Full-screen session UI for focus mode."""

import asyncio

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from tomato_clues.utils.ui.console import TOMATO_THEME
from tomato_clues.utils.ui.formatters import format_time, get_progress_bar

from .keyboard import Action, KeyboardHandler
from .stats import FocusStats

PHASE_LABELS = {
    "focus": "Focus",
    "micro": "Micro break",
    "macro": "Macro break",
    "idle": "Idle",
}
PHASE_COLORS = {
    phase: str(TOMATO_THEME.styles[f"phase.{phase}"]) for phase in ("focus", "micro", "macro", "idle")
}
PAUSED_COLOR = str(TOMATO_THEME.styles["phase.paused"])
EVENT_LINES = 5


class TimerDisplay:
    """Renders a session and runs the interactive loop."""

    def __init__(
        self,
        console: Console | None = None,
        refresh_per_second: int = 4,
        screen: bool = True,
        adjust_step: int = 30,
    ):
        self.console = console or Console()
        self.refresh_per_second = refresh_per_second
        self.screen = screen
        self.adjust_step = adjust_step

    def create_layout(self, coordinator) -> Layout:
        """Create the session layout from the coordinator's current state."""
        state = coordinator.scheduler.state
        dark = coordinator.state.settings.dark

        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        if state.paused:
            title, color = "PAUSED", PAUSED_COLOR
        else:
            title, color = PHASE_LABELS[state.phase], PHASE_COLORS[state.phase]
        if not dark and color == "dim":
            color = "black"

        header = Text(f"🍅  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header, vertical="middle"))

        layout["body"].update(
            Align.center(self._create_body_content(coordinator), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer_text(state.phase, state.paused), vertical="middle")
        )
        return layout

    def _create_body_content(self, coordinator) -> Group:
        state = coordinator.scheduler.state
        components = []

        if coordinator.state.intent:
            components.append(Text(coordinator.state.intent[:60], style="italic", justify="center"))
            components.append(Text(""))

        if state.paused:
            timer_color = PAUSED_COLOR
        elif state.phase == "focus" and state.remaining_seconds < 60:
            timer_color = "red"
        else:
            timer_color = PHASE_COLORS[state.phase]
        components.append(
            Text(format_time(state.remaining_seconds), style=f"bold {timer_color}", justify="center")
        )

        fraction = (
            1 - state.remaining_seconds / state.total_seconds if state.total_seconds > 0 else 0
        )
        components.append(
            Text(f"{get_progress_bar(fraction)}  {int(fraction * 100)}%", style="dim", justify="center")
        )
        components.append(Text(f"{state.pulses_done} pulses", justify="center"))

        plan = coordinator.scheduler.plan or coordinator.state.plan
        if plan:
            components.append(Text(""))
            components.append(Text(plan.summary(), style="dim", justify="center"))

        if coordinator.last_reward:
            components.append(Text(coordinator.last_reward, style="bold green", justify="center"))

        events = list(coordinator.event_log)[:EVENT_LINES]
        if events:
            components.append(Text(""))
            for line in events:
                components.append(Text(f"· {line}", style="dim", justify="center"))

        return Group(*components)

    def _create_footer_text(self, phase: str, paused: bool) -> Text:
        if phase == "idle":
            first = "space start"
        elif paused:
            first = "space resume"
        else:
            first = "space pause"
        hints = f"{first}  •  n skip  •  +/- {self.adjust_step}s  •  d theme  •  s sound  •  q quit"
        return Text(hints, style="dim", justify="center")

    def apply_action(self, coordinator, action: Action) -> None:
        """Dispatch a key action to the coordinator."""
        if action == "toggle":
            coordinator.start_or_toggle()
        elif action == "skip":
            coordinator.skip()
        elif action == "plus":
            coordinator.adjust(self.adjust_step)
        elif action == "minus":
            coordinator.adjust(-self.adjust_step)
        elif action == "theme":
            coordinator.toggle_theme()
        elif action == "sound":
            coordinator.toggle_sound()

    async def run_session(self, coordinator, keyboard: KeyboardHandler | None = None) -> str:
        """
        Run the interactive session until the user quits.

        The scheduler ticks on the running event loop; this loop only polls
        keys and redraws. Returns 'stopped' or 'interrupted'.
        """
        keyboard = keyboard or KeyboardHandler()
        interval = 1 / self.refresh_per_second

        try:
            with Live(
                self.create_layout(coordinator),
                console=self.console,
                refresh_per_second=self.refresh_per_second,
                screen=self.screen,
            ) as live:
                while True:
                    action = keyboard.read_action()
                    if action == "quit":
                        return "stopped"
                    if action:
                        self.apply_action(coordinator, action)

                    live.update(self.create_layout(coordinator))
                    await asyncio.sleep(interval)

        except (KeyboardInterrupt, asyncio.CancelledError):
            return "interrupted"
        finally:
            keyboard.stop()
            coordinator.reset()
            coordinator.save()


def show_summary(stats: FocusStats, console: Console | None = None):
    """Show points, streak and pulse totals."""
    console = console or Console()

    last = stats.last_session
    last_line = (
        f"{last.tag} · {last.completed_pulses} pulses" if last and last.tag else "none yet"
    )
    panel = Panel(
        f"""[bold green]🍅 Focus stats[/bold green]

Points: {stats.points}
Streak: {stats.streak} day(s)
Completed pulses: {stats.pulses}
Last session: {last_line}""",
        border_style="green",
        padding=(1, 2),
    )

    console.print(panel)
