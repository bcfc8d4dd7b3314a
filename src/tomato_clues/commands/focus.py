"""Focus mode commands: tasks, sliders, plan suggestions and live sessions."""

import asyncio

import typer
from rich.table import Table

from tomato_clues.config import get_config_manager
from tomato_clues.models.focus.plan import TAGS
from tomato_clues.models.focus.scheduler import PhaseScheduler
from tomato_clues.models.focus.ui import TimerDisplay, show_summary
from tomato_clues.services.feedback_service import FeedbackService
from tomato_clues.services.session_service import SessionCoordinator
from tomato_clues.services.storage_service import StorageService
from tomato_clues.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from tomato_clues.utils.ui.console import get_console
from tomato_clues.utils.ui.formatters import format_dict_table, format_info, format_success

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Focus pulses with adaptive plans")
tasks_app = typer.Typer(help="Manage focus tasks")
app.add_typer(tasks_app, name="tasks")


def get_coordinator(scheduler: PhaseScheduler | None = None) -> SessionCoordinator:
    """Build a coordinator over the configured storage namespace."""
    config = get_config_manager().config
    storage = StorageService(config.focus.namespace)
    return SessionCoordinator(
        storage,
        feedback=FeedbackService(console),
        scheduler=scheduler,
    )


def _validate_tag(tag: str | None) -> str | None:
    if tag is not None and tag not in TAGS:
        raise AppError(
            f"Unknown tag '{tag}'. Choose one of: {', '.join(TAGS)}",
            exit_code=ERROR_INVALID_ARGS,
        )
    return tag


def _find_task_or_fail(coordinator: SessionCoordinator, task_id: str):
    task = coordinator.find_task(task_id)
    if task is None:
        raise AppError(f"Task '{task_id}' not found", exit_code=ERROR_NOT_FOUND)
    return task


@tasks_app.command("add")
@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    tag: str | None = typer.Option(None, "--tag", "-t", help=f"One of: {', '.join(TAGS)}"),
) -> None:
    """Add a task and propose a plan for it."""
    coordinator = get_coordinator()
    task = coordinator.add_task(title, _validate_tag(tag))
    if task is None:
        raise AppError("Task title cannot be empty", exit_code=ERROR_INVALID_ARGS)

    format_success(f"Added '{task.title}' (#{task.id[:8]})")
    console.print(coordinator.state.plan.summary())


@tasks_app.command("list")
@command_wrapper
def list_tasks() -> None:
    """List tasks, newest first."""
    coordinator = get_coordinator()
    tasks = coordinator.state.tasks
    if not tasks:
        console.print("[yellow]No tasks yet[/yellow]")
        return

    table = Table(title=f"Tasks ({len(tasks)})", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Tag")
    table.add_column("Energy", justify="right")
    table.add_column("Distraction", justify="right")
    for task in tasks:
        table.add_row(
            task.id[:8], task.title, task.tag, str(task.energy), str(task.distraction)
        )
    console.print(table)


@tasks_app.command("delete")
@command_wrapper
def delete_task(task_id: str = typer.Argument(..., help="Task ID or unique prefix")) -> None:
    """Delete a task."""
    coordinator = get_coordinator()
    if not coordinator.delete_task(task_id):
        raise AppError(f"Task '{task_id}' not found", exit_code=ERROR_NOT_FOUND)
    format_success(f"Deleted task {task_id}")


@app.command("sliders")
@command_wrapper
def set_sliders(
    energy: int | None = typer.Option(None, "--energy", "-e", min=1, max=5, clamp=True),
    distraction: int | None = typer.Option(
        None, "--distraction", "-x", min=1, max=5, clamp=True
    ),
) -> None:
    """Show or update the energy and distraction sliders."""
    coordinator = get_coordinator()
    if energy is not None or distraction is not None:
        coordinator.set_sliders(energy, distraction)
    sliders = coordinator.state.sliders
    console.print(f"Energy {sliders.energy}/5, distraction {sliders.distraction}/5")


@app.command("intent")
@command_wrapper
def set_intent(text: str = typer.Argument(..., help="What this session is for")) -> None:
    """Set the free-text intent shown during sessions."""
    coordinator = get_coordinator()
    coordinator.set_intent(text)
    format_success("Intent saved")


@app.command("suggest")
@command_wrapper
def suggest_plan(
    task_id: str | None = typer.Argument(None, help="Task ID; defaults to the newest task"),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Tag for a generic pulse"),
) -> None:
    """Propose a plan from the task, sliders and history."""
    coordinator = get_coordinator()
    if tag:
        coordinator.select_tag(_validate_tag(tag))
    task = _find_task_or_fail(coordinator, task_id) if task_id else None
    plan = coordinator.propose_plan(task)
    console.print(plan.summary())


@app.command("start")
@command_wrapper
async def start_session(
    task_id: str | None = typer.Option(None, "--task", "-t", help="Plan for this task first"),
) -> None:
    """Start a live focus session on the current plan."""
    config = get_config_manager().config
    loop = asyncio.get_running_loop()
    scheduler = PhaseScheduler(
        call_later=loop.call_later, tick_interval=config.focus.tick_interval
    )
    coordinator = get_coordinator(scheduler)

    if task_id:
        coordinator.propose_plan(_find_task_or_fail(coordinator, task_id))
    elif coordinator.state.plan is None:
        coordinator.propose_plan()
    coordinator.accept_plan()

    display = TimerDisplay(
        console,
        refresh_per_second=config.ui.refresh_per_second,
        screen=config.ui.screen,
        adjust_step=config.focus.adjust_step,
    )
    result = await display.run_session(coordinator)
    if result == "interrupted":
        format_info("Session interrupted")
    show_summary(coordinator.state.stats, console)


@app.command("stats")
@command_wrapper
def show_stats() -> None:
    """Show points, streak and completed pulses."""
    coordinator = get_coordinator()
    show_summary(coordinator.state.stats, console)


@app.command("settings")
@command_wrapper
def settings(
    toggle_theme: bool = typer.Option(False, "--toggle-theme", help="Switch dark/light"),
    toggle_sound: bool = typer.Option(False, "--toggle-sound", help="Switch sound on/off"),
) -> None:
    """Show or toggle theme and sound settings."""
    coordinator = get_coordinator()
    if toggle_theme:
        coordinator.toggle_theme()
    if toggle_sound:
        coordinator.toggle_sound()
    current = coordinator.state.settings
    format_dict_table(
        {"theme": "dark" if current.dark else "light", "sound": "on" if current.sound else "off"},
        title="Settings",
    )
