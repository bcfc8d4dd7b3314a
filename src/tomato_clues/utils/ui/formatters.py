"""Output formatters for the CLI."""

from typing import Any

from rich.table import Table

from .console import get_console

console = get_console()


def format_time(seconds: float) -> str:
    """Render seconds as MM:SS; negatives clamp to zero."""
    s = max(0, int(seconds))
    return f"{s // 60:02d}:{s % 60:02d}"


def get_progress_bar(fraction: float, width: int = 40) -> str:
    """Text progress bar for a 0..1 fraction."""
    fraction = max(0.0, min(1.0, fraction))
    filled = int(width * fraction)
    return "▓" * filled + "░" * (width - filled)


def format_dict_table(data: dict[str, Any], title: str | None = None) -> None:
    """Display a flat mapping as a two-column table."""
    table = Table(title=title, show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        formatted_key = key.replace("_", " ").title()
        table.add_row(formatted_key, "—" if value is None else str(value))
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[error]Error:[/error] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[success]Success:[/success] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[warning]Warning:[/warning] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[info]Info:[/info] {message}")
