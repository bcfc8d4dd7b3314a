"""Main entry point for tomato-clues."""

import typer

from tomato_clues import __version__
from tomato_clues.commands import config, focus
from tomato_clues.utils.ui.console import get_console

app = typer.Typer(
    name="tomato",
    help="Adaptive focus pulses: plans tuned to your energy, run in the terminal",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(focus.app, name="focus", help="Focus tasks, plans and sessions")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]tomato-clues[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
