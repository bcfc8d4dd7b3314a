"""Shared rich console with the tomato-clues theme."""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

TOMATO_THEME = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "phase.focus": "cyan",
        "phase.micro": "green",
        "phase.macro": "magenta",
        "phase.idle": "dim",
        "phase.paused": "yellow",
    }
)


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Console used by every command, so tests can capture one stream."""
    return Console(highlight=highlight, theme=TOMATO_THEME)
