"""Configuration management commands."""

from typing import Optional

import typer
from pydantic import ValidationError

from tomato_clues.config import get_config_manager
from tomato_clues.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from tomato_clues.utils.ui.console import get_console
from tomato_clues.utils.ui.formatters import format_error, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def _parse_value(value: str) -> str | int | float | bool:
    """Convert a CLI string to bool/int/float where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _unknown_key_message(key: str, known: list[str]) -> str:
    return f"Configuration key '{key}' not found. Known keys: {', '.join(known)}"


@app.command("view")
@command_wrapper
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """View current configuration."""
    config_manager = get_config_manager(profile)
    console.print_json(data=config_manager.config.model_dump())


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., focus.tick_interval)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    manager = get_config_manager(profile)
    value = manager.get(key)
    if value is None:
        raise AppError(_unknown_key_message(key, manager.keys()), exit_code=ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., focus.adjust_step)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    manager = get_config_manager(profile)
    parsed_value = _parse_value(value)
    try:
        manager.set(key, parsed_value)
    except KeyError as e:
        raise AppError(_unknown_key_message(key, manager.keys()), exit_code=ERROR_NOT_FOUND) from e
    except ValidationError as e:
        raise AppError(
            f"Invalid value for '{key}': {e.errors()[0]['msg']}",
            exit_code=ERROR_INVALID_ARGS,
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(0)

    get_config_manager(profile).reset(key)
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
