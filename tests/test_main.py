"""Tests for the top-level CLI."""

from typer.testing import CliRunner

from tomato_clues import __version__
from tomato_clues.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_subcommands_registered():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "focus" in result.output
    assert "config" in result.output


def test_focus_round_trip():
    result = runner.invoke(app, ["focus", "tasks", "add", "Write tests", "--tag", "coding"])
    assert result.exit_code == 0

    result = runner.invoke(app, ["focus", "tasks", "list"])
    assert "Write tests" in result.output
