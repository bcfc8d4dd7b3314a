"""Tests for the config commands."""

import json

from typer.testing import CliRunner

from tomato_clues.commands.config import _parse_value, app
from tomato_clues.config import get_config_manager

runner = CliRunner()


class TestParseValue:
    def test_bool(self):
        assert _parse_value("True") is True
        assert _parse_value("false") is False

    def test_numbers(self):
        assert _parse_value("12") == 12
        assert _parse_value("0.5") == 0.5

    def test_string(self):
        assert _parse_value("work") == "work"


class TestView:
    def test_view_prints_json(self):
        result = runner.invoke(app, ["view"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["focus"]["tick_interval"] == 0.25
        assert data["ui"]["refresh_per_second"] == 4


class TestGet:
    def test_get_value(self):
        result = runner.invoke(app, ["get", "focus.tick_interval"])
        assert result.exit_code == 0
        assert "0.25" in result.output

    def test_get_unknown_key(self):
        result = runner.invoke(app, ["get", "focus.nope"])
        assert result.exit_code == 5


class TestSet:
    def test_set_then_get(self):
        result = runner.invoke(app, ["set", "focus.adjust_step", "60"])
        assert result.exit_code == 0
        assert get_config_manager().get("focus.adjust_step") == 60

        result = runner.invoke(app, ["get", "focus.adjust_step"])
        assert "60" in result.output

    def test_set_unknown_key(self):
        result = runner.invoke(app, ["set", "focus.nope", "1"])
        assert result.exit_code == 5
        assert "focus.adjust_step" in " ".join(result.output.split())

    def test_set_invalid_value(self):
        result = runner.invoke(app, ["set", "focus.tick_interval", "-1"])
        assert result.exit_code == 2
        assert "Invalid value" in result.output
        assert get_config_manager().get("focus.tick_interval") == 0.25

    def test_set_bool(self):
        result = runner.invoke(app, ["set", "ui.screen", "false"])
        assert result.exit_code == 0
        assert get_config_manager().get("ui.screen") is False


class TestReset:
    def test_reset_key(self):
        runner.invoke(app, ["set", "focus.adjust_step", "60"])
        result = runner.invoke(app, ["reset", "focus.adjust_step", "-y"])
        assert result.exit_code == 0
        assert get_config_manager().get("focus.adjust_step") == 30

    def test_reset_all(self):
        runner.invoke(app, ["set", "ui.refresh_per_second", "10"])
        result = runner.invoke(app, ["reset", "--yes"])
        assert result.exit_code == 0
        assert get_config_manager().get("ui.refresh_per_second") == 4

    def test_reset_cancelled(self):
        runner.invoke(app, ["set", "focus.adjust_step", "60"])
        result = runner.invoke(app, ["reset"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert get_config_manager().get("focus.adjust_step") == 60
