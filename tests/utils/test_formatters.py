"""Tests for output formatters."""

import pytest

from tomato_clues.utils.ui import formatters
from tomato_clues.utils.ui.formatters import format_time, get_progress_bar


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00"), (59, "00:59"), (60, "01:00"), (720, "12:00"), (3600, "60:00"), (-5, "00:00"), (90.9, "01:30")],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_progress_bar_bounds():
    assert get_progress_bar(0, width=10) == "░" * 10
    assert get_progress_bar(1, width=10) == "▓" * 10
    assert get_progress_bar(1.7, width=10) == "▓" * 10
    assert get_progress_bar(-1, width=10) == "░" * 10


def test_progress_bar_partial():
    bar = get_progress_bar(0.5, width=10)
    assert bar == "▓" * 5 + "░" * 5


def test_messages_are_prefixed(capsys):
    formatters.format_error("boom")
    formatters.format_success("done")
    formatters.format_warning("careful")
    formatters.format_info("fyi")
    out = capsys.readouterr().out
    assert "Error: boom" in out
    assert "Success: done" in out
    assert "Warning: careful" in out
    assert "Info: fyi" in out


def test_dict_table(capsys):
    formatters.format_dict_table({"adjust_step": 30, "missing": None}, title="Settings")
    out = capsys.readouterr().out
    assert "Adjust Step" in out
    assert "30" in out
    assert "—" in out
