"""Tests for the application logger utility."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

import tomato_clues.utils.logger as logger_mod
from tomato_clues.models.focus.plan import Plan
from tomato_clues.models.focus.scheduler import PhaseScheduler
from tomato_clues.utils.logger import get_logger, log_file


@pytest.fixture(autouse=True)
def reset_logger():
    """Start each test without the handler installed by the shared fixture."""
    logger_mod._logger = None
    app_logger = logging.getLogger("tomato_clues")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    yield


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_log_file_created_on_first_record(tmp_path):
    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()
        assert not (tmp_path / "tomato.log").exists()
        logger.info("first")
        _flush(logger)

    assert (tmp_path / "tomato.log").exists()
    assert isinstance(logger, logging.Logger)


def test_get_logger_returns_singleton(tmp_path):
    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert get_logger() is get_logger()


def test_named_logger_is_a_child(tmp_path):
    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert get_logger("commands").name == "tomato_clues.commands"


def test_named_logger_reaches_the_file(tmp_path):
    """A child logger alone installs the file handler."""
    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(tmp_path)):
        get_logger("scheduler").warning("late tick")
        _flush(get_logger())

    content = (tmp_path / "tomato.log").read_text()
    assert "late tick" in content
    assert "[tomato_clues.scheduler]" in content


def test_scheduler_records_reach_the_file(tmp_path):
    def boom(event):
        raise RuntimeError("listener exploded")

    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(tmp_path)):
        get_logger()
        scheduler = PhaseScheduler(clock=lambda: 0.0)
        scheduler.subscribe(boom)
        scheduler.configure(Plan(300, 40, 480, 4))
        scheduler.start_focus()
        _flush(get_logger())

    content = (tmp_path / "tomato.log").read_text()
    assert "listener failed on PhaseStart" in content
    assert "listener exploded" in content


def test_get_logger_creates_parent_dirs(tmp_path):
    nested = tmp_path / "a" / "b" / "c"
    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(nested)):
        get_logger().info("hello")

    assert nested.is_dir()


def test_logger_does_not_propagate(tmp_path):
    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert get_logger().propagate is False


def test_log_file_location(tmp_path):
    with patch("tomato_clues.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert log_file() == tmp_path / "tomato.log"
