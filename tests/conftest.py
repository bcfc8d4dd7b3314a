"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and to
drive the phase scheduler deterministically.
"""

from __future__ import annotations

import logging
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from tomato_clues.models.focus.plan import Plan
from tomato_clues.models.focus.scheduler import PhaseScheduler


# ---------------------------------------------------------------------------
# Deterministic time
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTimers:
    """Stand-in for ``loop.call_later`` that runs callbacks on demand."""

    def __init__(self):
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def run_pending(self) -> int:
        """Fire every pending callback once; returns how many ran."""
        due = self.pending()
        self.handles = []
        for handle in due:
            handle.callback()
        return len(due)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def timers():
    return ManualTimers()


@pytest.fixture()
def plan():
    return Plan(
        focus_seconds=300,
        micro_break_seconds=40,
        macro_break_seconds=480,
        pulses_per_set=4,
        tag="coding",
        rationale="Deep build",
    )


@pytest.fixture()
def events():
    return []


@pytest.fixture()
def scheduler(clock, events):
    """Manually ticked scheduler recording every event."""
    s = PhaseScheduler(clock=clock)
    s.subscribe(events.append)
    return s


@pytest.fixture()
def feedback():
    return MagicMock()


@pytest.fixture()
def today():
    return date(2024, 1, 2)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path):
    """Point platformdirs lookups at tmp_path and reset module singletons."""
    import tomato_clues.config as config_mod
    import tomato_clues.utils.logger as logger_mod

    tmpdir = str(tmp_path / "dirs")
    config_mod._config_manager = None
    _reset_logging(logger_mod)

    with patch("tomato_clues.config.user_config_dir", return_value=tmpdir), patch(
        "tomato_clues.services.storage_service.user_data_dir", return_value=tmpdir
    ), patch("tomato_clues.utils.logger.user_log_dir", return_value=tmpdir):
        logger_mod.get_logger()
        yield tmp_path

    config_mod._config_manager = None
    _reset_logging(logger_mod)


def _reset_logging(logger_mod):
    """Drop the app file handler so the next get_logger() rebuilds it."""
    logger_mod._logger = None
    app_logger = logging.getLogger("tomato_clues")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
