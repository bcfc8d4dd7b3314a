"""Tests for key bindings."""

from unittest.mock import patch

import pytest

from tomato_clues.models.focus.keyboard import KeyboardHandler, key_to_action


@pytest.mark.parametrize(
    "key, action",
    [
        (" ", "toggle"),
        ("p", "toggle"),
        ("P", "toggle"),
        ("n", "skip"),
        ("+", "plus"),
        ("=", "plus"),
        ("-", "minus"),
        ("d", "theme"),
        ("s", "sound"),
        ("q", "quit"),
    ],
)
def test_bound_keys(key, action):
    assert key_to_action(key) == action


@pytest.mark.parametrize("key", [None, "", "x", "\n"])
def test_unbound_keys_ignored(key):
    assert key_to_action(key) is None


def test_handler_without_terminal_reads_nothing():
    with patch.object(KeyboardHandler, "_setup"):
        handler = KeyboardHandler()
    assert handler.read_action() is None
    handler.stop()
