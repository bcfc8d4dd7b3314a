"""Tests for configuration management."""

import json

import pytest
from pydantic import ValidationError

from tomato_clues.config import Config, ConfigManager, get_config_manager


@pytest.fixture()
def manager():
    return ConfigManager()


class TestDefaults:
    def test_default_values(self, manager):
        config = manager.config
        assert config.focus.namespace == "tomato-clues"
        assert config.focus.tick_interval == 0.25
        assert config.focus.adjust_step == 30
        assert config.ui.refresh_per_second == 4
        assert config.ui.screen is True

    def test_config_dir_created(self, manager):
        assert manager.config_dir.is_dir()

    def test_corrupted_file_gives_defaults(self, manager):
        manager.config_file.write_text("{nope")
        assert manager.load_config() == Config()

    def test_invalid_values_give_defaults(self, manager):
        manager.config_file.write_text(json.dumps({"focus": {"tick_interval": -3}}))
        assert manager.load_config() == Config()


class TestGetSet:
    def test_get_dotted(self, manager):
        assert manager.get("ui.refresh_per_second") == 4

    def test_get_unknown(self, manager):
        assert manager.get("ui.missing") is None
        assert manager.get("focus.tick_interval.deeper") is None

    def test_set_persists(self, manager):
        manager.set("focus.adjust_step", 45)
        assert json.loads(manager.config_file.read_text())["focus"]["adjust_step"] == 45
        assert ConfigManager().get("focus.adjust_step") == 45

    def test_set_unknown_key(self, manager):
        with pytest.raises(KeyError):
            manager.set("focus.unknown", 1)

    def test_set_invalid_value(self, manager):
        with pytest.raises(ValidationError):
            manager.set("ui.refresh_per_second", 0)
        assert manager.get("ui.refresh_per_second") == 4


class TestReset:
    def test_reset_key(self, manager):
        manager.set("focus.namespace", "other")
        manager.reset("focus.namespace")
        assert manager.get("focus.namespace") == "tomato-clues"

    def test_reset_all(self, manager):
        manager.set("ui.screen", False)
        manager.set("focus.adjust_step", 10)
        manager.reset()
        assert manager.config == Config()


class TestProfiles:
    def test_profile_file_name(self):
        assert ConfigManager("work").config_file.name == "work.json"

    def test_global_manager_is_cached(self):
        assert get_config_manager() is get_config_manager()

    def test_global_manager_switches_profile(self):
        assert get_config_manager("work").profile == "work"
        assert get_config_manager().profile == "default"


def test_config_keys_lists_every_setting():
    assert ConfigManager().keys() == [
        "focus.namespace",
        "focus.tick_interval",
        "focus.adjust_step",
        "ui.refresh_per_second",
        "ui.screen",
    ]
