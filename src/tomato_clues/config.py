"""Configuration for tomato-clues.

Settings are grouped by concern (``focus``, ``ui``) and addressed with dotted
keys such as ``focus.adjust_step``. Each profile is one JSON file in the
platform config directory.
"""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field

from tomato_clues.utils.logger import get_logger

logger = get_logger("config")


class FocusConfig(BaseModel):
    """How sessions are stored and driven."""

    namespace: str = Field(default="tomato-clues", min_length=1)
    tick_interval: float = Field(default=0.25, gt=0, le=5)
    adjust_step: int = Field(default=30, gt=0, le=600)


class UIConfig(BaseModel):
    """Live session display."""

    refresh_per_second: int = Field(default=4, gt=0, le=30)
    screen: bool = Field(default=True)


class Config(BaseModel):
    focus: FocusConfig = Field(default_factory=FocusConfig)
    ui: UIConfig = Field(default_factory=UIConfig)


def config_keys(model: BaseModel, prefix: str = "") -> list[str]:
    """Every dotted leaf key of model, e.g. ``ui.screen``."""
    keys = []
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            keys.extend(config_keys(value, f"{prefix}{name}."))
        else:
            keys.append(f"{prefix}{name}")
    return keys


class ConfigManager:
    """Loads, edits and saves one configuration profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("tomato_clues"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Read the profile; a missing, unreadable or invalid file gives defaults."""
        if not self.config_file.exists():
            return Config()
        try:
            with open(self.config_file, encoding="utf-8") as f:
                return Config.model_validate(json.load(f))
        except (OSError, ValueError) as e:
            # ValidationError is a ValueError
            logger.warning("ignoring config %s: %s", self.config_file, e)
            return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        config = config or self.config
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def keys(self) -> list[str]:
        return config_keys(self.config)

    def get(self, key: str) -> Any:
        """Value at a dotted key, or None when the key is unknown."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Validate and store value at key.

        Raises:
            KeyError: if key is not one of :meth:`keys`.
            ValidationError: if value is out of range for key.
        """
        if key not in self.keys():
            raise KeyError(key)

        section, field = key.split(".", 1)
        data = self.config.model_dump()
        data[section][field] = value
        self._config = Config.model_validate(data)
        self.save_config()
        logger.info("config %s set to %r", key, value)

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one key, or the whole profile, to defaults."""
        if key is None:
            self._config = Config()
        elif key in self.keys():
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    @staticmethod
    def get_from_config(config: Config, key: str) -> Any:
        value: Any = config
        for part in key.split("."):
            if not isinstance(value, BaseModel):
                return None
            value = getattr(value, part, None)
        return value


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Shared manager for profile, replaced when the profile changes."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
