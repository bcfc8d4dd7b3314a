"""Namespaced key/value storage backed by JSON files."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from tomato_clues.utils.logger import get_logger

logger = get_logger("storage")

_KEY_PATTERN = re.compile(r"[^A-Za-z0-9_.-]")


class StorageService:
    """Best-effort persistent store.

    Reads fall back to a default on any missing or unreadable value and writes
    never raise, so a broken data directory can't interrupt a session.
    """

    def __init__(self, namespace: str, data_dir: Path | None = None):
        """Initialize storage for a namespace."""
        if data_dir is None:
            data_dir = Path(user_data_dir("tomato_clues"))

        self.namespace = namespace
        self.storage_dir = data_dir / namespace

    def _path(self, key: str) -> Path:
        return self.storage_dir / f"{_KEY_PATTERN.sub('_', key)}.json"

    def get(self, key: str, fallback: Any = None) -> Any:
        """Return the stored value for key, or fallback."""
        path = self._path(key)
        if not path.exists():
            return fallback

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("could not read %s:%s (%s)", self.namespace, key, e)
            return fallback

    def set(self, key: str, value: Any) -> None:
        """Persist value under key. Failures are logged and dropped."""
        path = self._path(key)
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(value, indent=2)
            with open(path, "w", encoding="utf-8") as f:
                f.write(payload)
            path.chmod(0o600)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("could not write %s:%s (%s)", self.namespace, key, e)

    def delete(self, key: str) -> None:
        """Remove a stored key if present."""
        path = self._path(key)
        try:
            if path.exists():
                path.unlink()
        except OSError as e:
            logger.warning("could not delete %s:%s (%s)", self.namespace, key, e)
