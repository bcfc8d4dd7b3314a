"""File logging for tomato-clues.

Every module logs through a ``tomato_clues.*`` logger. The first call to
:func:`get_logger` attaches one rotating file handler to the ``tomato_clues``
parent, so scheduler, storage and command records all land in ``tomato.log``
under the platform log directory. Nothing is written to the terminal, which
belongs to the live session display.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_ROOT = "tomato_clues"
_LOG_FILE = "tomato.log"
_MAX_BYTES = 2 * 1024 * 1024
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file() -> Path:
    return Path(user_log_dir(_ROOT)) / _LOG_FILE


class _LogFileHandler(logging.handlers.RotatingFileHandler):
    """Rotating handler that creates its directory when the first record arrives."""

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


def _file_handler(path: Path) -> logging.Handler:
    handler = _LogFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8", delay=True
    )
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or its ``name`` child.

    The file handler is installed once per process and opens the log file
    on the first record.
    """
    global _logger
    if _logger is None:
        root = logging.getLogger(_ROOT)
        root.setLevel(logging.DEBUG)
        root.propagate = False
        if not root.handlers:
            root.addHandler(_file_handler(log_file()))
        _logger = root

    return _logger.getChild(name) if name else _logger
