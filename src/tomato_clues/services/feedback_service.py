"""Audible feedback for phase events."""

from typing import Literal

from rich.console import Console

from tomato_clues.utils.logger import get_logger

logger = get_logger("feedback")

FeedbackKind = Literal["chime", "tick"]

# Terminal bells per kind
_BELLS = {"chime": 2, "tick": 1}


class FeedbackService:
    """Fire-and-forget notifications through the terminal bell."""

    def __init__(self, console: Console | None = None, enabled: bool = True):
        self.console = console or Console()
        self.enabled = enabled

    def set_enabled(self, flag: bool) -> None:
        self.enabled = bool(flag)

    def notify(self, kind: FeedbackKind) -> None:
        """Ring for kind. Never raises."""
        if not self.enabled:
            return
        try:
            for _ in range(_BELLS.get(kind, 1)):
                self.console.bell()
        except Exception as e:
            logger.warning("feedback %s failed: %s", kind, e)
