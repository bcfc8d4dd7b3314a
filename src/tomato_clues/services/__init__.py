"""Services module for tomato-clues - collaborators around the focus core."""

from .feedback_service import FeedbackService
from .session_service import AppState, SessionCoordinator, Settings
from .storage_service import StorageService

__all__ = [
    "StorageService",
    "FeedbackService",
    "SessionCoordinator",
    "AppState",
    "Settings",
]
