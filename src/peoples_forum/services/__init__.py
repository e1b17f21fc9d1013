# src/peoples_forum/services/__init__.py
"""Business logic services for the People's Forum application."""

from .moderation import ModerationCoordinator, ResolutionResult
from .ranking import FeedMode, parse_feed_mode
from .user_service import RegistrationResult

__all__ = [
    "FeedMode",
    "ModerationCoordinator",
    "RegistrationResult",
    "ResolutionResult",
    "parse_feed_mode",
]
