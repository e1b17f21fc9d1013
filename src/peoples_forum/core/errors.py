"""Typed failures surfaced by the forum core.

Each error carries the HTTP status and the short machine-readable reason the
route layer renders; the message is safe to show to clients.
"""

from __future__ import annotations

from fastapi import status


class ForumError(Exception):
    """Base class for every failure the API reports to clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    reason: str = "internal_error"
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ForumError):
    """Absent, malformed, badly signed or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    reason = "unauthorized"
    default_message = "Could not validate credentials"


class Forbidden(ForumError):
    """Valid credential without the required role or ownership."""

    status_code = status.HTTP_403_FORBIDDEN
    reason = "forbidden"
    default_message = "Forbidden"


class NotFound(ForumError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    reason = "not_found"
    default_message = "Not found"

    @classmethod
    def for_entity(cls, entity: str) -> NotFound:
        """Build the error for a named entity type, e.g. ``Post not found``."""
        return cls(f"{entity} not found")


class Conflict(ForumError):
    """A write collided with an existing unique record."""

    status_code = status.HTTP_409_CONFLICT
    reason = "conflict"
    default_message = "Conflict"


class StoreUnavailable(ForumError):
    """The store could not be reached or a transaction could not commit."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    reason = "store_unavailable"
    default_message = "Store unavailable"
