"""Domain errors raised by the services and persistence gateway.

Each error carries the HTTP status and the public message the response
formatter puts into the error envelope. Messages are generic; internal details
travel in the exception chain and the logs only.
"""
from __future__ import annotations

from fastapi import status

__all__ = [
    "ChatAppError",
    "InvalidPayload",
    "InvalidUserId",
    "MalformedRecord",
    "NotFound",
    "PersistenceFailure",
    "UsernameTaken",
]


class ChatAppError(Exception):
    """Base class for errors that map onto the response envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidPayload(ChatAppError):
    """The request body is not valid JSON or misses required fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class InvalidUserId(ChatAppError):
    """A user identifier is not in object id format."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid user ID"


class NotFound(ChatAppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class UsernameTaken(ChatAppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Username already taken"


class PersistenceFailure(ChatAppError):
    """The database was unreachable or rejected the operation."""

    default_message = "Database operation failed"


class MalformedRecord(ChatAppError):
    """A stored record could not be decoded into its view.

    Raised by the message enrichment step when a joined row misses its sender
    or carries a field of the wrong type.
    """

    default_message = "Failed to fetch messages"

    def __init__(self, message: str | None = None, *, record_id: object = None, reason: str = "") -> None:
        super().__init__(message)
        self.record_id = record_id
        self.reason = reason
