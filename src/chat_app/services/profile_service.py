"""Profile reads and mutations for chat users."""
from __future__ import annotations

import logging

from chat_app.models.user import PresenceStatus
from chat_app.repositories import UserRepository
from chat_app.schemas.profile import UserProfile
from chat_app.services.errors import InvalidUserId, NotFound, PersistenceFailure
from chat_app.utils.ids import parse_object_id

__all__ = ["ProfileService"]

logger = logging.getLogger(__name__)


def _user_id(raw: str) -> str:
    try:
        return parse_object_id(raw)
    except ValueError as exc:
        raise InvalidUserId() from exc


class ProfileService:
    """Service wrapper around the users table.

    Every read is projected onto ``UserProfile`` so credential columns never
    reach a caller.
    """

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    def change_username(self, requester_id: str, username: str) -> None:
        """Rename the requester.

        Raises:
            InvalidUserId: If ``requester_id`` is not an object id.
            NotFound: If no user has that id.
            UsernameTaken: If another user already owns ``username``.
            PersistenceFailure: If the update fails.
        """
        self._set(requester_id, "username", username, "Failed to change username")

    def change_status(self, requester_id: str, custom_status: str) -> None:
        """Replace the requester's custom status text."""
        self._set(requester_id, "custom_status", custom_status, "Failed to change status")

    def get_profile(self, user_id: str) -> UserProfile:
        """Return the public profile of ``user_id``.

        Raises:
            InvalidUserId: If ``user_id`` is not an object id.
            NotFound: If no user has that id.
        """
        parsed = _user_id(user_id)
        try:
            user = self.users.get_by_id(parsed)
        except PersistenceFailure as exc:
            raise PersistenceFailure("Failed to fetch user profile") from exc
        if user is None:
            raise NotFound()
        return UserProfile.model_validate(user)

    def list_online_users(self) -> list[UserProfile]:
        """Return every user whose presence is exactly ``online``."""
        try:
            users = self.users.list_by_presence(PresenceStatus.ONLINE.value)
        except PersistenceFailure as exc:
            raise PersistenceFailure("Failed to fetch online users") from exc
        return [UserProfile.model_validate(user) for user in users]

    def _set(self, requester_id: str, field: str, value: str, failure_message: str) -> None:
        parsed = _user_id(requester_id)
        try:
            matched = self.users.set_field(parsed, field, value)
        except PersistenceFailure as exc:
            raise PersistenceFailure(failure_message) from exc
        if not matched:
            raise NotFound()
        logger.info("Updated %s for user %s", field, parsed)
