"""Data access helpers for working with users."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from chat_app.models.user import PresenceStatus, User
from chat_app.services.errors import PersistenceFailure, UsernameTaken

from .base import BaseRepository

__all__ = ["UserRepository"]

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    """Thin wrapper around database access for user entities."""

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self._read(
            "find user",
            lambda: self.session.execute(select(User).where(User.id == user_id)).scalars().first(),
        )

    def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Return the users matching ``user_ids`` keyed by id.

        Ids with no matching user are absent from the result.
        """
        wanted = set(user_ids)
        if not wanted:
            return {}

        def query() -> dict[str, User]:
            users = self.session.execute(select(User).where(User.id.in_(wanted))).scalars()
            return {user.id: user for user in users}

        return self._read("find users by id", query)

    def list_by_presence(self, presence: str = PresenceStatus.ONLINE.value) -> list[User]:
        """Return users whose presence status equals ``presence``."""
        return self._read(
            "list users by presence",
            lambda: list(
                self.session.execute(
                    select(User).where(User.status == presence).order_by(User.username)
                ).scalars()
            ),
        )

    def set_field(self, user_id: str, field: str, value: str) -> bool:
        """Set a single column on one user.

        Returns:
            True if a user matched ``user_id``.

        Raises:
            UsernameTaken: If the new value violates the username unique constraint.
            PersistenceFailure: If the database rejects the update.
        """
        column = getattr(User, field)
        stmt = update(User).where(User.id == user_id).values({column: value})
        try:
            result = self.session.execute(stmt)
        except IntegrityError as exc:
            self.session.rollback()
            if field == "username":
                logger.info("Username %r already in use", value)
                raise UsernameTaken() from exc
            logger.error("Database write update user %s failed", field, exc_info=True)
            raise PersistenceFailure() from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Database write update user %s failed", field, exc_info=True)
            raise PersistenceFailure() from exc
        # rowcount is "rows matched" on SQLite and PostgreSQL but "rows changed"
        # on MySQL, so a zero count is confirmed with a lookup.
        matched = result.rowcount > 0 or self._exists(user_id)
        self._commit(f"update user {field}")
        return matched

    def _exists(self, user_id: str) -> bool:
        return self._read(
            "check user exists",
            lambda: self.session.execute(select(User.id).where(User.id == user_id)).first() is not None,
        )
