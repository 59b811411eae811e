"""Data access helpers for working with messages."""
from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import select

from chat_app.models.message import Message
from chat_app.models.user import User

from .base import BaseRepository

__all__ = ["MessageRepository"]


class MessageRepository(BaseRepository):
    """Thin wrapper around database access for message entities."""

    def insert(self, *, message_id: str, sender_id: str, content: str, created_at: datetime) -> None:
        """Insert a new message with caller-supplied id and timestamp."""
        message = Message(id=message_id, sender_id=sender_id, content=content, created_at=created_at)
        self.session.add(message)
        self._commit("insert message")

    def list_recent(self, limit: int) -> list[Message]:
        """Return the latest ``limit`` messages, oldest first."""

        def query() -> list[Message]:
            stmt = (
                select(Message)
                .order_by(Message.created_at.desc(), Message.id.desc())
                .limit(limit)
            )
            return list(self.session.execute(stmt).scalars())

        messages = self._read("list messages", query)
        messages.reverse()
        return messages

    def list_recent_with_senders(self, limit: int) -> list[Mapping[str, Any]]:
        """Return the latest ``limit`` messages joined with their senders.

        The join is an outer join so that messages whose sender no longer
        exists still come back, with ``user_id`` set to None. Rows are
        ordered oldest first.
        """

        def query() -> list[Mapping[str, Any]]:
            stmt = (
                select(
                    Message.id,
                    Message.sender_id,
                    Message.content,
                    Message.created_at,
                    User.id.label("user_id"),
                    User.username.label("user_username"),
                    User.profile_picture.label("user_profile_picture"),
                )
                .select_from(Message)
                .outerjoin(User, User.id == Message.sender_id)
                .order_by(Message.created_at.desc(), Message.id.desc())
                .limit(limit)
            )
            return list(self.session.execute(stmt).mappings())

        rows = self._read("join messages with senders", query)
        rows.reverse()
        return rows
