"""Message sending and listing.

Listing enriches each stored message with the public identity of its sender.
The enrichment runs either as a database-side outer join or as a batched
lookup of the distinct sender ids; both feed the same typed decode step, which
turns a row that cannot be resolved into ``MalformedRecord`` instead of
letting a bad record take the request down.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from chat_app.db.time import ensure_utc, utcnow
from chat_app.repositories import MessageRepository, UserRepository
from chat_app.schemas.message import MessageUser, MessageView, SendMessageRequest, SentMessage
from chat_app.services.errors import MalformedRecord, PersistenceFailure
from chat_app.utils.ids import new_object_id, parse_object_id

__all__ = ["MessageService", "decode_message_row", "normalize_sender_id"]

logger = logging.getLogger(__name__)

JoinStrategy = Literal["database", "batched"]
MalformedPolicy = Literal["skip", "fail"]


def normalize_sender_id(raw: str) -> str:
    """Return the canonical form of a token subject used as ``sender_id``.

    Object ids are lowercased so they join against ``users.id``; any other
    subject is kept verbatim.
    """
    try:
        return parse_object_id(raw)
    except ValueError:
        return raw


def _field(row: Mapping[str, Any], key: str, expected: type | tuple[type, ...]) -> Any:
    value = row.get(key)
    if not isinstance(value, expected):
        raise MalformedRecord(
            record_id=row.get("id"),
            reason=f"{key} is {type(value).__name__}",
        )
    return value


def decode_message_row(row: Mapping[str, Any], requester_id: str) -> MessageView:
    """Decode one joined message row into a view.

    ``row`` carries the message columns (``id``, ``sender_id``, ``content``,
    ``created_at``) and the sender columns prefixed with ``user_``. A missing
    sender shows up as ``user_id`` being None.

    Raises:
        MalformedRecord: If any field is absent or of the wrong type.
    """
    message_id = _field(row, "id", str)
    sender_id = _field(row, "sender_id", str)
    content = _field(row, "content", str)
    created_at = _field(row, "created_at", datetime)
    if row.get("user_id") is None:
        raise MalformedRecord(record_id=message_id, reason=f"sender {sender_id} not found")
    user = MessageUser(
        id=_field(row, "user_id", str),
        username=_field(row, "user_username", str),
        profile_picture=_field(row, "user_profile_picture", (str, type(None))),
    )
    return MessageView(
        id=message_id,
        sender_id=sender_id,
        me=sender_id == requester_id,
        created_at=ensure_utc(created_at),
        content=content,
        user=user,
    )


class MessageService:
    """Send messages and list them with sender identity attached."""

    def __init__(
        self,
        messages: MessageRepository,
        users: UserRepository,
        *,
        limit: int = 100,
        join_strategy: JoinStrategy = "database",
        malformed_policy: MalformedPolicy = "skip",
    ) -> None:
        self.messages = messages
        self.users = users
        self.limit = limit
        self.join_strategy = join_strategy
        self.malformed_policy = malformed_policy

    def send_message(self, requester_id: str, payload: SendMessageRequest) -> SentMessage:
        """Persist a message from ``requester_id``.

        ``payload.channel_id`` is not stored; all messages share one stream.

        Raises:
            PersistenceFailure: If the insert fails.
        """
        sender_id = normalize_sender_id(requester_id)
        if payload.channel_id is not None:
            logger.debug("Ignoring channel_id %r on message from %s", payload.channel_id, sender_id)
        message_id = new_object_id()
        created_at = utcnow()
        try:
            self.messages.insert(
                message_id=message_id,
                sender_id=sender_id,
                content=payload.content,
                created_at=created_at,
            )
        except PersistenceFailure as exc:
            raise PersistenceFailure("Failed to send message") from exc
        logger.info("Stored message %s from %s", message_id, sender_id)
        return SentMessage(message_id=message_id, created_at=created_at)

    def list_messages(self, requester_id: str) -> list[MessageView]:
        """Return up to ``limit`` most recent messages, oldest first.

        Raises:
            PersistenceFailure: If the query fails.
            MalformedRecord: If a row cannot be decoded and the policy is ``fail``.
        """
        try:
            rows = self._fetch_rows()
        except PersistenceFailure as exc:
            raise PersistenceFailure("Failed to fetch messages") from exc

        me = normalize_sender_id(requester_id)
        views: list[MessageView] = []
        for row in rows:
            try:
                views.append(decode_message_row(row, me))
            except MalformedRecord as exc:
                if self.malformed_policy == "fail":
                    logger.error("Malformed message %s: %s", exc.record_id, exc.reason)
                    raise
                logger.warning("Skipping malformed message %s: %s", exc.record_id, exc.reason)
        return views

    def _fetch_rows(self) -> list[Mapping[str, Any]]:
        if self.join_strategy == "database":
            return self.messages.list_recent_with_senders(self.limit)

        messages = self.messages.list_recent(self.limit)
        senders = self.users.get_many(message.sender_id for message in messages)
        rows: list[Mapping[str, Any]] = []
        for message in messages:
            sender = senders.get(message.sender_id)
            rows.append(
                {
                    "id": message.id,
                    "sender_id": message.sender_id,
                    "content": message.content,
                    "created_at": message.created_at,
                    "user_id": sender.id if sender else None,
                    "user_username": sender.username if sender else None,
                    "user_profile_picture": sender.profile_picture if sender else None,
                }
            )
        return rows
