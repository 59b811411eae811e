# src/chat_app/models/message.py
"""Models describing chat messages."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chat_app.db.session import Base
from chat_app.db.time import utcnow
from chat_app.utils.ids import OBJECT_ID_HEX_LENGTH, new_object_id


class Message(Base):
    """A message posted to the shared chat.

    ``sender_id`` references ``users.id`` by value only; the reference is not
    enforced so the read path has to cope with senders that no longer resolve.
    """

    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_created_at_id", "created_at", "id"),)

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_HEX_LENGTH),
        primary_key=True,
        default=new_object_id,
    )
    sender_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
