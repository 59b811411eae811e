# src/chat_app/models/user.py
"""SQLAlchemy models for chat users."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chat_app.db.session import Base
from chat_app.db.time import utcnow
from chat_app.utils.ids import OBJECT_ID_HEX_LENGTH, new_object_id


class PresenceStatus(str, enum.Enum):
    """Known presence values; the column accepts other strings as well."""

    ONLINE = "online"
    OFFLINE = "offline"
    IDLE = "idle"
    DO_NOT_DISTURB = "dnd"


class User(Base):
    """Registered chat user.

    Credential columns are populated by registration and must never be
    serialized by the profile endpoints.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_HEX_LENGTH),
        primary_key=True,
        default=new_object_id,
    )
    username: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), unique=True, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_status: Mapped[str | None] = mapped_column(String(128), nullable=True)
    profile_picture: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=PresenceStatus.OFFLINE.value,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
