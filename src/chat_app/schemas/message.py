# src/chat_app/schemas/message.py
"""Message-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SendMessageRequest(BaseModel):
    """Schema for posting a new message."""

    content: str = Field(..., min_length=1, description="Message text")
    channel_id: str | None = Field(
        None,
        description="Accepted for client compatibility; messages are not scoped by channel",
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Reject content made only of whitespace."""
        if not v.strip():
            raise ValueError("Content must not be blank")
        return v


class SentMessage(BaseModel):
    """Identifiers of a freshly stored message."""

    message_id: str
    created_at: datetime


class MessageUser(BaseModel):
    """Public identity of a message sender."""

    id: str
    username: str
    profile_picture: str | None = None


class MessageView(BaseModel):
    """A message enriched with its sender's public identity."""

    id: str
    sender_id: str
    me: bool
    created_at: datetime
    content: str
    user: MessageUser

    model_config = ConfigDict(frozen=True)
