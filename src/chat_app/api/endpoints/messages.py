"""Message endpoints for the chat API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from chat_app.api.dependencies import (
    CurrentUserIdDep,
    MessageServiceDep,
    RawBodyDep,
    ValidatorDep,
)
from chat_app.api.responses import success
from chat_app.schemas.message import SendMessageRequest

router = APIRouter(tags=["messages"])


@router.post("/send_message")
def send_message(
    body: RawBodyDep,
    validator: ValidatorDep,
    current_user_id: CurrentUserIdDep,
    service: MessageServiceDep,
) -> dict[str, Any]:
    """Store a message from the authenticated user."""
    payload = validator.parse(SendMessageRequest, body)
    sent = service.send_message(current_user_id, payload)
    return success(
        "Message sent successfully",
        message_id=sent.message_id,
        at=sent.created_at,
    )


@router.get("/get_messages")
def get_messages(
    current_user_id: CurrentUserIdDep,
    service: MessageServiceDep,
) -> dict[str, Any]:
    """Return the most recent messages with their senders, oldest first."""
    return success(messages=service.list_messages(current_user_id))
