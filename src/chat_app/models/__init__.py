# src/chat_app/models/__init__.py
"""SQLAlchemy models for the chat application."""

from .message import Message
from .user import PresenceStatus, User

__all__ = ["Message", "PresenceStatus", "User"]
