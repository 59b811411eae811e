"""Persistence gateway for the users and messages tables."""

from .message_repo import MessageRepository
from .user_repo import UserRepository

__all__ = ["MessageRepository", "UserRepository"]
