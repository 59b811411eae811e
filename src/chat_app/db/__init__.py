# src/chat_app/db/__init__.py
"""Database configuration and utilities."""

from .session import get_db

__all__ = ["get_db"]
