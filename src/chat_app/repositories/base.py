"""Shared plumbing for the persistence gateway."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from chat_app.services.errors import PersistenceFailure

__all__ = ["BaseRepository"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository:
    """Session holder with retry and error translation helpers."""

    def __init__(self, session: Session, read_retries: int = 0) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy session bound to the current request.
            read_retries: Extra attempts for reads failing with a transient
                ``OperationalError``.
        """
        self.session = session
        self.read_retries = read_retries

    def _read(self, operation: str, query: Callable[[], T]) -> T:
        """Run a read, retrying transient failures.

        Raises:
            PersistenceFailure: If every attempt fails or a non-transient
                database error occurs.
        """
        attempts = self.read_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return query()
            except OperationalError as exc:
                self.session.rollback()
                if attempt < attempts:
                    logger.warning(
                        "Transient database error during %s (attempt %d/%d): %s",
                        operation,
                        attempt,
                        attempts,
                        exc,
                    )
                    continue
                logger.error("Database read %s failed", operation, exc_info=True)
                raise PersistenceFailure() from exc
            except SQLAlchemyError as exc:
                self.session.rollback()
                logger.error("Database read %s failed", operation, exc_info=True)
                raise PersistenceFailure() from exc
        raise AssertionError("unreachable")  # pragma: no cover

    def _commit(self, operation: str) -> None:
        """Commit the current unit of work, rolling back on failure.

        Raises:
            PersistenceFailure: If the database rejects the commit.
        """
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Database write %s failed", operation, exc_info=True)
            raise PersistenceFailure() from exc
