"""Request payload validation.

``PayloadValidator`` keeps no state between calls, so a single instance is
built when the application is created and shared by every request.
"""
from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from chat_app.services.errors import InvalidPayload

__all__ = ["PayloadValidator"]

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PayloadValidator:
    """Decode raw JSON request bodies into Pydantic models."""

    def parse(self, model: type[ModelT], raw: bytes | str) -> ModelT:
        """Validate ``raw`` as JSON against ``model``.

        Args:
            model: Target schema.
            raw: Request body as received.

        Returns:
            The validated model instance.

        Raises:
            InvalidPayload: If the body is not JSON, is not an object, or
                fails schema validation.
        """
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            logger.debug(
                "Rejected %s payload: %s",
                model.__name__,
                exc.errors(include_url=False, include_input=False),
            )
            raise InvalidPayload() from exc
