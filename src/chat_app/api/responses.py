"""Uniform response envelope.

Every response body is ``{"status": "success" | "error", "message"?: str,
<payload>?}``. Success bodies are built with :func:`success`; errors are
produced by the exception handlers installed by
:func:`register_exception_handlers`.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_app.services.errors import ChatAppError, InvalidPayload

__all__ = ["error_response", "register_exception_handlers", "success"]

logger = logging.getLogger(__name__)


def success(message: str | None = None, **payload: Any) -> dict[str, Any]:
    """Build a success envelope carrying ``payload`` keys."""
    body: dict[str, Any] = {"status": "success"}
    if message is not None:
        body["message"] = message
    body.update(jsonable_encoder(payload))
    return body


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    """Build an error envelope response."""
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
        headers=headers,
    )


async def chat_app_error_handler(request: Request, exc: ChatAppError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Request validation failed for %s: %s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, InvalidPayload.default_message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing exception handlers on ``app``."""
    app.add_exception_handler(ChatAppError, chat_app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
