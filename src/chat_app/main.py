# src/chat_app/main.py
"""Main entry point for the chat application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from chat_app.api import messages_router, profiles_router, system_router
from chat_app.api.responses import register_exception_handlers
from chat_app.core.logging_config import configure_logging
from chat_app.core.settings import Settings, settings
from chat_app.db.session import create_tables
from chat_app.services.validation import PayloadValidator

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the FastAPI application."""
    configure_logging(app_settings.log_level)

    application = FastAPI(
        title=app_settings.app_name,
        description="Messaging and profile backend for a chat application",
        version=app_settings.app_version,
        debug=app_settings.debug,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )
    application.add_middleware(GZipMiddleware)

    register_exception_handlers(application)
    application.state.validator = PayloadValidator()

    application.include_router(system_router)
    application.include_router(messages_router)
    application.include_router(profiles_router)

    @application.on_event("startup")
    async def on_startup() -> None:
        if app_settings.auto_create_tables:
            create_tables()
            logger.info("Database tables ensured")
        logger.info("%s %s started", app_settings.app_name, app_settings.app_version)

    return application


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("chat_app.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
