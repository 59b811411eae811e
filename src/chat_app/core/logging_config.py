"""Logging setup for the chat backend."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    """Apply the configured level to the root logger.

    Unknown level names fall back to INFO so a typo in the environment does not
    prevent the service from starting.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("chat_app").setLevel(resolved)
