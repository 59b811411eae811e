"""HTTP API layer."""

from .endpoints import messages_router, profiles_router, system_router

__all__ = ["messages_router", "profiles_router", "system_router"]
