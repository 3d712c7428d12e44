"""Core: configuration, lifespan, exception handlers, rate limiting."""

from accounts.core.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
