"""ASGI middleware."""

from accounts.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
