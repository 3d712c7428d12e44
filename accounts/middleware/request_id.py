"""Request ID middleware.

Forwards a safe client-supplied request id or generates one, exposes it to
handlers as request.state.request_id and echoes it on the response. Raw ASGI
so streaming responses are untouched.
"""

import re
import uuid
from typing import Callable

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"^[a-zA-Z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def _header_value(scope: dict, name: str) -> str | None:
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return raw when it is safe to log verbatim, else a fresh UUID4."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.match(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app so every HTTP request carries a request id."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header_value(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_name.lower().encode(), request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_with_request_id)

    return asgi_app
