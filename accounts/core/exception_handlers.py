"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Domain errors are mapped to
HTTP status by their code alone; every response uses the same envelope:
{"error": ..., "code": ..., "fieldErrors"?: [...], "details"?: {...}}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from accounts.domain.enums import DomainErrorCode
from accounts.domain.exceptions import DomainError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

_STATUS_BY_CODE: dict[DomainErrorCode, int] = {
    DomainErrorCode.VALIDATION: 400,
    DomainErrorCode.AUTHENTICATION: 401,
    DomainErrorCode.AUTHORIZATION: 403,
    DomainErrorCode.NOT_FOUND: 404,
    DomainErrorCode.CONFLICT: 409,
    DomainErrorCode.SYSTEM: 500,
}

_CODE_BY_STATUS: dict[int, DomainErrorCode] = {
    400: DomainErrorCode.VALIDATION,
    401: DomainErrorCode.AUTHENTICATION,
    403: DomainErrorCode.AUTHORIZATION,
    404: DomainErrorCode.NOT_FOUND,
    409: DomainErrorCode.CONFLICT,
}


def status_for_code(code: DomainErrorCode) -> int:
    """Return the HTTP status for a domain error code (500 when unmapped)."""
    return _STATUS_BY_CODE.get(code, 500)


def code_for_status(status_code: int) -> DomainErrorCode:
    """Derive a domain error code from a framework HTTP status."""
    if status_code in _CODE_BY_STATUS:
        return _CODE_BY_STATUS[status_code]
    if status_code >= 500:
        return DomainErrorCode.SYSTEM
    return DomainErrorCode.VALIDATION


def _system_error_body() -> dict[str, Any]:
    return {"error": INTERNAL_ERROR_MESSAGE, "code": DomainErrorCode.SYSTEM.value}


def _domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return exc.to_dict() with the status mapped from exc.code."""
    status = status_for_code(exc.code)
    if status >= 500:
        logger.error(
            "System error on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return JSONResponse(status_code=status, content=_system_error_body())
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 VALIDATION with one field error per pydantic error."""
    field_errors = []
    for error in exc.errors():
        location = [
            str(part)
            for part in error.get("loc", ())
            if part not in ("body", "query", "path")
        ]
        field_errors.append(
            {
                "field": ".".join(location) or "body",
                "message": error.get("msg", "Invalid value"),
            }
        )
    return JSONResponse(
        status_code=400,
        content={
            "error": "Request validation failed",
            "code": DomainErrorCode.VALIDATION.value,
            "fieldErrors": field_errors,
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the envelope for Starlette HTTP exceptions, keeping their status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": str(exc.detail),
            "code": code_for_status(exc.status_code).value,
        },
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_exception_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return 429 in the envelope, with the limiter's rate-limit headers."""
    response = JSONResponse(
        status_code=429,
        content={
            "error": f"Rate limit exceeded: {exc.detail}",
            "code": code_for_status(429).value,
        },
    )
    return request.app.state.limiter._inject_headers(
        response, request.state.view_rate_limit
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 SYSTEM; details only go to the log."""
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content=_system_error_body())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: DomainError (and subclasses),
    RequestValidationError, RateLimitExceeded, StarletteHTTPException,
    generic Exception.
    """
    app.add_exception_handler(DomainError, _domain_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
