"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers. Settings are
loaded inside create_app() so tests can set env (and clear the get_settings
cache) before the app is built.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accounts.api.v1.router import api_router
from accounts.core.config import get_settings
from accounts.core.exception_handlers import register_exception_handlers
from accounts.core.lifespan import create_lifespan
from accounts.core.limiter import limiter
from accounts.middleware import RequestIDMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter

    register_exception_handlers(app)

    # First added = innermost; the request id wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            o.strip() for o in settings.allowed_origins.split(",") if o.strip()
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
