"""
FastAPI server: user CRUD over the in-memory store.

create_app() builds the application: settings and store on app.state, user
routes, the middleware chain, and consistent JSON error bodies. The module
level `app` uses process-wide settings and store.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_management import __version__
from user_management.api_server.middleware import install_middleware
from user_management.api_server.routes import router as users_router
from user_management.config import Settings, get_settings
from user_management.database import InMemoryUserStore, get_user_store
from user_management.logging import get_logger

logger = get_logger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """One-line summary of the first request validation error (no input echo)."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"Invalid request: {loc}: {msg}" if loc else f"Invalid request: {msg}"


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON, non-object body, or non-integer path id -> 400."""
    detail = _describe_validation_error(exc)
    logger.info("request_validation_failed", method=request.method, path=request.url.path, detail=detail)
    return JSONResponse(status_code=400, content={"detail": detail})


def create_app(
    settings: Settings | None = None,
    store: InMemoryUserStore | None = None,
) -> FastAPI:
    """Build the FastAPI app. Defaults: get_settings() and the process-wide store."""
    settings = settings or get_settings()
    store = store if store is not None else get_user_store()

    app = FastAPI(
        title=settings.api_title,
        description="In-memory user management API (list, get, create, update, delete).",
        version=__version__,
    )
    app.state.settings = settings
    app.state.user_store = store

    app.include_router(users_router)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        """Liveness probe: API is up."""
        return {"status": "ok"}

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    install_middleware(app, settings)

    logger.info(
        "api_app_created",
        reject_noop_update=settings.reject_noop_update,
        public_path_prefixes=list(settings.public_path_prefixes),
    )
    return app


app = create_app()

__all__ = ["app", "create_app"]
