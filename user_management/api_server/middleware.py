"""
HTTP middleware: exception handling, bearer-token gate, request logging.

MIDDLEWARE_CHAIN lists the interceptors outermost first:

    ExceptionHandlingMiddleware -> AuthenticationMiddleware -> RequestLoggingMiddleware -> route

The exception handler wraps everything so faults raised by the gate or the
logger are caught too; the gate wraps the logger so rejected requests are
never logged as processed. install_middleware() is the only place the chain
is registered.
"""

from __future__ import annotations

import time
from collections.abc import Iterable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from user_management.config import Settings
from user_management.core.exceptions import AuthError
from user_management.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _path_has_prefix(path: str, prefix: str) -> bool:
    """Segment-aware prefix match: /docs matches /docs and /docs/x, not /docsx."""
    prefix = prefix.rstrip("/")
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + "/")


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    """Outermost stage: any escaped exception becomes a generic 500 JSON body."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "unhandled_exception",
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Require a non-blank Authorization header outside the public prefixes.

    The token is not inspected: any non-blank value passes. Rejected requests
    get 401 and never reach inner stages.
    """

    def __init__(self, app, public_path_prefixes: Iterable[str] = ()):
        super().__init__(app)
        self.public_path_prefixes = tuple(public_path_prefixes)

    def is_public(self, path: str) -> bool:
        return any(_path_has_prefix(path, p) for p in self.public_path_prefixes)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if self.is_public(path):
            return await call_next(request)

        token = request.headers.get("Authorization", "")
        if not token.strip():
            error = AuthError()
            logger.warning("unauthorized_request", method=request.method, path=path)
            return JSONResponse(status_code=error.status_code, content={"error": error.message})

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Innermost stage: log method + path before the route, status after."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        method = request.method
        path = request.url.path
        logger.info("http_request", method=method, path=path)
        t0 = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http_response",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - t0) * 1000, 2),
        )
        return response


# Outermost first
MIDDLEWARE_CHAIN = (
    ExceptionHandlingMiddleware,
    AuthenticationMiddleware,
    RequestLoggingMiddleware,
)


def _middleware_options(settings: Settings) -> dict[type, dict]:
    return {
        AuthenticationMiddleware: {"public_path_prefixes": settings.public_path_prefixes},
    }


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Register MIDDLEWARE_CHAIN on app.

    Starlette runs the most recently added middleware first, so the chain is
    added innermost first.
    """
    options = _middleware_options(settings)
    for middleware_cls in reversed(MIDDLEWARE_CHAIN):
        app.add_middleware(middleware_cls, **options.get(middleware_cls, {}))
