"""FastAPI middleware for request tracking, timing, and error handling.

Adds:
- X-Request-ID header (generated if not provided), bound into every log entry
- X-Process-Time header (request duration)
- Exception handlers mapping service errors to JSON responses
"""

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import get_settings
from core.logging_config import bind_request, clear_request

logger = logging.getLogger(__name__)

_QUIET_PATHS = ("/api/health", "/api/v1/health")


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """Add request ID and timing to every request/response."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        bind_request(request_id, method=request.method, path=request.url.path)

        start_time = time.monotonic()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled exception after %.0fms", (time.monotonic() - start_time) * 1000)
            detail = "Internal server error"
            if not get_settings().is_production:
                detail = str(exc) or detail
            clear_request()
            return JSONResponse(
                status_code=500,
                content={"detail": detail, "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.monotonic() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}ms"

        if request.url.path not in _QUIET_PATHS:
            level = logging.WARNING if response.status_code >= 400 else logging.INFO
            logger.log(
                level,
                "%s %s -> %s (%.0fms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
        clear_request()
        return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    ``ValidationError`` bodies list every violated rule under ``violations``.
    Storage failures answer 503; other ``AppException``s use their own status.
    """

    from core.exceptions import AppException, PersistenceError, ValidationError

    def _request_id(request: Request):
        return getattr(request.state, "request_id", None)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": str(exc),
                "violations": [v.to_dict() for v in exc.violations],
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(PersistenceError)
    async def persistence_handler(request: Request, exc: PersistenceError):
        logger.error("Persistence failure: %s", exc)
        detail = "Storage unavailable" if get_settings().is_production else str(exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": detail, "request_id": _request_id(request)},
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc), "request_id": _request_id(request)},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "request_id": _request_id(request)},
        )
