"""
Application error taxonomy and the FastAPI handlers that render it.

Every error leaves the API as ``{"message": ...}`` (validation errors also
carry ``errors``), so clients never see stack detail.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_UPSTREAM_MESSAGE = "Error generating response"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base application error carrying a human-readable message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(AppError):
    """Bad or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[dict[str, str]] | None = None,
    ):
        self.errors = errors or []
        super().__init__(message)


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFoundError(AppError):
    """Resource is absent, or is not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class ConfigurationError(AppError):
    """A required setting (e.g. a provider credential) is missing."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(AppError):
    """An external provider call failed or returned a malformed payload."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = GENERIC_UPSTREAM_MESSAGE,
        upstream_status: int | None = None,
        payload: Any = None,
    ):
        self.upstream_status = upstream_status
        self.payload = payload
        super().__init__(message)


# ── Handlers ──────────────────────────────────────────────────

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s",
            type(exc).__name__, request.method, request.url.path, exc.message,
        )
    content: dict[str, Any] = {"message": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        # loc is ("body", "projectId") / ("query", "x") / ("body",)
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation failed", "errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
