"""
Error taxonomy for the job board API.

Services raise subclasses of ``JobBoardError``; the handlers registered by
``register_exception_handlers`` turn them, along with FastAPI's own request
errors, into the ``{"success": false, "message": ...}`` envelope.
"""

import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class JobBoardError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(JobBoardError):
    status_code = 400
    default_message = "Invalid request"


class ValidationFailed(JobBoardError):
    status_code = 400
    default_message = "Validation failed"


class MissingField(ValidationFailed):
    default_message = "Missing required field"


class InvalidEmail(ValidationFailed):
    default_message = "Invalid email address"


class InvalidUrl(ValidationFailed):
    default_message = "Invalid URL"


class InvalidIdentifier(JobBoardError):
    status_code = 400
    default_message = "Invalid identifier"


class NotFound(JobBoardError):
    status_code = 404
    default_message = "Not found"


class JobNotFound(NotFound):
    default_message = "Job not found"


class StoreUnavailable(JobBoardError):
    status_code = 500
    default_message = "Store unavailable"


class AuthenticationFailed(JobBoardError):
    status_code = 401
    default_message = "Authentication required"


class TooManyAttempts(JobBoardError):
    status_code = 429
    default_message = "Too many failed attempts"

    def __init__(self, retry_after_seconds: float, message: str | None = None):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message)


class ServiceNotConfigured(JobBoardError):
    status_code = 503
    default_message = "Service not configured"


@contextmanager
def store_errors(message: str, db: Session | None = None):
    """Re-raise SQLAlchemy failures inside the block as StoreUnavailable."""
    try:
        yield
    except SQLAlchemyError as exc:
        if db is not None:
            db.rollback()
        logger.exception("%s", message)
        raise StoreUnavailable(message) from exc


def _envelope(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def _job_board_error_handler(request: Request, exc: JobBoardError):
    headers = None
    if isinstance(exc, TooManyAttempts):
        headers = {"Retry-After": str(int(exc.retry_after_seconds) + 1)}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _envelope(exc.status_code, exc.message, headers)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return _envelope(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    # Missing or malformed parameters are client errors: 400, not FastAPI's 422.
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    message = "; ".join(parts) or "Invalid request"
    return _envelope(InvalidRequest.status_code, message)


async def _store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Unhandled store error on %s %s", request.method, request.url.path, exc_info=exc)
    return _envelope(StoreUnavailable.status_code, StoreUnavailable.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JobBoardError, _job_board_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
