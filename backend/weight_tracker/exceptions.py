"""
Error types and the handlers that turn them into JSON error bodies.

Every error response has the shape ``{"error": "<message>"}``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class WeightTrackerError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WeightTrackerError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST


class UsernameTakenError(ValidationError):
    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class DuplicateEntryError(ValidationError):
    """Another record of the same kind already exists for this user and date."""

    def __init__(self, entry_date):
        super().__init__(f"An entry already exists for {entry_date}")
        self.entry_date = entry_date


class AuthError(WeightTrackerError):
    """Missing, invalid or expired session, or bad credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query")]
    field = ".".join(loc)
    return f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")


async def weight_tracker_error_handler(request: Request, exc: WeightTrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WeightTrackerError, weight_tracker_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
