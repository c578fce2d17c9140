"""
Domain errors for Clipper LMS.

Every error carries the HTTP status it maps to; the API layer turns any of
them into ``{"error": message}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class LMSException(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(LMSException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized: Invalid or missing token"


class InvalidCredentials(LMSException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class Forbidden(LMSException):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden: Access denied"


class NotFound(LMSException):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidInput(LMSException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class DuplicateEmail(LMSException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User with this email already exists"


class AlreadyEnrolled(LMSException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already enrolled in this course"


class InternalFailure(LMSException):
    pass


def error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Build a short message from the first validation error.

    Path parameters read like "Invalid course ID"; body fields read like
    "password: String should have at least 6 characters".
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())]
    if len(loc) >= 2 and loc[0] == "path":
        name = loc[1]
        if name.endswith("_id"):
            name = name[:-3] + " ID"
        return f"Invalid {name.replace('_', ' ')}"

    fields = [part for part in loc if part not in ("body", "query", "path", "header")]
    message = first.get("msg", "Invalid value")
    if fields:
        return f"{'.'.join(fields)}: {message}"
    return message


async def lms_exception_handler(request: Request, exc: LMSException) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, describe_validation_error(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database failure on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalFailure.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LMSException, lms_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
