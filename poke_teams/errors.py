"""Error taxonomy and the single HTTP translation step for the API."""

from __future__ import annotations

import enum
import logging

import jwt
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL = 500

    @property
    def status_code(self) -> int:
        return self.value


class AppError(Exception):
    """Base class for errors that carry a user-safe message."""

    kind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    kind = ErrorKind.BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(AppError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class AIServiceError(AppError):
    """Raised for any upstream or configuration failure in the AI assistant."""

    kind = ErrorKind.INTERNAL
    default_message = "AI service temporarily unavailable"


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    message = str(first.get("msg", "Invalid request"))
    # pydantic prefixes messages raised from validators.
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    if first.get("type") == "missing" and location:
        return f"{location[-1]} is required"
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


def _integrity_message(exc: IntegrityError) -> str:
    origin = getattr(exc, "orig", None)
    text = str(origin) if origin is not None else str(exc)
    return text.splitlines()[0] if text else "Constraint violation"


def install_error_handlers(app: FastAPI) -> None:
    """Register handlers that map every failure to a status and a safe message."""

    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.__cause__ or exc)
        return _message(exc.kind.status_code, exc.message)

    @app.exception_handler(jwt.PyJWTError)
    async def _token_error(request: Request, exc: jwt.PyJWTError) -> JSONResponse:
        logger.info("Rejected bearer token on %s: %s", request.url.path, exc)
        return _message(ErrorKind.UNAUTHORIZED.status_code, "Invalid token")

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _message(ErrorKind.BAD_REQUEST.status_code, _first_validation_message(exc))

    @app.exception_handler(IntegrityError)
    async def _integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
        return _message(ErrorKind.BAD_REQUEST.status_code, _integrity_message(exc))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _message(ErrorKind.INTERNAL.status_code, "Internal server error")
