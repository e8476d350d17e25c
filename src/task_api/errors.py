"""Typed application errors and the HTTP boundary that renders them."""

import logging
from dataclasses import asdict, dataclass
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .db.client import DuplicateKeyError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Closed set of failure classes raised by the application."""

    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    SERVER_ERROR = "server_error"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNPROCESSABLE_ENTITY: 422,
    ErrorKind.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class AppError(Exception):
    """A failure with a known classification and a client-safe message."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        errors: list[FieldError] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.errors = errors

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


def error_response(
    kind: ErrorKind, message: str, errors: list[FieldError] | None = None
) -> JSONResponse:
    """Render an error in the API's error body format."""
    content = {
        "detail": message,
        "errors": [asdict(e) for e in errors] if errors is not None else None,
    }
    headers = {"WWW-Authenticate": "Bearer"} if kind is ErrorKind.UNAUTHORIZED else None
    return JSONResponse(status_code=STATUS_CODES[kind], content=content, headers=headers)


def _field_name(loc: tuple) -> str:
    parts = list(loc)
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "body"


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers that translate failures into HTTP responses."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.kind is ErrorKind.SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info(
                "%s %s -> %s: %s", request.method, request.url.path, exc.kind.value, exc.message
            )
        return error_response(exc.kind, exc.message, exc.errors)

    @app.exception_handler(DuplicateKeyError)
    async def handle_duplicate_key(request: Request, exc: DuplicateKeyError) -> JSONResponse:
        logger.info("%s %s hit a uniqueness constraint: %s", request.method, request.url.path, exc)
        return error_response(ErrorKind.CONFLICT, "Duplicate entry found")

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [FieldError(_field_name(e["loc"]), e["msg"]) for e in exc.errors()]
        return error_response(ErrorKind.UNPROCESSABLE_ENTITY, "Validation failed", errors)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(ErrorKind.SERVER_ERROR, "Internal server error")
