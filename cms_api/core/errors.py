"""
Erreurs de l'API et handlers FastAPI.

Toutes les erreurs sortent en JSON: {"error": ..., "message": ..., "details": ...}
(details seulement quand il y en a).
"""

import logging
from http import HTTPStatus
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: str, details: Optional[Any] = None, headers: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.headers = headers

    def to_dict(self) -> dict:
        body = {"error": self.error, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ValidationFailedError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation Error"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class InternalError(ApiError):
    pass


def format_validation_errors(errors) -> list[dict]:
    """Erreurs pydantic -> [{field, message, type}] sans le préfixe body/query/path"""
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        details.append({
            "field": ".".join(loc),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        })
    return details


_VALIDATION_MESSAGES = {
    "body": "Invalid request data",
    "query": "Invalid query parameters",
    "path": "Invalid page ID",
}


def _json_error(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _json_error(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    source = errors[0]["loc"][0] if errors and errors[0].get("loc") else "body"
    message = _VALIDATION_MESSAGES.get(source, "Invalid request data")
    return _json_error(ValidationFailedError(message, details=format_validation_errors(errors)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 404 de route inconnue, 405, etc. -> même format que le reste
    error = ApiError(str(exc.detail), headers=getattr(exc, "headers", None))
    error.status_code = exc.status_code
    try:
        error.error = HTTPStatus(exc.status_code).phrase
    except ValueError:
        error.error = "Error"
    return _json_error(error)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}: {type(exc).__name__}")
    return _json_error(InternalError("A database error occurred while processing the request"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _json_error(InternalError("An unexpected error occurred"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
