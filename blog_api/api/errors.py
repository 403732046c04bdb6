"""Exception handlers that render every failure as {code, message[, error]}."""

import logging
import uuid
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.core.exceptions import AppError
from blog_api.schemas.errors import ErrorResponse, ServerErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

# Status code -> error code for framework-raised HTTPExceptions (unknown route, bad method).
HTTP_ERROR_CODES = {
    400: "ValidationError",
    401: "AuthenticationError",
    403: "AuthorizationError",
    404: "NotFound",
    405: "MethodNotAllowed",
    413: "ValidationError",
    422: "ValidationError",
}

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "cookie", "header"})
_PYDANTIC_PREFIXES = ("Value error, ", "Assertion failed, ")


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _clean_message(msg: str) -> str:
    for prefix in _PYDANTIC_PREFIXES:
        if msg.startswith(prefix):
            return msg[len(prefix):]
    return msg


def _server_error(error_id: str) -> JSONResponse:
    body = ServerErrorResponse(
        code="ServerError",
        message="Internal Server Error",
        error={"id": error_id},
    )
    return JSONResponse(status_code=500, content=body.model_dump())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        error_id = uuid.uuid4().hex
        logger.error(
            "Server error: %s",
            exc.message,
            extra={"error_id": error_id, "path": request.url.path},
        )
        return _server_error(error_id)
    body = ErrorResponse(code=exc.code, message=exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request body/query/cookie validation failures are 400 ValidationError."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        errors.setdefault(_field_name(err.get("loc", ())), _clean_message(str(err.get("msg", ""))))
    message = next(iter(errors.values()), "Invalid request")
    body = ValidationErrorResponse(code="ValidationError", message=message, errors=errors)
    return JSONResponse(status_code=400, content=body.model_dump())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, "ServerError" if exc.status_code >= 500 else "Error")
    body = ErrorResponse(code=code, message=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log with an error id and return an opaque 500; nothing internal reaches the client."""
    error_id = uuid.uuid4().hex
    logger.exception(
        "Unhandled error during %s %s",
        request.method,
        request.url.path,
        extra={"error_id": error_id},
    )
    return _server_error(error_id)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
