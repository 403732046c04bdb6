"""Error response bodies shared by every endpoint."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """4xx body."""

    code: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    errors: dict[str, str]


class ServerErrorResponse(ErrorResponse):
    """5xx body; error carries an opaque id that matches the server-side log entry."""

    error: dict[str, Any]
