"""Application error taxonomy. Each error maps to one HTTP status and a stable code."""


class AppError(Exception):
    """Base class for errors rendered to clients as {code, message}."""

    code = "ServerError"
    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or duplicate input."""

    code = "ValidationError"
    status_code = 400


class AuthenticationError(AppError):
    """Missing, invalid or expired credential."""

    code = "AuthenticationError"
    status_code = 401


class AuthorizationError(AppError):
    """Authenticated caller lacks the required role or ownership."""

    code = "AuthorizationError"
    status_code = 403


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    code = "NotFound"
    status_code = 404


class ServerError(AppError):
    """Unexpected failure; the message shown to clients is always generic."""

    code = "ServerError"
    status_code = 500

    def __init__(self, message: str = "Internal Server Error") -> None:
        super().__init__(message)


class CredentialError(Exception):
    """Base class for token verification failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ExpiredCredentialError(CredentialError):
    """Token signature is valid but its expiry claim is in the past."""


class InvalidCredentialError(CredentialError):
    """Token signature does not match, or the payload is malformed."""
