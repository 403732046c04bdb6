"""Password hashing and JWT issuance/verification for authentication."""

import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import bcrypt
import jwt

from blog_api.core.config import AuthConfig, settings
from blog_api.core.exceptions import ExpiredCredentialError, InvalidCredentialError

# Min/max lengths for password validation (bcrypt only reads the first 72 bytes).
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 72


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage with a fresh salt. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Never raises; a malformed hash is a mismatch."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


class TokenClass(str, Enum):
    """Which key/lifetime pair a token was issued with."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims of an access or refresh token."""

    user_id: int
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issues and verifies signed bearer tokens.

    Access and refresh tokens use distinct secrets and lifetimes from AuthConfig,
    so a token of one class never verifies as the other.
    """

    def __init__(
        self,
        config: AuthConfig,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._clock = clock

    def _secret(self, token_class: TokenClass) -> str:
        if token_class is TokenClass.ACCESS:
            return self._config.access_secret
        return self._config.refresh_secret

    def _issue(self, user_id: int, token_class: TokenClass) -> tuple[str, datetime]:
        now = self._clock()
        ttl = (
            self._config.access_token_ttl
            if token_class is TokenClass.ACCESS
            else self._config.refresh_token_ttl
        )
        expires_at = now + ttl
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "typ": token_class.value,
            "iat": now,
            "exp": expires_at,
            # Random id keeps two tokens issued in the same second distinct.
            "jti": secrets.token_urlsafe(16),
        }
        token = jwt.encode(
            payload,
            self._secret(token_class),
            algorithm=self._config.algorithm,
        )
        return token, expires_at

    def issue_access_token(self, user_id: int) -> str:
        """Create a short-lived access token bound to user_id."""
        token, _ = self._issue(user_id, TokenClass.ACCESS)
        return token

    def issue_refresh_token(self, user_id: int) -> str:
        """Create a long-lived refresh token bound to user_id."""
        token, _ = self._issue(user_id, TokenClass.REFRESH)
        return token

    def issue_refresh_token_with_expiry(self, user_id: int) -> tuple[str, datetime]:
        """Create a refresh token and return it with its exp claim, for persisting."""
        return self._issue(user_id, TokenClass.REFRESH)

    def verify(self, token: str, token_class: TokenClass) -> TokenClaims:
        """
        Validate signature and expiry; return the embedded claims.

        Raises ExpiredCredentialError when exp has passed and InvalidCredentialError
        for a bad signature, a token of the other class, or a malformed payload.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret(token_class),
                algorithms=[self._config.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredCredentialError("Token expired", cause=e) from e
        except jwt.PyJWTError as e:
            raise InvalidCredentialError("Token invalid", cause=e) from e

        if payload.get("typ", token_class.value) != token_class.value:
            raise InvalidCredentialError("Token class mismatch")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidCredentialError("Invalid token payload", cause=e) from e
        expires_at = datetime.fromtimestamp(payload["exp"], tz=UTC)
        return TokenClaims(user_id=user_id, expires_at=expires_at)
