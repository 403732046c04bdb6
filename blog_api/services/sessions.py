"""
Session lifecycle: register, login, refresh and logout.

A session moves Anonymous -> Authenticated(access, refresh) on register/login,
gets a new access token (same refresh token) on refresh, and returns to
Anonymous on logout when its refresh token record is removed.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.core.config import AuthConfig
from blog_api.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExpiredCredentialError,
    InvalidCredentialError,
    ValidationError,
)
from blog_api.core.security import TokenClass, TokenService, verify_password
from blog_api.models import Role, User
from blog_api.services.refresh_tokens import RefreshTokenStore
from blog_api.services.users import email_exists, generate_username, get_user_by_email

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "User email or password is incorrect"
INVALID_REFRESH_MESSAGE = "Invalid refresh token"
EXPIRED_REFRESH_MESSAGE = "Refresh token expired. Please login again."
REFRESH_REQUIRED_MESSAGE = "Refresh token required"
USER_EXISTS_MESSAGE = "User already exists"


@dataclass(frozen=True)
class IssuedSession:
    """A freshly authenticated user with the token pair handed to the client."""

    user: User
    access_token: str
    refresh_token: str


def _looks_like_jwt(token: str) -> bool:
    parts = token.split(".")
    return len(parts) == 3 and all(parts)


class SessionService:
    """Orchestrates the token lifecycle over the user and refresh-token tables."""

    def __init__(self, db: Session, tokens: TokenService, config: AuthConfig) -> None:
        self._db = db
        self._tokens = tokens
        self._config = config
        self._store = RefreshTokenStore(db)

    def _issue_pair(self, user: User) -> IssuedSession:
        access_token = self._tokens.issue_access_token(user.id)
        refresh_token, expires_at = self._tokens.issue_refresh_token_with_expiry(user.id)
        self._store.record(refresh_token, user.id, expires_at)
        return IssuedSession(user=user, access_token=access_token, refresh_token=refresh_token)

    def register(self, email: str, password: str, role: Role = Role.USER) -> IssuedSession:
        """
        Create an account and open its first session.

        Raises ValidationError if the email is taken and AuthorizationError when
        role=admin is requested for an email outside the admin allow-list; in both
        cases no user is created.
        """
        if email_exists(self._db, email):
            raise ValidationError(USER_EXISTS_MESSAGE)
        if role is Role.ADMIN and not self._config.is_admin_email(email):
            logger.warning(
                "Admin registration denied",
                extra={"email": email},
            )
            raise AuthorizationError("You cannot register as an admin")

        user = User.create(
            username=generate_username(self._db),
            email=email,
            password=password,
            role=role,
        )
        self._db.add(user)
        try:
            self._db.flush()
            issued = self._issue_pair(user)
            self._db.commit()
        except IntegrityError as e:
            # A concurrent registration took the email between the check and the insert.
            self._db.rollback()
            raise ValidationError(USER_EXISTS_MESSAGE) from e
        logger.info(
            "New user registered",
            extra={"user_id": user.id, "username": user.username, "role": user.role.value},
        )
        return issued

    def login(self, email: str, password: str) -> IssuedSession:
        """
        Verify credentials and open an additional session.

        Earlier refresh tokens of the same user stay valid (multi-device).
        Unknown email and wrong password fail with the same message.
        """
        user = get_user_by_email(self._db, email)
        if user is None or not verify_password(password, user.password_hash):
            raise ValidationError(INVALID_LOGIN_MESSAGE)
        issued = self._issue_pair(user)
        self._db.commit()
        logger.info("User logged in", extra={"user_id": user.id})
        return issued

    def refresh(self, refresh_token: str | None) -> str:
        """
        Exchange a recorded, unexpired refresh token for a new access token.

        The refresh token itself is not rotated. A token without a stored record
        is rejected even when its signature still verifies.
        """
        if not refresh_token:
            raise ValidationError(REFRESH_REQUIRED_MESSAGE)
        if not _looks_like_jwt(refresh_token):
            raise ValidationError(INVALID_REFRESH_MESSAGE)

        owner_id = self._store.owner_of(refresh_token)
        if owner_id is None:
            raise AuthenticationError(INVALID_REFRESH_MESSAGE)

        try:
            claims = self._tokens.verify(refresh_token, TokenClass.REFRESH)
        except ExpiredCredentialError as e:
            raise AuthenticationError(EXPIRED_REFRESH_MESSAGE) from e
        except InvalidCredentialError as e:
            raise AuthenticationError(INVALID_REFRESH_MESSAGE) from e
        if claims.user_id != owner_id:
            raise AuthenticationError(INVALID_REFRESH_MESSAGE)

        return self._tokens.issue_access_token(claims.user_id)

    def logout(self, refresh_token: str | None, user_id: int) -> bool:
        """
        Revoke the caller's refresh token.

        Only a record that belongs to user_id is removed, so a cookie carrying
        another user's token cannot end that user's session. Returns whether a
        record was removed; a missing or foreign token is not an error.
        """
        removed = 0
        if refresh_token:
            removed = self._store.remove(refresh_token, user_id=user_id)
            self._db.commit()
        logger.info(
            "User logged out",
            extra={"user_id": user_id, "refresh_token_removed": bool(removed)},
        )
        return bool(removed)
