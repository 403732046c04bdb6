"""Shared FastAPI dependencies: services, authentication, role checks and pagination."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from blog_api.core.config import AuthConfig, get_auth_config, settings
from blog_api.core.database import get_db
from blog_api.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExpiredCredentialError,
    InvalidCredentialError,
    NotFoundError,
    ValidationError,
)
from blog_api.core.security import TokenClass, TokenService
from blog_api.models import Role, User
from blog_api.services.sessions import SessionService

security = HTTPBearer(auto_error=False)

DbSession = Annotated[Session, Depends(get_db)]
AuthConfigDep = Annotated[AuthConfig, Depends(get_auth_config)]


def get_token_service(config: AuthConfigDep) -> TokenService:
    return TokenService(config)


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


def get_session_service(
    db: DbSession,
    tokens: TokenServiceDep,
    config: AuthConfigDep,
) -> SessionService:
    return SessionService(db, tokens, config)


SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: TokenServiceDep,
) -> int:
    """Dependency: require a valid Bearer access token and return its user id."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access denied. No token provided.")
    try:
        claims = tokens.verify(credentials.credentials, TokenClass.ACCESS)
    except ExpiredCredentialError as e:
        raise AuthenticationError(
            "Access token expired, request a new one with refresh token"
        ) from e
    except InvalidCredentialError as e:
        raise AuthenticationError("Access token invalid") from e
    return claims.user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]


def authorize(*roles: Role) -> Callable[..., User]:
    """Build a dependency that loads the caller and requires one of roles. Raises 404/403."""
    allowed = frozenset(roles)

    def dependency(user_id: CurrentUserId, db: DbSession) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        if user.role not in allowed:
            raise AuthorizationError("Access denied, insufficient permissions")
        return user

    return dependency


AnyRoleUser = Annotated[User, Depends(authorize(Role.ADMIN, Role.USER))]
AdminUser = Annotated[User, Depends(authorize(Role.ADMIN))]


@dataclass(frozen=True)
class Page:
    limit: int
    offset: int


def get_page(
    limit: Annotated[int | None, Query(description="Maximum number of items to return")] = None,
    offset: Annotated[int, Query(description="Number of items to skip")] = 0,
) -> Page:
    """Dependency: validated limit/offset pair."""
    if limit is None:
        limit = settings.DEFAULT_PAGE_LIMIT
    if limit < 1 or limit > settings.MAX_PAGE_LIMIT:
        raise ValidationError(f"Limit must be between 1 and {settings.MAX_PAGE_LIMIT}")
    if offset < 0:
        raise ValidationError("Offset must be a non-negative integer")
    return Page(limit=limit, offset=offset)


PageDep = Annotated[Page, Depends(get_page)]
