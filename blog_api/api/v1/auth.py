"""Auth endpoints: register, login, refresh-token and logout."""

from typing import Annotated

from fastapi import APIRouter, Cookie, Response, status

from blog_api.api.deps import AuthConfigDep, CurrentUserId, SessionServiceDep
from blog_api.core.config import AuthConfig
from blog_api.schemas.auth import (
    AccessTokenResponse,
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
)
from blog_api.services.sessions import IssuedSession

router = APIRouter()

REFRESH_COOKIE_NAME = "refreshToken"

RefreshCookie = Annotated[str | None, Cookie(alias=REFRESH_COOKIE_NAME)]


def _set_refresh_cookie(response: Response, token: str, config: AuthConfig) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        max_age=int(config.refresh_token_ttl.total_seconds()),
        httponly=True,
        secure=config.secure_cookies,
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response, config: AuthConfig) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE_NAME,
        httponly=True,
        secure=config.secure_cookies,
        samesite="strict",
    )


def _auth_response(issued: IssuedSession) -> AuthResponse:
    return AuthResponse(
        user=AuthUser.model_validate(issued.user),
        access_token=issued.access_token,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    response: Response,
    sessions: SessionServiceDep,
    config: AuthConfigDep,
) -> AuthResponse:
    """
    Register with email, password and role; returns the profile and an access token.

    The refresh token is set as an HTTP-only cookie. role=admin is only accepted for
    emails on the configured admin allow-list (403 otherwise).
    """
    issued = sessions.register(body.email, body.password, body.role)
    _set_refresh_cookie(response, issued.refresh_token, config)
    return _auth_response(issued)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    sessions: SessionServiceDep,
    config: AuthConfigDep,
) -> AuthResponse:
    """
    Authenticate with email and password; returns the profile and an access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    issued = sessions.login(body.email, body.password)
    _set_refresh_cookie(response, issued.refresh_token, config)
    return _auth_response(issued)


@router.post("/refresh-token", response_model=AccessTokenResponse)
def refresh_token(
    sessions: SessionServiceDep,
    refresh_cookie: RefreshCookie = None,
) -> AccessTokenResponse:
    """Issue a new access token from the refreshToken cookie. The cookie is not rotated."""
    return AccessTokenResponse(access_token=sessions.refresh(refresh_cookie))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    user_id: CurrentUserId,
    sessions: SessionServiceDep,
    config: AuthConfigDep,
    refresh_cookie: RefreshCookie = None,
) -> Response:
    """Revoke the caller's refresh token and clear the cookie."""
    sessions.logout(refresh_cookie, user_id)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    _clear_refresh_cookie(response, config)
    return response
