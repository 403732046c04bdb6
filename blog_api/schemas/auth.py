"""Request/response schemas for auth endpoints."""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from blog_api.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from blog_api.models.user import Role
from blog_api.schemas.base import CamelModel

EMAIL_MAX_LEN = 50

# At least one lowercase, one uppercase, one digit and one symbol.
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[\W_]).+$")


def check_email_length(v: str) -> str:
    if len(v) > EMAIL_MAX_LEN:
        raise ValueError(f"Email cannot exceed {EMAIL_MAX_LEN} characters")
    return v


def check_password_strength(v: str) -> str:
    if not PASSWORD_PATTERN.match(v):
        raise ValueError(
            "Password must contain at least 1 lowercase letter, 1 uppercase letter, "
            "1 number, and 1 symbol"
        )
    return v


class RegisterRequest(BaseModel):
    """Registration payload. role=admin is only honoured for allow-listed emails."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )
    role: Role = Field(default=Role.USER, description="Requested role")

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        return check_email_length(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_strength(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        return check_email_length(v)


class AuthUser(CamelModel):
    """Minimal profile returned alongside a fresh access token."""

    username: str
    email: str
    role: Role


class AuthResponse(CamelModel):
    """Body of register and login responses; the refresh token travels in a cookie."""

    user: AuthUser
    access_token: str = Field(..., description="JWT access token")


class AccessTokenResponse(CamelModel):
    """Body of the refresh-token response."""

    access_token: str = Field(..., description="JWT access token")
