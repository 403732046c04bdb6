"""Request/response schemas for user profile endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from blog_api.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from blog_api.models.user import Role
from blog_api.schemas.auth import check_email_length, check_password_strength
from blog_api.schemas.base import CamelModel

USERNAME_MAX_LEN = 20
NAME_MAX_LEN = 20
URL_MAX_LEN = 100

_http_url = TypeAdapter(HttpUrl)


class UserRead(CamelModel):
    """Public profile (no password hash)."""

    id: int
    username: str
    email: str
    role: Role
    first_name: str | None = None
    last_name: str | None = None
    social_links: dict[str, str] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserResponse(CamelModel):
    user: UserRead


class UsersListResponse(CamelModel):
    """Response for GET /users (admin only)."""

    limit: int
    offset: int
    total: int
    users: list[UserRead]


class UserUpdate(BaseModel):
    """Partial update of the current user; omitted fields are left unchanged."""

    username: str | None = Field(default=None, min_length=1, max_length=USERNAME_MAX_LEN)
    email: EmailStr | None = None
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    first_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    website: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    youtube: str | None = None
    linkedin: str | None = None
    github: str | None = None

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str | None) -> str | None:
        return None if v is None else check_email_length(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return None if v is None else check_password_strength(v)

    @field_validator(
        "website", "twitter", "instagram", "facebook", "youtube", "linkedin", "github"
    )
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) > URL_MAX_LEN:
            raise ValueError(f"URL cannot exceed {URL_MAX_LEN} characters")
        try:
            _http_url.validate_python(v)
        except PydanticValidationError as e:
            raise ValueError("Invalid URL") from e
        return v
