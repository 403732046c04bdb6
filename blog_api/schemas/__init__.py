"""Pydantic request/response schemas."""

from blog_api.schemas.auth import (
    AccessTokenResponse,
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
)
from blog_api.schemas.blog import (
    BlogCreate,
    BlogRead,
    BlogResponse,
    BlogsListResponse,
    BlogUpdate,
)
from blog_api.schemas.comment import (
    CommentCreate,
    CommentRead,
    CommentsCountResponse,
    CommentsListResponse,
)
from blog_api.schemas.errors import ErrorResponse, ServerErrorResponse, ValidationErrorResponse
from blog_api.schemas.health import HealthResponse
from blog_api.schemas.like import LikesCountResponse
from blog_api.schemas.user import UserRead, UserResponse, UsersListResponse, UserUpdate

__all__ = [
    "AccessTokenResponse",
    "AuthResponse",
    "AuthUser",
    "BlogCreate",
    "BlogRead",
    "BlogResponse",
    "BlogsListResponse",
    "BlogUpdate",
    "CommentCreate",
    "CommentRead",
    "CommentsCountResponse",
    "CommentsListResponse",
    "ErrorResponse",
    "HealthResponse",
    "LikesCountResponse",
    "LoginRequest",
    "RegisterRequest",
    "ServerErrorResponse",
    "UserRead",
    "UserResponse",
    "UsersListResponse",
    "UserUpdate",
    "ValidationErrorResponse",
]
