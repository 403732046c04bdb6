"""Request/response schemas for blog posts."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from blog_api.models.blog import BlogStatus
from blog_api.schemas.base import CamelModel

TITLE_MAX_LENGTH = 180


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class BlogCreate(BaseModel):
    title: str = Field(..., max_length=TITLE_MAX_LENGTH, description="Blog title")
    content: str = Field(..., description="Blog body (markdown)")
    status: BlogStatus = Field(default=BlogStatus.DRAFT)

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class BlogUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    content: str | None = None
    status: BlogStatus | None = None

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class BlogAuthor(CamelModel):
    id: int
    username: str


class BlogRead(CamelModel):
    id: int
    title: str
    slug: str
    content: str
    status: BlogStatus
    author: BlogAuthor
    likes_count: int = 0
    comments_count: int = 0
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BlogResponse(CamelModel):
    blog: BlogRead


class BlogsListResponse(CamelModel):
    limit: int
    offset: int
    total: int
    blogs: list[BlogRead]
